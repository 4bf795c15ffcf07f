"""
ShaderGraphCompiler - turns a node graph into one GLSL ES 3.00 fragment shader.

Pipeline (one synchronous pass per call, nothing cached between calls):
    1. Variable naming        - node id + port -> global identifier
    2. Uniform allocation     - unless the caller supplies the table
    3. Specialization plan    - unless the caller supplies the table
    4. Main code generation   - Pass A declarations, Pass B node blocks
    5. Helper functions       - rendered per node, renamed, deduplicated
    6. Final output + assembly

Only an impossible type conversion aborts a compile; everything else is
recorded in the result's Diagnostics and a safe fallback is emitted.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple

from .config import CompilerConfig, DEFAULT_CONFIG
from .diagnostics import Diagnostics
from .errors import UnsupportedConversionError
from .ir.graph import NodeGraph
from .codegen.assembly import assemble, resolve_final_output, uniform_declarations
from .codegen.context import GenerationState
from .codegen.generator import MainCodeGenerator
from .codegen.naming import generate_variable_names
from .nodes.registry import NodeCatalog, default_catalog
from .planner.specialization import freeze_plan, plan_for_state
from .planner.uniforms import UniformMetadata, allocate_uniforms, find_used_uniforms, uniform_metadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompilationResult:
    shader_source: str
    diagnostics: Diagnostics
    uniforms: Tuple[UniformMetadata, ...] = ()
    execution_order: Tuple[str, ...] = ()
    final_output_node_id: Optional[str] = None
    uniform_names: Mapping[str, str] = field(default_factory=dict)
    function_name_map: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    @property
    def errors(self):
        return self.diagnostics.errors

    @property
    def warnings(self):
        return self.diagnostics.warnings

    @property
    def success(self) -> bool:
        return self.diagnostics.ok


class ShaderGraphCompiler:
    """
    Compiles NodeGraphs against a NodeCatalog.

    Usage:
        compiler = ShaderGraphCompiler()
        result = compiler.compile(graph, execution_order)
        print(result.shader_source)
    """

    def __init__(self, catalog: NodeCatalog = None, config: CompilerConfig = DEFAULT_CONFIG):
        self.catalog = catalog if catalog is not None else default_catalog()
        self.config = config

    def compile(self, graph: NodeGraph, execution_order: Sequence[str],
                uniform_names: Optional[Mapping[str, str]] = None,
                function_name_map: Optional[Mapping[str, Mapping[str, str]]] = None) -> CompilationResult:
        """
        Compile `graph`, emitting node blocks in `execution_order`.

        `uniform_names` maps "<nodeId>.<param>" to uniform identifiers and
        `function_name_map` maps node id -> helper name -> specialized name;
        each is built here when not supplied.

        Raises:
            UnsupportedConversionError: a wire joins types with no conversion
        """
        diagnostics = Diagnostics()
        order = tuple(execution_order)
        logger.debug(f"Compiling {len(graph.nodes)} nodes, {len(graph.connections)} connections")

        if not graph.nodes:
            diagnostics.warn("Graph is empty; rendering black")

        if uniform_names is None:
            uniform_names = allocate_uniforms(graph, self.catalog, self.config)
        else:
            uniform_names = dict(uniform_names)

        state = GenerationState(
            graph=graph,
            catalog=self.catalog,
            variable_names=generate_variable_names(graph, self.catalog, self.config),
            execution_order=list(order),
            uniform_names=MappingProxyType(uniform_names),
            config=self.config,
            diagnostics=diagnostics,
        )
        self._warn_disconnected(graph, diagnostics)

        try:
            if function_name_map is None:
                plan = plan_for_state(state)
            else:
                plan = freeze_plan(function_name_map)
            state.function_name_map = MappingProxyType(plan)

            code = MainCodeGenerator(state).generate()
            final = resolve_final_output(state)
        except UnsupportedConversionError as e:
            location = f" (node {e.node_id})" if e.node_id else ""
            diagnostics.error(f"{e}{location}")
            raise

        used = find_used_uniforms(code.main_code + '\n' + code.functions, uniform_names)
        uniforms = uniform_metadata(graph, self.catalog, uniform_names, used, self.config)

        source = assemble(
            state,
            uniforms=uniform_declarations(uniforms),
            declarations=code.declarations,
            functions=code.functions,
            main_code=code.main_code,
            final_color=final.expression,
        )

        diagnostics.log_summary()
        return CompilationResult(
            shader_source=source,
            diagnostics=diagnostics,
            uniforms=tuple(uniforms),
            execution_order=order,
            final_output_node_id=final.node_id,
            uniform_names=MappingProxyType(uniform_names),
            function_name_map=MappingProxyType(plan),
        )

    def _warn_disconnected(self, graph: NodeGraph, diagnostics: Diagnostics):
        if len(graph.nodes) < 2:
            return
        connected = set()
        for conn in graph.connections:
            connected.add(conn.source_node_id)
            connected.add(conn.target_node_id)
        for node in graph.nodes:
            if node.id not in connected:
                diagnostics.warn(f"Node {node.id} ({node.type}) is not connected to anything")


def compile_graph(graph: NodeGraph, execution_order: Sequence[str],
                  uniform_names: Optional[Mapping[str, str]] = None,
                  function_name_map: Optional[Mapping[str, Mapping[str, str]]] = None,
                  catalog: NodeCatalog = None,
                  config: CompilerConfig = DEFAULT_CONFIG) -> CompilationResult:
    """Convenience wrapper around ShaderGraphCompiler.compile."""
    compiler = ShaderGraphCompiler(catalog=catalog, config=config)
    return compiler.compile(graph, execution_order, uniform_names, function_name_map)
