import logging
import textwrap
from dataclasses import dataclass
from typing import Dict, List

from ..errors import UnsupportedConversionError
from ..ir.types import DataType
from .context import GenerationState, NodeContext
from .emitters import get_emitter
from .functions import collect_functions, rename_calls
from .literals import zero_value
from .naming import output_port_names

logger = logging.getLogger(__name__)


@dataclass
class GeneratedCode:
    declarations: str
    main_code: str
    functions: str


class MainCodeGenerator:
    """
    Expands every node's template into GLSL.

    Pass A declares one global per output port of every graph node, so a
    node can read any upstream value regardless of where its block lands.
    Pass B emits one scoped block per node in execution order.
    """

    def __init__(self, state: GenerationState):
        self.state = state
        self._contexts: Dict[str, NodeContext] = {}

    def context(self, node_id: str):
        """NodeContext for a node, or None if the node or its spec is unknown."""
        if node_id in self._contexts:
            return self._contexts[node_id]
        node = self.state.node(node_id)
        if node is None:
            return None
        spec = self.state.catalog.get(node.type)
        if spec is None:
            return None
        ctx = NodeContext(self.state, node, spec)
        self._contexts[node_id] = ctx
        return ctx

    def generate(self) -> GeneratedCode:
        declarations = self.generate_declarations()
        main_code = self.generate_main()
        functions = collect_functions(self._function_contexts())
        return GeneratedCode(
            declarations='\n'.join(declarations),
            main_code='\n'.join(main_code),
            functions=functions,
        )

    # -------------------------------------------------------------------------
    # Pass A
    # -------------------------------------------------------------------------

    def generate_declarations(self) -> List[str]:
        state = self.state
        lines = []
        declared = set()

        for node in state.graph.nodes:
            spec = state.catalog.get(node.type)
            if spec is None:
                state.diagnostics.warn(f"Unknown node type '{node.type}' for node {node.id}; skipped")
                continue
            ports = state.variable_names.ports(node.id)
            if not ports and spec.outputs:
                state.diagnostics.warn(f"No variables generated for {node.type} ({node.id})")
                continue
            for port_name in output_port_names(node, spec, state.config):
                var = ports.get(port_name)
                if var is None or var in declared:
                    continue
                dtype = self._port_type(spec, port_name)
                lines.append(f"{dtype} {var} = {zero_value(dtype)};")
                declared.add(var)

        # Connections may name sources whose variables were never declared
        for conn in state.graph.connections:
            var = state.variable_names.lookup(conn.source_node_id, conn.source_port)
            if var is None or var in declared:
                continue
            spec = state.spec_of(conn.source_node_id)
            if spec is None:
                continue
            dtype = self._port_type(spec, conn.source_port)
            lines.append(f"{dtype} {var} = {zero_value(dtype)};")
            declared.add(var)
            state.diagnostics.warn(f"Force-declared missing variable {var} for {conn.source_node_id}")

        return lines

    def _port_type(self, spec, port_name):
        port = spec.output(port_name)
        return port.type if port is not None else DataType.FLOAT

    # -------------------------------------------------------------------------
    # Pass B
    # -------------------------------------------------------------------------

    def generate_main(self) -> List[str]:
        lines = []
        for node_id in self.state.execution_order:
            ctx = self.context(node_id)
            if ctx is None:
                if self.state.node(node_id) is None:
                    self.state.diagnostics.warn(f"Execution order names unknown node {node_id}; skipped")
                continue

            body = self.emit_node(ctx)
            if body is None or not body.strip():
                continue

            lines.append(f"  // Node: {ctx.spec.display_name} ({node_id})")
            lines.append("  {")
            lines.extend(('    ' + line) if line.strip() else '' for line in body.strip('\n').split('\n'))
            lines.append("  }")
            lines.append("")
        return lines

    def emit_node(self, ctx: NodeContext):
        emitter = get_emitter(ctx.spec, self.state.config)
        try:
            body = emitter(ctx)
        except UnsupportedConversionError as e:
            if e.node_id is None:
                e.node_id = ctx.node.id
            logger.debug(f"Conversion failed in {ctx.node.id} ({ctx.spec.id})")
            raise
        if body is None:
            return None
        return rename_calls(textwrap.dedent(body), self.state.renames_for(ctx.node.id))

    # -------------------------------------------------------------------------

    def _function_contexts(self):
        """Execution order first, then the remaining graph nodes."""
        ordered = list(self.state.execution_order)
        seen = set(ordered)
        ordered.extend(node.id for node in self.state.graph.nodes if node.id not in seen)
        for node_id in ordered:
            ctx = self.context(node_id)
            if ctx is not None:
                yield ctx

