import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from ..config import CompilerConfig, DEFAULT_CONFIG
from ..diagnostics import Diagnostics
from ..ir.graph import NodeGraph, NodeInstance, NodeSpec, ParameterSpec
from ..ir.types import DataType, InputMode, ParamType
from .coercion import coerce, parameter_wire_expression
from .literals import (
    flatten_array, format_array, format_float, format_param_literal,
    is_number, param_zero, zero_value,
)
from .naming import VariableNames, array_variable_name, variable_name
from .template import render

logger = logging.getLogger(__name__)


@dataclass
class GenerationState:
    """Everything shared by all nodes during one compile."""
    graph: NodeGraph
    catalog: object
    variable_names: VariableNames
    execution_order: List[str]
    uniform_names: Mapping[str, str] = field(default_factory=dict)
    function_name_map: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    config: CompilerConfig = DEFAULT_CONFIG
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def __post_init__(self):
        self._positions = {node_id: i for i, node_id in enumerate(self.execution_order)}
        self._nodes = {node.id: node for node in self.graph.nodes}

    def position(self, node_id: str) -> Optional[int]:
        return self._positions.get(node_id)

    def node(self, node_id: str) -> Optional[NodeInstance]:
        return self._nodes.get(node_id)

    def spec_of(self, node_id: str) -> Optional[NodeSpec]:
        node = self.node(node_id)
        if node is None:
            return None
        return self.catalog.get(node.type)

    def uniform(self, node_id: str, name: str) -> Optional[str]:
        return self.uniform_names.get(f"{node_id}.{name}")

    def renames_for(self, node_id: str) -> Mapping[str, str]:
        return self.function_name_map.get(node_id, {})


class NodeContext:
    """
    Resolves the placeholders of one node's templates.

    Input, parameter-wire and array tables are computed once on first use and
    shared by the main code and function templates of the node.
    """

    def __init__(self, state: GenerationState, node: NodeInstance, spec: NodeSpec):
        self.state = state
        self.node = node
        self.spec = spec
        self._inputs: Optional[Dict[str, str]] = None
        self._param_wires: Optional[Dict[str, str]] = None
        self._arrays: Optional[Dict[str, Tuple[str, object]]] = None
        self._malformed_arrays: set = set()

    @property
    def config(self) -> CompilerConfig:
        return self.state.config

    @property
    def diagnostics(self) -> Diagnostics:
        return self.state.diagnostics

    @property
    def is_self_sufficient(self) -> bool:
        return (self.spec.category == self.config.input_category
                or self.spec.id in self.config.self_sufficient_node_types)

    # -------------------------------------------------------------------------
    # Data wires
    # -------------------------------------------------------------------------

    @property
    def inputs(self) -> Dict[str, str]:
        if self._inputs is None:
            self._inputs = self._resolve_inputs()
        return self._inputs

    def _resolve_inputs(self) -> Dict[str, str]:
        state = self.state
        resolved: Dict[str, str] = {}
        seen_ports = set()

        for conn in state.graph.data_wires_to(self.node.id):
            target_port = self.spec.input(conn.target_port)
            if target_port is None:
                self.diagnostics.warn(
                    f"Connection into unknown input {self.node.id}.{conn.target_port}; ignored"
                )
                continue

            source_spec = state.spec_of(conn.source_node_id)
            if source_spec is None:
                self.diagnostics.warn(
                    f"Source node {conn.source_node_id} of {self.node.id}.{conn.target_port} has no spec; ignored"
                )
                continue
            source_port_type = self._source_port_type(conn.source_node_id, source_spec, conn.source_port)
            if source_port_type is None:
                self.diagnostics.warn(
                    f"Unknown output {conn.source_node_id}.{conn.source_port}; ignored"
                )
                continue

            source_var = state.variable_names.lookup(conn.source_node_id, conn.source_port)
            if source_var is None:
                self.diagnostics.warn(
                    f"No variable for {conn.source_node_id}.{conn.source_port} -> "
                    f"{self.node.id}.{conn.target_port}; using default"
                )
                continue

            if conn.target_port in seen_ports:
                self.diagnostics.warn(
                    f"Multiple connections into {self.node.id}.{conn.target_port}; the last one wins"
                )
            seen_ports.add(conn.target_port)
            resolved[conn.target_port] = coerce(
                source_var, source_port_type, target_port.type, node_id=self.node.id
            )

        if not self.is_self_sufficient:
            for port in self.spec.inputs:
                resolved.setdefault(port.name, zero_value(port.type))
        return resolved

    def _source_port_type(self, node_id: str, spec: NodeSpec, port_name: str):
        port = spec.output(port_name)
        if port is not None:
            return port.type
        # Analyzer bands are dynamic float ports
        if self.state.variable_names.lookup(node_id, port_name) is not None \
                and spec.id == self.config.audio_analyzer_node_type:
            return DataType.FLOAT
        return None

    # -------------------------------------------------------------------------
    # Parameter wires
    # -------------------------------------------------------------------------

    @property
    def parameter_wires(self) -> Dict[str, str]:
        if self._param_wires is None:
            self._param_wires = self._resolve_parameter_wires()
        return self._param_wires

    def _resolve_parameter_wires(self) -> Dict[str, str]:
        """
        One wire per float parameter. Among several, the source latest in
        execution order that still runs before this node wins.
        """
        state = self.state
        chosen: Dict[str, Tuple[int, str]] = {}

        target_index = state.position(self.node.id)
        if target_index is None:
            target_index = len(state.execution_order)

        for conn in state.graph.parameter_wires_to(self.node.id):
            param_spec = self.spec.parameter(conn.target_parameter)
            if param_spec is None or param_spec.type != ParamType.FLOAT:
                self.diagnostics.warn(
                    f"Parameter wire into {self.node.id}.{conn.target_parameter} ignored: "
                    f"only float parameters accept connections"
                )
                continue

            source_spec = state.spec_of(conn.source_node_id)
            if source_spec is None:
                self.diagnostics.warn(
                    f"Parameter wire into {self.node.id}.{conn.target_parameter} ignored: "
                    f"source node {conn.source_node_id} has no spec"
                )
                continue
            source_type = self._source_port_type(conn.source_node_id, source_spec, conn.source_port)
            if source_type is None:
                self.diagnostics.warn(f"Unknown output {conn.source_node_id}.{conn.source_port}; ignored")
                continue

            source_index = state.position(conn.source_node_id)
            if source_index is None or source_index >= target_index:
                continue
            existing = chosen.get(conn.target_parameter)
            if existing is not None and source_index <= existing[0]:
                continue

            source_var = state.variable_names.lookup(conn.source_node_id, conn.source_port)
            if source_var is None:
                source_var = variable_name(conn.source_node_id, conn.source_port)
                self.diagnostics.warn(
                    f"No variable for {conn.source_node_id}.{conn.source_port}; using {source_var}"
                )

            expr = parameter_wire_expression(source_var, source_type, node_id=self.node.id)
            logger.debug(f"{self.node.id}.{conn.target_parameter} <- {conn.source_node_id}.{conn.source_port} (index {source_index})")
            chosen[conn.target_parameter] = (source_index, expr)

        return {name: expr for name, (_, expr) in chosen.items()}

    # -------------------------------------------------------------------------
    # Array constants
    # -------------------------------------------------------------------------

    @property
    def arrays(self) -> Dict[str, Tuple[str, object]]:
        """param name -> (array identifier, flat values) for non-empty array params."""
        if self._arrays is None:
            self._arrays = {}
            for name, param_spec in self.spec.parameters.items():
                if param_spec.type != ParamType.ARRAY:
                    continue
                value = self.node.parameters.get(name)
                if value is None:
                    value = param_spec.default
                values = flatten_array(value)
                if values is None and value is not None:
                    self._malformed_arrays.add(name)
                elif values is not None and values.size > 0:
                    self._arrays[name] = (array_variable_name(self.node.id, name), values)
        return self._arrays

    def array_declarations(self) -> List[str]:
        return [
            format_array(array_name, values, self.config.array_precision)
            for array_name, values in self.arrays.values()
        ]

    # -------------------------------------------------------------------------
    # Parameter values
    # -------------------------------------------------------------------------

    def literal(self, name: str, param_spec: ParameterSpec) -> str:
        """Node value, else spec default, else zero, as a literal."""
        value = self.node.parameters.get(name)
        if value is None:
            value = param_spec.default
        if value is None:
            value = param_zero(param_spec.type)
        return format_param_literal(value, param_spec.type)

    def config_value(self, name: str, param_spec: ParameterSpec, mode: InputMode) -> str:
        uniform = self.state.uniform(self.node.id, name)
        if uniform:
            return uniform
        self.diagnostics.warn(
            f"No uniform for {self.node.id}.{name} in '{mode}' mode; using its literal value"
        )
        return self.literal(name, param_spec)

    def _unknown_param(self, name: str) -> str:
        value = self.node.parameters.get(name)
        self.diagnostics.warn(
            f"Unresolved parameter ${name} on {self.node.id} ({self.spec.id}); substituting a literal"
        )
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if is_number(value):
            return format_float(value)
        return "0.0"

    # -------------------------------------------------------------------------
    # Template resolver interface
    # -------------------------------------------------------------------------

    def input(self, port: str) -> str:
        expr = self.inputs.get(port)
        if expr is not None:
            return expr
        port_spec = self.spec.input(port)
        self.diagnostics.warn(f"Input {self.node.id}.{port} is not available; using zero")
        return zero_value(port_spec.type) if port_spec is not None else "0.0"

    def output(self, port: str) -> str:
        name = self.state.variable_names.lookup(self.node.id, port)
        if name is None:
            name = variable_name(self.node.id, port)
            self.diagnostics.warn(f"No variable for output {self.node.id}.{port}; using {name}")
        return name

    def param(self, name: str, index: Optional[str] = None) -> str:
        """Substitution for $param.name; scalar fallback literals drop the index."""
        param_spec = self.spec.parameter(name)
        if param_spec is None:
            return self._unknown_param(name)
        if param_spec.type == ParamType.ARRAY:
            array = self.arrays.get(name)
            if array is None:
                problem = "malformed" if name in self._malformed_arrays else "empty"
                self.diagnostics.warn(f"Array parameter {self.node.id}.{name} is {problem}; using 0.0")
                return "0.0"
            return f"{array[0]}[{index}]" if index is not None else array[0]
        if param_spec.type == ParamType.STRING:
            self.diagnostics.warn(
                f"String parameter {self.node.id}.{name} cannot be used in GLSL; using 0.0"
            )
            return "0.0"

        expr = self._numeric_param(name, param_spec)
        if index is not None:
            return f"{expr}[{index}]"
        return expr

    def _input_mode(self, name: str, param_spec: ParameterSpec) -> InputMode:
        mode = self.node.input_mode(name, param_spec)
        raw = self.node.parameter_input_modes.get(name)
        if raw is not None and str(raw).lower() != mode.value:
            self.diagnostics.warn(
                f"Unknown input mode {str(raw)!r} for {self.node.id}.{name}; using {mode}"
            )
        return mode

    def _numeric_param(self, name: str, param_spec: ParameterSpec) -> str:
        wire = self.parameter_wires.get(name)
        if wire is not None:
            mode = self._input_mode(name, param_spec)
            if mode == InputMode.OVERRIDE:
                return wire
            return f"({self.config_value(name, param_spec, mode)} {mode.operator} {wire})"

        uniform = self.state.uniform(self.node.id, name)
        if uniform:
            return uniform
        return self.literal(name, param_spec)

    def global_ref(self, name: str) -> str:
        if name == 'time':
            return self.config.time_uniform
        if name == 'resolution':
            return self.config.resolution_uniform
        return self.config.coord_var

    def result(self) -> str:
        ports = self.state.variable_names.ports(self.node.id)
        if 'out' in ports:
            return ports['out']
        for port in self.spec.outputs:
            if port.name in ports:
                return ports[port.name]
        if ports:
            return next(iter(ports.values()))
        return 'result'

    # -------------------------------------------------------------------------

    def render(self, template: Optional[str]) -> str:
        if not template:
            return ""
        return render(template, self)
