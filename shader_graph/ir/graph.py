from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple
from dataclasses import dataclass, field

from .types import DataType, ParamType, InputMode


@dataclass(frozen=True)
class PortSpec:
    """A typed, named input or output slot on a node type."""
    name: str
    type: DataType
    label: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'type', DataType.parse(self.type))


@dataclass(frozen=True)
class ParameterSpec:
    """
    Declared configuration value of a node type.

    Only FLOAT parameters accept parameter wires. `input_mode` is the
    default combination mode for a wired value; instances may override it.
    """
    type: ParamType
    default: Any = None
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    label: Optional[str] = None
    input_mode: Optional[InputMode] = None

    def __post_init__(self):
        object.__setattr__(self, 'type', ParamType.parse(self.type))
        if self.input_mode is not None:
            object.__setattr__(self, 'input_mode', InputMode.parse(self.input_mode))


@dataclass(frozen=True)
class NodeSpec:
    """
    Immutable description of a node type, supplied by a NodeCatalog.

    `main_code` and `functions` are GLSL templates using the placeholders
    $input.<port>, $output.<port>, $param.<name>, $time, $resolution, $p
    and the legacy bare word `result`.
    """
    id: str
    display_name: str
    category: str
    inputs: Tuple[PortSpec, ...] = ()
    outputs: Tuple[PortSpec, ...] = ()
    parameters: Mapping[str, ParameterSpec] = field(default_factory=dict)
    main_code: str = ""
    functions: Optional[str] = None
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'inputs', tuple(self.inputs))
        object.__setattr__(self, 'outputs', tuple(self.outputs))
        object.__setattr__(self, 'parameters', MappingProxyType(dict(self.parameters)))

    def input(self, name: str) -> Optional[PortSpec]:
        for port in self.inputs:
            if port.name == name:
                return port
        return None

    def output(self, name: str) -> Optional[PortSpec]:
        for port in self.outputs:
            if port.name == name:
                return port
        return None

    def parameter(self, name: str) -> Optional[ParameterSpec]:
        return self.parameters.get(name)


@dataclass
class NodeInstance:
    """One node in a graph: a NodeSpec id plus concrete parameter values."""
    id: str
    type: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    parameter_input_modes: Dict[str, InputMode] = field(default_factory=dict)

    def input_mode(self, param_name: str, param_spec: Optional[ParameterSpec]) -> InputMode:
        """Instance override, then spec default, then OVERRIDE.

        An unrecognised instance mode also resolves to OVERRIDE.
        """
        mode = self.parameter_input_modes.get(param_name)
        if mode is not None:
            try:
                return InputMode.parse(mode)
            except ValueError:
                return InputMode.OVERRIDE
        if param_spec is not None and param_spec.input_mode is not None:
            return param_spec.input_mode
        return InputMode.OVERRIDE


@dataclass
class Connection:
    """
    A wire from an output port to either an input port (data-wire)
    or a parameter (parameter-wire). Exactly one target kind is set.
    """
    source_node_id: str
    source_port: str
    target_node_id: str
    target_port: Optional[str] = None
    target_parameter: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self):
        if (self.target_port is None) == (self.target_parameter is None):
            raise ValueError(
                f"Connection {self.source_node_id}.{self.source_port} -> {self.target_node_id} "
                f"must set exactly one of target_port / target_parameter"
            )

    @property
    def is_parameter_wire(self) -> bool:
        return self.target_parameter is not None


@dataclass
class NodeGraph:
    nodes: List[NodeInstance] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)

    def data_wires_to(self, node_id: str) -> List[Connection]:
        return [c for c in self.connections if c.target_node_id == node_id and c.target_port is not None]

    def parameter_wires_to(self, node_id: str) -> List[Connection]:
        return [c for c in self.connections if c.target_node_id == node_id and c.target_parameter is not None]

    def source_node_ids(self) -> set:
        """Ids of nodes that have at least one outgoing connection."""
        return {c.source_node_id for c in self.connections}
