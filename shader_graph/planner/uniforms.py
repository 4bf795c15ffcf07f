import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Set

from ..config import CompilerConfig, DEFAULT_CONFIG
from ..ir.graph import NodeGraph
from ..ir.types import InputMode, ParamType
from ..codegen.literals import param_zero, round_int
from ..codegen.naming import analyzer_port_names, frequency_bands, uniform_name

_BAND_REMAP_PARAM = re.compile(r'^band\d+Remap(InMin|InMax|OutMin|OutMax)$')


@dataclass(frozen=True)
class UniformMetadata:
    """One uniform the host must upload: where it comes from and its initial value."""
    name: str
    node_id: str
    param_name: str
    glsl_type: str
    default_value: Any
    is_audio_output: bool = False


def _audio_output_ports(node, spec, config: CompilerConfig) -> List[str]:
    if spec.category != config.audio_category:
        return []
    if spec.id == config.audio_file_node_type:
        return [port.name for port in spec.outputs]
    if spec.id == config.audio_analyzer_node_type:
        return analyzer_port_names(len(frequency_bands(node, spec, config)))
    return []


def _is_runtime_parameter(spec, param_name: str, config: CompilerConfig) -> bool:
    """Audio parameters consumed by the audio runtime rather than the shader."""
    if spec.category != config.audio_category:
        return False
    return param_name in config.audio_runtime_parameters or bool(_BAND_REMAP_PARAM.match(param_name))


def allocate_uniforms(graph: NodeGraph, catalog, config: CompilerConfig = DEFAULT_CONFIG) -> Dict[str, str]:
    """
    Build the "<nodeId>.<name>" -> uniform identifier table.

    Audio outputs always get a uniform. Parameters get one unless they are
    arrays, strings, audio runtime settings, or wired in override mode.
    """
    names: Dict[str, str] = {}
    wired = {(c.target_node_id, c.target_parameter) for c in graph.connections if c.is_parameter_wire}

    for node in graph.nodes:
        spec = catalog.get(node.type)
        if spec is None:
            continue

        for port in _audio_output_ports(node, spec, config):
            names[f"{node.id}.{port}"] = uniform_name(node.id, port)

        for param_name, param_spec in spec.parameters.items():
            if param_spec.type in (ParamType.ARRAY, ParamType.STRING):
                continue
            if _is_runtime_parameter(spec, param_name, config):
                continue
            if (node.id, param_name) in wired and node.input_mode(param_name, param_spec) == InputMode.OVERRIDE:
                continue
            names[f"{node.id}.{param_name}"] = uniform_name(node.id, param_name)

    return names


def find_used_uniforms(code: str, uniform_names: Mapping[str, str]) -> Set[str]:
    """Uniform identifiers that occur as whole words in `code`."""
    used = set()
    for name in set(uniform_names.values()):
        if re.search(rf'\b{re.escape(name)}\b', code):
            used.add(name)
    return used


def _glsl_type(param_type: ParamType) -> str:
    if param_type == ParamType.INT:
        return 'int'
    if param_type == ParamType.VEC4:
        return 'vec4'
    return 'float'


def _default_value(node, param_name, param_spec):
    """Node value, else spec default, else a type-appropriate zero."""
    value = node.parameters.get(param_name)
    if value is None:
        value = param_spec.default
    if value is None:
        value = param_zero(param_spec.type)
    if param_spec.type == ParamType.VEC4:
        return tuple(float(v) for v in value)
    if param_spec.type == ParamType.INT:
        return round_int(value)
    return float(value)


def uniform_metadata(graph: NodeGraph, catalog, uniform_names: Mapping[str, str],
                     used: Iterable[str] = None, config: CompilerConfig = DEFAULT_CONFIG) -> List[UniformMetadata]:
    """
    Describe every uniform to declare.

    Audio outputs are always included; parameter uniforms only when `used`
    is None or contains them.
    """
    used = None if used is None else set(used)
    uniforms: List[UniformMetadata] = []

    for node in graph.nodes:
        spec = catalog.get(node.type)
        if spec is None:
            continue

        for port in _audio_output_ports(node, spec, config):
            name = uniform_names.get(f"{node.id}.{port}")
            if name:
                uniforms.append(UniformMetadata(name, node.id, port, 'float', 0.0, is_audio_output=True))

        for param_name, param_spec in spec.parameters.items():
            name = uniform_names.get(f"{node.id}.{param_name}")
            if not name or param_spec.type == ParamType.ARRAY:
                continue
            if used is not None and name not in used:
                continue
            try:
                default = _default_value(node, param_name, param_spec)
            except (TypeError, ValueError, OverflowError):
                default = param_zero(param_spec.type)
            uniforms.append(UniformMetadata(
                name, node.id, param_name, _glsl_type(param_spec.type), default,
            ))

    return uniforms
