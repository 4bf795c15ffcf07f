# Identifier Generation
# Deterministic GLSL names for node outputs, array constants and uniforms.
# All functions here are pure: the same (node id, port) always yields the same name.

import re
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

import numpy as np

from ..config import CompilerConfig, DEFAULT_CONFIG
from ..ir.graph import NodeGraph, NodeInstance, NodeSpec

_NON_ALNUM = re.compile(r'[^a-zA-Z0-9]')


def sanitize(name: str) -> str:
    """Replace every character outside [A-Za-z0-9] with '_'."""
    return _NON_ALNUM.sub('_', name)


def variable_name(node_id: str, port_name: str) -> str:
    return f"node_{sanitize(node_id)}_{sanitize(port_name)}"


def array_variable_name(node_id: str, param_name: str) -> str:
    return f"array_{sanitize(node_id)}_{sanitize(param_name)}"


def uniform_name(node_id: str, param_name: str) -> str:
    """
    u + sanitized id + Capitalized param, e.g. ('n-1', 'scale') -> 'un_1Scale'.
    Ids starting with a digit get an 'n' prefix.
    """
    sanitized_id = sanitize(node_id)
    if sanitized_id[:1].isdigit():
        sanitized_id = 'n' + sanitized_id
    sanitized_param = _NON_ALNUM.sub('', param_name)
    sanitized_param = sanitized_param[:1].upper() + sanitized_param[1:]
    return f"u{sanitized_id}{sanitized_param}"


def frequency_bands(node: NodeInstance, spec: NodeSpec, config: CompilerConfig = DEFAULT_CONFIG) -> np.ndarray:
    """
    Frequency bands of an analyzer node as an (N, 2) array.
    Node value first, then the NodeSpec default, then the configured defaults.
    """
    candidates = [node.parameters.get('frequencyBands')]
    param_spec = spec.parameter('frequencyBands')
    if param_spec is not None:
        candidates.append(param_spec.default)

    for value in candidates:
        if value is None:
            continue
        try:
            bands = np.asarray(value, dtype=np.float64)
        except (TypeError, ValueError):
            continue
        if bands.ndim == 2 and bands.shape[0] > 0:
            return bands

    return np.asarray(config.default_frequency_bands, dtype=np.float64)


def analyzer_port_names(band_count: int) -> List[str]:
    """Synthetic output ports of an analyzer: band0..bandN-1 then remap0..remapN-1."""
    return [f"band{i}" for i in range(band_count)] + [f"remap{i}" for i in range(band_count)]


def is_analyzer(spec: NodeSpec, config: CompilerConfig = DEFAULT_CONFIG) -> bool:
    return spec.id == config.audio_analyzer_node_type


def output_port_names(node: NodeInstance, spec: NodeSpec, config: CompilerConfig = DEFAULT_CONFIG) -> List[str]:
    """Port names a node actually exposes (dynamic for analyzers)."""
    if is_analyzer(spec, config):
        return analyzer_port_names(len(frequency_bands(node, spec, config)))
    return [port.name for port in spec.outputs]


class VariableNames(Mapping):
    """
    Read-only node id -> (port name -> identifier) table.
    Built once per compile and shared by every stage.
    """

    def __init__(self, table: Dict[str, Dict[str, str]]):
        self._table = {node_id: MappingProxyType(dict(ports)) for node_id, ports in table.items()}

    def __getitem__(self, node_id):
        return self._table[node_id]

    def __iter__(self):
        return iter(self._table)

    def __len__(self):
        return len(self._table)

    def lookup(self, node_id: str, port_name: str) -> Optional[str]:
        ports = self._table.get(node_id)
        if ports is None:
            return None
        return ports.get(port_name)

    def ports(self, node_id: str) -> Mapping[str, str]:
        return self._table.get(node_id, MappingProxyType({}))


def generate_variable_names(graph: NodeGraph, catalog, config: CompilerConfig = DEFAULT_CONFIG) -> VariableNames:
    """Name every output port of every node whose type the catalog knows."""
    table: Dict[str, Dict[str, str]] = {}
    for node in graph.nodes:
        spec = catalog.get(node.type)
        if spec is None:
            continue
        table[node.id] = {
            port: variable_name(node.id, port)
            for port in output_port_names(node, spec, config)
        }
    return VariableNames(table)
