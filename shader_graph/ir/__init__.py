from .types import DataType, ParamType, InputMode
from .graph import PortSpec, ParameterSpec, NodeSpec, NodeInstance, Connection, NodeGraph

__all__ = [
    'DataType', 'ParamType', 'InputMode',
    'PortSpec', 'ParameterSpec', 'NodeSpec', 'NodeInstance', 'Connection', 'NodeGraph',
]
