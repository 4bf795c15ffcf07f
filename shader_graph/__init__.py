"""
Shader Graph - compiles node graphs into GLSL ES 3.00 fragment shaders.
"""

from .compiler import CompilationResult, ShaderGraphCompiler, compile_graph
from .config import CompilerConfig, DEFAULT_CONFIG
from .diagnostics import Diagnostics
from .errors import (
    CatalogError, CompilationError, ErrorKind, ShaderGraphError,
    TemplateError, UnsupportedConversionError,
)
from .ir import (
    Connection, DataType, InputMode, NodeGraph, NodeInstance, NodeSpec,
    ParameterSpec, ParamType, PortSpec,
)
from .logger import get_logger, setup_logger
from .nodes import NodeCatalog, default_catalog
from .planner import UniformMetadata, allocate_uniforms, plan_function_specialization

__version__ = "0.1.0"

__all__ = [
    'ShaderGraphCompiler', 'CompilationResult', 'compile_graph',
    'CompilerConfig', 'DEFAULT_CONFIG', 'Diagnostics',
    'ShaderGraphError', 'CompilationError', 'UnsupportedConversionError',
    'TemplateError', 'CatalogError', 'ErrorKind',
    'DataType', 'ParamType', 'InputMode',
    'PortSpec', 'ParameterSpec', 'NodeSpec', 'NodeInstance', 'Connection', 'NodeGraph',
    'NodeCatalog', 'default_catalog',
    'UniformMetadata', 'allocate_uniforms', 'plan_function_specialization',
    'get_logger', 'setup_logger',
]
