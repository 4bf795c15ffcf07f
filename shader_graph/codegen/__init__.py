from .naming import sanitize, variable_name, array_variable_name, uniform_name, generate_variable_names, VariableNames
from .coercion import coerce, parameter_wire_expression, to_color
from .template import parse_template
from .context import GenerationState, NodeContext
from .generator import MainCodeGenerator, GeneratedCode
from .assembly import resolve_final_output, assemble, uniform_declarations

__all__ = [
    'sanitize', 'variable_name', 'array_variable_name', 'uniform_name',
    'generate_variable_names', 'VariableNames',
    'coerce', 'parameter_wire_expression', 'to_color',
    'parse_template',
    'GenerationState', 'NodeContext',
    'MainCodeGenerator', 'GeneratedCode',
    'resolve_final_output', 'assemble', 'uniform_declarations',
]
