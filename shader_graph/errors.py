"""
Custom exceptions for the Shader Graph compiler.

Only one error class aborts a compile: an impossible type conversion.
Everything else is recorded as a diagnostic and compilation continues
with a safe fallback (see diagnostics.py).

Exception Hierarchy:
    ShaderGraphError (base)
    ├── CompilationError
    │   ├── UnsupportedConversionError
    │   └── TemplateError
    └── CatalogError
"""

from enum import Enum, auto


class ErrorKind(Enum):
    """Machine-readable tag carried by every Shader Graph error."""
    GENERIC = auto()
    UNSUPPORTED_CONVERSION = auto()
    UNRESOLVED_PLACEHOLDER = auto()
    UNKNOWN_NODE_TYPE = auto()
    DUPLICATE_NODE_TYPE = auto()


class ShaderGraphError(Exception):
    """Base exception for all Shader Graph errors."""
    kind = ErrorKind.GENERIC


# =============================================================================
# Compilation Errors
# =============================================================================

class CompilationError(ShaderGraphError):
    """
    Base exception for code generation errors.

    Attributes:
        source: Partially generated GLSL, when available
        node_id: Node whose generation failed, when known
    """

    def __init__(self, message: str, source: str = None, node_id: str = None):
        super().__init__(message)
        self.source = source
        self.node_id = node_id

    def format_with_source(self) -> str:
        """Format error with numbered source lines."""
        if not self.source:
            return str(self)

        lines = []
        lines.append(f"{type(self).__name__}: {self}")
        if self.node_id:
            lines.append(f"Node: {self.node_id}")
        lines.append("--- SHADER SOURCE ---")
        for i, line in enumerate(self.source.split('\n')):
            lines.append(f"{i+1:03d}: {line}")
        lines.append("---------------------")
        return '\n'.join(lines)


class UnsupportedConversionError(CompilationError):
    """
    Raised when a value cannot be converted between two GLSL types.

    This is the only fatal error class: it halts generation of the
    current node and propagates out of the compiler.
    """
    kind = ErrorKind.UNSUPPORTED_CONVERSION

    def __init__(self, from_type, to_type, node_id: str = None):
        super().__init__(f"Cannot convert {from_type} to {to_type}", node_id=node_id)
        self.from_type = from_type
        self.to_type = to_type


class TemplateError(CompilationError):
    """Raised when a node template references a port its spec does not declare."""
    kind = ErrorKind.UNRESOLVED_PLACEHOLDER

    def __init__(self, message: str, node_type: str = None, placeholder: str = None):
        super().__init__(message)
        self.node_type = node_type
        self.placeholder = placeholder


# =============================================================================
# Catalog Errors
# =============================================================================

class CatalogError(ShaderGraphError):
    """Raised on unknown or duplicate node type ids in a NodeCatalog."""

    def __init__(self, message: str, node_type: str = None, kind: ErrorKind = ErrorKind.UNKNOWN_NODE_TYPE):
        super().__init__(message)
        self.node_type = node_type
        self.kind = kind
