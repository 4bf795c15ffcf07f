# Literal formatting utilities for GLSL code generation

import math
from typing import Any, Optional

import numpy as np

from ..ir.types import DataType, ParamType


def format_float(value) -> str:
    """Format a number as a GLSL float literal; always carries a decimal point."""
    s_val = repr(float(value))
    if s_val in ('inf', '-inf', 'nan'):
        return "0.0"
    if '.' not in s_val and 'e' not in s_val:
        s_val += ".0"
    elif 'e' in s_val and '.' not in s_val:
        mantissa, exponent = s_val.split('e')
        s_val = f"{mantissa}.0e{exponent}"
    return s_val


def round_int(value) -> int:
    """Round half up, so 2.5 -> 3 and -2.5 -> -2."""
    return int(math.floor(float(value) + 0.5))


def format_param_literal(value: Any, param_type: ParamType) -> str:
    """Format a parameter value as a literal of its declared type."""
    if param_type == ParamType.INT:
        try:
            return str(round_int(value))
        except (TypeError, ValueError, OverflowError):
            return "0"

    if param_type == ParamType.VEC4:
        try:
            comps = list(np.asarray(value, dtype=np.float64).ravel()) if value is not None else []
        except (TypeError, ValueError):
            return "vec4(0.0)"
        if not comps:
            return "vec4(0.0)"
        comps = (comps + [0.0, 0.0, 0.0, 1.0][len(comps):])[:4]
        return f"vec4({', '.join(format_float(c) for c in comps)})"

    try:
        return format_float(value)
    except (TypeError, ValueError):
        return "0.0"


def zero_value(dtype: DataType) -> str:
    """Zero literal used for declarations and unconnected inputs."""
    if dtype == DataType.FLOAT:
        return "0.0"
    if dtype == DataType.INT:
        return "0"
    if dtype == DataType.BOOL:
        return "false"
    return f"{dtype}(0.0)"


def param_zero(param_type: ParamType) -> Any:
    """Python zero for a parameter type, used when no value is known."""
    if param_type == ParamType.INT:
        return 0
    if param_type == ParamType.VEC4:
        return [0.0, 0.0, 0.0, 0.0]
    return 0.0


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float, np.number)) and not isinstance(value, bool)


def flatten_array(value: Any) -> Optional[np.ndarray]:
    """
    Normalise an array parameter to a flat float vector.
    Nested lists (e.g. frequency bands) are flattened; non-numeric input yields None.
    """
    if value is None:
        return None
    try:
        return np.asarray(value, dtype=np.float64).ravel()
    except (TypeError, ValueError):
        return None


def format_array(name: str, values: np.ndarray, precision: int = 10) -> str:
    """Declare a constant float array, e.g. `const float a[2] = float[2](0.5, 1.0);`."""
    size = len(values)
    body = ', '.join(f"{v:.{precision}f}" for v in values)
    return f"const float {name}[{size}] = float[{size}]({body});"
