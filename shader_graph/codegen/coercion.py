# Type Coercion
# Handles: data-wire casts, parameter-wire promotion, final color conversion

import re

from ..errors import UnsupportedConversionError
from ..ir.types import DataType

_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


def _operand(expr: str) -> str:
    """Parenthesize anything that is not a bare identifier before swizzling."""
    if _IDENTIFIER.match(expr):
        return expr
    return f"({expr})"


def coerce(expr: str, from_type: DataType, to_type: DataType, node_id: str = None) -> str:
    """
    Express a value of `from_type` as `to_type`.

    Promotion pads with 0.0 and sets alpha to 1.0; demotion swizzles.
    Raises UnsupportedConversionError for any pairing involving bool.
    """
    from_type = DataType.parse(from_type)
    to_type = DataType.parse(to_type)

    if from_type == to_type:
        return expr

    if DataType.BOOL in (from_type, to_type):
        raise UnsupportedConversionError(from_type, to_type, node_id=node_id)

    # Int -> Float : constructor; Int -> VecN goes through float
    if from_type == DataType.INT:
        as_float = f"float({expr})"
        if to_type == DataType.FLOAT:
            return as_float
        return coerce(as_float, DataType.FLOAT, to_type, node_id)

    # Float -> Int : constructor; VecN -> Int goes through the first lane
    if to_type == DataType.INT:
        if from_type == DataType.FLOAT:
            return f"int({expr})"
        return f"int({coerce(expr, from_type, DataType.FLOAT, node_id)})"

    x = _operand(expr)

    # Float -> VecN : replicate, alpha = 1.0
    if from_type == DataType.FLOAT:
        if to_type == DataType.VEC2:
            return f"vec2({expr}, {expr})"
        if to_type == DataType.VEC3:
            return f"vec3({expr}, {expr}, {expr})"
        if to_type == DataType.VEC4:
            return f"vec4({expr}, {expr}, {expr}, 1.0)"

    # Vec2 -> Vec3/Vec4 : pad with 0.0, alpha = 1.0
    if from_type == DataType.VEC2:
        if to_type == DataType.VEC3:
            return f"vec3({x}.x, {x}.y, 0.0)"
        if to_type == DataType.VEC4:
            return f"vec4({x}.x, {x}.y, 0.0, 1.0)"
        if to_type == DataType.FLOAT:
            return f"{x}.x"

    # Vec3 -> Vec4 : append alpha 1.0
    if from_type == DataType.VEC3:
        if to_type == DataType.VEC4:
            return f"vec4({x}.x, {x}.y, {x}.z, 1.0)"
        if to_type == DataType.VEC2:
            return f"{x}.xy"
        if to_type == DataType.FLOAT:
            return f"{x}.r"

    # Vec4 -> lower : drop lanes
    if from_type == DataType.VEC4:
        if to_type == DataType.VEC3:
            return f"{x}.rgb"
        if to_type == DataType.VEC2:
            return f"{x}.xy"
        if to_type == DataType.FLOAT:
            return f"{x}.r"

    raise UnsupportedConversionError(from_type, to_type, node_id=node_id)


def parameter_wire_expression(expr: str, from_type: DataType, node_id: str = None) -> str:
    """
    Reduce a wired source to a float for a float parameter.

    Int is cast, vectors contribute their first lane, bool is rejected.
    """
    from_type = DataType.parse(from_type)
    if from_type == DataType.FLOAT:
        return expr
    if from_type == DataType.INT:
        return f"float({expr})"
    if from_type.is_vector():
        return f"{_operand(expr)}.x"
    raise UnsupportedConversionError(from_type, DataType.FLOAT, node_id=node_id)


def to_color(expr: str, from_type: DataType) -> str:
    """Convert the final output value to the vec3 written into fragColor."""
    from_type = DataType.parse(from_type)
    if from_type == DataType.VEC3:
        return expr
    if from_type == DataType.VEC4:
        return f"{_operand(expr)}.rgb"
    if from_type == DataType.VEC2:
        return f"vec3({expr}, 0.0)"
    if from_type == DataType.INT:
        return f"vec3(float({expr}))"
    if from_type == DataType.FLOAT:
        return f"vec3({expr})"
    raise UnsupportedConversionError(from_type, DataType.VEC3)
