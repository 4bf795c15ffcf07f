# Swizzle Emitter
# The swizzle pattern is a string parameter, which GLSL cannot consume.
# The pattern is resolved here and the node body becomes one assignment.

import re

_COLOR_TO_XYZW = str.maketrans('rgba', 'xyzw')
_VALID_PATTERN = re.compile(r'^[xyzw]{1,4}$')


def normalize_swizzle(pattern):
    """Lower-case, map rgba onto xyzw, and validate. Returns None if invalid."""
    if not isinstance(pattern, str):
        return None
    normalized = pattern.strip().lower().translate(_COLOR_TO_XYZW)
    if not _VALID_PATTERN.match(normalized):
        return None
    return normalized


def swizzle_expression(input_expr, pattern):
    """vec4 result of applying `pattern`; short patterns pad with 0.0 and alpha 1.0.

    A single lane is splatted across rgb.
    """
    if len(pattern) == 1:
        lane = f"{input_expr}.{pattern}"
        return f"vec4({lane}, {lane}, {lane}, 1.0)"
    if len(pattern) == 2:
        return f"vec4({input_expr}.{pattern}, 0.0, 1.0)"
    if len(pattern) == 3:
        return f"vec4({input_expr}.{pattern}, 1.0)"
    if len(pattern) == 4:
        return f"{input_expr}.{pattern}"
    return input_expr


def emit_swizzle(ctx):
    value = ctx.node.parameters.get('swizzle')
    if not value:
        param_spec = ctx.spec.parameter('swizzle')
        value = (param_spec.default if param_spec is not None else None) or 'xyzw'

    input_expr = ctx.input('in')
    output_var = ctx.output('out')

    pattern = normalize_swizzle(value)
    if pattern is None:
        ctx.diagnostics.warn(f"Invalid swizzle pattern {value!r} on {ctx.node.id}; passing input through")
        return f"{output_var} = {input_expr};"

    if not re.match(r'^[A-Za-z_]\w*$', input_expr):
        input_expr = f"({input_expr})"
    return f"{output_var} = {swizzle_expression(input_expr, pattern)};"
