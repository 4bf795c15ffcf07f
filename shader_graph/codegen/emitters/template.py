# Template Emitter
# Default emission for ordinary nodes: array constants followed by the
# node's main code with every placeholder expanded.

import textwrap


def emit_template(ctx):
    """Emit the node body from its spec's main_code template."""
    lines = ctx.array_declarations()
    body = textwrap.dedent(ctx.render(ctx.spec.main_code)).strip('\n')
    if body.strip():
        lines.append(body)
    return '\n'.join(lines)


def emit_nothing(ctx):
    """Sink nodes: their input is read directly during assembly."""
    return None
