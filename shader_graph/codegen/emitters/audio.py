# Audio Emitters
# Audio nodes have no GLSL body of their own. Their outputs are refreshed
# from uniforms every frame, so the emitted block only copies uniforms
# into the node's output variables.

from ..naming import analyzer_port_names, frequency_bands


def _copy_uniforms(ctx, port_names):
    lines = []
    for port in port_names:
        var = ctx.state.variable_names.lookup(ctx.node.id, port)
        uniform = ctx.state.uniform(ctx.node.id, port)
        if var is None:
            continue
        if not uniform:
            ctx.diagnostics.warn(f"No uniform for audio output {ctx.node.id}.{port}; output stays at its initial value")
            continue
        lines.append(f"{var} = {uniform};")
    return '\n'.join(lines)


def emit_audio_file(ctx):
    return _copy_uniforms(ctx, [port.name for port in ctx.spec.outputs])


def emit_audio_analyzer(ctx):
    bands = frequency_bands(ctx.node, ctx.spec, ctx.config)
    return _copy_uniforms(ctx, analyzer_port_names(len(bands)))
