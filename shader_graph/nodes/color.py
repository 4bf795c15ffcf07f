# Color Nodes

from ..ir.graph import NodeSpec, ParameterSpec, PortSpec


# colorStops is a flat list of RGB triples, evenly spaced over [0, 1].
# It is inlined as a constant array, so stopCount must match its length / 3.
COLOR_MAP = NodeSpec(
    id='color-map',
    display_name='Color Map',
    category='Color',
    description='Maps a scalar onto a gradient of color stops',
    inputs=[PortSpec('in', 'float')],
    outputs=[PortSpec('out', 'vec3')],
    parameters={
        'colorStops': ParameterSpec('array', default=[0.0, 0.0, 0.0, 1.0, 1.0, 1.0]),
        'stopCount': ParameterSpec('int', default=2, min=2, max=16),
    },
    main_code="""
    float t = clamp($input.in, 0.0, 1.0);
    int count = max($param.stopCount, 2);
    float scaled = t * float(count - 1);
    int i0 = min(int(floor(scaled)), count - 2);
    int i1 = i0 + 1;
    vec3 c0 = vec3($param.colorStops[i0 * 3], $param.colorStops[i0 * 3 + 1], $param.colorStops[i0 * 3 + 2]);
    vec3 c1 = vec3($param.colorStops[i1 * 3], $param.colorStops[i1 * 3 + 1], $param.colorStops[i1 * 3 + 2]);
    $output.out = mix(c0, c1, scaled - float(i0));
    """,
)

NODE_SPECS = [COLOR_MAP]
