# Input Nodes
# Coordinates, time, resolution and constants. These produce their own
# values and never read $input.

from ..ir.graph import NodeSpec, ParameterSpec, PortSpec


def _constant_param(default=0.0):
    return ParameterSpec('float', default=default, min=-1000.0, max=1000.0, step=0.01)


UV_COORDINATES = NodeSpec(
    id='uv-coordinates',
    display_name='UV Coordinates',
    category='Inputs',
    description='Aspect-corrected, centered screen coordinates',
    outputs=[PortSpec('out', 'vec2')],
    main_code="""
    $output.out = $p;
    """,
)

TIME = NodeSpec(
    id='time',
    display_name='Time',
    category='Inputs',
    description='Seconds since playback started',
    outputs=[PortSpec('out', 'float')],
    main_code="""
    $output.out = $time;
    """,
)

RESOLUTION = NodeSpec(
    id='resolution',
    display_name='Resolution',
    category='Inputs',
    description='Viewport size in pixels',
    outputs=[PortSpec('out', 'vec2')],
    main_code="""
    $output.out = $resolution;
    """,
)

FRAGMENT_COORDINATES = NodeSpec(
    id='fragment-coordinates',
    display_name='Fragment Coordinates',
    category='Inputs',
    description='Window-space pixel coordinates (gl_FragCoord.xy)',
    outputs=[PortSpec('out', 'vec2')],
    main_code="""
    $output.out = gl_FragCoord.xy;
    """,
)

CONSTANT_FLOAT = NodeSpec(
    id='constant-float',
    display_name='Constant Float',
    category='Inputs',
    outputs=[PortSpec('out', 'float')],
    parameters={'value': _constant_param(0.5)},
    main_code="""
    $output.out = $param.value;
    """,
)

CONSTANT_VEC2 = NodeSpec(
    id='constant-vec2',
    display_name='Constant Vec2',
    category='Inputs',
    outputs=[PortSpec('out', 'vec2')],
    parameters={'x': _constant_param(), 'y': _constant_param()},
    main_code="""
    $output.out = vec2($param.x, $param.y);
    """,
)

CONSTANT_VEC3 = NodeSpec(
    id='constant-vec3',
    display_name='Constant Vec3',
    category='Inputs',
    outputs=[PortSpec('out', 'vec3')],
    parameters={'x': _constant_param(), 'y': _constant_param(), 'z': _constant_param()},
    main_code="""
    $output.out = vec3($param.x, $param.y, $param.z);
    """,
)

NODE_SPECS = [
    UV_COORDINATES,
    TIME,
    RESOLUTION,
    FRAGMENT_COORDINATES,
    CONSTANT_FLOAT,
    CONSTANT_VEC2,
    CONSTANT_VEC3,
]
