# Utility Nodes
# Vector reshaping: swizzle, split, combine.

from ..ir.graph import NodeSpec, ParameterSpec, PortSpec


# The body below is never emitted: GLSL has no string comparison, so the
# swizzle emitter resolves the pattern at compile time.
SWIZZLE = NodeSpec(
    id='swizzle',
    display_name='Swizzle',
    category='Utility',
    description='Reorders vector components (xy, zyx, wzyx, rgba, ...)',
    inputs=[PortSpec('in', 'vec4')],
    outputs=[PortSpec('out', 'vec4')],
    parameters={'swizzle': ParameterSpec('string', default='xyzw')},
    main_code="""
    vec4 v = $input.in;
    $output.out = v;
    """,
)

SPLIT_VECTOR = NodeSpec(
    id='split-vector',
    display_name='Split Vector',
    category='Utility',
    inputs=[PortSpec('in', 'vec4')],
    outputs=[
        PortSpec('x', 'float'),
        PortSpec('y', 'float'),
        PortSpec('z', 'float'),
        PortSpec('w', 'float'),
    ],
    main_code="""
    vec4 v = $input.in;
    $output.x = v.x;
    $output.y = v.y;
    $output.z = v.z;
    $output.w = v.w;
    """,
)

COMBINE_VECTOR = NodeSpec(
    id='combine-vector',
    display_name='Combine Vector',
    category='Utility',
    inputs=[
        PortSpec('x', 'float'),
        PortSpec('y', 'float'),
        PortSpec('z', 'float'),
        PortSpec('w', 'float'),
    ],
    outputs=[PortSpec('out', 'vec4')],
    parameters={'outputType': ParameterSpec('int', default=2, min=2, max=4)},
    main_code="""
    if ($param.outputType == 2) {
      $output.out = vec4($input.x, $input.y, 0.0, 1.0);
    } else if ($param.outputType == 3) {
      $output.out = vec4($input.x, $input.y, $input.z, 1.0);
    } else {
      $output.out = vec4($input.x, $input.y, $input.z, $input.w);
    }
    """,
)

NODE_SPECS = [SWIZZLE, SPLIT_VECTOR, COMBINE_VECTOR]
