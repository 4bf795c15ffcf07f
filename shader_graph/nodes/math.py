# Math Nodes

from ..ir.graph import NodeSpec, ParameterSpec, PortSpec


def _binary(node_id, display_name, operator):
    return NodeSpec(
        id=node_id,
        display_name=display_name,
        category='Math',
        inputs=[PortSpec('a', 'float'), PortSpec('b', 'float')],
        outputs=[PortSpec('out', 'float')],
        main_code=f"""
    $output.out = $input.a {operator} $input.b;
    """,
    )


ADD = _binary('add', 'Add', '+')
MULTIPLY = _binary('multiply', 'Multiply', '*')

ONE_MINUS = NodeSpec(
    id='one-minus',
    display_name='One Minus',
    category='Math',
    description='1.0 - x',
    inputs=[PortSpec('in', 'float')],
    outputs=[PortSpec('out', 'float')],
    main_code="""
    $output.out = 1.0 - $input.in;
    """,
)

# Ranges are parameters so they can be driven by parameter wires
REMAP = NodeSpec(
    id='remap',
    display_name='Remap',
    category='Math',
    description='Linearly maps [inMin, inMax] onto [outMin, outMax]',
    inputs=[PortSpec('in', 'float')],
    outputs=[PortSpec('out', 'float')],
    parameters={
        'inMin': ParameterSpec('float', default=0.0),
        'inMax': ParameterSpec('float', default=1.0),
        'outMin': ParameterSpec('float', default=0.0),
        'outMax': ParameterSpec('float', default=1.0),
    },
    main_code="""
    float span = $param.inMax - $param.inMin;
    float t = abs(span) < 1e-6 ? 0.0 : ($input.in - $param.inMin) / span;
    $output.out = mix($param.outMin, $param.outMax, t);
    """,
)

NODE_SPECS = [ADD, MULTIPLY, ONE_MINUS, REMAP]
