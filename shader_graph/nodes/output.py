# Output Nodes
# The sink marks where the final color comes from. It emits no code; the
# compiler reads its wired input during assembly.

from ..ir.graph import NodeSpec, PortSpec


FINAL_OUTPUT = NodeSpec(
    id='final-output',
    display_name='Final Output',
    category='Output',
    description='Marks the final color of the shader',
    inputs=[PortSpec('in', 'vec3')],
    outputs=[PortSpec('out', 'vec3')],
    main_code="""
    $output.out = $input.in;
    """,
)

NODE_SPECS = [FINAL_OUTPUT]
