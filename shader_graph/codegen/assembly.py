# Shader Assembly
# Final-output resolution and the fixed fragment shader skeleton.

from dataclasses import dataclass
from string import Template
from typing import Iterable, Optional

from ..ir.types import DataType
from .coercion import to_color
from .context import GenerationState
from .naming import output_port_names

BLACK = "vec3(0.0)"

SHADER_SKELETON = Template("""\
$version
$precision

// Global uniforms
uniform vec2 $resolution;
uniform float $time;

$uniforms

$declarations

$functions

out vec4 $frag_output;

void main() {
  vec2 uv = gl_FragCoord.xy / $resolution.xy;
  vec2 $coord = (uv * 2.0 - 1.0) * vec2($resolution.x / $resolution.y, 1.0);

$main_code
  $frag_output = vec4($final_color, 1.0);
}
""")


@dataclass
class FinalOutput:
    expression: str
    node_id: Optional[str] = None


def find_final_output_node(state: GenerationState) -> Optional[str]:
    """
    Id of the designated sink, if any.

    With several sinks, the first one without outgoing connections wins,
    else the latest in execution order.
    """
    config = state.config
    sinks = [
        node for node in state.graph.nodes
        if node.type == config.sink_node_type and state.catalog.get(node.type) is not None
    ]
    if not sinks:
        return None
    if len(sinks) == 1:
        return sinks[0].id

    sources = state.graph.source_node_ids()
    for node in sinks:
        if node.id not in sources:
            return node.id

    def order_key(node):
        position = state.position(node.id)
        return -1 if position is None else position

    return max(sinks, key=order_key).id


def _sink_color(state: GenerationState, sink_id: str) -> str:
    spec = state.spec_of(sink_id)
    port = state.config.sink_input_port
    if spec.input(port) is None and spec.inputs:
        port = spec.inputs[0].name

    wires = [c for c in state.graph.data_wires_to(sink_id) if c.target_port == port]
    if not wires:
        state.diagnostics.warn(f"Output node {sink_id} has nothing connected; rendering black")
        return BLACK

    conn = wires[-1]
    source_spec = state.spec_of(conn.source_node_id)
    var = state.variable_names.lookup(conn.source_node_id, conn.source_port)
    if source_spec is None or var is None:
        state.diagnostics.warn(
            f"Output node {sink_id} reads unknown {conn.source_node_id}.{conn.source_port}; rendering black"
        )
        return BLACK

    source_port = source_spec.output(conn.source_port)
    dtype = source_port.type if source_port is not None else DataType.FLOAT
    return to_color(var, dtype)


def _port_types(state: GenerationState, node_id: str):
    """(port name, type) pairs for the declared variables of a node."""
    node = state.node(node_id)
    spec = state.spec_of(node_id)
    if node is None or spec is None:
        return []
    ports = state.variable_names.ports(node_id)
    pairs = []
    for name in output_port_names(node, spec, state.config):
        if name not in ports:
            continue
        port = spec.output(name)
        pairs.append((name, port.type if port is not None else DataType.FLOAT))
    return pairs


def _pick_port(pairs):
    for name, dtype in pairs:
        if name == 'out':
            return name, dtype
    return pairs[0]


def _fallback_color(state: GenerationState) -> FinalOutput:
    """Last colored node in execution order, else the last node with any output."""
    order = list(reversed(state.execution_order))

    for node_id in order:
        colored = [(n, t) for n, t in _port_types(state, node_id) if t.is_color()]
        if colored:
            name, dtype = _pick_port(colored)
            var = state.variable_names.lookup(node_id, name)
            return FinalOutput(to_color(var, dtype), node_id)

    for node_id in order:
        pairs = [(n, t) for n, t in _port_types(state, node_id) if t != DataType.BOOL]
        if pairs:
            name, dtype = _pick_port(pairs)
            var = state.variable_names.lookup(node_id, name)
            return FinalOutput(to_color(var, dtype), node_id)

    state.diagnostics.warn("No node produces a color; rendering black")
    return FinalOutput(BLACK)


def resolve_final_output(state: GenerationState) -> FinalOutput:
    sink_id = find_final_output_node(state)
    if sink_id is not None:
        return FinalOutput(_sink_color(state, sink_id), sink_id)
    return _fallback_color(state)


def uniform_declarations(uniforms: Iterable) -> str:
    """Sorted, deduplicated `uniform <type> <name>;` lines."""
    lines = {f"uniform {u.glsl_type} {u.name};" for u in uniforms}
    return '\n'.join(sorted(lines))


def assemble(state: GenerationState, uniforms: str, declarations: str, functions: str,
             main_code: str, final_color: str) -> str:
    config = state.config
    return SHADER_SKELETON.substitute(
        version=config.glsl_version,
        precision=config.precision,
        resolution=config.resolution_uniform,
        time=config.time_uniform,
        coord=config.coord_var,
        frag_output=config.frag_output,
        uniforms=uniforms,
        declarations=declarations,
        functions=functions,
        main_code=main_code,
        final_color=final_color,
    )
