"""
Compiler configuration.

Everything the generator needs to know about the target skeleton and the
node types it treats specially lives here, so a caller targeting a
different skeleton only swaps the config.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple


# Node types whose templates produce their own values and never read $input
SELF_SUFFICIENT_NODE_TYPES = frozenset({
    'uv-coordinates',
    'time',
    'resolution',
    'fragment-coordinates',
    'constant-float',
    'constant-vec2',
    'constant-vec3',
})

# Used when an analyzer node carries no usable frequencyBands value
DEFAULT_FREQUENCY_BANDS = ((20, 120), (120, 300), (300, 4000), (4000, 20000))


@dataclass(frozen=True)
class CompilerConfig:
    glsl_version: str = "#version 300 es"
    precision: str = "precision highp float;"

    # Global identifiers provided by the skeleton
    time_uniform: str = "uTime"
    resolution_uniform: str = "uResolution"
    coord_var: str = "p"
    frag_output: str = "fragColor"

    # Decimal places used when inlining array parameters
    array_precision: int = 10

    # Node types the generator special-cases
    sink_node_type: str = "final-output"
    sink_input_port: str = "in"
    input_category: str = "Inputs"
    audio_category: str = "Audio"
    audio_file_node_type: str = "audio-file-input"
    audio_analyzer_node_type: str = "audio-analyzer"
    self_sufficient_node_types: FrozenSet[str] = field(default=SELF_SUFFICIENT_NODE_TYPES)
    default_frequency_bands: Tuple[Tuple[float, float], ...] = DEFAULT_FREQUENCY_BANDS

    # Parameters of audio nodes consumed by the audio runtime, never by the shader
    audio_runtime_parameters: FrozenSet[str] = field(default=frozenset({
        'filePath', 'autoPlay', 'frequencyBands', 'smoothing', 'fftSize',
    }))


DEFAULT_CONFIG = CompilerConfig()
