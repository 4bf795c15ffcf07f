# Audio Nodes
# Outputs are uploaded as uniforms by the host's audio runtime every frame.
# The generator copies them into the node's output variables instead of
# expanding a template.

from ..config import DEFAULT_FREQUENCY_BANDS
from ..ir.graph import NodeSpec, ParameterSpec, PortSpec


def _band_remap_params(band_count):
    params = {}
    for i in range(band_count):
        params[f'band{i}RemapInMin'] = ParameterSpec('float', default=0.0)
        params[f'band{i}RemapInMax'] = ParameterSpec('float', default=1.0)
        params[f'band{i}RemapOutMin'] = ParameterSpec('float', default=0.0)
        params[f'band{i}RemapOutMax'] = ParameterSpec('float', default=1.0)
    return params


AUDIO_FILE_INPUT = NodeSpec(
    id='audio-file-input',
    display_name='Audio File',
    category='Audio',
    description='Playback state of a loaded audio file',
    outputs=[
        PortSpec('currentTime', 'float', label='Current Time'),
        PortSpec('duration', 'float', label='Duration'),
        PortSpec('isPlaying', 'float', label='Is Playing'),
    ],
    parameters={
        'filePath': ParameterSpec('string', default=''),
        'autoPlay': ParameterSpec('int', default=0, min=0, max=1),
    },
)

_BAND_COUNT = len(DEFAULT_FREQUENCY_BANDS)

AUDIO_ANALYZER = NodeSpec(
    id='audio-analyzer',
    display_name='Audio Analyzer',
    category='Audio',
    description='Energy of user-defined frequency bands, raw and remapped',
    inputs=[PortSpec('audioFile', 'float', label='Audio File')],
    outputs=(
        [PortSpec(f'band{i}', 'float', label=f'Band {i + 1}') for i in range(_BAND_COUNT)]
        + [PortSpec(f'remap{i}', 'float', label=f'Remap {i + 1}') for i in range(_BAND_COUNT)]
    ),
    parameters={
        'frequencyBands': ParameterSpec('array', default=[list(band) for band in DEFAULT_FREQUENCY_BANDS]),
        'smoothing': ParameterSpec('float', default=0.8, min=0.0, max=1.0, step=0.01),
        'fftSize': ParameterSpec('int', default=4096, min=256, max=8192),
        **_band_remap_params(_BAND_COUNT),
    },
)

NODE_SPECS = [AUDIO_FILE_INPUT, AUDIO_ANALYZER]
