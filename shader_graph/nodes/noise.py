# Noise Nodes
# fBm value noise and domain-warping turbulence.

from ..ir.graph import NodeSpec, ParameterSpec, PortSpec

# 3-D value noise with smootherstep interpolation, output in [-1, 1]
VALUE_NOISE_GLSL = """
float hash11(float n) {
  return fract(sin(n) * 43758.5453);
}

float vnoise(vec3 q) {
  vec3 ip = floor(q);
  vec3 fp = fract(q);
  vec3 k = vec3(1.0, 57.0, 113.0);

  float n000 = hash11(dot(ip + vec3(0.0, 0.0, 0.0), k));
  float n100 = hash11(dot(ip + vec3(1.0, 0.0, 0.0), k));
  float n010 = hash11(dot(ip + vec3(0.0, 1.0, 0.0), k));
  float n110 = hash11(dot(ip + vec3(1.0, 1.0, 0.0), k));
  float n001 = hash11(dot(ip + vec3(0.0, 0.0, 1.0), k));
  float n101 = hash11(dot(ip + vec3(1.0, 0.0, 1.0), k));
  float n011 = hash11(dot(ip + vec3(0.0, 1.0, 1.0), k));
  float n111 = hash11(dot(ip + vec3(1.0, 1.0, 1.0), k));

  vec3 w = fp * fp * fp * (fp * (fp * 6.0 - 15.0) + 10.0);

  float x00 = mix(n000, n100, w.x);
  float x10 = mix(n010, n110, w.x);
  float x01 = mix(n001, n101, w.x);
  float x11 = mix(n011, n111, w.x);

  return mix(mix(x00, x10, w.y), mix(x01, x11, w.y), w.z) * 2.0 - 1.0;
}
"""

FBM_GLSL = VALUE_NOISE_GLSL + """
float fbm2_standard(vec2 uv, float t, float scale, int octaves, float lacunarity, float gain) {
  vec3 q = vec3(uv * scale, t);
  float amp = 1.0;
  float freq = 1.0;
  float sum = 0.0;

  for (int i = 0; i < 10; ++i) {
    if (i >= octaves) break;
    sum += amp * vnoise(q * freq);
    freq *= lacunarity;
    amp *= gain;
  }

  return sum * 0.5 + 0.5;
}
"""

# turbulence() reads the node's strength directly, so two turbulence nodes
# with different strength bindings render different helpers.
TURBULENCE_GLSL = """
vec2 noise2D(vec2 q) {
  return vec2(
    fract(sin(dot(q, vec2(12.9898, 78.233))) * 43758.5453),
    fract(sin(dot(q, vec2(12.9898, 78.233) + vec2(1.0))) * 43758.5453)
  );
}

vec2 turbulence(vec2 q, float t, int iterations) {
  int iterCount = max(iterations, 1);
  for (int i = 0; i < 8; i++) {
    if (i >= iterCount) break;
    float scale = max(pow(2.0, float(i)), 0.001);
    vec2 offset = noise2D(q * scale + t * 0.1) * 2.0 - 1.0;
    q += offset * $param.turbulenceStrength / scale;
  }
  return q;
}
"""


def _float(default, lo, hi, step=0.01, label=None):
    return ParameterSpec('float', default=default, min=lo, max=hi, step=step, label=label)


FBM_NOISE = NodeSpec(
    id='fbm-noise',
    display_name='fBm Noise',
    category='Noise',
    description='Fractal Brownian motion over 3-D value noise; time is the third axis. Output in [0, 1].',
    inputs=[PortSpec('in', 'vec2')],
    outputs=[PortSpec('out', 'float')],
    parameters={
        'fbmScale': _float(2.0, 0.1, 10.0, label='Scale'),
        'fbmOctaves': _float(4.0, 1.0, 10.0, step=1.0, label='Octaves'),
        'fbmLacunarity': _float(2.0, 1.0, 4.0, label='Lacunarity'),
        'fbmGain': _float(0.5, 0.1, 1.0, label='Gain'),
        'fbmTimeSpeed': _float(1.0, 0.0, 5.0, label='Time Speed'),
        'fbmIntensity': _float(1.0, 0.0, 2.0, label='Intensity'),
        'fbmTimeOffset': _float(0.0, -100.0, 100.0, step=0.05, label='Time Offset'),
    },
    functions=FBM_GLSL,
    main_code="""
    float aspectRatio = $resolution.x / $resolution.y;
    vec2 fbmUV = ($input.in - 0.5) * vec2(aspectRatio, 1.0);
    float fbmTime = ($time + $param.fbmTimeOffset) * $param.fbmTimeSpeed;
    int octaves = int($param.fbmOctaves);
    float feed = fbm2_standard(fbmUV, fbmTime, $param.fbmScale, octaves, $param.fbmLacunarity, $param.fbmGain);
    $output.out = feed * $param.fbmIntensity;
    """,
)

TURBULENCE = NodeSpec(
    id='turbulence',
    display_name='Turbulence',
    category='Noise',
    description='Multi-octave domain warping of coordinates',
    inputs=[PortSpec('in', 'vec2')],
    outputs=[PortSpec('out', 'vec2')],
    parameters={
        'turbulenceScale': _float(1.0, 0.1, 10.0, label='Scale'),
        'turbulenceStrength': _float(0.5, 0.0, 2.0, label='Strength'),
        'turbulenceIterations': ParameterSpec('int', default=3, min=1, max=8, step=1, label='Iterations'),
        'turbulenceTimeSpeed': _float(1.0, 0.0, 5.0, label='Time Speed'),
        'turbulenceTimeOffset': _float(0.0, -100.0, 100.0, step=0.05, label='Time Offset'),
    },
    functions=TURBULENCE_GLSL,
    main_code="""
    float turbulenceTime = ($time + $param.turbulenceTimeOffset) * $param.turbulenceTimeSpeed;
    $output.out = turbulence($input.in * $param.turbulenceScale, turbulenceTime, $param.turbulenceIterations);
    """,
)

NODE_SPECS = [FBM_NOISE, TURBULENCE]
