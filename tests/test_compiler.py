"""
End-to-end compiles through ShaderGraphCompiler.
"""

import re
import unittest

import pytest

from builders import graph, node, param_wire, wire
from conftest import assert_declared, assert_defined_once, main_body
from shader_graph import (
    CompilationResult, ShaderGraphCompiler, UnsupportedConversionError, compile_graph,
)
from shader_graph.ir.graph import NodeSpec, ParameterSpec, PortSpec
from shader_graph.nodes import NodeCatalog, default_catalog

_DECLARATION = re.compile(r'^(?:float|int|bool|vec2|vec3|vec4) (node_\w+) = ', re.MULTILINE)


class TestCompile(unittest.TestCase):
    def setUp(self):
        self.compiler = ShaderGraphCompiler()
        self.graph = graph(
            [
                node("uv", "uv-coordinates"),
                node("tb", "turbulence"),
                node("fbm", "fbm-noise"),
                node("cm", "color-map", colorStops=[0, 0, 0.2, 1, 0.8, 0.3], stopCount=2),
                node("out", "final-output"),
            ],
            [
                wire("uv", "out", "tb", "in"),
                wire("tb", "out", "fbm", "in"),
                wire("fbm", "out", "cm", "in"),
                wire("cm", "out", "out", "in"),
            ],
        )
        self.order = ["uv", "tb", "fbm", "cm", "out"]

    def test_success(self):
        result = self.compiler.compile(self.graph, self.order)
        self.assertIsInstance(result, CompilationResult)
        self.assertTrue(result.success)
        self.assertEqual(result.errors, [])
        self.assertEqual(result.execution_order, tuple(self.order))
        self.assertEqual(result.final_output_node_id, "out")
        self.assertIn("fragColor = vec4(node_cm_out, 1.0);", result.shader_source)

    def test_deterministic(self):
        a = self.compiler.compile(self.graph, self.order).shader_source
        b = ShaderGraphCompiler().compile(self.graph, self.order).shader_source
        self.assertEqual(a, b)

    def test_declared_names_unique(self):
        source = self.compiler.compile(self.graph, self.order).shader_source
        names = _DECLARATION.findall(source)
        self.assertTrue(names)
        self.assertEqual(len(names), len(set(names)))

    def test_blocks_in_execution_order(self):
        body = main_body(self.compiler.compile(self.graph, self.order).shader_source)
        positions = [body.index(f"({node_id})") for node_id in ("uv", "tb", "fbm", "cm")]
        self.assertEqual(positions, sorted(positions))

    def test_array_inlined_in_block(self):
        body = main_body(self.compiler.compile(self.graph, self.order).shader_source)
        self.assertIn("const float array_cm_colorStops[6] = float[6](", body)
        self.assertIn("array_cm_colorStops[i0 * 3]", body)

    def test_declared_uniforms_match_metadata(self):
        result = self.compiler.compile(self.graph, self.order)
        for uniform in result.uniforms:
            self.assertIn(f"uniform {uniform.glsl_type} {uniform.name};", result.shader_source)
        self.assertIn("ufbmFbmScale", {u.name for u in result.uniforms})
        self.assertEqual(result.uniform_names["cm.stopCount"], "ucmStopCount")

    def test_supplied_uniform_table_used(self):
        names = {"fbm.fbmScale": "uSharedScale"}
        result = self.compiler.compile(self.graph, self.order, uniform_names=names)
        self.assertIn("uniform float uSharedScale;", result.shader_source)
        self.assertNotIn("ufbmFbmGain", result.shader_source)
        self.assertEqual([u.name for u in result.uniforms], ["uSharedScale"])

    def test_compile_graph_wrapper(self):
        result = compile_graph(self.graph, self.order)
        self.assertEqual(result.shader_source, self.compiler.compile(self.graph, self.order).shader_source)


class TestDiagnostics(unittest.TestCase):
    def test_empty_graph_renders_black(self):
        result = ShaderGraphCompiler().compile(graph([]), [])
        self.assertTrue(result.success)
        self.assertIn("fragColor = vec4(vec3(0.0), 1.0);", result.shader_source)
        self.assertTrue(any("empty" in w for w in result.warnings))

    def test_disconnected_node_warned(self):
        g = graph(
            [node("t", "time"), node("c", "constant-vec3"), node("o", "final-output")],
            [wire("c", "out", "o", "in")],
        )
        result = ShaderGraphCompiler().compile(g, ["t", "c", "o"])
        self.assertTrue(any("t (time) is not connected" in w for w in result.warnings))

    def test_warnings_deduplicated(self):
        g = graph([node("x", "no-such-node"), node("c", "constant-vec3")])
        result = ShaderGraphCompiler().compile(g, ["x", "c"])
        self.assertEqual(len(result.warnings), len(set(result.warnings)))

    def test_unknown_nodes_do_not_abort(self):
        g = graph(
            [node("x", "no-such-node"), node("c", "constant-vec3"), node("o", "final-output")],
            [wire("x", "out", "o", "in"), wire("c", "out", "o", "in")],
        )
        result = ShaderGraphCompiler().compile(g, ["x", "c", "o"])
        self.assertTrue(result.success)
        self.assertIn("fragColor = vec4(node_c_out, 1.0);", result.shader_source)

    def test_unknown_input_mode_does_not_abort(self):
        g = graph(
            [node("c", "constant-float"), node("r", "remap", modes={"inMin": "divide"}), node("o", "final-output")],
            [param_wire("c", "out", "r", "inMin"), wire("r", "out", "o", "in")],
        )
        result = compile_graph(g, ["c", "r", "o"])
        self.assertTrue(result.success)
        self.assertIn("float span = urInMax - node_c_out;", result.shader_source)
        self.assertNotIn("urInMin", result.shader_source)
        self.assertTrue(any("Unknown input mode 'divide'" in w for w in result.warnings))

    def test_non_numeric_vec4_param_does_not_abort(self):
        tint = NodeSpec(
            id="tint", display_name="Tint", category="Test",
            outputs=[PortSpec("out", "vec4")],
            parameters={"color": ParameterSpec("vec4", default=[1.0, 1.0, 1.0, 1.0])},
            main_code="$output.out = $param.color;",
        )
        catalog = NodeCatalog(list(default_catalog()) + [tint])
        g = graph(
            [node("t", "tint", color="#ff0000"), node("o", "final-output")],
            [wire("t", "out", "o", "in")],
        )
        result = ShaderGraphCompiler(catalog=catalog).compile(g, ["t", "o"], uniform_names={})
        self.assertTrue(result.success)
        self.assertIn("node_t_out = vec4(0.0);", result.shader_source)


class TestParameterWiring(unittest.TestCase):
    def test_multiply_mode_end_to_end(self):
        g = graph(
            [
                node("t", "time"),
                node("r", "remap", modes={"outMax": "multiply"}, outMax=2.0),
                node("o", "final-output"),
            ],
            [param_wire("t", "out", "r", "outMax"), wire("r", "out", "o", "in")],
        )
        result = ShaderGraphCompiler().compile(g, ["t", "r", "o"])
        self.assertIn("(urOutMax * node_t_out)", result.shader_source)
        self.assertIn("uniform float urOutMax;", result.shader_source)
        by_name = {u.name: u for u in result.uniforms}
        self.assertEqual(by_name["urOutMax"].default_value, 2.0)

    def test_override_mode_has_no_uniform(self):
        g = graph(
            [node("t", "time"), node("r", "remap"), node("o", "final-output")],
            [param_wire("t", "out", "r", "inMax"), wire("r", "out", "o", "in")],
        )
        result = ShaderGraphCompiler().compile(g, ["t", "r", "o"])
        self.assertNotIn("urInMax", result.shader_source)
        self.assertIn("node_t_out - urInMin", result.shader_source)


class TestFatalConversion(unittest.TestCase):
    def test_bool_wire_aborts(self):
        flag = NodeSpec(
            id="flag", display_name="Flag", category="Test",
            outputs=[PortSpec("out", "bool")],
            main_code="$output.out = true;",
        )
        catalog = NodeCatalog(list(default_catalog()) + [flag])
        g = graph(
            [node("f", "flag"), node("m", "one-minus"), node("o", "final-output")],
            [wire("f", "out", "m", "in"), wire("m", "out", "o", "in")],
        )
        with self.assertRaises(UnsupportedConversionError) as cm:
            ShaderGraphCompiler(catalog=catalog).compile(g, ["f", "m", "o"])
        self.assertEqual(cm.exception.node_id, "m")


# =============================================================================
# Fixture-based checks
# =============================================================================

def test_fbm_promoted_to_color(compiler, uv_to_output_graph):
    result = compiler.compile(uv_to_output_graph, ["uv", "fbm", "out"])
    assert "fragColor = vec4(vec3(node_fbm_out), 1.0);" in result.shader_source
    assert_declared(result.shader_source, "float", "node_fbm_out")
    assert_declared(result.shader_source, "vec2", "node_uv_out")


def test_shared_helpers_defined_once(compiler):
    g = graph(
        [node("uv", "uv-coordinates"), node("f1", "fbm-noise"), node("f2", "fbm-noise", fbmScale=5.0)],
        [wire("uv", "out", "f1", "in"), wire("uv", "out", "f2", "in")],
    )
    source = compiler.compile(g, ["uv", "f1", "f2"]).shader_source
    assert_defined_once(source, "float fbm2_standard(")
    assert_defined_once(source, "float vnoise(")
    assert "uf2FbmScale" in source


def test_specialized_helpers_isolated(compiler, two_turbulence_graph):
    result = compiler.compile(two_turbulence_graph, ["uv", "c", "t1", "t2"])
    source = result.shader_source

    assert_defined_once(source, "vec2 turbulence(")
    assert_defined_once(source, "vec2 turbulence_t2(")
    assert_defined_once(source, "vec2 noise2D_t2(")
    assert "q += offset * ut1TurbulenceStrength / scale;" in source
    assert "q += offset * node_c_out / scale;" in source
    assert "noise2D_t2(q * scale" in source

    body = main_body(source)
    t1_block = body[body.index("(t1)"):body.index("(t2)")]
    t2_block = body[body.index("(t2)"):]
    assert "turbulence(" in t1_block and "turbulence_t2(" not in t1_block
    assert "turbulence_t2(" in t2_block

    assert dict(result.function_name_map["t2"]) == {"noise2D": "noise2D_t2", "turbulence": "turbulence_t2"}


def test_supplied_function_map_used(compiler, two_turbulence_graph):
    plan = {"t1": {"turbulence": "turbulence_custom", "noise2D": "noise2D_custom"}}
    source = compiler.compile(two_turbulence_graph, ["uv", "c", "t1", "t2"], function_name_map=plan).shader_source
    assert "vec2 turbulence_custom(" in source
    assert "turbulence_t2" not in source


def test_audio_graph(compiler):
    g = graph(
        [
            node("af", "audio-file-input"),
            node("an", "audio-analyzer", frequencyBands=[[20, 250], [250, 4000]]),
            node("o", "final-output"),
        ],
        [wire("af", "currentTime", "an", "audioFile"), wire("an", "remap1", "o", "in")],
    )
    result = compiler.compile(g, ["af", "an", "o"])
    source = result.shader_source

    assert "uniform float uanRemap1;" in source
    assert "node_an_remap1 = uanRemap1;" in source
    assert "fragColor = vec4(vec3(node_an_remap1), 1.0);" in source
    assert "uanBand2" not in source

    audio = {u.name for u in result.uniforms if u.is_audio_output}
    assert audio == {
        "uafCurrentTime", "uafDuration", "uafIsPlaying",
        "uanBand0", "uanBand1", "uanRemap0", "uanRemap1",
    }


@pytest.mark.parametrize("pattern,expected", [
    ("x", "node_sw_out = vec4(node_cv_out.x, node_cv_out.x, node_cv_out.x, 1.0);"),
    ("xy", "node_sw_out = vec4(node_cv_out.xy, 0.0, 1.0);"),
    ("zyx", "node_sw_out = vec4(node_cv_out.zyx, 1.0);"),
    ("wzyx", "node_sw_out = node_cv_out.wzyx;"),
])
def test_swizzle_patterns(compiler, pattern, expected):
    g = graph(
        [node("cv", "combine-vector"), node("sw", "swizzle", swizzle=pattern), node("o", "final-output")],
        [wire("cv", "out", "sw", "in"), wire("sw", "out", "o", "in")],
    )
    source = compiler.compile(g, ["cv", "sw", "o"]).shader_source
    assert expected in source
    assert "fragColor = vec4(node_sw_out.rgb, 1.0);" in source


if __name__ == '__main__':
    unittest.main()
