import unittest

from builders import graph, make_state, node, param_wire, wire
from shader_graph.nodes import default_catalog
from shader_graph.planner.specialization import (
    freeze_plan, plan_for_state, plan_function_specialization,
)
from shader_graph.planner.uniforms import (
    allocate_uniforms, find_used_uniforms, uniform_metadata,
)


class TestUniformAllocation(unittest.TestCase):
    def setUp(self):
        self.catalog = default_catalog()

    def test_numeric_params_get_uniforms(self):
        g = graph([node("fbm", "fbm-noise"), node("c", "constant-float")])
        names = allocate_uniforms(g, self.catalog)
        self.assertEqual(names["fbm.fbmScale"], "ufbmFbmScale")
        self.assertEqual(names["c.value"], "ucValue")

    def test_arrays_and_strings_skipped(self):
        g = graph([node("cm", "color-map"), node("sw", "swizzle")])
        names = allocate_uniforms(g, self.catalog)
        self.assertIn("cm.stopCount", names)
        self.assertNotIn("cm.colorStops", names)
        self.assertNotIn("sw.swizzle", names)

    def test_override_wired_param_skipped(self):
        g = graph(
            [node("c", "constant-float"), node("r", "remap"), node("r2", "remap", modes={"inMin": "add"})],
            [param_wire("c", "out", "r", "inMin"), param_wire("c", "out", "r2", "inMin")],
        )
        names = allocate_uniforms(g, self.catalog)
        self.assertNotIn("r.inMin", names)
        self.assertIn("r.inMax", names)
        self.assertEqual(names["r2.inMin"], "ur2InMin")

    def test_unknown_input_mode_treated_as_override(self):
        g = graph(
            [node("c", "constant-float"), node("r", "remap", modes={"inMin": "divide"})],
            [param_wire("c", "out", "r", "inMin")],
        )
        names = allocate_uniforms(g, self.catalog)
        self.assertNotIn("r.inMin", names)
        self.assertIn("r.inMax", names)

    def test_audio_outputs_and_runtime_params(self):
        g = graph([
            node("af", "audio-file-input"),
            node("an", "audio-analyzer", frequencyBands=[[20, 200], [200, 2000]]),
        ])
        names = allocate_uniforms(g, self.catalog)
        self.assertEqual(names["af.duration"], "uafDuration")
        self.assertEqual(names["an.remap1"], "uanRemap1")
        self.assertNotIn("an.band2", names)
        for runtime in ("af.filePath", "af.autoPlay", "an.smoothing", "an.fftSize", "an.band0RemapInMin"):
            self.assertNotIn(runtime, names)

    def test_find_used_uniforms_matches_whole_words(self):
        names = {"a.x": "uaX", "b.y": "uaXY"}
        self.assertEqual(find_used_uniforms("v = uaXY * 2.0;", names), {"uaXY"})
        self.assertEqual(find_used_uniforms("v = uaX;", names), {"uaX"})


class TestUniformMetadata(unittest.TestCase):
    def setUp(self):
        self.catalog = default_catalog()

    def test_defaults_and_types(self):
        g = graph([node("c", "constant-float", value=0.25), node("cm", "color-map")])
        names = allocate_uniforms(g, self.catalog)
        by_name = {u.name: u for u in uniform_metadata(g, self.catalog, names)}

        self.assertEqual(by_name["ucValue"].default_value, 0.25)
        self.assertEqual(by_name["ucValue"].glsl_type, "float")
        self.assertEqual(by_name["ucmStopCount"].default_value, 2)
        self.assertEqual(by_name["ucmStopCount"].glsl_type, "int")
        self.assertEqual(by_name["ucmStopCount"].param_name, "stopCount")

    def test_unused_params_dropped_audio_kept(self):
        g = graph([node("c", "constant-float"), node("af", "audio-file-input")])
        names = allocate_uniforms(g, self.catalog)
        uniforms = uniform_metadata(g, self.catalog, names, used=set())

        self.assertNotIn("ucValue", {u.name for u in uniforms})
        audio = [u for u in uniforms if u.is_audio_output]
        self.assertEqual({u.param_name for u in audio}, {"currentTime", "duration", "isPlaying"})
        self.assertTrue(all(u.glsl_type == "float" for u in audio))

    def test_bad_value_falls_back_to_zero(self):
        g = graph([node("c", "constant-float", value="oops")])
        names = allocate_uniforms(g, self.catalog)
        [uniform] = uniform_metadata(g, self.catalog, names)
        self.assertEqual(uniform.default_value, 0.0)

    def test_int_default_rounds_half_up(self):
        g = graph([node("cm", "color-map", stopCount=2.7), node("cm2", "color-map", stopCount=3.5)])
        names = allocate_uniforms(g, self.catalog)
        by_name = {u.name: u for u in uniform_metadata(g, self.catalog, names)}
        self.assertEqual(by_name["ucmStopCount"].default_value, 3)
        self.assertEqual(by_name["ucm2StopCount"].default_value, 4)


class TestSpecialization(unittest.TestCase):
    def setUp(self):
        self.catalog = default_catalog()

    def _turbulence_graph(self):
        return graph(
            [
                node("uv", "uv-coordinates"),
                node("c", "constant-float", value=0.25),
                node("t1", "turbulence"),
                node("t2", "turbulence"),
            ],
            [
                wire("uv", "out", "t1", "in"),
                wire("uv", "out", "t2", "in"),
                param_wire("c", "out", "t2", "turbulenceStrength"),
            ],
        )

    def test_differing_helpers_are_renamed(self):
        plan = plan_for_state(make_state(self._turbulence_graph(), self.catalog))
        self.assertNotIn("t1", plan)
        self.assertEqual(plan["t2"], {"noise2D": "noise2D_t2", "turbulence": "turbulence_t2"})

    def test_identical_helpers_share(self):
        g = graph([node("f1", "fbm-noise", fbmScale=1.0), node("f2", "fbm-noise", fbmScale=3.0)])
        self.assertEqual(plan_for_state(make_state(g, self.catalog)), {})

    def test_planning_adds_no_warnings(self):
        state = make_state(self._turbulence_graph(), self.catalog)
        plan_for_state(state)
        self.assertEqual(state.diagnostics.warnings, [])

    def test_standalone_entry_point(self):
        g = self._turbulence_graph()
        self.assertEqual(
            plan_function_specialization(g, self.catalog),
            plan_for_state(make_state(g, self.catalog)),
        )

    def test_suffix_is_sanitized(self):
        g = graph(
            [node("c", "constant-float"), node("t-1", "turbulence"), node("t-2", "turbulence")],
            [param_wire("c", "out", "t-2", "turbulenceStrength")],
        )
        plan = plan_function_specialization(g, self.catalog)
        self.assertEqual(plan["t-2"]["turbulence"], "turbulence_t_2")

    def test_freeze_plan_copies(self):
        source = {"a": {"f": "f_a"}}
        frozen = freeze_plan(source)
        source["a"]["f"] = "changed"
        self.assertEqual(frozen["a"]["f"], "f_a")


if __name__ == '__main__':
    unittest.main()
