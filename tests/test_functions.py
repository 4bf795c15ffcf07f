import unittest

from shader_graph.codegen.functions import (
    deduplicate_functions, extract_functions, function_names, rename_calls,
)

HELPERS = """
float square(float x) {
  return x * x;
}

vec2 wobble(in vec2 q, float t) {
  if (t > 0.0) {
    q += vec2(square(t));
  }
  return q;
}
"""


class TestExtractFunctions(unittest.TestCase):
    def test_split_with_nested_braces(self):
        funcs = extract_functions(HELPERS)
        self.assertEqual([f.name for f in funcs], ["square", "wobble"])
        self.assertTrue(funcs[1].text.startswith("vec2 wobble("))
        self.assertTrue(funcs[1].text.endswith("return q;\n}"))

    def test_signature(self):
        wobble = extract_functions(HELPERS)[1]
        self.assertEqual(wobble.param_types, ("vec2", "float"))
        self.assertEqual(wobble.signature, "vec2_wobble_vec2_float")

    def test_prototypes_skipped(self):
        funcs = extract_functions("float square(float x);\n" + HELPERS)
        self.assertEqual([f.name for f in funcs], ["square", "wobble"])

    def test_function_names(self):
        self.assertEqual(function_names(HELPERS), ["square", "wobble"])
        self.assertEqual(function_names(None), [])


class TestDeduplicate(unittest.TestCase):
    def test_first_definition_wins(self):
        first = "float f(float x) { return x; }"
        second = "float f(float y) { return 2.0 * y; }"
        [kept] = deduplicate_functions([first, second])
        self.assertEqual(kept.text, first)

    def test_overloads_kept(self):
        funcs = deduplicate_functions([
            "float f(float x) { return x; }",
            "float f(vec2 x) { return x.x; }",
        ])
        self.assertEqual(len(funcs), 2)


class TestRenameCalls(unittest.TestCase):
    def test_only_calls_renamed(self):
        code = "float turbulenceTime = 1.0;\nvec2 q = turbulence (p, turbulenceTime, 3);"
        renamed = rename_calls(code, {"turbulence": "turbulence_t2"})
        self.assertEqual(
            renamed,
            "float turbulenceTime = 1.0;\nvec2 q = turbulence_t2(p, turbulenceTime, 3);",
        )

    def test_definitions_renamed(self):
        renamed = rename_calls(HELPERS, {"square": "square_b"})
        self.assertIn("float square_b(float x)", renamed)
        self.assertIn("vec2(square_b(t))", renamed)


if __name__ == '__main__':
    unittest.main()
