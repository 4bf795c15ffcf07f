"""
Pytest configuration and shared fixtures for Shader Graph tests.

This file provides:
1. Shared fixtures for catalogs, compilers and small graphs
2. Helper functions for common assertions on generated GLSL

Usage:
    pytest tests/ -v
"""

import os
import re
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from builders import graph, node, param_wire, wire  # noqa: E402


# =============================================================================
# PYTEST FIXTURES
# =============================================================================

@pytest.fixture
def catalog():
    """A fresh catalog holding every built-in node type."""
    from shader_graph.nodes import default_catalog
    return default_catalog()


@pytest.fixture
def compiler(catalog):
    from shader_graph.compiler import ShaderGraphCompiler
    return ShaderGraphCompiler(catalog=catalog)


@pytest.fixture
def uv_to_output_graph():
    """
    uv -> fbm -> output

    The fbm float is promoted to the sink's vec3.
    """
    return graph(
        [node('uv', 'uv-coordinates'), node('fbm', 'fbm-noise'), node('out', 'final-output')],
        [wire('uv', 'out', 'fbm', 'in'), wire('fbm', 'out', 'out', 'in')],
    )


@pytest.fixture
def two_turbulence_graph():
    """
    Two turbulence nodes; only t2 has its strength wired.

    Their helper functions render differently, so t2 gets its own copies.
    """
    return graph(
        [
            node('uv', 'uv-coordinates'),
            node('c', 'constant-float', value=0.25),
            node('t1', 'turbulence'),
            node('t2', 'turbulence'),
        ],
        [
            wire('uv', 'out', 't1', 'in'),
            wire('uv', 'out', 't2', 'in'),
            param_wire('c', 'out', 't2', 'turbulenceStrength'),
        ],
    )


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def assert_declared(source, glsl_type, name):
    """Assert a global `<type> <name> = ...;` declaration exists."""
    pattern = rf'^{re.escape(glsl_type)} {re.escape(name)} = '
    assert re.search(pattern, source, re.MULTILINE), f"{glsl_type} {name} is not declared"


def assert_defined_once(source, signature_prefix):
    """Assert a helper function definition appears exactly once."""
    count = source.count(signature_prefix)
    assert count == 1, f"{signature_prefix!r} defined {count} times"


def main_body(source):
    """Text of main() between the coordinate setup and the final write."""
    start = source.index('void main() {')
    return source[start:]
