# Helper Function Collection
# Renders each node's `functions` template, applies its rename table,
# splits the text into individual functions and keeps the first
# definition of every signature.

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

_FUNCTION_START = re.compile(
    r'\b(float|vec2|vec3|vec4|int|bool|void|mat2|mat3|mat4)\s+(\w+)\s*\('
)
_PARAM_TYPE = re.compile(r'^(?:(?:in|out|inout|const|highp|mediump|lowp)\s+)*(\w+)\s+\w+')


@dataclass(frozen=True)
class FunctionDef:
    return_type: str
    name: str
    param_types: tuple
    text: str

    @property
    def signature(self) -> str:
        return '_'.join((self.return_type, self.name) + self.param_types)


def rename_calls(code: str, renames: Mapping[str, str]) -> str:
    """Rewrite `name(` to `renamed(` for each entry; definitions included."""
    for original, specialized in renames.items():
        code = re.sub(rf'\b{re.escape(original)}\s*\(', f'{specialized}(', code)
    return code


def _match_close(code: str, pos: int, open_ch: str, close_ch: str) -> int:
    """Index just past the bracket closing the one opened before `pos`, or -1."""
    depth = 1
    while pos < len(code) and depth > 0:
        if code[pos] == open_ch:
            depth += 1
        elif code[pos] == close_ch:
            depth -= 1
        pos += 1
    return pos if depth == 0 else -1


def extract_functions(code: str) -> List[FunctionDef]:
    """
    Split GLSL source into function definitions.

    Prototypes and calls that look like declarations (no body) are skipped.
    """
    functions = []
    pos = 0
    while True:
        match = _FUNCTION_START.search(code, pos)
        if match is None:
            break

        params_end = _match_close(code, match.end(), '(', ')')
        if params_end < 0:
            break

        body_start = params_end
        while body_start < len(code) and code[body_start].isspace():
            body_start += 1
        if body_start >= len(code) or code[body_start] != '{':
            pos = match.end()
            continue

        body_end = _match_close(code, body_start + 1, '{', '}')
        if body_end < 0:
            break

        params = code[match.end():params_end - 1]
        param_types = []
        for param in params.split(','):
            m = _PARAM_TYPE.match(param.strip())
            if m:
                param_types.append(m.group(1))

        functions.append(FunctionDef(
            return_type=match.group(1),
            name=match.group(2),
            param_types=tuple(param_types),
            text=code[match.start():body_end],
        ))
        pos = body_end
    return functions


def function_names(code: str) -> List[str]:
    """Names of functions defined in `code`, in order of appearance."""
    seen = []
    for func in extract_functions(code or ""):
        if func.name not in seen:
            seen.append(func.name)
    return seen


def deduplicate_functions(blocks: Iterable[str]) -> List[FunctionDef]:
    """First occurrence of each signature wins."""
    unique: Dict[str, FunctionDef] = {}
    for block in blocks:
        for func in extract_functions(block):
            unique.setdefault(func.signature, func)
    return list(unique.values())


def collect_functions(contexts) -> str:
    """
    Render, rename and deduplicate the helper functions of every node.

    `contexts` must already be in emission order (execution order first,
    then the remaining graph nodes).
    """
    blocks = []
    for ctx in contexts:
        if not ctx.spec.functions:
            continue
        rendered = ctx.render(ctx.spec.functions)
        blocks.append(rename_calls(rendered, ctx.state.renames_for(ctx.node.id)))
    return '\n\n'.join(func.text for func in deduplicate_functions(blocks))
