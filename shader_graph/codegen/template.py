# Template Parsing
# Splits a node's GLSL template into tokens once, so substitution is a single
# left-to-right pass and no replacement can be re-scanned by another.

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Set, Tuple, Union


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class InputRef:
    port: str


@dataclass(frozen=True)
class OutputRef:
    port: str


@dataclass(frozen=True)
class ParamRef:
    """$param.<name> or $param.<name>[<index>]; the index is itself a template."""
    name: str
    index: Optional[str] = None


@dataclass(frozen=True)
class GlobalRef:
    """$time, $resolution or $p."""
    name: str


@dataclass(frozen=True)
class ResultRef:
    """Legacy bare `result` identifier."""
    pass


Token = Union[Literal, InputRef, OutputRef, ParamRef, GlobalRef, ResultRef]

_TOKEN_PATTERN = re.compile(
    r'\$input\.(?P<input>\w+)'
    r'|\$output\.(?P<output>\w+)'
    r'|\$param\.(?P<param>\w+)(?:\[(?P<index>[^\[\]]*)\])?'
    r'|\$(?P<global>time|resolution|p)\b'
    r'|\b(?P<result>result)\b'
)


@lru_cache(maxsize=512)
def parse_template(template: str) -> Tuple[Token, ...]:
    """Tokenize a template. Results are cached per template string."""
    tokens = []
    pos = 0
    for match in _TOKEN_PATTERN.finditer(template):
        if match.start() > pos:
            tokens.append(Literal(template[pos:match.start()]))
        if match.group('input') is not None:
            tokens.append(InputRef(match.group('input')))
        elif match.group('output') is not None:
            tokens.append(OutputRef(match.group('output')))
        elif match.group('param') is not None:
            tokens.append(ParamRef(match.group('param'), match.group('index')))
        elif match.group('global') is not None:
            tokens.append(GlobalRef(match.group('global')))
        else:
            tokens.append(ResultRef())
        pos = match.end()
    if pos < len(template):
        tokens.append(Literal(template[pos:]))
    return tuple(tokens)


def referenced_ports(template: str) -> Tuple[Set[str], Set[str]]:
    """(input ports, output ports) a template mentions, including inside indices."""
    inputs, outputs = set(), set()
    for token in parse_template(template or ""):
        if isinstance(token, InputRef):
            inputs.add(token.port)
        elif isinstance(token, OutputRef):
            outputs.add(token.port)
        elif isinstance(token, ParamRef) and token.index:
            sub_in, sub_out = referenced_ports(token.index)
            inputs |= sub_in
            outputs |= sub_out
    return inputs, outputs


def referenced_params(template: str) -> Set[str]:
    names = set()
    for token in parse_template(template or ""):
        if isinstance(token, ParamRef):
            names.add(token.name)
            if token.index:
                names |= referenced_params(token.index)
    return names


def render(template: str, resolver) -> str:
    """
    Expand every placeholder of `template` through `resolver`.

    The resolver provides input(port), output(port), param(name, index),
    global_ref(name) and result(); `index` arrives already rendered.
    """
    parts = []
    for token in parse_template(template):
        if isinstance(token, Literal):
            parts.append(token.text)
        elif isinstance(token, InputRef):
            parts.append(resolver.input(token.port))
        elif isinstance(token, OutputRef):
            parts.append(resolver.output(token.port))
        elif isinstance(token, ParamRef):
            index = render(token.index, resolver) if token.index is not None else None
            parts.append(resolver.param(token.name, index))
        elif isinstance(token, GlobalRef):
            parts.append(resolver.global_ref(token.name))
        else:
            parts.append(resolver.result())
    return ''.join(parts)
