"""
Node catalog.

A NodeCatalog maps node type ids to NodeSpecs. Specs are validated on
registration: every $input/$output placeholder in their templates must
name a declared port, so a bad template fails when it is added rather
than in the middle of a compile.
"""

from typing import Dict, Iterable, Iterator, Optional

from ..errors import CatalogError, ErrorKind, TemplateError
from ..ir.graph import NodeSpec
from ..codegen.template import referenced_ports


def validate_spec(spec: NodeSpec):
    """Raise TemplateError if a template references an undeclared port."""
    declared_inputs = {port.name for port in spec.inputs}
    declared_outputs = {port.name for port in spec.outputs}

    for template in (spec.main_code, spec.functions):
        inputs, outputs = referenced_ports(template or "")
        for port in sorted(inputs - declared_inputs):
            raise TemplateError(
                f"Node type '{spec.id}' references undeclared input '$input.{port}'",
                node_type=spec.id, placeholder=f"$input.{port}",
            )
        for port in sorted(outputs - declared_outputs):
            raise TemplateError(
                f"Node type '{spec.id}' references undeclared output '$output.{port}'",
                node_type=spec.id, placeholder=f"$output.{port}",
            )


class NodeCatalog:
    def __init__(self, specs: Iterable[NodeSpec] = ()):
        self._specs: Dict[str, NodeSpec] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: NodeSpec, replace: bool = False) -> NodeSpec:
        if spec.id in self._specs and not replace:
            raise CatalogError(
                f"Node type '{spec.id}' is already registered",
                node_type=spec.id, kind=ErrorKind.DUPLICATE_NODE_TYPE,
            )
        validate_spec(spec)
        self._specs[spec.id] = spec
        return spec

    def get(self, node_type: str) -> Optional[NodeSpec]:
        return self._specs.get(node_type)

    def require(self, node_type: str) -> NodeSpec:
        spec = self._specs.get(node_type)
        if spec is None:
            raise CatalogError(f"Unknown node type '{node_type}'", node_type=node_type)
        return spec

    def by_category(self, category: str):
        return [spec for spec in self._specs.values() if spec.category == category]

    def __contains__(self, node_type) -> bool:
        return node_type in self._specs

    def __iter__(self) -> Iterator[NodeSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)


def default_catalog() -> NodeCatalog:
    """A fresh catalog holding every built-in node type."""
    from . import audio, color, input, math, noise, output, utility

    catalog = NodeCatalog()
    for module in (input, output, audio, utility, math, noise, color):
        for spec in module.NODE_SPECS:
            catalog.register(spec)
    return catalog
