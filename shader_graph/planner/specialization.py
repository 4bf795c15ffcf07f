"""
Function specialization planning.

Instances of one node type share their `functions` template, but once a
parameter is wired or bound to a per-node uniform the rendered helpers
differ. Every group of instances whose helpers render differently gets its
own copy of each function, suffixed with the group's first node id, so the
deduplicator never merges them.
"""

import logging
from collections import OrderedDict
from typing import Dict, List, Mapping, Optional, Sequence

from ..codegen.context import GenerationState, NodeContext
from ..codegen.functions import function_names
from ..codegen.naming import generate_variable_names, sanitize
from ..config import CompilerConfig, DEFAULT_CONFIG
from ..diagnostics import Diagnostics
from .uniforms import allocate_uniforms

logger = logging.getLogger(__name__)


def _ordered_nodes(state: GenerationState) -> List:
    order = list(state.execution_order)
    seen = set(order)
    order.extend(node.id for node in state.graph.nodes if node.id not in seen)
    return [state.node(node_id) for node_id in order if state.node(node_id) is not None]


def plan_for_state(state: GenerationState) -> Dict[str, Dict[str, str]]:
    """
    Build node id -> (original function name -> specialized name).

    Rendering uses a scratch Diagnostics so planning never adds warnings
    of its own; the generator reports them when it renders for real.
    """
    scratch = GenerationState(
        graph=state.graph,
        catalog=state.catalog,
        variable_names=state.variable_names,
        execution_order=state.execution_order,
        uniform_names=state.uniform_names,
        function_name_map={},
        config=state.config,
        diagnostics=Diagnostics(),
    )

    by_type: Dict[str, List] = OrderedDict()
    for node in _ordered_nodes(scratch):
        spec = scratch.catalog.get(node.type)
        if spec is None or not spec.functions:
            continue
        by_type.setdefault(node.type, []).append((node, spec))

    plan: Dict[str, Dict[str, str]] = {}
    for node_type, instances in by_type.items():
        groups: Dict[str, List[str]] = OrderedDict()
        for node, spec in instances:
            rendered = NodeContext(scratch, node, spec).render(spec.functions)
            groups.setdefault(rendered, []).append(node.id)

        if len(groups) < 2:
            continue

        names = function_names(instances[0][1].functions)
        for member_ids in list(groups.values())[1:]:
            suffix = sanitize(member_ids[0])
            renames = {name: f"{name}_{suffix}" for name in names}
            for node_id in member_ids:
                plan[node_id] = dict(renames)
        logger.debug(f"{node_type}: {len(groups)} distinct helper variants")

    return plan


def plan_function_specialization(graph, catalog, execution_order: Optional[Sequence[str]] = None,
                                 uniform_names: Optional[Mapping[str, str]] = None,
                                 config: CompilerConfig = DEFAULT_CONFIG) -> Dict[str, Dict[str, str]]:
    """
    Standalone entry point: plan specializations for a graph.

    Without an execution order, graph order is used; without a uniform
    table, one is allocated.
    """
    if uniform_names is None:
        uniform_names = allocate_uniforms(graph, catalog, config)
    state = GenerationState(
        graph=graph,
        catalog=catalog,
        variable_names=generate_variable_names(graph, catalog, config),
        execution_order=list(execution_order) if execution_order is not None else [n.id for n in graph.nodes],
        uniform_names=uniform_names,
        config=config,
    )
    return plan_for_state(state)


def freeze_plan(plan: Mapping[str, Mapping[str, str]]) -> Dict[str, Dict[str, str]]:
    """Copy a caller-supplied plan so later mutation cannot leak into a compile."""
    return {node_id: dict(renames) for node_id, renames in plan.items()}
