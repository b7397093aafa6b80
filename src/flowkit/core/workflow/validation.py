# src/flowkit/core/workflow/validation.py
"""Structural validation of a workflow before save or run.

Problems are reported as data: the ids of the nodes that need attention.
Callers decide whether that blocks the action.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from flowkit.contracts import (
    FlowNode,
    FlowNodeInputType,
    FlowNodeItem,
    FlowNodeType,
    NodeOutputKey,
    StoreEdge,
)
from flowkit.core.logging import get_logger
from flowkit.core.workflow.references import split_reference

logger = get_logger(__name__)

# Configuration-only nodes; their inputs are filled by the platform.
_UNCHECKED_NODE_TYPES: frozenset[str] = frozenset(
    {
        FlowNodeType.SYSTEM_CONFIG,
        FlowNodeType.PLUGIN_CONFIG,
        FlowNodeType.PLUGIN_INPUT,
        FlowNodeType.WORKFLOW_START,
    }
)


def is_empty_value(value: Any) -> bool:
    """True for values that do not satisfy a required input.

    0 and False are values; blank strings and empty containers are not.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def is_reference_set(value: Any) -> bool:
    """True when value is a pair with both parts filled, or a list of such pairs."""
    pair = split_reference(value)
    if pair is not None:
        return all(pair)
    if isinstance(value, (list, tuple)) and value:
        return all((item_pair := split_reference(item)) is not None and all(item_pair) for item in value)
    return False


def _has_unfilled_required_input(data: FlowNodeItem, *, is_tool_node: bool) -> bool:
    for item in data.inputs:
        if not item.required:
            continue
        # A tool call fills described parameters at run time.
        if is_tool_node and item.tool_description:
            continue
        if item.selected_render_type == FlowNodeInputType.REFERENCE:
            if not is_reference_set(item.value):
                return True
        elif is_empty_value(item.value):
            return True
    return False


def check_workflow_node_and_connection(
    nodes: Sequence[FlowNode],
    edges: Sequence[StoreEdge],
    *,
    check_edges: bool = False,
) -> list[str] | None:
    """Find nodes with unfilled required inputs, and optionally dangling edges.

    A required input in reference mode only needs a filled reference; whether
    it resolves is the reference resolver's concern.

    Args:
        nodes: Canvas nodes (the wrapper's ``data`` is inspected)
        edges: Workflow edges
        check_edges: Also report both endpoint ids of every edge whose source
            or target is not among the nodes

    Returns:
        Distinct invalid node ids in first-encountered order, or None when
        there is nothing to report
    """
    invalid: dict[str, None] = {}

    tool_targets = {edge.target for edge in edges if edge.target_handle == NodeOutputKey.SELECTED_TOOLS}
    for node in nodes:
        data = node.data
        if data.flow_node_type in _UNCHECKED_NODE_TYPES:
            continue
        if _has_unfilled_required_input(data, is_tool_node=data.node_id in tool_targets):
            invalid.setdefault(data.node_id, None)

    if check_edges:
        known = {node.data.node_id for node in nodes}
        for edge in edges:
            if edge.source in known and edge.target in known:
                continue
            invalid.setdefault(edge.source, None)
            invalid.setdefault(edge.target, None)

    if not invalid:
        return None
    invalid_ids = list(invalid)
    logger.debug("Workflow has invalid nodes", invalid_node_ids=invalid_ids, node_count=len(nodes))
    return invalid_ids
