# src/flowkit/core/workflow/references.py
"""Reference resolution: what a (node, field) pointer refers to.

Nothing in this module raises for a malformed or dangling reference. A
workflow with a half-edited reference must still render, so every lookup
that fails degrades to UNKNOWN_REF_DATA (type ``any``, not required).
"""

from __future__ import annotations

from collections.abc import Sequence

import networkx as nx

from flowkit.contracts import (
    UNKNOWN_REF_DATA,
    VARIABLE_NODE_ID,
    ChatConfig,
    FlowNodeItem,
    FlowNodeOutputItem,
    FlowNodeOutputType,
    FlowNodeType,
    RefData,
    StoreEdge,
    StoreNode,
    WorkflowIOValueType,
)
from flowkit.core.workflow.templates import Translate

_V = WorkflowIOValueType

# arrayX also accepts plain X: a scalar is consumed as a one-element array.
_ARRAY_ELEMENT_TYPES: dict[WorkflowIOValueType, WorkflowIOValueType] = {
    _V.ARRAY_STRING: _V.STRING,
    _V.ARRAY_NUMBER: _V.NUMBER,
    _V.ARRAY_BOOLEAN: _V.BOOLEAN,
    _V.ARRAY_OBJECT: _V.OBJECT,
}

_ARRAY_ANY_ACCEPTS: frozenset[WorkflowIOValueType] = frozenset(
    {
        _V.STRING,
        _V.NUMBER,
        _V.BOOLEAN,
        _V.OBJECT,
        _V.ARRAY_STRING,
        _V.ARRAY_NUMBER,
        _V.ARRAY_BOOLEAN,
        _V.ARRAY_OBJECT,
        _V.ARRAY_ANY,
        _V.ANY,
    }
)

# Variables every workflow run provides, listed before the user's own.
_SYSTEM_VARIABLES: tuple[tuple[str, WorkflowIOValueType, str], ...] = (
    ("userId", _V.STRING, "workflow:use_user_id"),
    ("appId", _V.STRING, "common:core.module.http.AppId"),
    ("chatId", _V.STRING, "common:core.module.http.ChatId"),
    ("responseChatItemId", _V.STRING, "common:core.module.http.ResponseChatItemId"),
    ("histories", _V.CHAT_HISTORY, "common:core.module.http.Histories"),
    ("cTime", _V.STRING, "common:core.module.http.Current time"),
)


def _accepted_types(value_type: str) -> frozenset[str]:
    if value_type == _V.ARRAY_ANY:
        return _ARRAY_ANY_ACCEPTS
    element = _ARRAY_ELEMENT_TYPES.get(value_type)  # type: ignore[call-overload]
    if element is not None:
        return frozenset({value_type, element})
    return frozenset({value_type})


def filter_workflow_node_outputs_by_type(
    outputs: Sequence[FlowNodeOutputItem],
    value_type: WorkflowIOValueType | str,
) -> list[FlowNodeOutputItem]:
    """Outputs that can feed an input of the given type, in original order.

    ``any`` accepts everything. ``arrayX`` also accepts plain ``X``, and
    ``arrayAny`` accepts every scalar and array type. Anything else must
    match exactly; an unknown type simply matches nothing.
    """
    if value_type == _V.ANY:
        return list(outputs)
    accepted = _accepted_types(value_type)
    return [output for output in outputs if output.value_type is not None and output.value_type in accepted]


def split_reference(variable: object) -> tuple[str, str] | None:
    if isinstance(variable, (str, bytes)) or not isinstance(variable, Sequence):
        return None
    if len(variable) != 2:
        return None
    node_id, key = variable
    if not isinstance(node_id, str) or not isinstance(key, str):
        return None
    return node_id, key


def get_ref_data(
    variable: object | None,
    node_list: Sequence[FlowNodeItem | StoreNode],
    chat_config: ChatConfig,
) -> RefData:
    """Resolve a reference to its declared value type and requiredness.

    Args:
        variable: (node id | VARIABLE_NODE_ID, field key), or None
        node_list: Every node of the workflow
        chat_config: Holds the global variable declarations

    Returns:
        The referenced output's or variable's RefData, else UNKNOWN_REF_DATA
    """
    reference = split_reference(variable)
    if reference is None:
        return UNKNOWN_REF_DATA
    node_id, key = reference

    if node_id == VARIABLE_NODE_ID:
        for declared in chat_config.variables:
            if declared.key == key:
                return RefData(value_type=declared.value_type, required=declared.required)
        return UNKNOWN_REF_DATA

    node = next((item for item in node_list if item.node_id == node_id), None)
    if node is None:
        return UNKNOWN_REF_DATA
    output = next((item for item in node.outputs if item.id == key), None)
    if output is None:
        return UNKNOWN_REF_DATA
    return RefData(value_type=output.value_type or _V.ANY, required=output.required)


def get_global_variable_node(chat_config: ChatConfig, t: Translate) -> FlowNodeItem:
    """Pseudo-node whose outputs are the variables visible to every node."""
    outputs = [
        FlowNodeOutputItem(
            id=key,
            key=key,
            label=t(label),
            value_type=value_type,
            type=FlowNodeOutputType.STATIC,
        )
        for key, value_type, label in _SYSTEM_VARIABLES
    ]
    outputs.extend(
        FlowNodeOutputItem(
            id=declared.key,
            key=declared.key,
            label=declared.label or declared.key,
            value_type=declared.value_type,
            type=FlowNodeOutputType.STATIC,
            required=declared.required,
        )
        for declared in chat_config.variables
    )
    return FlowNodeItem(
        node_id=VARIABLE_NODE_ID,
        flow_node_type=FlowNodeType.GLOBAL_VARIABLE,
        name=t("common:core.module.Variable"),
        intro=t("workflow:variable_description"),
        avatar="core/workflow/template/variable",
        outputs=outputs,
    )


def computed_node_input_reference(
    node_id: str,
    nodes: Sequence[FlowNodeItem],
    edges: Sequence[StoreEdge],
    chat_config: ChatConfig,
    t: Translate,
) -> list[FlowNodeItem] | None:
    """Nodes whose outputs the given node may reference.

    Every transitive edge source of the node (and of its parent, for nodes
    inside a loop body) in depth-first order, then the global-variable node.

    Returns:
        Candidate source nodes, or None if node_id is not in nodes
    """
    by_id = {node.node_id: node for node in nodes}
    current = by_id.get(node_id)
    if current is None:
        return None

    graph: nx.DiGraph[str] = nx.DiGraph()
    for edge in edges:
        # A missing source ends the walk on that branch.
        if edge.source in by_id:
            graph.add_edge(edge.source, edge.target)
    upstream_view = graph.reverse(copy=False)

    starts = [node_id]
    if current.parent_node_id:
        starts.append(current.parent_node_id)

    sources: list[FlowNodeItem] = []
    seen: set[str] = set(starts)
    for start in starts:
        if not upstream_view.has_node(start):
            continue
        for candidate in nx.dfs_preorder_nodes(upstream_view, start):
            if candidate in seen:
                continue
            seen.add(candidate)
            sources.append(by_id[candidate])

    sources.append(get_global_variable_node(chat_config, t))
    return sources
