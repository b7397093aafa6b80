# src/flowkit/core/workflow/__init__.py
"""Workflow graph normalization: materialize, reconcile, resolve, validate."""

from flowkit.core.workflow.edges import render_edge_to_store_edge, store_edges_render_edge
from flowkit.core.workflow.reconcile import (
    flow_node_to_store_node,
    get_latest_node_template,
    store_node_to_flow_node,
)
from flowkit.core.workflow.references import (
    computed_node_input_reference,
    filter_workflow_node_outputs_by_type,
    get_global_variable_node,
    get_ref_data,
    split_reference,
)
from flowkit.core.workflow.templates import (
    EMPTY_NODE_TEMPLATE,
    Translate,
    identity_translate,
    node_template_to_flow_node,
)
from flowkit.core.workflow.validation import (
    check_workflow_node_and_connection,
    is_empty_value,
    is_reference_set,
)

__all__ = [
    "EMPTY_NODE_TEMPLATE",
    "Translate",
    "check_workflow_node_and_connection",
    "computed_node_input_reference",
    "filter_workflow_node_outputs_by_type",
    "flow_node_to_store_node",
    "get_global_variable_node",
    "get_latest_node_template",
    "get_ref_data",
    "identity_translate",
    "is_empty_value",
    "is_reference_set",
    "node_template_to_flow_node",
    "render_edge_to_store_edge",
    "split_reference",
    "store_edges_render_edge",
    "store_node_to_flow_node",
]
