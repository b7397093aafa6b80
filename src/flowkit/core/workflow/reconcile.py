# src/flowkit/core/workflow/reconcile.py
"""Node reconciliation: persisted node + current template -> runtime node.

Templates evolve between releases. A node saved against an older template
must load into the current template's shape without losing what the user
typed. The rules:

- Outputs always come from the current template.
- Template inputs come back in template order with the saved value
  overlaid by key. Keys the node never saved get the template default.
- Dynamic inputs (render list contains ``addInputParam``) are user data and
  are kept verbatim, even when the template declares the same key.
- Saved inputs the template no longer declares are dropped, unless they
  were added by the user: dynamic inputs, ``can_edit`` inputs, or any extra
  input on a node whose template offers an ``addInputParam`` input.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping

from flowkit.contracts import (
    CHILD_NODE_Z_INDEX,
    FlowNode,
    FlowNodeInputItem,
    FlowNodeItem,
    NodeTemplate,
    Position,
    StoreNode,
)
from flowkit.core.logging import get_logger
from flowkit.core.workflow.templates import (
    EMPTY_NODE_TEMPLATE,
    Translate,
    apply_input_default,
    identity_translate,
)

logger = get_logger(__name__)


def _overlay_saved_value(template_input: FlowNodeInputItem, saved: FlowNodeInputItem) -> FlowNodeInputItem:
    merged = template_input.model_copy(deep=True)
    merged.value = copy.deepcopy(saved.value)
    if saved.selected_type_index is not None:
        merged.selected_type_index = saved.selected_type_index
    return apply_input_default(merged)


def _reconcile_inputs(saved_inputs: list[FlowNodeInputItem], template: NodeTemplate) -> list[FlowNodeInputItem]:
    saved_by_key = {item.key: item for item in saved_inputs}
    template_keys = {item.key for item in template.inputs}
    template_accepts_params = any(item.is_dynamic for item in template.inputs)

    inputs: list[FlowNodeInputItem] = []
    for template_input in template.inputs:
        saved = saved_by_key.get(template_input.key)
        if saved is None:
            inputs.append(apply_input_default(template_input.model_copy(deep=True)))
        elif saved.is_dynamic:
            inputs.append(saved.model_copy(deep=True))
        else:
            inputs.append(_overlay_saved_value(template_input, saved))

    for saved in saved_inputs:
        if saved.key in template_keys:
            continue
        if saved.is_dynamic or saved.can_edit or template_accepts_params:
            inputs.append(saved.model_copy(deep=True))
    return inputs


def _merge_into_template(
    node: FlowNodeItem | StoreNode,
    template: NodeTemplate,
    t: Translate,
    *,
    flow_node_type: str,
    version: str | None,
) -> FlowNodeItem:
    return FlowNodeItem(
        node_id=node.node_id,
        parent_node_id=node.parent_node_id,
        flow_node_type=flow_node_type,
        name=node.name if node.name is not None else t(template.name),
        intro=node.intro if node.intro is not None else (t(template.intro) if template.intro else template.intro),
        avatar=template.avatar or node.avatar,
        version=version,
        show_status=template.show_status if template.show_status is not None else node.show_status,
        inputs=_reconcile_inputs(node.inputs, template),
        outputs=[output.model_copy(deep=True) for output in template.outputs],
    )


def get_latest_node_template(
    node: FlowNodeItem | StoreNode,
    template: NodeTemplate,
    t: Translate = identity_translate,
) -> FlowNodeItem:
    """Upgrade a node to a template, keeping the user's values and labels.

    Unlike store_node_to_flow_node, the result takes the template's kind and
    version: this is the explicit "update to latest" action.

    Args:
        node: Node as currently on the canvas or in storage
        template: Template to upgrade to
        t: Translation for names/intros taken from the template

    Returns:
        New FlowNodeItem; the inputs are independent of both arguments
    """
    return _merge_into_template(
        node,
        template,
        t,
        flow_node_type=template.flow_node_type,
        version=template.version,
    )


def store_node_to_flow_node(
    item: StoreNode,
    t: Translate,
    *,
    templates: Mapping[str, NodeTemplate] | None = None,
    selected: bool = False,
    parent_node_id: str | None = None,
) -> FlowNode:
    """Load a persisted node into the shape of its current template.

    Never raises for an unknown kind: the node loads against an empty
    placeholder template and keeps only its user-added inputs.

    Args:
        item: Persisted node
        t: Translation for names/intros taken from the template
        templates: Kind tag -> template; defaults to the built-in registry
        selected: Whether the node starts selected
        parent_node_id: Enclosing node, overriding the saved one

    Returns:
        FlowNode with id == item.node_id
    """
    if templates is None:
        from flowkit.plugins.manager import get_template_manager

        templates = get_template_manager().templates

    template = templates.get(item.flow_node_type)
    if template is None:
        logger.warning(
            "No template registered for node kind, loading placeholder",
            node_id=item.node_id,
            flow_node_type=item.flow_node_type,
        )
        template = EMPTY_NODE_TEMPLATE

    data = _merge_into_template(
        item,
        template,
        t,
        flow_node_type=item.flow_node_type,
        version=item.version if item.version is not None else template.version,
    )
    if parent_node_id is not None:
        data.parent_node_id = parent_node_id

    return FlowNode(
        id=item.node_id,
        type=item.flow_node_type,
        position=item.position.model_copy() if item.position is not None else Position(),
        data=data,
        selected=selected,
        z_index=CHILD_NODE_Z_INDEX if data.parent_node_id else 0,
    )


def flow_node_to_store_node(node: FlowNode) -> StoreNode:
    """Serialize a canvas node for storage."""
    data = node.data
    return StoreNode(
        node_id=data.node_id,
        parent_node_id=data.parent_node_id,
        flow_node_type=data.flow_node_type,
        position=node.position.model_copy(),
        name=data.name,
        intro=data.intro,
        avatar=data.avatar,
        version=data.version,
        show_status=data.show_status,
        inputs=[item.model_copy(deep=True) for item in data.inputs],
        outputs=[item.model_copy(deep=True) for item in data.outputs],
    )
