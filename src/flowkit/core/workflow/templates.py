# src/flowkit/core/workflow/templates.py
"""Template materialization: NodeTemplate -> fresh FlowNode on the canvas."""

from __future__ import annotations

from collections.abc import Callable

from flowkit.contracts import (
    CHILD_NODE_Z_INDEX,
    FlowNode,
    FlowNodeInputItem,
    FlowNodeItem,
    FlowNodeType,
    NodeTemplate,
    Position,
)
from flowkit.core.identifiers import DEFAULT_ID_GENERATOR, IdGenerator

# Label-translation function supplied by the editor (i18n key -> display text).
type Translate = Callable[[str], str]

# Placeholder shape for nodes whose kind has no registered template.
EMPTY_NODE_TEMPLATE = NodeTemplate(
    id=FlowNodeType.EMPTY_NODE,
    flow_node_type=FlowNodeType.EMPTY_NODE,
    name="",
    intro="",
    avatar="",
    version="481",
)


def identity_translate(text: str) -> str:
    """Translation function that returns keys unchanged."""
    return text


def apply_input_default(item: FlowNodeInputItem) -> FlowNodeInputItem:
    """Fill an unset value from the input's declared default, in place."""
    if item.value is None and item.default_value is not None:
        item.value = item.default_value
    return item


def node_template_to_flow_node(
    template: NodeTemplate,
    position: Position,
    t: Translate,
    *,
    selected: bool = False,
    parent_node_id: str | None = None,
    id_generator: IdGenerator = DEFAULT_ID_GENERATOR,
) -> FlowNode:
    """Create a fresh canvas node from a template.

    Inputs and outputs are deep copies, so editing the node can never
    alter the shared template.

    Args:
        template: Template to instantiate
        position: Canvas position, used verbatim
        t: Translation applied to the template name
        selected: Whether the new node starts selected
        parent_node_id: Enclosing node (loop body) if any
        id_generator: Source of the new node id

    Returns:
        FlowNode whose id and data.node_id are the new id
    """
    copied = template.model_copy(deep=True)
    node_id = id_generator.next()

    data = FlowNodeItem(
        node_id=node_id,
        parent_node_id=parent_node_id,
        flow_node_type=copied.flow_node_type,
        name=t(copied.name),
        intro=copied.intro,
        avatar=copied.avatar,
        version=copied.version,
        show_status=copied.show_status,
        inputs=[apply_input_default(item) for item in copied.inputs],
        outputs=list(copied.outputs),
    )
    return FlowNode(
        id=node_id,
        type=copied.flow_node_type,
        position=position.model_copy(),
        data=data,
        selected=selected,
        z_index=CHILD_NODE_Z_INDEX if parent_node_id else 0,
    )
