"""Graph entities exchanged between the editor, storage and the workflow core.

Attributes are snake_case; the wire form (what the editor sends and storage
keeps) is camelCase. Both spellings are accepted on input and
``model_dump(by_alias=True)`` reproduces the wire form.

Unknown keys are kept as extras. Persisted workflows carry many
presentation-only fields this layer never reads, and a load/save round trip
must not drop them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from flowkit.contracts.enums import (
    FlowNodeInputType,
    FlowNodeOutputType,
    WorkflowIOValueType,
)

# (node id | VARIABLE_NODE_ID, field key). Lists are accepted because that is
# how JSON delivers a pair.
type ReferenceValue = tuple[str, str] | Sequence[str]


class WorkflowModel(BaseModel):
    """Base for every wire-facing workflow entity."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump in the camelCase form used by the editor and storage."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Position(WorkflowModel):
    x: float = 0
    y: float = 0


class FlowNodeInputItem(WorkflowModel):
    """A node input: its declared shape plus the current value."""

    key: str
    value: Any = None
    value_type: WorkflowIOValueType | None = None
    render_type_list: list[FlowNodeInputType] = Field(default_factory=list)
    selected_type_index: int | None = None
    required: bool = False
    label: str | None = None
    description: str | None = None
    tool_description: str | None = None
    can_edit: bool | None = None
    default_value: Any = None

    @property
    def selected_render_type(self) -> FlowNodeInputType | None:
        """Active render mode, or None when the input declares no modes.

        An out-of-range index falls back to the first mode.
        """
        if not self.render_type_list:
            return None
        index = self.selected_type_index or 0
        if 0 <= index < len(self.render_type_list):
            return self.render_type_list[index]
        return self.render_type_list[0]

    @property
    def is_dynamic(self) -> bool:
        """True for inputs that let the user add extra ports."""
        return FlowNodeInputType.ADD_INPUT_PARAM in self.render_type_list


class FlowNodeOutputItem(WorkflowModel):
    """A node output port. ``id`` is what references point at."""

    id: str | None = None
    key: str | None = None
    value_type: WorkflowIOValueType | None = None
    type: FlowNodeOutputType | None = None
    required: bool = False
    label: str | None = None
    description: str | None = None
    value: Any = None

    @model_validator(mode="after")
    def _fill_id_and_key(self) -> FlowNodeOutputItem:
        # Older workflows store only one of the two; they are the same port.
        if self.id is None:
            self.id = self.key
        if self.key is None:
            self.key = self.id
        return self


class NodeTemplate(WorkflowModel):
    """Static, author-provided definition of a node kind."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    flow_node_type: str
    name: str = ""
    intro: str | None = None
    avatar: str | None = None
    category: str | None = None
    version: str | None = None
    show_status: bool | None = None
    inputs: list[FlowNodeInputItem] = Field(default_factory=list)
    outputs: list[FlowNodeOutputItem] = Field(default_factory=list)


class FlowNodeItem(WorkflowModel):
    """Data of a node placed on the canvas."""

    node_id: str
    parent_node_id: str | None = None
    flow_node_type: str
    name: str = ""
    intro: str | None = None
    avatar: str | None = None
    version: str | None = None
    show_status: bool | None = None
    inputs: list[FlowNodeInputItem] = Field(default_factory=list)
    outputs: list[FlowNodeOutputItem] = Field(default_factory=list)


class FlowNode(WorkflowModel):
    """Rendering-layer wrapper around FlowNodeItem."""

    id: str
    type: str
    position: Position = Field(default_factory=Position)
    data: FlowNodeItem
    selected: bool = False
    z_index: int = 0


class StoreNode(WorkflowModel):
    """Serialized form of a runtime node, as read from and written to storage.

    ``name`` and ``intro`` are None when the user never set them; the
    reconciler then falls back to the template.
    """

    node_id: str
    parent_node_id: str | None = None
    flow_node_type: str
    position: Position | None = None
    name: str | None = None
    intro: str | None = None
    avatar: str | None = None
    version: str | None = None
    show_status: bool | None = None
    inputs: list[FlowNodeInputItem] = Field(default_factory=list)
    outputs: list[FlowNodeOutputItem] = Field(default_factory=list)


class StoreEdge(WorkflowModel):
    """Directed connection between two node ports."""

    source: str
    target: str
    source_handle: str | None = None
    target_handle: str | None = None


class RenderEdge(StoreEdge):
    """Edge as handed to the canvas."""

    id: str
    type: str


class VariableItem(WorkflowModel):
    """A workflow-level (global) variable declaration."""

    key: str
    label: str | None = None
    type: str | None = None
    value_type: WorkflowIOValueType = WorkflowIOValueType.ANY
    required: bool = False
    description: str | None = None


class ChatConfig(WorkflowModel):
    variables: list[VariableItem] = Field(default_factory=list)


class StoreWorkflow(WorkflowModel):
    """A complete persisted workflow."""

    nodes: list[StoreNode] = Field(default_factory=list)
    edges: list[StoreEdge] = Field(default_factory=list)
    chat_config: ChatConfig = Field(default_factory=ChatConfig)


@dataclass(frozen=True, slots=True)
class RefData:
    """Declared type and requiredness a reference resolves to."""

    value_type: WorkflowIOValueType
    required: bool


# What an absent, dangling or malformed reference resolves to.
UNKNOWN_REF_DATA = RefData(value_type=WorkflowIOValueType.ANY, required=False)
