# src/flowkit/core/chat.py
"""Chat-box helpers derived from a workflow's nodes.

Whether the chat box offers file selection depends on the models the
workflow's chat nodes use; the question guide shown above it comes from
the system-config node.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

from flowkit.contracts import (
    FlowNodeItem,
    FlowNodeType,
    ModelCapabilities,
    NodeInputKey,
    StoreNode,
)

type WorkflowModule = StoreNode | FlowNodeItem

# Node kinds that run a chat model selected through their "model" input.
_MODEL_NODE_TYPES: frozenset[str] = frozenset({FlowNodeType.CHAT_NODE, FlowNodeType.TOOLS})


class ModelCapabilityLookup(Protocol):
    """Resolves a model id to its capabilities."""

    def get(self, model_id: str) -> ModelCapabilities | None:
        """Return the model's capabilities, or None for an unknown model."""
        ...


class ConfiguredModelLookup:
    """Model lookup backed by the ``models:`` settings section."""

    def __init__(self, models: Mapping[str, ModelCapabilities]) -> None:
        self._models = dict(models)

    def get(self, model_id: str) -> ModelCapabilities | None:
        return self._models.get(model_id)


def _input_value(module: WorkflowModule, key: str) -> Any:
    for item in module.inputs:
        if item.key == key:
            return item.value
    return None


def _guide_config(module: WorkflowModule) -> Mapping[str, Any]:
    value = _input_value(module, NodeInputKey.CHAT_INPUT_GUIDE)
    return value if isinstance(value, Mapping) else {}


def check_chat_support_select_file_by_chat_models(
    models: Iterable[str] | None = None,
    *,
    lookup: ModelCapabilityLookup,
) -> bool:
    """True when any of the models accepts images.

    Unknown model ids are ignored.
    """
    for model_id in models or ():
        capabilities = lookup.get(model_id)
        if capabilities is not None and capabilities.vision:
            return True
    return False


def check_chat_support_select_file_by_modules(
    modules: Sequence[WorkflowModule] | None = None,
    *,
    lookup: ModelCapabilityLookup,
) -> bool:
    """True when a chat or tool-call node of the workflow uses a vision model."""
    models = [
        value
        for module in modules or ()
        if module.flow_node_type in _MODEL_NODE_TYPES
        and isinstance(value := _input_value(module, NodeInputKey.AI_MODEL), str)
    ]
    return check_chat_support_select_file_by_chat_models(models, lookup=lookup)


def get_app_question_guides_by_modules(modules: Sequence[WorkflowModule]) -> list[str]:
    """Question guide texts configured on the system-config node.

    Returns:
        The configured ``textList`` when the guide is open, else []
    """
    system_module = next(
        (module for module in modules if module.flow_node_type == FlowNodeType.SYSTEM_CONFIG),
        None,
    )
    if system_module is None:
        return []
    config = _guide_config(system_module)
    if not config.get("open"):
        return []
    return [str(text) for text in config.get("textList") or ()]


def get_app_question_guides_by_user_guide_module(
    module: WorkflowModule | None,
    qg_text: Sequence[str] | None = None,
) -> list[str]:
    """Return qg_text when the module's question guide is open, else []."""
    if module is None or not _guide_config(module).get("open"):
        return []
    return list(qg_text or ())
