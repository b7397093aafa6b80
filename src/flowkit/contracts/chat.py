"""Model capability flags consumed by the chat utilities."""

from pydantic import BaseModel


class ModelCapabilities(BaseModel):
    """What a configured chat model can do.

    Only ``vision`` is read by this package; the rest are carried so the
    config section can describe a model fully.
    """

    model_config = {"frozen": True}

    vision: bool = False
    tool_choice: bool = False
    function_call: bool = False
    max_context: int | None = None
