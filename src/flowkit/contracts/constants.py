"""Reserved identifiers and input keys with meaning across node kinds."""

from enum import StrEnum

# Node id used by references that point at a workflow-level variable
# instead of a node output.
VARIABLE_NODE_ID = "VARIABLE_NODE_ID"

# Render type given to edges handed to the canvas.
EDGE_TYPE = "default"

# z-index of nodes nested inside a parent (loop bodies); top-level nodes use 0.
CHILD_NODE_Z_INDEX = 1001


class NodeInputKey(StrEnum):
    """Input keys that carry platform meaning regardless of node kind."""

    WELCOME_TEXT = "welcomeText"
    VARIABLES = "variables"
    CHAT_INPUT_GUIDE = "chatInputGuide"
    AI_MODEL = "model"
    AI_SYSTEM_PROMPT = "systemPrompt"
    USER_CHAT_INPUT = "userChatInput"
    HISTORY = "history"
    DATASET_SELECT_LIST = "datasets"
    DATASET_SIMILARITY = "similarity"
    ANSWER_TEXT = "text"
    USER_INPUT_FORMS = "userInputForms"
    DESCRIPTION = "description"
    ADD_INPUT_PARAM = "system_addInputParam"
    HTTP_REQ_URL = "system_httpReqUrl"
    HTTP_METHOD = "system_httpMethod"
    CODE = "code"
    TEXTAREA_INPUT = "system_textareaInput"
    IF_ELSE_LIST = "ifElseList"


class NodeOutputKey(StrEnum):
    """Output keys and handles that carry platform meaning."""

    USER_CHAT_INPUT = "userChatInput"
    HISTORY = "history"
    ANSWER_TEXT = "answerText"
    DATASET_QUOTE_QA = "quoteQA"
    HTTP_RAW_RESPONSE = "httpRawResponse"
    TEXT = "system_text"
    RAW_RESPONSE = "rawResponse"
    SELECTED_TOOLS = "selectedTools"
    FORM_INPUT_RESULT = "formInputResult"
    IF_ELSE_RESULT = "ifElseResult"
