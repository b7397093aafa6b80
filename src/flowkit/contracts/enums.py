"""All value types, render modes, and kinds shared across the workflow layer.

Values are the wire strings used by the editor and by persisted workflows.
Renaming a member is free; changing its value breaks every stored workflow.
"""

from enum import StrEnum


class WorkflowIOValueType(StrEnum):
    """Declared value type of a node input, output or global variable."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY_STRING = "arrayString"
    ARRAY_NUMBER = "arrayNumber"
    ARRAY_BOOLEAN = "arrayBoolean"
    ARRAY_OBJECT = "arrayObject"
    ARRAY_ANY = "arrayAny"
    ANY = "any"
    CHAT_HISTORY = "chatHistory"
    DATASET_QUOTE = "datasetQuote"
    DYNAMIC = "dynamic"
    SELECT_APP = "selectApp"
    SELECT_DATASET = "selectDataset"


class FlowNodeInputType(StrEnum):
    """Render/edit mode of a node input.

    An input may offer several modes; ``selected_type_index`` picks the
    active one. ADD_INPUT_PARAM marks an input that lets the user add
    arbitrary extra input ports at runtime.
    """

    REFERENCE = "reference"
    INPUT = "input"
    TEXTAREA = "textarea"
    NUMBER_INPUT = "numberInput"
    SWITCH = "switch"
    SELECT = "select"
    JSON_EDITOR = "JSONEditor"
    ADD_INPUT_PARAM = "addInputParam"
    CUSTOM_VARIABLE = "customVariable"
    SELECT_LLM_MODEL = "selectLLMModel"
    SETTING_LLM_MODEL = "settingLLMModel"
    SELECT_DATASET = "selectDataset"
    SELECT_DATASET_PARAMS_MODAL = "selectDatasetParamsModal"
    SETTING_DATASET_QUOTE_PROMPT = "settingDatasetQuotePrompt"
    HIDDEN = "hidden"
    CUSTOM = "custom"
    FILE_SELECT = "fileSelect"


class FlowNodeOutputType(StrEnum):
    """How a node output is exposed on the canvas."""

    HIDDEN = "hidden"
    SOURCE = "source"
    STATIC = "static"
    DYNAMIC = "dynamic"
    ERROR = "error"


class FlowNodeType(StrEnum):
    """Node-kind tag. Templates are registered and looked up by this value."""

    EMPTY_NODE = "emptyNode"
    SYSTEM_CONFIG = "systemConfig"
    PLUGIN_CONFIG = "pluginConfig"
    WORKFLOW_START = "workflowStart"
    CHAT_NODE = "chatNode"
    DATASET_SEARCH_NODE = "datasetSearchNode"
    ANSWER_NODE = "answerNode"
    CLASSIFY_QUESTION = "classifyQuestion"
    CONTENT_EXTRACT = "contentExtract"
    HTTP_REQUEST = "httpRequest468"
    TOOLS = "tools"
    IF_ELSE_NODE = "ifElseNode"
    VARIABLE_UPDATE = "variableUpdate"
    CODE = "code"
    TEXT_EDITOR = "textEditor"
    USER_INPUT = "userInput"
    PLUGIN_INPUT = "pluginInput"
    PLUGIN_OUTPUT = "pluginOutput"
    GLOBAL_VARIABLE = "globalVariable"


class DatasetSourceReadType(StrEnum):
    """Where the raw text of a dataset collection comes from.

    Values:
        FILE_LOCAL: File uploaded to platform storage
        LINK: Web page fetched by URL
        EXTERNAL_FILE: File hosted by a third party, read by URL
        API_FILE: File served by an API dataset (generic, feishu or yuque)
    """

    FILE_LOCAL = "fileLocal"
    LINK = "link"
    EXTERNAL_FILE = "externalFile"
    API_FILE = "apiFile"
