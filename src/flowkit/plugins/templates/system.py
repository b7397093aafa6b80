"""Built-in node templates.

Names, labels and descriptions are i18n keys; the editor passes them through
its translation function when a node is placed or loaded.
"""

from flowkit.contracts import (
    FlowNodeInputItem,
    FlowNodeInputType,
    FlowNodeOutputItem,
    FlowNodeOutputType,
    FlowNodeType,
    NodeInputKey,
    NodeOutputKey,
    NodeTemplate,
    WorkflowIOValueType,
)

# Bumped whenever a built-in template changes shape.
TEMPLATE_VERSION = "481"


def _history_input() -> FlowNodeInputItem:
    return FlowNodeInputItem(
        key=NodeInputKey.HISTORY,
        render_type_list=[FlowNodeInputType.NUMBER_INPUT, FlowNodeInputType.REFERENCE],
        value_type=WorkflowIOValueType.CHAT_HISTORY,
        label="common:core.module.input.label.chat history",
        required=True,
        value=6,
    )


def _user_question_input(tool_description: str = "common:core.module.input.label.user question") -> FlowNodeInputItem:
    return FlowNodeInputItem(
        key=NodeInputKey.USER_CHAT_INPUT,
        render_type_list=[FlowNodeInputType.REFERENCE, FlowNodeInputType.TEXTAREA],
        value_type=WorkflowIOValueType.STRING,
        label="common:core.module.input.label.user question",
        required=True,
        tool_description=tool_description,
    )


def _model_input() -> FlowNodeInputItem:
    return FlowNodeInputItem(
        key=NodeInputKey.AI_MODEL,
        render_type_list=[FlowNodeInputType.SETTING_LLM_MODEL, FlowNodeInputType.REFERENCE],
        value_type=WorkflowIOValueType.STRING,
        label="common:core.module.input.label.aiModel",
        required=True,
        value="",
    )


def _system_prompt_input() -> FlowNodeInputItem:
    return FlowNodeInputItem(
        key=NodeInputKey.AI_SYSTEM_PROMPT,
        render_type_list=[FlowNodeInputType.TEXTAREA, FlowNodeInputType.REFERENCE],
        value_type=WorkflowIOValueType.STRING,
        label="common:core.ai.Prompt",
        value="",
    )


def _dynamic_params_input() -> FlowNodeInputItem:
    return FlowNodeInputItem(
        key=NodeInputKey.ADD_INPUT_PARAM,
        render_type_list=[FlowNodeInputType.ADD_INPUT_PARAM],
        value_type=WorkflowIOValueType.DYNAMIC,
        label="",
        description="workflow:add_input_param_tip",
    )


def _error_output() -> FlowNodeOutputItem:
    return FlowNodeOutputItem(
        key="error",
        type=FlowNodeOutputType.STATIC,
        value_type=WorkflowIOValueType.OBJECT,
        label="workflow:error_text",
    )


SYSTEM_CONFIG = NodeTemplate(
    id=FlowNodeType.SYSTEM_CONFIG,
    flow_node_type=FlowNodeType.SYSTEM_CONFIG,
    name="common:core.module.template.App system setting",
    intro="",
    avatar="core/workflow/template/systemConfig",
    category="system",
    version=TEMPLATE_VERSION,
    inputs=[
        FlowNodeInputItem(
            key=NodeInputKey.WELCOME_TEXT,
            render_type_list=[FlowNodeInputType.HIDDEN],
            value_type=WorkflowIOValueType.STRING,
            value="",
        ),
        FlowNodeInputItem(
            key=NodeInputKey.VARIABLES,
            render_type_list=[FlowNodeInputType.HIDDEN],
            value_type=WorkflowIOValueType.ARRAY_ANY,
            value=[],
        ),
        FlowNodeInputItem(
            key=NodeInputKey.CHAT_INPUT_GUIDE,
            render_type_list=[FlowNodeInputType.HIDDEN],
            value_type=WorkflowIOValueType.OBJECT,
            value={"open": False, "textList": []},
        ),
    ],
)

WORKFLOW_START = NodeTemplate(
    id=FlowNodeType.WORKFLOW_START,
    flow_node_type=FlowNodeType.WORKFLOW_START,
    name="workflow:template.workflow_start",
    intro="",
    avatar="core/workflow/template/workflowStart",
    category="system",
    version=TEMPLATE_VERSION,
    inputs=[_user_question_input()],
    outputs=[
        FlowNodeOutputItem(
            key=NodeOutputKey.USER_CHAT_INPUT,
            type=FlowNodeOutputType.STATIC,
            value_type=WorkflowIOValueType.STRING,
            label="common:core.module.input.label.user question",
        ),
    ],
)

CHAT_NODE = NodeTemplate(
    id=FlowNodeType.CHAT_NODE,
    flow_node_type=FlowNodeType.CHAT_NODE,
    name="workflow:template.ai_chat",
    intro="workflow:template.ai_chat_intro",
    avatar="core/workflow/template/aiChat",
    category="ai",
    version=TEMPLATE_VERSION,
    show_status=True,
    inputs=[
        _model_input(),
        FlowNodeInputItem(
            key="temperature",
            render_type_list=[FlowNodeInputType.HIDDEN],
            value_type=WorkflowIOValueType.NUMBER,
            value=0,
        ),
        FlowNodeInputItem(
            key="maxToken",
            render_type_list=[FlowNodeInputType.HIDDEN],
            value_type=WorkflowIOValueType.NUMBER,
            value=2000,
        ),
        _system_prompt_input(),
        _history_input(),
        FlowNodeInputItem(
            key="quoteQA",
            render_type_list=[FlowNodeInputType.SETTING_DATASET_QUOTE_PROMPT],
            value_type=WorkflowIOValueType.DATASET_QUOTE,
            label="",
        ),
        _user_question_input(),
    ],
    outputs=[
        FlowNodeOutputItem(
            key=NodeOutputKey.HISTORY,
            type=FlowNodeOutputType.STATIC,
            value_type=WorkflowIOValueType.CHAT_HISTORY,
            label="common:core.module.output.label.New context",
        ),
        FlowNodeOutputItem(
            key=NodeOutputKey.ANSWER_TEXT,
            type=FlowNodeOutputType.STATIC,
            value_type=WorkflowIOValueType.STRING,
            label="common:core.module.output.label.Ai response content",
        ),
    ],
)

TOOLS = NodeTemplate(
    id=FlowNodeType.TOOLS,
    flow_node_type=FlowNodeType.TOOLS,
    name="workflow:template.tool_call",
    intro="workflow:template.tool_call_intro",
    avatar="core/workflow/template/toolCall",
    category="ai",
    version=TEMPLATE_VERSION,
    show_status=True,
    inputs=[_model_input(), _system_prompt_input(), _history_input(), _user_question_input()],
    outputs=[
        FlowNodeOutputItem(
            key=NodeOutputKey.ANSWER_TEXT,
            type=FlowNodeOutputType.STATIC,
            value_type=WorkflowIOValueType.STRING,
            label="common:core.module.output.label.Ai response content",
        ),
    ],
)

DATASET_SEARCH = NodeTemplate(
    id=FlowNodeType.DATASET_SEARCH_NODE,
    flow_node_type=FlowNodeType.DATASET_SEARCH_NODE,
    name="workflow:template.dataset_search",
    intro="workflow:template.dataset_search_intro",
    avatar="core/workflow/template/datasetSearch",
    category="ai",
    version=TEMPLATE_VERSION,
    show_status=True,
    inputs=[
        FlowNodeInputItem(
            key=NodeInputKey.DATASET_SELECT_LIST,
            render_type_list=[FlowNodeInputType.SELECT_DATASET, FlowNodeInputType.REFERENCE],
            value_type=WorkflowIOValueType.SELECT_DATASET,
            label="common:core.module.input.label.Select dataset",
            required=True,
            value=[],
        ),
        FlowNodeInputItem(
            key=NodeInputKey.DATASET_SIMILARITY,
            render_type_list=[FlowNodeInputType.SELECT_DATASET_PARAMS_MODAL],
            value_type=WorkflowIOValueType.NUMBER,
            label="",
            value=0.4,
        ),
        FlowNodeInputItem(
            key="limit",
            render_type_list=[FlowNodeInputType.HIDDEN],
            value_type=WorkflowIOValueType.NUMBER,
            value=5000,
        ),
        _user_question_input(tool_description="workflow:content_to_search"),
    ],
    outputs=[
        FlowNodeOutputItem(
            key=NodeOutputKey.DATASET_QUOTE_QA,
            type=FlowNodeOutputType.STATIC,
            value_type=WorkflowIOValueType.DATASET_QUOTE,
            label="common:core.module.Dataset quote.label",
        ),
    ],
)

ANSWER_NODE = NodeTemplate(
    id=FlowNodeType.ANSWER_NODE,
    flow_node_type=FlowNodeType.ANSWER_NODE,
    name="workflow:template.reply",
    intro="workflow:template.reply_intro",
    avatar="core/workflow/template/reply",
    category="tools",
    version=TEMPLATE_VERSION,
    inputs=[
        FlowNodeInputItem(
            key=NodeInputKey.ANSWER_TEXT,
            render_type_list=[FlowNodeInputType.TEXTAREA, FlowNodeInputType.REFERENCE],
            value_type=WorkflowIOValueType.ANY,
            label="common:core.module.input.label.Response content",
            tool_description="common:core.module.input.label.Response content",
            required=True,
            value="",
        ),
    ],
)

HTTP_REQUEST = NodeTemplate(
    id=FlowNodeType.HTTP_REQUEST,
    flow_node_type=FlowNodeType.HTTP_REQUEST,
    name="workflow:template.http_request",
    intro="workflow:intro_http_request",
    avatar="core/workflow/template/httpRequest",
    category="tools",
    version=TEMPLATE_VERSION,
    show_status=True,
    inputs=[
        _dynamic_params_input(),
        FlowNodeInputItem(
            key=NodeInputKey.HTTP_METHOD,
            render_type_list=[FlowNodeInputType.CUSTOM],
            value_type=WorkflowIOValueType.STRING,
            label="",
            required=True,
            value="POST",
        ),
        FlowNodeInputItem(
            key=NodeInputKey.HTTP_REQ_URL,
            render_type_list=[FlowNodeInputType.HIDDEN],
            value_type=WorkflowIOValueType.STRING,
            label="",
            description="common:core.module.input.description.Http Request Url",
            required=True,
            value="",
        ),
    ],
    outputs=[
        FlowNodeOutputItem(
            key=NodeOutputKey.HTTP_RAW_RESPONSE,
            type=FlowNodeOutputType.STATIC,
            value_type=WorkflowIOValueType.ANY,
            label="workflow:raw_response",
        ),
        _error_output(),
    ],
)

CODE = NodeTemplate(
    id=FlowNodeType.CODE,
    flow_node_type=FlowNodeType.CODE,
    name="workflow:code_execution",
    intro="workflow:execute_a_simple_script_code_usually_for_complex_data_processing",
    avatar="core/workflow/template/codeRun",
    category="tools",
    version=TEMPLATE_VERSION,
    show_status=True,
    inputs=[
        _dynamic_params_input(),
        FlowNodeInputItem(
            key="codeType",
            render_type_list=[FlowNodeInputType.HIDDEN],
            value_type=WorkflowIOValueType.STRING,
            value="js",
        ),
        FlowNodeInputItem(
            key=NodeInputKey.CODE,
            render_type_list=[FlowNodeInputType.CUSTOM],
            value_type=WorkflowIOValueType.STRING,
            label="",
            required=True,
            default_value="function main({data1, data2}){\n    return {result: data1 + data2}\n}",
        ),
    ],
    outputs=[
        FlowNodeOutputItem(
            key=NodeOutputKey.RAW_RESPONSE,
            type=FlowNodeOutputType.STATIC,
            value_type=WorkflowIOValueType.OBJECT,
            label="workflow:full_response_data",
        ),
        _error_output(),
    ],
)

TEXT_EDITOR = NodeTemplate(
    id=FlowNodeType.TEXT_EDITOR,
    flow_node_type=FlowNodeType.TEXT_EDITOR,
    name="workflow:text_concatenation",
    intro="workflow:intro_text_concatenation",
    avatar="core/workflow/template/textConcat",
    category="tools",
    version=TEMPLATE_VERSION,
    inputs=[
        _dynamic_params_input(),
        FlowNodeInputItem(
            key=NodeInputKey.TEXTAREA_INPUT,
            render_type_list=[FlowNodeInputType.TEXTAREA],
            value_type=WorkflowIOValueType.STRING,
            label="workflow:input_text",
            required=True,
            value="",
        ),
    ],
    outputs=[
        FlowNodeOutputItem(
            key=NodeOutputKey.TEXT,
            type=FlowNodeOutputType.STATIC,
            value_type=WorkflowIOValueType.STRING,
            label="workflow:concatenated_text",
        ),
    ],
)

USER_INPUT = NodeTemplate(
    id=FlowNodeType.USER_INPUT,
    flow_node_type=FlowNodeType.USER_INPUT,
    name="workflow:form_input",
    intro="workflow:form_input_tip",
    avatar="core/workflow/template/formInput",
    category="interactive",
    version=TEMPLATE_VERSION,
    inputs=[
        FlowNodeInputItem(
            key=NodeInputKey.DESCRIPTION,
            render_type_list=[FlowNodeInputType.TEXTAREA],
            value_type=WorkflowIOValueType.STRING,
            label="workflow:Interactive_user_input_description",
            value="",
        ),
        FlowNodeInputItem(
            key=NodeInputKey.USER_INPUT_FORMS,
            render_type_list=[FlowNodeInputType.CUSTOM],
            value_type=WorkflowIOValueType.ANY,
            label="",
            required=True,
            value=[],
        ),
    ],
    outputs=[
        FlowNodeOutputItem(
            key=NodeOutputKey.FORM_INPUT_RESULT,
            type=FlowNodeOutputType.HIDDEN,
            value_type=WorkflowIOValueType.OBJECT,
            label="workflow:form_input_result",
        ),
    ],
)

IF_ELSE = NodeTemplate(
    id=FlowNodeType.IF_ELSE_NODE,
    flow_node_type=FlowNodeType.IF_ELSE_NODE,
    name="workflow:condition_checker",
    intro="workflow:execute_different_branches_based_on_conditions",
    avatar="core/workflow/template/ifelse",
    category="tools",
    version=TEMPLATE_VERSION,
    inputs=[
        FlowNodeInputItem(
            key=NodeInputKey.IF_ELSE_LIST,
            render_type_list=[FlowNodeInputType.HIDDEN],
            value_type=WorkflowIOValueType.ANY,
            label="",
            value=[{"condition": "AND", "list": [{"variable": None, "condition": None, "value": ""}]}],
        ),
    ],
    outputs=[
        FlowNodeOutputItem(
            key=NodeOutputKey.IF_ELSE_RESULT,
            type=FlowNodeOutputType.STATIC,
            value_type=WorkflowIOValueType.STRING,
            label="workflow:judgment_result",
        ),
    ],
)

PLUGIN_INPUT = NodeTemplate(
    id=FlowNodeType.PLUGIN_INPUT,
    flow_node_type=FlowNodeType.PLUGIN_INPUT,
    name="workflow:template.plugin_start",
    intro="workflow:intro_plugin_input",
    avatar="core/workflow/template/workflowStart",
    category="system",
    version=TEMPLATE_VERSION,
    show_status=False,
)

PLUGIN_OUTPUT = NodeTemplate(
    id=FlowNodeType.PLUGIN_OUTPUT,
    flow_node_type=FlowNodeType.PLUGIN_OUTPUT,
    name="common:core.module.template.self_output",
    intro="workflow:intro_custom_plugin_output",
    avatar="core/workflow/template/pluginOutput",
    category="system",
    version=TEMPLATE_VERSION,
    show_status=False,
)

BUILTIN_TEMPLATES: tuple[NodeTemplate, ...] = (
    SYSTEM_CONFIG,
    WORKFLOW_START,
    CHAT_NODE,
    TOOLS,
    DATASET_SEARCH,
    ANSWER_NODE,
    HTTP_REQUEST,
    CODE,
    TEXT_EDITOR,
    USER_INPUT,
    IF_ELSE,
    PLUGIN_INPUT,
    PLUGIN_OUTPUT,
)
