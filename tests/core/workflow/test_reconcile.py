"""Tests for reconciling persisted nodes with their current template."""

from __future__ import annotations

import structlog.testing

from flowkit.contracts import (
    CHILD_NODE_Z_INDEX,
    FlowNodeInputItem,
    FlowNodeInputType,
    FlowNodeItem,
    FlowNodeOutputItem,
    FlowNodeType,
    NodeInputKey,
    NodeTemplate,
    Position,
    StoreNode,
)
from flowkit.core.workflow.reconcile import (
    flow_node_to_store_node,
    get_latest_node_template,
    store_node_to_flow_node,
)
from flowkit.core.workflow.templates import EMPTY_NODE_TEMPLATE
from flowkit.plugins.templates.system import HTTP_REQUEST, USER_INPUT
from tests.helpers.workflow_builders import echo


def _store_node(flow_node_type: str = FlowNodeType.USER_INPUT, **fields: object) -> StoreNode:
    return StoreNode.model_validate(
        {
            "nodeId": "test-id",
            "flowNodeType": flow_node_type,
            "position": {"x": 0, "y": 0},
            "inputs": [],
            "outputs": [],
            "version": "1.0",
            **fields,
        }
    )


class TestStoreNodeToFlowNode:
    """Tests for store_node_to_flow_node."""

    def test_converts_store_node_to_flow_node(self) -> None:
        result = store_node_to_flow_node(_store_node(), echo)

        assert result.id == "test-id"
        assert result.type == FlowNodeType.USER_INPUT
        assert [item.key for item in result.data.inputs] == [item.key for item in USER_INPUT.inputs]
        assert [item.key for item in result.data.outputs] == [item.key for item in USER_INPUT.outputs]

    def test_keeps_dynamic_inputs(self) -> None:
        node = _store_node(inputs=[{"key": "dynamicInput", "renderTypeList": [FlowNodeInputType.ADD_INPUT_PARAM]}])

        result = store_node_to_flow_node(node, echo)

        dynamic = next(item for item in result.data.inputs if item.key == "dynamicInput")
        assert FlowNodeInputType.ADD_INPUT_PARAM in dynamic.render_type_list
        # Template inputs come first, user additions after them
        assert [item.key for item in result.data.inputs] == [*(item.key for item in USER_INPUT.inputs), "dynamicInput"]

    def test_dynamic_input_alone_on_placeholder_is_first(self) -> None:
        node = _store_node("unknownKind", inputs=[{"key": "dynamicInput", "renderTypeList": [FlowNodeInputType.ADD_INPUT_PARAM]}])

        result = store_node_to_flow_node(node, echo)

        assert result.data.inputs[0].key == "dynamicInput"

    def test_dynamic_input_wins_over_template_input_of_same_key(self) -> None:
        saved = {
            "key": NodeInputKey.ADD_INPUT_PARAM,
            "renderTypeList": [FlowNodeInputType.ADD_INPUT_PARAM],
            "value": {"custom": True},
            "label": "user label",
        }
        node = _store_node(FlowNodeType.HTTP_REQUEST, inputs=[saved])

        result = store_node_to_flow_node(node, echo)

        kept = next(item for item in result.data.inputs if item.key == NodeInputKey.ADD_INPUT_PARAM)
        assert kept.value == {"custom": True}
        assert kept.label == "user label"

    def test_saved_value_is_overlaid_on_template_shape(self) -> None:
        node = _store_node(
            FlowNodeType.USER_INPUT,
            inputs=[{"key": NodeInputKey.USER_INPUT_FORMS, "value": ["form1"], "required": False}],
        )

        result = store_node_to_flow_node(node, echo)

        forms = next(item for item in result.data.inputs if item.key == NodeInputKey.USER_INPUT_FORMS)
        assert forms.value == ["form1"]
        # Shape comes from the template, not the saved copy.
        assert forms.required is True
        assert forms.render_type_list == [FlowNodeInputType.CUSTOM]

    def test_saved_selected_type_index_is_kept(self, simple_template: NodeTemplate) -> None:
        node = _store_node(
            "answerNode",
            inputs=[{"key": "text", "value": ["start", "userChatInput"], "selectedTypeIndex": 1}],
        )

        result = store_node_to_flow_node(node, echo, templates={"answerNode": simple_template})

        text = result.data.inputs[0]
        assert text.selected_type_index == 1
        assert text.selected_render_type == FlowNodeInputType.REFERENCE

    def test_missing_key_gets_template_default(self) -> None:
        result = store_node_to_flow_node(_store_node(FlowNodeType.HTTP_REQUEST), echo)

        method = next(item for item in result.data.inputs if item.key == NodeInputKey.HTTP_METHOD)
        assert method.value == "POST"

    def test_unknown_saved_inputs_are_dropped(self, simple_template: NodeTemplate) -> None:
        node = _store_node("answerNode", inputs=[{"key": "obsolete", "value": "x"}])

        result = store_node_to_flow_node(node, echo, templates={"answerNode": simple_template})

        assert [item.key for item in result.data.inputs] == ["text"]

    def test_editable_saved_inputs_are_kept(self, simple_template: NodeTemplate) -> None:
        node = _store_node("answerNode", inputs=[{"key": "userField", "value": "x", "canEdit": True}])

        result = store_node_to_flow_node(node, echo, templates={"answerNode": simple_template})

        assert [item.key for item in result.data.inputs] == ["text", "userField"]

    def test_extra_inputs_kept_when_template_accepts_params(self) -> None:
        node = _store_node(FlowNodeType.HTTP_REQUEST, inputs=[{"key": "city", "value": "Paris"}])

        result = store_node_to_flow_node(node, echo)

        keys = [item.key for item in result.data.inputs]
        assert keys[: len(HTTP_REQUEST.inputs)] == [item.key for item in HTTP_REQUEST.inputs]
        assert keys[-1] == "city"

    def test_outputs_come_from_template(self, simple_template: NodeTemplate) -> None:
        node = _store_node("answerNode", outputs=[{"key": "stale", "valueType": "number"}])

        result = store_node_to_flow_node(node, echo, templates={"answerNode": simple_template})

        assert [item.id for item in result.data.outputs] == ["answerText"]

    def test_unset_name_falls_back_to_translated_template_name(self, simple_template: NodeTemplate) -> None:
        result = store_node_to_flow_node(
            _store_node("answerNode"),
            lambda key: key.upper(),
            templates={"answerNode": simple_template},
        )

        assert result.data.name == "WORKFLOW:ANSWER"
        assert result.data.intro == "WORKFLOW:ANSWER_INTRO"

    def test_user_name_is_kept(self, simple_template: NodeTemplate) -> None:
        node = _store_node("answerNode", name="My reply", intro="")

        result = store_node_to_flow_node(node, echo, templates={"answerNode": simple_template})

        assert result.data.name == "My reply"
        assert result.data.intro == ""

    def test_saved_version_is_kept(self) -> None:
        result = store_node_to_flow_node(_store_node(), echo)

        assert result.data.version == "1.0"

    def test_missing_version_takes_template_version(self, simple_template: NodeTemplate) -> None:
        node = _store_node("answerNode", version=None)

        result = store_node_to_flow_node(node, echo, templates={"answerNode": simple_template})

        assert result.data.version == "481"

    def test_unknown_kind_loads_against_placeholder(self) -> None:
        node = _store_node(
            "retiredNode",
            inputs=[
                {"key": "plain", "value": 1},
                {"key": "param", "renderTypeList": [FlowNodeInputType.ADD_INPUT_PARAM]},
            ],
        )

        with structlog.testing.capture_logs() as logs:
            result = store_node_to_flow_node(node, echo)

        assert result.type == "retiredNode"
        assert result.data.flow_node_type == "retiredNode"
        assert [item.key for item in result.data.inputs] == ["param"]
        assert result.data.outputs == []
        assert any(entry["log_level"] == "warning" and entry["flow_node_type"] == "retiredNode" for entry in logs)

    def test_parent_override_raises_z_index(self) -> None:
        result = store_node_to_flow_node(_store_node(), echo, parent_node_id="loop1")

        assert result.data.parent_node_id == "loop1"
        assert result.z_index == CHILD_NODE_Z_INDEX

    def test_missing_position_defaults_to_origin(self) -> None:
        result = store_node_to_flow_node(_store_node(position=None), echo)

        assert result.position == Position(x=0, y=0)

    def test_result_does_not_share_inputs_with_store_node(self) -> None:
        node = _store_node(inputs=[{"key": NodeInputKey.USER_INPUT_FORMS, "value": ["form1"]}])

        result = store_node_to_flow_node(node, echo)
        next(item for item in result.data.inputs if item.key == NodeInputKey.USER_INPUT_FORMS).value.append("form2")

        assert node.inputs[0].value == ["form1"]


class TestGetLatestNodeTemplate:
    """Tests for get_latest_node_template."""

    def test_updates_node_to_latest_template(self) -> None:
        node = FlowNodeItem(
            node_id="test",
            flow_node_type=FlowNodeType.USER_INPUT,
            inputs=[FlowNodeInputItem(key="input1", value="test")],
            outputs=[FlowNodeOutputItem(key="output1", value="test")],
            name="Old Name",
            intro="Old Intro",
        )
        template = EMPTY_NODE_TEMPLATE.model_copy(
            update={
                "inputs": [FlowNodeInputItem(key="input1"), FlowNodeInputItem(key="input2")],
                "outputs": [FlowNodeOutputItem(key="output1"), FlowNodeOutputItem(key="output2")],
            }
        )

        result = get_latest_node_template(node, template)

        assert len(result.inputs) == 2
        assert len(result.outputs) == 2
        assert result.name == "Old Name"
        assert result.intro == "Old Intro"
        assert result.inputs[0].value == "test"
        assert result.inputs[1].value is None

    def test_takes_template_kind_and_version(self, simple_template: NodeTemplate) -> None:
        node = FlowNodeItem(node_id="n", flow_node_type="answerNode", version="1", name="Reply")

        result = get_latest_node_template(node, simple_template)

        assert result.version == "481"
        assert result.node_id == "n"
        assert result.flow_node_type == "answerNode"


class TestFlowNodeToStoreNode:
    """Tests for flow_node_to_store_node."""

    def test_round_trip_keeps_user_data(self) -> None:
        node = _store_node(
            inputs=[
                {"key": NodeInputKey.USER_INPUT_FORMS, "value": ["form1"]},
                {"key": "dynamicInput", "renderTypeList": [FlowNodeInputType.ADD_INPUT_PARAM], "value": 3},
            ],
            name="Ask",
            position={"x": 12, "y": 34},
        )

        stored = flow_node_to_store_node(store_node_to_flow_node(node, echo))

        assert stored.node_id == "test-id"
        assert stored.name == "Ask"
        assert stored.position == Position(x=12, y=34)
        values = {item.key: item.value for item in stored.inputs}
        assert values[NodeInputKey.USER_INPUT_FORMS] == ["form1"]
        assert values["dynamicInput"] == 3

    def test_wire_form_is_camel_case(self) -> None:
        stored = flow_node_to_store_node(store_node_to_flow_node(_store_node(), echo))

        wire = stored.to_wire()
        assert wire["nodeId"] == "test-id"
        assert wire["flowNodeType"] == FlowNodeType.USER_INPUT
        assert "renderTypeList" in wire["inputs"][0]
