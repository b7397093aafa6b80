"""Shared contracts: enums, wire models and boundary exceptions.

Leaf package. Nothing here imports from flowkit.core or flowkit.plugins.
"""

from flowkit.contracts.chat import ModelCapabilities
from flowkit.contracts.constants import (
    CHILD_NODE_Z_INDEX,
    EDGE_TYPE,
    VARIABLE_NODE_ID,
    NodeInputKey,
    NodeOutputKey,
)
from flowkit.contracts.dataset import (
    APIFileServer,
    DatasetSource,
    FeishuServer,
    FetchedPage,
    QAChunk,
    YuqueServer,
)
from flowkit.contracts.enums import (
    DatasetSourceReadType,
    FlowNodeInputType,
    FlowNodeOutputType,
    FlowNodeType,
    WorkflowIOValueType,
)
from flowkit.contracts.errors import SourceReadError
from flowkit.contracts.workflow import (
    UNKNOWN_REF_DATA,
    ChatConfig,
    FlowNode,
    FlowNodeInputItem,
    FlowNodeItem,
    FlowNodeOutputItem,
    NodeTemplate,
    Position,
    RefData,
    ReferenceValue,
    RenderEdge,
    StoreEdge,
    StoreNode,
    StoreWorkflow,
    VariableItem,
)

__all__ = [
    "CHILD_NODE_Z_INDEX",
    "EDGE_TYPE",
    "UNKNOWN_REF_DATA",
    "VARIABLE_NODE_ID",
    "APIFileServer",
    "ChatConfig",
    "DatasetSource",
    "DatasetSourceReadType",
    "FeishuServer",
    "FetchedPage",
    "FlowNode",
    "FlowNodeInputItem",
    "FlowNodeInputType",
    "FlowNodeItem",
    "FlowNodeOutputItem",
    "FlowNodeOutputType",
    "FlowNodeType",
    "ModelCapabilities",
    "NodeInputKey",
    "NodeOutputKey",
    "NodeTemplate",
    "Position",
    "QAChunk",
    "RefData",
    "ReferenceValue",
    "RenderEdge",
    "SourceReadError",
    "StoreEdge",
    "StoreNode",
    "StoreWorkflow",
    "VariableItem",
    "WorkflowIOValueType",
    "YuqueServer",
]
