"""Core data models for flowgraph."""

from flowgraph.models.node_config import (
    Condition,
    DecisionSplitConfig,
    FieldError,
    NodeConfig,
    NodeKind,
    ProfileUpdate,
    SendEmailConfig,
    UpdateProfileConfig,
    WaitConfig,
)
from flowgraph.models.graph_topology import (
    Position,
    WorkflowEdge,
    WorkflowGraph,
    WorkflowNode,
)
from flowgraph.models.workflow import (
    Workflow,
    WorkflowCreate,
    WorkflowUpdate,
)

__all__ = [
    # Node configs
    "Condition",
    "DecisionSplitConfig",
    "FieldError",
    "NodeConfig",
    "NodeKind",
    "ProfileUpdate",
    "SendEmailConfig",
    "UpdateProfileConfig",
    "WaitConfig",
    # Graph
    "Position",
    "WorkflowEdge",
    "WorkflowGraph",
    "WorkflowNode",
    # Persisted records
    "Workflow",
    "WorkflowCreate",
    "WorkflowUpdate",
]
