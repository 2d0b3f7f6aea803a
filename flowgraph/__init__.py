"""Flowgraph - workflow graph model and structural validation for automation pipelines."""

from flowgraph.models.node_config import (
    NodeKind,
    default_config,
    derive_label,
    validate_config,
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
from flowgraph.persistence import ensure_owner, ensure_saveable
from flowgraph.validation import ValidationIssue, ValidationResult, validate_workflow

__all__ = [
    # Node configuration
    "NodeKind",
    "default_config",
    "derive_label",
    "validate_config",
    # Graph
    "Position",
    "WorkflowEdge",
    "WorkflowGraph",
    "WorkflowNode",
    # Persistence
    "Workflow",
    "WorkflowCreate",
    "WorkflowUpdate",
    "ensure_owner",
    "ensure_saveable",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    "validate_workflow",
]
