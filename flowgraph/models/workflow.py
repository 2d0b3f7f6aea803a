"""Persisted workflow records and the request shapes used to write them."""

from pydantic import field_validator

from flowgraph.models.base import CamelModel
from flowgraph.models.graph_topology import WorkflowEdge, WorkflowNode


class Workflow(CamelModel):
    """a named, owned snapshot of a workflow graph."""

    id: str  # assigned by the store, immutable
    name: str
    owner: str
    nodes: list[WorkflowNode]
    edges: list[WorkflowEdge]
    created_at: str
    updated_at: str


class WorkflowCreate(CamelModel):
    """Request model for saving a new workflow."""

    name: str
    owner: str
    nodes: list[WorkflowNode]
    edges: list[WorkflowEdge]

    @field_validator("name", "owner")
    @classmethod
    def require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value


class WorkflowUpdate(WorkflowCreate):
    """Request model for replacing the graph of an existing workflow."""

    id: str
