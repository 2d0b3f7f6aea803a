"""The contract between the validation engine and whatever stores workflows.

A store must call ensure_saveable before writing a new or updated graph
and ensure_owner before touching an existing record. Both raise before any
side effect happens, so a rejected request never leaves partial writes.
"""

import logging
from typing import Protocol, Sequence

from flowgraph.exceptions import OwnerMismatchError, WorkflowValidationError
from flowgraph.models.graph_topology import WorkflowEdge, WorkflowGraph, WorkflowNode
from flowgraph.models.workflow import Workflow, WorkflowCreate, WorkflowUpdate
from flowgraph.validation.workflow_validator import ValidationResult, validate_workflow

logger = logging.getLogger(__name__)


def ensure_saveable(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
) -> ValidationResult:
    """Gate a save on referential integrity and structural validity.

    Raises GraphIntegrityError for duplicate ids or dangling edges and
    WorkflowValidationError when the engine reports errors. Warnings do not
    block; the returned result still carries them.
    """
    WorkflowGraph.from_parts(nodes, edges)

    result = validate_workflow(nodes, edges)
    if not result.is_valid:
        logger.warning(
            "rejected save: %s", "; ".join(issue.message for issue in result.errors)
        )
        raise WorkflowValidationError(result)
    return result


def ensure_owner(workflow: Workflow, owner: str) -> None:
    """Fail unless ``owner`` may read or change ``workflow``."""
    if workflow.owner != owner:
        raise OwnerMismatchError(workflow.id, owner)


class WorkflowStore(Protocol):
    """Operations a workflow store exposes, all scoped by owner."""

    def create(self, request: WorkflowCreate) -> Workflow: ...

    def get(self, workflow_id: str, owner: str) -> Workflow: ...

    def list_for_owner(self, owner: str) -> list[Workflow]: ...

    def update(self, request: WorkflowUpdate) -> Workflow: ...

    def delete(self, workflow_id: str, owner: str) -> None: ...

    def delete_all_for_owner(self, owner: str) -> int: ...
