"""API routes for saving, listing and validating workflows.

Every route that reads or changes a stored workflow takes the caller's
owner and passes it to the store, which rejects mismatches before writing.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from flowgraph.exceptions import (
    FlowgraphError,
    GraphIntegrityError,
    OwnerMismatchError,
    WorkflowNotFoundError,
    WorkflowValidationError,
)
from flowgraph.models.base import CamelModel
from flowgraph.models.graph_topology import WorkflowEdge, WorkflowNode
from flowgraph.models.workflow import Workflow, WorkflowCreate, WorkflowUpdate
from flowgraph.persistence import WorkflowStore
from flowgraph.validation.workflow_validator import ValidationResult, validate_workflow
from server.workflow_db import SqliteWorkflowStore

router = APIRouter()


# --- Request/Response Models ---


class ValidateWorkflowRequest(CamelModel):
    """Request body for a validation-only pass."""

    nodes: list[WorkflowNode]
    edges: list[WorkflowEdge]


class DeleteAllResponse(BaseModel):
    deleted: int


# --- Helper Functions ---


def get_store() -> SqliteWorkflowStore:
    return SqliteWorkflowStore()


def caller_owner(owner: str = Query(..., min_length=1)) -> str:
    """The owner query parameter, trimmed the same way stored owners are."""
    owner = owner.strip()
    if not owner:
        raise HTTPException(status_code=422, detail="owner must not be empty")
    return owner


def _to_http(exc: FlowgraphError) -> HTTPException:
    """Map a flowgraph error onto the matching HTTP status."""
    if isinstance(exc, WorkflowValidationError):
        detail = {"message": "Workflow failed validation"}
        detail.update(exc.result.model_dump(by_alias=True, mode="json"))
        return HTTPException(status_code=422, detail=detail)
    if isinstance(exc, WorkflowNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, OwnerMismatchError):
        return HTTPException(status_code=403, detail=str(exc))
    if isinstance(exc, GraphIntegrityError):
        return HTTPException(status_code=400, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


# --- API Endpoints ---


@router.get("/workflows")
def list_workflows(
    owner: str = Depends(caller_owner),
    store: WorkflowStore = Depends(get_store),
) -> list[Workflow]:
    """list an owner's workflows, newest first."""
    return store.list_for_owner(owner)


@router.post("/workflows", status_code=201)
def create_workflow(
    request: WorkflowCreate,
    store: WorkflowStore = Depends(get_store),
) -> Workflow:
    """save a new workflow if its graph passes validation."""
    try:
        return store.create(request)
    except FlowgraphError as exc:
        raise _to_http(exc) from exc


@router.post("/workflows/validate")
def validate(request: ValidateWorkflowRequest) -> ValidationResult:
    """run structural validation without saving anything."""
    return validate_workflow(request.nodes, request.edges)


@router.get("/workflows/{workflow_id}")
def get_workflow(
    workflow_id: str,
    owner: str = Depends(caller_owner),
    store: WorkflowStore = Depends(get_store),
) -> Workflow:
    try:
        return store.get(workflow_id, owner)
    except FlowgraphError as exc:
        raise _to_http(exc) from exc


@router.put("/workflows/{workflow_id}")
def update_workflow(
    workflow_id: str,
    request: WorkflowCreate,
    store: WorkflowStore = Depends(get_store),
) -> Workflow:
    """replace the name and graph of an existing workflow."""
    update = WorkflowUpdate(
        id=workflow_id,
        name=request.name,
        owner=request.owner,
        nodes=request.nodes,
        edges=request.edges,
    )
    try:
        return store.update(update)
    except FlowgraphError as exc:
        raise _to_http(exc) from exc


@router.delete("/workflows/{workflow_id}")
def delete_workflow(
    workflow_id: str,
    owner: str = Depends(caller_owner),
    store: WorkflowStore = Depends(get_store),
) -> dict:
    try:
        store.delete(workflow_id, owner)
    except FlowgraphError as exc:
        raise _to_http(exc) from exc
    return {"deleted": workflow_id}


@router.delete("/workflows")
def delete_all_workflows(
    owner: str = Depends(caller_owner),
    store: WorkflowStore = Depends(get_store),
) -> DeleteAllResponse:
    """delete every workflow the owner has."""
    return DeleteAllResponse(deleted=store.delete_all_for_owner(owner))
