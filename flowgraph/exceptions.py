"""Exceptions raised by the graph model and the persistence contract.

Structural problems found by the validation engine (cycles, orphans) are
reported as data in a ValidationResult. The classes here cover the cases
a well-formed caller should never hit: duplicate ids, dangling edges,
saving an invalid graph, touching another owner's workflow.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flowgraph.validation.workflow_validator import ValidationResult


class FlowgraphError(Exception):
    """Base class for all flowgraph errors."""


class GraphIntegrityError(FlowgraphError):
    """A graph mutation would break referential integrity."""


class DuplicateIdError(GraphIntegrityError):
    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} id already present: {entity_id}")


class UnknownEndpointError(GraphIntegrityError):
    def __init__(self, edge_id: str, node_id: str):
        self.edge_id = edge_id
        self.node_id = node_id
        super().__init__(f"Edge {edge_id} references unknown node: {node_id}")


class UnknownNodeError(GraphIntegrityError):
    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id}")


class ConfigKindMismatchError(GraphIntegrityError):
    def __init__(self, node_kind: str, config_kind: str):
        self.node_kind = node_kind
        self.config_kind = config_kind
        super().__init__(
            f"Config of kind '{config_kind}' cannot be attached to a '{node_kind}' node"
        )


class WorkflowValidationError(FlowgraphError):
    """Raised when a save or update is attempted on a structurally invalid graph.

    Carries the full ValidationResult so the caller can surface the errors
    (and any warnings) to the user verbatim.
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(issue.message for issue in result.errors)
        super().__init__(f"Workflow failed validation: {messages}")


class OwnerMismatchError(FlowgraphError):
    def __init__(self, workflow_id: str, owner: str):
        self.workflow_id = workflow_id
        self.owner = owner
        super().__init__(f"Workflow {workflow_id} does not belong to {owner}")


class WorkflowNotFoundError(FlowgraphError):
    def __init__(self, workflow_id: str):
        self.workflow_id = workflow_id
        super().__init__(f"Workflow not found: {workflow_id}")
