"""Structural validation of workflow graphs."""

from flowgraph.validation.workflow_validator import (
    CYCLE_MESSAGE,
    ValidationIssue,
    ValidationResult,
    find_orphaned_nodes,
    has_cycle,
    validate_workflow,
)

__all__ = [
    "CYCLE_MESSAGE",
    "ValidationIssue",
    "ValidationResult",
    "find_orphaned_nodes",
    "has_cycle",
    "validate_workflow",
]
