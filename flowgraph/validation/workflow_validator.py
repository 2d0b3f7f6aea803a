"""Structural validation of a workflow graph.

validate_workflow is a pure function of the node and edge lists it is
given. It reports two things:

- orphaned nodes (warning): nodes not touched by any edge, in a graph of
  two or more nodes. A lone node is the normal starting state.
- circular dependencies (error): any directed cycle, self-loops included.
  Only the first cycle found is reported, without naming its members.

Per-node config problems are not checked here; see
flowgraph.models.node_config.validate_config.
"""

import logging
from typing import Iterator, Literal, Sequence

from flowgraph.models.base import CamelModel
from flowgraph.models.graph_topology import WorkflowEdge, WorkflowNode

logger = logging.getLogger(__name__)

CYCLE_MESSAGE = "Circular dependency detected. This will cause infinite loops."


def orphan_message(count: int) -> str:
    return (
        f"Found {count} orphaned node(s). "
        "Consider connecting them to the main workflow."
    )


class ValidationIssue(CamelModel):
    """a single structural error or warning."""

    severity: Literal["error", "warning"]
    message: str
    node_id: str | None = None


class ValidationResult(CamelModel):
    """outcome of one validation pass; never persisted."""

    is_valid: bool
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []


def find_orphaned_nodes(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
) -> list[str]:
    """Return ids of nodes that are neither the source nor target of any edge."""
    if len(nodes) <= 1:
        return []

    connected: set[str] = set()
    for edge in edges:
        connected.add(edge.source)
        connected.add(edge.target)

    return [node.id for node in nodes if node.id not in connected]


def has_cycle(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
) -> bool:
    """Depth-first search for a back edge, starting from every unvisited node.

    Uses an explicit stack so deep chains do not hit the recursion limit.
    Edges pointing at ids that are not in ``nodes`` are followed like any
    other edge; an id with no outgoing edges is just a leaf.
    """
    adjacency: dict[str, list[str]] = {node.id: [] for node in nodes}
    for edge in edges:
        adjacency.setdefault(edge.source, []).append(edge.target)

    visited: set[str] = set()
    on_stack: set[str] = set()

    for node in nodes:
        start = node.id
        if start in visited:
            continue

        visited.add(start)
        on_stack.add(start)
        stack: list[tuple[str, Iterator[str]]] = [(start, iter(adjacency[start]))]

        while stack:
            current, pending = stack[-1]
            neighbor = next(pending, None)
            if neighbor is None:
                stack.pop()
                on_stack.discard(current)
                continue
            if neighbor in on_stack:
                return True
            if neighbor not in visited:
                visited.add(neighbor)
                on_stack.add(neighbor)
                stack.append((neighbor, iter(adjacency.get(neighbor, []))))

    return False


def validate_workflow(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
) -> ValidationResult:
    """Validate the structure of a workflow.

    ``is_valid`` is true iff there are no errors; warnings never affect it.
    Calling this repeatedly on the same input yields equal results.
    """
    if not nodes:
        return ValidationResult(is_valid=True, errors=[], warnings=[])

    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []

    orphaned = find_orphaned_nodes(nodes, edges)
    if orphaned:
        warnings.append(
            ValidationIssue(severity="warning", message=orphan_message(len(orphaned)))
        )

    if has_cycle(nodes, edges):
        errors.append(ValidationIssue(severity="error", message=CYCLE_MESSAGE))

    logger.debug(
        "validated %d nodes / %d edges: %d error(s), %d warning(s)",
        len(nodes),
        len(edges),
        len(errors),
        len(warnings),
    )
    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)
