"""Nodes, edges and the mutable graph the editor works on.

WorkflowNode and WorkflowEdge are immutable values. WorkflowGraph is the
aggregate one editing session owns: it keeps ids unique and edges pointing
at nodes that exist, and hands out plain lists for validation and storage.
"""

from typing import Any, Iterable, Self

from pydantic import Field, computed_field, model_validator

from flowgraph.exceptions import (
    ConfigKindMismatchError,
    DuplicateIdError,
    UnknownEndpointError,
    UnknownNodeError,
)
from flowgraph.models.base import CamelModel
from flowgraph.models.node_config import NodeConfig, NodeKind, derive_label, tag_config
from flowgraph.utils.identifiers import generate_edge_id, generate_node_id


class Position(CamelModel):
    """canvas coordinate, ignored by validation."""

    model_config = {"frozen": True}

    x: float = 0.0
    y: float = 0.0


class WorkflowNode(CamelModel):
    """a single automation step."""

    model_config = {"frozen": True}

    id: str
    kind: NodeKind
    config: NodeConfig | None = None
    position: Position = Field(default_factory=Position)

    @model_validator(mode="before")
    @classmethod
    def tag_untagged_config(cls, data: Any) -> Any:
        return tag_config(data)

    @model_validator(mode="after")
    def check_config_kind(self) -> Self:
        if self.config is not None and self.config.kind != self.kind.value:
            raise ValueError(
                f"config of kind '{self.config.kind}' does not match node kind '{self.kind.value}'"
            )
        return self

    @computed_field
    @property
    def label(self) -> str:
        return derive_label(self.kind, self.config)

    @classmethod
    def create(
        cls,
        kind: NodeKind | str,
        position: Position | None = None,
        config: NodeConfig | None = None,
    ) -> "WorkflowNode":
        """Create a node with a generated id, as the canvas does on drop."""
        kind = NodeKind(kind)
        return cls(
            id=generate_node_id(kind.value),
            kind=kind,
            config=config,
            position=position or Position(),
        )

    def with_config(self, config: NodeConfig | None) -> "WorkflowNode":
        if config is not None and config.kind != self.kind.value:
            raise ConfigKindMismatchError(self.kind.value, config.kind)
        return self.model_copy(update={"config": config})


class WorkflowEdge(CamelModel):
    """a directed connection between two nodes."""

    model_config = {"frozen": True}

    id: str
    source: str
    target: str

    @classmethod
    def between(cls, source: str, target: str) -> "WorkflowEdge":
        return cls(id=generate_edge_id(source, target), source=source, target=target)


class WorkflowGraph:
    """The node/edge container edited by one session at a time."""

    def __init__(self) -> None:
        self._nodes: dict[str, WorkflowNode] = {}
        self._edges: dict[str, WorkflowEdge] = {}

    @classmethod
    def from_parts(
        cls,
        nodes: Iterable[WorkflowNode],
        edges: Iterable[WorkflowEdge],
    ) -> "WorkflowGraph":
        """Build a graph, enforcing the same rules as the mutation methods."""
        graph = cls()
        for node in nodes:
            graph.add_node(node)
        for edge in edges:
            graph.add_edge(edge)
        return graph

    @property
    def nodes(self) -> list[WorkflowNode]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[WorkflowEdge]:
        return list(self._edges.values())

    def snapshot(self) -> tuple[list[WorkflowNode], list[WorkflowEdge]]:
        """Return independent node and edge lists for validation or storage."""
        return self.nodes, self.edges

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def get_node(self, node_id: str) -> WorkflowNode:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def add_node(self, node: WorkflowNode) -> None:
        if node.id in self._nodes:
            raise DuplicateIdError("Node", node.id)
        self._nodes[node.id] = node

    def remove_node(self, node_id: str) -> None:
        """Remove a node together with every edge that touches it."""
        if node_id not in self._nodes:
            raise UnknownNodeError(node_id)
        del self._nodes[node_id]
        self._edges = {
            edge_id: edge
            for edge_id, edge in self._edges.items()
            if edge.source != node_id and edge.target != node_id
        }

    def update_config(self, node_id: str, config: NodeConfig | None) -> WorkflowNode:
        """Attach a new config to a node; its label follows automatically."""
        node = self.get_node(node_id).with_config(config)
        self._nodes[node_id] = node
        return node

    def add_edge(self, edge: WorkflowEdge) -> None:
        if edge.id in self._edges:
            raise DuplicateIdError("Edge", edge.id)
        for endpoint in (edge.source, edge.target):
            if endpoint not in self._nodes:
                raise UnknownEndpointError(edge.id, endpoint)
        self._edges[edge.id] = edge

    def remove_edge(self, edge_id: str) -> None:
        self._edges.pop(edge_id, None)

    def neighbors(self, node_id: str) -> list[str]:
        """Targets reachable through one outgoing edge, in edge insertion order."""
        return [edge.target for edge in self._edges.values() if edge.source == node_id]
