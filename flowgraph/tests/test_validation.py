"""Tests for structural workflow validation."""

import pytest

from flowgraph.models.graph_topology import WorkflowEdge, WorkflowNode
from flowgraph.models.node_config import NodeKind, SendEmailConfig
from flowgraph.validation import CYCLE_MESSAGE, has_cycle, validate_workflow


def _nodes(*ids: str) -> list[WorkflowNode]:
    return [WorkflowNode(id=node_id, kind=NodeKind.wait) for node_id in ids]


def _edges(*pairs: str) -> list[WorkflowEdge]:
    """Build edges from "A>B" strings."""
    edges = []
    for pair in pairs:
        source, target = pair.split(">")
        edges.append(WorkflowEdge(id=f"e-{source}-{target}", source=source, target=target))
    return edges


class TestScenarios:
    """The reference scenarios for the validation engine."""

    def test_empty_workflow_is_valid(self):
        """An empty canvas has nothing to report."""
        result = validate_workflow([], [])
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_single_node_is_valid(self):
        """One node alone is never orphaned."""
        result = validate_workflow(_nodes("A"), [])
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_connected_pair_is_valid(self):
        """Two connected nodes are valid."""
        result = validate_workflow(_nodes("A", "B"), _edges("A>B"))
        assert result.is_valid
        assert result.warnings == []

    def test_one_orphan_warns(self):
        """An unconnected node gets a warning, not an error."""
        result = validate_workflow(_nodes("A", "B", "C"), _edges("A>C"))
        assert result.is_valid
        assert result.errors == []
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert warning.severity == "warning"
        assert "1 orphaned node" in warning.message
        assert warning.message == (
            "Found 1 orphaned node(s). Consider connecting them to the main workflow."
        )

    def test_mutual_edges_are_a_cycle(self):
        """A to B and back is a cycle."""
        result = validate_workflow(_nodes("A", "B"), _edges("A>B", "B>A"))
        assert not result.is_valid
        assert len(result.errors) == 1
        assert "Circular dependency" in result.errors[0].message
        assert result.warnings == []

    def test_three_cycle(self):
        """A longer loop is a cycle too."""
        result = validate_workflow(_nodes("A", "B", "C"), _edges("A>B", "B>C", "C>A"))
        assert not result.is_valid
        assert [e.message for e in result.errors] == [CYCLE_MESSAGE]

    def test_cycle_and_orphan_together(self):
        """Cycle errors and orphan warnings are reported together."""
        result = validate_workflow(_nodes("A", "B", "C"), _edges("A>B", "B>A"))
        assert not result.is_valid
        assert len(result.errors) == 1
        assert len(result.warnings) == 1
        assert "1 orphaned node" in result.warnings[0].message


class TestOrphans:
    """Test the orphan warning."""

    def test_lone_node_never_orphaned_even_with_self_loop(self):
        """A single node is not orphaned even with a self loop."""
        result = validate_workflow(_nodes("A"), _edges("A>A"))
        assert result.warnings == []

    def test_all_connected_no_warning(self):
        """Disjoint connected pairs are not orphans."""
        result = validate_workflow(
            _nodes("A", "B", "C", "D"), _edges("A>B", "C>D")
        )
        assert result.is_valid
        assert result.warnings == []

    def test_orphans_counted_in_single_warning(self):
        """All orphans share one warning."""
        result = validate_workflow(_nodes("A", "B", "C", "D"), [])
        assert len(result.warnings) == 1
        assert result.warnings[0].message.startswith("Found 4 orphaned node(s).")


class TestCycles:
    """Test cycle detection."""

    def test_self_loop_is_a_cycle(self):
        """An edge from a node to itself is a cycle."""
        result = validate_workflow(_nodes("A"), _edges("A>A"))
        assert not result.is_valid
        assert [e.message for e in result.errors] == [CYCLE_MESSAGE]

    def test_many_cycles_reported_once(self):
        """Any number of cycles gives one error."""
        result = validate_workflow(
            _nodes("A", "B", "C", "D"),
            _edges("A>B", "B>A", "C>D", "D>C", "A>A"),
        )
        assert len(result.errors) == 1

    def test_diamond_is_not_a_cycle(self):
        """Converging branches are not a cycle."""
        result = validate_workflow(
            _nodes("A", "B", "C", "D"),
            _edges("A>B", "A>C", "B>D", "C>D"),
        )
        assert result.is_valid

    def test_cycle_reachable_only_from_later_node(self):
        """Cycles are found from every start node."""
        nodes = _nodes("A", "B", "C", "D")
        assert has_cycle(nodes, _edges("A>B", "C>D", "D>C"))

    def test_back_edge_into_visited_branch_is_not_a_cycle(self):
        """Reaching a fully explored node again is not a cycle."""
        # B is fully explored before C reaches it
        assert not has_cycle(_nodes("A", "B", "C"), _edges("A>B", "A>C", "C>B"))

    def test_deep_chain_does_not_hit_recursion_limit(self):
        """Long chains are searched without recursion."""
        ids = [f"n{i}" for i in range(5000)]
        edges = [
            WorkflowEdge(id=f"e{i}", source=ids[i], target=ids[i + 1])
            for i in range(len(ids) - 1)
        ]
        nodes = _nodes(*ids)
        assert validate_workflow(nodes, edges).is_valid

        closing = WorkflowEdge(id="back", source=ids[-1], target=ids[0])
        assert not validate_workflow(nodes, edges + [closing]).is_valid

    def test_dangling_edge_does_not_crash(self):
        """An edge to an unknown node is treated as a leaf."""
        result = validate_workflow(_nodes("A", "B"), _edges("A>B", "B>ghost"))
        assert result.is_valid


class TestEngineProperties:
    """Test properties that hold for any input."""

    def test_idempotent(self):
        """Validating twice gives the same result."""
        nodes = _nodes("A", "B", "C")
        edges = _edges("A>B", "B>A")
        assert validate_workflow(nodes, edges) == validate_workflow(nodes, edges)

    def test_does_not_modify_input(self):
        """Validation leaves its inputs untouched."""
        nodes = _nodes("A", "B")
        edges = _edges("A>B")
        validate_workflow(nodes, edges)
        assert [n.id for n in nodes] == ["A", "B"]
        assert [e.id for e in edges] == ["e-A-B"]

    def test_config_errors_not_aggregated(self):
        """A node with an invalid config does not make the graph invalid."""
        node = WorkflowNode(id="mail", kind=NodeKind.send_email, config=SendEmailConfig(subject=""))
        assert validate_workflow([node], []).is_valid

    @pytest.mark.parametrize("node_count", [2, 3, 6])
    def test_fully_chained_graph_has_no_warnings(self, node_count):
        """Chains of any length have no orphans."""
        ids = [f"n{i}" for i in range(node_count)]
        pairs = [f"{ids[i]}>{ids[i + 1]}" for i in range(node_count - 1)]
        result = validate_workflow(_nodes(*ids), _edges(*pairs))
        assert result.warnings == []
        assert result.is_valid

    def test_result_serializes_for_editor(self):
        """Results dump with camelCase keys."""
        result = validate_workflow(_nodes("A", "B"), _edges("A>B", "B>A"))
        data = result.model_dump(by_alias=True)
        assert data["isValid"] is False
        assert data["errors"][0] == {
            "severity": "error",
            "message": CYCLE_MESSAGE,
            "nodeId": None,
        }
