"""Tests for structural validation of persisted topologies."""

import pytest

from topology.analysis.validation import (
    ensure_valid,
    find_cycles,
    strongly_connected_components,
    validate_topology,
)
from topology.errors import MalformedTopologyError
from topology.models.persisted import PersistedNode, PersistedTopology


def _nodes(*nodes: tuple[str, list[int]]) -> list[PersistedNode]:
    return [PersistedNode(cachegroup=name, parents=parents) for name, parents in nodes]


class TestStronglyConnectedComponents:
    """Test Tarjan's algorithm on index graphs."""

    def test_acyclic_graph_has_singletons(self):
        """Every node of a tree is its own component."""
        components = strongly_connected_components([[], [0], [0], [1, 2]])

        assert sorted(len(c) for c in components) == [1, 1, 1, 1]

    def test_finds_cycle(self):
        """A ring of three nodes forms one component."""
        components = strongly_connected_components([[1], [2], [0], []])

        assert sorted(sorted(c) for c in components) == [[0, 1, 2], [3]]

    def test_long_chain_does_not_recurse(self):
        """Deep parent chains are handled iteratively."""
        depth = 5000
        edges = [[]] + [[i - 1] for i in range(1, depth)]

        assert len(strongly_connected_components(edges)) == depth


class TestFindCycles:
    """Test cycle reporting by cache group name."""

    def test_no_cycles(self):
        assert find_cycles(_nodes(("A", []), ("B", [0]), ("C", [0, 1]))) == []

    def test_primary_cycle(self):
        """A <-> B through primary parents."""
        assert find_cycles(_nodes(("A", [1]), ("B", [0]), ("C", []))) == [["A", "B"]]

    def test_secondary_parent_cycle(self):
        """Secondary parent references count as edges too."""
        nodes = _nodes(("R", []), ("A", [0, 2]), ("B", [1]))

        assert find_cycles(nodes) == [["A", "B"]]

    def test_self_parent(self):
        """A node listing itself as parent is a one-node cycle."""
        assert find_cycles(_nodes(("A", [0]))) == [["A"]]

    def test_out_of_range_indices_ignored(self):
        assert find_cycles(_nodes(("A", [3]))) == []


class TestValidateTopology:
    """Test the full list of structural problems."""

    def test_valid_topology(self):
        topology = PersistedTopology(name="ok", nodes=_nodes(("A", []), ("B", [0]), ("C", [0, 1])))

        assert validate_topology(topology) == []
        assert ensure_valid(topology) is topology

    def test_reports_each_problem(self):
        """Every broken rule shows up in the problem list."""
        topology = PersistedTopology(name=" ", nodes=_nodes(
            ("A", []),
            ("A", [0]),
            ("", [0]),
            ("C", [3]),
            ("D", [9]),
            ("E", [0, 0]),
            ("F", [0, 1, 2]),
        ))

        problems = validate_topology(topology)

        assert "topology name must not be empty" in problems
        assert "cache group A appears 2 times" in problems
        assert "node 2 has no cache group" in problems
        assert "C cannot be its own parent" in problems
        assert "D refers to missing parent index 9" in problems
        assert "E has the same primary and secondary parent" in problems
        assert "F has 3 parents, at most 2 allowed" in problems

    def test_reports_cycles(self):
        topology = PersistedTopology(name="loop", nodes=_nodes(("A", [2]), ("B", [0]), ("C", [1])))

        problems = validate_topology(topology)

        assert problems == ["parent cycle between cache groups: A, B, C"]

    def test_ensure_valid_raises(self):
        """ensure_valid raises with all problems attached."""
        topology = PersistedTopology(name="bad", nodes=_nodes(("A", [4])))

        with pytest.raises(MalformedTopologyError) as exc_info:
            ensure_valid(topology)

        assert exc_info.value.problems == ["A refers to missing parent index 4"]
        assert isinstance(exc_info.value, ValueError)
