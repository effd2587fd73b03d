"""Structural checks for persisted topologies.

The editor never produces cycles or bad parent indices, but stored data can
come from anywhere. These checks mirror what the API server enforces before
accepting a topology.
"""

import logging
from collections import Counter

from topology.errors import MalformedTopologyError
from topology.models.persisted import PersistedNode, PersistedTopology

logger = logging.getLogger(__name__)

MAX_PARENTS = 2


def _parent_edges(nodes: list[PersistedNode]) -> list[list[int]]:
    """Adjacency list node -> parent indices, out-of-range indices dropped."""
    count = len(nodes)
    return [[p for p in node.parents if 0 <= p < count] for node in nodes]


def strongly_connected_components(edges: list[list[int]]) -> list[list[int]]:
    """Tarjan's algorithm over an index graph.

    Iterative so deep parent chains do not hit the recursion limit.

    Args:
        edges: edges[i] lists the indices node i points to.

    Returns:
        Components as lists of node indices, in the order Tarjan closes them.
    """
    index: dict[int, int] = {}
    lowlink: dict[int, int] = {}
    on_stack: set[int] = set()
    stack: list[int] = []
    components: list[list[int]] = []
    counter = 0

    for start in range(len(edges)):
        if start in index:
            continue

        index[start] = lowlink[start] = counter
        counter += 1
        stack.append(start)
        on_stack.add(start)
        work = [(start, iter(edges[start]))]

        while work:
            vertex, neighbours = work[-1]
            descended = False
            for target in neighbours:
                if target not in index:
                    index[target] = lowlink[target] = counter
                    counter += 1
                    stack.append(target)
                    on_stack.add(target)
                    work.append((target, iter(edges[target])))
                    descended = True
                    break
                if target in on_stack:
                    lowlink[vertex] = min(lowlink[vertex], index[target])
            if descended:
                continue

            work.pop()
            if work:
                caller = work[-1][0]
                lowlink[caller] = min(lowlink[caller], lowlink[vertex])

            if lowlink[vertex] == index[vertex]:
                component = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == vertex:
                        break
                components.append(component)

    return components


def find_cycles(nodes: list[PersistedNode]) -> list[list[str]]:
    """Cache group names of every parent cycle in the node list.

    Both primary and secondary parent references count as edges. A node that
    lists itself as a parent is reported as a one-node cycle.
    """
    edges = _parent_edges(nodes)
    cycles = []
    for component in strongly_connected_components(edges):
        if len(component) == 1:
            only = component[0]
            if only not in edges[only]:
                continue
        cycles.append([nodes[i].cachegroup for i in sorted(component)])
    return cycles


def validate_topology(topology: PersistedTopology) -> list[str]:
    """Collect every structural problem with a persisted topology.

    Returns:
        Human-readable problem descriptions, empty when the topology is valid.
    """
    problems: list[str] = []
    nodes = topology.nodes
    count = len(nodes)

    if not topology.name.strip():
        problems.append("topology name must not be empty")

    names = Counter(node.cachegroup for node in nodes)
    for name, seen in names.items():
        if seen > 1:
            problems.append(f"cache group {name} appears {seen} times")

    for position, node in enumerate(nodes):
        label = node.cachegroup or f"node {position}"
        if not node.cachegroup:
            problems.append(f"node {position} has no cache group")
        if len(node.parents) > MAX_PARENTS:
            problems.append(
                f"{label} has {len(node.parents)} parents, at most {MAX_PARENTS} allowed"
            )
        for parent in node.parents:
            if parent == position:
                problems.append(f"{label} cannot be its own parent")
            elif not 0 <= parent < count:
                problems.append(f"{label} refers to missing parent index {parent}")
        if len(node.parents) == 2 and node.parents[0] == node.parents[1]:
            problems.append(f"{label} has the same primary and secondary parent")

    for cycle in find_cycles(nodes):
        if len(cycle) > 1:
            problems.append(f"parent cycle between cache groups: {', '.join(cycle)}")

    if problems:
        logger.warning(f"Topology {topology.name!r} has {len(problems)} problem(s)")
    return problems


def ensure_valid(topology: PersistedTopology) -> PersistedTopology:
    """Raise MalformedTopologyError unless the topology passes validation."""
    problems = validate_topology(topology)
    if problems:
        raise MalformedTopologyError(
            f"Topology {topology.name} is malformed: {problems[0]}",
            problems,
        )
    return topology
