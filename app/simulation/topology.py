"""
simulation/topology.py

Groups component terminals into electrical nodes using wire connectivity.

Terminals get flat integer ids in declaration order (component order, then
terminal index). Nodes are numbered by a breadth-first scan over those ids,
so the numbering is a pure function of input order and node 0 (ground) is
the cluster containing the first declared terminal.
"""

import logging
from collections import deque
from dataclasses import dataclass, field

from models.node import GROUND_NODE, ElectricalNode

logger = logging.getLogger(__name__)


class UnknownTerminalError(ValueError):
    """A wire or query names a component or terminal that does not exist."""


@dataclass
class Topology:
    """Result of resolving a circuit into electrical nodes."""

    node_count: int
    terminal_ids: list[tuple[str, int]] = field(default_factory=list)
    terminal_to_node: dict[tuple[str, int], int] = field(default_factory=dict)

    def node_of(self, terminal: tuple[str, int]) -> int:
        try:
            return self.terminal_to_node[terminal]
        except KeyError:
            raise UnknownTerminalError(f"Unknown terminal reference {terminal[0]}[{terminal[1]}]") from None

    def terminals_of(self, node_id: int) -> list[tuple[str, int]]:
        """Terminals belonging to *node_id*, in declaration order."""
        return [t for t in self.terminal_ids if self.terminal_to_node[t] == node_id]

    def nodes(self) -> list[ElectricalNode]:
        result = [ElectricalNode(node_id=i) for i in range(self.node_count)]
        for terminal in self.terminal_ids:
            result[self.terminal_to_node[terminal]].terminals.append(terminal)
        return result

    @property
    def ground(self) -> int:
        return GROUND_NODE


def index_terminals(components) -> dict[tuple[str, int], int]:
    """
    Assign a flat integer id to every terminal, in declaration order.

    Raises:
        ValueError: If two components share an ID.
    """
    index = {}
    for comp in components:
        for terminal in comp.get_terminals():
            if terminal in index:
                raise ValueError(f"Duplicate component id '{comp.component_id}'.")
            index[terminal] = len(index)
    return index


def build_adjacency(components, wires, index: dict[tuple[str, int], int]) -> list[list[int]]:
    """
    Build the terminal adjacency list (one entry per flat terminal id).

    Every wire adds a symmetric edge. Junction terminals are tied to the
    junction's terminal 0, since a junction is a zero-impedance hub.

    Raises:
        UnknownTerminalError: If a wire names a terminal not in *index*.
    """
    adjacency: list[list[int]] = [[] for _ in range(len(index))]

    def link(a: int, b: int) -> None:
        adjacency[a].append(b)
        adjacency[b].append(a)

    for comp in components:
        if comp.component_type == "Junction":
            hub = index[(comp.component_id, 0)]
            for terminal in comp.get_terminals()[1:]:
                link(hub, index[terminal])

    for wire in wires:
        ends = []
        for terminal in wire.get_terminals():
            if terminal not in index:
                raise UnknownTerminalError(
                    f"Unknown terminal reference {terminal[0]}[{terminal[1]}] in {wire!r}"
                )
            ends.append(index[terminal])
        link(*ends)

    return adjacency


def label_components(adjacency: list[list[int]]) -> tuple[int, list[int]]:
    """
    Label connected groups of an adjacency list by breadth-first search.

    Returns:
        (group_count, labels) where labels[i] is the group of flat id i.
    """
    labels = [-1] * len(adjacency)
    count = 0
    for start in range(len(adjacency)):
        if labels[start] != -1:
            continue
        labels[start] = count
        queue = deque([start])
        while queue:
            u = queue.popleft()
            for v in adjacency[u]:
                if labels[v] == -1:
                    labels[v] = count
                    queue.append(v)
        count += 1
    return count, labels


def resolve_topology(components, wires) -> Topology:
    """
    Resolve components and wires into electrical nodes.

    Args:
        components: ComponentData objects in declaration order.
        wires: WireData objects.

    Returns:
        Topology mapping every terminal to a node id in 0..N-1.
    """
    components = list(components)
    index = index_terminals(components)
    adjacency = build_adjacency(components, wires, index)
    node_count, labels = label_components(adjacency)

    terminal_ids = list(index)
    terminal_to_node = {terminal: labels[i] for terminal, i in index.items()}

    logger.debug("Resolved %d terminals into %d nodes", len(terminal_ids), node_count)
    return Topology(node_count=node_count, terminal_ids=terminal_ids, terminal_to_node=terminal_to_node)
