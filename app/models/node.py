"""
ElectricalNode - Pure Python data model for electrical nodes.

This module contains no Qt dependencies. An electrical node is a maximal
set of component terminals joined by ideal wires (they share the same
voltage). Nodes are numbered densely from 0 each time a circuit is
resolved; node 0 is the reference (ground).
"""

from dataclasses import dataclass, field

GROUND_NODE = 0


def node_label(node_id: int) -> str:
    """Return the display label for a node id ("0" for ground, "N1", "N2", ...)."""
    if node_id == GROUND_NODE:
        return "0"
    return f"N{node_id}"


@dataclass
class ElectricalNode:
    """A resolved electrical node and the terminals it contains, in scan order."""

    node_id: int
    terminals: list[tuple[str, int]] = field(default_factory=list)

    @property
    def is_ground(self) -> bool:
        return self.node_id == GROUND_NODE

    def get_label(self) -> str:
        return node_label(self.node_id)

    def component_ids(self) -> list[str]:
        """IDs of components touching this node, without duplicates, in terminal order."""
        seen = []
        for comp_id, _ in self.terminals:
            if comp_id not in seen:
                seen.append(comp_id)
        return seen

    def __contains__(self, terminal) -> bool:
        return terminal in self.terminals

    def __repr__(self) -> str:
        return f"ElectricalNode({self.get_label()}, terminals={len(self.terminals)})"
