"""Tests for simulation/topology.py: grouping terminals into electrical nodes."""

import pytest
from simulation.topology import (
    UnknownTerminalError,
    build_adjacency,
    index_terminals,
    label_components,
    resolve_topology,
)
from tests.conftest import make_component, make_wire


class TestIndexTerminals:
    def test_flat_ids_follow_declaration_order(self):
        components = [make_component("Resistor", "R1", 1), make_component("Junction", "J1")]
        index = index_terminals(components)
        assert list(index.items()) == [
            (("R1", 0), 0),
            (("R1", 1), 1),
            (("J1", 0), 2),
            (("J1", 1), 3),
            (("J1", 2), 4),
            (("J1", 3), 5),
        ]


class TestLabelComponents:
    def test_isolated_entries_get_their_own_group(self):
        count, labels = label_components([[], [], []])
        assert count == 3
        assert labels == [0, 1, 2]

    def test_chain_is_one_group(self):
        adjacency = [[1], [0, 2], [1], []]
        count, labels = label_components(adjacency)
        assert count == 2
        assert labels == [0, 0, 0, 1]


class TestResolveTopology:
    def test_voltage_divider_nodes(self, voltage_divider):
        components, wires = voltage_divider
        topo = resolve_topology(components, wires)

        assert topo.node_count == 3
        assert topo.node_of(("V1", 0)) == 0
        assert topo.node_of(("R2", 1)) == 0
        assert topo.node_of(("V1", 1)) == 1
        assert topo.node_of(("R1", 0)) == 1
        assert topo.node_of(("R1", 1)) == 2
        assert topo.node_of(("R2", 0)) == 2

    def test_every_terminal_has_exactly_one_node(self, bridge_circuit):
        components, wires = bridge_circuit
        topo = resolve_topology(components, wires)
        all_terminals = [t for c in components for t in c.get_terminals()]
        assert sorted(topo.terminal_to_node) == sorted(all_terminals)
        assert all(0 <= n < topo.node_count for n in topo.terminal_to_node.values())

    def test_unconnected_terminals_get_singleton_nodes(self):
        components = [make_component("Resistor", "R1", 100)]
        topo = resolve_topology(components, [])
        assert topo.node_count == 2
        assert topo.node_of(("R1", 0)) == 0
        assert topo.node_of(("R1", 1)) == 1

    def test_junction_terminals_share_a_node(self):
        components = [make_component("Junction", "J1")]
        topo = resolve_topology(components, [])
        assert topo.node_count == 1
        assert {topo.node_of(t) for t in components[0].get_terminals()} == {0}

    def test_ground_follows_input_order(self, voltage_divider):
        components, wires = voltage_divider
        reordered = [components[1], components[0], components[2]]
        topo = resolve_topology(reordered, wires)
        # R1[0] is now scanned first, so its cluster (V1+, R1[0]) becomes ground
        assert topo.node_of(("R1", 0)) == 0
        assert topo.node_of(("V1", 1)) == 0
        assert topo.node_of(("V1", 0)) != 0

    def test_same_input_gives_same_numbering(self, bridge_circuit):
        components, wires = bridge_circuit
        first = resolve_topology(components, wires)
        second = resolve_topology(components, wires)
        assert first.terminal_to_node == second.terminal_to_node

    def test_nodes_list_terminals_in_scan_order(self, voltage_divider):
        components, wires = voltage_divider
        nodes = resolve_topology(components, wires).nodes()
        assert [n.node_id for n in nodes] == [0, 1, 2]
        assert nodes[0].is_ground
        assert nodes[0].terminals == [("V1", 0), ("R2", 1)]
        assert nodes[2].get_label() == "N2"

    def test_terminals_of(self, voltage_divider):
        components, wires = voltage_divider
        topo = resolve_topology(components, wires)
        assert topo.terminals_of(1) == [("V1", 1), ("R1", 0)]


class TestUnknownReferences:
    def test_wire_to_missing_component(self):
        components = [make_component("Resistor", "R1", 100)]
        wires = [make_wire("R1", 0, "R9", 1)]
        with pytest.raises(UnknownTerminalError, match="R9"):
            resolve_topology(components, wires)

    def test_wire_to_out_of_range_terminal(self):
        components = [make_component("Resistor", "R1", 100), make_component("Resistor", "R2", 100)]
        wires = [make_wire("R1", 0, "R2", 2)]
        with pytest.raises(UnknownTerminalError):
            resolve_topology(components, wires)

    def test_duplicate_component_id(self, voltage_divider):
        components, wires = voltage_divider
        components = components + [make_component("Resistor", "R1", 47)]
        with pytest.raises(ValueError, match="Duplicate component id 'R1'"):
            resolve_topology(components, wires)

    def test_duplicate_id_rejected_before_indexing(self):
        components = [make_component("Junction", "J1"), make_component("Junction", "J1")]
        with pytest.raises(ValueError, match="J1"):
            index_terminals(components)

    def test_unknown_terminal_error_is_value_error(self):
        assert issubclass(UnknownTerminalError, ValueError)

    def test_node_of_unknown_terminal(self, voltage_divider):
        components, wires = voltage_divider
        topo = resolve_topology(components, wires)
        with pytest.raises(UnknownTerminalError):
            topo.node_of(("X1", 0))


class TestAdjacency:
    def test_edges_are_symmetric(self, voltage_divider):
        components, wires = voltage_divider
        index = index_terminals(components)
        adjacency = build_adjacency(components, wires, index)
        for u, neighbours in enumerate(adjacency):
            for v in neighbours:
                assert u in adjacency[v]
