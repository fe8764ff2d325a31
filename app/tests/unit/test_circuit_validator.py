"""
Tests for simulation/circuit_validator.py: pre-solve validation.
"""

from simulation.circuit_validator import collect_warnings, validate_circuit
from tests.conftest import make_component, make_wire


class TestValidCircuit:
    def test_voltage_divider_valid(self, voltage_divider):
        components, wires = voltage_divider
        assert validate_circuit(components, wires) == []

    def test_bridge_valid(self, bridge_circuit):
        components, wires = bridge_circuit
        assert validate_circuit(components, wires) == []

    def test_accepts_dict_of_components(self, voltage_divider):
        components, wires = voltage_divider
        by_id = {c.component_id: c for c in components}
        assert validate_circuit(by_id, wires) == []


class TestEmptyCircuit:
    def test_empty_circuit(self):
        errors = validate_circuit([], [])
        assert any("empty" in e.lower() for e in errors)
        assert any("no connections" in e.lower() for e in errors)

    def test_lone_resistor_reports_no_connections_and_isolation(self):
        errors = validate_circuit([make_component("Resistor", "R1", 100)], [])
        assert any("no connections" in e.lower() for e in errors)
        assert any("R1" in e and "isolated" in e.lower() for e in errors)


class TestIsolatedComponents:
    def test_isolated_component_named(self, voltage_divider):
        components, wires = voltage_divider
        components = components + [make_component("Resistor", "R9", 50)]
        errors = validate_circuit(components, wires)
        assert len(errors) == 1
        assert "R9" in errors[0]
        assert "isolated" in errors[0].lower()

    def test_partially_connected_is_not_isolated(self, voltage_divider):
        components, wires = voltage_divider
        components = components + [make_component("Resistor", "R9", 50)]
        wires = wires + [make_wire("R9", 0, "R1", 1)]
        assert validate_circuit(components, wires) == []


class TestSourcesAndLoads:
    def test_missing_voltage_source(self):
        components = [make_component("Current Source", "I1", 1), make_component("Resistor", "R1", 10)]
        wires = [make_wire("I1", 0, "R1", 0), make_wire("I1", 1, "R1", 1)]
        errors = validate_circuit(components, wires)
        assert errors == ["Circuit has no voltage source. Add at least one voltage source."]

    def test_missing_load(self):
        components = [make_component("Voltage Source", "V1", 5), make_component("Current Source", "I1", 1)]
        wires = [make_wire("V1", 0, "I1", 0), make_wire("V1", 1, "I1", 1)]
        errors = validate_circuit(components, wires)
        assert any("no load" in e.lower() for e in errors)

    def test_meters_count_as_loads(self):
        components = [make_component("Voltage Source", "V1", 5), make_component("Voltmeter", "VM1")]
        wires = [make_wire("V1", 0, "VM1", 0), make_wire("V1", 1, "VM1", 1)]
        assert validate_circuit(components, wires) == []


class TestValues:
    def test_zero_resistance(self, voltage_divider):
        components, wires = voltage_divider
        components[1].value = 0
        errors = validate_circuit(components, wires)
        assert len(errors) == 1
        assert "R1" in errors[0]

    def test_negative_source(self, voltage_divider):
        components, wires = voltage_divider
        components[0].value = "-5V"
        errors = validate_circuit(components, wires)
        assert any("V1" in e for e in errors)

    def test_unparseable_value_reported(self, voltage_divider):
        components, wires = voltage_divider
        components[2].value = "abc"
        errors = validate_circuit(components, wires)
        assert any("R2" in e and "invalid value" in e for e in errors)

    def test_meters_exempt_from_value_check(self):
        components = [
            make_component("Voltage Source", "V1", 5),
            make_component("Ammeter", "A1", 0),
            make_component("Resistor", "R1", 10),
        ]
        wires = [make_wire("V1", 1, "A1", 0), make_wire("A1", 1, "R1", 0), make_wire("R1", 1, "V1", 0)]
        assert validate_circuit(components, wires) == []


class TestAllChecksRun:
    def test_errors_reported_in_order(self):
        components = [make_component("Current Source", "I1", -1)]
        errors = validate_circuit(components, [])
        assert len(errors) == 5
        assert "no connections" in errors[0].lower()
        assert "isolated" in errors[1].lower()
        assert "no voltage source" in errors[2].lower()
        assert "no load" in errors[3].lower()
        assert "I1" in errors[4]


class TestWarnings:
    def test_partially_connected_warning(self):
        components = [make_component("Voltage Source", "V1", 5), make_component("Resistor", "R1", 10)]
        wires = [make_wire("V1", 1, "R1", 0)]
        warnings = collect_warnings(components, wires)
        assert any("R1" in w and "unconnected" in w for w in warnings)
        assert any("V1" in w for w in warnings)

    def test_junction_spare_terminals_not_warned(self, bridge_circuit):
        components, wires = bridge_circuit
        assert collect_warnings(components, wires) == []
