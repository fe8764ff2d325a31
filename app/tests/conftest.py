"""
Shared test fixtures for the DC solver test suite.

All fixtures build pure-Python model objects (no Qt dependencies).
"""

import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, simulation, controllers)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from models.component import ComponentData
from models.wire import WireData


def make_component(component_type, component_id, value=0.0, position=(0.0, 0.0)):
    """Helper to create a ComponentData with minimal boilerplate."""
    return ComponentData(
        component_id=component_id,
        component_type=component_type,
        value=value,
        position=position,
    )


def make_wire(start_id, start_term, end_id, end_term):
    """Helper to create a WireData."""
    return WireData(
        start_component_id=start_id,
        start_terminal=start_term,
        end_component_id=end_id,
        end_terminal=end_term,
    )


def divider_data():
    """
    V1 (10 V) -- R1 (100) -- R2 (100) -- back to V1

    Terminal 1 of V1 is positive. Nodes after resolution:
    0 (V1[0], R2[1]), 1 (V1[1], R1[0]), 2 (R1[1], R2[0]).
    """
    components = [
        make_component("Voltage Source", "V1", 10.0),
        make_component("Resistor", "R1", 100.0),
        make_component("Resistor", "R2", 100.0),
    ]
    wires = [
        make_wire("V1", 1, "R1", 0),
        make_wire("R1", 1, "R2", 0),
        make_wire("R2", 1, "V1", 0),
    ]
    return components, wires


@pytest.fixture
def voltage_divider():
    return divider_data()


@pytest.fixture
def bridge_circuit():
    """
    Unbalanced Wheatstone bridge fed through a junction hub.

    V1+ -> J1 -> R1 -> A1 -> R2 -> V1-
               J1 -> R3 -> R4 -> V1-
    R5 bridges R1/R3 outputs, VM1 measures across R5.
    """
    components = [
        make_component("Voltage Source", "V1", "10V"),
        make_component("Junction", "J1"),
        make_component("Resistor", "R1", "100"),
        make_component("Resistor", "R2", "200"),
        make_component("Resistor", "R3", "300"),
        make_component("Resistor", "R4", "400"),
        make_component("Resistor", "R5", "500"),
        make_component("Ammeter", "A1"),
        make_component("Voltmeter", "VM1"),
    ]
    wires = [
        make_wire("V1", 1, "J1", 0),
        make_wire("J1", 1, "R1", 0),
        make_wire("J1", 2, "R3", 0),
        make_wire("R1", 1, "R5", 0),
        make_wire("R1", 1, "A1", 0),
        make_wire("A1", 1, "R2", 0),
        make_wire("R3", 1, "R5", 1),
        make_wire("R3", 1, "R4", 0),
        make_wire("R2", 1, "V1", 0),
        make_wire("R4", 1, "V1", 0),
        make_wire("VM1", 0, "R5", 0),
        make_wire("VM1", 1, "R5", 1),
    ]
    return components, wires


@pytest.fixture
def current_source_circuit():
    """
    V1 (5 V) -- R1 (1k) -- back to V1, with I1 (2 mA) feeding the V1+/R1 node
    through R2 (500) from ground.
    """
    components = [
        make_component("Voltage Source", "V1", "5"),
        make_component("Resistor", "R1", "1k"),
        make_component("Current Source", "I1", "2m"),
        make_component("Resistor", "R2", "500"),
    ]
    wires = [
        make_wire("V1", 1, "R1", 0),
        make_wire("R1", 1, "V1", 0),
        make_wire("I1", 0, "V1", 0),
        make_wire("I1", 1, "R2", 0),
        make_wire("R2", 1, "R1", 0),
    ]
    return components, wires
