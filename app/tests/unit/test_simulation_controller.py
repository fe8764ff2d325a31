"""Tests for SimulationController."""

import logging

import pytest
from controllers.simulation_controller import SimulationController, SimulationResult
from models.circuit import CircuitModel
from tests.conftest import divider_data, make_component


def _build_divider_model():
    components, wires = divider_data()
    model = CircuitModel()
    for comp in components:
        model.add_component(comp)
    for wire in wires:
        model.add_wire(wire)
    return model


class TestValidate:
    def test_valid_circuit(self):
        result = SimulationController(_build_divider_model()).validate_circuit()
        assert isinstance(result, SimulationResult)
        assert result.success
        assert result.errors == []

    def test_empty_circuit(self):
        result = SimulationController().validate_circuit()
        assert not result.success
        assert result.error == "; ".join(result.errors)


class TestRunSimulation:
    def test_divider(self):
        ctrl = SimulationController(_build_divider_model())
        result = ctrl.run_simulation()
        assert result.success
        data = result.data
        assert data["node_voltages"] == pytest.approx({"0": 0.0, "N1": 10.0, "N2": 5.0})
        assert data["source_currents"]["V1"] == pytest.approx(-0.05)
        assert data["branch_currents"] == pytest.approx({"R1": 0.05, "R2": 0.05})
        assert data["power"]["V1"] == pytest.approx(-0.5)
        assert result.solve_result is ctrl.last_result

    def test_lone_resistor_is_never_solved(self):
        model = CircuitModel()
        model.add_component(make_component("Resistor", "R1", 100))
        ctrl = SimulationController(model)
        result = ctrl.run_simulation()
        assert not result.success
        assert result.solve_result is None
        assert ctrl.last_result is None
        assert any("isolated" in e for e in result.errors)

    def test_solves_a_snapshot(self):
        model = _build_divider_model()
        ctrl = SimulationController(model)
        result = ctrl.run_simulation()
        model.update_component_value("R2", 300)
        assert result.data["node_voltages"]["N2"] == pytest.approx(5.0)

    def test_warnings_forwarded(self):
        model = _build_divider_model()
        model.add_component(make_component("Resistor", "R3", 10))
        model.connect("R3", 0, "R1", 1)
        result = SimulationController(model).run_simulation()
        assert result.success
        assert any("R3" in w for w in result.warnings)

    def test_degenerate_subnetwork_warns(self, caplog):
        model = _build_divider_model()
        model.add_component(make_component("Resistor", "R3", 100))
        model.add_component(make_component("Resistor", "R4", 100))
        model.connect("R3", 0, "R4", 0)
        model.connect("R3", 1, "R4", 1)
        with caplog.at_level(logging.WARNING, logger="controllers.simulation_controller"):
            result = SimulationController(model).run_simulation()
        assert result.success
        assert result.solve_result.degenerate_unknowns == ("V(N4)",)
        assert any("singular" in w for w in result.warnings)
        assert "degenerate unknowns" in caplog.text
        assert result.data["node_voltages"]["N2"] == pytest.approx(5.0)

    def test_solve_error_is_reported(self, caplog):
        model = _build_divider_model()
        ctrl = SimulationController(model)
        # Passes validation but cannot be stamped
        model.wires[0].end_terminal = 5
        with caplog.at_level(logging.ERROR, logger="controllers.simulation_controller"):
            result = ctrl.run_simulation()
        assert not result.success
        assert result.error.startswith("Solve failed")
        assert "Solve failed" in caplog.text


class TestKirchhoffChecks:
    def test_requires_a_solve(self):
        ctrl = SimulationController(_build_divider_model())
        with pytest.raises(RuntimeError):
            ctrl.check_all_nodes()
        with pytest.raises(RuntimeError):
            ctrl.kvl_report(["V1"])

    def test_after_solve(self):
        ctrl = SimulationController(_build_divider_model())
        ctrl.run_simulation()
        assert all(r.balanced() for r in ctrl.check_all_nodes())
        assert ctrl.kcl_report(2).sum == pytest.approx(0.0, abs=1e-12)
        assert ctrl.kvl_report(["V1", "R1", "R2"]).within_tolerance

    def test_failed_solve_clears_last_result(self):
        model = _build_divider_model()
        ctrl = SimulationController(model)
        ctrl.run_simulation()
        model.remove_component("V1")
        ctrl.run_simulation()
        with pytest.raises(RuntimeError):
            ctrl.kcl_report(0)
