"""
SimulationController - Orchestrates the DC solve pipeline.

This module contains no Qt dependencies. It coordinates circuit
validation, solving a snapshot of the model, and the Kirchhoff checks
on the most recent result.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from models.circuit import CircuitModel
from simulation.circuit_validator import collect_warnings, validate_circuit
from simulation.dc_solver import solve_circuit
from simulation.diagnostics import KclReport, KvlReport, check_all_nodes, kcl_report, kvl_report
from simulation.result_extractor import SolveResult, branch_current, calculate_power
from simulation.solver_settings import DEFAULT_SETTINGS, SolverSettings

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Result of a validate or solve run."""

    success: bool
    data: Any = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: str = ""
    solve_result: Optional[SolveResult] = None


class SimulationController:
    """
    Controller for the DC solve pipeline.

    Coordinates: validate -> snapshot -> solve -> package results
    """

    def __init__(self, model: Optional[CircuitModel] = None, settings: Optional[SolverSettings] = None):
        self.model = model or CircuitModel()
        self.settings = settings or DEFAULT_SETTINGS
        self.last_result: Optional[SolveResult] = None
        self._solved_components = []

    def validate_circuit(self) -> SimulationResult:
        """
        Validate the circuit before solving.

        Returns a SimulationResult with success=False and errors if invalid.
        """
        components = self.model.component_list()
        errors = validate_circuit(components, self.model.wires)
        warnings = collect_warnings(components, self.model.wires)
        return SimulationResult(
            success=not errors,
            errors=errors,
            warnings=warnings,
            error="; ".join(errors) if errors else "",
        )

    def run_simulation(self) -> SimulationResult:
        """
        Validate and solve a snapshot of the current model.

        Never raises for an invalid circuit; the returned result carries the errors.
        """
        validation = self.validate_circuit()
        if not validation.success:
            self.last_result = None
            return validation

        snapshot = self.model.snapshot()
        components = snapshot.component_list()
        try:
            result = solve_circuit(components, snapshot.wires, self.settings)
        except ValueError as e:
            logger.error("Solve failed: %s", e, exc_info=True)
            self.last_result = None
            return SimulationResult(success=False, error=f"Solve failed: {e}", warnings=validation.warnings)

        warnings = list(validation.warnings)
        if result.degenerate_unknowns:
            message = (
                "The system is singular for "
                + ", ".join(result.degenerate_unknowns)
                + "; part of the circuit may be disconnected and those values are not meaningful."
            )
            logger.warning("Singular MNA system, degenerate unknowns: %s", result.degenerate_unknowns)
            warnings.append(message)

        self.last_result = result
        self._solved_components = components
        return SimulationResult(
            success=True,
            data=self._build_data(result, components),
            warnings=warnings,
            solve_result=result,
        )

    def _build_data(self, result: SolveResult, components) -> dict:
        branch_currents = {
            c.component_id: branch_current(result, c, self.settings) for c in components if c.is_resistive()
        }
        return {
            "node_voltages": {node.get_label(): result.node_voltages[node.node_id] for node in result.nodes},
            "source_currents": dict(result.source_currents),
            "branch_currents": branch_currents,
            "power": calculate_power(result, components, self.settings),
        }

    def _require_result(self) -> SolveResult:
        if self.last_result is None:
            raise RuntimeError("No solved circuit; call run_simulation() first.")
        return self.last_result

    def kcl_report(self, node_id: int) -> KclReport:
        """KCL report for a node of the last successful solve."""
        return kcl_report(self._require_result(), self._solved_components, node_id, self.settings)

    def check_all_nodes(self) -> list[KclReport]:
        return check_all_nodes(self._require_result(), self._solved_components, self.settings)

    def kvl_report(self, component_ids) -> KvlReport:
        """KVL report for an ordered loop of component IDs of the last successful solve."""
        return kvl_report(self._require_result(), component_ids, self.settings)
