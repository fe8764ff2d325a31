"""
simulation/dc_solver.py

DC operating point solver: topology -> MNA assembly -> linear solve ->
result extraction. Each call works on private matrices, so the same
(components, wires) input always yields the same result.
"""

import logging
from typing import Optional

from .circuit_validator import collect_warnings, validate_circuit
from .diagnostics import KclReport, KvlReport, check_all_nodes, kcl_report, kvl_report
from .linear_solver import solve_linear_system_with_report
from .mna_builder import build_mna_system
from .result_extractor import SolveResult, extract_result
from .solver_settings import DEFAULT_SETTINGS, SolverSettings
from .topology import resolve_topology

logger = logging.getLogger(__name__)


def solve_circuit(components, wires, settings: Optional[SolverSettings] = None) -> SolveResult:
    """
    Solve a resistive DC circuit.

    Does not validate; run validate_circuit() first. Singular systems do
    not raise, the affected unknowns are listed in
    ``SolveResult.degenerate_unknowns``.

    Raises:
        UnknownTerminalError: If a wire references a missing terminal.
        ValueError: If a component value cannot be parsed.
    """
    settings = settings or DEFAULT_SETTINGS
    components = list(components)

    topology = resolve_topology(components, wires)
    system = build_mna_system(topology, components, settings)
    report = solve_linear_system_with_report(system.matrix, system.rhs, settings.pivot_epsilon)
    result = extract_result(topology, system, report.solution, report.skipped_columns)

    if report.is_degenerate:
        logger.debug("Degenerate unknowns: %s", ", ".join(result.degenerate_unknowns))
    return result


def format_equations(result: SolveResult, precision: int = 4) -> list[str]:
    """
    Render the solved MNA system as text rows, one equation per unknown.

    Example row: ``+0.02*V(N1) -0.01*V(N2) +1*I(V1) = 0``
    """
    lines = []
    for row, rhs in zip(result.matrix, result.rhs):
        terms = [
            f"{coef:+.{precision}g}*{label}"
            for coef, label in zip(row, result.unknown_labels)
            if coef != 0
        ]
        left = " ".join(terms) if terms else "0"
        lines.append(f"{left} = {rhs:.{precision}g}")
    return lines


class CircuitSolver:
    """Convenience wrapper binding solver settings to the pipeline functions."""

    def __init__(self, settings: Optional[SolverSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS

    def validate(self, components, wires) -> list[str]:
        return validate_circuit(components, wires)

    def warnings(self, components, wires) -> list[str]:
        return collect_warnings(components, wires)

    def solve(self, components, wires) -> SolveResult:
        return solve_circuit(components, wires, self.settings)

    def kcl_report(self, result: SolveResult, components, node_id: int) -> KclReport:
        return kcl_report(result, components, node_id, self.settings)

    def check_all_nodes(self, result: SolveResult, components) -> list[KclReport]:
        return check_all_nodes(result, components, self.settings)

    def kvl_report(self, result: SolveResult, component_ids) -> KvlReport:
        return kvl_report(result, component_ids, self.settings)
