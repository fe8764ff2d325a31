from .circuit_validator import collect_warnings, validate_circuit
from .dc_solver import CircuitSolver, format_equations, solve_circuit
from .diagnostics import KclReport, KvlReport, check_all_nodes, kcl_report, kvl_report
from .result_extractor import SolveResult, branch_current, calculate_power, meter_reading, voltage_across
from .solver_settings import DEFAULT_SETTINGS, SolverSettings, load_settings
from .topology import Topology, UnknownTerminalError, resolve_topology

__all__ = [
    "CircuitSolver", "SolveResult", "SolverSettings", "DEFAULT_SETTINGS", "Topology",
    "UnknownTerminalError", "KclReport", "KvlReport",
    "validate_circuit", "collect_warnings", "solve_circuit", "resolve_topology",
    "kcl_report", "kvl_report", "check_all_nodes", "format_equations", "load_settings",
    "branch_current", "voltage_across", "meter_reading", "calculate_power",
]
