"""
simulation/diagnostics.py

Kirchhoff's Current and Voltage Law checks over a solved circuit.

KCL sums the current leaving a node through every terminal attached to it;
a sum beyond tolerance means the stamping or topology is wrong. KVL sums
the drop V(terminal 0) - V(terminal 1) across a user-ordered loop of
components.
"""

import logging
from dataclasses import dataclass, field

from .format_utils import parse_value
from .result_extractor import SolveResult, branch_current
from .solver_settings import DEFAULT_SETTINGS, SolverSettings
from .topology import UnknownTerminalError

logger = logging.getLogger(__name__)


@dataclass
class CurrentTerm:
    component_id: str
    terminal_index: int
    current: float


@dataclass
class KclReport:
    """Currents leaving one node, one term per attached terminal."""

    node_id: int
    terms: list[CurrentTerm] = field(default_factory=list)
    sum: float = 0.0

    def balanced(self, tolerance: float = DEFAULT_SETTINGS.kcl_tolerance) -> bool:
        return abs(self.sum) <= tolerance


@dataclass
class VoltageDrop:
    component_id: str
    drop: float


@dataclass
class KvlReport:
    drops: list[VoltageDrop] = field(default_factory=list)
    sum: float = 0.0
    within_tolerance: bool = True


def _current_leaving(result: SolveResult, comp, terminal_index: int, settings: SolverSettings) -> float:
    """Current leaving the node through one terminal of *comp*."""
    ctype = comp.component_type
    if comp.is_resistive():
        current = branch_current(result, comp, settings)
        return current if terminal_index == 0 else -current
    elif ctype == "Voltage Source":
        current = result.source_currents[comp.component_id]
        return current if terminal_index == 1 else -current
    elif ctype == "Current Source":
        current = parse_value(comp.value)
        return -current if terminal_index == 1 else current
    return 0.0


def kcl_report(result: SolveResult, components, node_id: int, settings: SolverSettings = DEFAULT_SETTINGS) -> KclReport:
    """
    Sum the currents leaving *node_id*.

    Junction terminals are skipped: a junction's terminals share one node,
    so whatever enters one leaves through another.

    Raises:
        ValueError: If *node_id* is not a node of *result*.
    """
    if node_id not in result.node_voltages:
        raise ValueError(f"Unknown node {node_id}; circuit has {result.node_count} node(s).")

    report = KclReport(node_id=node_id)
    for comp in components:
        if comp.component_type == "Junction":
            continue
        for cid, index in comp.get_terminals():
            if result.terminal_to_node.get((cid, index)) != node_id:
                continue
            current = _current_leaving(result, comp, index, settings)
            report.terms.append(CurrentTerm(component_id=cid, terminal_index=index, current=current))

    report.sum = sum(term.current for term in report.terms)
    return report


def check_all_nodes(result: SolveResult, components, settings: SolverSettings = DEFAULT_SETTINGS) -> list[KclReport]:
    """Run the KCL check on every node; unbalanced nodes are logged as warnings."""
    components = list(components)
    reports = []
    for node_id in sorted(result.node_voltages):
        report = kcl_report(result, components, node_id, settings)
        if not report.balanced(settings.kcl_tolerance):
            logger.warning("KCL violated at node %d: sum = %.3e A", node_id, report.sum)
        reports.append(report)
    return reports


def kvl_report(result: SolveResult, component_ids, settings: SolverSettings = DEFAULT_SETTINGS) -> KvlReport:
    """
    Sum the voltage drops around an ordered loop of components.

    Raises:
        UnknownTerminalError: If a component ID is not part of *result*.
    """
    report = KvlReport()
    for cid in component_ids:
        if (cid, 0) not in result.terminal_to_node or (cid, 1) not in result.terminal_to_node:
            raise UnknownTerminalError(f"Unknown component '{cid}' in loop.")
        drop = result.terminal_voltage(cid, 0) - result.terminal_voltage(cid, 1)
        report.drops.append(VoltageDrop(component_id=cid, drop=drop))

    report.sum = sum(d.drop for d in report.drops)
    report.within_tolerance = abs(report.sum) < settings.kvl_tolerance
    return report
