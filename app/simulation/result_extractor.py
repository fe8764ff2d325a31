"""
simulation/result_extractor.py

Maps the solved MNA unknowns back to node voltages and voltage-source
currents, and derives branch currents, meter readings and power from them.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import numpy as np

from models.node import GROUND_NODE, ElectricalNode

from .format_utils import parse_value
from .mna_builder import effective_resistance
from .solver_settings import DEFAULT_SETTINGS, SolverSettings
from .topology import UnknownTerminalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SolveResult:
    """
    Immutable outcome of one solve call.

    Mappings are read-only views, sequences are tuples and the arrays have
    their write flag cleared, so a result can be shared without copying.

    ``source_currents`` follow the MNA sign convention: the current entering
    a voltage source at its positive terminal (terminal 1). A source that
    delivers power therefore reads negative.
    """

    node_voltages: Mapping[int, float]
    terminal_to_node: Mapping[tuple[str, int], int]
    source_currents: Mapping[str, float]
    nodes: tuple[ElectricalNode, ...] = ()
    matrix: np.ndarray = field(default_factory=lambda: np.zeros((0, 0)))
    rhs: np.ndarray = field(default_factory=lambda: np.zeros(0))
    solution: np.ndarray = field(default_factory=lambda: np.zeros(0))
    unknown_labels: tuple[str, ...] = ()
    degenerate_unknowns: tuple[str, ...] = ()

    @property
    def node_count(self) -> int:
        return len(self.node_voltages)

    def node_of(self, component_id: str, terminal_index: int) -> int:
        try:
            return self.terminal_to_node[(component_id, terminal_index)]
        except KeyError:
            raise UnknownTerminalError(f"Unknown terminal reference {component_id}[{terminal_index}]") from None

    def terminal_voltage(self, component_id: str, terminal_index: int) -> float:
        return self.node_voltages[self.node_of(component_id, terminal_index)]

    def to_dict(self) -> dict:
        """Plain-JSON view of the result (node voltages keyed by node id as strings)."""
        return {
            "node_voltages": {str(k): v for k, v in self.node_voltages.items()},
            "terminal_nodes": {f"{c}:{t}": n for (c, t), n in self.terminal_to_node.items()},
            "source_currents": dict(self.source_currents),
            "unknowns": list(self.unknown_labels),
            "matrix": self.matrix.tolist(),
            "rhs": self.rhs.tolist(),
            "solution": self.solution.tolist(),
        }


def _frozen(array) -> np.ndarray:
    array = np.array(array, dtype=np.float64, copy=True)
    array.setflags(write=False)
    return array


def extract_result(topology, system, solution, skipped_columns=()) -> SolveResult:
    """
    Build a SolveResult from a solved MNA system.

    Args:
        topology: Topology used to build *system*.
        system: MnaSystem that was solved.
        solution: Solution vector of length system.dimension.
        skipped_columns: Unknown indices the solver could not pivot on.
    """
    free_nodes = max(topology.node_count - 1, 0)

    node_voltages = {}
    if topology.node_count:
        node_voltages[GROUND_NODE] = 0.0
    for k in range(1, topology.node_count):
        node_voltages[k] = float(solution[k - 1])

    source_currents = {
        source_id: float(solution[free_nodes + ordinal]) for source_id, ordinal in system.source_index.items()
    }

    return SolveResult(
        node_voltages=MappingProxyType(node_voltages),
        terminal_to_node=MappingProxyType(dict(topology.terminal_to_node)),
        source_currents=MappingProxyType(source_currents),
        nodes=tuple(topology.nodes()),
        matrix=_frozen(system.matrix),
        rhs=_frozen(system.rhs),
        solution=_frozen(solution),
        unknown_labels=tuple(system.unknown_labels),
        degenerate_unknowns=tuple(system.unknown_labels[i] for i in skipped_columns),
    )


def voltage_across(result: SolveResult, component_id: str) -> float:
    """Voltage drop from terminal 0 to terminal 1 of a component."""
    return result.terminal_voltage(component_id, 0) - result.terminal_voltage(component_id, 1)


def branch_current(result: SolveResult, component, settings: SolverSettings = DEFAULT_SETTINGS) -> float:
    """
    Current through a resistive component, flowing from terminal 0 to terminal 1.

    Raises:
        ValueError: If the component is not a Resistor, Ammeter or Voltmeter.
    """
    resistance = effective_resistance(component, settings)
    return voltage_across(result, component.component_id) / resistance


def meter_reading(result: SolveResult, component, settings: SolverSettings = DEFAULT_SETTINGS) -> float:
    """
    Reading shown by a meter: |current| for an ammeter, |voltage| for a voltmeter.

    Raises:
        ValueError: If the component is not a meter.
    """
    if component.component_type == "Ammeter":
        return abs(branch_current(result, component, settings))
    elif component.component_type == "Voltmeter":
        return abs(voltage_across(result, component.component_id))
    raise ValueError(f"{component.component_id} ({component.component_type}) is not a meter.")


def calculate_power(result: SolveResult, components, settings: SolverSettings = DEFAULT_SETTINGS) -> dict:
    """Calculate power for each component.

    Returns:
        dict mapping component_id to power in watts (float).
        Positive = dissipating, negative = supplying. Junctions are omitted.
    """
    power = {}
    for comp in components:
        cid = comp.component_id
        ctype = comp.component_type

        if ctype == "Junction":
            continue

        v_across = voltage_across(result, cid)

        if comp.is_resistive():
            power[cid] = v_across**2 / effective_resistance(comp, settings)
        elif ctype == "Voltage Source":
            # Current enters terminal 1 (positive); terminal 1 sits at -v_across
            power[cid] = -v_across * result.source_currents[cid]
        elif ctype == "Current Source":
            # Current leaves through terminal 1 after entering terminal 0
            power[cid] = v_across * parse_value(comp.value)
        else:
            logger.debug("No power model for %s (%s)", cid, ctype)

    return power


def total_power(power_dict) -> float:
    """Sum of all power values. Should net close to 0 for a valid circuit."""
    return sum(power_dict.values())
