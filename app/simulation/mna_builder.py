"""
simulation/mna_builder.py

Assembles the Modified Nodal Analysis system ``A x = b`` from per-component
stamps.

Unknowns 0..N-2 are the voltages of nodes 1..N-1 (ground is never an
unknown); unknowns N-1..D-1 are the currents through the voltage sources,
in declaration order. Terms that would touch ground are never written.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from models.node import GROUND_NODE, node_label

from .format_utils import parse_value
from .solver_settings import DEFAULT_SETTINGS, SolverSettings

logger = logging.getLogger(__name__)


@dataclass
class MnaSystem:
    """Assembled MNA coefficient matrix and right-hand side."""

    matrix: np.ndarray
    rhs: np.ndarray
    node_count: int
    unknown_labels: list[str] = field(default_factory=list)
    source_index: dict[str, int] = field(default_factory=dict)

    @property
    def dimension(self) -> int:
        return self.rhs.shape[0]

    def node_row(self, node_id: int):
        """Matrix row/column of a node voltage, or None for ground."""
        if node_id == GROUND_NODE:
            return None
        return node_id - 1

    def source_row(self, component_id: str) -> int:
        """Matrix row/column of a voltage source's current unknown."""
        return max(self.node_count - 1, 0) + self.source_index[component_id]


def effective_resistance(component, settings: SolverSettings = DEFAULT_SETTINGS) -> float:
    """
    Resistance used to stamp a resistive component.

    Ammeters and voltmeters use the idealized values from *settings*.

    Raises:
        ValueError: If the component is not resistive or its value cannot be parsed.
    """
    ctype = component.component_type
    if ctype == "Resistor":
        return parse_value(component.value)
    elif ctype == "Ammeter":
        return settings.ammeter_resistance
    elif ctype == "Voltmeter":
        return settings.voltmeter_resistance
    raise ValueError(f"{component.component_id} ({ctype}) is not a resistive component.")


def _stamp_conductance(system: MnaSystem, n1: int, n2: int, g: float) -> None:
    i, j = system.node_row(n1), system.node_row(n2)
    A = system.matrix
    if i is not None:
        A[i, i] += g
        if j is not None:
            A[i, j] -= g
    if j is not None:
        A[j, j] += g
        if i is not None:
            A[j, i] -= g


def _stamp_current_source(system: MnaSystem, n_pos: int, n_neg: int, current: float) -> None:
    i_pos, i_neg = system.node_row(n_pos), system.node_row(n_neg)
    if i_pos is not None:
        system.rhs[i_pos] += current
    if i_neg is not None:
        system.rhs[i_neg] -= current


def _stamp_voltage_source(system: MnaSystem, n_pos: int, n_neg: int, src: int, voltage: float) -> None:
    i_pos, i_neg = system.node_row(n_pos), system.node_row(n_neg)
    A = system.matrix
    if i_pos is not None:
        A[i_pos, src] += 1
        A[src, i_pos] += 1
    if i_neg is not None:
        A[i_neg, src] -= 1
        A[src, i_neg] -= 1
    system.rhs[src] = voltage


def build_mna_system(topology, components, settings: SolverSettings = DEFAULT_SETTINGS) -> MnaSystem:
    """
    Build the MNA matrix and right-hand side for a resolved circuit.

    Component values are parsed here, on every call.

    Args:
        topology: Topology from resolve_topology().
        components: ComponentData objects in declaration order.
        settings: Idealized meter resistances.

    Returns:
        MnaSystem of dimension (N - 1) + K.

    Raises:
        ValueError: On an unparseable value or a zero resistance.
    """
    components = list(components)
    node_count = topology.node_count
    voltage_sources = [c for c in components if c.component_type == "Voltage Source"]

    free_nodes = max(node_count - 1, 0)
    dim = free_nodes + len(voltage_sources)

    labels = [f"V({node_label(k)})" for k in range(1, node_count)]
    labels += [f"I({vs.component_id})" for vs in voltage_sources]

    system = MnaSystem(
        matrix=np.zeros((dim, dim), dtype=np.float64),
        rhs=np.zeros(dim, dtype=np.float64),
        node_count=node_count,
        unknown_labels=labels,
        source_index={vs.component_id: k for k, vs in enumerate(voltage_sources)},
    )

    for comp in components:
        cid = comp.component_id
        ctype = comp.component_type

        if ctype == "Junction":
            continue

        # Terminal 0 is negative and terminal 1 positive for sources
        n0 = topology.node_of((cid, 0))
        n1 = topology.node_of((cid, 1))

        if ctype in ("Resistor", "Ammeter", "Voltmeter"):
            resistance = effective_resistance(comp, settings)
            if resistance == 0:
                raise ValueError(f"{cid} ({ctype}) has zero resistance.")
            _stamp_conductance(system, n0, n1, 1.0 / resistance)
        elif ctype == "Current Source":
            _stamp_current_source(system, n1, n0, parse_value(comp.value))
        elif ctype == "Voltage Source":
            _stamp_voltage_source(system, n1, n0, system.source_row(cid), parse_value(comp.value))
        else:
            raise ValueError(f"Unsupported component type '{ctype}' for {cid}.")

    logger.debug(
        "Assembled MNA system: %d nodes, %d voltage sources, dimension %d",
        node_count,
        len(voltage_sources),
        dim,
    )
    return system
