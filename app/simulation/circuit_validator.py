"""
simulation/circuit_validator.py

Pre-solve circuit validation with no Qt dependencies.
"""

from models.component import LOAD_TYPES, VALUED_TYPES

from .format_utils import parse_value


def _connected_terminals(wires) -> set:
    connected = set()
    for wire in wires:
        connected.update(wire.get_terminals())
    return connected


def validate_circuit(components, wires) -> list[str]:
    """
    Validate a circuit before solving.

    Every check runs so the caller can fix all problems in one pass.

    Args:
        components: ComponentData objects in declaration order (or a dict keyed by ID)
        wires: List[WireData]

    Returns:
        list[str] of problems that block solving; empty means solvable.
    """
    if isinstance(components, dict):
        components = components.values()
    components = list(components)
    wires = list(wires)
    errors = []

    # 1. Circuit must have components
    if not components:
        errors.append("Circuit is empty. Add components to solve.")

    # 2. Circuit must have wires
    if not wires:
        errors.append("Circuit has no connections. Add wires between components.")

    # 3. No isolated components; with no wires at all every component is isolated
    connected = _connected_terminals(wires)
    for comp in components:
        if not any(t in connected for t in comp.get_terminals()):
            errors.append(
                f"{comp.component_id} ({comp.component_type}) is isolated: none of its terminals "
                f"are connected."
            )

    # 4. At least one voltage source
    if not any(c.component_type == "Voltage Source" for c in components):
        errors.append("Circuit has no voltage source. Add at least one voltage source.")

    # 5. At least one load
    if not any(c.component_type in LOAD_TYPES for c in components):
        errors.append("Circuit has no load. Add at least one resistor or measuring instrument.")

    # 6. Strictly positive values (meters and junctions are exempt)
    for comp in components:
        if comp.component_type not in VALUED_TYPES:
            continue
        try:
            numeric = parse_value(comp.value)
        except (ValueError, TypeError):
            errors.append(f"{comp.component_id} ({comp.component_type}) has an invalid value: {comp.value!r}")
            continue
        if not numeric > 0:
            errors.append(f"{comp.component_id} ({comp.component_type}) has an invalid value: {comp.value}")

    return errors


def collect_warnings(components, wires) -> list[str]:
    """
    Report non-blocking issues, such as partially connected components.

    Returns:
        list[str] of warnings; never affects solvability.
    """
    if isinstance(components, dict):
        components = components.values()
    connected = _connected_terminals(wires)
    warnings = []

    for comp in components:
        if comp.component_type == "Junction":
            continue
        unconnected = [i for _, i in comp.get_terminals() if (comp.component_id, i) not in connected]
        if unconnected and len(unconnected) < comp.get_terminal_count():
            warnings.append(
                f"{comp.component_id} ({comp.component_type}) has unconnected terminal(s): {unconnected}."
            )

    return warnings
