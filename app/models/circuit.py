"""
CircuitModel - Central data store for circuit state.

This module contains no Qt dependencies. It holds the circuit document
(components in declaration order and wires) that the solver consumes.
Electrical nodes are not stored here; they are recomputed on every solve.
"""

import copy
from dataclasses import dataclass, field

from .component import COMPONENT_SYMBOLS, DEFAULT_VALUES, ComponentData
from .wire import WireData


@dataclass
class CircuitModel:
    """
    Central data store holding all circuit state.

    ``components`` is an insertion-ordered dict; the order is significant
    because it decides which electrical node becomes ground.
    """

    components: dict[str, ComponentData] = field(default_factory=dict)
    wires: list[WireData] = field(default_factory=list)
    component_counter: dict[str, int] = field(default_factory=dict)

    # --- Component operations ---

    def add_component(self, component: ComponentData) -> None:
        """Add a component to the circuit."""
        if component.component_id in self.components:
            raise ValueError(f"Duplicate component id '{component.component_id}'.")
        self.components[component.component_id] = component

    def create_component(self, component_type: str, value=None, position=(0.0, 0.0)) -> ComponentData:
        """
        Create and add a new component with a generated ID (R1, V1, J1, ...).

        Returns:
            The newly created ComponentData.
        """
        symbol = COMPONENT_SYMBOLS.get(component_type)
        if symbol is None:
            raise ValueError(f"Unknown component type '{component_type}'.")
        count = self.component_counter.get(symbol, 0) + 1
        component_id = f"{symbol}{count}"
        while component_id in self.components:
            count += 1
            component_id = f"{symbol}{count}"
        self.component_counter[symbol] = count

        component = ComponentData(
            component_id=component_id,
            component_type=component_type,
            value=DEFAULT_VALUES[component_type] if value is None else value,
            position=position,
        )
        self.add_component(component)
        return component

    def remove_component(self, component_id: str) -> None:
        """Remove a component together with every wire attached to it."""
        if component_id not in self.components:
            return
        self.wires = [w for w in self.wires if not w.connects_component(component_id)]
        del self.components[component_id]

    def update_component_value(self, component_id: str, value) -> None:
        self.components[component_id].value = value

    # --- Wire operations ---

    def add_wire(self, wire: WireData) -> None:
        """Add a wire. Both ends must name existing components."""
        for comp_id, _ in wire.get_terminals():
            if comp_id not in self.components:
                raise ValueError(f"Wire references unknown component '{comp_id}'.")
        self.wires.append(wire)

    def connect(self, start_id: str, start_terminal: int, end_id: str, end_terminal: int) -> WireData:
        """Convenience wrapper creating and adding a wire."""
        wire = WireData(
            start_component_id=start_id,
            start_terminal=start_terminal,
            end_component_id=end_id,
            end_terminal=end_terminal,
        )
        self.add_wire(wire)
        return wire

    def remove_wire(self, wire_index: int) -> None:
        """Remove a wire by index."""
        if 0 <= wire_index < len(self.wires):
            del self.wires[wire_index]

    # --- Circuit operations ---

    def component_list(self) -> list[ComponentData]:
        """Components in declaration order."""
        return list(self.components.values())

    def snapshot(self) -> "CircuitModel":
        """Return an independent copy safe to solve while editing continues."""
        return copy.deepcopy(self)

    def clear(self) -> None:
        """Clear all circuit data."""
        self.components.clear()
        self.wires.clear()
        self.component_counter.clear()

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize circuit to dictionary."""
        return {
            "components": [c.to_dict() for c in self.components.values()],
            "wires": [w.to_dict() for w in self.wires],
            "counters": self.component_counter.copy(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CircuitModel":
        """Deserialize circuit from dictionary, preserving declaration order."""
        model = cls()
        model.component_counter = dict(data.get("counters", {}))

        for comp_data in data.get("components", []):
            component = ComponentData.from_dict(comp_data)
            model.components[component.component_id] = component

        for wire_data in data.get("wires", []):
            model.wires.append(WireData.from_dict(wire_data))

        return model
