"""
ComponentData - Pure Python data model for circuit components.

This module contains no Qt dependencies. All positions are represented as
tuples (x, y) and are never read by the solver.

Component types use display names as canonical identifiers:
'Resistor', 'Voltage Source', 'Current Source', 'Ammeter', 'Voltmeter',
'Junction'
"""

from dataclasses import dataclass
from typing import Optional, Union

# Component type definitions using display names (canonical)
COMPONENT_TYPES = [
    "Resistor",
    "Voltage Source",
    "Current Source",
    "Ammeter",
    "Voltmeter",
    "Junction",
]

# Short symbols used when generating component IDs (R1, V1, ...)
COMPONENT_SYMBOLS = {
    "Resistor": "R",
    "Voltage Source": "V",
    "Current Source": "I",
    "Ammeter": "A",
    "Voltmeter": "VM",
    "Junction": "J",
}

# Number of terminals per component type (default is 2)
TERMINAL_COUNTS = {
    "Junction": 4,
}

# Default values per component type (ohms, volts or amperes)
DEFAULT_VALUES = {
    "Resistor": 100.0,
    "Voltage Source": 5.0,
    "Current Source": 0.1,
    "Ammeter": 0.0,
    "Voltmeter": 0.0,
    "Junction": 0.0,
}

# Kinds that behave as a resistive branch in the MNA system
RESISTIVE_TYPES = ("Resistor", "Ammeter", "Voltmeter")

# Kinds that count as a load for validation
LOAD_TYPES = ("Resistor", "Ammeter", "Voltmeter")

# Kinds whose value must be strictly positive
VALUED_TYPES = ("Resistor", "Voltage Source", "Current Source")

# Mapping from the legacy browser-editor type names to display names
_LEGACY_TO_DISPLAY = {
    "resistor": "Resistor",
    "voltage": "Voltage Source",
    "current": "Current Source",
    "ammeter": "Ammeter",
    "voltmeter": "Voltmeter",
    "junction": "Junction",
    "VoltageSource": "Voltage Source",
    "CurrentSource": "Current Source",
}


def normalize_component_type(raw_type: str) -> str:
    """Return the canonical display name for a serialized type name."""
    return _LEGACY_TO_DISPLAY.get(raw_type, raw_type)


@dataclass
class ComponentData:
    """
    Pure Python data class representing a circuit component.

    ``value`` is kept as given (number or SI string such as "1k") and is
    parsed by the solver each time it builds the MNA system.
    """

    component_id: str
    component_type: str
    value: Union[float, str] = 0.0
    position: tuple[float, float] = (0.0, 0.0)  # (x, y) in scene coordinates
    rotation: int = 0  # quarter turns as stored by the editor
    label: Optional[str] = None

    def get_terminal_count(self) -> int:
        """Return number of terminals for this component type."""
        return TERMINAL_COUNTS.get(self.component_type, 2)

    def get_terminals(self) -> list[tuple[str, int]]:
        """Return every (component_id, terminal_index) of this component in order."""
        return [(self.component_id, i) for i in range(self.get_terminal_count())]

    def is_resistive(self) -> bool:
        return self.component_type in RESISTIVE_TYPES

    def get_label(self) -> str:
        """Display label, falling back to the component ID."""
        return self.label or self.component_id

    def to_dict(self) -> dict:
        """Serialize component to dictionary."""
        data = {
            "type": self.component_type,
            "id": self.component_id,
            "value": self.value,
            "pos": {"x": self.position[0], "y": self.position[1]},
            "rotation": self.rotation,
        }
        if self.label:
            data["label"] = self.label
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentData":
        """
        Deserialize component from dictionary.

        Accepts both the current format (``pos: {x, y}``) and the legacy
        browser-editor format (top-level ``x``/``y`` and lowercase type names).
        """
        component_type = normalize_component_type(data["type"])

        if "pos" in data:
            position = (data["pos"]["x"], data["pos"]["y"])
        else:
            position = (data.get("x", 0.0), data.get("y", 0.0))

        return cls(
            component_id=str(data["id"]),
            component_type=component_type,
            value=data.get("value", DEFAULT_VALUES.get(component_type, 0.0)),
            position=position,
            rotation=data.get("rotation", 0),
            label=data.get("label"),
        )

    def __repr__(self) -> str:
        return f"ComponentData(id={self.component_id!r}, type={self.component_type!r}, value={self.value!r})"
