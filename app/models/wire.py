"""
WireData - Pure Python data model for circuit wires.

This module contains no Qt dependencies. Waypoints are stored as
tuples (x, y); they are presentation data and the solver ignores them.
"""

from dataclasses import dataclass, field


@dataclass
class WireData:
    """
    Ideal (zero-impedance) connection between two component terminals.

    The two ends are unordered as far as the solver is concerned.
    """

    start_component_id: str
    start_terminal: int
    end_component_id: str
    end_terminal: int

    waypoints: list[tuple[float, float]] = field(default_factory=list)

    def __post_init__(self):
        if self.start_component_id == self.end_component_id and self.start_terminal == self.end_terminal:
            raise ValueError(
                f"Wire cannot connect terminal {self.start_component_id}[{self.start_terminal}] to itself."
            )

    def get_terminals(self) -> list[tuple[str, int]]:
        """
        Get both terminal identifiers for this wire.

        Returns:
            List of two (component_id, terminal_index) tuples.
        """
        return [(self.start_component_id, self.start_terminal), (self.end_component_id, self.end_terminal)]

    def connects_component(self, component_id: str) -> bool:
        """Check if this wire connects to the given component."""
        return self.start_component_id == component_id or self.end_component_id == component_id

    def connects_terminal(self, component_id: str, terminal: int) -> bool:
        """Check if this wire connects to the given terminal."""
        return (self.start_component_id == component_id and self.start_terminal == terminal) or (
            self.end_component_id == component_id and self.end_terminal == terminal
        )

    def to_dict(self) -> dict:
        """Serialize wire to dictionary."""
        data = {
            "start_comp": self.start_component_id,
            "start_term": self.start_terminal,
            "end_comp": self.end_component_id,
            "end_term": self.end_terminal,
        }
        if self.waypoints:
            data["waypoints"] = [{"x": x, "y": y} for x, y in self.waypoints]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WireData":
        """
        Deserialize wire from dictionary.

        Handles both ``start_comp``/``start_term`` keys and the legacy
        ``startNode: {compId, index}`` shape.
        """
        if "startNode" in data:
            start, end = data["startNode"], data["endNode"]
            start_id, start_term = start["compId"], start["index"]
            end_id, end_term = end["compId"], end["index"]
        else:
            start_id, start_term = data["start_comp"], data["start_term"]
            end_id, end_term = data["end_comp"], data["end_term"]

        waypoints = []
        for point in data.get("waypoints") or []:
            if isinstance(point, dict):
                waypoints.append((point["x"], point["y"]))
            else:
                waypoints.append(tuple(point))

        return cls(
            start_component_id=str(start_id),
            start_terminal=int(start_term),
            end_component_id=str(end_id),
            end_terminal=int(end_term),
            waypoints=waypoints,
        )

    def __repr__(self) -> str:
        return (
            f"WireData({self.start_component_id}[{self.start_terminal}] -> "
            f"{self.end_component_id}[{self.end_terminal}])"
        )
