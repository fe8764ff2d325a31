"""
FileController - Reads and writes circuit documents.

A circuit document is a JSON object with ``components`` and ``wires``
lists. Documents written by the older browser editor (lowercase type
names, ``startNode``/``endNode`` wires) are accepted and normalized.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from models.circuit import CircuitModel
from models.component import COMPONENT_TYPES, normalize_component_type

logger = logging.getLogger(__name__)


def _wire_ends(wire: dict, i: int) -> list[tuple]:
    if "startNode" in wire:
        ends = []
        for key in ("startNode", "endNode"):
            end = wire.get(key)
            if not isinstance(end, dict) or "compId" not in end or "index" not in end:
                raise ValueError(f"Wire #{i + 1} has an invalid '{key}'.")
            ends.append((end["compId"], end["index"]))
        return ends

    for key in ("start_comp", "end_comp", "start_term", "end_term"):
        if key not in wire:
            raise ValueError(f"Wire #{i + 1} is missing required field '{key}'.")
    return [(wire["start_comp"], wire["start_term"]), (wire["end_comp"], wire["end_term"])]


def validate_circuit_data(data) -> None:
    """
    Validate JSON structure before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid circuit object.")

    if "components" not in data or not isinstance(data["components"], list):
        raise ValueError("Missing or invalid 'components' list.")
    if "wires" not in data or not isinstance(data["wires"], list):
        raise ValueError("Missing or invalid 'wires' list.")

    comp_ids = set()
    for i, comp in enumerate(data["components"]):
        if not isinstance(comp, dict):
            raise ValueError(f"Component #{i + 1} is not an object.")
        for key in ("id", "type"):
            if key not in comp:
                raise ValueError(f"Component #{i + 1} is missing required field '{key}'.")
        if normalize_component_type(comp["type"]) not in COMPONENT_TYPES:
            raise ValueError(f"Component '{comp['id']}' has unknown type '{comp['type']}'.")
        if comp["id"] in comp_ids:
            raise ValueError(f"Duplicate component id '{comp['id']}'.")
        comp_ids.add(comp["id"])

    for i, wire in enumerate(data["wires"]):
        if not isinstance(wire, dict):
            raise ValueError(f"Wire #{i + 1} is not an object.")
        ends = _wire_ends(wire, i)
        for comp_id, term in ends:
            if comp_id not in comp_ids:
                raise ValueError(f"Wire #{i + 1} references unknown component '{comp_id}'.")
            if not isinstance(term, int) or isinstance(term, bool) or term < 0:
                raise ValueError(f"Wire #{i + 1} has an invalid terminal index {term!r}.")
        if ends[0] == ends[1]:
            raise ValueError(f"Wire #{i + 1} connects a terminal to itself.")


class FileController:
    """
    Loads and saves circuit documents as JSON.

    Keeps the current file path so the caller can re-save in place.
    """

    def __init__(self, model: Optional[CircuitModel] = None):
        self.model = model or CircuitModel()
        self.current_file: Optional[Path] = None

    def save_circuit(self, filepath) -> None:
        """
        Save circuit to JSON file.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        with open(filepath, "w") as f:
            json.dump(self.model.to_dict(), f, indent=2)
        self.current_file = filepath

    def load_circuit(self, filepath) -> None:
        """
        Load circuit from JSON file.

        Validates JSON structure before loading. Updates the model
        in place so existing references stay connected.

        Raises:
            json.JSONDecodeError: If file is not valid JSON.
            ValueError: If file structure is invalid.
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        with open(filepath, "r") as f:
            data = json.load(f)

        validate_circuit_data(data)
        loaded = CircuitModel.from_dict(data)

        self.model.clear()
        self.model.components.update(loaded.components)
        self.model.wires.extend(loaded.wires)
        self.model.component_counter.update(loaded.component_counter)
        self.current_file = filepath
        logger.debug("Loaded %s: %d components, %d wires", filepath, len(loaded.components), len(loaded.wires))
