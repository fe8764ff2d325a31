"""
simulation/solver_settings.py

Numeric configuration for the DC solver: idealized meter impedances,
the pivot threshold used by Gaussian elimination, and the tolerances used
by the Kirchhoff checks. Settings can be loaded from a JSON file.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

# Ammeter stands in for an ideal short (zero impedance)
AMMETER_RESISTANCE = 1e-3

# Voltmeter stands in for an ideal open (infinite impedance)
VOLTMETER_RESISTANCE = 1e6

# Pivots with a smaller magnitude are treated as already eliminated
PIVOT_EPSILON = 1e-10

KCL_TOLERANCE = 1e-6
KVL_TOLERANCE = 0.01


@dataclass(frozen=True)
class SolverSettings:
    """Immutable solver configuration. All fields must be strictly positive."""

    ammeter_resistance: float = AMMETER_RESISTANCE
    voltmeter_resistance: float = VOLTMETER_RESISTANCE
    pivot_epsilon: float = PIVOT_EPSILON
    kcl_tolerance: float = KCL_TOLERANCE
    kvl_tolerance: float = KVL_TOLERANCE

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Setting '{f.name}' must be a number (got {value!r}).")
            if value <= 0:
                raise ValueError(f"Setting '{f.name}' must be positive (got {value}).")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SolverSettings":
        """
        Build settings from a dict; missing keys keep their defaults.

        Values are type-checked by ``__post_init__`` as given, so JSON
        ``null``, ``true`` or strings are rejected rather than coerced.

        Raises:
            ValueError: On unknown keys or non-numeric / non-positive values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown solver setting(s): {', '.join(unknown)}")
        return cls(**data)


DEFAULT_SETTINGS = SolverSettings()


def load_settings(path: Optional[Union[str, Path]] = None) -> SolverSettings:
    """
    Load solver settings from a JSON file.

    Returns DEFAULT_SETTINGS when *path* is None.

    Raises:
        OSError: If the file cannot be read.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the file contains unknown or invalid settings.
    """
    if path is None:
        return DEFAULT_SETTINGS

    path = Path(path)
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object.")

    settings = SolverSettings.from_dict(data)
    logger.debug("Loaded solver settings from %s: %s", path, settings)
    return settings
