"""
Pure Python data models for the DC circuit solver.

This package contains Qt-free data classes that represent circuit elements.
All models use only Python standard library types.
"""

from .circuit import CircuitModel
from .component import (
    COMPONENT_SYMBOLS,
    COMPONENT_TYPES,
    DEFAULT_VALUES,
    LOAD_TYPES,
    RESISTIVE_TYPES,
    TERMINAL_COUNTS,
    VALUED_TYPES,
    ComponentData,
)
from .node import GROUND_NODE, ElectricalNode
from .wire import WireData

__all__ = [
    "CircuitModel",
    "ComponentData",
    "COMPONENT_TYPES",
    "COMPONENT_SYMBOLS",
    "TERMINAL_COUNTS",
    "DEFAULT_VALUES",
    "RESISTIVE_TYPES",
    "LOAD_TYPES",
    "VALUED_TYPES",
    "WireData",
    "ElectricalNode",
    "GROUND_NODE",
]
