"""
Controllers for the DC circuit solver.

This package contains Qt-free controller classes that orchestrate
operations between the circuit model and the solver.
"""

from .file_controller import FileController, validate_circuit_data
from .simulation_controller import SimulationController, SimulationResult

__all__ = [
    "SimulationController",
    "SimulationResult",
    "FileController",
    "validate_circuit_data",
]
