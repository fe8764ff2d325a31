"""
simulation/linear_solver.py

Dense Gauss-Jordan elimination with partial pivoting.

Singular systems never raise: a column whose best pivot is below the
threshold is skipped and its unknown keeps whatever value has accumulated
in the right-hand column (usually 0). Disconnected subnetworks therefore
come back at ground level instead of failing the solve.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from .solver_settings import PIVOT_EPSILON

logger = logging.getLogger(__name__)


@dataclass
class LinearSolveReport:
    """Solution vector plus the columns skipped as degenerate."""

    solution: np.ndarray
    skipped_columns: list[int] = field(default_factory=list)

    @property
    def is_degenerate(self) -> bool:
        return bool(self.skipped_columns)


def solve_linear_system_with_report(matrix, rhs, pivot_epsilon: float = PIVOT_EPSILON) -> LinearSolveReport:
    """
    Solve ``matrix @ x = rhs`` on a private augmented copy.

    Args:
        matrix: Square (D, D) array-like.
        rhs: Length-D array-like.
        pivot_epsilon: Pivots with a smaller magnitude are skipped.

    Returns:
        LinearSolveReport with the solution and any skipped columns.
    """
    A = np.asarray(matrix, dtype=np.float64)
    b = np.asarray(rhs, dtype=np.float64)
    n = b.shape[0]
    if A.shape != (n, n):
        raise ValueError(f"Matrix shape {A.shape} does not match right-hand side length {n}.")

    M = np.hstack([A, b.reshape(n, 1)])
    skipped = []

    for i in range(n):
        # Largest magnitude at or below row i; argmax keeps the first on ties
        max_row = i + int(np.argmax(np.abs(M[i:, i])))
        if max_row != i:
            M[[i, max_row]] = M[[max_row, i]]

        pivot = M[i, i]
        if abs(pivot) < pivot_epsilon:
            logger.debug("Pivot %.3e in column %d below %.1e; skipping", pivot, i, pivot_epsilon)
            skipped.append(i)
            continue

        M[i, i:] /= pivot

        factors = M[:, i].copy()
        factors[i] = 0.0
        M[:, i:] -= np.outer(factors, M[i, i:])

    return LinearSolveReport(solution=M[:, n].copy(), skipped_columns=skipped)


def solve_linear_system(matrix, rhs, pivot_epsilon: float = PIVOT_EPSILON) -> np.ndarray:
    """Solve ``matrix @ x = rhs`` and return only the solution vector."""
    return solve_linear_system_with_report(matrix, rhs, pivot_epsilon).solution
