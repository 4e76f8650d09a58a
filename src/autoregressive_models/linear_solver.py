"""LU solution of the normal equations C x = b."""

import logging
import warnings

import numpy as np

from dataclasses import dataclass
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve

logger = logging.getLogger(__name__)

# Matrices whose 1-norm condition number exceeds this are treated as singular.
CONDITION_TOLERANCE = 1e16


@dataclass(frozen=True)
class LUSolution:
    """Outcome of an LU solve."""
    coefficients: np.ndarray
    ok: bool
    condition: float


def solve_normal_equations(
    matrix,
    vector,
    condition_tolerance: float = CONDITION_TOLERANCE
) -> LUSolution:
    """Solve matrix @ x = vector by LU factorization with partial pivoting.

    Singularity is reported through ``LUSolution.ok`` instead of an exception.

    Args:
        matrix: Square matrix, anything numpy can turn into a dense array
            (e.g. a SymmetricSquareMatrix)
        vector: Right-hand side of matching length (e.g. a CovarianceVector)
        condition_tolerance: Largest acceptable 1-norm condition number

    Returns:
        LUSolution: Solution vector, success flag and condition number
    """
    a = np.asarray(matrix, dtype=float)
    b = np.asarray(vector, dtype=float).reshape(-1)
    size = a.shape[0]

    if size == 0:
        return LUSolution(coefficients=np.zeros(0), ok=True, condition=0.0)

    with warnings.catch_warnings():
        # lu_factor only warns on an exactly singular matrix; checked below
        warnings.simplefilter("ignore", LinAlgWarning)
        lu, piv = lu_factor(a)

    if np.any(np.diag(lu) == 0):
        logger.debug("LU factorization has a zero pivot; matrix is singular")
        return LUSolution(coefficients=np.full(size, np.nan), ok=False, condition=np.inf)

    inverse = lu_solve((lu, piv), np.eye(size))
    condition = float(np.linalg.norm(a, 1) * np.linalg.norm(inverse, 1))
    if not np.isfinite(condition) or condition > condition_tolerance:
        logger.debug("condition number %.3e exceeds tolerance %.3e", condition, condition_tolerance)
        return LUSolution(coefficients=np.full(size, np.nan), ok=False, condition=condition)

    coefficients = lu_solve((lu, piv), b)
    return LUSolution(coefficients=coefficients, ok=True, condition=condition)
