"""Lagged covariances feeding the AR(p) normal equations."""

import numpy as np

from autoregressive_models.symmetric_matrix import CovarianceVector, SymmetricSquareMatrix


def lagged_window(data: np.ndarray, lag: int, order: int) -> np.ndarray:
    """Return the n - order observations that sit `lag` steps behind each target.

    Lag 0 is the targets themselves, data[order:].

    Args:
        data: Time series data as a 1D numpy array
        lag: Lag in [0, order]
        order: Order of the autoregressive model

    Returns:
        np.ndarray: View of shape (n - order,)
    """
    return data[order - lag : len(data) - lag]


def cov(data: np.ndarray, r: int, c: int, order: int) -> float:
    """Un-normalized sample covariance between lags r and c.

    Cross second moment of the two lagged windows minus the product of their
    sums divided by the window length.
    """
    x = lagged_window(data, r, order)
    y = lagged_window(data, c, order)
    iterations = len(x)
    return float(np.dot(x, y) - x.sum() * y.sum() / iterations)


def make_covariant_matrix(data: np.ndarray, order: int) -> SymmetricSquareMatrix:
    """Build C with C[r][c] = cov(r + 1, c + 1), upper triangle only."""
    matrix = SymmetricSquareMatrix(order)
    for r in range(order):
        for c in range(r, order):
            matrix.set_element(r, c, cov(data, r + 1, c + 1, order))
    return matrix


def make_covariant_vector(data: np.ndarray, order: int) -> CovarianceVector:
    """Build b with b[r] = cov(r + 1, 0)."""
    vector = CovarianceVector(np.zeros(order))
    for r in range(order):
        vector[r] = cov(data, r + 1, 0, order)
    return vector
