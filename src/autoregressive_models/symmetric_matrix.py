"""Storage adapters handed to the linear-algebra backend.

The covariance matrix of an AR(p) fit is symmetric, so only the elements on
or above the diagonal are kept, packed row by row into a flat array of length
p(p+1)/2. The covariance vector is a single column that has to behave both
like a p x 1 matrix and like a plain vector.
"""

import numpy as np

from typing import Tuple


class SymmetricSquareMatrix:
    """Square symmetric matrix backed by its packed upper triangle."""

    def __init__(self, size: int):
        """Initialize a zero matrix.

        Args:
            size: Number of rows (and columns) of the matrix

        Raises:
            ValueError: If size is negative
        """
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")

        self.size = size
        self.elements = np.zeros(size * (size + 1) // 2)

    def _index(self, row: int, col: int) -> int:
        """Position of element (row, col) in the packed upper triangle.

        Args:
            row: Row index
            col: Column index

        Returns:
            int: Offset into self.elements

        Raises:
            IndexError: If (row, col) lies outside the matrix
        """
        if col < row:
            row, col = col, row
        if row < 0 or col >= self.size:
            raise IndexError(f"({row}, {col}) is outside a {self.size}x{self.size} matrix")
        return row * self.size - (row - 1) * row // 2 + col - row

    @property
    def shape(self) -> Tuple[int, int]:
        """Dimensions as a (rows, columns) tuple."""
        return self.size, self.size

    def dims(self) -> Tuple[int, int]:
        """Dimensions as a (rows, columns) tuple."""
        return self.shape

    def at(self, i: int, j: int) -> float:
        """Element (i, j); identical to element (j, i).

        Args:
            i: Row index
            j: Column index

        Returns:
            float: The stored value
        """
        return float(self.elements[self._index(i, j)])

    def set_element(self, row: int, col: int, value: float):
        """Store value at (row, col), which also sets (col, row).

        Args:
            row: Row index
            col: Column index
            value: Value to store
        """
        self.elements[self._index(row, col)] = value

    @property
    def T(self) -> 'SymmetricSquareMatrix':
        """Transpose; a symmetric matrix is its own transpose."""
        return self

    def __getitem__(self, key: Tuple[int, int]) -> float:
        """Element access as matrix[i, j]."""
        return self.at(*key)

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        """Dense p x p copy for numpy and scipy."""
        dense = np.empty(self.shape, dtype=float)
        for r in range(self.size):
            for c in range(r, self.size):
                value = self.at(r, c)
                dense[r, c] = value
                dense[c, r] = value
        if dtype is not None:
            dense = dense.astype(dtype)
        return dense

    def __repr__(self) -> str:
        """String representation of the matrix."""
        return f"SymmetricSquareMatrix(size={self.size})"


class CovarianceVector:
    """Column vector usable through a matrix surface and a vector surface.

    Matrix surface: ``dims()``, ``at(i, j)`` and ``T``.
    Vector surface: ``len()``, ``at_vec(i)`` and integer indexing.
    """

    def __init__(self, values):
        self.values = np.asarray(values, dtype=float).reshape(-1)

    # matrix surface

    def dims(self) -> Tuple[int, int]:
        """Dimensions of the column, (p, 1)."""
        return len(self.values), 1

    @property
    def shape(self) -> Tuple[int, int]:
        """Dimensions of the column, (p, 1)."""
        return self.dims()

    def at(self, i: int, j: int) -> float:
        """Element (i, j) of the p x 1 column.

        Args:
            i: Row index
            j: Column index, must be 0

        Returns:
            float: The stored value

        Raises:
            IndexError: If j is not 0
        """
        if j != 0:
            raise IndexError(f"column {j} is outside a single-column vector")
        return float(self.values[i])

    @property
    def T(self) -> np.ndarray:
        """Row view (1 x p) sharing storage with the vector."""
        return self.values.reshape(1, -1)

    # vector surface

    def at_vec(self, i: int) -> float:
        """Element i of the vector."""
        return float(self.values[i])

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, i: int) -> float:
        return float(self.values[i])

    def __setitem__(self, i: int, value: float):
        self.values[i] = value

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        if dtype is not None:
            return self.values.astype(dtype)
        return self.values.copy()

    def __repr__(self) -> str:
        return f"CovarianceVector({self.values.tolist()})"
