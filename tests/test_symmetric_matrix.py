import numpy as np
import pytest

from autoregressive_models.symmetric_matrix import CovarianceVector, SymmetricSquareMatrix


def test_packed_storage_length():
    assert len(SymmetricSquareMatrix(4).elements) == 10
    assert len(SymmetricSquareMatrix(0).elements) == 0


def test_packed_index_runs_row_by_row():
    size = 3
    matrix = SymmetricSquareMatrix(size)
    for position, (r, c) in enumerate((r, c) for r in range(size) for c in range(r, size)):
        matrix.set_element(r, c, float(position))
    assert matrix.elements.tolist() == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]


def test_access_is_symmetric():
    matrix = SymmetricSquareMatrix(3)
    matrix.set_element(0, 2, 5.0)
    matrix.set_element(2, 1, 7.0)
    assert matrix.at(2, 0) == matrix.at(0, 2) == 5.0
    assert matrix[1, 2] == 7.0
    assert matrix.dims() == (3, 3)


def test_transpose_is_self():
    matrix = SymmetricSquareMatrix(2)
    assert matrix.T is matrix


def test_dense_view():
    matrix = SymmetricSquareMatrix(2)
    matrix.set_element(0, 0, 1.0)
    matrix.set_element(0, 1, 2.0)
    matrix.set_element(1, 1, 3.0)
    assert np.array_equal(np.asarray(matrix), [[1.0, 2.0], [2.0, 3.0]])


def test_out_of_range_access():
    matrix = SymmetricSquareMatrix(2)
    with pytest.raises(IndexError):
        matrix.at(0, 2)


def test_negative_size():
    with pytest.raises(ValueError):
        SymmetricSquareMatrix(-1)


def test_vector_matrix_surface():
    vector = CovarianceVector([1.0, 2.0, 3.0])
    assert vector.dims() == (3, 1)
    assert vector.at(2, 0) == 3.0
    assert vector.T.shape == (1, 3)
    with pytest.raises(IndexError):
        vector.at(0, 1)


def test_vector_surface():
    vector = CovarianceVector([1.0, 2.0, 3.0])
    vector[1] = 9.0
    assert len(vector) == 3
    assert vector.at_vec(1) == 9.0
    assert vector[1] == 9.0
    assert np.asarray(vector).tolist() == [1.0, 9.0, 3.0]
