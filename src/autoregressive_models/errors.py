"""Errors raised while fitting or evaluating an autoregressive model."""

from enum import Enum

import numpy as np


class ErrorKind(Enum):
    """Closed set of failures an AR fit or prediction can report."""
    NEGATIVE_ORDER = "model order cannot be negative"
    INSUFFICIENT_DATA = (
        "the number of elements in the data must be greater than one more "
        "than twice the order"
    )
    SINGULAR_COVARIANT_MATRIX = "the covariant matrix generated from the data was singular"
    INCORRECT_DATA_LENGTH = "the length of the supplied new data was not equal to the order"


class AutoregressionError(ValueError):
    """Base class for all autoregression failures."""

    kind: ErrorKind

    def __init__(self, detail: str = ""):
        message = f"autoregression: {self.kind.value}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.detail = detail


class NegativeOrderError(AutoregressionError):
    kind = ErrorKind.NEGATIVE_ORDER


class InsufficientDataError(AutoregressionError):
    kind = ErrorKind.INSUFFICIENT_DATA


class SingularCovariantMatrixError(AutoregressionError, np.linalg.LinAlgError):
    kind = ErrorKind.SINGULAR_COVARIANT_MATRIX


class IncorrectDataLengthError(AutoregressionError):
    kind = ErrorKind.INCORRECT_DATA_LENGTH
