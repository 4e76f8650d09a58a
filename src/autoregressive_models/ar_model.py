"""AR(p) model estimation using Ordinary Least Squares (OLS) on lagged covariances."""

import json
import logging
import warnings

import numpy as np
import pandas as pd

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple, Union

from autoregressive_models.covariance import (
    lagged_window,
    make_covariant_matrix,
    make_covariant_vector,
)
from autoregressive_models.errors import (
    IncorrectDataLengthError,
    InsufficientDataError,
    NegativeOrderError,
    SingularCovariantMatrixError,
)
from autoregressive_models.linear_solver import CONDITION_TOLERANCE, solve_normal_equations

logger = logging.getLogger(__name__)

ArrayLike = Union[Sequence[float], np.ndarray, pd.Series]


def validate_inputs(data: ArrayLike, order: int) -> np.ndarray:
    """Check the order and the data and return the data as a float array.

    Args:
        data: Time series observations, oldest first
        order: Order of the autoregressive model

    Returns:
        np.ndarray: The observations as a 1D float64 array

    Raises:
        ValueError: If order is not an integer
        NegativeOrderError: If order is negative
        ValueError: If data is not 1-dimensional or contains NaN or infinite values
        InsufficientDataError: If len(data) <= 2 * order + 1
    """
    if isinstance(order, bool) or not isinstance(order, (int, np.integer)):
        raise ValueError(f"order must be an integer, got {type(order)}")
    if order < 0:
        raise NegativeOrderError(f"got {order}")

    values = np.asarray(data, dtype=float)
    if values.ndim != 1:
        raise ValueError(f"data must be 1-dimensional, got {values.ndim} dimensions")
    if len(values) <= 2 * order + 1:
        raise InsufficientDataError(f"got {len(values)} observations for order {order}")
    if not np.isfinite(values).all():
        raise ValueError("data contains NaN or infinite values")

    return values


def in_sample_predictions(data: np.ndarray, coefficients: np.ndarray) -> np.ndarray:
    """Linear part of the one-step prediction for every training window.

    Entry k is sum_j coefficients[j] * data[order + k - j - 1], i.e. the
    prediction of data[order + k] without the noise term.
    """
    order = len(coefficients)
    predicted = np.zeros(len(data) - order)
    for j, coefficient in enumerate(coefficients):
        predicted += coefficient * lagged_window(data, j + 1, order)
    return predicted


def estimate_noise_and_error(data: np.ndarray, coefficients: np.ndarray) -> Tuple[float, float]:
    """Mean residual (noise) and residual standard deviation over the training windows.

    Args:
        data: Time series data as a 1D numpy array
        coefficients: Fitted coefficients, coefficients[j] weighting lag j + 1

    Returns:
        tuple: (noise, standard_error). standard_error is NaN when the
        variance estimate minus noise squared comes out negative.
    """
    order = len(coefficients)
    targets = lagged_window(data, 0, order)
    predicted = in_sample_predictions(data, coefficients)

    deviation_variance = float(np.mean((predicted - targets) ** 2))
    noise = float(np.mean(targets - predicted))

    radicand = deviation_variance - noise ** 2
    if radicand < 0:
        warnings.warn(
            f"Negative residual variance estimate ({radicand:.3e}); standard error is NaN",
            RuntimeWarning,
            stacklevel=2,
        )
        return noise, float("nan")

    return noise, float(np.sqrt(radicand))


@dataclass(frozen=True)
class ARModel:
    """Fitted autoregressive model of order p.

    coefficients[j] is the weight of the observation j + 1 steps before the
    predicted one, so coefficients[0] multiplies the most recent value.
    """
    coefficients: Tuple[float, ...]
    noise: float
    standard_error: float

    def __post_init__(self):
        object.__setattr__(self, 'coefficients', tuple(float(c) for c in self.coefficients))
        object.__setattr__(self, 'noise', float(self.noise))
        object.__setattr__(self, 'standard_error', float(self.standard_error))

    @classmethod
    def fit(
        cls,
        data: ArrayLike,
        order: int,
        condition_tolerance: float = CONDITION_TOLERANCE
    ) -> 'ARModel':
        """Fit an AR(order) model to data. See :func:`fit`."""
        return fit(data, order, condition_tolerance=condition_tolerance)

    @property
    def order(self) -> int:
        return len(self.coefficients)

    def predict(self, window: ArrayLike) -> float:
        """Predict the value that follows window.

        Args:
            window: The `order` most recent observations, oldest first

        Returns:
            float: noise + sum_i coefficients[order - 1 - i] * window[i]

        Raises:
            IncorrectDataLengthError: If window does not hold exactly `order` values
        """
        values = np.asarray(window, dtype=float)
        if values.ndim != 1 or len(values) != self.order:
            raise IncorrectDataLengthError(f"expected {self.order} values, got {values.size}")

        prediction = self.noise
        for index, value in enumerate(values):
            prediction += self.coefficients[self.order - 1 - index] * value
        return float(prediction)

    def coefficient_series(self) -> pd.Series:
        """Coefficients as a Series indexed 'ar1', ..., 'arp'."""
        return pd.Series(
            list(self.coefficients),
            index=[f'ar{i+1}' for i in range(self.order)],
            dtype=float,
            name='coefficient'
        )

    def residuals(self, data: ArrayLike) -> pd.DataFrame:
        """One-step in-sample fit over every training window.

        Args:
            data: Time series the model is evaluated on (usually the training data)

        Returns:
            pd.DataFrame: Columns fitted, actual, residual (fitted - actual),
            one row per predicted observation in chronological order. A
            Series input keeps its index.

        Raises:
            ValueError: If data is not 1D or holds no more than `order` values
        """
        values = np.asarray(data, dtype=float)
        if values.ndim != 1:
            raise ValueError(f"data must be 1-dimensional, got {values.ndim} dimensions")
        if len(values) <= self.order:
            raise ValueError(f"data length ({len(values)}) must be greater than p ({self.order})")

        coefficients = np.asarray(self.coefficients, dtype=float)
        fitted = self.noise + in_sample_predictions(values, coefficients)
        actual = lagged_window(values, 0, self.order)

        if isinstance(data, pd.Series):
            index = data.index[self.order:]
        else:
            index = pd.RangeIndex(self.order, len(values))

        return pd.DataFrame({
            'fitted': fitted,
            'actual': actual,
            'residual': fitted - actual
        }, index=index)

    def to_dict(self) -> Dict[str, object]:
        """Convert the model to a plain dictionary.

        Returns:
            Dict[str, object]: Dictionary with keys 'coefficients', 'noise',
            'standard_error'
        """
        return {
            'coefficients': list(self.coefficients),
            'noise': self.noise,
            'standard_error': self.standard_error
        }

    @classmethod
    def from_dict(cls, values: Dict[str, object]) -> 'ARModel':
        """Rebuild a model from the output of :meth:`to_dict`.

        Args:
            values: Dictionary with keys 'coefficients', 'noise', 'standard_error'

        Returns:
            ARModel: The restored model

        Raises:
            KeyError: If one of the three keys is missing
        """
        return cls(
            coefficients=tuple(values['coefficients']),
            noise=values['noise'],
            standard_error=values['standard_error']
        )

    def to_json(self) -> str:
        """Serialize the model to a JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> 'ARModel':
        """Rebuild a model from the output of :meth:`to_json`.

        Args:
            text: JSON object with the fields of :meth:`to_dict`

        Returns:
            ARModel: The restored model
        """
        return cls.from_dict(json.loads(text))

    def summary(self) -> str:
        """Generate a summary of the fitted model.

        Returns:
            str: Summary string with parameter estimates.
        """
        summary = "Parameter Estimates:\n"
        for name, value in self.coefficient_series().items():
            summary += f"  {name:<6}:   {value:.6f}\n"
        summary += f"  noise :   {self.noise:.6f}\n\n"
        summary += f"Standard Error: {self.standard_error:.6f}\n"
        return summary

    def __repr__(self) -> str:
        return f"ARModel(p={self.order}, noise={self.noise:.6g}, standard_error={self.standard_error:.6g})"


def fit(
    data: ArrayLike,
    order: int,
    condition_tolerance: float = CONDITION_TOLERANCE
) -> ARModel:
    """Fit an AR(order) model using the method of least squares.

    Args:
        data: Time series observations, oldest first
        order: Number of lagged terms
        condition_tolerance: Largest acceptable condition number of the
            covariance matrix

    Returns:
        ARModel: The fitted model

    Raises:
        NegativeOrderError: If order is negative
        InsufficientDataError: If len(data) <= 2 * order + 1
        SingularCovariantMatrixError: If the covariance matrix cannot be solved
    """
    values = validate_inputs(data, order)
    logger.debug("fitting AR(%d) to %d observations", order, len(values))

    coefficients = np.zeros(0)
    if order > 0:
        matrix = make_covariant_matrix(values, order)
        vector = make_covariant_vector(values, order)
        solution = solve_normal_equations(matrix, vector, condition_tolerance=condition_tolerance)
        if not solution.ok:
            raise SingularCovariantMatrixError(f"condition number {solution.condition:.3e}")
        coefficients = solution.coefficients

    noise, standard_error = estimate_noise_and_error(values, coefficients)
    logger.debug("fitted AR(%d): noise=%.6g standard_error=%.6g", order, noise, standard_error)

    return ARModel(
        coefficients=tuple(coefficients),
        noise=noise,
        standard_error=standard_error
    )
