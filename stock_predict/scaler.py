# stock_predict/scaler.py

"""
Feature standardization.

Standardizes features by removing the mean and scaling to unit variance:

    z = (x - mean) / std

The std is the *population* standard deviation (sum of squared deviations
divided by n, never n - 1), which is what scikit-learn's StandardScaler uses.
Constant columns (std == 0) are mapped to exactly 0.0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ._arrays import as_matrix
from .errors import StateError, ValidationError


@dataclass
class ScalerParams:
    mean: np.ndarray
    std: np.ndarray


class StandardScaler:
    def __init__(self) -> None:
        self._params: Optional[ScalerParams] = None

    def fit(self, X) -> "StandardScaler":
        """Compute per-column mean and population std."""
        arr = as_matrix(X, "StandardScaler")
        if arr.shape[0] == 0:
            raise ValidationError("StandardScaler: Cannot fit on empty data")

        mean = arr.mean(axis=0)
        # ddof=0 -> divide by n (population variance)
        std = np.sqrt(((arr - mean) ** 2).sum(axis=0) / arr.shape[0])
        # all-equal columns: rounding in the mean can leave a tiny non-zero std
        std[np.ptp(arr, axis=0) == 0] = 0.0

        self._params = ScalerParams(mean=mean, std=std)
        return self

    def transform(self, X) -> np.ndarray:
        params = self._check_fitted("transform")
        arr = self._check_input(X, params)
        if arr.shape[0] == 0:
            return np.empty((0, params.mean.shape[0]), dtype=float)

        constant = params.std == 0
        safe_std = np.where(constant, 1.0, params.std)
        scaled = (arr - params.mean) / safe_std
        scaled[:, constant] = 0.0
        return scaled

    def fit_transform(self, X) -> np.ndarray:
        return self.fit(X).transform(X)

    def inverse_transform(self, X) -> np.ndarray:
        """x = z * std + mean"""
        params = self._check_fitted("inverse_transform")
        arr = self._check_input(X, params)
        if arr.shape[0] == 0:
            return np.empty((0, params.mean.shape[0]), dtype=float)
        return arr * params.std + params.mean

    def get_params(self) -> Optional[ScalerParams]:
        """Copies of the fitted parameters, or None before fit()."""
        if self._params is None:
            return None
        return ScalerParams(mean=self._params.mean.copy(), std=self._params.std.copy())

    def is_fitted(self) -> bool:
        return self._params is not None

    # -----------------------------------------------------------------
    def _check_fitted(self, method: str) -> ScalerParams:
        if self._params is None:
            raise StateError(f"StandardScaler: Must call fit() before {method}()")
        return self._params

    @staticmethod
    def _check_input(X, params: ScalerParams) -> np.ndarray:
        arr = as_matrix(X, "StandardScaler")
        if arr.shape[0] > 0 and arr.shape[1] != params.mean.shape[0]:
            raise ValidationError(
                f"StandardScaler: Feature count mismatch. "
                f"Expected {params.mean.shape[0]}, got {arr.shape[1]}"
            )
        return arr
