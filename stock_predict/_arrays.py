# stock_predict/_arrays.py

from __future__ import annotations

import numpy as np

from .errors import ValidationError


def as_matrix(X, owner: str, check_finite: bool = True) -> np.ndarray:
    """
    Convert a list of rows / 2-D array into a float ndarray of shape (n, m).

    Raises ValidationError for ragged rows, non-2-D input and (optionally)
    NaN / inf values. An empty input becomes an array of shape (0, 0).
    """
    if isinstance(X, np.ndarray):
        arr = X.astype(float, copy=False)
        if arr.size == 0 and arr.ndim != 2:
            return np.empty((0, 0), dtype=float)
    else:
        rows = list(X)
        if not rows:
            return np.empty((0, 0), dtype=float)
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise ValidationError(
                    f"{owner}: Inconsistent feature count at row {i}. "
                    f"Expected {width}, got {len(row)}"
                )
        arr = np.asarray(rows, dtype=float)

    if arr.ndim != 2:
        raise ValidationError(f"{owner}: Expected a 2-D matrix, got shape {arr.shape}")

    if check_finite and not np.all(np.isfinite(arr)):
        i, j = np.argwhere(~np.isfinite(arr))[0]
        raise ValidationError(
            f"{owner}: Non-finite value at row {i}, column {j}: {arr[i, j]}"
        )
    return arr


def as_vector(y, owner: str) -> np.ndarray:
    """Convert labels to a 1-D float array."""
    arr = np.asarray(y, dtype=float)
    if arr.ndim != 1:
        raise ValidationError(f"{owner}: Expected a 1-D label array, got shape {arr.shape}")
    return arr
