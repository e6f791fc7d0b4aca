# stock_predict/labeling.py

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from .errors import ValidationError


def create_labels(close: Sequence[float], horizon: int) -> np.ndarray:
    """
    Binary "price drop" labels for a horizon in trading days.

    label[i] = 1 if close[i] > close[i + horizon], else 0

    The last `horizon` days have no known future close and get no label, so
    the result has length max(0, n - horizon). An empty result means there
    is not enough data for this horizon; callers decide how to report it.
    """
    if horizon < 1:
        raise ValidationError("horizon must be >= 1")

    close_s = pd.Series(np.asarray(close, dtype=float))
    n_labels = max(0, len(close_s) - horizon)
    if n_labels == 0:
        return np.empty(0, dtype=int)

    future_close = close_s.shift(-horizon)
    labels = (close_s > future_close).astype(int)

    # Drop rows where we don't have future data
    return labels.iloc[:n_labels].to_numpy()


def validate_labels(y: Sequence[float]) -> None:
    """Raise ValidationError unless y is a non-empty sequence of 0/1 labels."""
    if y is None or len(y) == 0:
        raise ValidationError("Labels cannot be empty")

    for i, label in enumerate(y):
        if label != 0 and label != 1:
            raise ValidationError(f"Invalid label at index {i}: {label} (must be 0 or 1)")
