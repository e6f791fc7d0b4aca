# stock_predict/features.py

from __future__ import annotations

from typing import List, Sequence, Union

import numpy as np
import pandas as pd

from .config import (
    FEATURE_COLUMNS,
    FEATURE_COUNT,
    NEG_SCORE_THRESHOLD,
    POS_SCORE_THRESHOLD,
    SENTIMENT_ALIASES,
    SENTIMENT_CATEGORIES,
)
from .errors import ValidationError

SentimentInput = Union[Sequence[str], Sequence[float]]


# ---------------------------------------------------------------------
# Sentiment encoding
# ---------------------------------------------------------------------
def normalize_sentiment(label: object) -> str:
    """Map a raw sentiment label to POS / NEG / NEUT / UNKNOWN."""
    if label is None:
        return "UNKNOWN"
    key = str(label).strip().upper()
    return SENTIMENT_ALIASES.get(key, "UNKNOWN")


def scores_to_categories(scores: Sequence[float]) -> List[str]:
    """
    Convert numeric sentiment scores into categories.

    score > 0.6 -> POS, score < -0.6 -> NEG, otherwise NEUT.
    """
    categories = []
    for score in scores:
        if score > POS_SCORE_THRESHOLD:
            categories.append("POS")
        elif score < NEG_SCORE_THRESHOLD:
            categories.append("NEG")
        else:
            categories.append("NEUT")
    return categories


def _is_score(value: object) -> bool:
    return isinstance(value, (int, float, np.number)) and not isinstance(value, bool)


def _is_numeric_sentiment(sentiment: SentimentInput) -> bool:
    """True if every entry is a numeric score; mixed entries are rejected."""
    flags = [_is_score(value) for value in sentiment]
    if any(flags) and not all(flags):
        raise ValidationError(
            "Sentiment must be all category labels or all numeric scores, "
            f"got a mix (first numeric at index {flags.index(True)}, "
            f"first label at index {flags.index(False)})"
        )
    return bool(flags) and all(flags)


def one_hot_encode(sentiment: Sequence[str]) -> np.ndarray:
    """
    One-hot encode sentiment labels into an (n, 4) array.

    Columns are [POS, NEG, NEUT, UNKNOWN]; exactly one is 1 per row.
    """
    encoded = np.zeros((len(sentiment), len(SENTIMENT_CATEGORIES)), dtype=float)
    for i, label in enumerate(sentiment):
        category = normalize_sentiment(label)
        encoded[i, SENTIMENT_CATEGORIES.index(category)] = 1.0
    return encoded


# ---------------------------------------------------------------------
# Feature matrix
# ---------------------------------------------------------------------
def build_feature_frame(
    close: Sequence[float],
    volume: Sequence[float],
    positive: Sequence[float],
    negative: Sequence[float],
    sentiment: SentimentInput,
) -> pd.DataFrame:
    """
    Build the n x 8 feature table from parallel daily arrays.

    Columns follow FEATURE_COLUMNS:
      close, volume, positive, negative, is_pos, is_neg, is_neut, is_unknown

    Row order = input order (oldest first). Numeric sentiment scores are
    converted to categories before encoding.
    """
    lengths = {
        "close": len(close),
        "volume": len(volume),
        "positive": len(positive),
        "negative": len(negative),
        "sentiment": len(sentiment),
    }
    if len(set(lengths.values())) > 1:
        raise ValidationError(f"Inconsistent input lengths: {lengths}")

    if _is_numeric_sentiment(sentiment):
        sentiment = scores_to_categories(sentiment)

    one_hot = one_hot_encode(sentiment)

    df = pd.DataFrame(
        {
            "close": np.asarray(close, dtype=float),
            "volume": np.asarray(volume, dtype=float),
            "positive": np.asarray(positive, dtype=float),
            "negative": np.asarray(negative, dtype=float),
        }
    )
    for j, col in enumerate(FEATURE_COLUMNS[4:]):
        df[col] = one_hot[:, j]

    return df[FEATURE_COLUMNS]


def build_feature_matrix(
    close: Sequence[float],
    volume: Sequence[float],
    positive: Sequence[float],
    negative: Sequence[float],
    sentiment: SentimentInput,
) -> np.ndarray:
    """Same as build_feature_frame, as a plain (n, 8) float array."""
    df = build_feature_frame(close, volume, positive, negative, sentiment)
    matrix = df.values.astype(float)
    # read-only: rows may be sliced per horizon but never modified
    matrix.setflags(write=False)
    return matrix


def validate_feature_matrix(X) -> None:
    """Raise ValidationError unless X is a non-empty, finite n x 8 matrix."""
    if X is None or len(X) == 0:
        raise ValidationError("Feature matrix cannot be empty")

    n_features = len(X[0])
    if n_features != FEATURE_COUNT:
        raise ValidationError(
            f"Expected {FEATURE_COUNT} features, got {n_features}"
        )

    for i, row in enumerate(X):
        if len(row) != n_features:
            raise ValidationError(
                f"Inconsistent feature count at row {i}: "
                f"expected {n_features}, got {len(row)}"
            )
        for j, value in enumerate(row):
            if not np.isfinite(value):
                raise ValidationError(
                    f"Non-finite value at row {i}, column {j}: {value}"
                )
