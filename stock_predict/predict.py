# stock_predict/predict.py

from __future__ import annotations

import logging
import time
from typing import Sequence, Tuple

import numpy as np
from joblib import Parallel, delayed

from .config import CV_FOLDS, HORIZONS, MIN_DATA_POINTS
from .cross_validation import LogisticRegressionCV
from .errors import InsufficientDataError, ValidationError
from .features import SentimentInput, build_feature_matrix, validate_feature_matrix
from .labeling import create_labels, validate_labels
from .scaler import StandardScaler
from .schemas import ParsedPrediction, PredictionOutput

logger = logging.getLogger(__name__)


def _predict_horizon(
    name: str,
    horizon: int,
    features: np.ndarray,
    close: np.ndarray,
) -> Tuple[str, int, float]:
    """
    Train and predict one horizon on its own scaler + model.

    Returns (horizon name, predicted class, mean CV accuracy).
    """
    labels = create_labels(close, horizon)
    if labels.size == 0:
        raise InsufficientDataError(
            f"Insufficient data for {name} prediction (horizon={horizon}): "
            f"need at least {horizon + 1} data points"
        )

    # Last `horizon` rows have no known future close
    X = features[: labels.size]
    validate_feature_matrix(X)
    validate_labels(labels)

    scaler = StandardScaler()
    X_scaled = scaler.fit_transform(X)

    clf = LogisticRegressionCV()
    clf.fit_cv(X_scaled, labels, k=CV_FOLDS)

    # Most recent observation, scaled with this horizon's own scaler
    x_latest = scaler.transform(features[-1:])
    prediction = int(clf.predict(x_latest)[0])

    return name, prediction, clf.get_mean_cv_score()


def get_stock_predictions(
    ticker: str,
    close: Sequence[float],
    volume: Sequence[float],
    positive: Sequence[float],
    negative: Sequence[float],
    sentiment: SentimentInput,
    n_jobs: int = 1,
) -> PredictionOutput:
    """
    Predict whether the close will drop over the next day, ~2 weeks and
    ~1 month for a ticker.

    All arrays are parallel daily series, oldest first. Each horizon gets its
    own labels, scaler and CV-wrapped model; the horizons are independent, so
    n_jobs > 1 runs them in parallel with identical results.
    """
    start = time.perf_counter()

    try:
        if not isinstance(ticker, str) or not ticker.strip():
            raise ValidationError("Ticker symbol is required")

        features = build_feature_matrix(close, volume, positive, negative, sentiment)
        n_points = features.shape[0]

        if n_points < MIN_DATA_POINTS:
            raise InsufficientDataError(
                f"Insufficient data: need at least {MIN_DATA_POINTS} data points, "
                f"got {n_points}"
            )

        logger.info(
            "[predict] Generating predictions for %s (%d data points)", ticker, n_points
        )

        close_arr = np.asarray(close, dtype=float)
        results = Parallel(n_jobs=n_jobs)(
            delayed(_predict_horizon)(name, horizon, features, close_arr)
            for name, horizon in HORIZONS.items()
        )
    except Exception:
        logger.exception("[predict] Error generating predictions for %r", ticker)
        raise

    predictions = {}
    for name, prediction, cv_score in results:
        logger.info("[predict] %s %s: CV score = %.4f", ticker, name, cv_score)
        predictions[name] = prediction

    elapsed_ms = (time.perf_counter() - start) * 1000.0
    logger.info(
        "[predict] Predictions for %s: next=%d, week=%d, month=%d (%.2fms)",
        ticker, predictions["next"], predictions["week"], predictions["month"], elapsed_ms,
    )

    return PredictionOutput(
        next=f"{predictions['next']:.1f}",
        week=f"{predictions['week']:.1f}",
        month=f"{predictions['month']:.1f}",
        ticker=ticker,
    )


def parse_prediction_response(response: PredictionOutput) -> ParsedPrediction:
    """Convert the string predictions back to floats."""
    return ParsedPrediction(
        next_day=float(response.next),
        two_weeks=float(response.week),
        one_month=float(response.month),
        ticker=response.ticker,
    )


def get_default_predictions(ticker: str) -> PredictionOutput:
    """All-"0.0" predictions for callers that fall back on insufficient data."""
    logger.warning("[predict] Using default predictions for %s (insufficient data)", ticker)
    return PredictionOutput(next="0.0", week="0.0", month="0.0", ticker=ticker)
