# stock_predict/__init__.py

"""
Core ML engine for sentiment-driven price-drop predictions.

This package handles:
- feature construction (price, volume, sentiment word counts, sentiment one-hot)
- label creation for the next-day, 2-week and 1-month horizons
- feature standardization (population std)
- model training (logistic regression via gradient descent, k-fold CV)
- orchestration of the three horizon predictions
"""

from .errors import (
    InsufficientDataError,
    PredictionError,
    StateError,
    ValidationError,
)
from .predict import (
    get_default_predictions,
    get_stock_predictions,
    parse_prediction_response,
)
from .schemas import ParsedPrediction, PredictionOutput

__all__ = [
    "InsufficientDataError",
    "PredictionError",
    "StateError",
    "ValidationError",
    "get_default_predictions",
    "get_stock_predictions",
    "parse_prediction_response",
    "ParsedPrediction",
    "PredictionOutput",
]
