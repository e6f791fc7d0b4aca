# stock_predict/schemas.py

from __future__ import annotations

from pydantic import BaseModel


class PredictionOutput(BaseModel):
    """
    Predictions for the three horizons.
    Each value is "0.0" (price not expected to drop) or "1.0" (drop).
    """
    next: str     # next trading day
    week: str     # ~2 weeks (10 trading days)
    month: str    # ~1 month (21 trading days)
    ticker: str


class ParsedPrediction(BaseModel):
    """PredictionOutput with the horizon values as floats."""
    next_day: float
    two_weeks: float
    one_month: float
    ticker: str
