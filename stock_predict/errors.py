# stock_predict/errors.py

"""Exception types raised by the prediction core."""


class PredictionError(Exception):
    """Base class for all prediction core errors."""


class ValidationError(PredictionError, ValueError):
    """Malformed input: unequal lengths, non-finite values, bad horizon, ..."""


class StateError(PredictionError, RuntimeError):
    """Operation called out of order, e.g. transform() before fit()."""


class InsufficientDataError(PredictionError, ValueError):
    """Well-formed input that is too short for a horizon or the minimum size."""
