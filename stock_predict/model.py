# stock_predict/model.py

"""
Binary logistic regression trained by batch gradient descent with L2
regularization on the weights (the bias is not regularized).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ._arrays import as_matrix, as_vector
from .config import (
    DECISION_THRESHOLD,
    DEFAULT_TRAINING_OPTIONS,
    LOG_EPS,
    SIGMOID_CLIP,
    TrainingOptions,
)
from .errors import StateError, ValidationError

logger = logging.getLogger(__name__)


def sigmoid(z: float) -> float:
    """1 / (1 + e^-z), saturating to exactly 1.0 / 0.0 beyond +/-500."""
    if z > SIGMOID_CLIP:
        return 1.0
    if z < -SIGMOID_CLIP:
        return 0.0
    return 1.0 / (1.0 + math.exp(-z))


def _sigmoid_into(z: np.ndarray, out: np.ndarray) -> np.ndarray:
    """Vectorized sigmoid() written into `out`."""
    np.clip(z, -SIGMOID_CLIP, SIGMOID_CLIP, out=out)
    np.negative(out, out=out)
    np.exp(out, out=out)
    out += 1.0
    np.reciprocal(out, out=out)
    out[z > SIGMOID_CLIP] = 1.0
    out[z < -SIGMOID_CLIP] = 0.0
    return out


@dataclass
class ModelParams:
    weights: np.ndarray
    bias: float = 0.0
    converged: bool = False
    iterations: int = 0


class LogisticRegressionModel:
    """P(y=1 | x) = sigmoid(bias + weights . x)"""

    def __init__(self) -> None:
        self._params: Optional[ModelParams] = None

    def fit(self, X, y, options: Optional[TrainingOptions] = None) -> "LogisticRegressionModel":
        """
        Train from zero-initialized weights.

        Each iteration:
          - p = sigmoid(X w + b) for every row
          - grad_b = mean(p - y)
          - grad_w = mean((p - y) * x) + w / C
          - simultaneous update b -= lr * grad_b, w -= lr * grad_w
          - loss = mean BCE(p, y) + (1 / 2C) * sum(w^2)
        Stops once |prev_loss - loss| < tolerance, else after max_iterations.
        """
        opts = options or DEFAULT_TRAINING_OPTIONS

        X_arr = as_matrix(X, "LogisticRegression")
        y_arr = as_vector(y, "LogisticRegression")
        if X_arr.shape[0] == 0 or y_arr.shape[0] == 0:
            raise ValidationError("LogisticRegression: Cannot fit on empty data")
        if X_arr.shape[0] != y_arr.shape[0]:
            raise ValidationError(
                f"LogisticRegression: X and y length mismatch. "
                f"X={X_arr.shape[0]}, y={y_arr.shape[0]}"
            )

        n_samples, n_features = X_arr.shape
        alpha = 1.0 / opts.regularization_c

        weights = np.zeros(n_features, dtype=float)
        bias = 0.0

        # Reused per-iteration buffers
        z = np.empty(n_samples, dtype=float)
        pred = np.empty(n_samples, dtype=float)
        error = np.empty(n_samples, dtype=float)
        clipped = np.empty(n_samples, dtype=float)
        grad_w = np.empty(n_features, dtype=float)
        one_minus_y = 1.0 - y_arr

        prev_loss = math.inf
        converged = False
        iterations = 0

        for it in range(opts.max_iterations):
            np.dot(X_arr, weights, out=z)
            z += bias
            _sigmoid_into(z, pred)

            np.subtract(pred, y_arr, out=error)
            grad_b = error.sum() / n_samples
            np.dot(error, X_arr, out=grad_w)
            grad_w /= n_samples
            grad_w += alpha * weights

            bias -= opts.learning_rate * grad_b
            weights -= opts.learning_rate * grad_w

            # Binary cross-entropy on this iteration's predictions
            np.clip(pred, LOG_EPS, 1.0 - LOG_EPS, out=clipped)
            bce = -(y_arr @ np.log(clipped) + one_minus_y @ np.log1p(-clipped)) / n_samples
            loss = bce + (alpha / 2.0) * float(weights @ weights)

            iterations = it + 1

            if opts.verbose and (it % 100 == 0 or it == opts.max_iterations - 1):
                logger.debug("[LogisticRegression] Iteration %d: loss=%.6f", it, loss)

            if abs(prev_loss - loss) < opts.tolerance:
                converged = True
                if opts.verbose:
                    logger.debug("[LogisticRegression] Converged after %d iterations", iterations)
                break

            prev_loss = loss

        if not converged and opts.verbose:
            logger.warning(
                "[LogisticRegression] Did not converge after %d iterations",
                opts.max_iterations,
            )

        self._params = ModelParams(
            weights=weights,
            bias=float(bias),
            converged=converged,
            iterations=iterations,
        )
        return self

    def decision_function(self, X) -> np.ndarray:
        """Raw log-odds bias + weights . x per row."""
        params = self._check_fitted()
        X_arr = as_matrix(X, "LogisticRegression")
        n_features = params.weights.shape[0]
        if X_arr.shape[0] == 0:
            return np.empty(0, dtype=float)
        if X_arr.shape[1] != n_features:
            raise ValidationError(
                f"LogisticRegression: Feature count mismatch. "
                f"Expected {n_features}, got {X_arr.shape[1]}"
            )
        return X_arr @ params.weights + params.bias

    def predict_proba(self, X) -> np.ndarray:
        """Array of [P(y=0), P(y=1)] per row."""
        z = self.decision_function(X)
        if z.shape[0] == 0:
            return np.empty((0, 2), dtype=float)
        p1 = _sigmoid_into(z, np.empty_like(z))
        return np.column_stack([1.0 - p1, p1])

    def predict(self, X) -> np.ndarray:
        probas = self.predict_proba(X)[:, 1]
        return (probas >= DECISION_THRESHOLD).astype(int)

    def score(self, X, y) -> float:
        """Accuracy: fraction of exact label matches."""
        y_arr = as_vector(y, "LogisticRegression")
        y_pred = self.predict(X)
        if y_pred.shape[0] != y_arr.shape[0]:
            raise ValidationError(
                f"LogisticRegression: X and y length mismatch. "
                f"X={y_pred.shape[0]}, y={y_arr.shape[0]}"
            )
        if y_arr.shape[0] == 0:
            raise ValidationError("LogisticRegression: Cannot score on empty data")
        return float(np.mean(y_pred == y_arr))

    def get_params(self) -> Optional[ModelParams]:
        if self._params is None:
            return None
        p = self._params
        return ModelParams(
            weights=p.weights.copy(),
            bias=p.bias,
            converged=p.converged,
            iterations=p.iterations,
        )

    def is_fitted(self) -> bool:
        return self._params is not None

    def _check_fitted(self) -> ModelParams:
        if self._params is None:
            raise StateError("LogisticRegression: Model not fitted. Call fit() first.")
        return self._params
