# stock_predict/cross_validation.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ._arrays import as_matrix, as_vector
from .config import CV_FOLDS, DEFAULT_TRAINING_OPTIONS
from .errors import ValidationError
from .model import LogisticRegressionModel

logger = logging.getLogger(__name__)


@dataclass
class CVFold:
    train_indices: np.ndarray
    test_indices: np.ndarray


@dataclass
class CVResults:
    scores: List[float]
    mean_score: float
    std_score: float  # population std of the fold scores


def k_fold_split(n_samples: int, k: int) -> List[CVFold]:
    """
    Split range(n_samples) into k consecutive, non-shuffled folds.

    Every fold has floor(n / k) test rows, except the last fold which also
    takes the remainder. Rows outside a fold's test range are its train rows.

    Example (n=10, k=3):
      fold 0: test [0, 3)   fold 1: test [3, 6)   fold 2: test [6, 10)
    """
    if k < 2:
        raise ValidationError(f"CV: k must be >= 2, got {k}")
    if k > n_samples:
        raise ValidationError(f"CV: k={k} cannot be greater than n_samples={n_samples}")

    fold_size = n_samples // k
    indices = np.arange(n_samples)
    folds: List[CVFold] = []

    for i in range(k):
        test_start = i * fold_size
        test_end = n_samples if i == k - 1 else (i + 1) * fold_size

        test_mask = (indices >= test_start) & (indices < test_end)
        folds.append(CVFold(train_indices=indices[~test_mask], test_indices=indices[test_mask]))

    return folds


def cross_validate(X, y, k: int) -> CVResults:
    """
    K-fold cross-validation of a fresh LogisticRegressionModel per fold,
    trained with the default hyperparameters and scored by accuracy.
    """
    X_all = as_matrix(X, "CV")
    y_all = as_vector(y, "CV")
    if X_all.shape[0] != y_all.shape[0]:
        raise ValidationError(
            f"CV: X and y length mismatch. X={X_all.shape[0]}, y={y_all.shape[0]}"
        )

    scores: List[float] = []
    for idx, fold in enumerate(k_fold_split(X_all.shape[0], k), start=1):
        X_train, y_train = X_all[fold.train_indices], y_all[fold.train_indices]
        X_test, y_test = X_all[fold.test_indices], y_all[fold.test_indices]

        clf = LogisticRegressionModel()
        clf.fit(X_train, y_train, DEFAULT_TRAINING_OPTIONS)

        acc = clf.score(X_test, y_test)
        scores.append(acc)

        logger.debug(
            "[CV] Fold %d: n_train=%d, n_test=%d, accuracy=%.3f",
            idx, len(fold.train_indices), len(fold.test_indices), acc,
        )

    mean_score = float(np.mean(scores))
    std_score = float(np.std(scores))  # ddof=0

    return CVResults(scores=scores, mean_score=mean_score, std_score=std_score)


class LogisticRegressionCV(LogisticRegressionModel):
    """
    Logistic regression that runs k-fold CV for diagnostics and then trains
    the final model on ALL data. CV scores never affect the final parameters.
    """

    def __init__(self) -> None:
        super().__init__()
        self._cv_results: Optional[CVResults] = None

    def fit_cv(self, X, y, k: int = CV_FOLDS) -> "LogisticRegressionCV":
        X_all = as_matrix(X, "LogisticRegressionCV")
        y_all = as_vector(y, "LogisticRegressionCV")
        if X_all.shape[0] == 0 or y_all.shape[0] == 0:
            raise ValidationError("LogisticRegressionCV: Cannot fit on empty data")
        if X_all.shape[0] != y_all.shape[0]:
            raise ValidationError(
                f"LogisticRegressionCV: X and y length mismatch. "
                f"X={X_all.shape[0]}, y={y_all.shape[0]}"
            )

        self._cv_results = cross_validate(X_all, y_all, k)
        self.fit(X_all, y_all, DEFAULT_TRAINING_OPTIONS)
        return self

    def get_cv_results(self) -> Optional[CVResults]:
        return self._cv_results

    def get_cv_scores(self) -> List[float]:
        return list(self._cv_results.scores) if self._cv_results else []

    def get_mean_cv_score(self) -> Optional[float]:
        return self._cv_results.mean_score if self._cv_results else None
