# stock_predict/config.py

from dataclasses import dataclass

# Feature columns (we keep them in one place so features + scaler + model share them)
FEATURE_COLUMNS = [
    "close", "volume", "positive", "negative",
    # sentiment one-hot
    "is_pos", "is_neg", "is_neut", "is_unknown",
]
FEATURE_COUNT = len(FEATURE_COLUMNS)

# Sentiment categories, in one-hot column order
SENTIMENT_CATEGORIES = ["POS", "NEG", "NEUT", "UNKNOWN"]
SENTIMENT_ALIASES = {
    "POS": "POS",
    "NEG": "NEG",
    "NEUT": "NEUT",
    "NEUTRAL": "NEUT",
}

# Numeric sentiment scores -> categories
# score > POS_SCORE_THRESHOLD = POS, score < NEG_SCORE_THRESHOLD = NEG, else NEUT
POS_SCORE_THRESHOLD = 0.6
NEG_SCORE_THRESHOLD = -0.6

# Prediction horizons in trading days (label = 1 if close drops over the horizon)
HORIZONS = {
    "next": 1,    # next trading day
    "week": 10,   # ~2 weeks
    "month": 21,  # ~1 month
}

# Cross-validation folds used by the orchestrator
CV_FOLDS = 8

# 8 folds + 21-day horizon
MIN_DATA_POINTS = CV_FOLDS + max(HORIZONS.values())

# Logistic regression defaults
MAX_ITERATIONS = 1000
LEARNING_RATE = 0.01
REGULARIZATION_C = 1.0  # inverse of L2 strength
TOLERANCE = 1e-4

SIGMOID_CLIP = 500.0
LOG_EPS = 1e-15
DECISION_THRESHOLD = 0.5


@dataclass(frozen=True)
class TrainingOptions:
    max_iterations: int = MAX_ITERATIONS
    learning_rate: float = LEARNING_RATE
    regularization_c: float = REGULARIZATION_C
    tolerance: float = TOLERANCE
    verbose: bool = False


# Hyperparameters for every CV fold and every final model
DEFAULT_TRAINING_OPTIONS = TrainingOptions()
