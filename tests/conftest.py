# tests/conftest.py

import numpy as np
import pytest


def make_series(n: int, seed: int = 7):
    """Deterministic synthetic daily series (close, volume, pos, neg, sentiment)."""
    rng = np.random.default_rng(seed)
    close = 150.0 + np.cumsum(rng.normal(0.0, 1.5, size=n))
    volume = rng.integers(80_000_000, 120_000_000, size=n).astype(float)
    positive = rng.integers(0, 10, size=n)
    negative = rng.integers(0, 10, size=n)
    sentiment = rng.choice(["POS", "NEG", "NEUT", "neutral", "???"], size=n)
    return {
        "close": close.tolist(),
        "volume": volume.tolist(),
        "positive": positive.tolist(),
        "negative": negative.tolist(),
        "sentiment": sentiment.tolist(),
    }


@pytest.fixture
def sample_40():
    return make_series(40)


@pytest.fixture
def aapl_rows():
    return {
        "close": [150.0, 152.0, 151.5, 153.0, 152.5],
        "volume": [100000000, 95000000, 98000000, 102000000, 97000000],
        "positive": [5, 3, 7, 4, 6],
        "negative": [2, 4, 1, 3, 2],
        "sentiment": ["POS", "NEG", "POS", "NEUT", "POS"],
    }
