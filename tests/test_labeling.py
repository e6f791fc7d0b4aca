# tests/test_labeling.py

import pytest

from stock_predict.errors import ValidationError
from stock_predict.labeling import create_labels, validate_labels


def test_next_day_labels():
    # 150 -> 152 rises (0), 152 -> 151 drops (1)
    assert create_labels([150.0, 152.0, 151.0], 1).tolist() == [0, 1]


def test_two_week_labels():
    close = list(range(100, 112))
    assert create_labels(close, 10).tolist() == [0, 0]


def test_unchanged_price_is_not_a_drop():
    assert create_labels([100, 100, 100], 1).tolist() == [0, 0]


def test_downward_trend():
    assert create_labels([110, 108, 106, 104, 102], 1).tolist() == [1, 1, 1, 1]


def test_label_lengths():
    close = [100.0] * 50
    assert len(create_labels(close, 1)) == 49
    assert len(create_labels(close, 10)) == 40
    assert len(create_labels(close, 21)) == 29


@pytest.mark.parametrize("close, horizon", [([100, 101], 10), ([100, 101, 102], 3), ([], 1)])
def test_insufficient_data_gives_empty(close, horizon):
    assert create_labels(close, horizon).tolist() == []


@pytest.mark.parametrize("horizon", [0, -1])
def test_invalid_horizon(horizon):
    with pytest.raises(ValidationError, match="horizon must be >= 1"):
        create_labels([100, 101], horizon)


def test_validate_labels():
    validate_labels([0, 1, 0, 1, 1, 0])
    with pytest.raises(ValidationError, match="cannot be empty"):
        validate_labels([])
    with pytest.raises(ValidationError, match="Invalid label"):
        validate_labels([0, 1, 2])
    with pytest.raises(ValidationError, match="Invalid label"):
        validate_labels([0, 1, 0.5])
