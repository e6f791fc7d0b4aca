# tests/test_scaler.py

import math

import numpy as np
import pytest
from sklearn.preprocessing import StandardScaler as SkStandardScaler

from stock_predict.errors import StateError, ValidationError
from stock_predict.features import build_feature_matrix
from stock_predict.scaler import StandardScaler


def test_population_std():
    scaler = StandardScaler().fit([[1.0], [2.0], [3.0]])
    params = scaler.get_params()
    assert params.mean[0] == pytest.approx(2.0)
    assert params.std[0] == pytest.approx(math.sqrt(2.0 / 3.0))
    assert params.std[0] == pytest.approx(0.8164965809)
    assert params.std[0] != pytest.approx(1.0)


def test_matches_sklearn(aapl_rows):
    X = build_feature_matrix(**aapl_rows)
    ours = StandardScaler().fit_transform(X)
    ref = SkStandardScaler().fit(X)

    params = StandardScaler().fit(X).get_params()
    np.testing.assert_allclose(params.mean, ref.mean_)
    np.testing.assert_allclose(params.std[params.std > 0], ref.scale_[params.std > 0])
    np.testing.assert_allclose(ours, ref.transform(X), atol=1e-12)


def test_transformed_columns_are_standardized():
    X = [[1.0, 10.0, 5.0], [2.0, 20.0, 5.0], [3.0, 35.0, 5.0], [10.0, 0.0, 5.0]]
    Z = StandardScaler().fit_transform(X)
    np.testing.assert_allclose(Z[:, :2].mean(axis=0), 0.0, atol=1e-12)
    np.testing.assert_allclose(Z[:, :2].std(axis=0), 1.0, atol=1e-12)
    # constant column -> exactly 0.0
    assert Z[:, 2].tolist() == [0.0, 0.0, 0.0, 0.0]


def test_constant_column_on_transform_of_new_data():
    scaler = StandardScaler().fit([[1.0, 7.0], [3.0, 7.0]])
    assert scaler.transform([[2.0, 100.0]]).tolist() == [[0.0, 0.0]]


def test_inverse_transform_round_trip():
    X = np.array([[150.0, 1e8, 5, 2], [152.0, 9.5e7, 3, 4], [151.5, 9.8e7, 7, 1]])
    scaler = StandardScaler()
    Z = scaler.fit_transform(X)
    np.testing.assert_allclose(scaler.inverse_transform(Z), X, rtol=1e-10)


def test_transform_does_not_modify_input():
    X = np.array([[1.0, 2.0], [3.0, 4.0]])
    before = X.copy()
    StandardScaler().fit_transform(X)
    np.testing.assert_array_equal(X, before)


def test_transform_before_fit_raises():
    scaler = StandardScaler()
    assert not scaler.is_fitted()
    assert scaler.get_params() is None
    with pytest.raises(StateError, match="fit"):
        scaler.transform([[1.0]])
    with pytest.raises(StateError, match="fit"):
        scaler.inverse_transform([[1.0]])


def test_fit_empty_raises():
    with pytest.raises(ValidationError, match="empty"):
        StandardScaler().fit([])


def test_ragged_rows_raise():
    with pytest.raises(ValidationError, match="Inconsistent feature count"):
        StandardScaler().fit([[1.0, 2.0], [3.0]])


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), -float("inf")])
def test_non_finite_raises(bad):
    with pytest.raises(ValidationError, match="Non-finite"):
        StandardScaler().fit([[1.0, 2.0], [bad, 3.0]])

    scaler = StandardScaler().fit([[1.0, 2.0], [2.0, 3.0]])
    with pytest.raises(ValidationError, match="Non-finite"):
        scaler.transform([[bad, 1.0]])


def test_column_count_mismatch_raises():
    scaler = StandardScaler().fit([[1.0, 2.0], [2.0, 3.0]])
    with pytest.raises(ValidationError, match="Feature count mismatch"):
        scaler.transform([[1.0, 2.0, 3.0]])
    with pytest.raises(ValidationError, match="Feature count mismatch"):
        scaler.inverse_transform([[1.0]])


def test_transform_empty_matrix():
    scaler = StandardScaler().fit([[1.0, 2.0], [2.0, 3.0]])
    assert scaler.transform([]).shape == (0, 2)


def test_get_params_returns_copies():
    scaler = StandardScaler().fit([[1.0], [3.0]])
    params = scaler.get_params()
    params.mean[0] = 99.0
    assert scaler.get_params().mean[0] == pytest.approx(2.0)


def test_repeated_float_column_is_constant():
    # 0.1 is not exactly representable; the mean of 29 copies is not 0.1
    X = [[0.1, float(i)] for i in range(29)]
    scaler = StandardScaler().fit(X)
    assert scaler.get_params().std[0] == 0.0
    Z = scaler.transform(X)
    assert Z[:, 0].tolist() == [0.0] * 29
    assert Z[:, 1].std() == pytest.approx(1.0)
