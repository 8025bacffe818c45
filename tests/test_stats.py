"""Tests for the statistics primitives."""

import numpy as np
import pytest

from bitbelay.stats import (
    chi_squared_uniform,
    goodness_of_fit,
    pearson,
    pearson_matrix,
    rank,
    spearman,
)


class TestChiSquared:
    def test_known_statistic(self):
        assert chi_squared_uniform([50, 60, 40, 47, 53]) == pytest.approx(4.36, abs=1e-3)

    def test_known_p_value(self):
        assert goodness_of_fit([50, 60, 40, 47, 53]) == pytest.approx(0.359, abs=1e-3)

    def test_perfect_fit(self):
        assert chi_squared_uniform([5, 5, 5, 5, 5]) == 0.0
        assert goodness_of_fit([5, 5, 5, 5, 5]) == 1.0

    def test_all_in_one_bucket(self):
        assert chi_squared_uniform([1000, 0, 0, 0]) == pytest.approx(3000.0)
        assert goodness_of_fit([1000, 0, 0, 0]) == pytest.approx(0.0, abs=1e-12)

    @pytest.mark.parametrize("observations", [[], [1, 2, 3], [4, 4, 4, 4]])
    def test_sparse_is_undefined(self, observations):
        assert chi_squared_uniform(observations) is None
        assert goodness_of_fit(observations) is None

    def test_single_bucket_has_no_p_value(self):
        assert chi_squared_uniform([100]) == 0.0
        assert goodness_of_fit([100]) is None


class TestPearson:
    def test_perfect_positive(self):
        assert pearson([1, 2, 3, 4], [5, 6, 7, 8]) == 1.0

    def test_perfect_negative(self):
        assert pearson([1, 2, 3, 4], [8, 7, 6, 5]) == -1.0

    @pytest.mark.parametrize("a, b", [([], []), ([1, 2, 3], [1, 2])])
    def test_empty_or_mismatched(self, a, b):
        assert pearson(a, b) is None

    def test_zero_variance(self):
        assert pearson([0, 0, 0, 0], [0, 0, 0, 0]) is None
        assert pearson([0, 0, 0, 0], [1, 2, 3, 4]) is None

    @pytest.mark.parametrize(
        "a, b", [([0.1] * 5, [0, 1, 2, 3, 4]), ([0.3] * 4, [0, 1, 2, 3]), ([1, 2, 3], [0.7] * 3)]
    )
    def test_non_integer_constant_is_undefined(self, a, b):
        assert pearson(a, b) is None

    def test_large_offset_keeps_precision(self):
        x = np.arange(10.0) + 1e9
        assert pearson(x, x[::-1]) == pytest.approx(-1.0)

    def test_matches_numpy(self):
        rng = np.random.default_rng(3)
        a, b = rng.random(200), rng.random(200)
        assert pearson(a, b) == pytest.approx(np.corrcoef(a, b)[0, 1])


class TestPearsonMatrix:
    def test_diagonal_is_exactly_one(self):
        rng = np.random.default_rng(11)
        bits = rng.integers(0, 2, size=(64, 5000)).astype(float)
        matrix = pearson_matrix(bits)
        assert matrix.shape == (64, 64)
        assert np.all(np.diag(matrix) == 1.0)

    def test_symmetric_and_matches_pairwise(self):
        rng = np.random.default_rng(12)
        bits = rng.integers(0, 2, size=(4, 300)).astype(float)
        matrix = pearson_matrix(bits)
        assert np.allclose(matrix, matrix.T)
        assert matrix[1, 2] == pytest.approx(pearson(bits[1], bits[2]))

    def test_constant_row_is_undefined(self):
        bits = np.array([[0, 0, 0, 0], [0, 1, 0, 1], [1, 1, 0, 0]], dtype=float)
        matrix = pearson_matrix(bits)
        assert np.all(np.isnan(matrix[0]))
        assert np.all(np.isnan(matrix[:, 0]))
        assert matrix[1, 1] == 1.0
        assert matrix[1, 2] == pytest.approx(0.0)

    def test_non_integer_constant_row_is_undefined(self):
        rows = np.array([[0.1] * 5, [0, 1, 0, 1, 1], [0.3, 0.3, 0.3, 0.3, 0.3]])
        matrix = pearson_matrix(rows)
        assert np.all(np.isnan(matrix[0]))
        assert np.all(np.isnan(matrix[2]))
        assert matrix[1, 1] == 1.0

    def test_rejects_1d(self):
        with pytest.raises(ValueError):
            pearson_matrix(np.zeros(4))


class TestRank:
    def test_already_ranked(self):
        assert rank([1, 3, 5, 2, 4, 6]).tolist() == [1, 3, 5, 2, 4, 6]

    def test_reorders(self):
        assert rank([20, 10, 40, 30]).tolist() == [2, 1, 4, 3]

    def test_ties_share_a_rank(self):
        assert rank([5.0, 5.0, 1.0, 9.0]).tolist() == [2, 2, 1, 3]


class TestSpearman:
    def test_monotonic(self):
        assert spearman([2, 1, 4, 3], [20, 10, 40, 30]) == 1.0

    def test_anti_monotonic(self):
        assert spearman([1, 2, 3, 4], [40, 30, 20, 10]) == -1.0

    def test_mismatched_lengths(self):
        assert spearman([1, 2, 3], [1, 2]) is None

    def test_too_short(self):
        assert spearman([], []) is None
        assert spearman([1], [1]) is None
