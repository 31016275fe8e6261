"""
Tests for the pattern conformity model
======================================
"""

import numpy as np
import pytest

from numbers4.exceptions import InsufficientDataError
from numbers4.models.pattern import PatternModel
from helpers import make_window


@pytest.fixture
def model():
    return PatternModel()


class TestAnalyze:
    def test_averages(self, model):
        stats = model.analyze(make_window(["1234", "1122"]))
        assert stats.avg_sum == 8
        assert stats.avg_unique == 3
        assert stats.avg_odd == 2
        assert stats.avg_consecutive == 2
        assert stats.sample_size == 2
        assert stats.target_unique == 3

    def test_target_unique_rounds_half_up(self, model):
        assert model.analyze(make_window(["1234", "1123"])).target_unique == 4

    def test_empty_window(self, model):
        with pytest.raises(InsufficientDataError):
            model.analyze([])


class TestPredictByPattern:
    def test_single_digit_history(self, model, rng):
        prediction = model.predict_by_pattern(make_window(["1111"] * 50), rng)
        assert prediction in {"0000", "1111", "2222"}

    def test_always_four_digits(self, model, constant_window):
        for seed in range(20):
            prediction = model.predict_by_pattern(constant_window, np.random.default_rng(seed))
            assert len(prediction) == 4
            assert prediction.isdigit()

    def test_exhausted_attempts_still_returns_ticket(self, rng):
        # a tolerance of zero can never be met, so the random fallback is used
        model = PatternModel(max_attempts=5, sum_tolerance=0)
        prediction = model.predict_by_pattern(make_window(["1234"]), rng)
        assert len(prediction) == 4
        assert prediction.isdigit()

    def test_same_seed_same_ticket(self, model, mixed_draws):
        window = make_window([d.winning_number for d in mixed_draws])
        first = model.predict_by_pattern(window, np.random.default_rng(42))
        second = model.predict_by_pattern(window, np.random.default_rng(42))
        assert first == second
