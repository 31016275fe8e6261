"""
Tests for the Predictor facade
==============================
"""

from datetime import date, timedelta

import numpy as np
import pytest

from numbers4.config import EngineConfig
from numbers4.draw_history import DrawHistory
from numbers4.exceptions import InsufficientDataError, UnknownAlgorithmError
from numbers4.predictor import Predictor
from numbers4.seeded import HYBRID_SEED_OFFSET, seeded_predictions
from helpers import START_DATE, make_draws, make_window


@pytest.fixture
def predictor():
    return Predictor(EngineConfig(window_size=10))


@pytest.fixture
def history():
    return DrawHistory(make_draws(["1234"] * 20))


class TestGeneratePredictions:
    def test_ensemble_output(self, predictor, constant_window, rng):
        predictions = predictor.generate_predictions(constant_window, constant_window.latest, rng)
        assert predictions[0] == "1234"
        assert len(predictions) == 12

    def test_empty_window(self, predictor, rng):
        with pytest.raises(InsufficientDataError):
            predictor.generate_predictions(make_window([]), None, rng)

    def test_predict_next_needs_full_window(self, predictor):
        with pytest.raises(InsufficientDataError):
            predictor.predict_next(DrawHistory(make_draws(["1234"] * 5)))

    def test_predict_next(self, predictor, history, rng):
        assert predictor.predict_next(history, rng)[0] == "1234"


class TestDailyPredictions:
    def test_bundle(self, predictor, history):
        bundle = predictor.daily_predictions(history, np.random.default_rng(0))
        # last draw is Saturday 2024-01-20, next draw day is Monday
        assert bundle['drawNumber'] == 21
        assert bundle['drawDate'] == "2024-01-22"
        assert bundle['transition'] == ["1234"]
        assert bundle['correlation'] == ["1234"]
        assert bundle['kako'][0] == "1234"
        assert len(bundle['kako']) == 10
        assert len(bundle['hybrid']) == 12
        assert len(bundle['pattern']) == 1
        assert bundle['aiRandom'] == seeded_predictions(21)
        assert bundle['publishedHybrid'] == seeded_predictions(21 + HYBRID_SEED_OFFSET)


class TestRunBacktest:
    def test_date_bounded(self, predictor):
        history = DrawHistory(make_draws(["1234"] * 25))
        start = START_DATE + timedelta(days=10)
        end = START_DATE + timedelta(days=14)
        results = predictor.run_backtest(history, start, end, ["kako", "transition"])
        assert [r.algorithm for r in results] == ["kako", "transition"]
        assert all(r.scored_draws == 5 for r in results)
        assert results[0].straight_wins == 5

    def test_lookback_comes_from_before_start(self, predictor):
        history = DrawHistory(make_draws(["1234"] * 25))
        start = START_DATE + timedelta(days=5)
        results = predictor.run_backtest(history, start, START_DATE + timedelta(days=24), ["kako"])
        # the first five draws in range lack a full window
        assert results[0].scored_draws == 15

    def test_no_draws_in_range(self, predictor, history):
        assert predictor.run_backtest(history, date(2030, 1, 1), date(2030, 2, 1), ["kako"]) == []

    def test_start_after_end(self, predictor, history):
        with pytest.raises(ValueError):
            predictor.run_backtest(history, date(2024, 2, 1), date(2024, 1, 1), ["kako"])

    def test_unknown_algorithm(self, predictor, history):
        with pytest.raises(UnknownAlgorithmError):
            predictor.run_backtest(history, START_DATE, date(2024, 2, 1), ["kako", "tarot"])

    def test_seeded_backtest_repeats(self, predictor, mixed_draws):
        history = DrawHistory(mixed_draws)
        end = START_DATE + timedelta(days=149)
        first = predictor.run_backtest(history, START_DATE, end, ["hybrid"], seed=4)
        second = predictor.run_backtest(history, START_DATE, end, ["hybrid"], seed=4, workers=3)
        assert first[0].to_dict() == second[0].to_dict()


class TestConfiguredSchedule:
    def test_extra_holidays_shift_draw_date(self, history):
        predictor = Predictor(EngineConfig(window_size=10, extra_holidays=("2024-01-22",)))
        bundle = predictor.daily_predictions(history, np.random.default_rng(0))
        assert bundle['drawDate'] == "2024-01-23"
