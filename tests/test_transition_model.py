"""
Tests for the digit transition model
====================================
"""

import pytest

from numbers4.exceptions import InsufficientDataError
from numbers4.models.transition import TransitionModel
from helpers import make_window


@pytest.fixture
def model():
    return TransitionModel()


class TestTransitionTable:
    def test_pairs_read_oldest_to_newest(self, model):
        # chronological: 0000 -> 1000 -> 2000
        table = model.transition_table(make_window(["2000", "1000", "0000"]))
        assert table.shape == (4, 10, 10)
        assert table[0, 0, 1] == 1
        assert table[0, 1, 2] == 1
        assert table[0, 1, 0] == 0
        assert table[1, 0, 0] == 2

    def test_single_draw_has_no_pairs(self, model):
        assert model.transition_table(make_window(["1234"])).sum() == 0


class TestPredictNext:
    def test_follows_most_common_transition(self, model):
        window = make_window(["2000", "1000", "0000"])
        assert model.predict_next(window, "1000") == "2000"

    def test_accepts_draw_object(self, model):
        window = make_window(["2000", "1000", "0000"])
        assert model.predict_next(window, window[1]) == "2000"

    def test_ties_and_cold_start(self, model):
        # position 0: 1 -> 1 and 1 -> 3 tie, lowest wins; 9 never seen elsewhere
        window = make_window(["3456", "1456", "1456"])
        assert model.predict_next(window, "1999") == "1456"

    def test_unseen_source_falls_back_to_frequency(self, model):
        window = make_window(["5555"] * 20)
        assert model.predict_next(window, "7777") == "5555"

    def test_missing_last_draw(self, model, constant_window):
        with pytest.raises(InsufficientDataError):
            model.predict_next(constant_window, None)

    def test_empty_window(self, model):
        with pytest.raises(InsufficientDataError):
            model.predict_next(make_window([]), "1234")
