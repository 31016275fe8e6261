"""
Tests for straight/box hit classification
=========================================
"""

import pytest

from numbers4.exceptions import MalformedDrawError
from numbers4.hit_classifier import (
    HitCount,
    HitOutcome,
    calculate_prize,
    check_box,
    check_straight,
    classify,
    count_hits,
    win_type,
)


class TestClassify:
    def test_straight_is_also_box(self):
        outcome = classify(["1234"], "1234")[0]
        assert outcome.is_straight is True
        assert outcome.is_box is True

    def test_box_only(self):
        outcome = classify(["4321"], "1234")[0]
        assert outcome.is_straight is False
        assert outcome.is_box is True

    def test_miss(self):
        outcome = classify(["1235"], "1234")[0]
        assert outcome.is_straight is False
        assert outcome.is_box is False

    def test_repeated_digits_need_same_multiplicity(self):
        assert classify(["1123"], "1223")[0].is_box is False
        assert classify(["3211"], "1123")[0].is_box is True

    def test_preserves_order_and_length(self):
        predictions = ["0001", "1000", "9999"]
        outcomes = classify(predictions, "0100")
        assert [o.prediction for o in outcomes] == predictions
        assert [o.is_box for o in outcomes] == [True, True, False]

    def test_malformed_winning_number(self):
        with pytest.raises(MalformedDrawError):
            classify(["1234"], "123")

    def test_malformed_prediction(self):
        with pytest.raises(MalformedDrawError):
            classify(["12a4"], "1234")

    def test_trailing_newline_is_malformed(self):
        with pytest.raises(MalformedDrawError):
            classify(["1234"], "1234\n")
        with pytest.raises(MalformedDrawError):
            classify(["1234\n"], "1234")

    def test_helpers(self):
        assert check_straight("0102", "0102")
        assert not check_straight("0102", "102 ")
        assert check_box("2010", "0102")


class TestCountHits:
    def test_mixed_results(self):
        results = classify(["1234", "4321", "2143", "5678"], "1234")
        counts = count_hits(results)
        assert counts == HitCount(straight=1, box=3, box_only=2)
        assert counts.to_dict() == {'straight': 1, 'box': 3, 'boxOnly': 2}

    def test_empty(self):
        assert count_hits([]) == HitCount(0, 0, 0)

    def test_prize(self):
        counts = count_hits([
            HitOutcome("1234", True, True),
            HitOutcome("4321", False, True),
        ])
        assert calculate_prize(counts) == 900000 + 37500


class TestWinType:
    @pytest.mark.parametrize("prediction, expected", [
        ("1234", "straight"),
        ("3412", "box"),
        ("1111", None),
    ])
    def test_win_type(self, prediction, expected):
        assert win_type(prediction, "1234") == expected
