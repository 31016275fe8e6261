"""
Tests for the permutation engine
================================
"""

import pytest
from collections import Counter

from numbers4.permutations import box_key, permutation_count, permutation_list, permute


class TestPermute:
    """Distinct orderings of a digit multiset"""

    @pytest.mark.parametrize("number, expected", [
        ("1234", 24),   # all distinct
        ("1123", 12),   # one pair
        ("1122", 6),    # two pairs
        ("1112", 4),    # triple
        ("7777", 1),    # quadruple
    ])
    def test_count_matches_multiset_formula(self, number, expected):
        result = permute(number)
        assert len(result) == expected
        assert permutation_count(number) == expected

    def test_every_result_is_a_permutation(self):
        for ordering in permute("0090"):
            assert len(ordering) == 4
            assert Counter(ordering) == Counter("0090")

    def test_accepts_digit_sequence(self):
        assert permute(["1", "1", "2", "3"]) == permute("1123")

    def test_leading_zeros_preserved(self):
        assert "0012" in permute("1200")
        assert "0021" in permute("1200")

    def test_list_is_lexicographic(self):
        assert permutation_list("321") == ["123", "132", "213", "231", "312", "321"]
        assert permutation_list("1123")[:3] == ["1123", "1132", "1213"]


class TestBoxKey:
    def test_permutations_share_key(self):
        assert box_key("4321") == box_key("1234") == "1234"

    def test_different_multisets_differ(self):
        assert box_key("1123") != box_key("1223")
