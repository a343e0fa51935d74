"""
Tests for label wrapping.
"""

import pytest

from mindnode.diagram_components.wrap import get_wrapper, wrap_balanced, wrap_words


class TestWrapBalanced:
    def test_within_budget_is_one_line(self):
        assert wrap_balanced("長期追蹤與定期檢驗", 10) == ["長期追蹤與定期檢驗"]
        assert wrap_balanced("腎臟病", 3) == ["腎臟病"]

    def test_long_label_splits_evenly(self):
        assert wrap_balanced("長期追蹤與定期檢驗", 5) == ["長期追蹤與", "定期檢驗"]

    def test_one_over_budget_halves(self):
        assert wrap_balanced("abcdefghij", 9) == ["abcde", "fghij"]

    def test_no_stub_lines(self):
        assert wrap_balanced("abcdefghijklm", 4) == ["abcd", "efg", "hij", "klm"]

    @pytest.mark.parametrize("length", range(1, 40))
    @pytest.mark.parametrize("budget", [1, 2, 3, 5, 10])
    def test_line_properties(self, length, budget):
        label = "x" * length
        lines = wrap_balanced(label, budget)
        sizes = [len(line) for line in lines]
        assert "".join(lines) == label
        assert len(lines) == -(-length // budget)
        assert max(sizes) <= budget
        assert max(sizes) - min(sizes) <= 1

    def test_empty_label(self):
        assert wrap_balanced("", 10) == [""]

    def test_invalid_budget(self):
        with pytest.raises(ValueError):
            wrap_balanced("abc", 0)


class TestWrapWords:
    def test_keeps_words_together(self):
        assert wrap_words("Regular follow-up and lab tests", 14) == [
            "Regular",
            "follow-up and",
            "lab tests",
        ]

    def test_long_word_is_broken(self):
        assert wrap_words("a nephrologist visit", 6) == ["a", "nephro", "logist", "visit"]

    def test_blank_label(self):
        assert wrap_words("   ", 5) == [""]


class TestGetWrapper:
    def test_modes(self):
        assert get_wrapper("balanced") is wrap_balanced
        assert get_wrapper("words") is wrap_words

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            get_wrapper("hyphenate")
