"""Tests for staged letter/modifier grade entry."""

import pytest

from cardranker.services.grade_entry import GradeEntry


class TestSelectLetter:
    def test_letter_alone(self) -> None:
        entry = GradeEntry()

        assert entry.select_letter("B") == "B"
        assert entry.letter == "B"

    def test_letter_uses_staged_modifier(self) -> None:
        entry = GradeEntry(modifier="-")

        assert entry.select_letter("c") == "C-"

    def test_f_ignores_modifier(self) -> None:
        entry = GradeEntry(modifier="+")

        assert entry.select_letter("F") == "F"
        # Modifier stays staged for the next letter
        assert entry.select_letter("A") == "A+"


class TestSelectModifier:
    def test_without_letter_commits_nothing(self) -> None:
        entry = GradeEntry()

        assert entry.select_modifier("+") is None
        assert entry.modifier == "+"

    def test_with_letter_commits(self) -> None:
        entry = GradeEntry(letter="D")

        assert entry.select_modifier("-") == "D-"

    def test_unknown_modifier(self) -> None:
        with pytest.raises(ValueError, match="Unknown modifier"):
            GradeEntry().select_modifier("*")


class TestPressKey:
    @pytest.mark.parametrize(
        ("keys", "expected"),
        [
            (["a"], "A"),
            (["+", "b"], "B+"),
            (["=", "c"], "C+"),
            (["d", "-"], "D-"),
            (["-", "f"], "F"),
        ],
    )
    def test_sequences(self, keys: list[str], expected: str) -> None:
        entry = GradeEntry()

        results = [entry.press_key(key) for key in keys]

        assert results[-1] == expected

    def test_other_keys_ignored(self) -> None:
        entry = GradeEntry(letter="A", modifier="+")

        assert entry.press_key("x") is None
        assert entry.press_key("ArrowRight") is None
        assert entry == GradeEntry(letter="A", modifier="+")
