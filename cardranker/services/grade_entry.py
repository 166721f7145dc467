"""
Staged grade entry.

The single-card view grades with two groups of controls: letters
(A B C D F) and modifiers (+ -). Both stay selected between cards.
Picking a letter commits it together with the selected modifier; picking
a modifier commits it together with the selected letter, if any. F never
takes a modifier.

Keyboard: letter keys pick letters, "+" (or "=", the unshifted key)
and "-" pick modifiers.
"""

from dataclasses import dataclass

from cardranker.models.grade import GRADE_LETTERS, GRADE_MODIFIERS, compose_grade

MODIFIER_KEYS: dict[str, str] = {"+": "+", "=": "+", "-": "-"}


@dataclass
class GradeEntry:
    """Currently selected letter and modifier."""

    letter: str | None = None
    modifier: str | None = None

    def select_letter(self, letter: str) -> str:
        """Select a letter and return the grade it commits."""
        letter = letter.upper()
        grade = compose_grade(letter, self.modifier)
        self.letter = letter
        return grade

    def select_modifier(self, modifier: str) -> str | None:
        """
        Select a modifier.

        Returns the committed grade, or None while no letter is selected.
        """
        if modifier not in GRADE_MODIFIERS:
            raise ValueError(f"Unknown modifier: {modifier!r}")
        self.modifier = modifier
        if self.letter is None:
            return None
        return compose_grade(self.letter, modifier)

    def press_key(self, key: str) -> str | None:
        """
        Handle a key press.

        Returns the committed grade, or None if the key commits nothing.
        """
        upper = key.upper()
        if upper in GRADE_LETTERS:
            return self.select_letter(upper)
        if key in MODIFIER_KEYS:
            return self.select_modifier(MODIFIER_KEYS[key])
        return None
