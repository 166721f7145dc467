from collections.abc import Iterable
from dataclasses import dataclass, field

from cardranker.models.card import Card


@dataclass
class GradeStore:
    """
    The user's grade assignments for one set.

    Maps card id to grade. A card without an entry is unranked.
    Grades are stored as opaque strings.
    """

    grades: dict[str, str] = field(default_factory=dict)

    def grade_of(self, card_id: str) -> str | None:
        """Get the grade assigned to a card, or None if unranked."""
        return self.grades.get(card_id)

    def is_graded(self, card_id: str) -> bool:
        return card_id in self.grades

    def assign(self, card_id: str, grade: str) -> None:
        """Set or replace the grade of a single card."""
        self.grades[card_id] = grade

    def unranked_count(self, cards: Iterable[Card]) -> int:
        """Number of cards in `cards` without a grade."""
        return sum(1 for card in cards if card.id not in self.grades)

    def copy(self) -> "GradeStore":
        return GradeStore(grades=dict(self.grades))

    def __len__(self) -> int:
        return len(self.grades)
