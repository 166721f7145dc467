"""
Visible cards: deterministic filtering and sorting.

Turns the full catalog, the active filter criteria, the sort key and the
user's grades into the ordered list of cards the user browses.

INVARIANTS:
- Filtering is monotonic (only removes cards, never adds)
- Same catalog + criteria + grades + sort key → same list, same order
- Sorting is stable: ties keep catalog order
- Ungraded cards always sort after graded cards under SortKey.GRADE
"""

import logging
import unicodedata
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from cardranker.models.card import Card
from cardranker.models.grade import grade_rank
from cardranker.models.grade_store import GradeStore
from cardranker.models.view import FilterCriteria, SortKey

logger = logging.getLogger(__name__)


@dataclass
class VisibleCardsMetrics:
    """Card counts after each filter stage of one computation."""

    total_cards: int = 0
    after_unranked_filter: int = 0
    after_color_filter: int = 0
    after_type_filter: int = 0
    after_mana_filter: int = 0
    final_count: int = 0


def _filter_unranked(
    cards: list[Card],
    criteria: FilterCriteria,
    grade_store: GradeStore,
) -> list[Card]:
    """Drop graded cards when only unranked cards are requested."""
    if not criteria.show_unranked_only:
        return cards
    return [card for card in cards if not grade_store.is_graded(card.id)]


def _filter_by_color(cards: list[Card], criteria: FilterCriteria) -> list[Card]:
    """
    Filter by color identity.

    A single-color selector matches mono-colored cards only; multicolor
    cards are reached through the Multi selector.
    """
    selector = criteria.color_selector
    return [card for card in cards if selector.matches(card.color_identity)]


def _filter_by_type(cards: list[Card], criteria: FilterCriteria) -> list[Card]:
    """Keep cards whose type line contains the substring (case-sensitive)."""
    if not criteria.type_substring:
        return cards
    return [card for card in cards if criteria.type_substring in card.type_line]


def _filter_by_mana_value(cards: list[Card], criteria: FilterCriteria) -> list[Card]:
    """Keep cards at or under the mana value ceiling."""
    if criteria.max_mana_value is None:
        return cards
    return [card for card in cards if card.cmc <= criteria.max_mana_value]


def name_sort_key(name: str) -> str:
    """
    Collation key for card names.

    Ignores case and accents so "Æther" and "aether", or "Lórien" and
    "Lorien", sort together.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def _sort_key_function(sort_key: SortKey, grade_store: GradeStore) -> Callable[[Card], object]:
    if sort_key == SortKey.RARITY:
        return lambda card: card.rarity_rank
    if sort_key == SortKey.GRADE:
        return lambda card: grade_rank(grade_store.grade_of(card.id))
    return lambda card: name_sort_key(card.name)


def sort_cards(cards: Sequence[Card], sort_key: SortKey, grade_store: GradeStore) -> list[Card]:
    """
    Sort cards by the given key.

    Python's sort is stable, so cards with equal keys keep their input order.
    """
    return sorted(cards, key=_sort_key_function(sort_key, grade_store))


def compute_visible_cards(
    catalog: Sequence[Card],
    criteria: FilterCriteria,
    grade_store: GradeStore,
    sort_key: SortKey = SortKey.NAME,
) -> list[Card]:
    """
    Compute the ordered list of cards to display.

    Applies filters in order:
    1. Unranked only
    2. Color identity
    3. Type line substring
    4. Maximum mana value

    then sorts by `sort_key`.

    Args:
        catalog: Every card in the set, in catalog order
        criteria: Active filters
        grade_store: The user's grades
        sort_key: Ordering of the result

    Returns:
        New list of the matching cards. Inputs are never modified.
    """
    metrics = VisibleCardsMetrics()

    cards = list(catalog)
    metrics.total_cards = len(cards)

    cards = _filter_unranked(cards, criteria, grade_store)
    metrics.after_unranked_filter = len(cards)

    cards = _filter_by_color(cards, criteria)
    metrics.after_color_filter = len(cards)

    cards = _filter_by_type(cards, criteria)
    metrics.after_type_filter = len(cards)

    cards = _filter_by_mana_value(cards, criteria)
    metrics.after_mana_filter = len(cards)

    cards = sort_cards(cards, sort_key, grade_store)
    metrics.final_count = len(cards)

    logger.debug(
        "visible_cards_computed",
        extra={
            "total": metrics.total_cards,
            "after_unranked": metrics.after_unranked_filter,
            "after_color": metrics.after_color_filter,
            "after_type": metrics.after_type_filter,
            "after_mana": metrics.after_mana_filter,
            "final": metrics.final_count,
            "sort_key": sort_key.value,
        },
    )

    return cards
