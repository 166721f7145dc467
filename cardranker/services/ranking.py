"""
Ranking state machine and session.

Transitions are pure: each takes the current ViewState and returns the
next one. Filter and sort changes also return a `reset_cursor` signal
instead of resetting anything themselves; RankingSession is the only
place that applies it.

Filter policy: changing any filter other than "unranked only" switches
"unranked only" off. Toggling "unranked only" leaves the other filters
as they are.
"""

import dataclasses
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from cardranker.filtering.grouping import TierGroup, group_by_tier
from cardranker.filtering.visible_cards import compute_visible_cards
from cardranker.models.card import Card
from cardranker.models.failure import CardNotFoundError, ConfirmationRequiredError
from cardranker.models.grade import validate_grade
from cardranker.models.grade_store import GradeStore
from cardranker.models.view import (
    ColorSelector,
    DisplayMode,
    FilterField,
    SortKey,
    ViewState,
)
from cardranker.services.catalog import Catalog
from cardranker.services.grade_entry import GradeEntry
from cardranker.services.grade_store import GradeStoreRepository
from cardranker.services.transfer import export_with_confirmation, import_store

logger = logging.getLogger(__name__)


class Direction(IntEnum):
    """Cursor movement in single-card mode."""

    PREVIOUS = -1
    NEXT = 1


@dataclass(frozen=True, slots=True)
class Transition:
    """Result of a criteria change: the next state and whether to rewind the cursor."""

    state: ViewState
    reset_cursor: bool = False


def parse_max_mana_value(value: Any) -> int | None:
    """
    Read a mana value ceiling.

    Blank or non-numeric input disables the filter. Fractions are
    truncated ("3.7" → 3).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)

    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return None


def _coerce_filter_value(field: FilterField, value: Any) -> Any:
    if field == FilterField.COLOR_SELECTOR:
        if isinstance(value, ColorSelector):
            return value
        return ColorSelector.parse(value)
    if field == FilterField.TYPE_SUBSTRING:
        return "" if value is None else str(value)
    if field == FilterField.MAX_MANA_VALUE:
        return parse_max_mana_value(value)
    return bool(value)


def set_filter(state: ViewState, field: FilterField, value: Any) -> Transition:
    """
    Set one filter field.

    Any field other than show_unranked_only also clears show_unranked_only.

    Raises:
        ValueError: If a color selector string is not recognized
    """
    changes: dict[str, Any] = {field.value: _coerce_filter_value(field, value)}
    if field != FilterField.SHOW_UNRANKED_ONLY:
        changes[FilterField.SHOW_UNRANKED_ONLY.value] = False

    criteria = dataclasses.replace(state.criteria, **changes)
    return Transition(dataclasses.replace(state, criteria=criteria), reset_cursor=True)


def toggle_unranked_only(state: ViewState) -> Transition:
    return set_filter(
        state, FilterField.SHOW_UNRANKED_ONLY, not state.criteria.show_unranked_only
    )


def set_sort(state: ViewState, sort_key: SortKey) -> Transition:
    return Transition(dataclasses.replace(state, sort_key=SortKey(sort_key)), reset_cursor=True)


def set_display_mode(state: ViewState, mode: DisplayMode) -> ViewState:
    return dataclasses.replace(state, mode=DisplayMode(mode))


def navigate(state: ViewState, direction: Direction, visible_count: int) -> ViewState:
    """Move the cursor one step, wrapping at both ends. No-op on an empty list."""
    if visible_count <= 0:
        return state
    return dataclasses.replace(state, cursor=(state.cursor + direction) % visible_count)


def jump_to(state: ViewState, card_id: str, visible_cards: Sequence[Card]) -> ViewState:
    """
    Show a card in single-card mode.

    No-op (mode included) if the card is not in the visible list.
    """
    for index, card in enumerate(visible_cards):
        if card.id == card_id:
            return dataclasses.replace(state, cursor=index, mode=DisplayMode.SINGLE_CARD)
    return state


def assign_grade(grade_store: GradeStore, card_id: str, grade: str) -> None:
    """
    Upsert a card's grade.

    Raises:
        InvalidGradeError: If the grade is not one of the valid values
    """
    grade_store.assign(card_id, validate_grade(grade))


def normalize_cursor(state: ViewState, visible_count: int) -> ViewState:
    """Pull a cursor that fell past the end of a shrunken list back to 0."""
    if state.cursor < visible_count or state.cursor == 0:
        return state
    return dataclasses.replace(state, cursor=0)


class RankingSession:
    """
    One user's grading session over one set.

    Owns the catalog, the grade store and the view state. Grade changes
    are written back through the repository; a failed write is logged by
    the repository and does not undo the change.
    """

    def __init__(
        self,
        catalog: Catalog,
        grade_store: GradeStore,
        repository: GradeStoreRepository,
        view: ViewState | None = None,
    ) -> None:
        self.catalog = catalog
        self.grade_store = grade_store
        self.repository = repository
        self.view = view or ViewState()
        self.grade_entry = GradeEntry()

    @classmethod
    async def open(cls, catalog: Catalog, repository: GradeStoreRepository) -> "RankingSession":
        """Start a session with the persisted grades."""
        grade_store = await repository.load()
        return cls(catalog, grade_store, repository)

    # --- Derived views ---

    def visible_cards(self) -> list[Card]:
        return compute_visible_cards(
            self.catalog.cards,
            self.view.criteria,
            self.grade_store,
            self.view.sort_key,
        )

    def current_card(self) -> Card | None:
        """Card under the cursor, or None when nothing is visible."""
        visible = self.visible_cards()
        if not visible:
            return None
        return visible[self.view.cursor % len(visible)]

    def gallery(self) -> list[TierGroup]:
        return group_by_tier(self.visible_cards(), self.grade_store)

    @property
    def unranked_count(self) -> int:
        return self.grade_store.unranked_count(self.catalog)

    # --- Criteria transitions ---

    def _apply(self, transition: Transition) -> ViewState:
        state = transition.state
        if transition.reset_cursor:
            state = dataclasses.replace(state, cursor=0)
        self.view = state
        return state

    def set_filter(self, field: FilterField, value: Any) -> ViewState:
        return self._apply(set_filter(self.view, field, value))

    def toggle_unranked_only(self) -> ViewState:
        return self._apply(toggle_unranked_only(self.view))

    def set_sort(self, sort_key: SortKey) -> ViewState:
        return self._apply(set_sort(self.view, sort_key))

    def set_display_mode(self, mode: DisplayMode) -> ViewState:
        self.view = set_display_mode(self.view, mode)
        return self.view

    def navigate(self, direction: Direction) -> ViewState:
        self.view = navigate(self.view, direction, len(self.visible_cards()))
        return self.view

    def jump_to(self, card_id: str) -> ViewState:
        self.view = jump_to(self.view, card_id, self.visible_cards())
        return self.view

    # --- Grades ---

    async def grade_card(self, card_id: str, grade: str) -> str:
        """
        Grade a card and persist the store.

        Criteria, sort key and cursor are left alone, except that a
        cursor past the end of a now shorter list is pulled back to 0.

        Raises:
            CardNotFoundError: If the card is not in the catalog
            InvalidGradeError: If the grade is not valid
        """
        if card_id not in self.catalog:
            raise CardNotFoundError(card_id)

        assign_grade(self.grade_store, card_id, grade)
        self.view = normalize_cursor(self.view, len(self.visible_cards()))
        await self.repository.save(self.grade_store)
        return grade

    async def grade_current(self, grade: str) -> Card | None:
        """
        Grade the card under the cursor and move on to the next one.

        When the graded card drops out of the visible list (unranked-only
        view), the next card has already slid under the cursor, so the
        cursor does not advance.

        Returns:
            The card that was graded, or None if nothing is visible.
        """
        card = self.current_card()
        if card is None:
            return None

        await self.grade_card(card.id, grade)

        visible = self.visible_cards()
        if any(visible_card.id == card.id for visible_card in visible):
            self.view = navigate(self.view, Direction.NEXT, len(visible))
        return card

    async def press_grade_key(self, key: str) -> tuple[str | None, Card | None]:
        """
        Feed a key to the staged letter/modifier entry.

        A key that commits a grade grades the card under the cursor, the
        same way grade_current does. The selection stays staged either way.

        Returns:
            The committed grade (None if the key committed nothing) and the
            card it was applied to (None if nothing was graded).
        """
        grade = self.grade_entry.press_key(key)
        if grade is None:
            return None, None
        return grade, await self.grade_current(grade)

    # --- Transfer ---

    def export_rankings(self, confirmed: bool = False) -> str:
        """
        Produce the transfer string.

        Raises:
            ConfirmationRequiredError: If cards are ungraded and the export
                was not confirmed
        """
        result = export_with_confirmation(
            self.catalog.cards, self.grade_store, lambda _count: confirmed
        )
        if result is None:
            raise ConfirmationRequiredError(self.unranked_count)
        return result

    async def import_rankings(self, text: str) -> GradeStore:
        """
        Replace every grade with those in a transfer string.

        Raises:
            DecodeError: If the string is invalid; current grades are kept
        """
        imported = import_store(text)
        self.grade_store = imported
        self.view = normalize_cursor(self.view, len(self.visible_cards()))
        await self.repository.save(self.grade_store)

        logger.info("rankings_imported", extra={"graded": len(imported)})
        return imported
