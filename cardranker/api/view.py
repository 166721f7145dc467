"""
View API endpoints.

Filter, sort, display mode and cursor changes. Every change goes through
the ranking session's transitions; filter and sort changes rewind the
cursor to the first card.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from cardranker.api.state import get_ranking_session
from cardranker.models.failure import InvalidFilterError
from cardranker.models.view import DisplayMode, FilterCriteria, FilterField, SortKey, ViewState
from cardranker.services.ranking import Direction, RankingSession

router = APIRouter(prefix="/view", tags=["view"])


class FiltersModel(BaseModel):
    """Active filters."""

    color_selector: str = Field(
        default="",
        description="'' (all), W, U, B, R, G, Multi or Colorless",
    )
    type_substring: str = ""
    max_mana_value: int | None = None
    show_unranked_only: bool = False

    @classmethod
    def from_criteria(cls, criteria: FilterCriteria) -> "FiltersModel":
        return cls(
            color_selector=str(criteria.color_selector),
            type_substring=criteria.type_substring,
            max_mana_value=criteria.max_mana_value,
            show_unranked_only=criteria.show_unranked_only,
        )


class ViewResponse(BaseModel):
    """Current view state."""

    filters: FiltersModel
    sort_key: SortKey
    cursor: int
    mode: DisplayMode

    @classmethod
    def from_state(cls, state: ViewState) -> "ViewResponse":
        return cls(
            filters=FiltersModel.from_criteria(state.criteria),
            sort_key=state.sort_key,
            cursor=state.cursor,
            mode=state.mode,
        )


class FilterUpdateRequest(BaseModel):
    """Set one filter field."""

    field: FilterField
    value: bool | int | str | None = Field(
        default=None,
        description="New value; blank or null clears the filter",
        examples=["W", "Creature", 3, True],
    )


class SortUpdateRequest(BaseModel):
    sort_key: SortKey


class ModeUpdateRequest(BaseModel):
    mode: DisplayMode


class NavigateRequest(BaseModel):
    direction: Literal["next", "previous"]


@router.get("", response_model=ViewResponse)
async def get_view(
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> ViewResponse:
    return ViewResponse.from_state(session.view)


@router.put("/filters", response_model=ViewResponse)
async def update_filter(
    request: FilterUpdateRequest,
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> ViewResponse:
    """
    Set one filter.

    Setting anything other than show_unranked_only also turns
    show_unranked_only off.
    """
    try:
        state = session.set_filter(request.field, request.value)
    except ValueError as e:
        raise InvalidFilterError(str(e)) from e
    return ViewResponse.from_state(state)


@router.post("/unranked/toggle", response_model=ViewResponse)
async def toggle_unranked(
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> ViewResponse:
    """Flip "unranked only". Other filters stay as they are."""
    return ViewResponse.from_state(session.toggle_unranked_only())


@router.put("/sort", response_model=ViewResponse)
async def update_sort(
    request: SortUpdateRequest,
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> ViewResponse:
    return ViewResponse.from_state(session.set_sort(request.sort_key))


@router.put("/mode", response_model=ViewResponse)
async def update_mode(
    request: ModeUpdateRequest,
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> ViewResponse:
    return ViewResponse.from_state(session.set_display_mode(request.mode))


@router.post("/navigate", response_model=ViewResponse)
async def navigate(
    request: NavigateRequest,
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> ViewResponse:
    """Move to the next or previous card, wrapping around."""
    direction = Direction.NEXT if request.direction == "next" else Direction.PREVIOUS
    return ViewResponse.from_state(session.navigate(direction))


@router.post("/jump/{card_id}", response_model=ViewResponse)
async def jump_to_card(
    card_id: str,
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> ViewResponse:
    """
    Open a card in single-card mode.

    Unchanged view if the card is not in the current visible list.
    """
    return ViewResponse.from_state(session.jump_to(card_id))
