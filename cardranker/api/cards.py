"""
Card API endpoints.

Read-only views over the ranking session: the filtered and sorted list,
the card under the cursor, and the tiered gallery.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from cardranker.api.state import get_ranking_session
from cardranker.api.view import FiltersModel
from cardranker.config import settings
from cardranker.models.card import COLOR_SYMBOLS, Card, ImageSource, resolve_card_image
from cardranker.models.grade_store import GradeStore
from cardranker.models.view import DisplayMode, SortKey
from cardranker.services.ranking import RankingSession

router = APIRouter(prefix="/cards", tags=["cards"])


class CardImageModel(BaseModel):
    """Resolved display image; `value` is placeholder text for PLACEHOLDER."""

    source: ImageSource
    value: str


class CardModel(BaseModel):
    """A card as shown to the user."""

    id: str
    name: str
    type_line: str
    cmc: float
    rarity: str
    color_identity: list[str] = Field(
        default_factory=list,
        description="Color symbols in WUBRG order",
    )
    grade: str | None = None
    image: CardImageModel

    @classmethod
    def from_card(cls, card: Card, grade_store: GradeStore, set_code: str) -> "CardModel":
        image = resolve_card_image(card, set_code, settings.image_base_url)
        identity = card.color_identity
        return cls(
            id=card.id,
            name=card.name,
            type_line=card.type_line,
            cmc=card.cmc,
            rarity=card.rarity,
            color_identity=[color for color in COLOR_SYMBOLS if color in identity],
            grade=grade_store.grade_of(card.id),
            image=CardImageModel(source=image.source, value=image.value),
        )


class CardListResponse(BaseModel):
    """The visible card list."""

    count: int
    total_cards: int
    unranked_cards: int
    filters: FiltersModel
    sort_key: SortKey
    mode: DisplayMode
    cards: list[CardModel] = Field(default_factory=list)


class CurrentCardResponse(BaseModel):
    """Single-card view: the card under the cursor and where it sits."""

    card: CardModel | None = None
    position: int = Field(
        default=0,
        description="1-based position of the card in the visible list (0 if empty)",
    )
    count: int = 0


class TierModel(BaseModel):
    tier: str
    cards: list[CardModel]


class GalleryResponse(BaseModel):
    """Visible cards grouped by grade tier. Empty tiers are omitted."""

    count: int
    tiers: list[TierModel] = Field(default_factory=list)


def _set_code(session: RankingSession) -> str:
    return session.catalog.set_code or settings.set_code


@router.get("", response_model=CardListResponse)
async def list_cards(
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> CardListResponse:
    """Cards matching the current filters, in the current sort order."""
    visible = session.visible_cards()
    set_code = _set_code(session)

    return CardListResponse(
        count=len(visible),
        total_cards=len(session.catalog),
        unranked_cards=session.unranked_count,
        filters=FiltersModel.from_criteria(session.view.criteria),
        sort_key=session.view.sort_key,
        mode=session.view.mode,
        cards=[CardModel.from_card(card, session.grade_store, set_code) for card in visible],
    )


@router.get("/current", response_model=CurrentCardResponse)
async def current_card(
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> CurrentCardResponse:
    """Card under the cursor, shown as "Card {position} of {count}"."""
    visible = session.visible_cards()
    if not visible:
        return CurrentCardResponse()

    index = session.view.cursor % len(visible)
    return CurrentCardResponse(
        card=CardModel.from_card(visible[index], session.grade_store, _set_code(session)),
        position=index + 1,
        count=len(visible),
    )


@router.get("/gallery", response_model=GalleryResponse)
async def gallery(
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> GalleryResponse:
    set_code = _set_code(session)
    groups = session.gallery()

    return GalleryResponse(
        count=sum(len(group.cards) for group in groups),
        tiers=[
            TierModel(
                tier=group.tier,
                cards=[
                    CardModel.from_card(card, session.grade_store, set_code)
                    for card in group.cards
                ],
            )
            for group in groups
        ],
    )
