"""
Rankings API endpoints.

Grade assignment (direct or by keyboard) and export/import of transfer
strings.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from cardranker.api.state import get_ranking_session
from cardranker.services.ranking import RankingSession

router = APIRouter(prefix="/rankings", tags=["rankings"])


class RankingsResponse(BaseModel):
    """All grades assigned so far."""

    grades: dict[str, str] = Field(default_factory=dict)
    graded_cards: int = 0
    unranked_cards: int = 0


class GradeRequest(BaseModel):
    grade: str = Field(
        ...,
        description="A+, A, A-, B+, B, B-, C+, C, C-, D+, D, D- or F",
        examples=["B+"],
    )


class GradeResponse(BaseModel):
    card_id: str
    grade: str


class GradeCurrentResponse(BaseModel):
    """Result of grading the card under the cursor."""

    card_id: str
    grade: str
    cursor: int = Field(..., description="Cursor after moving on to the next card")


class KeyPressRequest(BaseModel):
    key: str = Field(
        ...,
        min_length=1,
        description='Grade letter (A B C D F), "+", "=" or "-"; other keys are ignored',
        examples=["b", "+"],
    )


class KeyPressResponse(BaseModel):
    """Staged selection after a key press, and the grade it committed, if any."""

    letter: str | None = None
    modifier: str | None = None
    grade: str | None = Field(default=None, description="Grade committed by this key")
    card_id: str | None = Field(default=None, description="Card the grade was applied to")
    cursor: int


class ExportRequest(BaseModel):
    confirm: bool = Field(
        default=False,
        description="Export even though some cards are unranked",
    )


class ExportResponse(BaseModel):
    ranking_string: str
    unranked_cards: int


class ImportRequest(BaseModel):
    text: str = Field(
        ...,
        description="Ranking string produced by export",
    )


class ImportResponse(BaseModel):
    graded_cards: int
    message: str = ""


@router.get("", response_model=RankingsResponse)
async def get_rankings(
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> RankingsResponse:
    return RankingsResponse(
        grades=dict(session.grade_store.grades),
        graded_cards=len(session.grade_store),
        unranked_cards=session.unranked_count,
    )


@router.put("/{card_id}", response_model=GradeResponse)
async def grade_card(
    card_id: str,
    request: GradeRequest,
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> GradeResponse:
    """
    Assign a grade to a card.

    Filters, sort order and cursor are left untouched.
    """
    grade = await session.grade_card(card_id, request.grade)
    return GradeResponse(card_id=card_id, grade=grade)


@router.post("/current", response_model=GradeCurrentResponse)
async def grade_current_card(
    request: GradeRequest,
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> GradeCurrentResponse:
    """Grade the card under the cursor and advance to the next card."""
    card = await session.grade_current(request.grade)
    if card is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No cards match the current filters.",
        )
    return GradeCurrentResponse(card_id=card.id, grade=request.grade, cursor=session.view.cursor)


@router.post("/keys", response_model=KeyPressResponse)
async def press_grade_key(
    request: KeyPressRequest,
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> KeyPressResponse:
    """
    Keyboard grading for the single-card view.

    Letters and modifiers stay selected between cards. A key that
    completes a grade applies it to the card under the cursor and advances.
    """
    grade, card = await session.press_grade_key(request.key)
    return KeyPressResponse(
        letter=session.grade_entry.letter,
        modifier=session.grade_entry.modifier,
        grade=grade,
        card_id=card.id if card else None,
        cursor=session.view.cursor,
    )


@router.post("/export", response_model=ExportResponse)
async def export_rankings(
    request: ExportRequest,
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> ExportResponse:
    """
    Export grades as a copy-pasteable ranking string.

    When some cards are still unranked, the request must set confirm=true;
    otherwise the response is a 409 carrying the unranked count.
    """
    ranking_string = session.export_rankings(confirmed=request.confirm)
    return ExportResponse(ranking_string=ranking_string, unranked_cards=session.unranked_count)


@router.post("/import", response_model=ImportResponse)
async def import_rankings(
    request: ImportRequest,
    session: Annotated[RankingSession, Depends(get_ranking_session)],
) -> ImportResponse:
    """
    Replace all grades with those in a ranking string.

    An invalid string is rejected with 400 and the current grades are kept.
    """
    imported = await session.import_rankings(request.text)
    return ImportResponse(
        graded_cards=len(imported),
        message=f"Imported {len(imported)} ranking(s).",
    )
