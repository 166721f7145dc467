"""
Transfer codec for grade stores.

A transfer string is the grade store serialized as canonical JSON and
base64-encoded, so it survives clipboards, chat messages and e-mail.
There is no version field: the string is the grades and nothing else.
"""

import base64
import binascii
import json
import logging
from collections.abc import Callable, Sequence

from cardranker.models.card import Card
from cardranker.models.failure import DecodeError
from cardranker.models.grade import UNRANKED_TIER
from cardranker.models.grade_store import GradeStore

logger = logging.getLogger(__name__)


def export_store(grade_store: GradeStore) -> str:
    """
    Encode a grade store as a transfer string.

    Keys are sorted so equal stores always produce equal strings.
    """
    canonical = json.dumps(
        grade_store.grades,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return base64.b64encode(canonical.encode("utf-8")).decode("ascii")


def import_store(text: str) -> GradeStore:
    """
    Decode a transfer string into a new grade store.

    Whitespace anywhere in the text is ignored, so line-wrapped strings
    pasted from e-mail still decode.

    The caller's existing store is never touched; callers replace their
    store with the result only when this returns.

    Raises:
        DecodeError: If the text is not valid base64, not UTF-8, not JSON,
            or not an object mapping card ids to grade strings, or a
            grade is blank or the "Unranked" tier label
    """
    cleaned = "".join(text.split()) if text else ""
    if not cleaned:
        raise DecodeError("Ranking string is empty")

    try:
        raw = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Not valid base64: {e}") from e

    try:
        decoded = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError("Decoded bytes are not UTF-8 text") from e

    try:
        payload = json.loads(decoded)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Not valid JSON: {e.msg}") from e

    if not isinstance(payload, dict):
        raise DecodeError(f"Expected an object of grades, got {type(payload).__name__}")

    for card_id, grade in payload.items():
        if not isinstance(grade, str):
            raise DecodeError(f"Grade for card '{card_id}' is not a string")
        if not grade.strip() or grade == UNRANKED_TIER:
            raise DecodeError(f"Grade for card '{card_id}' is blank or '{UNRANKED_TIER}'")

    return GradeStore(grades=dict(payload))


def export_with_confirmation(
    catalog: Sequence[Card],
    grade_store: GradeStore,
    confirm: Callable[[int], bool],
) -> str | None:
    """
    Export after confirming when part of the set is still ungraded.

    Args:
        catalog: Every card in the set
        grade_store: Grades to export
        confirm: Asked with the number of ungraded cards; only called when
            that number is non-zero

    Returns:
        The transfer string, or None if the user declined.
    """
    unranked = grade_store.unranked_count(catalog)
    if unranked > 0 and not confirm(unranked):
        logger.info("export_declined", extra={"unranked": unranked})
        return None
    return export_store(grade_store)
