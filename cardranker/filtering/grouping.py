"""
Tier grouping for the gallery view.

Buckets an already ordered card list by grade. Grouping never re-sorts:
inside a bucket, cards keep the order they had in the input.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from cardranker.models.card import Card
from cardranker.models.grade import UNRANKED_TIER, VALID_GRADES
from cardranker.models.grade_store import GradeStore


@dataclass(frozen=True, slots=True)
class TierGroup:
    """One gallery bucket."""

    tier: str
    cards: tuple[Card, ...]


def group_by_tier(ordered_cards: Sequence[Card], grade_store: GradeStore) -> list[TierGroup]:
    """
    Group cards into grade tiers.

    Tier order is A+ through F, then Unranked. Grades outside the valid
    set (possible after importing a hand-edited string) each get their own
    bucket between F and Unranked, in first-seen order. Empty buckets are
    omitted, and every input card lands in exactly one bucket.
    """
    buckets: dict[str, list[Card]] = {}
    for card in ordered_cards:
        grade = grade_store.grade_of(card.id)
        tier = grade if grade is not None else UNRANKED_TIER
        buckets.setdefault(tier, []).append(card)

    unrecognized = [
        tier for tier in buckets if tier not in VALID_GRADES and tier != UNRANKED_TIER
    ]
    tier_order = [*VALID_GRADES, *unrecognized, UNRANKED_TIER]

    return [
        TierGroup(tier=tier, cards=tuple(buckets[tier])) for tier in tier_order if tier in buckets
    ]
