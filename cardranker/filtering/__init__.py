"""
Card list pipeline for the ranker.

Visible cards: filter and sort the catalog for the current view.
Grouping: bucket the visible list into grade tiers for the gallery.
"""

from cardranker.filtering.grouping import TierGroup, group_by_tier
from cardranker.filtering.visible_cards import (
    VisibleCardsMetrics,
    compute_visible_cards,
    name_sort_key,
    sort_cards,
)

__all__ = [
    # Visible cards
    "VisibleCardsMetrics",
    "compute_visible_cards",
    "name_sort_key",
    "sort_cards",
    # Grouping
    "TierGroup",
    "group_by_tier",
]
