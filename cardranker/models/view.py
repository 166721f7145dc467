"""
Browsing state: filter criteria, sort key, cursor and display mode.

All records here are immutable. State changes produce new records through
the transitions in cardranker.services.ranking.
"""

from dataclasses import dataclass, field
from enum import Enum

from cardranker.models.card import COLOR_SYMBOLS


class ColorSelectorKind(str, Enum):
    """How the color filter narrows the set."""

    NONE = "none"
    SINGLE = "single"
    MULTI = "multi"
    COLORLESS = "colorless"


@dataclass(frozen=True, slots=True)
class ColorSelector:
    """
    Color filter value.

    NONE passes every card. SINGLE passes cards whose color identity is
    exactly the one symbol (multicolor cards do not match). MULTI passes
    cards with two or more colors, COLORLESS cards with none.
    """

    kind: ColorSelectorKind = ColorSelectorKind.NONE
    symbol: str | None = None

    def __post_init__(self) -> None:
        if self.kind == ColorSelectorKind.SINGLE:
            if self.symbol not in COLOR_SYMBOLS:
                raise ValueError(f"Unknown color symbol: {self.symbol!r}")
        elif self.symbol is not None:
            raise ValueError(f"{self.kind.value} selector takes no symbol")

    @classmethod
    def parse(cls, value: str | None) -> "ColorSelector":
        """
        Parse a selector from its text form.

        Accepts "" or None (no filter), a color symbol, "M"/"Multi" and
        "C"/"Colorless". Matching is case-insensitive.

        Raises:
            ValueError: If the value is not a string or not recognized
        """
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Color selector must be text, got {type(value).__name__}")
        if value is None or not value.strip():
            return cls()

        text = value.strip().upper()
        if text in ("M", "MULTI"):
            return cls(ColorSelectorKind.MULTI)
        if text in ("C", "COLORLESS"):
            return cls(ColorSelectorKind.COLORLESS)
        if text in COLOR_SYMBOLS:
            return cls(ColorSelectorKind.SINGLE, text)
        raise ValueError(f"Unknown color selector: {value!r}")

    def matches(self, identity: frozenset[str]) -> bool:
        """Check a card's color identity against this selector."""
        if self.kind == ColorSelectorKind.NONE:
            return True
        if self.kind == ColorSelectorKind.MULTI:
            return len(identity) >= 2
        if self.kind == ColorSelectorKind.COLORLESS:
            return len(identity) == 0
        return identity == frozenset({self.symbol})

    def __str__(self) -> str:
        if self.kind == ColorSelectorKind.SINGLE:
            return str(self.symbol)
        if self.kind == ColorSelectorKind.MULTI:
            return "Multi"
        if self.kind == ColorSelectorKind.COLORLESS:
            return "Colorless"
        return ""


class FilterField(str, Enum):
    """Fields of FilterCriteria that can be set individually."""

    COLOR_SELECTOR = "color_selector"
    TYPE_SUBSTRING = "type_substring"
    MAX_MANA_VALUE = "max_mana_value"
    SHOW_UNRANKED_ONLY = "show_unranked_only"


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """
    Active filters. All set predicates are ANDed.

    Attributes:
        color_selector: Color identity filter
        type_substring: Case-sensitive type line substring ("" = no filter)
        max_mana_value: Mana value ceiling (None = no filter)
        show_unranked_only: Hide cards that already have a grade
    """

    color_selector: ColorSelector = field(default_factory=ColorSelector)
    type_substring: str = ""
    max_mana_value: int | None = None
    show_unranked_only: bool = False

    @property
    def is_empty(self) -> bool:
        return self == FilterCriteria()


class SortKey(str, Enum):
    """Ordering of the visible card list."""

    NAME = "name"
    RARITY = "rarity"
    GRADE = "grade"


class DisplayMode(str, Enum):
    """Single-card grading view or tiered gallery."""

    SINGLE_CARD = "single_card"
    GALLERY = "gallery"


@dataclass(frozen=True, slots=True)
class ViewState:
    """Everything that decides what the user is looking at."""

    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    sort_key: SortKey = SortKey.NAME
    cursor: int = 0
    mode: DisplayMode = DisplayMode.SINGLE_CARD
