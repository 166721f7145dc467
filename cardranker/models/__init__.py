from cardranker.models.card import (
    COLOR_SYMBOLS,
    RARITY_ORDER,
    Card,
    CardFace,
    CardImage,
    ImageSource,
    resolve_card_image,
)
from cardranker.models.failure import (
    ApiResponse,
    CardNotFoundError,
    CatalogLoadError,
    ConfirmationRequiredError,
    DecodeError,
    FailureDetail,
    FailureKind,
    InvalidFilterError,
    InvalidGradeError,
    KnownError,
    OutcomeType,
)
from cardranker.models.grade import (
    GRADE_ORDER,
    TIER_ORDER,
    UNRANKED_TIER,
    VALID_GRADES,
    compose_grade,
    grade_rank,
    is_valid_grade,
    validate_grade,
)
from cardranker.models.grade_store import GradeStore
from cardranker.models.view import (
    ColorSelector,
    ColorSelectorKind,
    DisplayMode,
    FilterCriteria,
    FilterField,
    SortKey,
    ViewState,
)

__all__ = [
    "ApiResponse",
    "COLOR_SYMBOLS",
    "Card",
    "CardFace",
    "CardImage",
    "CardNotFoundError",
    "CatalogLoadError",
    "ColorSelector",
    "ColorSelectorKind",
    "ConfirmationRequiredError",
    "DecodeError",
    "DisplayMode",
    "FailureDetail",
    "FailureKind",
    "FilterCriteria",
    "FilterField",
    "GRADE_ORDER",
    "GradeStore",
    "ImageSource",
    "InvalidFilterError",
    "InvalidGradeError",
    "KnownError",
    "OutcomeType",
    "RARITY_ORDER",
    "SortKey",
    "TIER_ORDER",
    "UNRANKED_TIER",
    "VALID_GRADES",
    "ViewState",
    "compose_grade",
    "grade_rank",
    "is_valid_grade",
    "resolve_card_image",
    "validate_grade",
]
