"""
Failure envelope and known error types.

Every user-visible failure is classified with a FailureKind and carried
to the presentation layer in an ApiResponse envelope. Errors that the
system can explain subclass KnownError; the API turns them into a
known-failure response with the error's HTTP status.

Recoverable storage problems (unreadable or unwritable grade blobs) are
not KnownErrors: they are absorbed and logged where they happen.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    INVALID_GRADE = "invalid_grade"
    DECODE_FAILED = "decode_failed"

    # Resource failures
    NOT_FOUND = "not_found"

    # Flow control
    CONFIRMATION_REQUIRED = "confirmation_required"

    # Service failures
    CATALOG_UNAVAILABLE = "catalog_unavailable"
    CATALOG_LOADING = "catalog_loading"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel, Generic[T]):
    """Response envelope for failures. Successful calls return their model directly."""

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Extra payload for the client (e.g. the unranked count)",
    )
    failure: FailureDetail = Field(
        ...,
        description="Failure details",
    )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        data: Any = None,
    ) -> "ApiResponse[Any]":
        """
        Create a known failure response.

        Use when the system knows exactly why the operation failed.
        Example: undecodable import string, unknown card id.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            data=data,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def unknown_failure(cls, detail: str | None = None) -> "ApiResponse[Any]":
        """Create an unknown failure response for unexpected exceptions."""
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message="Something went wrong and the cause is unknown. Try again.",
                detail=detail,
                suggestion="If this persists, please report the issue.",
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def response_data(self) -> Any:
        """Extra payload attached to the failure response."""
        return None

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
            data=self.response_data(),
        )


class CatalogLoadError(KnownError):
    """
    The card catalog could not be loaded.

    Fatal for the session: nothing can be filtered or graded without it.
    """

    def __init__(self, source: str, detail: str | None = None):
        self.source = source
        super().__init__(
            kind=FailureKind.CATALOG_UNAVAILABLE,
            message=f"Failed to load card data from {source}.",
            detail=detail,
            suggestion="Make sure the set's catalog file exists and restart the service.",
            status_code=503,
        )


class DecodeError(KnownError):
    """An import string could not be decoded into a grade store."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.DECODE_FAILED,
            message="Invalid ranking string.",
            detail=detail,
            suggestion="Paste the complete string produced by export.",
            status_code=400,
        )


class InvalidFilterError(KnownError):
    """A filter value could not be applied to its field."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message="Invalid filter value.",
            detail=detail,
            suggestion=(
                "Use W, U, B, R, G, Multi or Colorless for colors "
                "and a whole number for mana value."
            ),
            status_code=400,
        )


class InvalidGradeError(KnownError):
    """A grade outside the thirteen valid values was submitted."""

    def __init__(self, grade: str):
        self.grade = grade
        super().__init__(
            kind=FailureKind.INVALID_GRADE,
            message=f"'{grade}' is not a valid grade.",
            suggestion="Use A, B, C or D with an optional + or -, or F.",
            status_code=422,
        )


class CardNotFoundError(KnownError):
    """A card id does not exist in the catalog."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"No card with id '{card_id}' in this set.",
            status_code=404,
        )


class ConfirmationRequiredError(KnownError):
    """Export needs explicit confirmation because some cards are ungraded."""

    def __init__(self, unranked_count: int):
        self.unranked_count = unranked_count
        super().__init__(
            kind=FailureKind.CONFIRMATION_REQUIRED,
            message=(
                f"You have {unranked_count} unranked card(s). "
                "Are you sure you want to export?"
            ),
            suggestion="Repeat the export with confirm=true to proceed.",
            status_code=409,
        )

    def response_data(self) -> Any:
        return {"unranked_count": self.unranked_count}
