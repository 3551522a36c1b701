"""
Failure classification for caller mistakes.

Expected game outcomes (not enough copies, wrong phase, locked slot) are
NOT errors: engine operations report them through outcome enums. The
exceptions here cover requests that name things that do not exist, such as
an unknown card id or slot. The HTTP layer converts them to JSON errors via
FailureDetail.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """What kind of caller mistake was made."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    CONFIRMATION_REQUIRED = "confirmation_required"
    UNKNOWN = "unknown"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES: dict[FailureKind, int] = {
    FailureKind.INVALID_INPUT: 400,
    FailureKind.NOT_FOUND: 404,
    FailureKind.CONFIRMATION_REQUIRED: 409,
    FailureKind.UNKNOWN: 500,
}


class FailureDetail(BaseModel):
    """Error body returned to API clients."""

    kind: FailureKind
    message: str = Field(..., description="What the caller got wrong, in plain words")
    detail: str | None = None
    suggestion: str | None = Field(default=None, description="How to fix the request")


class KnownError(Exception):
    """
    A caller mistake the engine can name precisely.

    The failure kind decides the HTTP status.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        *,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_detail(self) -> FailureDetail:
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class UnknownCardError(KnownError):
    """Raised when a card id is not in the catalogue."""

    def __init__(self, card_id: int):
        self.card_id = card_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"No card with id {card_id} exists.",
            suggestion="Card ids run from 0 to 77.",
        )


class UnknownSlotError(KnownError):
    """Raised when a slot name is not one of the four elemental slots."""

    def __init__(self, slot: str):
        self.slot = slot
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"'{slot}' is not a slot.",
            suggestion="Use one of: fire, air, water, earth.",
        )


class InvalidTierError(KnownError):
    """Raised when a tier is outside 1-3."""

    def __init__(self, tier: int):
        self.tier = tier
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Tier {tier} is not valid.",
            suggestion="Tiers are 1 (Bronze), 2 (Silver) and 3 (Gold).",
        )


class ConfirmationRequiredError(KnownError):
    """Raised when a destructive request arrives without explicit confirmation."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            kind=FailureKind.CONFIRMATION_REQUIRED,
            message=f"'{operation}' is irreversible and must be confirmed.",
            suggestion="Repeat the request with confirm=true.",
        )
