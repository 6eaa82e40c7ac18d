"""Outcome - explicit success/failure result for every business rule.

Rule failures are values, not exceptions: callers inspect `outcome.ok` and
render `outcome.violation` (action-level message plus per-field errors).
"""

from enum import Enum
from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Precondition-violation kinds surfaced to UI/API layers."""

    INVALID_TRANSITION = "InvalidTransition"
    TEAM_INELIGIBLE = "TeamIneligible"
    MISSING_DOCUMENT = "MissingDocument"
    BUDGET_EXCEEDED = "BudgetExceeded"
    VALIDATION_ERROR = "ValidationError"
    DUPLICATE_DOCUMENT_NUMBER = "DuplicateDocumentNumber"


class RuleViolation(BaseModel):
    """Why an operation was refused."""

    kind: ErrorKind
    message: str = Field(..., description="Human-readable (Indonesian) message")
    details: dict[str, Any] = Field(default_factory=dict)
    field_errors: dict[str, str] = Field(default_factory=dict, description="field -> message")


class Outcome(BaseModel, Generic[T]):
    """Either a value or a violation, never both."""

    value: Optional[T] = None
    violation: Optional[RuleViolation] = None

    @property
    def ok(self) -> bool:
        return self.violation is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.violation.kind if self.violation else None


def succeed(value: Any = None) -> Outcome:
    """Wrap a successful result."""
    return Outcome(value=value)


def fail(
    kind: ErrorKind,
    message: str,
    field_errors: Optional[dict[str, str]] = None,
    **details: Any,
) -> Outcome:
    """Build a failed Outcome carrying a RuleViolation."""
    return Outcome(
        violation=RuleViolation(
            kind=kind,
            message=message,
            details=details,
            field_errors=field_errors or {},
        )
    )
