"""ValidationResult - field-level validation report (everything wrong at once)."""

from pydantic import BaseModel, Field


class ValidationResult(BaseModel):
    valid: bool
    errors: dict[str, str] = Field(default_factory=dict, description="field -> message")

    @classmethod
    def from_errors(cls, errors: dict[str, str]) -> "ValidationResult":
        return cls(valid=not errors, errors=errors)
