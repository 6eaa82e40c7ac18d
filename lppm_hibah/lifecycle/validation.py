"""Proposal field validation, applied on create and on edit."""

from typing import Any, Mapping, Optional, Union

from ..budget.ledger import validate_requested_amount
from ..models.proposal import Proposal
from ..models.validation_result import ValidationResult

MIN_ABSTRACT_LENGTH = 100
MAX_ABSTRACT_LENGTH = 500
MIN_BACKGROUND_LENGTH = 200

# column -> label, for fields that only need to be non-empty
_REQUIRED_TEXT = {
    "tujuan": "Tujuan",
    "metodologi": "Metodologi",
    "luaran": "Luaran",
}


def _text(data: Mapping[str, Any], key: str) -> str:
    return str(data.get(key) or "")


def validate_proposal(
    data: Union[Proposal, Mapping[str, Any]],
    per_proposal_cap: Optional[int] = None,
) -> ValidationResult:
    """Validate proposal fields, reporting every failure at once.

    Args:
        data: A Proposal or a raw form mapping keyed by column name.
        per_proposal_cap: Program's cap, when the requested amount should be
            checked against it too.

    Returns:
        ValidationResult with errors keyed by column name.
    """
    if isinstance(data, Proposal):
        data = data.model_dump(by_alias=True)

    errors: dict[str, str] = {}

    if not _text(data, "judul").strip():
        errors["judul"] = "Judul wajib diisi"

    abstract = _text(data, "abstrak")
    if not abstract.strip():
        errors["abstrak"] = "Abstrak wajib diisi"
    elif len(abstract) < MIN_ABSTRACT_LENGTH:
        errors["abstrak"] = f"Abstrak minimal {MIN_ABSTRACT_LENGTH} karakter"
    elif len(abstract) > MAX_ABSTRACT_LENGTH:
        errors["abstrak"] = f"Abstrak maksimal {MAX_ABSTRACT_LENGTH} karakter"

    background = _text(data, "latar_belakang")
    if not background.strip():
        errors["latar_belakang"] = "Latar belakang wajib diisi"
    elif len(background) < MIN_BACKGROUND_LENGTH:
        errors["latar_belakang"] = f"Latar belakang minimal {MIN_BACKGROUND_LENGTH} karakter"

    for key, label in _REQUIRED_TEXT.items():
        if not _text(data, key).strip():
            errors[key] = f"{label} wajib diisi"

    amount_error = validate_requested_amount(data.get("anggaran_diajukan") or 0, per_proposal_cap)
    if amount_error:
        errors["anggaran_diajukan"] = amount_error

    if not data.get("hibah_id"):
        errors["hibah_id"] = "Hibah wajib dipilih"

    if not data.get("tim_id"):
        errors["tim_id"] = "Tim wajib dipilih"

    return ValidationResult.from_errors(errors)
