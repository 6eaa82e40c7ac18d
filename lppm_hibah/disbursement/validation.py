"""Disbursement letter input validation and amount summaries."""

from typing import Any, Iterable, Mapping, Union

from ..models.disbursement_letter import DisbursementLetter
from ..models.validation_result import ValidationResult
from .numbering import DOCUMENT_NUMBER_PATTERN


def validate_disbursement(
    data: Union[DisbursementLetter, Mapping[str, Any]],
    max_amount: int,
) -> ValidationResult:
    """Validate a surat pencairan before insert.

    Args:
        data: A DisbursementLetter or raw form mapping keyed by column name.
        max_amount: The proposal's approved amount.
    """
    if isinstance(data, DisbursementLetter):
        data = data.model_dump(by_alias=True)

    errors: dict[str, str] = {}

    if not data.get("proposal_id"):
        errors["proposal_id"] = "Proposal wajib dipilih"

    number = str(data.get("nomor_surat") or "")
    if not number.strip():
        errors["nomor_surat"] = "Nomor surat wajib diisi"
    elif not DOCUMENT_NUMBER_PATTERN.fullmatch(number):
        errors["nomor_surat"] = "Format nomor surat tidak valid"

    if not data.get("tanggal_surat"):
        errors["tanggal_surat"] = "Tanggal surat wajib diisi"

    amount = data.get("jumlah_dana") or 0
    if amount <= 0:
        errors["jumlah_dana"] = "Jumlah dana harus lebih dari 0"
    elif amount > max_amount:
        errors["jumlah_dana"] = "Jumlah dana melebihi anggaran yang disetujui"

    return ValidationResult.from_errors(errors)


def total_disbursed(letters: Iterable[DisbursementLetter]) -> int:
    return sum(letter.disbursed_amount for letter in letters)
