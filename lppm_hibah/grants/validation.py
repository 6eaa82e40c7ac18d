"""Grant program input validation (applied when an admin creates/edits a hibah)."""

from datetime import date
from typing import Any, Mapping, Optional, Union

from ..models.grant_program import GrantProgram
from ..models.validation_result import ValidationResult


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        return None


def validate_grant_program(
    data: Union[GrantProgram, Mapping[str, Any]],
    today: date,
    years_back: int = 1,
    years_ahead: int = 5,
) -> ValidationResult:
    """Validate hibah fields, reporting every failure at once.

    Args:
        data: A GrantProgram or a raw form mapping keyed by column name.
        today: Reference date for the budget-year window.
        years_back: Oldest accepted budget year relative to today.
        years_ahead: Furthest accepted budget year relative to today.

    Returns:
        ValidationResult with errors keyed by column name.
    """
    if isinstance(data, GrantProgram):
        data = data.model_dump(by_alias=True)

    errors: dict[str, str] = {}

    if not str(data.get("nama_hibah") or "").strip():
        errors["nama_hibah"] = "Nama hibah wajib diisi"

    if not str(data.get("jenis") or "").strip():
        errors["jenis"] = "Jenis hibah wajib dipilih"

    year = data.get("tahun_anggaran")
    if not isinstance(year, int) or not (today.year - years_back <= year <= today.year + years_ahead):
        errors["tahun_anggaran"] = "Tahun anggaran tidak valid"

    total = data.get("anggaran_total") or 0
    if total <= 0:
        errors["anggaran_total"] = "Anggaran total harus lebih dari 0"

    cap = data.get("anggaran_per_proposal")
    if cap is not None:
        if cap <= 0:
            errors["anggaran_per_proposal"] = "Anggaran per proposal harus lebih dari 0"
        elif total > 0 and cap > total:
            errors["anggaran_per_proposal"] = "Anggaran per proposal tidak boleh melebihi total"

    open_date = _parse_date(data.get("tanggal_buka"))
    close_date = _parse_date(data.get("tanggal_tutup"))
    if open_date is None:
        errors["tanggal_buka"] = "Tanggal buka wajib diisi"
    if close_date is None:
        errors["tanggal_tutup"] = "Tanggal tutup wajib diisi"
    elif open_date is not None and close_date <= open_date:
        errors["tanggal_tutup"] = "Tanggal tutup harus setelah tanggal buka"

    return ValidationResult.from_errors(errors)
