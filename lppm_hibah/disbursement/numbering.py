"""Disbursement letter (surat pencairan) document numbers.

Format: SP/NNNN/LPPM/YYYY, where NNNN is the 1-based sequence of letters
issued in calendar year YYYY (the year of the letter's issue date).
"""

import re
from typing import Optional
from pydantic import BaseModel

# ASCII digits only; always use fullmatch so a trailing newline is refused
DOCUMENT_NUMBER_PATTERN = re.compile(r"SP/([0-9]{4})/LPPM/([0-9]{4})")
MAX_SEQUENCE = 9999


class SequenceOverflowError(ValueError):
    """More than 9999 letters in one year; the 4-digit field cannot hold it."""


class ParsedDocumentNumber(BaseModel, frozen=True):
    sequence: int
    year: int


class DocumentNumberGenerator:
    """Pure formatter/parser; the caller supplies the year and current count.

    Gap-free numbering needs the count-then-insert to be serialized per year
    by the persistence layer (unique `nomor_surat`).
    """

    def next(self, year: int, current_year_count: int) -> str:
        """Number for the letter following `current_year_count` letters in `year`.

        Raises:
            SequenceOverflowError: If the sequence would exceed 9999.
            ValueError: If year or count are out of range.
        """
        if current_year_count < 0:
            raise ValueError(f"current_year_count must be >= 0, got {current_year_count}")
        if not 0 <= year <= 9999:
            raise ValueError(f"year must have at most 4 digits, got {year}")
        sequence = current_year_count + 1
        if sequence > MAX_SEQUENCE:
            raise SequenceOverflowError(
                f"Nomor surat untuk tahun {year} sudah mencapai batas {MAX_SEQUENCE}"
            )
        return f"SP/{sequence:04d}/LPPM/{year:04d}"

    def parse(self, text: str) -> Optional[ParsedDocumentNumber]:
        """Split a number into sequence and year; None when it does not match."""
        match = DOCUMENT_NUMBER_PATTERN.fullmatch(text or "")
        if match is None:
            return None
        return ParsedDocumentNumber(sequence=int(match.group(1)), year=int(match.group(2)))

    def is_valid(self, text: str) -> bool:
        return DOCUMENT_NUMBER_PATTERN.fullmatch(text or "") is not None
