"""Disbursement letters: document numbering, validation and issuance."""

from .numbering import (
    DOCUMENT_NUMBER_PATTERN,
    MAX_SEQUENCE,
    DocumentNumberGenerator,
    ParsedDocumentNumber,
    SequenceOverflowError,
)
from .service import DisbursementService
from .validation import total_disbursed, validate_disbursement

__all__ = [
    "DOCUMENT_NUMBER_PATTERN",
    "MAX_SEQUENCE",
    "DocumentNumberGenerator",
    "ParsedDocumentNumber",
    "SequenceOverflowError",
    "DisbursementService",
    "validate_disbursement",
    "total_disbursed",
]
