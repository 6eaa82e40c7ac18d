"""Issues disbursement letters (surat pencairan) for accepted proposals."""

import logging
from datetime import date
from typing import Optional

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
)

from ..database.store import DuplicateDocumentNumberError, ProposalStore
from ..models.disbursement_letter import DisbursementLetter
from ..models.outcome import ErrorKind, Outcome, fail, succeed
from ..models.proposal import Proposal, ProposalStatus
from .numbering import DocumentNumberGenerator
from .validation import total_disbursed, validate_disbursement

logger = logging.getLogger(__name__)


class DisbursementService:
    """Numbers and stores disbursement letters.

    Letters for one proposal never add up to more than its approved amount.
    The number is the count of letters already issued in the issue date's
    year plus one; the store's unique constraint catches a concurrent issuer
    taking the same number, in which case the count is re-read once.
    """

    def __init__(
        self,
        store: ProposalStore,
        generator: Optional[DocumentNumberGenerator] = None,
    ) -> None:
        self.store = store
        self.generator = generator or DocumentNumberGenerator()

    def issue_letter(
        self,
        proposal_id: str,
        issue_date: date,
        amount: int,
        note: Optional[str] = None,
        document_url: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> Outcome:
        """Issue a letter disbursing `amount` for an accepted proposal.

        Returns:
            Outcome with the stored DisbursementLetter, or ValidationError /
            DuplicateDocumentNumber.

        Raises:
            SequenceOverflowError: If the year already holds 9999 letters.
        """
        proposal = self.store.load_proposal(proposal_id)
        if proposal.status != ProposalStatus.ACCEPTED:
            return fail(
                ErrorKind.VALIDATION_ERROR,
                "Surat pencairan hanya dapat dibuat untuk proposal yang diterima",
                field_errors={"proposal_id": "Proposal belum diterima"},
                status=proposal.status.value,
            )

        try:
            return self._issue(proposal, issue_date, amount, note, document_url, created_by)
        except DuplicateDocumentNumberError as exc:
            logger.error(
                "disbursement proposal=%s number=%s result=duplicate",
                proposal.id,
                exc.document_number,
            )
            return fail(
                ErrorKind.DUPLICATE_DOCUMENT_NUMBER,
                str(exc),
                document_number=exc.document_number,
            )

    @retry(
        stop=stop_after_attempt(2),
        retry=retry_if_exception_type(DuplicateDocumentNumberError),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    def _issue(
        self,
        proposal: Proposal,
        issue_date: date,
        amount: int,
        note: Optional[str],
        document_url: Optional[str],
        created_by: Optional[str],
    ) -> Outcome:
        year = issue_date.year
        issued = self.store.count_disbursement_letters_issued_in_year(year)
        letter = DisbursementLetter(
            proposal_id=proposal.id,
            nomor_surat=self.generator.next(year, issued),
            tanggal_surat=issue_date,
            jumlah_dana=amount,
            keterangan=note,
            dokumen_url=document_url,
            created_by=created_by,
        )

        already = total_disbursed(self.store.list_disbursement_letters(proposal.id))
        remaining = (proposal.approved_amount or 0) - already
        validation = validate_disbursement(letter, remaining)
        if not validation.valid:
            return fail(
                ErrorKind.VALIDATION_ERROR,
                "Data surat pencairan tidak valid",
                field_errors=validation.errors,
                already_disbursed=already,
                remaining=remaining,
            )

        saved = self.store.insert_disbursement_letter(letter)
        logger.info(
            "disbursement proposal=%s number=%s amount=%d result=issued",
            proposal.id,
            saved.document_number,
            saved.disbursed_amount,
        )
        return succeed(saved)
