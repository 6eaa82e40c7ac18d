"""Persistence collaborator interface used by the lifecycle and disbursement services.

Implementations must honour two contracts:

* `commit_acceptance` writes the accepted proposal and the program's
  allocation as one all-or-nothing unit, keyed on the values that were read.
* `insert_disbursement_letter` rejects a duplicate `nomor_surat` with
  DuplicateDocumentNumberError instead of storing it.
"""

from typing import List, Protocol

from ..models.disbursement_letter import DisbursementLetter
from ..models.grant_program import GrantProgram
from ..models.proposal import Proposal, ProposalStatus
from ..models.team import Team


class NotFoundError(LookupError):
    """Requested row does not exist."""


class ConcurrentUpdateError(RuntimeError):
    """A conditional write lost the race: the row changed since it was read."""


class DuplicateDocumentNumberError(RuntimeError):
    """The generated nomor_surat is already taken."""

    def __init__(self, document_number: str) -> None:
        super().__init__(f"Nomor surat {document_number} sudah digunakan")
        self.document_number = document_number


class ProposalStore(Protocol):
    def load_proposal(self, proposal_id: str) -> Proposal: ...

    def insert_proposal(self, proposal: Proposal) -> Proposal: ...

    def save_proposal(self, proposal: Proposal, expected_status: ProposalStatus) -> Proposal:
        """Update only if the stored status still equals `expected_status`."""
        ...

    def load_grant_program(self, program_id: str) -> GrantProgram: ...

    def save_grant_program(self, program: GrantProgram) -> GrantProgram: ...

    def load_team(self, team_id: str) -> Team: ...

    def count_disbursement_letters_issued_in_year(self, year: int) -> int: ...

    def list_disbursement_letters(self, proposal_id: str) -> List[DisbursementLetter]: ...

    def insert_disbursement_letter(self, letter: DisbursementLetter) -> DisbursementLetter: ...

    def commit_acceptance(
        self,
        proposal: Proposal,
        program: GrantProgram,
        expected_status: ProposalStatus,
        expected_allocated: int,
    ) -> None: ...
