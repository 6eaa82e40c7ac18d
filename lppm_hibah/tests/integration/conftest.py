"""Integration test fixtures and an in-memory ProposalStore."""

import itertools
from typing import Callable, Dict, List, Optional

import pytest

from lppm_hibah.database.store import (
    ConcurrentUpdateError,
    DuplicateDocumentNumberError,
    NotFoundError,
)
from lppm_hibah.models import DisbursementLetter, GrantProgram, Proposal, ProposalStatus, Team


class InMemoryStore:
    """In-memory replacement for SupabaseClient honouring the same write contracts.

    `conflicts` makes the next N conditional writes lose as if another request
    got there first; `before_letter_insert` runs just before each letter insert.
    """

    def __init__(self):
        self.proposals: Dict[str, Proposal] = {}
        self.programs: Dict[str, GrantProgram] = {}
        self.teams: Dict[str, Team] = {}
        self.letters: List[DisbursementLetter] = []
        self.conflicts = 0
        self.before_letter_insert: Optional[Callable[["InMemoryStore"], None]] = None
        self.commits = 0
        self._ids = itertools.count(1)

    def _lose_race(self) -> bool:
        if self.conflicts:
            self.conflicts -= 1
            return True
        return False

    # proposals

    def load_proposal(self, proposal_id: str) -> Proposal:
        try:
            return self.proposals[proposal_id]
        except KeyError:
            raise NotFoundError(f"proposal {proposal_id} not found") from None

    def insert_proposal(self, proposal: Proposal) -> Proposal:
        saved = proposal.model_copy(update={"id": f"prop-{next(self._ids)}"})
        self.proposals[saved.id] = saved
        return saved

    def save_proposal(self, proposal: Proposal, expected_status: ProposalStatus) -> Proposal:
        current = self.load_proposal(proposal.id)
        if self._lose_race() or current.status != expected_status:
            raise ConcurrentUpdateError(f"proposal {proposal.id} changed")
        self.proposals[proposal.id] = proposal
        return proposal

    # programs and teams

    def load_grant_program(self, program_id: str) -> GrantProgram:
        try:
            return self.programs[program_id]
        except KeyError:
            raise NotFoundError(f"master_hibah {program_id} not found") from None

    def save_grant_program(self, program: GrantProgram) -> GrantProgram:
        if program.id is None:
            program = program.model_copy(update={"id": f"hibah-{next(self._ids)}"})
        elif program.id in self.programs:
            allocated = self.programs[program.id].allocated_budget
            program = program.model_copy(update={"allocated_budget": allocated})
        self.programs[program.id] = program
        return program

    def load_team(self, team_id: str) -> Team:
        try:
            return self.teams[team_id]
        except KeyError:
            raise NotFoundError(f"tim {team_id} not found") from None

    # letters

    def count_disbursement_letters_issued_in_year(self, year: int) -> int:
        return sum(1 for letter in self.letters if letter.issue_date.year == year)

    def list_disbursement_letters(self, proposal_id: str) -> List[DisbursementLetter]:
        return [letter for letter in self.letters if letter.proposal_id == proposal_id]

    def insert_disbursement_letter(self, letter: DisbursementLetter) -> DisbursementLetter:
        if self.before_letter_insert is not None:
            self.before_letter_insert(self)
        if any(existing.document_number == letter.document_number for existing in self.letters):
            raise DuplicateDocumentNumberError(letter.document_number)
        saved = letter.model_copy(update={"id": f"sp-{next(self._ids)}"})
        self.letters.append(saved)
        return saved

    # acceptance

    def commit_acceptance(self, proposal, program, expected_status, expected_allocated) -> None:
        current_proposal = self.load_proposal(proposal.id)
        current_program = self.load_grant_program(program.id)
        if (
            self._lose_race()
            or current_proposal.status != expected_status
            or current_program.allocated_budget != expected_allocated
        ):
            raise ConcurrentUpdateError(f"proposal {proposal.id} or hibah {program.id} changed")
        self.proposals[proposal.id] = proposal
        self.programs[program.id] = program
        self.commits += 1


@pytest.fixture
def store(program, make_team):
    store = InMemoryStore()
    store.save_grant_program(program)
    team = make_team()
    store.teams[team.id] = team
    return store


@pytest.fixture
def put_proposal(store, make_proposal):
    """Store a proposal in the given status and return its id."""

    def _put(status=ProposalStatus.DRAFT, **overrides):
        proposal = make_proposal(status, **overrides)
        store.proposals[proposal.id] = proposal
        return proposal.id

    return _put
