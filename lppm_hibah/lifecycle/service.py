"""Proposal lifecycle service - wires the state machine to the store.

Each operation loads fresh rows, runs the pure state machine, and commits with
a conditional write keyed on the status it read. A lost race
(ConcurrentUpdateError) is retried once against freshly loaded rows; a second
loss propagates to the caller.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
)

from ..budget.ledger import validate_requested_amount
from ..database.store import ConcurrentUpdateError, ProposalStore
from ..grants.status import can_submit_proposal, grant_status
from ..models.outcome import ErrorKind, Outcome, fail, succeed
from ..models.proposal import Proposal, ProposalStatus
from .state_machine import ProposalStateMachine
from .validation import validate_proposal

logger = logging.getLogger(__name__)

retry_on_conflict = retry(
    stop=stop_after_attempt(2),
    retry=retry_if_exception_type(ConcurrentUpdateError),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


class ProposalLifecycleService:
    """Create, submit, review and complete proposals against a ProposalStore."""

    def __init__(
        self,
        store: ProposalStore,
        machine: Optional[ProposalStateMachine] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self.machine = machine or ProposalStateMachine()
        self.clock = clock or self.machine.clock

    def create_proposal(self, proposal: Proposal) -> Outcome:
        """Validate and insert a new draft.

        The program must currently accept proposals and the team must not be
        archived. The lead is always the team's ketua.
        """
        validation = validate_proposal(proposal)
        if not validation.valid:
            return fail(
                ErrorKind.VALIDATION_ERROR,
                "Data proposal tidak valid",
                field_errors=validation.errors,
            )

        program = self.store.load_grant_program(proposal.grant_program_id)
        now = self.clock()
        if not can_submit_proposal(program, now):
            return fail(
                ErrorKind.VALIDATION_ERROR,
                "Hibah tidak sedang menerima proposal",
                field_errors={"hibah_id": "Hibah tidak aktif atau sudah ditutup"},
                grant_status=grant_status(program, now).value,
            )

        amount_error = validate_requested_amount(proposal.requested_amount, program.per_proposal_cap)
        if amount_error:
            return fail(
                ErrorKind.VALIDATION_ERROR,
                amount_error,
                field_errors={"anggaran_diajukan": amount_error},
                per_proposal_cap=program.per_proposal_cap,
            )

        team = self.store.load_team(proposal.team_id)
        attachable = self.machine.eligibility.check_attachable(team)
        if not attachable.ok:
            return attachable

        draft = proposal.model_copy(
            update={
                "status": ProposalStatus.DRAFT,
                "lead_id": team.lead_id,
                "approved_amount": None,
                "submitted_at": None,
                "reviewed_at": None,
                "reviewer_id": None,
                "evaluation_note": None,
            }
        )
        saved = self.store.insert_proposal(draft)
        logger.info("create proposal=%s hibah=%s tim=%s", saved.id, program.id, team.id)
        return succeed(saved)

    @retry_on_conflict
    def submit_proposal(self, proposal_id: str) -> Outcome:
        proposal = self.store.load_proposal(proposal_id)
        team = self.store.load_team(proposal.team_id)
        outcome = self.machine.submit(proposal, team)
        if not outcome.ok:
            return outcome
        return succeed(self.store.save_proposal(outcome.value, expected_status=proposal.status))

    @retry_on_conflict
    def review_proposal(
        self,
        proposal_id: str,
        decision: ProposalStatus,
        note: Optional[str] = None,
        reviewer_id: Optional[str] = None,
        approved_amount: Optional[int] = None,
    ) -> Outcome:
        """Apply a reviewer decision and persist it.

        Acceptance writes the proposal and the program's allocation together
        via `commit_acceptance`, so a refused or lost commit changes neither.

        Raises:
            ConcurrentUpdateError: If the commit loses the race twice.
        """
        proposal = self.store.load_proposal(proposal_id)
        program = self.store.load_grant_program(proposal.grant_program_id)
        outcome = self.machine.review(
            proposal, program, decision, note, reviewer_id, approved_amount=approved_amount
        )
        if not outcome.ok:
            return outcome

        result = outcome.value
        if result.program is not None:
            self.store.commit_acceptance(
                result.proposal,
                result.program,
                expected_status=proposal.status,
                expected_allocated=program.allocated_budget,
            )
            return succeed(result.proposal)
        return succeed(self.store.save_proposal(result.proposal, expected_status=proposal.status))

    @retry_on_conflict
    def complete_proposal(self, proposal_id: str) -> Outcome:
        proposal = self.store.load_proposal(proposal_id)
        outcome = self.machine.complete(proposal)
        if not outcome.ok:
            return outcome
        return succeed(self.store.save_proposal(outcome.value, expected_status=proposal.status))
