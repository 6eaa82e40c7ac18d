"""Proposal lifecycle state machine.

Owns `Proposal.status`. Every operation is a pure function of its inputs plus
the injected clock: it returns an Outcome holding an updated copy and never
mutates the proposal or program it was given. Persisting the copy (and, for
acceptance, the ledger change with it) is the caller's job.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import BaseModel

from ..budget.ledger import BudgetLedger
from ..eligibility.team import TeamEligibility
from ..models.grant_program import GrantProgram
from ..models.outcome import ErrorKind, Outcome, fail, succeed
from ..models.proposal import Proposal, ProposalStatus
from ..models.team import Team

logger = logging.getLogger(__name__)

S = ProposalStatus

# Legal edges. Every status has an entry; terminal statuses map to the empty set.
TRANSITIONS: dict[ProposalStatus, frozenset[ProposalStatus]] = {
    S.DRAFT: frozenset({S.SUBMITTED}),
    S.SUBMITTED: frozenset({S.REVIEW, S.REJECTED}),
    S.REVIEW: frozenset({S.REVISION, S.ACCEPTED, S.REJECTED}),
    S.REVISION: frozenset({S.SUBMITTED}),
    S.ACCEPTED: frozenset({S.COMPLETED}),
    S.REJECTED: frozenset(),
    S.COMPLETED: frozenset(),
}

SUBMITTABLE_STATUSES = frozenset({S.DRAFT, S.REVISION})
REVIEWABLE_STATUSES = frozenset({S.SUBMITTED, S.REVIEW})
REVIEW_DECISIONS = frozenset({S.REVIEW, S.REVISION, S.ACCEPTED, S.REJECTED})
# Narrative fields are locked outside these
EDITABLE_STATUSES = frozenset({S.DRAFT, S.REVISION})


def can_transition(from_status: ProposalStatus, to_status: ProposalStatus) -> bool:
    """Pure predicate over the legal-edge table. Self-loops and unknown statuses are never legal."""
    try:
        return ProposalStatus(to_status) in TRANSITIONS[ProposalStatus(from_status)]
    except ValueError:
        return False


def next_statuses(status: ProposalStatus) -> list[ProposalStatus]:
    """Legal targets from `status`, in enum declaration order."""
    allowed = TRANSITIONS[ProposalStatus(status)]
    return [s for s in ProposalStatus if s in allowed]


def is_terminal(status: ProposalStatus) -> bool:
    return not TRANSITIONS[ProposalStatus(status)]


def can_edit_narrative(status: ProposalStatus) -> bool:
    return ProposalStatus(status) in EDITABLE_STATUSES


def can_delete(status: ProposalStatus) -> bool:
    """Proposals may only be physically deleted while still a draft."""
    return ProposalStatus(status) == S.DRAFT


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _invalid_transition(proposal: Proposal, target: ProposalStatus) -> Outcome:
    allowed = next_statuses(proposal.status)
    allowed_text = ", ".join(s.value for s in allowed) if allowed else "none (terminal state)"
    return fail(
        ErrorKind.INVALID_TRANSITION,
        f"Cannot transition from '{proposal.status.value}' to '{target.value}'. "
        f"Allowed transitions: {allowed_text}",
        from_status=proposal.status.value,
        to_status=target.value,
    )


class ReviewResult(BaseModel):
    """Reviewed proposal plus, for acceptance, the program with the allocation applied."""

    proposal: Proposal
    program: Optional[GrantProgram] = None


class ProposalStateMachine:
    """Enforces legal status transitions, guarded by team and budget rules."""

    def __init__(
        self,
        eligibility: Optional[TeamEligibility] = None,
        ledger: Optional[BudgetLedger] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.eligibility = eligibility or TeamEligibility()
        self.ledger = ledger or BudgetLedger()
        self.clock = clock

    can_transition = staticmethod(can_transition)

    def submit(self, proposal: Proposal, team: Team) -> Outcome:
        """Move a draft (or revised) proposal to `submitted`.

        Re-submission after revision re-runs every check.

        Returns:
            Outcome with the submitted proposal, or InvalidTransition /
            TeamIneligible / MissingDocument.
        """
        if proposal.status not in SUBMITTABLE_STATUSES:
            return self._refused(proposal, _invalid_transition(proposal, S.SUBMITTED))

        if proposal.team_id and team.id and proposal.team_id != team.id:
            return self._refused(
                proposal,
                fail(
                    ErrorKind.VALIDATION_ERROR,
                    "Tim tidak sesuai dengan tim proposal",
                    field_errors={"tim_id": "Tim tidak sesuai"},
                    proposal_team_id=proposal.team_id,
                    team_id=team.id,
                ),
            )

        result = self.eligibility.evaluate(team)
        if not result.eligible:
            reason = result.reasons[0]
            return self._refused(
                proposal,
                fail(
                    ErrorKind.TEAM_INELIGIBLE,
                    reason.message,
                    member_count=result.member_count,
                    reason=reason.code.value,
                    bound=reason.bound,
                    count=reason.count,
                ),
            )

        if not proposal.has_document:
            return self._refused(
                proposal,
                fail(
                    ErrorKind.MISSING_DOCUMENT,
                    "Dokumen proposal belum diunggah",
                    field_errors={"dokumen_proposal_url": "Dokumen proposal wajib diunggah"},
                ),
            )

        updated = proposal.model_copy(
            update={
                "status": S.SUBMITTED,
                "submitted_at": self.clock(),
                "evaluation_note": None,
            }
        )
        self._log_transition(proposal, S.SUBMITTED)
        return succeed(updated)

    def review(
        self,
        proposal: Proposal,
        program: GrantProgram,
        decision: ProposalStatus,
        note: Optional[str],
        reviewer_id: Optional[str],
        approved_amount: Optional[int] = None,
    ) -> Outcome:
        """Apply a reviewer decision (review / revision / accepted / rejected).

        For `accepted` the approved amount is validated and allocated against
        the program's ledger; the returned ReviewResult carries both updated
        records so they can be committed as one unit. On any failure neither
        record changes.
        """
        try:
            decision = ProposalStatus(decision)
        except ValueError:
            return self._refused(
                proposal,
                fail(
                    ErrorKind.INVALID_TRANSITION,
                    f"Unknown review decision '{decision}'",
                    from_status=proposal.status.value,
                    to_status=str(decision),
                ),
            )

        if (
            decision not in REVIEW_DECISIONS
            or proposal.status not in REVIEWABLE_STATUSES
            or not can_transition(proposal.status, decision)
        ):
            return self._refused(proposal, _invalid_transition(proposal, decision))

        update = {
            "status": decision,
            "reviewer_id": reviewer_id,
            "reviewed_at": self.clock(),
            "evaluation_note": note,
        }
        updated_program = None

        if decision == S.ACCEPTED:
            if approved_amount is None or approved_amount <= 0:
                return self._refused(
                    proposal,
                    fail(
                        ErrorKind.VALIDATION_ERROR,
                        "Anggaran disetujui wajib diisi dan harus lebih dari 0",
                        field_errors={"anggaran_disetujui": "Anggaran harus lebih dari 0"},
                        approved_amount=approved_amount,
                    ),
                )
            if program.id and program.id != proposal.grant_program_id:
                return self._refused(
                    proposal,
                    fail(
                        ErrorKind.VALIDATION_ERROR,
                        "Hibah tidak sesuai dengan hibah proposal",
                        proposal_program_id=proposal.grant_program_id,
                        program_id=program.id,
                    ),
                )
            allocation = self.ledger.allocate(program, approved_amount)
            if not allocation.ok:
                return self._refused(proposal, allocation)
            updated_program = allocation.value
            update["approved_amount"] = approved_amount
        elif approved_amount is not None:
            logger.debug(
                "review proposal=%s decision=%s ignoring approved_amount=%s",
                proposal.id,
                decision.value,
                approved_amount,
            )

        updated = proposal.model_copy(update=update)
        self._log_transition(proposal, decision)
        return succeed(ReviewResult(proposal=updated, program=updated_program))

    def complete(self, proposal: Proposal) -> Outcome:
        """Close out an accepted proposal."""
        if proposal.status != S.ACCEPTED:
            return self._refused(proposal, _invalid_transition(proposal, S.COMPLETED))
        updated = proposal.model_copy(update={"status": S.COMPLETED})
        self._log_transition(proposal, S.COMPLETED)
        return succeed(updated)

    # ------------------------------------------------------------------
    # Logging helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _log_transition(proposal: Proposal, target: ProposalStatus) -> None:
        logger.info(
            "transition proposal=%s from=%s to=%s result=success",
            proposal.id,
            proposal.status.value,
            target.value,
        )

    @staticmethod
    def _refused(proposal: Proposal, outcome: Outcome) -> Outcome:
        logger.info(
            "transition proposal=%s from=%s result=refused kind=%s",
            proposal.id,
            proposal.status.value,
            outcome.kind.value if outcome.kind else None,
        )
        return outcome
