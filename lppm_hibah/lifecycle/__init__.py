"""Proposal lifecycle: state machine, field validation and the persisting service."""

from .service import ProposalLifecycleService
from .state_machine import (
    EDITABLE_STATUSES,
    REVIEW_DECISIONS,
    TRANSITIONS,
    ProposalStateMachine,
    ReviewResult,
    can_delete,
    can_edit_narrative,
    can_transition,
    is_terminal,
    next_statuses,
)
from .validation import validate_proposal

__all__ = [
    "ProposalStateMachine",
    "ProposalLifecycleService",
    "ReviewResult",
    "TRANSITIONS",
    "REVIEW_DECISIONS",
    "EDITABLE_STATUSES",
    "can_transition",
    "next_statuses",
    "is_terminal",
    "can_edit_narrative",
    "can_delete",
    "validate_proposal",
]
