"""Shared Pydantic models for the hibah rule engine."""

from .proposal import Proposal, ProposalStatus, FUNDED_STATUSES
from .grant_program import GrantProgram
from .team import Team, TeamMember, MemberStatus
from .disbursement_letter import DisbursementLetter
from .review_score import ReviewScore, ReviewVerdict
from .eligibility_result import EligibilityResult, EligibilityReason, ReasonCode
from .validation_result import ValidationResult
from .outcome import ErrorKind, Outcome, RuleViolation, fail, succeed

__all__ = [
    "Proposal",
    "ProposalStatus",
    "FUNDED_STATUSES",
    "GrantProgram",
    "Team",
    "TeamMember",
    "MemberStatus",
    "DisbursementLetter",
    "ReviewScore",
    "ReviewVerdict",
    "EligibilityResult",
    "EligibilityReason",
    "ReasonCode",
    "ValidationResult",
    "ErrorKind",
    "Outcome",
    "RuleViolation",
    "fail",
    "succeed",
]
