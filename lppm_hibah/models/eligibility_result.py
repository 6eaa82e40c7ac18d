"""EligibilityResult - output of the team-size eligibility check."""

from enum import Enum
from pydantic import BaseModel, Field


class ReasonCode(str, Enum):
    TOO_FEW_MEMBERS = "TooFewMembers"
    TOO_MANY_MEMBERS = "TooManyMembers"


class EligibilityReason(BaseModel):
    """A single failed bound, with the shortfall or excess."""

    code: ReasonCode
    count: int = Field(..., description="Members to add (too few) or remove (too many)")
    bound: int = Field(..., description="The violated min or max")
    message: str


class EligibilityResult(BaseModel):
    """Whether a team may submit a proposal."""

    eligible: bool
    member_count: int = Field(..., description="Accepted, active members (lead included)")
    reasons: list[EligibilityReason] = Field(default_factory=list)
