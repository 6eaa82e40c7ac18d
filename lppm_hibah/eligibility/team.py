"""Team-size eligibility for proposal submission.

Only accepted members on active accounts count (the ketua included).
The [min, max] window is a submission-time policy: teams may exist at any
size, but cannot submit outside it.
"""

import logging
from pydantic import BaseModel, model_validator

from ..models.eligibility_result import EligibilityReason, EligibilityResult, ReasonCode
from ..models.outcome import ErrorKind, Outcome, fail, succeed
from ..models.team import MemberStatus, Team

logger = logging.getLogger(__name__)


class TeamSizePolicy(BaseModel, frozen=True):
    """Inclusive bounds on accepted members."""

    min_members: int = 5
    max_members: int = 7

    @model_validator(mode="after")
    def _bounds_ordered(self) -> "TeamSizePolicy":
        if self.min_members < 1 or self.min_members > self.max_members:
            raise ValueError(
                f"Invalid team size policy: min={self.min_members}, max={self.max_members}"
            )
        return self


DEFAULT_TEAM_POLICY = TeamSizePolicy()


class TeamEligibility:
    """Evaluates team composition against a TeamSizePolicy."""

    def __init__(self, policy: TeamSizePolicy = DEFAULT_TEAM_POLICY) -> None:
        self.policy = policy

    def evaluate(self, team: Team) -> EligibilityResult:
        """Check accepted-member count against the policy bounds.

        Args:
            team: Team with its member list.

        Returns:
            EligibilityResult; `reasons` carries the exact shortfall/excess.
        """
        n = len(team.accepted_members)
        reasons: list[EligibilityReason] = []

        if n < self.policy.min_members:
            shortfall = self.policy.min_members - n
            reasons.append(
                EligibilityReason(
                    code=ReasonCode.TOO_FEW_MEMBERS,
                    count=shortfall,
                    bound=self.policy.min_members,
                    message=(
                        f"Tim harus memiliki minimal {self.policy.min_members} anggota. "
                        f"Saat ini tim Anda memiliki {n} anggota. "
                        f"Tambahkan {shortfall} anggota lagi."
                    ),
                )
            )

        if n > self.policy.max_members:
            excess = n - self.policy.max_members
            reasons.append(
                EligibilityReason(
                    code=ReasonCode.TOO_MANY_MEMBERS,
                    count=excess,
                    bound=self.policy.max_members,
                    message=(
                        f"Tim tidak boleh lebih dari {self.policy.max_members} anggota. "
                        f"Saat ini tim Anda memiliki {n} anggota. "
                        f"Kurangi {excess} anggota."
                    ),
                )
            )

        eligible = not reasons
        logger.debug("team_eligibility team=%s accepted=%d eligible=%s", team.id, n, eligible)
        return EligibilityResult(eligible=eligible, member_count=n, reasons=reasons)

    def check_attachable(self, team: Team) -> Outcome:
        """An archived team cannot be attached to a new proposal."""
        if team.is_archived:
            return fail(
                ErrorKind.VALIDATION_ERROR,
                "Tim sudah diarsipkan dan tidak dapat digunakan untuk proposal baru",
                field_errors={"tim_id": "Tim sudah diarsipkan"},
                team_id=team.id,
            )
        return succeed(team)

    def check_invitation_capacity(self, team: Team) -> Outcome:
        """Refuse new invitations once pending + accepted members reach the max."""
        occupied = sum(
            1 for m in team.members if m.status in (MemberStatus.PENDING, MemberStatus.ACCEPTED)
        )
        if occupied >= self.policy.max_members:
            return fail(
                ErrorKind.VALIDATION_ERROR,
                f"Tim sudah mencapai batas maksimal {self.policy.max_members} anggota",
                team_id=team.id,
                occupied=occupied,
            )
        return succeed(team)
