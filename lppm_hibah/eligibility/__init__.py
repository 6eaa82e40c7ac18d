"""Team eligibility rules for proposal submission."""

from .team import DEFAULT_TEAM_POLICY, TeamEligibility, TeamSizePolicy

__all__ = ["DEFAULT_TEAM_POLICY", "TeamEligibility", "TeamSizePolicy"]
