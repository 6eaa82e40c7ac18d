"""Hibah listing helpers: filtering and per-program proposal statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..models.grant_program import GrantProgram
from ..models.proposal import Proposal, ProposalStatus


def filter_programs(
    programs: Iterable[GrantProgram],
    category: Optional[str] = None,
    budget_year: Optional[int] = None,
    active_only: bool = False,
    query: Optional[str] = None,
) -> list[GrantProgram]:
    """Filter by category, budget year, active flag and case-insensitive name search."""
    needle = query.lower() if query else None
    result = []
    for program in programs:
        if category is not None and program.category != category:
            continue
        if budget_year is not None and program.budget_year != budget_year:
            continue
        if active_only and not program.is_active:
            continue
        if needle and needle not in program.name.lower():
            continue
        result.append(program)
    return result


@dataclass
class ProgramStatistics:
    """Proposal counts per status and total requested budget for one hibah."""

    grant_program_id: str
    total_proposals: int = 0
    by_status: dict[ProposalStatus, int] = field(
        default_factory=lambda: {status: 0 for status in ProposalStatus}
    )
    total_requested: int = 0

    def count(self, status: ProposalStatus) -> int:
        return self.by_status[status]


def summarize_proposals(proposals: Iterable[Proposal]) -> dict[str, ProgramStatistics]:
    """Group proposals by grant program and tally them."""
    stats: dict[str, ProgramStatistics] = {}
    for proposal in proposals:
        entry = stats.get(proposal.grant_program_id)
        if entry is None:
            entry = stats[proposal.grant_program_id] = ProgramStatistics(proposal.grant_program_id)
        entry.total_proposals += 1
        entry.by_status[proposal.status] += 1
        entry.total_requested += proposal.requested_amount or 0
    return stats
