"""Grant program (hibah) rules: effective status, validation, listing."""

from .catalog import ProgramStatistics, filter_programs, summarize_proposals
from .service import GrantProgramService
from .status import GrantStatus, can_submit_proposal, grant_status
from .validation import validate_grant_program

__all__ = [
    "GrantProgramService",
    "GrantStatus",
    "ProgramStatistics",
    "can_submit_proposal",
    "filter_programs",
    "grant_status",
    "summarize_proposals",
    "validate_grant_program",
]
