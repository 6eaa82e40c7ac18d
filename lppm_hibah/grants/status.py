"""Effective grant status, derived from the active flag and the open/close window.

This function, not a stored column, decides whether a program accepts new
proposals.
"""

from datetime import date, datetime
from enum import Enum
from typing import Union

from ..models.grant_program import GrantProgram


class GrantStatus(str, Enum):
    INACTIVE = "inactive"
    UPCOMING = "upcoming"
    ACTIVE = "active"
    CLOSED = "closed"


def _as_date(now: Union[date, datetime]) -> date:
    return now.date() if isinstance(now, datetime) else now


def grant_status(program: GrantProgram, now: Union[date, datetime]) -> GrantStatus:
    """Status of `program` on day `now` (open and close dates are inclusive)."""
    today = _as_date(now)
    if not program.is_active:
        return GrantStatus.INACTIVE
    if today < program.open_date:
        return GrantStatus.UPCOMING
    if today > program.close_date:
        return GrantStatus.CLOSED
    return GrantStatus.ACTIVE


def can_submit_proposal(program: GrantProgram, now: Union[date, datetime]) -> bool:
    return grant_status(program, now) == GrantStatus.ACTIVE
