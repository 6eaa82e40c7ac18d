"""Admin create/edit of grant programs (master_hibah)."""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Optional

from ..database.store import ProposalStore
from ..models.grant_program import GrantProgram
from ..models.outcome import ErrorKind, Outcome, fail, succeed
from .validation import validate_grant_program

logger = logging.getLogger(__name__)


def _today() -> date:
    return datetime.now(timezone.utc).date()


class GrantProgramService:
    """Validates a hibah against the budget-year window before storing it.

    Args:
        store: Persistence collaborator.
        years_back: Oldest accepted tahun_anggaran relative to today.
        years_ahead: Furthest accepted tahun_anggaran relative to today.
        today: Date source, injectable for tests.
    """

    def __init__(
        self,
        store: ProposalStore,
        years_back: int = 1,
        years_ahead: int = 5,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self.store = store
        self.years_back = years_back
        self.years_ahead = years_ahead
        self.today = today or _today

    def save_program(self, program: GrantProgram) -> Outcome:
        """Create (no id) or edit a hibah.

        Returns:
            Outcome with the stored GrantProgram, or ValidationError carrying
            every field error at once. Nothing is written on refusal.
        """
        validation = validate_grant_program(
            program, self.today(), years_back=self.years_back, years_ahead=self.years_ahead
        )
        if not validation.valid:
            logger.info(
                "hibah=%s result=invalid fields=%s", program.id, ",".join(sorted(validation.errors))
            )
            return fail(
                ErrorKind.VALIDATION_ERROR,
                "Data hibah tidak valid",
                field_errors=validation.errors,
            )

        saved = self.store.save_grant_program(program)
        logger.info("hibah=%s result=saved", saved.id)
        return succeed(saved)
