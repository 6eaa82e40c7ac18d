"""Grant budget ledger: available funds, caps and allocation.

Amounts are whole Rupiah (int). The ledger never mutates a GrantProgram in
place; `allocate` returns an updated copy for the caller to persist.
"""

import logging
from typing import Optional

from ..models.grant_program import GrantProgram
from ..models.outcome import ErrorKind, Outcome, fail, succeed

logger = logging.getLogger(__name__)


def _rupiah(amount: int) -> str:
    """Format as Indonesian Rupiah, e.g. Rp 1.000.000."""
    return "Rp " + f"{amount:,}".replace(",", ".")


class BudgetLedger:
    """Arithmetic over a program's total / allocated / available funds."""

    def available_budget(self, program: GrantProgram) -> int:
        return program.total_budget - program.allocated_budget

    def max_fundable_proposals(self, program: GrantProgram) -> Optional[int]:
        """How many more cap-sized proposals fit; None when uncapped (unbounded)."""
        if not program.per_proposal_cap:
            return None
        return max(self.available_budget(program), 0) // program.per_proposal_cap

    def can_allocate(self, program: GrantProgram, amount: int) -> bool:
        if amount <= 0:
            return False
        if program.per_proposal_cap and amount > program.per_proposal_cap:
            return False
        return amount <= self.available_budget(program)

    def allocate(self, program: GrantProgram, amount: int) -> Outcome:
        """Reserve `amount` from the program.

        Not idempotent: allocating the same amount twice reserves it twice.
        De-duplication of retried requests belongs to the caller.

        Returns:
            Outcome whose value is the program with `allocated_budget`
            increased, or a BudgetExceeded violation (nothing applied).
        """
        if amount <= 0:
            return fail(
                ErrorKind.VALIDATION_ERROR,
                "Anggaran harus lebih dari 0",
                field_errors={"anggaran_disetujui": "Anggaran harus lebih dari 0"},
                amount=amount,
            )
        if not self.can_allocate(program, amount):
            violation = self.explain_refusal(program, amount)
            logger.info(
                "allocate program=%s amount=%d result=refused available=%d",
                program.id,
                amount,
                self.available_budget(program),
            )
            return violation

        updated = program.model_copy(
            update={"allocated_budget": program.allocated_budget + amount}
        )
        logger.info(
            "allocate program=%s amount=%d result=success allocated=%d",
            program.id,
            amount,
            updated.allocated_budget,
        )
        return succeed(updated)

    def explain_refusal(self, program: GrantProgram, amount: int) -> Outcome:
        """BudgetExceeded violation naming the bound that was hit."""
        available = self.available_budget(program)
        cap = program.per_proposal_cap
        if cap and amount > cap:
            return fail(
                ErrorKind.BUDGET_EXCEEDED,
                f"Anggaran melebihi batas maksimal per proposal {_rupiah(cap)}",
                amount=amount,
                per_proposal_cap=cap,
                available=available,
            )
        return fail(
            ErrorKind.BUDGET_EXCEEDED,
            f"Anggaran melebihi sisa anggaran hibah {_rupiah(max(available, 0))}",
            amount=amount,
            per_proposal_cap=cap,
            available=available,
        )

    def utilization(self, program: GrantProgram) -> float:
        """Allocated share of the total, in percent.

        Precondition: program.total_budget > 0.
        """
        return program.allocated_budget / program.total_budget * 100


def validate_requested_amount(requested: int, cap: Optional[int]) -> Optional[str]:
    """Return an error message for a proposal's requested budget, or None."""
    if requested <= 0:
        return "Anggaran harus lebih dari 0"
    if cap and requested > cap:
        return f"Anggaran melebihi batas maksimal {_rupiah(cap)}"
    return None
