"""Grant budget ledger."""

from .ledger import BudgetLedger, validate_requested_amount

__all__ = ["BudgetLedger", "validate_requested_amount"]
