"""Tests for the grant budget ledger."""

import logging

import pytest

from lppm_hibah.budget import BudgetLedger, validate_requested_amount
from lppm_hibah.models import ErrorKind


@pytest.fixture
def ledger():
    return BudgetLedger()


@pytest.fixture
def nearly_spent(program):
    """total 1M, cap 100M, allocated 950M -> 50M available."""
    return program.model_copy(update={"allocated_budget": 950_000_000})


class TestArithmetic:
    def test_available_budget(self, ledger, nearly_spent):
        assert ledger.available_budget(nearly_spent) == 50_000_000

    def test_max_fundable_proposals(self, ledger, program, nearly_spent):
        assert ledger.max_fundable_proposals(program) == 10
        assert ledger.max_fundable_proposals(nearly_spent) == 0

    @pytest.mark.parametrize("cap", [None, 0])
    def test_max_fundable_unbounded_without_cap(self, ledger, program, cap):
        uncapped = program.model_copy(update={"per_proposal_cap": cap})
        assert ledger.max_fundable_proposals(uncapped) is None

    def test_utilization(self, ledger, nearly_spent):
        assert ledger.utilization(nearly_spent) == pytest.approx(95.0)


class TestCanAllocate:
    def test_exceeds_available(self, ledger, nearly_spent):
        assert ledger.can_allocate(nearly_spent, 60_000_000) is False

    def test_exactly_available(self, ledger, nearly_spent):
        assert ledger.can_allocate(nearly_spent, 50_000_000) is True

    def test_exceeds_cap(self, ledger, program):
        assert ledger.can_allocate(program, 100_000_000) is True
        assert ledger.can_allocate(program, 100_000_001) is False

    def test_no_cap(self, ledger, program):
        uncapped = program.model_copy(update={"per_proposal_cap": None})
        assert ledger.can_allocate(uncapped, 600_000_000) is True

    @pytest.mark.parametrize("amount", [0, -1])
    def test_non_positive_amount(self, ledger, program, amount):
        assert ledger.can_allocate(program, amount) is False


class TestAllocate:
    def test_success_returns_updated_copy(self, ledger, program):
        outcome = ledger.allocate(program, 40_000_000)
        assert outcome.ok
        assert outcome.value.allocated_budget == 40_000_000
        assert program.allocated_budget == 0

    def test_refusal_applies_nothing(self, ledger, nearly_spent):
        outcome = ledger.allocate(nearly_spent, 60_000_000)
        assert outcome.kind == ErrorKind.BUDGET_EXCEEDED
        assert outcome.value is None
        assert outcome.violation.details["available"] == 50_000_000
        assert "Rp 50.000.000" in outcome.violation.message
        assert nearly_spent.allocated_budget == 950_000_000

    def test_cap_refusal_names_cap(self, ledger, program):
        outcome = ledger.allocate(program, 150_000_000)
        assert outcome.kind == ErrorKind.BUDGET_EXCEEDED
        assert "per proposal" in outcome.violation.message

    def test_zero_amount_is_validation_error(self, ledger, program):
        assert ledger.allocate(program, 0).kind == ErrorKind.VALIDATION_ERROR

    def test_not_idempotent(self, ledger, program):
        once = ledger.allocate(program, 30_000_000).value
        twice = ledger.allocate(once, 30_000_000).value
        assert twice.allocated_budget == 60_000_000


class TestRequestedAmount:
    def test_valid(self):
        assert validate_requested_amount(50_000_000, 100_000_000) is None

    def test_non_positive(self):
        assert validate_requested_amount(0, None) == "Anggaran harus lebih dari 0"

    def test_over_cap(self):
        assert validate_requested_amount(150_000_000, 100_000_000) == (
            "Anggaran melebihi batas maksimal Rp 100.000.000"
        )

    def test_uncapped(self):
        assert validate_requested_amount(10**12, None) is None


class TestLogging:
    def test_outcomes_logged_as_key_values(self, ledger, nearly_spent, caplog):
        with caplog.at_level(logging.INFO, logger="lppm_hibah.budget.ledger"):
            ledger.allocate(nearly_spent, 60_000_000)
            ledger.allocate(nearly_spent, 10_000_000)

        assert "amount=60000000 result=refused available=50000000" in caplog.text
        assert "amount=10000000 result=success allocated=960000000" in caplog.text
