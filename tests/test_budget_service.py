from datetime import date
from decimal import Decimal

import pytest

from models.budget import BudgetStatus
from utils.errors import InvalidBudgetLimit, ResourceNotFound


def test_status_without_budget(budget_service):
    with pytest.raises(ResourceNotFound):
        budget_service.get_budget_status()


def test_set_budget_rejects_non_positive(budget_service):
    with pytest.raises(InvalidBudgetLimit):
        budget_service.set_budget(0)
    with pytest.raises(InvalidBudgetLimit):
        budget_service.set_budget("-5")


def test_set_budget_updates_single_row(budget_service):
    first = budget_service.set_budget("1000")
    second = budget_service.set_budget("1500.50")
    assert first.id == second.id
    assert budget_service.get_budget().monthly_limit == Decimal("1500.50")


def test_status_counts_only_reference_month(budget_service, expense_service, groceries):
    budget_service.set_budget(1000)
    expense_service.create("500", groceries.id, date(2025, 3, 1))
    expense_service.create("350", groceries.id, date(2025, 3, 31))
    expense_service.create("900", groceries.id, date(2025, 2, 28))
    expense_service.create("900", groceries.id, date(2025, 4, 1))

    snap = budget_service.get_budget_status(date(2025, 3, 15))

    assert snap.total_spent == Decimal("850.00")
    assert snap.remaining == Decimal("150.00")
    assert snap.percentage_used == 85
    assert snap.status is BudgetStatus.WARNING


def test_status_reflects_new_spending(budget_service, expense_service, groceries):
    budget_service.set_budget(100)
    ref = date(2025, 6, 10)
    assert budget_service.get_budget_status(ref).status is BudgetStatus.HEALTHY
    expense_service.create("120", groceries.id, ref)
    snap = budget_service.get_budget_status(ref)
    assert snap.status is BudgetStatus.OVER_BUDGET
    assert snap.remaining == -20
