from datetime import date
from decimal import Decimal

import pytest

from models.recurring_expense import Frequency
from utils.errors import InvalidFrequency, ResourceNotFound, ValidationError


def test_create_starts_schedule_at_start_date(recurring_service, groceries):
    r = recurring_service.create("100", groceries.id, "monthly", "2025-01-15", "Rent")
    assert r.amount == Decimal("100.00")
    assert r.frequency is Frequency.MONTHLY
    assert r.next_occurrence == date(2025, 1, 15)
    assert r.active
    assert r.category_name == "Groceries"


def test_create_validation(recurring_service, groceries):
    with pytest.raises(InvalidFrequency):
        recurring_service.create("10", groceries.id, "hourly", "2025-01-01")
    with pytest.raises(ValidationError):
        recurring_service.create("0", groceries.id, "DAILY", "2025-01-01")
    with pytest.raises(ValidationError):
        recurring_service.create("10", groceries.id, "DAILY", "2025-01-10", end_date="2025-01-01")
    with pytest.raises(ValidationError):
        recurring_service.create("10", groceries.id, "DAILY", "2025-01-01", "x" * 501)
    with pytest.raises(ResourceNotFound):
        recurring_service.create("10", 9999, "DAILY", "2025-01-01")


def test_get_by_id_missing(recurring_service):
    with pytest.raises(ResourceNotFound):
        recurring_service.get_by_id(42)


def test_process_due_creates_expense_and_advances(recurring_service, expense_dao, groceries):
    r = recurring_service.create("25.50", groceries.id, "WEEKLY", "2025-01-01", "Veg box")

    created = recurring_service.process_due(date(2025, 1, 1))

    assert len(created) == 1
    expense = created[0]
    assert expense.amount == Decimal("25.50")
    assert expense.date == date(2025, 1, 1)
    assert expense.description == "Veg box (Recurring)"
    assert expense.recurring_expense_id == r.id
    assert recurring_service.get_by_id(r.id).next_occurrence == date(2025, 1, 8)


def test_process_due_skips_future_and_inactive(recurring_service, groceries):
    recurring_service.create("10", groceries.id, "DAILY", "2025-02-01")
    paused = recurring_service.create("10", groceries.id, "DAILY", "2025-01-01")
    recurring_service.set_active(paused.id, False)

    assert recurring_service.process_due(date(2025, 1, 15)) == []


def test_four_weekly_ticks(recurring_service, groceries):
    r = recurring_service.create("5", groceries.id, "WEEKLY", "2025-01-01")
    for tick in (date(2025, 1, 1), date(2025, 1, 8), date(2025, 1, 15), date(2025, 1, 22)):
        recurring_service.process_due(tick)
    assert recurring_service.get_by_id(r.id).next_occurrence == date(2025, 1, 29)


def test_one_occurrence_per_tick_when_behind(recurring_service, expense_dao, groceries):
    r = recurring_service.create("5", groceries.id, "DAILY", "2025-01-01")
    recurring_service.process_due(date(2025, 1, 10))
    assert len(expense_dao.get_by_recurring(r.id)) == 1
    assert recurring_service.get_by_id(r.id).next_occurrence == date(2025, 1, 2)


def test_final_occurrence_fires_once_then_pins(recurring_service, expense_dao, groceries):
    r = recurring_service.create(
        "80", groceries.id, "MONTHLY", "2025-01-01", end_date="2025-03-01"
    )
    for tick in (date(2025, 1, 1), date(2025, 2, 1), date(2025, 3, 1), date(2025, 4, 1), date(2025, 5, 1)):
        recurring_service.process_due(tick)

    fired = [e.date for e in expense_dao.get_by_recurring(r.id)]
    assert fired == [date(2025, 1, 1), date(2025, 2, 1), date(2025, 3, 1)]
    stored = recurring_service.get_by_id(r.id)
    assert stored.next_occurrence == date(2025, 3, 1)
    assert stored.last_fired == date(2025, 3, 1)


def test_extending_end_date_resumes_pinned_series(recurring_service, expense_dao, groceries):
    r = recurring_service.create(
        "80", groceries.id, "MONTHLY", "2025-01-01", end_date="2025-03-01"
    )
    for tick in (date(2025, 1, 1), date(2025, 2, 1), date(2025, 3, 1)):
        recurring_service.process_due(tick)

    updated = recurring_service.update(
        r.id, "80", groceries.id, "MONTHLY", "2025-01-01", end_date="2025-12-31"
    )
    assert updated.next_occurrence == date(2025, 4, 1)

    for tick in (date(2025, 4, 1), date(2025, 5, 1), date(2025, 6, 1)):
        recurring_service.process_due(tick)

    fired = [e.date for e in expense_dao.get_by_recurring(r.id)]
    assert fired == [
        date(2025, 1, 1), date(2025, 2, 1), date(2025, 3, 1),
        date(2025, 4, 1), date(2025, 5, 1), date(2025, 6, 1),
    ]


def test_editing_pinned_series_within_old_end_stays_pinned(recurring_service, expense_dao, groceries):
    r = recurring_service.create(
        "80", groceries.id, "MONTHLY", "2025-01-01", end_date="2025-02-01"
    )
    for tick in (date(2025, 1, 1), date(2025, 2, 1)):
        recurring_service.process_due(tick)

    updated = recurring_service.update(
        r.id, "90", groceries.id, "MONTHLY", "2025-01-01", end_date="2025-02-15"
    )
    assert updated.next_occurrence == date(2025, 2, 1)
    assert recurring_service.process_due(date(2025, 3, 1)) == []
    assert len(expense_dao.get_by_recurring(r.id)) == 2


def test_reactivation_keeps_backlog(recurring_service, groceries):
    r = recurring_service.create("5", groceries.id, "WEEKLY", "2025-01-01")
    recurring_service.set_active(r.id, False)
    back = recurring_service.set_active(r.id, True)
    assert back.active
    assert back.next_occurrence == date(2025, 1, 1)


def test_reactivation_with_fast_forward(recurring_service, groceries):
    r = recurring_service.create("5", groceries.id, "WEEKLY", "2025-01-01")
    recurring_service.set_active(r.id, False)
    back = recurring_service.set_active(r.id, True, fast_forward=True, reference_date=date(2025, 2, 1))
    assert back.next_occurrence == date(2025, 2, 5)


def test_fast_forward_past_end_date_fires_nothing(recurring_service, expense_dao, groceries):
    r = recurring_service.create(
        "5", groceries.id, "WEEKLY", "2025-01-01", end_date="2025-01-15"
    )
    recurring_service.set_active(r.id, False)
    back = recurring_service.set_active(r.id, True, fast_forward=True, reference_date=date(2025, 6, 1))

    assert back.next_occurrence == date(2025, 1, 15)
    assert back.last_fired == date(2025, 1, 15)
    assert recurring_service.process_due(date(2025, 6, 1)) == []
    assert expense_dao.get_by_recurring(r.id) == []


def test_update_keeps_next_occurrence(recurring_service, utilities, groceries):
    r = recurring_service.create("5", groceries.id, "WEEKLY", "2025-01-01")
    recurring_service.process_due(date(2025, 1, 1))

    updated = recurring_service.update(r.id, "7.25", utilities.id, "MONTHLY", "2025-01-01", "Phone")

    assert updated.frequency is Frequency.MONTHLY
    assert updated.amount == Decimal("7.25")
    assert updated.category_name == "Utilities"
    assert updated.next_occurrence == date(2025, 1, 8)


def test_update_with_later_start_moves_schedule(recurring_service, groceries):
    r = recurring_service.create("5", groceries.id, "WEEKLY", "2025-01-01")
    updated = recurring_service.update(r.id, "5", groceries.id, "WEEKLY", "2025-03-01")
    assert updated.next_occurrence == date(2025, 3, 1)


def test_delete(recurring_service, groceries):
    r = recurring_service.create("5", groceries.id, "WEEKLY", "2025-01-01")
    recurring_service.delete(r.id)
    assert recurring_service.get_all() == []
    with pytest.raises(ResourceNotFound):
        recurring_service.delete(r.id)


def test_preview(recurring_service, groceries):
    r = recurring_service.create("5", groceries.id, "MONTHLY", "2025-01-31")
    assert recurring_service.preview(r.id, 3) == [date(2025, 1, 31), date(2025, 2, 28), date(2025, 3, 28)]
