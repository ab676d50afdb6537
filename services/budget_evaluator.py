from decimal import Decimal

from models.budget import BudgetSnapshot, BudgetStatus
from utils.constants import BUDGET_OVER_PERCENT, BUDGET_WARNING_PERCENT
from utils.currency import as_decimal, to_decimal
from utils.errors import InvalidBudgetLimit

_HUNDRED = Decimal(100)


def validate_monthly_limit(limit) -> Decimal:
    """Return the limit as a Decimal, rejecting non-numeric and non-positive values."""
    try:
        value = to_decimal(limit)
    except ValueError:
        raise InvalidBudgetLimit(f"Monthly limit must be a number, got {limit!r}") from None
    if value <= 0:
        raise InvalidBudgetLimit("Monthly limit must be greater than 0.")
    return value


def classify(percentage_used: Decimal) -> BudgetStatus:
    if percentage_used >= BUDGET_OVER_PERCENT:
        return BudgetStatus.OVER_BUDGET
    if percentage_used >= BUDGET_WARNING_PERCENT:
        return BudgetStatus.WARNING
    return BudgetStatus.HEALTHY


def evaluate(monthly_limit, total_spent) -> BudgetSnapshot:
    """Derive remaining budget, percentage used and status.

    monthly_limit must already be positive (checked where the limit is set).
    percentage_used is not clamped, so 1200 spent of 1000 reports 120.
    """
    limit = as_decimal(monthly_limit)
    spent = as_decimal(total_spent)
    percentage = spent * _HUNDRED / limit
    return BudgetSnapshot(
        monthly_limit=limit,
        total_spent=spent,
        remaining=limit - spent,
        percentage_used=percentage,
        status=classify(percentage),
    )
