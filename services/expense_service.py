import logging
from datetime import date

from database.category_dao import CategoryDAO
from database.expense_dao import ExpenseDAO
from models.expense import CategorySummary, Expense, MonthlySummary
from utils.constants import DESCRIPTION_MAX_LENGTH
from utils.currency import to_decimal
from utils.date_helpers import month_bounds, parse_date, today
from utils.errors import ResourceNotFound, ValidationError

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(self, expense_dao: ExpenseDAO, category_dao: CategoryDAO):
        self._dao = expense_dao
        self._category_dao = category_dao

    def get_all(self) -> list[Expense]:
        logger.debug("Fetching all expenses")
        return self._dao.get_all()

    def get_filtered(
        self,
        category_names: list[str] | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Expense]:
        """Filter by category names and/or date range.

        The date range only applies when both bounds are given.
        """
        logger.debug(
            "Fetching filtered expenses - categories: %s, startDate: %s, endDate: %s",
            category_names, start_date, end_date,
        )
        if start_date is None or end_date is None:
            start_date = end_date = None
        return self._dao.get_filtered(category_names or None, start_date, end_date)

    def get_by_id(self, expense_id: int) -> Expense:
        expense = self._dao.get_by_id(expense_id)
        if expense is None:
            raise ResourceNotFound(f"Expense not found with id: {expense_id}")
        return expense

    def create(self, amount, category_id: int, date_, description: str = "") -> Expense:
        amount, expense_date, description = self._validate(amount, category_id, date_, description)
        expense = self._dao.create(amount, category_id, expense_date, description)
        logger.info("Created expense with id: %s", expense.id)
        return expense

    def update(self, expense_id: int, amount, category_id: int, date_, description: str = "") -> Expense:
        self.get_by_id(expense_id)
        amount, expense_date, description = self._validate(amount, category_id, date_, description)
        expense = self._dao.update(expense_id, amount, category_id, expense_date, description)
        logger.info("Updated expense with id: %s", expense_id)
        return expense

    def delete(self, expense_id: int):
        self.get_by_id(expense_id)
        self._dao.delete(expense_id)
        logger.info("Deleted expense with id: %s", expense_id)

    def get_category_summary(self) -> list[CategorySummary]:
        return self._dao.get_total_by_category()

    def get_monthly_summary(self, reference_date: date | None = None) -> MonthlySummary:
        ref = reference_date or today()
        start, end = month_bounds(ref)
        return MonthlySummary(
            total=self._dao.get_total_between(start, end),
            month=ref.month,
            year=ref.year,
        )

    def _validate(self, amount, category_id, date_, description):
        try:
            amount = to_decimal(amount)
        except ValueError:
            raise ValidationError(f"Amount must be a number, got {amount!r}") from None
        if amount <= 0:
            raise ValidationError("Amount must be greater than 0.")
        if self._category_dao.get_by_id(category_id) is None:
            raise ResourceNotFound(f"Category not found with id: {category_id}")
        expense_date = date_ if isinstance(date_, date) else parse_date(date_)
        if expense_date is None:
            raise ValidationError(f"Invalid date: {date_!r}")
        description = (description or "").strip()
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters."
            )
        return amount, expense_date, description
