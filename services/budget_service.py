import logging
from datetime import date

from database.budget_dao import BudgetDAO
from database.expense_dao import ExpenseDAO
from models.budget import Budget, BudgetSnapshot
from services.budget_evaluator import evaluate, validate_monthly_limit
from utils.date_helpers import month_bounds, today
from utils.errors import ResourceNotFound

logger = logging.getLogger(__name__)


class BudgetService:
    def __init__(self, budget_dao: BudgetDAO, expense_dao: ExpenseDAO):
        self._budget_dao = budget_dao
        self._expense_dao = expense_dao

    def get_budget(self) -> Budget:
        budget = self._budget_dao.get_current()
        if budget is None:
            raise ResourceNotFound("No budget has been set")
        return budget

    def set_budget(self, monthly_limit) -> Budget:
        limit = validate_monthly_limit(monthly_limit)
        logger.info("Setting budget to: %s", limit)
        budget = self._budget_dao.upsert(limit)
        logger.info("Budget saved with id: %s", budget.id)
        return budget

    def get_budget_status(self, reference_date: date | None = None) -> BudgetSnapshot:
        """Evaluate the current budget against spending in the month of reference_date."""
        budget = self.get_budget()
        start, end = month_bounds(reference_date or today())
        total_spent = self._expense_dao.get_total_between(start, end)
        logger.debug("Spent %s of %s between %s and %s", total_spent, budget.monthly_limit, start, end)
        return evaluate(budget.monthly_limit, total_spent)
