import pytest

from database.db_manager import DatabaseManager
from database.budget_dao import BudgetDAO
from database.category_dao import CategoryDAO
from database.expense_dao import ExpenseDAO
from database.recurring_dao import RecurringDAO
from services.budget_service import BudgetService
from services.category_service import CategoryService
from services.expense_service import ExpenseService
from services.recurring_service import RecurringService
from services.report_service import ReportService


@pytest.fixture
def db():
    manager = DatabaseManager(":memory:")
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def category_dao(db):
    return CategoryDAO(db)


@pytest.fixture
def expense_dao(db):
    return ExpenseDAO(db)


@pytest.fixture
def groceries(category_dao):
    return category_dao.get_by_name("Groceries")


@pytest.fixture
def utilities(category_dao):
    return category_dao.get_by_name("Utilities")


@pytest.fixture
def category_service(category_dao):
    return CategoryService(category_dao)


@pytest.fixture
def expense_service(expense_dao, category_dao):
    return ExpenseService(expense_dao, category_dao)


@pytest.fixture
def budget_service(db, expense_dao):
    return BudgetService(BudgetDAO(db), expense_dao)


@pytest.fixture
def recurring_service(db, expense_dao, category_dao):
    return RecurringService(RecurringDAO(db), expense_dao, category_dao)


@pytest.fixture
def report_service(expense_service):
    return ReportService(expense_service)
