import argparse
import logging
import sys

from database.db_manager import DatabaseManager
from database.category_dao import CategoryDAO
from database.expense_dao import ExpenseDAO
from database.budget_dao import BudgetDAO
from database.recurring_dao import RecurringDAO

from services.category_service import CategoryService
from services.expense_service import ExpenseService
from services.budget_service import BudgetService
from services.recurring_service import RecurringService
from services.report_service import ReportService

from utils.app_config import get_db_folder, get_log_level, load_config
from utils.constants import APP_NAME
from utils.currency import format_currency
from utils.date_helpers import format_display_date, parse_date
from utils.errors import ExpenseTrackerError, ResourceNotFound
from utils.log import configure_logging

logger = logging.getLogger(__name__)


class Services:
    """Wires DAOs and services around one open database."""

    def __init__(self, db: DatabaseManager):
        self.db = db
        category_dao = CategoryDAO(db)
        expense_dao = ExpenseDAO(db)
        budget_dao = BudgetDAO(db)
        recurring_dao = RecurringDAO(db)

        self.categories = CategoryService(category_dao)
        self.expenses = ExpenseService(expense_dao, category_dao)
        self.budget = BudgetService(budget_dao, expense_dao)
        self.recurring = RecurringService(recurring_dao, expense_dao, category_dao)
        self.reports = ReportService(self.expenses)


def _date_arg(value: str):
    d = parse_date(value)
    if d is None:
        raise argparse.ArgumentTypeError(f"not a date: {value!r} (expected YYYY-MM-DD)")
    return d


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="expense-tracker", description=APP_NAME)
    parser.add_argument("--db-folder", help="directory holding the database file")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("process", help="materialize due recurring expenses")
    p.add_argument("--date", type=_date_arg, help="reference date (default: today)")

    p = sub.add_parser("status", help="show budget status for the month")
    p.add_argument("--date", type=_date_arg, help="any date in the month (default: today)")

    p = sub.add_parser("set-budget", help="set the monthly spending limit")
    p.add_argument("limit")

    p = sub.add_parser("summary", help="monthly total and spending per category")
    p.add_argument("--date", type=_date_arg)

    p = sub.add_parser("upcoming", help="preview upcoming occurrences of a recurring expense")
    p.add_argument("recurring_id", type=int)
    p.add_argument("--count", type=int, default=5)

    p = sub.add_parser("export", help="export expenses to CSV")
    p.add_argument("path")
    p.add_argument("--category", action="append", dest="categories")
    p.add_argument("--start", type=_date_arg)
    p.add_argument("--end", type=_date_arg)

    p = sub.add_parser("chart", help="save a spending-by-category chart (PNG)")
    p.add_argument("path")
    return parser


def run(args: argparse.Namespace, services: Services) -> int:
    if args.command == "process":
        created = services.recurring.process_due(args.date)
        for e in created:
            print(f"{format_display_date(e.date)}  {format_currency(e.amount):>12}  "
                  f"{e.category_name}  {e.description}")
        print(f"{len(created)} recurring expense(s) created.")

    elif args.command == "status":
        snap = services.budget.get_budget_status(args.date)
        print(f"Limit:     {format_currency(snap.monthly_limit)}")
        print(f"Spent:     {format_currency(snap.total_spent)}")
        print(f"Remaining: {format_currency(snap.remaining)}")
        print(f"Used:      {snap.percentage_used:.1f}%  [{snap.status.value}]")

    elif args.command == "set-budget":
        budget = services.budget.set_budget(args.limit)
        print(f"Monthly limit set to {format_currency(budget.monthly_limit)}")

    elif args.command == "summary":
        for line in services.reports.summary_lines(args.date):
            print(line)

    elif args.command == "upcoming":
        for d in services.recurring.preview(args.recurring_id, args.count):
            print(format_display_date(d))

    elif args.command == "export":
        expenses = services.expenses.get_filtered(args.categories, args.start, args.end)
        count = services.reports.export_expenses_csv(args.path, expenses)
        print(f"Exported {count} expense(s) to {args.path}")

    elif args.command == "chart":
        services.reports.render_category_chart(args.path)
        print(f"Chart saved to {args.path}")

    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # ── Bootstrap: pre-DB config ──────────────────────────────────────────────
    config = load_config()
    configure_logging(args.log_level or get_log_level(config))

    # ── Database ─────────────────────────────────────────────────────────────
    db = DatabaseManager.open(db_folder=args.db_folder or get_db_folder(config))
    try:
        return run(args, Services(db))
    except (ExpenseTrackerError, ResourceNotFound) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
