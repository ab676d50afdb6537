import csv
import io
import logging
from datetime import date

from matplotlib.figure import Figure

from models.expense import CategorySummary, Expense
from services.expense_service import ExpenseService
from utils.constants import CATEGORY_COLORS, CSV_HEADER, DEFAULT_CATEGORY_COLOR
from utils.currency import format_currency
from utils.date_helpers import format_date, friendly_month

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, expense_service: ExpenseService):
        self._expenses = expense_service

    def export_rows(self, expenses: list[Expense]) -> list[list[str]]:
        """Return rows suitable for CSV export, header first."""
        rows = [list(CSV_HEADER)]
        for e in expenses:
            rows.append([
                format_date(e.date),
                f"{e.amount:.2f}",
                e.category_name,
                e.description or "",
            ])
        return rows

    def expenses_to_csv(self, expenses: list[Expense]) -> str:
        """CSV text for the given expenses; empty string when there are none."""
        if not expenses:
            return ""
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerows(self.export_rows(expenses))
        return buf.getvalue()

    def export_expenses_csv(self, path: str, expenses: list[Expense] | None = None) -> int:
        """Write expenses (default: all) to path. Returns the number of rows written."""
        if expenses is None:
            expenses = self._expenses.get_all()
        if not expenses:
            logger.info("No expenses to export")
            return 0
        with open(path, "w", newline="", encoding="utf-8") as f:
            f.write(self.expenses_to_csv(expenses))
        logger.info("Exported %d expenses to %s", len(expenses), path)
        return len(expenses)

    def summary_lines(self, reference_date: date | None = None) -> list[str]:
        """Human-readable monthly total and per-category totals."""
        monthly = self._expenses.get_monthly_summary(reference_date)
        lines = [
            f"{friendly_month(monthly.month, monthly.year)}: {format_currency(monthly.total)}"
        ]
        for item in self._expenses.get_category_summary():
            lines.append(f"  {item.category}: {format_currency(item.total)}")
        return lines

    def render_category_chart(
        self, path: str, summary: list[CategorySummary] | None = None
    ) -> None:
        """Save a bar chart of spending by category to path (PNG)."""
        if summary is None:
            summary = self._expenses.get_category_summary()
        fig = Figure(figsize=(6, 4), dpi=100, tight_layout=True)
        ax = fig.add_subplot(111)
        ax.set_title("Spending by Category")

        if not summary:
            ax.text(0.5, 0.5, "No spending data available yet.", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            ax.set_xticks([])
            ax.set_yticks([])
        else:
            labels = [s.category for s in summary]
            totals = [float(s.total) for s in summary]
            colors = [CATEGORY_COLORS.get(s.category, DEFAULT_CATEGORY_COLOR) for s in summary]
            x = list(range(len(labels)))
            ax.bar(x, totals, color=colors)
            ax.set_xticks(x)
            ax.set_xticklabels(labels, rotation=30, ha="right")
            ax.yaxis.set_major_formatter(
                lambda v, _: f"{v/1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
            )

        fig.savefig(path, format="png")
        logger.info("Saved category chart to %s", path)
