from datetime import date
from decimal import Decimal

from models.expense import CategorySummary


def test_csv_quotes_commas_and_quotes(report_service, expense_service, groceries):
    expense_service.create("12.5", groceries.id, date(2025, 1, 2), 'Milk, eggs and "bread"')
    text = report_service.expenses_to_csv(expense_service.get_all())
    assert text.splitlines() == [
        "Date,Amount,Category,Description",
        '2025-01-02,12.50,Groceries,"Milk, eggs and ""bread"""',
    ]


def test_empty_export_writes_nothing(report_service, tmp_path):
    path = tmp_path / "out.csv"
    assert report_service.export_expenses_csv(str(path), []) == 0
    assert not path.exists()


def test_export_to_file(report_service, expense_service, groceries, tmp_path):
    expense_service.create("3", groceries.id, date(2025, 1, 2))
    expense_service.create("4", groceries.id, date(2025, 1, 3))
    path = tmp_path / "expenses.csv"
    assert report_service.export_expenses_csv(str(path)) == 2
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Date,Amount,Category,Description"
    assert len(lines) == 3


def test_summary_lines(report_service, expense_service, groceries):
    expense_service.create("1234.5", groceries.id, date(2025, 2, 10))
    lines = report_service.summary_lines(date(2025, 2, 1))
    assert lines == ["February 2025: $1,234.50", "  Groceries: $1,234.50"]


def test_render_chart(report_service, tmp_path):
    path = tmp_path / "chart.png"
    report_service.render_category_chart(
        str(path), [CategorySummary("Groceries", Decimal("10")), CategorySummary("Pets", Decimal("5"))]
    )
    assert path.read_bytes().startswith(b"\x89PNG")


def test_render_chart_without_data(report_service, tmp_path):
    path = tmp_path / "empty.png"
    report_service.render_category_chart(str(path), [])
    assert path.stat().st_size > 0
