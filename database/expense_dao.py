from datetime import date
from decimal import Decimal
from typing import Optional

from database.db_manager import DatabaseManager
from models.expense import CategorySummary, Expense
from utils.currency import from_cents, to_cents
from utils.date_helpers import format_date, parse_date


class ExpenseDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Expense:
        return Expense(
            id=row["id"],
            amount=from_cents(row["amount_cents"]),
            category_id=row["category_id"],
            category_name=row["category_name"] if "category_name" in row.keys() else "",
            date=parse_date(row["date"]),
            description=row["description"],
            recurring_expense_id=row["recurring_expense_id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _select(self) -> str:
        return """
            SELECT e.*,
                   c.name AS category_name
            FROM expenses e
            JOIN categories c ON e.category_id = c.id
        """

    def get_all(self) -> list[Expense]:
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " ORDER BY e.date DESC, e.id DESC"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_filtered(
        self,
        category_names: list[str] | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Expense]:
        conn = self._db.get_connection()
        sql = self._select() + " WHERE 1=1"
        params: list = []

        if category_names:
            placeholders = ",".join("?" * len(category_names))
            sql += f" AND c.name IN ({placeholders})"
            params.extend(category_names)
        if start_date is not None:
            sql += " AND e.date >= ?"
            params.append(format_date(start_date))
        if end_date is not None:
            sql += " AND e.date <= ?"
            params.append(format_date(end_date))

        sql += " ORDER BY e.date DESC, e.id DESC"
        rows = conn.execute(sql, params).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE e.id = ?", (expense_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_recurring(self, recurring_expense_id: int) -> list[Expense]:
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " WHERE e.recurring_expense_id = ? ORDER BY e.date",
            (recurring_expense_id,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_total_between(self, start_date: date, end_date: date) -> Decimal:
        """Sum of expense amounts dated within [start_date, end_date]."""
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT SUM(amount_cents) AS total FROM expenses WHERE date BETWEEN ? AND ?",
            (format_date(start_date), format_date(end_date)),
        ).fetchone()
        return from_cents(row["total"])

    def get_total_by_category(self) -> list[CategorySummary]:
        conn = self._db.get_connection()
        rows = conn.execute(
            """SELECT c.name AS category, SUM(e.amount_cents) AS total
               FROM expenses e
               JOIN categories c ON e.category_id = c.id
               GROUP BY e.category_id
               ORDER BY total DESC, c.name"""
        ).fetchall()
        return [CategorySummary(category=r["category"], total=from_cents(r["total"])) for r in rows]

    def create(
        self,
        amount: Decimal,
        category_id: int,
        date: date,
        description: str = "",
        recurring_expense_id: int | None = None,
        commit: bool = True,
    ) -> Expense:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO expenses
               (amount_cents, category_id, date, description, recurring_expense_id)
               VALUES (?, ?, ?, ?, ?)""",
            (to_cents(amount), category_id, format_date(date), description, recurring_expense_id),
        )
        if commit:
            conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        expense_id: int,
        amount: Decimal,
        category_id: int,
        date: date,
        description: str = "",
    ) -> Expense:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE expenses
               SET amount_cents=?, category_id=?, date=?, description=?,
                   updated_at=datetime('now')
               WHERE id=?""",
            (to_cents(amount), category_id, format_date(date), description, expense_id),
        )
        conn.commit()
        return self.get_by_id(expense_id)

    def delete(self, expense_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
        conn.commit()
