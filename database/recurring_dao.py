from datetime import date
from decimal import Decimal
from typing import Optional

from database.db_manager import DatabaseManager
from models.recurring_expense import Frequency, RecurringExpense
from utils.currency import from_cents, to_cents
from utils.date_helpers import format_date, parse_date


class RecurringDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> RecurringExpense:
        return RecurringExpense(
            id=row["id"],
            amount=from_cents(row["amount_cents"]),
            category_id=row["category_id"],
            frequency=Frequency(row["frequency"]),
            start_date=parse_date(row["start_date"]),
            next_occurrence=parse_date(row["next_occurrence"]),
            active=bool(row["active"]),
            description=row["description"],
            end_date=parse_date(row["end_date"]),
            last_fired=parse_date(row["last_fired"]),
            category_name=row["category_name"] if "category_name" in row.keys() else "",
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _select(self) -> str:
        return """
            SELECT r.*,
                   c.name AS category_name
            FROM recurring_expenses r
            JOIN categories c ON r.category_id = c.id
        """

    def get_all(self) -> list[RecurringExpense]:
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " ORDER BY r.next_occurrence, r.id"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_active(self) -> list[RecurringExpense]:
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " WHERE r.active = 1 ORDER BY r.next_occurrence, r.id"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_due(self, reference_date: date) -> list[RecurringExpense]:
        """Active definitions whose next_occurrence is on or before reference_date."""
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + """
            WHERE r.active = 1 AND r.next_occurrence <= ?
            ORDER BY r.next_occurrence, r.id
            """,
            (format_date(reference_date),),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, recurring_id: int) -> Optional[RecurringExpense]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE r.id = ?", (recurring_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(
        self,
        amount: Decimal,
        category_id: int,
        frequency: Frequency,
        start_date: date,
        description: str = "",
        end_date: date | None = None,
    ) -> RecurringExpense:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO recurring_expenses
               (amount_cents, category_id, description, frequency,
                start_date, end_date, next_occurrence, active)
               VALUES (?, ?, ?, ?, ?, ?, ?, 1)""",
            (
                to_cents(amount), category_id, description, frequency.value,
                format_date(start_date), format_date(end_date), format_date(start_date),
            ),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        recurring_id: int,
        amount: Decimal,
        category_id: int,
        frequency: Frequency,
        start_date: date,
        next_occurrence: date,
        description: str = "",
        end_date: date | None = None,
    ) -> RecurringExpense:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE recurring_expenses SET
               amount_cents=?, category_id=?, description=?, frequency=?,
               start_date=?, end_date=?, next_occurrence=?,
               updated_at=datetime('now')
               WHERE id=?""",
            (
                to_cents(amount), category_id, description, frequency.value,
                format_date(start_date), format_date(end_date),
                format_date(next_occurrence), recurring_id,
            ),
        )
        conn.commit()
        return self.get_by_id(recurring_id)

    def save_schedule(self, definition: RecurringExpense) -> RecurringExpense:
        """Persist the schedule state (active, next_occurrence, last_fired).

        Also commits any pending write on the connection, so an expense created
        with commit=False lands in the same transaction.
        """
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE recurring_expenses SET
               active=?, next_occurrence=?, last_fired=?,
               updated_at=datetime('now')
               WHERE id=?""",
            (
                1 if definition.active else 0,
                format_date(definition.next_occurrence),
                format_date(definition.last_fired),
                definition.id,
            ),
        )
        conn.commit()
        return self.get_by_id(definition.id)

    def delete(self, recurring_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM recurring_expenses WHERE id = ?", (recurring_id,))
        conn.commit()

    def rollback(self):
        self._db.get_connection().rollback()
