from decimal import Decimal
from typing import Optional
from database.db_manager import DatabaseManager
from models.budget import Budget
from utils.currency import from_cents, to_cents


class BudgetDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Budget:
        return Budget(
            id=row["id"],
            monthly_limit=from_cents(row["monthly_limit_cents"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def get_current(self) -> Optional[Budget]:
        """The most recently updated budget row, if any."""
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM budgets ORDER BY updated_at DESC, id DESC LIMIT 1"
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_id(self, budget_id: int) -> Optional[Budget]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM budgets WHERE id = ?", (budget_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def upsert(self, monthly_limit: Decimal) -> Budget:
        """Update the current budget's limit, or insert the first one."""
        conn = self._db.get_connection()
        current = self.get_current()
        if current is None:
            cursor = conn.execute(
                "INSERT INTO budgets(monthly_limit_cents) VALUES (?)",
                (to_cents(monthly_limit),),
            )
            budget_id = cursor.lastrowid
        else:
            conn.execute(
                """UPDATE budgets
                   SET monthly_limit_cents = ?, updated_at = datetime('now')
                   WHERE id = ?""",
                (to_cents(monthly_limit), current.id),
            )
            budget_id = current.id
        conn.commit()
        return self.get_by_id(budget_id)
