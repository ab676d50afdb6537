import logging
import os
import sqlite3

from utils.constants import DB_FILE, DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        self._create_schema(conn)
        self._seed_defaults(conn)
        conn.commit()

    def _create_schema(self, conn: sqlite3.Connection):
        # Amounts are stored as integer cents so SUM() stays exact.
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS categories (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                name        TEXT    NOT NULL UNIQUE COLLATE NOCASE,
                description TEXT    NOT NULL DEFAULT '',
                is_default  INTEGER NOT NULL DEFAULT 0
            );

            CREATE TABLE IF NOT EXISTS recurring_expenses (
                id              INTEGER PRIMARY KEY AUTOINCREMENT,
                amount_cents    INTEGER NOT NULL CHECK(amount_cents > 0),
                category_id     INTEGER NOT NULL REFERENCES categories(id) ON DELETE RESTRICT,
                description     TEXT    NOT NULL DEFAULT '',
                frequency       TEXT    NOT NULL CHECK(frequency IN
                                    ('DAILY','WEEKLY','BIWEEKLY','MONTHLY','QUARTERLY','YEARLY')),
                start_date      TEXT    NOT NULL,
                end_date        TEXT,
                next_occurrence TEXT    NOT NULL,
                active          INTEGER NOT NULL DEFAULT 1,
                last_fired      TEXT,
                created_at      TEXT    NOT NULL DEFAULT (datetime('now')),
                updated_at      TEXT    NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS expenses (
                id                   INTEGER PRIMARY KEY AUTOINCREMENT,
                amount_cents         INTEGER NOT NULL CHECK(amount_cents > 0),
                category_id          INTEGER NOT NULL REFERENCES categories(id) ON DELETE RESTRICT,
                date                 TEXT    NOT NULL,
                description          TEXT    NOT NULL DEFAULT '',
                recurring_expense_id INTEGER REFERENCES recurring_expenses(id) ON DELETE SET NULL,
                created_at           TEXT    NOT NULL DEFAULT (datetime('now')),
                updated_at           TEXT    NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS budgets (
                id                  INTEGER PRIMARY KEY AUTOINCREMENT,
                monthly_limit_cents INTEGER NOT NULL CHECK(monthly_limit_cents > 0),
                created_at          TEXT    NOT NULL DEFAULT (datetime('now')),
                updated_at          TEXT    NOT NULL DEFAULT (datetime('now'))
            );

            CREATE INDEX IF NOT EXISTS idx_expenses_date        ON expenses(date);
            CREATE INDEX IF NOT EXISTS idx_expenses_category_id ON expenses(category_id);
            CREATE INDEX IF NOT EXISTS idx_recurring_next       ON recurring_expenses(next_occurrence);
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        for cat in DEFAULT_CATEGORIES:
            conn.execute(
                """INSERT OR IGNORE INTO categories(name, description, is_default)
                   VALUES (?, ?, 1)""",
                (cat["name"], cat["description"]),
            )

    @staticmethod
    def open(db_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: opens (creating if needed) the database file.

        db_folder: if provided, the DB file is stored in that directory instead of CWD.
        """
        if db_folder:
            os.makedirs(db_folder, exist_ok=True)
            path = os.path.join(db_folder, DB_FILE)
        else:
            path = DB_FILE
        logger.debug("Opening database %s", path)
        db = DatabaseManager(path)
        db.initialize()
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
