APP_NAME = "Expense Tracker"
DB_FILE = "expenses.db"
DATE_FORMAT = "%Y-%m-%d"

BUDGET_WARNING_PERCENT = 80
BUDGET_OVER_PERCENT = 100

DESCRIPTION_MAX_LENGTH = 500
RECURRING_SUFFIX = " (Recurring)"

DEFAULT_CATEGORIES = [
    {"name": "Groceries",      "description": "Food and household items"},
    {"name": "Transportation", "description": "Gas, public transit, parking"},
    {"name": "Entertainment",  "description": "Movies, games, subscriptions"},
    {"name": "Utilities",      "description": "Electricity, water, internet"},
    {"name": "Other",          "description": "Miscellaneous expenses"},
]

CATEGORY_COLORS = {
    "Groceries":      "#10b981",
    "Transportation": "#3b82f6",
    "Entertainment":  "#8b5cf6",
    "Utilities":      "#f59e0b",
    "Other":          "#6b7280",
}
DEFAULT_CATEGORY_COLOR = "#6b7280"

CSV_HEADER = ["Date", "Amount", "Category", "Description"]
