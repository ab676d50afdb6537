from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class Expense:
    id: int
    amount: Decimal
    category_id: int
    category_name: str
    date: date
    description: str = ""
    recurring_expense_id: Optional[int] = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class CategorySummary:
    category: str
    total: Decimal


@dataclass
class MonthlySummary:
    total: Decimal
    month: int
    year: int
