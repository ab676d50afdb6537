from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from utils.errors import InvalidFrequency


class Frequency(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"

    @classmethod
    def parse(cls, value) -> "Frequency":
        """Accept a Frequency or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise InvalidFrequency(f"Invalid frequency: {value!r}") from None


@dataclass
class RecurringExpense:
    id: int
    amount: Decimal
    category_id: int
    frequency: Frequency
    start_date: date
    next_occurrence: date
    active: bool = True
    description: str = ""
    end_date: Optional[date] = None
    last_fired: Optional[date] = None   # occurrence most recently materialized
    category_name: str = ""
    created_at: str = ""
    updated_at: str = ""
