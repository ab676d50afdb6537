from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class BudgetStatus(str, Enum):
    HEALTHY = "HEALTHY"          # < 80%
    WARNING = "WARNING"          # >= 80% and < 100%
    OVER_BUDGET = "OVER_BUDGET"  # >= 100%


@dataclass
class Budget:
    id: int
    monthly_limit: Decimal
    created_at: str = ""
    updated_at: str = ""


@dataclass(frozen=True)
class BudgetSnapshot:
    monthly_limit: Decimal
    total_spent: Decimal
    remaining: Decimal
    percentage_used: Decimal
    status: BudgetStatus

    @property
    def is_over_budget(self) -> bool:
        return self.status is BudgetStatus.OVER_BUDGET
