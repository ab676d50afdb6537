class ExpenseTrackerError(ValueError):
    """Base class for validation failures reported to the immediate caller."""


class ValidationError(ExpenseTrackerError):
    pass


class InvalidFrequency(ExpenseTrackerError):
    pass


class InvalidBudgetLimit(ExpenseTrackerError):
    pass


class ResourceNotFound(LookupError):
    pass
