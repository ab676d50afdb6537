import logging
from dataclasses import replace
from datetime import date

from database.category_dao import CategoryDAO
from database.expense_dao import ExpenseDAO
from database.recurring_dao import RecurringDAO
from models.expense import Expense
from models.recurring_expense import Frequency, RecurringExpense
from services import recurrence_engine
from utils.constants import DESCRIPTION_MAX_LENGTH, RECURRING_SUFFIX
from utils.currency import to_decimal
from utils.date_helpers import parse_date, today
from utils.errors import ResourceNotFound, ValidationError

logger = logging.getLogger(__name__)


class RecurringService:
    def __init__(
        self,
        recurring_dao: RecurringDAO,
        expense_dao: ExpenseDAO,
        category_dao: CategoryDAO,
    ):
        self._dao = recurring_dao
        self._expense_dao = expense_dao
        self._category_dao = category_dao

    def get_all(self) -> list[RecurringExpense]:
        logger.debug("Fetching all recurring expenses")
        return self._dao.get_all()

    def get_active(self) -> list[RecurringExpense]:
        logger.debug("Fetching active recurring expenses")
        return self._dao.get_active()

    def get_by_id(self, recurring_id: int) -> RecurringExpense:
        definition = self._dao.get_by_id(recurring_id)
        if definition is None:
            raise ResourceNotFound(f"Recurring expense not found with id: {recurring_id}")
        return definition

    def create(
        self,
        amount,
        category_id: int,
        frequency,
        start_date,
        description: str = "",
        end_date=None,
    ) -> RecurringExpense:
        amount, frequency, start, end, description = self._validate(
            amount, category_id, frequency, start_date, end_date, description
        )
        created = self._dao.create(
            amount=amount, category_id=category_id, frequency=frequency,
            start_date=start, description=description, end_date=end,
        )
        logger.info("Created recurring expense %s (%s from %s)", created.id, frequency.value, start)
        return created

    def update(
        self,
        recurring_id: int,
        amount,
        category_id: int,
        frequency,
        start_date,
        description: str = "",
        end_date=None,
    ) -> RecurringExpense:
        """Edit a definition without replaying past occurrences.

        The schedule continues from the current next_occurrence; it only moves
        when the new start date lies beyond it. A series pinned on an already
        fired final occurrence resumes one period later if the new end date
        allows it.
        """
        existing = self.get_by_id(recurring_id)
        amount, frequency, start, end, description = self._validate(
            amount, category_id, frequency, start_date, end_date, description
        )
        next_occurrence = max(existing.next_occurrence, start)
        if existing.last_fired == next_occurrence:
            following = recurrence_engine.compute_next_occurrence(next_occurrence, frequency)
            if end is None or following <= end:
                next_occurrence = following
        updated = self._dao.update(
            recurring_id=recurring_id, amount=amount, category_id=category_id,
            frequency=frequency, start_date=start, next_occurrence=next_occurrence,
            description=description, end_date=end,
        )
        logger.info("Updated recurring expense %s", recurring_id)
        return updated

    def delete(self, recurring_id: int):
        self.get_by_id(recurring_id)
        self._dao.delete(recurring_id)
        logger.info("Deleted recurring expense %s", recurring_id)

    def set_active(
        self,
        recurring_id: int,
        active: bool,
        fast_forward: bool = False,
        reference_date: date | None = None,
    ) -> RecurringExpense:
        """Activate or suspend a series.

        Reactivation keeps the old next_occurrence, so missed occurrences are
        still due. Pass fast_forward=True to skip them instead.
        """
        definition = recurrence_engine.toggle_active(self.get_by_id(recurring_id), active)
        if active and fast_forward:
            ref = reference_date or today()
            definition = recurrence_engine.fast_forward(definition, ref)
            if definition.next_occurrence < ref:
                # Pinned on a past final occurrence: skipped, so mark it consumed.
                definition = replace(definition, last_fired=definition.next_occurrence)
        logger.info("Toggling recurring expense %s to active: %s", recurring_id, active)
        return self._dao.save_schedule(definition)

    def process_due(self, reference_date: date | None = None) -> list[Expense]:
        """Materialize at most one occurrence per due definition.

        Intended to run once per day. Returns the expenses created.
        """
        ref = reference_date or today()
        due = self._dao.get_due(ref)
        logger.info("Processing %d due recurring expenses as of %s", len(due), ref)
        created: list[Expense] = []

        for definition in due:
            occurrence = definition.next_occurrence
            if definition.end_date and occurrence > definition.end_date:
                continue
            if definition.last_fired == occurrence:
                # Final occurrence already fired; the series is pinned here.
                continue
            try:
                expense = self._expense_dao.create(
                    amount=definition.amount,
                    category_id=definition.category_id,
                    date=occurrence,
                    description=(definition.description or "") + RECURRING_SUFFIX,
                    recurring_expense_id=definition.id,
                    commit=False,
                )
                fired = replace(definition, last_fired=occurrence)
                self._dao.save_schedule(recurrence_engine.advance(fired))
            except Exception:
                self._dao.rollback()
                logger.exception("Failed to process recurring expense %s", definition.id)
                raise
            created.append(expense)
            logger.info(
                "Created expense %s from recurring expense %s dated %s",
                expense.id, definition.id, occurrence,
            )

        logger.info("Processed %d recurring expenses", len(created))
        return created

    def preview(self, recurring_id: int, count: int = 5) -> list[date]:
        """Upcoming occurrence dates for a stored definition."""
        return recurrence_engine.upcoming_occurrences(self.get_by_id(recurring_id), count)

    def _validate(self, amount, category_id, frequency, start_date, end_date, description):
        frequency = Frequency.parse(frequency)
        try:
            amount = to_decimal(amount)
        except ValueError:
            raise ValidationError(f"Amount must be a number, got {amount!r}") from None
        if amount <= 0:
            raise ValidationError("Amount must be greater than 0.")
        if self._category_dao.get_by_id(category_id) is None:
            raise ResourceNotFound(f"Category not found with id: {category_id}")
        start = _coerce_date(start_date)
        if start is None:
            raise ValidationError("Start date is required.")
        end = _coerce_date(end_date)
        if end_date and end is None:
            raise ValidationError(f"Invalid end date: {end_date!r}")
        if end is not None and end < start:
            raise ValidationError("End date cannot be before start date.")
        description = (description or "").strip()
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters."
            )
        return amount, frequency, start, end, description


def _coerce_date(value) -> date | None:
    if value is None or isinstance(value, date):
        return value
    return parse_date(value)
