from datetime import date, datetime
import calendar
from utils.constants import DATE_FORMAT


def today() -> date:
    return date.today()


def parse_date(date_str: str | None) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not date_str:
        return None
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    return None


def format_date(d: date | None) -> str | None:
    return d.strftime(DATE_FORMAT) if d else None


def month_bounds(d: date) -> tuple[date, date]:
    """Return (first_day, last_day) of the month containing d."""
    last_day = calendar.monthrange(d.year, d.month)[1]
    return d.replace(day=1), d.replace(day=last_day)


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    max_day = calendar.monthrange(year, month)[1]
    return min(day, max_day)


def add_months(d: date, n: int) -> date:
    """Add n months to date d, clamping day to month end."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


def friendly_month(month: int, year: int) -> str:
    """e.g. (2, 2026) -> 'February 2026'."""
    return date(year, month, 1).strftime("%B %Y")


def format_display_date(d: date) -> str:
    """e.g. 'Jan 05, 2025'."""
    return d.strftime("%b %d, %Y")
