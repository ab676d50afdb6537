from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")


def as_decimal(value) -> Decimal:
    """Coerce a number or numeric string to Decimal without rounding.

    Raises ValueError for anything that is not a finite number.
    """
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f"Not a valid amount: {value!r}")
    if not d.is_finite():
        raise ValueError(f"Not a valid amount: {value!r}")
    return d


def to_decimal(value) -> Decimal:
    """Coerce a number or numeric string to a 2-place Decimal."""
    return as_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(amount: Decimal) -> int:
    return int(to_decimal(amount) * 100)


def from_cents(cents: int | None) -> Decimal:
    return (Decimal(cents or 0) / 100).quantize(CENT)


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Format an amount as currency string, e.g. '$1,234.56' or '-$200.00'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
