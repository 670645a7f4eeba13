"""Month arithmetic and locale month names."""

import calendar
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

MONTH_ABBREVIATIONS = {
    "pt-BR": ["jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez"],
    "en-US": ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
}

MONTH_NAMES = {
    "pt-BR": [
        "janeiro", "fevereiro", "março", "abril", "maio", "junho",
        "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
    ],
    "en-US": [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
}

DEFAULT_LOCALE = "pt-BR"


def _table(tables: dict, locale: str) -> list[str]:
    return tables.get(locale, tables[DEFAULT_LOCALE])


def month_label(year: int, month: int, locale: str = DEFAULT_LOCALE) -> str:
    """Short ``MMM/YY`` label, e.g. ``jan/24``."""
    return f"{_table(MONTH_ABBREVIATIONS, locale)[month - 1]}/{year % 100:02d}"


def month_title(year: int, month: int, locale: str = DEFAULT_LOCALE) -> str:
    """Long month-and-year title, e.g. ``outubro de 2026`` or ``October 2026``."""
    name = _table(MONTH_NAMES, locale)[month - 1]
    if locale == "en-US":
        return f"{name} {year}"
    return f"{name} de {year}"


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def last_of_month(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def add_months(day: date, months: int) -> date:
    """Shift by calendar months, clamping the day to the target month's length."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def whole_months_between(start: date, end: date) -> int:
    """Number of complete calendar months from ``start`` to ``end``.

    A month only counts once the day-of-month of ``start`` has been
    reached, so 2024-01-31 → 2024-02-29 is 0 months.
    """
    if end < start:
        return -whole_months_between(end, start)
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return months


def iter_months(start: date, end: date):
    """Yield ``(year, month)`` pairs from ``start``'s month through ``end``'s month."""
    current = first_of_month(start)
    stop = first_of_month(end)
    while current <= stop:
        yield current.year, current.month
        current = add_months(current, 1)


def round_half_up(value: float, places: int = 2) -> float:
    """Round like a person would (2.675 -> 2.68), not banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
