from datetime import date

from packages.finance_core.months import (
    add_months,
    iter_months,
    last_of_month,
    month_label,
    month_title,
    round_half_up,
    whole_months_between,
)


def test_add_months_clamps_day():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)
    assert add_months(date(2024, 3, 15), -4) == date(2023, 11, 15)
    assert add_months(date(2024, 3, 15), 0) == date(2024, 3, 15)


def test_whole_months_between():
    assert whole_months_between(date(2024, 1, 1), date(2024, 4, 1)) == 3
    assert whole_months_between(date(2024, 1, 15), date(2024, 4, 10)) == 2
    assert whole_months_between(date(2024, 1, 31), date(2024, 2, 29)) == 0
    assert whole_months_between(date(2024, 4, 1), date(2024, 1, 1)) == -3


def test_iter_months_inclusive():
    months = list(iter_months(date(2023, 11, 20), date(2024, 2, 3)))
    assert months == [(2023, 11), (2023, 12), (2024, 1), (2024, 2)]


def test_last_of_month():
    assert last_of_month(date(2024, 2, 10)) == date(2024, 2, 29)
    assert last_of_month(date(2024, 12, 1)) == date(2024, 12, 31)


def test_labels_and_titles():
    assert month_label(2024, 3) == "mar/24"
    assert month_label(2005, 12, "en-US") == "Dec/05"
    assert month_title(2026, 10) == "outubro de 2026"
    assert month_title(2026, 10, "en-US") == "October 2026"
    # Unknown locales fall back to the default tables
    assert month_label(2024, 2, "xx-XX") == "fev/24"


def test_round_half_up():
    assert round_half_up(2.675) == 2.68
    assert round_half_up(0.125) == 0.13
    assert round_half_up(-1.005) == -1.01
    assert round_half_up(12.34, 1) == 12.3
    assert round_half_up(12.35, 1) == 12.4
