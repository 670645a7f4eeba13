"""Tests for monthly bucketing, category breakdown and summaries."""

from datetime import date, datetime

import pytest

from packages.finance_core.aggregator import (
    CARDS_CATEGORY,
    OTHER_CATEGORY,
    category_breakdown,
    expense_by_category,
    monthly_buckets,
    resolve_period,
    summarize,
)
from packages.finance_core.models import PeriodSelector
from packages.finance_core.tests.conftest import make_card, make_tx

EVERYTHING = PeriodSelector(months=None)


class TestResolvePeriod:
    def test_last_n_months_starts_on_first_of_month(self):
        start, end = resolve_period(PeriodSelector(months=6), today=date(2024, 8, 17))
        assert start == date(2024, 2, 1)
        assert end == date(2024, 8, 17)

    def test_crosses_year_boundary(self):
        start, _ = resolve_period(PeriodSelector(months=3), today=date(2024, 2, 29))
        assert start == date(2023, 11, 1)

    def test_explicit_range_wins(self):
        selector = PeriodSelector(months=6, start_date=date(2023, 1, 1), end_date=date(2023, 1, 31))
        assert resolve_period(selector, today=date(2024, 8, 17)) == (
            date(2023, 1, 1),
            date(2023, 1, 31),
        )

    def test_half_open_range_falls_back_to_months(self):
        selector = PeriodSelector(months=1, start_date=date(2023, 1, 1))
        start, _ = resolve_period(selector, today=date(2024, 8, 17))
        assert start == date(2024, 7, 1)

    def test_no_selector_is_unbounded(self):
        assert resolve_period(None) == (None, None)
        assert resolve_period(EVERYTHING) == (None, None)


class TestMonthlyBuckets:
    def test_buckets_sorted_regardless_of_input_order(self, ledger):
        buckets = monthly_buckets(list(reversed(ledger)), selector=EVERYTHING)
        assert [(b.year, b.month) for b in buckets] == [(2024, 1), (2024, 2), (2024, 3)]
        assert [b.label for b in buckets] == ["jan/24", "fev/24", "mar/24"]

    def test_bucket_totals(self, ledger):
        january = monthly_buckets(ledger, selector=EVERYTHING)[0]
        assert january.income == 5000.0
        assert january.expense == 1500.45
        assert january.balance == 3499.55

    def test_base_currency_amount_preferred(self, ledger):
        march = monthly_buckets(ledger, selector=EVERYTHING)[-1]
        assert march.income == 520.0

    def test_income_is_conserved(self, ledger):
        buckets = monthly_buckets(ledger, selector=EVERYTHING)
        expected = sum(tx.base_amount for tx in ledger if tx.is_income)
        assert sum(b.income for b in buckets) == pytest.approx(expected)

    def test_category_filter(self, ledger):
        buckets = monthly_buckets(ledger, selector=EVERYTHING, category="Food")
        assert [b.label for b in buckets] == ["jan/24", "mar/24"]
        assert buckets[0].income == 0.0
        assert buckets[0].expense == 300.45
        assert buckets[1].expense == 950.1

    def test_range_bounds_are_inclusive(self, ledger):
        selector = PeriodSelector(start_date=date(2024, 1, 10), end_date=date(2024, 2, 10))
        buckets = monthly_buckets(ledger, selector=selector)
        assert buckets[0].expense == 1500.45
        assert buckets[0].income == 0.0
        assert buckets[1].income == 5000.0
        assert buckets[1].expense == 1200.0

    def test_last_n_months(self, ledger):
        buckets = monthly_buckets(
            ledger, selector=PeriodSelector(months=1), today=date(2024, 3, 20)
        )
        assert [b.month for b in buckets] == [2, 3]

    def test_card_usage_lands_in_creation_month(self, ledger):
        card = make_card(used=400.0, created=datetime(2024, 1, 25, 9, 30))
        buckets = monthly_buckets(ledger, [card], selector=EVERYTHING)
        assert buckets[0].expense == 1900.45
        assert buckets[1].expense == 1280.0

    def test_card_outside_period_is_ignored(self, ledger):
        card = make_card(used=400.0, created=datetime(2023, 12, 31, 23, 0))
        selector = PeriodSelector(start_date=date(2024, 1, 1), end_date=date(2024, 12, 31))
        buckets = monthly_buckets(ledger, [card], selector=selector)
        assert buckets[0].label == "jan/24"
        assert buckets[0].expense == 1500.45

    def test_cards_ignore_category_filter(self):
        card = make_card(used=250.0, created=datetime(2024, 5, 2))
        buckets = monthly_buckets([], [card], selector=EVERYTHING, category="Food")
        assert len(buckets) == 1
        assert buckets[0].expense == 250.0
        assert buckets[0].balance == -250.0

    def test_empty_input(self):
        assert monthly_buckets([], selector=EVERYTHING) == []

    def test_totals_rounded_after_accumulation(self):
        txs = [make_tx("expense", 0.004, date(2024, 1, d)) for d in range(1, 4)]
        # Rounding each amount first would lose all three
        assert monthly_buckets(txs, selector=EVERYTHING)[0].expense == 0.01

    def test_english_labels(self, ledger):
        buckets = monthly_buckets(ledger, selector=EVERYTHING, locale="en-US")
        assert buckets[1].label == "Feb/24"


class TestCategoryBreakdown:
    def test_sorted_descending_with_cards_and_other(self, ledger):
        cards = [make_card(used=700.0), make_card(used=100.0, name="Inter")]
        breakdown = category_breakdown(ledger, cards)
        assert [c.name for c in breakdown] == ["Rent", "Food", CARDS_CATEGORY, OTHER_CATEGORY]
        assert breakdown[0].value == 2400.0
        assert breakdown[1].value == 1250.55
        assert breakdown[2].value == 800.0
        assert breakdown[3].value == 80.0

    def test_truncates_to_top_eight(self):
        txs = [
            make_tx("expense", float(amount), date(2024, 1, 1), f"Cat {amount}")
            for amount in range(10, 110, 10)
        ]
        breakdown = category_breakdown(txs)
        assert len(breakdown) == 8
        values = [c.value for c in breakdown]
        assert values == sorted(values, reverse=True)
        assert all(a > b for a, b in zip(values, values[1:]))
        assert "Cat 10" not in {c.name for c in breakdown}
        assert "Other" not in {c.name for c in breakdown}

    def test_unused_cards_are_not_listed(self, ledger):
        names = {c.name for c in category_breakdown(ledger, [make_card(used=0.0)])}
        assert CARDS_CATEGORY not in names

    def test_income_ignored(self, ledger):
        assert "Salary" not in {c.name for c in category_breakdown(ledger)}


class TestSummaries:
    def test_expense_by_category_can_skip_uncategorized(self, ledger):
        totals = expense_by_category(ledger, include_uncategorized=False)
        assert set(totals) == {"Rent", "Food"}

    def test_summarize_totals(self, ledger):
        summary = summarize(ledger, [make_card(used=500.0)])
        assert summary.income == 10520.0
        assert summary.transaction_expense == 3730.55
        assert summary.card_expense == 500.0
        assert summary.expense == 4230.55
        assert summary.balance == 6289.45
        assert summary.transaction_count == 8
        assert summary.card_count == 1

    def test_summarize_shares_against_total_expense(self):
        txs = [
            make_tx("expense", 300.0, date(2024, 1, 1), "Food"),
            make_tx("expense", 100.0, date(2024, 1, 2), "Fun"),
        ]
        summary = summarize(txs)
        assert [(s.name, s.percentage) for s in summary.categories] == [
            ("Food", 75.0),
            ("Fun", 25.0),
        ]

    def test_summarize_without_expenses(self):
        summary = summarize([make_tx("income", 100.0, date(2024, 1, 1))])
        assert summary.expense == 0.0
        assert summary.categories == []
