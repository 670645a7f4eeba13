from datetime import date
from typing import Iterable, Optional, Sequence

import pandas as pd

from packages.finance_core.models import (
    CategoryShare,
    CategoryTotal,
    CreditCard,
    MonthBucket,
    PeriodSelector,
    PeriodSummary,
    Transaction,
)
from packages.finance_core.months import (
    DEFAULT_LOCALE,
    add_months,
    first_of_month,
    month_label,
    round_half_up,
)

ALL_CATEGORIES = "all"
OTHER_CATEGORY = "Other"
CARDS_CATEGORY = "Credit Cards"
TOP_CATEGORIES = 8


def resolve_period(
    selector: Optional[PeriodSelector], today: Optional[date] = None
) -> tuple[Optional[date], Optional[date]]:
    """Turn a period selector into an inclusive ``(start, end)`` pair.

    An explicit range wins over "last N months". ``(None, None)`` means the
    period is unbounded.
    """
    if selector is None:
        return None, None
    if selector.start_date and selector.end_date:
        return selector.start_date, selector.end_date
    if selector.months is not None:
        today = today or date.today()
        start = first_of_month(add_months(today, -selector.months))
        return start, today
    return None, None


class LedgerFrame:
    """Flattens transactions and card snapshots into a single frame.

    Columns:
    - date: calendar day (card rows use the day the card was created)
    - kind: "income" or "expense"
    - amount: base-currency amount (cards contribute their used limit)
    - category: category name, None when uncategorized or for cards
    - source: "transaction" or "card"
    """

    COLUMNS = ["date", "kind", "amount", "category", "source"]

    def __init__(
        self,
        transactions: Iterable[Transaction],
        cards: Iterable[CreditCard] = (),
    ):
        rows = [
            {
                "date": tx.date,
                "kind": tx.type.value,
                "amount": tx.base_amount,
                "category": tx.category_name,
                "source": "transaction",
            }
            for tx in transactions
        ]
        rows.extend(
            {
                "date": card.created_at.date(),
                "kind": "expense",
                "amount": float(card.used_limit),
                "category": None,
                "source": "card",
            }
            for card in cards
        )
        self.df = pd.DataFrame(rows, columns=self.COLUMNS)
        self.df["date"] = pd.to_datetime(self.df["date"])
        self.df["amount"] = self.df["amount"].astype(float)

    def filter(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        category: str = ALL_CATEGORIES,
    ) -> pd.DataFrame:
        df = self.df
        if start is not None:
            df = df[df["date"] >= pd.Timestamp(start)]
        if end is not None:
            df = df[df["date"] <= pd.Timestamp(end)]
        if category != ALL_CATEGORIES:
            # Card usage has no category and is never filtered out
            df = df[(df["source"] == "card") | (df["category"] == category)]
        return df

    @staticmethod
    def aggregate_monthly(df: pd.DataFrame, locale: str = DEFAULT_LOCALE) -> list[MonthBucket]:
        if df.empty:
            return []

        df = df.assign(
            year=df["date"].dt.year,
            month=df["date"].dt.month,
            income=df["amount"].where(df["kind"] == "income", 0.0),
            expense=df["amount"].where(df["kind"] == "expense", 0.0),
        )
        grouped = df.groupby(["year", "month"], sort=True)[["income", "expense"]].sum()

        buckets = []
        for (year, month), row in grouped.iterrows():
            income = float(row["income"])
            expense = float(row["expense"])
            buckets.append(
                MonthBucket(
                    label=month_label(int(year), int(month), locale),
                    year=int(year),
                    month=int(month),
                    income=round_half_up(income),
                    expense=round_half_up(expense),
                    balance=round_half_up(income - expense),
                )
            )
        return buckets


def monthly_buckets(
    transactions: Sequence[Transaction],
    cards: Sequence[CreditCard] = (),
    selector: Optional[PeriodSelector] = None,
    category: str = ALL_CATEGORIES,
    today: Optional[date] = None,
    locale: str = DEFAULT_LOCALE,
) -> list[MonthBucket]:
    """Income, expense and balance per calendar month, oldest first."""
    start, end = resolve_period(selector, today)
    ledger = LedgerFrame(transactions, cards)
    return LedgerFrame.aggregate_monthly(ledger.filter(start, end, category), locale)


def expense_by_category(
    transactions: Sequence[Transaction], include_uncategorized: bool = True
) -> dict[str, float]:
    """Unrounded expense totals per category name, in first-seen order."""
    df = LedgerFrame(transactions).df
    expenses = df[df["kind"] == "expense"]
    if include_uncategorized:
        expenses = expenses.assign(category=expenses["category"].fillna(OTHER_CATEGORY))
    totals = expenses.groupby("category", sort=False)["amount"].sum()
    return {str(name): float(value) for name, value in totals.items()}


def category_breakdown(
    transactions: Sequence[Transaction],
    cards: Sequence[CreditCard] = (),
    limit: int = TOP_CATEGORIES,
) -> list[CategoryTotal]:
    """Largest expense categories, card usage included as one pseudo-category.

    Everything past ``limit`` is dropped, not folded into "Other".
    """
    totals = expense_by_category(transactions, include_uncategorized=True)
    card_total = sum(float(card.used_limit) for card in cards)
    if card_total > 0:
        totals[CARDS_CATEGORY] = card_total

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryTotal(name=name, value=round_half_up(value))
        for name, value in ranked[:limit]
    ]


def _share(value: float, total: float) -> float:
    if total == 0:
        return 0.0
    return round_half_up(value / total * 100, 1)


def summarize(
    transactions: Sequence[Transaction],
    cards: Sequence[CreditCard] = (),
    include_uncategorized: bool = False,
) -> PeriodSummary:
    """Headline totals for a set of records.

    Category shares are expressed against total expense (transactions plus
    card usage) and sorted largest first.
    """
    income = sum(tx.base_amount for tx in transactions if tx.is_income)
    transaction_expense = sum(tx.base_amount for tx in transactions if not tx.is_income)
    card_expense = sum(float(card.used_limit) for card in cards)
    expense = transaction_expense + card_expense

    totals = expense_by_category(transactions, include_uncategorized=include_uncategorized)
    if card_expense > 0:
        totals[CARDS_CATEGORY] = card_expense

    shares = [
        CategoryShare(name=name, value=round_half_up(value), percentage=_share(value, expense))
        for name, value in sorted(totals.items(), key=lambda item: item[1], reverse=True)
    ]

    return PeriodSummary(
        income=round_half_up(income),
        transaction_expense=round_half_up(transaction_expense),
        card_expense=round_half_up(card_expense),
        expense=round_half_up(expense),
        balance=round_half_up(income - expense),
        transaction_count=len(transactions),
        card_count=len(cards),
        categories=shares,
    )
