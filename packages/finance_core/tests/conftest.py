"""Record factories shared by the finance core tests."""

from datetime import date, datetime

import pytest

from packages.finance_core.models import Category, CreditCard, FinancialGoal, Transaction


def make_tx(kind, amount, day, category=None, base_amount=None, description=""):
    return Transaction(
        type=kind,
        amount=amount,
        amount_in_base_currency=base_amount,
        date=day,
        description=description,
        category=Category(name=category) if category else None,
    )


def make_card(used, limit=1000.0, created=datetime(2024, 1, 10, 12, 0), name="Nubank"):
    return CreditCard(
        name=name,
        brand="Mastercard",
        credit_limit=limit,
        used_limit=used,
        closing_day=5,
        due_day=15,
        created_at=created,
    )


def make_goal(target=12000.0, current=0.0, created=datetime(2024, 1, 1), **kwargs):
    return FinancialGoal(
        name="Emergency fund",
        type="savings",
        target_amount=target,
        current_amount=current,
        created_at=created,
        **kwargs,
    )


@pytest.fixture
def ledger():
    """Four months of mixed income and expenses."""
    return [
        make_tx("income", 5000.0, date(2024, 1, 5), "Salary"),
        make_tx("expense", 1200.0, date(2024, 1, 10), "Rent"),
        make_tx("expense", 300.45, date(2024, 1, 20), "Food"),
        make_tx("income", 5000.0, date(2024, 2, 5), "Salary"),
        make_tx("expense", 1200.0, date(2024, 2, 10), "Rent"),
        make_tx("expense", 80.0, date(2024, 2, 11)),
        make_tx("income", 100.0, date(2024, 3, 1), "Salary", base_amount=520.0),
        make_tx("expense", 950.10, date(2024, 3, 15), "Food"),
    ]
