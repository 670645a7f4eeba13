"""Savings-goal projection.

Goal progress is never stored. It is recomputed from the manual baseline
(``current_amount``) plus a fixed share of the net savings recorded since
the goal was created:

    savings  = income - expenses - card usage   (since goal creation)
    progress = current_amount + max(0, savings) * SAVINGS_CAPTURE_RATE

The realized monthly contribution is the average monthly savings since
creation times the same rate; when that is not positive the goal's manual
``monthly_contribution`` is used instead.
"""

import math
from datetime import date
from typing import Optional, Sequence

from packages.finance_core.models import (
    CreditCard,
    FinancialGoal,
    GoalProgressPoint,
    GoalProjection,
    Transaction,
)
from packages.finance_core.months import (
    DEFAULT_LOCALE,
    add_months,
    iter_months,
    last_of_month,
    month_label,
    round_half_up,
    whole_months_between,
)

SAVINGS_CAPTURE_RATE = 0.30


def savings_since(
    goal: FinancialGoal,
    transactions: Sequence[Transaction],
    cards: Sequence[CreditCard] = (),
    until: Optional[date] = None,
) -> float:
    """Net savings recorded from the goal's creation up to ``until`` (inclusive).

    Transactions count from the creation day, cards only if created at or
    after the goal's creation timestamp.
    """
    start = goal.created_at.date()
    total = 0.0
    for tx in transactions:
        if tx.date < start or (until is not None and tx.date > until):
            continue
        total += tx.base_amount if tx.is_income else -tx.base_amount
    for card in cards:
        if card.created_at < goal.created_at:
            continue
        if until is not None and card.created_at.date() > until:
            continue
        total -= float(card.used_limit)
    return total


def progress_from_savings(goal: FinancialGoal, savings: float) -> float:
    return goal.current_amount + max(0.0, savings) * SAVINGS_CAPTURE_RATE


def realized_monthly_contribution(goal: FinancialGoal, savings: float, today: date) -> float:
    months = max(1, whole_months_between(goal.created_at.date(), today))
    monthly_savings = savings / months
    if monthly_savings > 0:
        return monthly_savings * SAVINGS_CAPTURE_RATE
    return goal.monthly_contribution


def months_to_completion(target: float, progress: float, contribution: float) -> Optional[int]:
    """Whole months until ``progress`` reaches ``target``; None if it never will."""
    if progress >= target:
        return 0
    if contribution <= 0:
        return None
    # Round away float noise before ceil so 17.0000000001 stays 17
    return math.ceil(round((target - progress) / contribution, 9))


def required_monthly_savings(goal: FinancialGoal, remaining: float, today: date) -> Optional[float]:
    if goal.target_date is None or remaining <= 0:
        return None
    months_left = max(1, whole_months_between(today, goal.target_date))
    return remaining / months_left


def progress_history(
    goal: FinancialGoal,
    transactions: Sequence[Transaction],
    cards: Sequence[CreditCard] = (),
    today: Optional[date] = None,
    locale: str = DEFAULT_LOCALE,
) -> list[GoalProgressPoint]:
    """Progress at each month end from the creation month through today's month.

    The current month's point is cut off at ``today``.
    """
    today = today or date.today()
    points = []
    for year, month in iter_months(goal.created_at.date(), today):
        month_end = min(last_of_month(date(year, month, 1)), today)
        savings = savings_since(goal, transactions, cards, until=month_end)
        progress = min(max(progress_from_savings(goal, savings), 0.0), goal.target_amount)
        points.append(
            GoalProgressPoint(
                label=month_label(year, month, locale),
                year=year,
                month=month,
                progress=round_half_up(progress),
                target=goal.target_amount,
            )
        )
    return points


def project_goal(
    goal: FinancialGoal,
    transactions: Sequence[Transaction],
    cards: Sequence[CreditCard] = (),
    today: Optional[date] = None,
    include_history: bool = True,
    locale: str = DEFAULT_LOCALE,
) -> GoalProjection:
    today = today or date.today()

    savings = savings_since(goal, transactions, cards)
    progress = progress_from_savings(goal, savings)
    contribution = realized_monthly_contribution(goal, savings, today)
    remaining = max(0.0, goal.target_amount - progress)
    months = months_to_completion(goal.target_amount, progress, contribution)
    required = required_monthly_savings(goal, remaining, today)

    return GoalProjection(
        goal_id=goal.id,
        name=goal.name,
        target_amount=goal.target_amount,
        current_progress=round_half_up(progress),
        remaining=round_half_up(remaining),
        progress_percentage=round_half_up(min(100.0, progress / goal.target_amount * 100), 1),
        savings_since_start=round_half_up(savings),
        realized_monthly_contribution=round_half_up(contribution),
        required_monthly_savings=round_half_up(required) if required is not None else None,
        months_to_completion=months,
        projected_completion_date=add_months(today, months) if months is not None else None,
        target_date=goal.target_date,
        reached=months == 0,
        history=(
            progress_history(goal, transactions, cards, today, locale) if include_history else []
        ),
    )
