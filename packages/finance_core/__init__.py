"""
Fineasy Finance Core

Pure derivations over a user's transactions, credit cards and goals:
monthly aggregation, card scoring, goal projection, trends, reports and
AI context.
"""

__version__ = "0.1.0"

from packages.finance_core.aggregator import (
    category_breakdown,
    monthly_buckets,
    resolve_period,
    summarize,
)
from packages.finance_core.card_scorer import UnscorableCardError, assess_card, score_card
from packages.finance_core.goal_projector import SAVINGS_CAPTURE_RATE, project_goal
from packages.finance_core.reports import NoTransactionsError, compose_monthly_report
from packages.finance_core.trend import detect_trend

__all__ = [
    "category_breakdown",
    "monthly_buckets",
    "resolve_period",
    "summarize",
    "UnscorableCardError",
    "assess_card",
    "score_card",
    "SAVINGS_CAPTURE_RATE",
    "project_goal",
    "NoTransactionsError",
    "compose_monthly_report",
    "detect_trend",
]
