"""Insights router — totals, monthly chart series, category pie and trend."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from apps.api.core.config import Settings, get_settings
from apps.api.core.errors import ValidationError
from apps.api.core.repository import FinanceRepository, get_repository
from apps.api.domains.insights.schemas import OverviewResponse
from packages.finance_core.aggregator import (
    ALL_CATEGORIES,
    category_breakdown,
    monthly_buckets,
    resolve_period,
    summarize,
)
from packages.finance_core.models import PeriodSelector
from packages.finance_core.trend import detect_trend

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("/overview", response_model=OverviewResponse)
async def get_overview(
    months: int = Query(default=6, ge=0, le=120),
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    category: str = Query(default=ALL_CATEGORIES),
    repository: FinanceRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """Everything the dashboard charts need in one call.

    An explicit ``start_date``/``end_date`` pair overrides ``months``.
    """
    if start_date and end_date and start_date > end_date:
        raise ValidationError("start_date must not be after end_date")

    selector = PeriodSelector(months=months, start_date=start_date, end_date=end_date)
    today = date.today()
    transactions = repository.list_transactions()
    cards = repository.list_cards()

    buckets = monthly_buckets(
        transactions, cards, selector, category=category, today=today, locale=settings.LOCALE
    )
    period_start, period_end = resolve_period(selector, today)

    return OverviewResponse(
        summary=summarize(transactions, cards, include_uncategorized=True),
        buckets=buckets,
        breakdown=category_breakdown(transactions, cards),
        trend=detect_trend(buckets),
        period_start=period_start,
        period_end=period_end,
        category=category,
    )
