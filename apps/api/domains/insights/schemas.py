"""Pydantic schemas for the insights domain."""

from datetime import date
from typing import Optional

from pydantic import BaseModel

from packages.finance_core.models import CategoryTotal, MonthBucket, PeriodSummary, Trend


class OverviewResponse(BaseModel):
    """Dashboard payload.

    ``summary`` and ``breakdown`` cover every record; ``buckets`` and
    ``trend`` follow the selected period and category.
    """

    summary: PeriodSummary
    buckets: list[MonthBucket]
    breakdown: list[CategoryTotal]
    trend: Trend
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    category: str
