"""Pydantic schemas for the financial goals domain."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from packages.finance_core.models import GoalProjection


class GoalIn(BaseModel):
    name: str = Field(min_length=1)
    type: str = ""
    target_amount: float = Field(gt=0)
    current_amount: float = Field(default=0.0, ge=0)
    target_date: Optional[date] = None
    monthly_contribution: float = Field(default=0.0, ge=0)
    completed: bool = False


class GoalListResponse(BaseModel):
    goals: list[GoalProjection]
    count: int
