"""Pydantic schemas for the credit cards domain."""

from pydantic import BaseModel, Field

from packages.finance_core.models import CardAssessment


class CardIn(BaseModel):
    name: str = Field(min_length=1)
    brand: str = ""
    credit_limit: float = Field(gt=0)
    used_limit: float = Field(default=0.0, ge=0)
    closing_day: int = Field(ge=1, le=31)
    due_day: int = Field(ge=1, le=31)


class CardListResponse(BaseModel):
    cards: list[CardAssessment]
    count: int
    total_used: float
    total_limit: float
