"""Typed records for the finance derivation layer.

Supabase rows come back with the column names of the original web app
(``receita``/``despesa``, ``amount_brl``, ``card_name`` ...). The models
accept those spellings through aliases so routers can validate rows
directly with ``Model.model_validate(row)``.
"""

from datetime import date, datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


# Stored values used by the transactions table
_STORED_TYPES = {
    "receita": TransactionType.INCOME,
    "despesa": TransactionType.EXPENSE,
}


class Category(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None


class Transaction(BaseModel):
    """A single income or expense entry."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str] = None
    type: TransactionType
    amount: float
    currency: str = "BRL"
    amount_in_base_currency: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("amount_in_base_currency", "amount_brl"),
    )
    description: str = ""
    category_id: Optional[str] = None
    category: Optional[Category] = Field(
        default=None,
        validation_alias=AliasChoices("category", "categories"),
    )
    date: date

    @field_validator("type", mode="before")
    @classmethod
    def _map_stored_type(cls, value):
        if isinstance(value, str):
            return _STORED_TYPES.get(value.lower(), value.lower())
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value):
        return value or ""

    @property
    def base_amount(self) -> float:
        """Amount in the base currency, falling back to the original amount."""
        if self.amount_in_base_currency is None:
            return float(self.amount)
        return float(self.amount_in_base_currency)

    @property
    def category_name(self) -> Optional[str]:
        return self.category.name if self.category else None

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME


class CreditCard(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str] = None
    name: str = Field(validation_alias=AliasChoices("name", "card_name"))
    brand: str = Field(default="", validation_alias=AliasChoices("brand", "card_brand"))
    credit_limit: float
    used_limit: float = 0.0
    closing_day: int = Field(ge=1, le=31)
    due_day: int = Field(ge=1, le=31)
    created_at: datetime

    @property
    def available_limit(self) -> float:
        return self.credit_limit - self.used_limit


class FinancialGoal(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str] = None
    name: str = Field(validation_alias=AliasChoices("name", "goal_name"))
    type: str = Field(default="", validation_alias=AliasChoices("type", "goal_type"))
    target_amount: float = Field(gt=0)
    current_amount: float = Field(default=0.0, ge=0)
    target_date: Optional[date] = None
    monthly_contribution: float = Field(default=0.0, ge=0)
    created_at: datetime
    completed: bool = False

    @field_validator("current_amount", "monthly_contribution", mode="before")
    @classmethod
    def _none_is_zero(cls, value):
        return 0.0 if value is None else value


class PeriodSelector(BaseModel):
    """Either the last ``months`` months or an explicit inclusive range."""

    months: Optional[int] = Field(default=6, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


# ---------------------------------------------------------------------------
# Derivation outputs
# ---------------------------------------------------------------------------


class MonthBucket(BaseModel):
    label: str
    year: int
    month: int
    income: float
    expense: float
    balance: float


class CategoryTotal(BaseModel):
    name: str
    value: float


class CategoryShare(BaseModel):
    name: str
    value: float
    percentage: float


class PeriodSummary(BaseModel):
    income: float
    transaction_expense: float
    card_expense: float
    expense: float
    balance: float
    transaction_count: int
    card_count: int
    categories: list[CategoryShare] = Field(default_factory=list)


ScoreTier = Literal["good", "fair", "poor", "unscored"]


class CardAssessment(BaseModel):
    card_id: Optional[str] = None
    name: str
    brand: str = ""
    credit_limit: float
    used_limit: float
    available_limit: float
    usage_percentage: Optional[float] = None
    score: Optional[int] = None
    tier: ScoreTier
    closing_day: int
    due_day: int
    recommendations: list[str] = Field(default_factory=list)


class GoalProgressPoint(BaseModel):
    label: str
    year: int
    month: int
    progress: float
    target: float


class GoalProjection(BaseModel):
    goal_id: Optional[str] = None
    name: str
    target_amount: float
    current_progress: float
    remaining: float
    progress_percentage: float
    savings_since_start: float
    realized_monthly_contribution: float
    required_monthly_savings: Optional[float] = None
    months_to_completion: Optional[int] = None
    projected_completion_date: Optional[date] = None
    target_date: Optional[date] = None
    reached: bool
    history: list[GoalProgressPoint] = Field(default_factory=list)


TrendStatus = Literal[
    "improving",
    "worsening",
    "stable",
    "insufficient_data",
    "no_prior_history",
]


class Trend(BaseModel):
    status: TrendStatus
    percentage: Optional[float] = None
    message: str
