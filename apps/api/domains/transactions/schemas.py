"""Pydantic schemas for the transactions domain."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from packages.finance_core.models import Transaction, TransactionType


class TransactionIn(BaseModel):
    """Body of POST and PUT: PUT replaces the whole record."""

    type: TransactionType
    amount: float = Field(gt=0)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    description: str = ""
    category_id: Optional[str] = None
    date: date


class TransactionOut(BaseModel):
    id: Optional[str] = None
    type: TransactionType
    amount: float
    currency: str
    amount_in_base_currency: Optional[float] = None
    base_amount: float
    description: str
    category_id: Optional[str] = None
    category: Optional[str] = None
    date: date

    @classmethod
    def from_record(cls, tx: Transaction) -> "TransactionOut":
        return cls(
            id=tx.id,
            type=tx.type,
            amount=tx.amount,
            currency=tx.currency,
            amount_in_base_currency=tx.amount_in_base_currency,
            base_amount=tx.base_amount,
            description=tx.description,
            category_id=tx.category_id,
            category=tx.category_name,
            date=tx.date,
        )


class TransactionListResponse(BaseModel):
    transactions: list[TransactionOut]
    count: int
