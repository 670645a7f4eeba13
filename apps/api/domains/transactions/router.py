"""Transactions router — list, create, replace and delete entries."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from apps.api.core.config import Settings, get_settings
from apps.api.core.exchange import ExchangeRateClient, get_exchange_client
from apps.api.core.repository import FinanceRepository, get_repository
from apps.api.domains.transactions.schemas import (
    TransactionIn,
    TransactionListResponse,
    TransactionOut,
)
from apps.api.domains.transactions.service import stored_values
from packages.finance_core.models import TransactionType

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    type: Optional[TransactionType] = Query(default=None),
    repository: FinanceRepository = Depends(get_repository),
):
    """List the caller's transactions, newest first."""
    records = repository.list_transactions(start=start_date, end=end_date, type=type)
    return TransactionListResponse(
        transactions=[TransactionOut.from_record(tx) for tx in records],
        count=len(records),
    )


@router.post("", response_model=TransactionOut, status_code=201)
async def create_transaction(
    body: TransactionIn,
    repository: FinanceRepository = Depends(get_repository),
    exchange: ExchangeRateClient = Depends(get_exchange_client),
    settings: Settings = Depends(get_settings),
):
    values = await stored_values(body, exchange, settings.BASE_CURRENCY)
    return TransactionOut.from_record(repository.create_transaction(values))


@router.put("/{transaction_id}", response_model=TransactionOut)
async def replace_transaction(
    transaction_id: str,
    body: TransactionIn,
    repository: FinanceRepository = Depends(get_repository),
    exchange: ExchangeRateClient = Depends(get_exchange_client),
    settings: Settings = Depends(get_settings),
):
    values = await stored_values(body, exchange, settings.BASE_CURRENCY)
    return TransactionOut.from_record(repository.update_transaction(transaction_id, values))


@router.delete("/{transaction_id}", status_code=204)
async def delete_transaction(
    transaction_id: str,
    repository: FinanceRepository = Depends(get_repository),
):
    repository.delete_transaction(transaction_id)
    return Response(status_code=204)
