"""Reports service — compose the monthly document for the caller."""

from datetime import date
from typing import Optional

from apps.api.core.errors import EmptyDatasetError
from apps.api.core.repository import FinanceRepository
from packages.finance_core.months import first_of_month, last_of_month
from packages.finance_core.reports import (
    NoTransactionsError,
    ReportDocument,
    compose_monthly_report,
)


def build_monthly_report(
    repository: FinanceRepository, month: Optional[date], locale: str
) -> ReportDocument:
    """Report for the month containing ``month`` (the current month by default)."""
    month = month or date.today()
    transactions = repository.list_transactions(
        start=first_of_month(month), end=last_of_month(month)
    )
    try:
        return compose_monthly_report(transactions, month, locale)
    except NoTransactionsError as e:
        raise EmptyDatasetError(str(e)) from e


def recipient_name(profile: Optional[dict], email: Optional[str]) -> str:
    if profile and profile.get("full_name"):
        return profile["full_name"]
    return email or "there"
