"""Monthly report document model and e-mail body.

The document is deliberately flat (summary, category and transaction rows)
so PDF/spreadsheet writers and the e-mail transport can consume it without
knowing anything about the aggregation rules.
"""

from datetime import date
from html import escape
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from packages.finance_core.aggregator import summarize
from packages.finance_core.models import PeriodSummary, Transaction
from packages.finance_core.months import (
    DEFAULT_LOCALE,
    first_of_month,
    last_of_month,
    month_title,
    round_half_up,
)

UNCATEGORIZED = "Uncategorized"
NEGATIVE_BALANCE_TIP = (
    "Your expenses exceeded your income this month. Consider reviewing your spending!"
)
POSITIVE_BALANCE_TIP = "Congratulations! You managed to save this month. Keep it up!"


class NoTransactionsError(LookupError):
    """The requested period has no transactions to report on."""


class SummaryRow(BaseModel):
    label: str
    value: float


class CategoryRow(BaseModel):
    name: str
    value: float
    percentage: float


class TransactionRow(BaseModel):
    date: date
    description: str
    category: str
    type: str
    amount: float


class ReportDocument(BaseModel):
    title: str
    period_title: str
    period_start: date
    period_end: date
    summary: PeriodSummary
    summary_rows: list[SummaryRow]
    category_rows: list[CategoryRow]
    transaction_rows: list[TransactionRow] = Field(default_factory=list)
    transaction_count: int
    tip: str
    file_stem: str

    def filename(self, extension: str) -> str:
        return f"{self.file_stem}.{extension.lstrip('.')}"


def report_file_stem(period_title: str) -> str:
    return "relatorio-" + "-".join(period_title.split())


def compose_monthly_report(
    transactions: Sequence[Transaction],
    month: Optional[date] = None,
    locale: str = DEFAULT_LOCALE,
) -> ReportDocument:
    """Build the report for the calendar month containing ``month``.

    Raises NoTransactionsError before anything is composed when the month
    has no transactions.
    """
    month = month or date.today()
    start, end = first_of_month(month), last_of_month(month)
    in_period = [tx for tx in transactions if start <= tx.date <= end]
    if not in_period:
        raise NoTransactionsError("No transactions found for this period")

    summary = summarize(in_period)
    period_title = month_title(month.year, month.month, locale)

    transaction_rows = [
        TransactionRow(
            date=tx.date,
            description=tx.description,
            category=tx.category_name or UNCATEGORIZED,
            type="Income" if tx.is_income else "Expense",
            amount=round_half_up(tx.base_amount),
        )
        for tx in sorted(in_period, key=lambda tx: tx.date, reverse=True)
    ]

    return ReportDocument(
        title="Financial Report",
        period_title=period_title,
        period_start=start,
        period_end=end,
        summary=summary,
        summary_rows=[
            SummaryRow(label="Income", value=summary.income),
            SummaryRow(label="Expenses", value=summary.expense),
            SummaryRow(label="Balance", value=summary.balance),
        ],
        category_rows=[
            CategoryRow(name=share.name, value=share.value, percentage=share.percentage)
            for share in summary.categories
        ],
        transaction_rows=transaction_rows,
        transaction_count=summary.transaction_count,
        tip=NEGATIVE_BALANCE_TIP if summary.balance < 0 else POSITIVE_BALANCE_TIP,
        file_stem=report_file_stem(period_title),
    )


def email_subject(document: ReportDocument) -> str:
    return f"{document.title} - {document.period_title}"


def render_email_html(
    document: ReportDocument, recipient_name: str, currency_symbol: str = "R$"
) -> str:
    """HTML body for the report e-mail."""

    def money(value: float) -> str:
        return f"{escape(currency_symbol)} {value:.2f}"

    balance_color = "#10b981" if document.summary.balance >= 0 else "#ef4444"
    category_rows = "".join(
        "<tr>"
        f'<td style="padding: 8px; border-bottom: 1px solid #e5e7eb;">{escape(row.name)}</td>'
        f'<td style="padding: 8px; border-bottom: 1px solid #e5e7eb; text-align: right;">{money(row.value)}</td>'
        f'<td style="padding: 8px; border-bottom: 1px solid #e5e7eb; text-align: right;">{row.percentage:.1f}%</td>'
        "</tr>"
        for row in document.category_rows
    )
    title = escape(f"{document.title} - {document.period_title}")

    return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>{title}</title>
  </head>
  <body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1 style="color: #6366f1;">{title}</h1>
    <p>Hello {escape(recipient_name)}!</p>
    <p>Here is the summary of your finances for {escape(document.period_title)}:</p>
    <table style="width: 100%; border-collapse: collapse;">
      <tr><td style="padding: 10px; font-weight: bold;">Income:</td>
          <td style="padding: 10px; text-align: right; color: #10b981;">{money(document.summary.income)}</td></tr>
      <tr><td style="padding: 10px; font-weight: bold;">Expenses:</td>
          <td style="padding: 10px; text-align: right; color: #ef4444;">{money(document.summary.expense)}</td></tr>
      <tr><td style="padding: 10px; font-weight: bold;">Balance:</td>
          <td style="padding: 10px; text-align: right; color: {balance_color};">{money(document.summary.balance)}</td></tr>
    </table>
    <h3>Spending by Category</h3>
    <table style="width: 100%; border-collapse: collapse;">
      <thead>
        <tr style="background-color: #6366f1; color: white;">
          <th style="padding: 10px; text-align: left;">Category</th>
          <th style="padding: 10px; text-align: right;">Amount</th>
          <th style="padding: 10px; text-align: right;">%</th>
        </tr>
      </thead>
      <tbody>{category_rows}</tbody>
    </table>
    <p style="margin-top: 30px; color: #6b7280; font-size: 14px;">Total transactions: {document.transaction_count}</p>
    <div style="margin-top: 30px; padding: 15px; background-color: #eff6ff; border-left: 4px solid #6366f1;">
      <p style="margin: 0;"><strong>Tip:</strong> {escape(document.tip)}</p>
    </div>
  </body>
</html>
"""
