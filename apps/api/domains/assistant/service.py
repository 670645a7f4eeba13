"""Assistant service — assemble the caller's financial context."""

from datetime import date

from apps.api.core.repository import FinanceRepository
from packages.finance_core.aggregator import summarize
from packages.finance_core.card_scorer import assess_card
from packages.finance_core.context import build_financial_context
from packages.finance_core.goal_projector import project_goal
from packages.finance_core.models import Transaction


def load_context(
    repository: FinanceRepository, currency_symbol: str
) -> tuple[list[Transaction], str]:
    """The caller's transactions and the bounded context block built from them."""
    transactions = repository.list_transactions()
    cards = repository.list_cards()
    goals = repository.list_goals()
    today = date.today()

    context = build_financial_context(
        summarize(transactions, cards),
        cards=[assess_card(card) for card in cards],
        goals=[
            project_goal(goal, transactions, cards, today=today, include_history=False)
            for goal in goals
        ],
        currency_symbol=currency_symbol,
    )
    return transactions, context
