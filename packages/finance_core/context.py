"""Financial context and prompts for the AI assistant.

The context block is bounded: at most ``max_items`` categories, cards and
goals are listed, largest first, so the prompt size does not grow with the
user's history.
"""

from typing import Sequence

from packages.finance_core.models import CardAssessment, GoalProjection, PeriodSummary

MAX_CONTEXT_ITEMS = 10

NO_DATA_ANALYSIS = (
    "You have no transactions recorded yet. Add a few transactions to receive "
    "insights about your spending!"
)

CHAT_GUIDELINES = """Guidelines:
- Be direct and helpful in your answers
- Use markdown formatting to keep answers readable
- Highlight important information in **bold**
- Use lists where appropriate
- Give practical, actionable tips
- Be empathetic and motivating
- If there is not enough data, say so constructively"""

ANALYSIS_INSTRUCTIONS = """Provide a detailed analysis highlighting:
1. Where the user spends the most money (percentages)
2. Categories with excessive spending
3. A specific look at credit card spending
4. Concrete saving suggestions
5. Positive and negative points of the user's financial behaviour"""


def _money(value: float, symbol: str) -> str:
    return f"{symbol} {value:.2f}"


def build_financial_context(
    summary: PeriodSummary,
    cards: Sequence[CardAssessment] = (),
    goals: Sequence[GoalProjection] = (),
    currency_symbol: str = "R$",
    max_items: int = MAX_CONTEXT_ITEMS,
) -> str:
    lines = [
        "User's financial context:",
        f"- Total income: {_money(summary.income, currency_symbol)}",
        f"- Total expenses: {_money(summary.expense, currency_symbol)}",
        f"  - Transaction expenses: {_money(summary.transaction_expense, currency_symbol)}",
        f"  - Credit card expenses: {_money(summary.card_expense, currency_symbol)}",
        f"- Balance: {_money(summary.balance, currency_symbol)}",
        f"- Number of transactions: {summary.transaction_count}",
        f"- Number of credit cards: {summary.card_count}",
        "",
        "Spending by category:",
    ]
    if summary.categories:
        lines.extend(
            f"- {share.name}: {_money(share.value, currency_symbol)} ({share.percentage:.1f}%)"
            for share in summary.categories[:max_items]
        )
    else:
        lines.append("- no categorized expenses")

    if cards:
        lines += ["", "Credit cards:"]
        ranked = sorted(cards, key=lambda card: card.used_limit, reverse=True)
        for card in ranked[:max_items]:
            usage = (
                f"{card.usage_percentage:.1f}%" if card.usage_percentage is not None else "n/a"
            )
            score = str(card.score) if card.score is not None else "unscored"
            lines.append(
                f"- {card.name} ({card.brand or 'no brand'}): "
                f"used {_money(card.used_limit, currency_symbol)} of "
                f"{_money(card.credit_limit, currency_symbol)} ({usage}), score {score}, "
                f"closes on day {card.closing_day}, due on day {card.due_day}"
            )

    if goals:
        lines += ["", "Financial goals:"]
        for goal in goals[:max_items]:
            target_date = (
                goal.target_date.strftime("%d/%m/%Y") if goal.target_date else "no target date"
            )
            lines.append(
                f"- {goal.name}: {_money(goal.current_progress, currency_symbol)} of "
                f"{_money(goal.target_amount, currency_symbol)} "
                f"({goal.progress_percentage:.1f}%), remaining "
                f"{_money(goal.remaining, currency_symbol)}, target date {target_date}"
            )

    return "\n".join(lines)


def chat_system_prompt(context: str) -> str:
    return (
        "You are a smart and friendly financial assistant. Use the financial "
        "context provided to answer the user's questions clearly and objectively."
        f"\n\n{context}\n\n{CHAT_GUIDELINES}"
    )


def analysis_prompt(context: str) -> str:
    return (
        "You are a smart financial assistant. Analyse the user's financial data "
        "and give useful, actionable insights about their spending habits. Be "
        "direct and objective, highlighting the most important points."
        f"\n\n{ANALYSIS_INSTRUCTIONS}\n\n{context}"
    )
