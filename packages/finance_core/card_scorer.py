"""Credit-card health scoring.

The score is piecewise in the usage percentage U = 100 * used / limit,
steepest between 50% and 90%, plus a bonus of up to 10 points for unused
limit. Over-limit cards are not clamped: their bonus turns negative and
the final score can drop below zero.
"""

import math
from typing import Optional

from packages.finance_core.models import CardAssessment, CreditCard, ScoreTier
from packages.finance_core.months import round_half_up

HIGH_USAGE_THRESHOLD = 70.0
LOW_USAGE_THRESHOLD = 30.0
LOW_SCORE_THRESHOLD = 50
GOOD_SCORE_THRESHOLD = 80

REDUCE_USAGE = "Reduce card usage below 70% of the limit"
OPTIMAL_USAGE = "Your usage is optimal, keep it up to maintain a high score"
PAY_ON_TIME = "Pay your bills on time to improve your score"


class UnscorableCardError(ZeroDivisionError):
    """Raised for a card with a zero credit limit."""


def usage_percentage(used_limit: float, credit_limit: float) -> float:
    if credit_limit == 0:
        raise UnscorableCardError("credit limit is zero, usage is undefined")
    return used_limit / credit_limit * 100


def _base_score(usage: float) -> float:
    if usage > 90:
        return 20 + (100 - usage) * 0.5
    if usage > 70:
        return 30 + (90 - usage) * 1.5
    if usage > 50:
        return 50 + (70 - usage) * 1.5
    if usage > 30:
        return 70 + (50 - usage) * 1.0
    return 85 + (30 - usage) * 0.5


def score_card(used_limit: float, credit_limit: float) -> int:
    """Health score for one card, at most 100.

    Example: limit 1000, used 200 -> U=20, base 90, bonus 8 -> 98.
    """
    usage = usage_percentage(used_limit, credit_limit)
    available = credit_limit - used_limit
    bonus = min(10.0, available / credit_limit * 10)
    # Half-up rounding, -2.5 -> -2
    return min(100, math.floor(_base_score(usage) + bonus + 0.5))


def card_recommendations(usage: float, score: int) -> list[str]:
    recommendations = []
    if usage > HIGH_USAGE_THRESHOLD:
        recommendations.append(REDUCE_USAGE)
    if usage < LOW_USAGE_THRESHOLD:
        recommendations.append(OPTIMAL_USAGE)
    if score < LOW_SCORE_THRESHOLD:
        recommendations.append(PAY_ON_TIME)
    return recommendations


def score_tier(score: Optional[int]) -> ScoreTier:
    if score is None:
        return "unscored"
    if score >= GOOD_SCORE_THRESHOLD:
        return "good"
    if score >= LOW_SCORE_THRESHOLD:
        return "fair"
    return "poor"


def assess_card(card: CreditCard) -> CardAssessment:
    """Score a card, reporting it as unscored when its limit is zero."""
    try:
        usage = usage_percentage(card.used_limit, card.credit_limit)
        score = score_card(card.used_limit, card.credit_limit)
    except UnscorableCardError:
        usage, score = None, None

    return CardAssessment(
        card_id=card.id,
        name=card.name,
        brand=card.brand,
        credit_limit=card.credit_limit,
        used_limit=card.used_limit,
        available_limit=round_half_up(card.available_limit),
        usage_percentage=round_half_up(usage, 1) if usage is not None else None,
        score=score,
        tier=score_tier(score),
        closing_day=card.closing_day,
        due_day=card.due_day,
        recommendations=card_recommendations(usage, score) if score is not None else [],
    )
