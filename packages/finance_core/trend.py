from typing import Sequence

from packages.finance_core.models import MonthBucket, Trend
from packages.finance_core.months import round_half_up

TREND_THRESHOLD = 5.0


def detect_trend(buckets: Sequence[MonthBucket]) -> Trend:
    """Compare the balance of the last month with the month before it."""
    if len(buckets) < 2:
        return Trend(status="insufficient_data", message="Not enough data to compare months")

    previous = buckets[-2].balance
    last = buckets[-1].balance
    if previous == 0:
        return Trend(status="no_prior_history", message="No prior history to compare against")

    percentage = (last - previous) / abs(previous) * 100
    rounded = round_half_up(percentage, 1)

    if percentage > TREND_THRESHOLD:
        return Trend(status="improving", percentage=rounded, message="You are saving more!")
    if percentage < -TREND_THRESHOLD:
        return Trend(
            status="worsening",
            percentage=rounded,
            message="Spending increased over the last month",
        )
    return Trend(status="stable", percentage=rounded, message="Your finances are stable")
