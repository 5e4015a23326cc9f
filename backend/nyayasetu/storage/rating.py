"""Advocate rating aggregation"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable


def compute_rating(ratings: Iterable[int]) -> tuple[float, int]:
    """Mean rating rounded half-up to one decimal, and the review count.

    No reviews gives ``(0.0, 0)``.
    """
    values = list(ratings)
    if not values:
        return 0.0, 0
    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)), len(values)
