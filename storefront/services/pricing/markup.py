"""Range-based and subscription markups applied on top of catalog prices."""
import math

# Additional markup applied to the banded price
RANGE_PERCENT_MARKUP = 0.03


def range_base_increment(base_price: float) -> float:
    """Band increment for a base price, before the percentage step."""
    if base_price == 0:
        return 0
    if 1 <= base_price <= 5:
        return 1
    if 6 <= base_price <= 10:
        return 2
    if 11 <= base_price <= 30:
        return 3
    if 31 <= base_price <= 60:
        return 5
    if 61 <= base_price <= 90:
        return 7
    if base_price >= 91:
        # +2 for every started 30 above 90
        return 7 + math.ceil((base_price - 90) / 30) * 2
    return 0


def range_markup(base_price: float) -> float:
    """
    Total range markup for a base price.

    The band increment is added first and the 3% step is taken on the
    increased price. The result is not rounded.
    """
    increment = range_base_increment(base_price)
    return increment + (base_price + increment) * RANGE_PERCENT_MARKUP


def subscription_markup(effective_price: float) -> float:
    """Markup charged while the seller's subscription is active."""
    if 0 <= effective_price <= 30:
        return 3
    if 30 < effective_price <= 60:
        return 5
    if 60 < effective_price <= 90:
        return 7
    if 90 < effective_price <= 120:
        return 9
    if effective_price > 120:
        # +2 for every completed 30 above 120
        return 9 + math.floor((effective_price - 120) / 30) * 2
    return 0
