"""Half-up rounding for billed amounts."""
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round to `digits` decimal places, ties away from zero.

    The float is taken at its exact binary value, so 0.625 rounds to 0.63
    while 2.675 (stored just below) rounds to 2.67.
    """
    exponent = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))
