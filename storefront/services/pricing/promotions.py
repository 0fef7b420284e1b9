"""Parser for free-text "buy N get M free" promotions."""
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

# buy <int> get <int> [<unit-word>]
_PROMOTION_PATTERN = re.compile(r"buy (\d+) get (\d+)(?: (\w+))?", re.IGNORECASE)


class PromotionRule(BaseModel):
    """Structured "buy N get M" rule."""

    model_config = ConfigDict(frozen=True)

    buy_quantity: int
    get_quantity: int
    unit: Optional[str] = None


def parse_promotion(text: Any) -> Optional[PromotionRule]:
    """
    Parse a promotion such as "Buy 2 get 1 free" or "buy 1 get 1 kg".

    Returns None for empty, non-text or non-matching input.
    """
    if not text or not isinstance(text, str):
        return None

    match = _PROMOTION_PATTERN.search(text)
    if not match:
        return None

    buy, get, unit = match.groups()
    return PromotionRule(
        buy_quantity=int(buy),
        get_quantity=int(get),
        unit=unit.lower() if unit else None,
    )
