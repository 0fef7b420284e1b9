"""Pricing models."""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching stored timestamps."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """Drop timezone info after converting aware datetimes to UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class SellerSubscription(BaseModel):
    """Subscription view of a seller record."""

    model_config = ConfigDict(frozen=True)

    has_subscribed: bool = False
    expiry: Optional[datetime] = None

    def is_active(self, now: Optional[datetime] = None) -> bool:
        """Active while subscribed and the expiry is strictly in the future."""
        if not self.has_subscribed or self.expiry is None:
            return False
        now = as_naive_utc(now) if now is not None else utcnow()
        return now < as_naive_utc(self.expiry)

    @classmethod
    def from_seller(cls, seller) -> "SellerSubscription":
        return cls(
            has_subscribed=bool(getattr(seller, "has_subscribed", False)),
            expiry=getattr(seller, "subscription_expiry", None),
        )


class PriceQuote(BaseModel):
    """Authoritative per-item price computed on the server."""

    model_config = ConfigDict(frozen=True)

    unit_price: float
    subtotal: float
    chargeable_quantity: float
    subscription_markup_applied: bool = False
