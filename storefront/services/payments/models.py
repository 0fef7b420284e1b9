"""Payment models."""
from typing import Optional

from pydantic import Field

from storefront.services.ordering.models import CamelModel


class GatewayOrderHandle(CamelModel):
    """Returned to the client to drive the gateway's checkout."""

    internal_order_id: str
    gateway_order_id: str
    amount_minor_units: int
    currency: str
    key_id: Optional[str] = None


class PaymentConfirmation(CamelModel):
    """Checkout callback data to be verified."""

    gateway_order_id: str = Field(min_length=1)
    gateway_payment_id: str = Field(min_length=1)
    gateway_signature: str = Field(min_length=1)
