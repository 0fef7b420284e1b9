"""Order models."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model serialized with camelCase keys on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class LineRequest(CamelModel):
    """One requested line of an order, as sent by the client."""

    item_id: int = Field(gt=0)
    quantity: float = Field(gt=0)
    unit: Optional[str] = None
    subtotal: Optional[float] = None  # client-side figure, advisory only
    feedback: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=0, le=5)
    liked: Optional[bool] = None


class OrderRequest(CamelModel):
    """Order placement / initiation request."""

    seller_id: int = Field(gt=0)
    items: List[LineRequest] = Field(min_length=1)
    total_amount: Optional[float] = None  # client-side figure, advisory only
    customer_name: str = Field(min_length=1)
    customer_contact: str = Field(min_length=1)
    payment_method: str = Field(min_length=1)
    transaction_id: Optional[str] = None


class OrderLineItem(CamelModel):
    """Line snapshot taken at order time."""

    model_config = ConfigDict(frozen=True)

    item_id: int
    name: str
    quantity: float
    effective_quantity: float
    unit: str
    price: float
    original_price: Optional[float] = None
    price_before_discount: float
    discount_type: Optional[str] = None
    discount_value: Optional[float] = None
    other_discount_text: Optional[str] = None
    tags: List[str] = []
    subtotal: float
    customer_comment: str = ""
    customer_liked: bool = False
    customer_rating: Optional[int] = None
    estimated_time: float = 0
    estimated_time_unit: str = "minutes"
    subscription_applied: bool = False


class AssembledOrder(CamelModel):
    """Server-priced order, ready to be persisted."""

    seller_id: int
    line_items: List[OrderLineItem]
    total: float
    estimated_delivery_minutes: float


class OrderSnapshot(CamelModel):
    """Serialized order aggregate."""

    order_id: str
    gateway_order_id: Optional[str] = None
    seller_id: int
    customer_name: str
    customer_contact: str
    items: List[OrderLineItem] = []
    total_amount: float
    status: str
    payment_method: str
    transaction_id: Optional[str] = None
    estimated_delivery_time: float
    estimated_time_unit: str = "minutes"
    created_at: datetime
    updated_at: Optional[datetime] = None


class QuoteRequest(CamelModel):
    """Single-item price quote request."""

    seller_id: int = Field(gt=0)
    item_id: int = Field(gt=0)
    requested_quantity: float = Field(gt=0)
    requested_unit: Optional[str] = None
