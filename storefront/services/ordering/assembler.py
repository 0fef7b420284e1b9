"""Order assembly: server-side pricing of every requested line."""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from storefront.db.models import Seller
from storefront.services.ordering.errors import NotFoundError
from storefront.services.ordering.models import AssembledOrder, LineRequest, OrderLineItem
from storefront.services.persistence.catalog import CatalogPersistenceService, SellerPersistenceService
from storefront.services.pricing.engine import (
    DEFAULT_UNIT,
    PricingEngine,
    as_number,
    item_unit,
    reference_price,
)
from storefront.services.pricing.rounding import round_half_up

logger = logging.getLogger(__name__)

# Added to the slowest item's preparation time
FIXED_ADDITIONAL_MINUTES = 5
SUBTOTAL_TOLERANCE = 0.01


class OrderAssembler:
    """Prices an order's lines and accumulates the total and delivery estimate."""

    def __init__(
        self,
        sellers: SellerPersistenceService,
        catalog: CatalogPersistenceService,
        pricing_engine: Optional[PricingEngine] = None,
    ):
        self.sellers = sellers
        self.catalog = catalog
        self.pricing_engine = pricing_engine or PricingEngine()

    async def get_seller(self, seller_id: int) -> Seller:
        """Resolve a seller or raise NotFoundError."""
        seller = await self.sellers.get_seller_by_id(seller_id)
        if seller is None:
            raise NotFoundError(f"Seller not found: {seller_id}")
        return seller

    async def assemble(
        self,
        seller_id: int,
        line_requests: List[LineRequest],
        now: Optional[datetime] = None,
    ) -> AssembledOrder:
        """
        Price every requested line for a seller.

        Lines are resolved in request order and the first unknown item fails
        the whole assembly; partial orders are never produced.

        Args:
            seller_id: Seller the order is placed with
            line_requests: Requested lines
            now: Evaluation time for subscription checks

        Returns:
            AssembledOrder with server-computed subtotals and total
        """
        seller = await self.get_seller(seller_id)

        line_items = []
        total = 0.0
        max_estimated_time = 0.0
        for request in line_requests:
            line, estimated_time = await self._price_line(seller, request, now)
            line_items.append(line)
            total += line.subtotal
            if estimated_time > max_estimated_time:
                max_estimated_time = estimated_time

        total = round_half_up(total, 2)
        logger.info(
            f"Assembled order for seller {seller_id}: {len(line_items)} lines, total {total:.2f}"
        )
        return AssembledOrder(
            seller_id=seller.id,
            line_items=line_items,
            total=total,
            estimated_delivery_minutes=max_estimated_time + FIXED_ADDITIONAL_MINUTES,
        )

    async def _price_line(
        self, seller: Seller, request: LineRequest, now: Optional[datetime]
    ) -> Tuple[OrderLineItem, float]:
        item = await self.catalog.get_item(request.item_id, seller_id=seller.id)
        if item is None:
            raise NotFoundError(f"Catalog item not found: {request.item_id}")

        quote = self.pricing_engine.quote_for_seller(
            item, request.quantity, request.unit, seller, now=now
        )

        if request.subtotal is not None and abs(request.subtotal - quote.subtotal) > SUBTOTAL_TOLERANCE:
            logger.warning(
                f"Subtotal mismatch for item {item.name!r} (ID: {item.id}): client sent "
                f"{request.subtotal:.2f}, server calculated {quote.subtotal:.2f}. Using server value."
            )

        estimated_time = as_number(item.estimated_time)
        if estimated_time is None:
            estimated_time = 0.0

        line = OrderLineItem(
            item_id=item.id,
            name=item.name,
            quantity=request.quantity,
            effective_quantity=quote.chargeable_quantity,
            unit=request.unit or item_unit(item) or DEFAULT_UNIT,
            price=quote.unit_price,
            original_price=as_number(item.price),
            price_before_discount=reference_price(item.price),
            discount_type=item.discount_type,
            discount_value=as_number(item.discount_value),
            other_discount_text=item.other_discount_text,
            tags=[str(tag) for tag in (item.tags or [])],
            subtotal=quote.subtotal,
            customer_comment=request.feedback or "",
            customer_liked=bool(request.liked),
            customer_rating=request.rating or None,
            estimated_time=estimated_time,
            estimated_time_unit=item.estimated_time_unit or "minutes",
            subscription_applied=quote.subscription_markup_applied,
        )
        return line, estimated_time


def meaningful_feedback(request: LineRequest) -> bool:
    """True when a line carries a comment, a non-zero rating or a like."""
    has_comment = bool(request.feedback and request.feedback.strip())
    has_rating = request.rating is not None and request.rating != 0
    return has_comment or has_rating or bool(request.liked)
