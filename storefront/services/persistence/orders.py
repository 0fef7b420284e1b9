"""Order persistence service."""
import uuid
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.orm import selectinload

from storefront.db.models import Order, OrderItem
from storefront.services.ordering.models import AssembledOrder
from storefront.services.pricing.models import utcnow

STATUS_PENDING = "pending"
STATUS_PLACED = "placed"


class OrderPersistenceService:
    """Service for persisting order data."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_order(
        self,
        assembled: AssembledOrder,
        customer_name: str,
        customer_contact: str,
        payment_method: str,
        status: str,
        gateway_order_id: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> Order:
        """Insert an order and its line snapshots in one transaction."""
        order = Order(
            order_id=str(uuid.uuid4()),
            gateway_order_id=gateway_order_id,
            seller_id=assembled.seller_id,
            customer_name=customer_name,
            customer_contact=customer_contact,
            total_amount=assembled.total,
            status=status,
            payment_method=payment_method,
            transaction_id=transaction_id,
            estimated_delivery_time=assembled.estimated_delivery_minutes,
            estimated_time_unit="minutes",
            created_at=utcnow(),
        )
        order.items = [OrderItem(**line.model_dump()) for line in assembled.line_items]
        self.db.add(order)
        await self.db.commit()
        return await self.get_order_by_order_id(order.order_id)

    async def get_order_by_order_id(self, order_id: str) -> Optional[Order]:
        """Get order by internal order ID with items."""
        result = await self.db.execute(
            select(Order)
            .where(Order.order_id == order_id)
            .options(selectinload(Order.items))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_order_by_gateway_id(
        self, gateway_order_id: str, status: Optional[str] = None
    ) -> Optional[Order]:
        """Get order by gateway order ID, optionally restricted to a status."""
        query = select(Order).where(Order.gateway_order_id == gateway_order_id)
        if status is not None:
            query = query.where(Order.status == status)
        result = await self.db.execute(
            query.options(selectinload(Order.items)).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def mark_order_placed(self, gateway_order_id: str, transaction_id: str) -> bool:
        """
        Move a pending gateway order to placed.

        The update is filtered on the pending status, so only one of several
        concurrent confirmations can match.

        Returns:
            True if this call performed the transition
        """
        result = await self.db.execute(
            update(Order)
            .where(
                Order.gateway_order_id == gateway_order_id,
                Order.status == STATUS_PENDING,
            )
            .values(
                status=STATUS_PLACED,
                transaction_id=transaction_id,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        return result.rowcount == 1
