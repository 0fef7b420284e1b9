"""Direct and gateway-mediated order commit."""
import logging
import uuid
from datetime import datetime
from typing import Optional

from storefront.db.models import Order
from storefront.services.ordering.assembler import OrderAssembler, meaningful_feedback
from storefront.services.ordering.errors import (
    GatewayUnavailableError,
    NotFoundError,
    OrderValidationError,
    SignatureMismatchError,
)
from storefront.services.ordering.models import OrderRequest
from storefront.services.payments.gateway import PaymentGateway
from storefront.services.payments.models import GatewayOrderHandle, PaymentConfirmation
from storefront.services.payments.signature import verify_signature
from storefront.services.pricing.rounding import round_half_up
from storefront.services.persistence.feedback import FeedbackPersistenceService
from storefront.services.persistence.orders import (
    STATUS_PENDING,
    STATUS_PLACED,
    OrderPersistenceService,
)

logger = logging.getLogger(__name__)

ONLINE_PAYMENT_METHOD = "online"
TOTAL_TOLERANCE = 0.02


def to_minor_units(amount: float) -> int:
    """Convert a major-unit amount (e.g. rupees) to minor units (paise)."""
    return int(round_half_up(amount * 100))


class PaymentCommitProtocol:
    """
    Commits orders either directly or through the payment gateway.

    Direct orders (cash, pre-confirmed transfers) are written as placed.
    Gateway orders are written as pending and only move to placed once the
    checkout signature has been verified.
    """

    def __init__(
        self,
        assembler: OrderAssembler,
        orders: OrderPersistenceService,
        feedback: FeedbackPersistenceService,
        gateway: Optional[PaymentGateway] = None,
        signing_secret: Optional[str] = None,
        currency: str = "INR",
    ):
        self.assembler = assembler
        self.orders = orders
        self.feedback = feedback
        self.gateway = gateway
        self.signing_secret = signing_secret
        self.currency = currency

    async def place_direct_order(
        self, request: OrderRequest, now: Optional[datetime] = None
    ) -> Order:
        """Price and persist a non-gateway order as placed."""
        if request.payment_method == ONLINE_PAYMENT_METHOD:
            raise OrderValidationError(
                "Online payments must go through the payment gateway order flow"
            )

        assembled = await self.assembler.assemble(request.seller_id, request.items, now=now)

        if request.total_amount is not None and abs(request.total_amount - assembled.total) > TOTAL_TOLERANCE:
            logger.warning(
                f"Total amount mismatch: client sent {request.total_amount:.2f}, "
                f"server calculated {assembled.total:.2f}. Using server value."
            )

        # Feedback is staged on the session and written by the order's commit
        staged = await self._stage_feedback(request)

        order = await self.orders.create_order(
            assembled,
            customer_name=request.customer_name,
            customer_contact=request.customer_contact,
            payment_method=request.payment_method,
            status=STATUS_PLACED,
            transaction_id=request.transaction_id,
        )
        logger.info(f"Order {order.order_id} placed directly ({request.payment_method})")
        if staged:
            logger.info(f"Recorded {staged} feedback entries from order {order.order_id}")
        return order

    async def _stage_feedback(self, request: OrderRequest) -> int:
        staged = 0
        for line in request.items:
            if not meaningful_feedback(line):
                continue
            await self.feedback.add_feedback(
                item_id=line.item_id,
                seller_id=request.seller_id,
                customer_name=request.customer_name,
                comment=line.feedback or "",
                rating=line.rating or None,
                liked=bool(line.liked),
                commit=False,
            )
            staged += 1
        return staged

    async def initiate_gateway_order(
        self, request: OrderRequest, now: Optional[datetime] = None
    ) -> GatewayOrderHandle:
        """
        Price the order, open a gateway order for the server total and stage
        the order as pending.

        Raises:
            OrderValidationError: payment method is not online
            NotFoundError: unknown seller or catalog item
            GatewayUnavailableError: gateway not configured or upstream failure
        """
        if request.payment_method != ONLINE_PAYMENT_METHOD:
            raise OrderValidationError(
                f"Gateway orders require payment method '{ONLINE_PAYMENT_METHOD}'"
            )
        if self.gateway is None:
            raise GatewayUnavailableError("Payment gateway is not configured")

        assembled = await self.assembler.assemble(request.seller_id, request.items, now=now)
        amount = to_minor_units(assembled.total)
        gateway_order = await self.gateway.create_order(
            amount_minor_units=amount,
            currency=self.currency,
            receipt=str(uuid.uuid4()),
        )

        order = await self.orders.create_order(
            assembled,
            customer_name=request.customer_name,
            customer_contact=request.customer_contact,
            payment_method=request.payment_method,
            status=STATUS_PENDING,
            gateway_order_id=gateway_order.id,
        )
        logger.info(f"Order {order.order_id} pending on gateway order {gateway_order.id}")

        return GatewayOrderHandle(
            internal_order_id=order.order_id,
            gateway_order_id=gateway_order.id,
            amount_minor_units=amount,
            currency=self.currency,
            key_id=self.gateway.key_id,
        )

    async def confirm_gateway_payment(self, confirmation: PaymentConfirmation) -> Order:
        """
        Verify the checkout signature and finalize the pending order.

        Raises:
            GatewayUnavailableError: no signing secret configured
            SignatureMismatchError: signature does not verify; nothing is changed
            NotFoundError: no pending order for the gateway order ID
        """
        if not self.signing_secret:
            raise GatewayUnavailableError("Cannot verify payment: gateway secret is not configured")

        if not verify_signature(
            self.signing_secret,
            confirmation.gateway_order_id,
            confirmation.gateway_payment_id,
            confirmation.gateway_signature,
        ):
            logger.error(
                f"Signature verification failed for gateway order {confirmation.gateway_order_id}"
            )
            raise SignatureMismatchError("Payment verification failed. Signature mismatch.")

        transitioned = await self.orders.mark_order_placed(
            confirmation.gateway_order_id, confirmation.gateway_payment_id
        )
        if not transitioned:
            logger.warning(
                f"No pending order for gateway order {confirmation.gateway_order_id}"
            )
            raise NotFoundError("Order not found or already processed")

        order = await self.orders.get_order_by_gateway_id(confirmation.gateway_order_id)
        logger.info(f"Order {order.order_id} placed after verified payment")
        return order
