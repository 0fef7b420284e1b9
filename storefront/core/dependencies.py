"""FastAPI dependencies."""
from typing import Optional
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.config import settings
from storefront.db.database import get_db
from storefront.services.ordering.assembler import OrderAssembler
from storefront.services.payments.gateway import PaymentGateway, RazorpayGateway
from storefront.services.payments.protocol import PaymentCommitProtocol
from storefront.services.persistence.catalog import CatalogPersistenceService, SellerPersistenceService
from storefront.services.persistence.feedback import FeedbackPersistenceService
from storefront.services.persistence.orders import OrderPersistenceService


def get_payment_gateway() -> Optional[PaymentGateway]:
    """Get the configured payment gateway, or None if keys are missing."""
    if not settings.razorpay_key_id or not settings.razorpay_key_secret:
        return None
    return RazorpayGateway(
        key_id=settings.razorpay_key_id,
        key_secret=settings.razorpay_key_secret,
        base_url=settings.razorpay_base_url,
        timeout=settings.gateway_timeout_seconds,
    )


def get_signing_secret() -> Optional[str]:
    """Get the secret used to verify checkout signatures."""
    return settings.razorpay_key_secret


def get_order_assembler(db: AsyncSession = Depends(get_db)) -> OrderAssembler:
    """Get order assembler bound to the request's session."""
    return OrderAssembler(
        sellers=SellerPersistenceService(db),
        catalog=CatalogPersistenceService(db),
    )


def get_payment_protocol(
    db: AsyncSession = Depends(get_db),
    assembler: OrderAssembler = Depends(get_order_assembler),
    gateway: Optional[PaymentGateway] = Depends(get_payment_gateway),
    signing_secret: Optional[str] = Depends(get_signing_secret),
) -> PaymentCommitProtocol:
    """Get payment commit protocol bound to the request's session."""
    return PaymentCommitProtocol(
        assembler=assembler,
        orders=OrderPersistenceService(db),
        feedback=FeedbackPersistenceService(db),
        gateway=gateway,
        signing_secret=signing_secret,
        currency=settings.gateway_currency,
    )
