"""Order placement and payment API endpoints."""
import logging
from fastapi import APIRouter, Depends, Request, HTTPException

from storefront.core.dependencies import get_payment_protocol
from storefront.services.ordering.errors import OrderingError
from storefront.services.ordering.models import OrderRequest, OrderSnapshot
from storefront.services.payments.models import GatewayOrderHandle, PaymentConfirmation
from storefront.services.payments.protocol import PaymentCommitProtocol


router = APIRouter()
logger = logging.getLogger(__name__)


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.post("/api/orders", response_model=OrderSnapshot, status_code=201)
async def place_order(
    order_request: OrderRequest,
    request: Request,
    protocol: PaymentCommitProtocol = Depends(get_payment_protocol),
):
    """Place a cash / pre-confirmed order."""
    logger.info(
        f"[PLACE ORDER] Request received - seller: {order_request.seller_id}, "
        f"customer: {order_request.customer_name}, payment: {order_request.payment_method}, "
        f"Client: {_client_host(request)}"
    )

    try:
        order = await protocol.place_direct_order(order_request)
        logger.info(f"[PLACE ORDER] Order {order.order_id} placed, total {order.total_amount:.2f}")
        return OrderSnapshot.model_validate(order)

    except OrderingError as e:
        logger.warning(f"[PLACE ORDER] Rejected - {type(e).__name__}: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(
            f"[PLACE ORDER] Error processing order - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Failed to process order: {str(e)}")


@router.post("/api/payments/orders", response_model=GatewayOrderHandle, status_code=201)
async def initiate_payment_order(
    order_request: OrderRequest,
    request: Request,
    protocol: PaymentCommitProtocol = Depends(get_payment_protocol),
):
    """Stage an online-payment order and open the matching gateway order."""
    logger.info(
        f"[INITIATE PAYMENT] Request received - seller: {order_request.seller_id}, "
        f"customer: {order_request.customer_name}, Client: {_client_host(request)}"
    )

    try:
        handle = await protocol.initiate_gateway_order(order_request)
        logger.info(
            f"[INITIATE PAYMENT] Order {handle.internal_order_id} pending on "
            f"gateway order {handle.gateway_order_id} for {handle.amount_minor_units} {handle.currency}"
        )
        return handle

    except OrderingError as e:
        logger.warning(f"[INITIATE PAYMENT] Rejected - {type(e).__name__}: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(
            f"[INITIATE PAYMENT] Error initiating order - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Failed to initiate order: {str(e)}")


@router.post("/api/payments/verify", response_model=OrderSnapshot)
async def verify_payment(
    confirmation: PaymentConfirmation,
    request: Request,
    protocol: PaymentCommitProtocol = Depends(get_payment_protocol),
):
    """Verify a checkout signature and finalize the pending order."""
    logger.info(
        f"[VERIFY PAYMENT] Request received - gateway order: {confirmation.gateway_order_id}, "
        f"Client: {_client_host(request)}"
    )

    try:
        order = await protocol.confirm_gateway_payment(confirmation)
        logger.info(f"[VERIFY PAYMENT] Order {order.order_id} placed")
        return OrderSnapshot.model_validate(order)

    except OrderingError as e:
        logger.warning(f"[VERIFY PAYMENT] Rejected - {type(e).__name__}: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(
            f"[VERIFY PAYMENT] Error finalizing order - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Failed to verify payment: {str(e)}")
