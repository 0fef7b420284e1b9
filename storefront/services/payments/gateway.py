"""Payment gateway interface and Razorpay implementation."""
import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from pydantic import BaseModel

from storefront.services.ordering.errors import GatewayUnavailableError

logger = logging.getLogger(__name__)


class GatewayOrder(BaseModel):
    """Order handle returned by the payment gateway."""

    id: str
    amount: int
    currency: str
    receipt: Optional[str] = None


class PaymentGateway(ABC):
    """Abstract base class for payment gateways."""

    key_id: Optional[str] = None

    @abstractmethod
    async def create_order(self, amount_minor_units: int, currency: str, receipt: str) -> GatewayOrder:
        """Create a gateway-side order for an amount in minor currency units."""
        pass


class RazorpayGateway(PaymentGateway):
    """Razorpay Orders API client."""

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        base_url: str = "https://api.razorpay.com/v1",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.key_id = key_id
        self.key_secret = key_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            auth=(self.key_id, self.key_secret),
            timeout=self.timeout,
            transport=self._transport,
        )

    async def create_order(self, amount_minor_units: int, currency: str, receipt: str) -> GatewayOrder:
        """
        Create a Razorpay order.

        Payment capture is left manual; the order is finalized only after the
        checkout signature has been verified on our side.

        Raises:
            GatewayUnavailableError: on transport errors or non-2xx responses
        """
        payload = {
            "amount": amount_minor_units,
            "currency": currency,
            "receipt": receipt,
            "payment_capture": 0,
        }
        try:
            async with self._client() as client:
                response = await client.post("/orders", json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Razorpay order creation failed: {type(e).__name__}: {e}")
            raise GatewayUnavailableError("Payment gateway is unreachable") from e

        if response.status_code >= 400:
            detail = _error_description(response)
            logger.error(f"Razorpay rejected order creation ({response.status_code}): {detail}")
            raise GatewayUnavailableError(f"Payment gateway rejected the order: {detail}")

        data = response.json()
        logger.info(f"Razorpay order created: {data.get('id')}")
        return GatewayOrder(
            id=data["id"],
            amount=data.get("amount", amount_minor_units),
            currency=data.get("currency", currency),
            receipt=data.get("receipt", receipt),
        )


def _error_description(response: httpx.Response) -> str:
    try:
        error = response.json().get("error") or {}
    except ValueError:
        return response.text or "Unknown gateway error"
    return error.get("description") or "Unknown gateway error"
