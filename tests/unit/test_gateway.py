"""Unit tests for the Razorpay client and checkout signatures."""
import base64
import hashlib
import hmac
import json
import httpx
import pytest

from storefront.services.ordering.errors import GatewayUnavailableError
from storefront.services.payments.gateway import RazorpayGateway
from storefront.services.payments.signature import compute_signature, verify_signature


def make_gateway(handler) -> RazorpayGateway:
    return RazorpayGateway(
        key_id="rzp_test_key",
        key_secret="rzp_test_secret",
        base_url="https://api.razorpay.test/v1",
        transport=httpx.MockTransport(handler),
    )


class TestRazorpayGateway:
    """Test gateway order creation over HTTP."""

    @pytest.mark.asyncio
    async def test_create_order(self):
        """Test the request shape and the parsed gateway order."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"id": "order_ABC", "amount": 15038, "currency": "INR", "receipt": "r-1", "status": "created"},
            )

        order = await make_gateway(handler).create_order(15038, "INR", "r-1")

        assert order.id == "order_ABC"
        assert order.amount == 15038
        assert order.currency == "INR"
        assert order.receipt == "r-1"

        assert captured["method"] == "POST"
        assert captured["url"] == "https://api.razorpay.test/v1/orders"
        expected_auth = base64.b64encode(b"rzp_test_key:rzp_test_secret").decode()
        assert captured["auth"] == f"Basic {expected_auth}"
        assert captured["body"] == {
            "amount": 15038,
            "currency": "INR",
            "receipt": "r-1",
            "payment_capture": 0,
        }

    @pytest.mark.asyncio
    async def test_rejected_order(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"error": {"code": "BAD_REQUEST_ERROR", "description": "Order amount less than minimum"}},
            )

        with pytest.raises(GatewayUnavailableError) as exc_info:
            await make_gateway(handler).create_order(10, "INR", "r-1")

        assert exc_info.value.status_code == 502
        assert "Order amount less than minimum" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_non_json_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="Service Unavailable")

        with pytest.raises(GatewayUnavailableError) as exc_info:
            await make_gateway(handler).create_order(15038, "INR", "r-1")

        assert "Service Unavailable" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GatewayUnavailableError):
            await make_gateway(handler).create_order(15038, "INR", "r-1")


class TestSignature:
    """Test checkout signature computation and verification."""

    def test_known_digest(self):
        """Test the digest is HMAC-SHA256 over "order|payment"."""
        expected = hmac.new(b"secret", b"order_1|pay_1", hashlib.sha256).hexdigest()

        assert compute_signature("secret", "order_1", "pay_1") == expected

    def test_verify_valid(self):
        signature = compute_signature("secret", "order_1", "pay_1")

        assert verify_signature("secret", "order_1", "pay_1", signature) is True

    def test_verify_wrong_secret(self):
        signature = compute_signature("other", "order_1", "pay_1")

        assert verify_signature("secret", "order_1", "pay_1", signature) is False

    def test_verify_swapped_ids(self):
        signature = compute_signature("secret", "pay_1", "order_1")

        assert verify_signature("secret", "order_1", "pay_1", signature) is False

    def test_verify_malformed_signature(self):
        assert verify_signature("secret", "order_1", "pay_1", "") is False
        assert verify_signature("secret", "order_1", "pay_1", "not-hex-é") is False
