"""Checkout signature verification."""
import hashlib
import hmac


def compute_signature(secret: str, gateway_order_id: str, gateway_payment_id: str) -> str:
    """HMAC-SHA256 hex digest of "<order id>|<payment id>" keyed with the gateway secret."""
    message = f"{gateway_order_id}|{gateway_payment_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


def verify_signature(
    secret: str, gateway_order_id: str, gateway_payment_id: str, signature: str
) -> bool:
    """Constant-time comparison of the expected and supplied signatures."""
    expected = compute_signature(secret, gateway_order_id, gateway_payment_id)
    return hmac.compare_digest(expected.encode(), (signature or "").encode())
