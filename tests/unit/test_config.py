"""Unit tests for settings and settings-driven dependencies."""
from storefront.core import dependencies
from storefront.core.config import Settings
from storefront.db.database import to_async_url
from storefront.services.payments.gateway import RazorpayGateway


class TestSettings:
    """Test settings defaults and overrides."""

    def test_defaults(self, test_settings):
        assert test_settings.razorpay_base_url == "https://api.razorpay.com/v1"
        assert test_settings.gateway_currency == "INR"
        assert test_settings.gateway_timeout_seconds == 10.0
        assert test_settings.port == 8084

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///./orders.db")
        monkeypatch.setenv("GATEWAY_CURRENCY", "USD")

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite:///./orders.db"
        assert settings.gateway_currency == "USD"

    def test_async_url(self):
        assert to_async_url("postgresql://u:p@db/orders") == "postgresql+asyncpg://u:p@db/orders"
        assert to_async_url("sqlite:///./orders.db") == "sqlite+aiosqlite:///./orders.db"
        assert to_async_url("sqlite+aiosqlite:///:memory:") == "sqlite+aiosqlite:///:memory:"


class TestGatewayDependency:
    """Test the gateway is only built when both keys are configured."""

    def test_configured(self, monkeypatch, test_settings):
        monkeypatch.setattr(dependencies, "settings", test_settings)

        gateway = dependencies.get_payment_gateway()

        assert isinstance(gateway, RazorpayGateway)
        assert gateway.key_id == "rzp_test_key"
        assert dependencies.get_signing_secret() == "rzp_test_secret"

    def test_missing_secret(self, monkeypatch, test_settings):
        monkeypatch.setattr(
            dependencies, "settings", test_settings.model_copy(update={"razorpay_key_secret": None})
        )

        assert dependencies.get_payment_gateway() is None
        assert dependencies.get_signing_secret() is None
