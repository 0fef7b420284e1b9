"""Shared test fixtures and configuration."""
import asyncio
import pytest
import os
from datetime import timedelta
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

# Set test environment variables before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STORE_NAME", "Test Store")

from storefront.main import app
from storefront.db.database import Base, get_db
from storefront.core.config import Settings
from storefront.core.dependencies import get_payment_gateway, get_signing_secret
from storefront.services.ordering.assembler import OrderAssembler
from storefront.services.payments.gateway import GatewayOrder, PaymentGateway
from storefront.services.payments.protocol import PaymentCommitProtocol
from storefront.services.payments.signature import compute_signature
from storefront.services.persistence.catalog import CatalogPersistenceService, SellerPersistenceService
from storefront.services.persistence.feedback import FeedbackPersistenceService
from storefront.services.persistence.orders import OrderPersistenceService
from storefront.services.pricing.models import utcnow


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_KEY_ID = "rzp_test_key"
TEST_KEY_SECRET = "rzp_test_secret"
TEST_GATEWAY_ORDER_ID = "order_TEST0001"


@pytest.fixture
def test_settings():
    """Override settings for testing."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        razorpay_key_id=TEST_KEY_ID,
        razorpay_key_secret=TEST_KEY_SECRET,
        store_name="Test Store",
    )


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(test_db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


async def seed_catalog(db: AsyncSession) -> dict:
    """Create a plain seller, a subscribed seller and a small catalog."""
    sellers = SellerPersistenceService(db)
    catalog = CatalogPersistenceService(db)

    seller = await sellers.create_seller(username="asha", store_name="Asha Foods")
    subscribed = await sellers.create_seller(
        username="ravi",
        store_name="Ravi Snacks",
        has_subscribed=True,
        subscription_expiry=utcnow() + timedelta(days=30),
    )

    thali = await catalog.create_item(
        seller.id, "thali", price=50, unit="piece", estimated_time=20, tags=["veg"]
    )
    rice = await catalog.create_item(
        seller.id, "rice", price=60, weight_unit="kg", estimated_time=10
    )
    samosa = await catalog.create_item(
        seller.id,
        "samosa",
        price=10,
        unit="piece",
        discount_type="other",
        other_discount_text="Buy 2 get 1 free",
        estimated_time=15,
    )
    lassi = await catalog.create_item(
        seller.id, "lassi", price=100, unit="piece", discount_type="%", discount_value=10
    )
    vada = await catalog.create_item(subscribed.id, "vada", price=50, unit="piece", estimated_time=5)

    return {
        "seller": seller,
        "subscribed_seller": subscribed,
        "thali": thali,
        "rice": rice,
        "samosa": samosa,
        "lassi": lassi,
        "vada": vada,
    }


@pytest.fixture
async def catalog_data(test_db):
    """Seeded sellers and catalog items."""
    return await seed_catalog(test_db)


@pytest.fixture
def mock_gateway():
    """Mock payment gateway returning a fixed gateway order."""
    gateway = AsyncMock(spec=PaymentGateway)
    gateway.key_id = TEST_KEY_ID

    async def _create_order(amount_minor_units, currency, receipt):
        return GatewayOrder(
            id=TEST_GATEWAY_ORDER_ID, amount=amount_minor_units, currency=currency, receipt=receipt
        )

    gateway.create_order = AsyncMock(side_effect=_create_order)
    return gateway


@pytest.fixture
def order_assembler(test_db):
    """OrderAssembler bound to the test session."""
    return OrderAssembler(
        sellers=SellerPersistenceService(test_db),
        catalog=CatalogPersistenceService(test_db),
    )


@pytest.fixture
def payment_protocol(test_db, order_assembler, mock_gateway):
    """PaymentCommitProtocol with a mocked gateway."""
    return PaymentCommitProtocol(
        assembler=order_assembler,
        orders=OrderPersistenceService(test_db),
        feedback=FeedbackPersistenceService(test_db),
        gateway=mock_gateway,
        signing_secret=TEST_KEY_SECRET,
    )


@pytest.fixture
def sign():
    """Sign a gateway order/payment pair with the test secret."""
    def _sign(gateway_order_id: str, gateway_payment_id: str) -> str:
        return compute_signature(TEST_KEY_SECRET, gateway_order_id, gateway_payment_id)
    return _sign


async def _seed_file_database(url: str) -> dict:
    engine = create_async_engine(url, poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)() as session:
        data = await seed_catalog(session)
    await engine.dispose()
    return {name: row.id for name, row in data.items()}


@pytest.fixture
def api_catalog(tmp_path):
    """Seed a file-backed database for API tests and return its URL and ids."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'api.db'}"
    ids = asyncio.run(_seed_file_database(url))
    return {"url": url, "ids": ids}


@pytest.fixture
def test_client(api_catalog, mock_gateway):
    """Create FastAPI test client with overrides."""
    # The app runs on its own event loop, so it gets its own engine
    engine = create_async_engine(api_catalog["url"], poolclass=NullPool)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: mock_gateway
    app.dependency_overrides[get_signing_secret] = lambda: TEST_KEY_SECRET

    client = TestClient(app)

    yield client

    # Clear overrides
    app.dependency_overrides.clear()


@pytest.fixture
async def file_db(tmp_path):
    """Seeded file-backed database for tests that open several sessions at once."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        data = await seed_catalog(session)

    yield {"session_factory": session_factory, "catalog": data}

    await engine.dispose()
