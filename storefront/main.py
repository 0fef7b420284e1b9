"""Main FastAPI application."""
from fastapi import FastAPI
from contextlib import asynccontextmanager

from storefront.core.logging import setup_logging
from storefront.db.database import init_db
from storefront.api import catalog, health, orders


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    await init_db()
    yield


app = FastAPI(
    title="Storefront Checkout",
    description="Server-side order pricing and payment reconciliation",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(catalog.router, tags=["catalog"])
app.include_router(orders.router, tags=["orders"])
