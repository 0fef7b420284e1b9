"""Catalog pricing API endpoints."""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Request, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.dependencies import get_order_assembler
from storefront.db.database import get_db
from storefront.services.ordering.assembler import OrderAssembler
from storefront.services.ordering.errors import NotFoundError
from storefront.services.ordering.models import CamelModel, QuoteRequest
from storefront.services.persistence.feedback import FeedbackPersistenceService
from storefront.services.pricing.models import PriceQuote


router = APIRouter()
logger = logging.getLogger(__name__)


class QuoteResponse(CamelModel):
    """Price quote response model."""
    item_id: int
    unit_price: float
    subtotal: float
    chargeable_quantity: float
    subscription_markup_applied: bool


class CatalogItemResponse(CamelModel):
    """Catalog item with its displayed (server-priced) unit price."""
    id: int
    name: str
    price: Optional[float] = None
    displayed_price: float
    category: Optional[str] = None
    description: Optional[str] = None
    unit: Optional[str] = None
    weight_unit: Optional[str] = None
    discount_type: Optional[str] = None
    discount_value: Optional[float] = None
    other_discount_text: Optional[str] = None
    tags: List[str] = []
    estimated_time: float = 0
    estimated_time_unit: str = "minutes"
    average_rating: float = 0.0


@router.post("/api/quote", response_model=QuoteResponse)
async def quote_item(
    quote_request: QuoteRequest,
    request: Request,
    assembler: OrderAssembler = Depends(get_order_assembler),
):
    """Quote a requested quantity of one catalog item."""
    logger.info(
        f"[QUOTE] Request received - seller: {quote_request.seller_id}, item: {quote_request.item_id}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        seller = await assembler.get_seller(quote_request.seller_id)
        item = await assembler.catalog.get_item(quote_request.item_id, seller_id=seller.id)
        if item is None:
            raise NotFoundError(f"Catalog item not found: {quote_request.item_id}")

        quote: PriceQuote = assembler.pricing_engine.quote_for_seller(
            item, quote_request.requested_quantity, quote_request.requested_unit, seller
        )
        return QuoteResponse(item_id=item.id, **quote.model_dump())

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(
            f"[QUOTE] Error quoting item - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error quoting item: {str(e)}")


@router.get("/api/catalog/{seller_id}/items", response_model=List[CatalogItemResponse])
async def list_catalog_items(
    seller_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
    assembler: OrderAssembler = Depends(get_order_assembler),
):
    """List a seller's catalog with displayed prices and average ratings."""
    logger.info(
        f"[CATALOG] Request received - seller: {seller_id}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        seller = await assembler.get_seller(seller_id)
        items = await assembler.catalog.list_items(seller.id)
        feedback = FeedbackPersistenceService(db)

        response = []
        for item in items:
            response.append(
                CatalogItemResponse(
                    id=item.id,
                    name=item.name,
                    price=item.price,
                    displayed_price=assembler.pricing_engine.displayed_price(item, seller),
                    category=item.category,
                    description=item.description,
                    unit=item.unit,
                    weight_unit=item.weight_unit,
                    discount_type=item.discount_type,
                    discount_value=item.discount_value,
                    other_discount_text=item.other_discount_text,
                    tags=[str(tag) for tag in (item.tags or [])],
                    estimated_time=item.estimated_time or 0,
                    estimated_time_unit=item.estimated_time_unit or "minutes",
                    average_rating=await feedback.average_rating(item.id),
                )
            )
        logger.info(f"[CATALOG] Found {len(response)} items for seller {seller_id}")
        return response

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(
            f"[CATALOG] Error fetching catalog - seller: {seller_id}, Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error fetching catalog: {str(e)}")
