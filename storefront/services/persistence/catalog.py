"""Seller and catalog persistence services."""
from datetime import datetime
from typing import Any, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from storefront.db.models import CatalogItem, Seller


class SellerPersistenceService:
    """Service for reading and seeding seller records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_seller(
        self,
        username: str,
        store_name: str,
        contact: Optional[str] = None,
        has_subscribed: bool = False,
        subscription_expiry: Optional[datetime] = None,
    ) -> Seller:
        """Create a new seller."""
        seller = Seller(
            username=username,
            store_name=store_name,
            contact=contact,
            has_subscribed=has_subscribed,
            subscription_expiry=subscription_expiry,
        )
        self.db.add(seller)
        await self.db.commit()
        await self.db.refresh(seller)
        return seller

    async def get_seller_by_id(self, seller_id: int) -> Optional[Seller]:
        """Get seller by ID."""
        result = await self.db.execute(select(Seller).where(Seller.id == seller_id))
        return result.scalar_one_or_none()


class CatalogPersistenceService:
    """Service for reading and seeding catalog items."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_item(self, seller_id: int, name: str, **fields: Any) -> CatalogItem:
        """Create a catalog item for a seller."""
        item = CatalogItem(seller_id=seller_id, name=name, **fields)
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def get_item(self, item_id: int, seller_id: Optional[int] = None) -> Optional[CatalogItem]:
        """Get catalog item by ID, optionally scoped to one seller."""
        query = select(CatalogItem).where(CatalogItem.id == item_id)
        if seller_id is not None:
            query = query.where(CatalogItem.seller_id == seller_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_items(self, seller_id: int) -> List[CatalogItem]:
        """List a seller's catalog items in insertion order."""
        result = await self.db.execute(
            select(CatalogItem)
            .where(CatalogItem.seller_id == seller_id)
            .order_by(CatalogItem.id)
        )
        return list(result.scalars().all())
