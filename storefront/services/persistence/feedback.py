"""Feedback persistence service."""
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import desc, select

from storefront.db.models import Feedback
from storefront.services.pricing.models import utcnow


class FeedbackPersistenceService:
    """Service for persisting customer feedback on catalog items."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add_feedback(
        self,
        item_id: int,
        seller_id: int,
        customer_name: Optional[str],
        comment: str = "",
        rating: Optional[int] = None,
        liked: bool = False,
        commit: bool = True,
    ) -> Feedback:
        """Add a feedback record."""
        feedback = Feedback(
            item_id=item_id,
            seller_id=seller_id,
            customer_name=customer_name,
            comment=comment,
            rating=rating,
            liked=liked,
            created_at=utcnow(),
        )
        self.db.add(feedback)
        if commit:
            await self.db.commit()
            await self.db.refresh(feedback)
        return feedback

    async def list_feedback(self, item_id: int) -> List[Feedback]:
        """List feedback for an item, latest first."""
        result = await self.db.execute(
            select(Feedback)
            .where(Feedback.item_id == item_id)
            .order_by(desc(Feedback.created_at), desc(Feedback.id))
        )
        return list(result.scalars().all())

    async def average_rating(self, item_id: int) -> float:
        """Average of the non-null ratings for an item, to one decimal; 0 if unrated."""
        ratings = [fb.rating for fb in await self.list_feedback(item_id) if fb.rating is not None]
        if not ratings:
            return 0.0
        return round(sum(ratings) / len(ratings), 1)
