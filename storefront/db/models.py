"""Database models."""
from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Seller(Base):
    """Shop owner whose catalog is being ordered from."""

    __tablename__ = "sellers"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False)
    store_name = Column(String, nullable=False)
    contact = Column(String, nullable=True)
    has_subscribed = Column(Boolean, default=False, nullable=False)
    subscription_expiry = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    items = relationship("CatalogItem", back_populates="seller")


class CatalogItem(Base):
    """Catalog (food) item with its pricing metadata."""

    __tablename__ = "catalog_items"

    id = Column(Integer, primary_key=True, index=True)
    seller_id = Column(Integer, ForeignKey("sellers.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=True)
    unit = Column(String, nullable=True)
    weight_unit = Column(String, nullable=True)
    category = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    discount_type = Column(String, nullable=True)  # %, percent, flat, other
    discount_value = Column(Float, nullable=True)
    other_discount_text = Column(Text, nullable=True)  # e.g. "buy 2 get 1 free"
    tags = Column(JSON, nullable=True)
    estimated_time = Column(Float, nullable=True)
    estimated_time_unit = Column(String, default="minutes", nullable=True)

    # Relationships
    seller = relationship("Seller", back_populates="items")


class Feedback(Base):
    """Customer feedback on a catalog item."""

    __tablename__ = "feedbacks"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("catalog_items.id"), nullable=False, index=True)
    seller_id = Column(Integer, ForeignKey("sellers.id"), nullable=False)
    customer_name = Column(String, nullable=True)
    rating = Column(Integer, nullable=True)
    comment = Column(Text, default="", nullable=False)
    liked = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Order(Base):
    """Order model."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String, unique=True, index=True, nullable=False)
    gateway_order_id = Column(String, unique=True, index=True, nullable=True)
    seller_id = Column(Integer, ForeignKey("sellers.id"), nullable=False)
    customer_name = Column(String, nullable=False)
    customer_contact = Column(String, nullable=False)
    total_amount = Column(Float, nullable=False)
    status = Column(String, default="pending", nullable=False)  # pending, placed
    payment_method = Column(String, nullable=False)
    transaction_id = Column(String, nullable=True)
    estimated_delivery_time = Column(Float, nullable=False)
    estimated_time_unit = Column(String, default="minutes", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    # Relationships
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")


class OrderItem(Base):
    """Order line snapshot, priced at order time."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    item_id = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    quantity = Column(Float, nullable=False)
    effective_quantity = Column(Float, nullable=False)
    unit = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    original_price = Column(Float, nullable=True)
    price_before_discount = Column(Float, nullable=False)
    discount_type = Column(String, nullable=True)
    discount_value = Column(Float, nullable=True)
    other_discount_text = Column(Text, nullable=True)
    tags = Column(JSON, nullable=True)
    subtotal = Column(Float, nullable=False)
    customer_comment = Column(Text, default="", nullable=False)
    customer_liked = Column(Boolean, default=False, nullable=False)
    customer_rating = Column(Integer, nullable=True)
    estimated_time = Column(Float, default=0, nullable=False)
    estimated_time_unit = Column(String, default="minutes", nullable=False)
    subscription_applied = Column(Boolean, default=False, nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
