from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid

from app.data.database import Base
from app.domain.cart import ItemType


def _utcnow():
    return datetime.now(timezone.utc)


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    cart_id = Column(Uuid, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)

    item_type = Column(
        Enum(ItemType, name="cart_item_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    item_id = Column(Uuid, nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    # snapshot z chwili dodania
    price = Column(Numeric(12, 2), nullable=False)
    currency_code = Column(String(3), nullable=False)
    item_title = Column(String(255), nullable=False)
    thumbnail_url = Column(String(500), nullable=True)
    creator_id = Column(Uuid, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (
        UniqueConstraint("cart_id", "item_type", "item_id", name="uq_cart_items_line"),
        CheckConstraint("quantity > 0", name="ck_cart_items_quantity_positive"),
    )