#app/data/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, Index, Integer, Numeric, String, Uuid, text
from sqlalchemy.orm import relationship
import uuid

from app.data.database import Base
from app.domain.cart import CartStatus


def _utcnow():
    return datetime.now(timezone.utc)


def _enum_values(enum_cls):
    return [m.value for m in enum_cls]


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, nullable=False, index=True)

    status = Column(
        Enum(CartStatus, name="cart_status", values_callable=_enum_values),
        nullable=False,
        default=CartStatus.ACTIVE,
    )
    currency_code = Column(String(3), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False, default=0)
    items_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CartItemModel.created_at",
    )

    # jeden aktywny koszyk na wlasciciela
    __table_args__ = (
        Index(
            "uq_carts_active_owner",
            "owner_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )
