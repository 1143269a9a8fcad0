# app/repos/cart_repo.py
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List
import uuid

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain.cart import CartStatus, LineItemRef
from app.domain.errors import CartError
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartRepo:
    """
    Dostep do tabel carts / cart_items.
    Repo nie commituje samo, granice transakcji wyznacza atomic().
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def atomic(self) -> Iterator[Session]:
        #commit przy sukcesie, rollback przy dowolnym bledzie
        try:
            yield self.db
            self.db.commit()
        except CartError as e:
            logger.info(f"Rolling back cart transaction: {e.code}")
            self.db.rollback()
            raise
        except Exception as e:
            logger.error(f"Rolling back cart transaction: {e!r}")
            self.db.rollback()
            raise

    def flush(self):
        self.db.flush()

    # carts
    def find_active_cart(self, owner_id: uuid.UUID, lock: bool = False) -> CartModel | None:
        stmt = select(CartModel).where(
            CartModel.owner_id == owner_id,
            CartModel.status == CartStatus.ACTIVE,
        )
        if lock:
            #SELECT ... FOR UPDATE, sqlite to ignoruje
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_cart(self, owner_id: uuid.UUID, currency_code: str) -> CartModel:
        cart = CartModel(
            owner_id=owner_id,
            status=CartStatus.ACTIVE,
            currency_code=currency_code,
            total_price=0,
            items_count=0,
        )
        self.db.add(cart)
        self.db.flush()
        return cart

    def save_cart(self, cart: CartModel) -> CartModel:
        cart.updated_at = datetime.now(timezone.utc)
        self.db.add(cart)
        self.db.flush()
        return cart

    def delete_cart(self, cart: CartModel) -> None:
        self.db.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart.id))
        self.db.delete(cart)
        self.db.flush()

    def mark_abandoned(self, older_than: datetime) -> int:
        result = self.db.execute(
            update(CartModel)
            .where(
                CartModel.status == CartStatus.ACTIVE,
                CartModel.updated_at < older_than,
            )
            .values(status=CartStatus.ABANDONED)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    # items
    def list_items(self, cart_id: uuid.UUID) -> List[CartItemModel]:
        #zawsze swiezy select, nie relacja z pamieci
        stmt = (
            select(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .order_by(CartItemModel.created_at, CartItemModel.id)
            .execution_options(populate_existing=True)
        )
        return list(self.db.execute(stmt).scalars().all())

    def find_item(self, cart_id: uuid.UUID, item_id: uuid.UUID) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.id == item_id,
            )
        ).scalar_one_or_none()

    def find_line(self, cart_id: uuid.UUID, ref: LineItemRef) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.item_type == ref.item_type,
                CartItemModel.item_id == ref.item_id,
            )
        ).scalar_one_or_none()

    def add_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()
