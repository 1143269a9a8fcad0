# app/services/cart_service.py
from contextlib import contextmanager
from datetime import datetime, timezone, timedelta
import uuid

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain.cart import (
    CartStatus,
    ItemType,
    LineItemRef,
    apply_totals,
    guard_currency,
    normalize_currency,
    validate_quantity,
)
from app.domain.errors import (
    CartError,
    CartNotFound,
    ConcurrentCartUpdate,
    DuplicateItem,
    EmptyCart,
    ItemNotFound,
    PersistenceError,
)
from app.domain.schemas import CartOut
from app.repos.cart_repo import CartRepo
from app.services.catalog_client import CatalogClient
from app.services.cart_presenter import CartPresenter
from app.services.pricing_resolver import PricingResolver
from app.utils.settings import CART_ABANDON_AFTER_SECONDS, SUPPORTED_CURRENCIES
from app.utils.logging import get_logger

logger = get_logger(__name__)

# postgres: could not serialize access
_SERIALIZATION_FAILURE = "40001"


class CartService:
    """
    Agregat koszyka, jedyne miejsce ktore zmienia stan koszyka.
    commands (add, update, remove, clear, complete) ida w jednej transakcji:
    load cart -> walidacja -> zapis pozycji -> swiezy odczyt pozycji -> sumy -> commit
    query (get) tylko odczyt, bez transakcji i z dekoracja z katalogu
    """

    def __init__(
        self,
        db: Session,
        catalog_client: CatalogClient,
        pricing_resolver: PricingResolver | None = None,
        presenter: CartPresenter | None = None,
    ):
        self.repo = CartRepo(db)
        self.pricing_resolver = pricing_resolver or PricingResolver(catalog_client)
        self.presenter = presenter or CartPresenter(catalog_client)

    @contextmanager
    def _transaction(self):
        try:
            with self.repo.atomic():
                yield
        except CartError:
            raise
        except IntegrityError as e:
            raise ConcurrentCartUpdate() from e
        except OperationalError as e:
            if getattr(e.orig, "pgcode", None) == _SERIALIZATION_FAILURE:
                raise ConcurrentCartUpdate() from e
            raise PersistenceError() from e
        except SQLAlchemyError as e:
            raise PersistenceError() from e

    def _recompute(self, cart: CartModel) -> list[CartItemModel]:
        items = self.repo.list_items(cart.id)
        apply_totals(cart, items)
        self.repo.save_cart(cart)
        return items

    #query - odczyt
    def get_cart(self, owner_id: uuid.UUID) -> CartOut:
        cart = self.repo.find_active_cart(owner_id)

        if not cart:
            return self.presenter.empty(owner_id)

        items = self.repo.list_items(cart.id)
        return self.presenter.present(cart, items, decorate=True)

    #commands
    def add_item(
        self,
        owner_id: uuid.UUID,
        item_type: ItemType | str,
        item_id: uuid.UUID,
        currency_code: str,
        quantity: int = 1,
    ) -> CartOut:

        # Walidacje
        quantity = validate_quantity(quantity)
        currency_code = normalize_currency(currency_code, SUPPORTED_CURRENCIES)
        ref = LineItemRef(ItemType(item_type), item_id)

        with self._transaction():
            cart = self.repo.find_active_cart(owner_id, lock=True)

            if cart:
                has_items = bool(self.repo.list_items(cart.id))
                guard_currency(cart, currency_code, has_items)

                if self.repo.find_line(cart.id, ref):
                    raise DuplicateItem()

            # snapshot ceny i danych do wyswietlenia
            priced = self.pricing_resolver.resolve(ref, currency_code)

            if not cart:
                #pierwsza pozycja tworzy koszyk
                cart = self.repo.create_cart(owner_id, currency_code)
                logger.info(f"Created cart {cart.id} for owner {owner_id} in {currency_code}")

            try:
                self.repo.add_item(
                    CartItemModel(
                        cart_id=cart.id,
                        item_type=ref.item_type,
                        item_id=ref.item_id,
                        quantity=quantity,
                        price=priced.price,
                        currency_code=priced.currency_code,
                        item_title=priced.title,
                        thumbnail_url=priced.thumbnail_url,
                        creator_id=priced.creator_id,
                    )
                )
            except IntegrityError as e:
                # rownolegle dodanie tej samej pozycji, lapie to unique constraint
                raise DuplicateItem() from e

            items = self._recompute(cart)

        logger.info(
            f"Added {ref.item_type.value} {ref.item_id} x{quantity} to cart {cart.id}, "
            f"total {cart.total_price} {cart.currency_code}"
        )
        return self.presenter.present(cart, items)

    def update_item(self, owner_id: uuid.UUID, item_id: uuid.UUID, quantity: int) -> CartOut:
        quantity = validate_quantity(quantity)

        with self._transaction():
            cart = self.repo.find_active_cart(owner_id, lock=True)
            if not cart:
                raise CartNotFound()

            item = self.repo.find_item(cart.id, item_id)
            if not item:
                raise ItemNotFound("Cart item not found")

            # cena i waluta pozycji zostaja, zmienia sie tylko ilosc
            item.quantity = quantity
            self.repo.flush()

            items = self._recompute(cart)

        logger.info(f"Cart {cart.id}: item {item_id} quantity set to {quantity}")
        return self.presenter.present(cart, items)

    def remove_item(self, owner_id: uuid.UUID, item_id: uuid.UUID) -> CartOut | None:
        """
        Usuwa jedna pozycje. Zwraca None gdy to byla ostatnia pozycja
        i koszyk zostal usuniety.
        """
        with self._transaction():
            cart = self.repo.find_active_cart(owner_id, lock=True)
            if not cart:
                raise CartNotFound()

            item = self.repo.find_item(cart.id, item_id)
            if not item:
                raise ItemNotFound("Cart item not found")

            self.repo.delete_item(item)

            items = self.repo.list_items(cart.id)
            if not items:
                # pusty koszyk nie istnieje
                cart_id = cart.id
                self.repo.delete_cart(cart)
                removed_cart = True
            else:
                apply_totals(cart, items)
                self.repo.save_cart(cart)
                removed_cart = False

        if removed_cart:
            logger.info(f"Removed last item {item_id}, cart {cart_id} deleted")
            return None

        logger.info(f"Removed item {item_id} from cart {cart.id}")
        return self.presenter.present(cart, items)

    def clear_cart(self, owner_id: uuid.UUID) -> bool:
        with self._transaction():
            cart = self.repo.find_active_cart(owner_id, lock=True)
            if not cart:
                return False

            cart_id = cart.id
            self.repo.delete_cart(cart)

        logger.info(f"Cleared cart {cart_id} for owner {owner_id}")
        return True

    def complete_cart(self, owner_id: uuid.UUID) -> CartOut:
        """
        Punkt wejscia dla checkoutu: aktywny koszyk przechodzi w completed.
        Nastepne add_item tego wlasciciela zaklada nowy koszyk.
        """
        with self._transaction():
            cart = self.repo.find_active_cart(owner_id, lock=True)
            if not cart:
                raise CartNotFound()

            items = self.repo.list_items(cart.id)
            if not items:
                raise EmptyCart()

            apply_totals(cart, items)
            cart.status = CartStatus.COMPLETED
            self.repo.save_cart(cart)

        logger.info(f"Cart {cart.id} completed, total {cart.total_price} {cart.currency_code}")
        return self.presenter.present(cart, items)

    def abandon_stale_carts(self, now: datetime | None = None) -> int:
        now = now or datetime.now(timezone.utc)
        older_than = now - timedelta(seconds=CART_ABANDON_AFTER_SECONDS)

        with self._transaction():
            count = self.repo.mark_abandoned(older_than)

        logger.info(f"Marked {count} carts as abandoned (idle since before {older_than})")
        return count
