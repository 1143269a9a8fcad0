# app/domain/cart.py
"""
Czysta logika domeny koszyka: typy pozycji, statusy, snapshot ceny,
przeliczanie sum i straznik waluty. Bez dostepu do bazy i HTTP.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Iterable
import uuid

from app.domain.errors import CurrencyMismatch, InvalidCurrency, InvalidQuantity

MINOR_UNIT = Decimal("0.01")


class ItemType(str, Enum):
    COURSE = "course"
    BUNDLE = "bundle"


class CartStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class LineItemRef:
    """Odwolanie do pozycji katalogu: jeden dyskryminator, jedno id."""

    item_type: ItemType
    item_id: uuid.UUID


@dataclass(frozen=True)
class PricedItem:
    """Cena i dane do wyswietlenia zapisane w chwili dodania do koszyka."""

    ref: LineItemRef
    price: Decimal
    currency_code: str
    title: str
    thumbnail_url: str | None = None
    creator_id: uuid.UUID | None = None


@dataclass(frozen=True)
class Totals:
    items_count: int
    total_price: Decimal


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)


def compute_totals(items: Iterable) -> Totals:
    """
    Przelicza sumy koszyka z pelnej listy pozycji.
    `items` musi byc swiezo wczytana lista (kazda pozycja ma price i quantity).
    """
    items = list(items)
    total = sum((to_money(i.price) * i.quantity for i in items), Decimal("0.00"))
    return Totals(items_count=len(items), total_price=to_money(total))


def apply_totals(cart, items: Iterable) -> Totals:
    totals = compute_totals(items)
    cart.items_count = totals.items_count
    cart.total_price = totals.total_price
    return totals


def normalize_currency(currency_code: str, supported: Iterable[str] | None = None) -> str:
    code = (currency_code or "").strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise InvalidCurrency(f"Invalid currency code: {currency_code!r}")
    if supported and code not in supported:
        raise InvalidCurrency(f"Currency {code} is not supported")
    return code


def validate_quantity(quantity) -> int:
    # bool to tez int, odrzucamy
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantity()
    return quantity


def guard_currency(cart, currency_code: str, has_items: bool) -> None:
    """
    Jedna waluta na koszyk.
    Pusty koszyk przyjmuje walute nowej pozycji, niepusty odrzuca kazda inna.
    """
    if not has_items:
        cart.currency_code = currency_code
        return

    if cart.currency_code != currency_code:
        raise CurrencyMismatch(
            f"Cart currency is {cart.currency_code}, cannot add an item priced in {currency_code}"
        )
