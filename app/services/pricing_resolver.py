# app/services/pricing_resolver.py
from decimal import Decimal
import uuid

import requests

from app.domain.cart import ItemType, LineItemRef, PricedItem, to_money
from app.domain.errors import CatalogUnavailable, ItemNotFound, PricingUnavailable
from app.services.catalog_client import CatalogClient
from app.utils.logging import get_logger

logger = get_logger(__name__)


def _as_uuid(value) -> uuid.UUID | None:
    if value in (None, ""):
        return None
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class PricingResolver:
    """
    Ustala obowiazujaca cene i snapshot do wyswietlenia dla kursu lub pakietu
    w podanej walucie.

    Darmowe pozycje kosztuja 0 w dowolnej walucie. Platne biora aktywny cennik
    w tej walucie, niezerowa cena promocyjna wygrywa z regularna.
    """

    def __init__(self, catalog_client: CatalogClient):
        self.catalog_client = catalog_client

    def resolve(self, ref: LineItemRef, currency_code: str) -> PricedItem:
        payload = self._fetch(ref)
        if payload is None:
            raise ItemNotFound(f"{ref.item_type.value.capitalize()} {ref.item_id} not found")

        if ref.item_type == ItemType.COURSE:
            title = payload.get("name") or ""
            thumbnail = payload.get("course_image")
        else:
            title = payload.get("title") or ""
            thumbnail = payload.get("thumbnail_url")

        if payload.get("is_free"):
            price = Decimal("0.00")
        else:
            price = self._active_price(payload.get("pricings") or [], currency_code)
            if price is None:
                raise PricingUnavailable(
                    f"No active {currency_code} pricing for {ref.item_type.value} {ref.item_id}"
                )

        return PricedItem(
            ref=ref,
            price=price,
            currency_code=currency_code,
            title=title,
            thumbnail_url=thumbnail,
            creator_id=_as_uuid(payload.get("created_by")),
        )

    def _fetch(self, ref: LineItemRef) -> dict | None:
        try:
            if ref.item_type == ItemType.COURSE:
                return self.catalog_client.fetch_course(ref.item_id)
            return self.catalog_client.fetch_bundle(ref.item_id)
        except requests.RequestException as e:
            logger.error(f"Catalog lookup for {ref.item_type.value} {ref.item_id} failed: {e}")
            raise CatalogUnavailable() from e

    @staticmethod
    def _active_price(pricings: list, currency_code: str) -> Decimal | None:
        for pricing in pricings:
            if not pricing.get("is_active"):
                continue
            if (pricing.get("currency_code") or "").upper() != currency_code:
                continue

            sale = pricing.get("sale_price")
            if sale not in (None, "") and to_money(sale) > 0:
                return to_money(sale)
            regular = pricing.get("regular_price")
            if regular in (None, ""):
                continue
            return to_money(regular)
        return None
