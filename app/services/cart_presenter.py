# app/services/cart_presenter.py
from typing import Iterable
import uuid

import requests
from pydantic import ValidationError

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain.cart import CartStatus, ItemType
from app.domain.schemas import CartItemOut, CartOut, CourseDetailsOut, InstructorOut
from app.services.catalog_client import CatalogClient
from app.utils.settings import DEFAULT_CURRENCY
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartPresenter:
    """
    Buduje model odczytu koszyka.

    Cena, waluta i tytul zawsze pochodza ze snapshotu na pozycji.
    decorate=True dokleja do kursow aktualne dane z katalogu; kurs ktory zniknal,
    niedzialajacy katalog albo zly payload zostawiaja course_details puste.
    Nic tu nie pisze do bazy.
    """

    def __init__(self, catalog_client: CatalogClient | None = None):
        self.catalog_client = catalog_client

    @staticmethod
    def empty(owner_id: uuid.UUID | None = None, currency_code: str = DEFAULT_CURRENCY) -> CartOut:
        return CartOut(
            id=None,
            owner_id=owner_id,
            status=CartStatus.ACTIVE,
            currency_code=currency_code,
        )

    def present(
        self,
        cart: CartModel | None,
        items: Iterable[CartItemModel] = (),
        decorate: bool = False,
    ) -> CartOut:
        if cart is None:
            return self.empty()

        lines = [self._present_item(i, decorate) for i in items]

        return CartOut(
            id=cart.id,
            owner_id=cart.owner_id,
            status=cart.status,
            currency_code=cart.currency_code,
            total_price=cart.total_price,
            items_count=cart.items_count,
            items=lines,
            created_at=cart.created_at,
            updated_at=cart.updated_at,
        )

    def _present_item(self, item: CartItemModel, decorate: bool) -> CartItemOut:
        out = CartItemOut.model_validate(item)
        if decorate and item.item_type == ItemType.COURSE:
            out.course_details = self._course_details(item.item_id)
        return out

    def _course_details(self, course_id) -> CourseDetailsOut | None:
        if self.catalog_client is None:
            return None

        try:
            course = self.catalog_client.fetch_course(course_id)
        except requests.RequestException as e:
            logger.warning(f"Skipping decoration of course {course_id}: {e}")
            return None

        if course is None:
            logger.info(f"Course {course_id} no longer in catalog, rendering snapshot only")
            return None

        instructor = course.get("instructor")
        try:
            return CourseDetailsOut(
                name=course.get("name"),
                slug=course.get("slug"),
                rating=course.get("rating"),
                instructor=InstructorOut(**instructor) if isinstance(instructor, dict) else None,
                lessons_count=course.get("lessons_count"),
                enrollments_count=course.get("enrollments_count"),
            )
        except ValidationError as e:
            #payload katalogu niezgodny ze schematem, zostaje sam snapshot
            logger.warning(f"Skipping decoration of course {course_id}, bad catalog payload: {e}")
            return None
