# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime
import uuid

from app.domain.cart import ItemType, CartStatus


class AddItemIn(BaseModel):
    """Schema dla dodawania kursu lub pakietu do koszyka."""

    item_type: ItemType = Field(..., description="course albo bundle")
    item_id: uuid.UUID = Field(..., description="ID kursu lub pakietu")
    currency_code: str = Field(..., min_length=3, max_length=3, pattern="^[A-Za-z]{3}$")
    quantity: int = Field(default=1, gt=0, description="Ilość (musi być > 0)")


class UpdateItemIn(BaseModel):
    """Schema dla zmiany ilości pozycji."""

    quantity: int = Field(..., gt=0, description="Nowa ilość (musi być > 0)")


class InstructorOut(BaseModel):
    id: str | None = None
    name: str | None = None


class CourseDetailsOut(BaseModel):
    """Dane kursu pobrane na żywo z katalogu, tylko do wyświetlenia."""

    name: str | None = None
    slug: str | None = None
    rating: float | None = None
    instructor: InstructorOut | None = None
    lessons_count: int | None = None
    enrollments_count: int | None = None


class CartItemOut(BaseModel):
    """Schema dla pozycji w koszyku (response)."""

    id: uuid.UUID
    item_type: ItemType
    item_id: uuid.UUID
    quantity: int
    price: Decimal
    currency_code: str
    item_title: str
    thumbnail_url: str | None = None
    creator_id: uuid.UUID | None = None
    course_details: CourseDetailsOut | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    """Schema dla koszyka (response). Pusty koszyk ma id = None."""

    id: uuid.UUID | None = None
    owner_id: uuid.UUID | None = None
    status: CartStatus = CartStatus.ACTIVE
    currency_code: str
    total_price: Decimal = Decimal("0.00")
    items_count: int = 0
    items: List[CartItemOut] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class MessageOut(BaseModel):
    message: str
