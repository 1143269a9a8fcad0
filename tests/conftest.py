"""
Shared fixtures: in-memory SQLite database and a fake catalog.
"""
import copy
import os
import uuid

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
import requests
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.data.database import Base
from app.data.models import CartModel, CartItemModel  # noqa: F401
from app.services.cart_service import CartService

OWNER = uuid.UUID("11111111-1111-4111-8111-111111111111")
OTHER_OWNER = uuid.UUID("22222222-2222-4222-8222-222222222222")
INSTRUCTOR_ID = "6d1c3b0e-5a0f-4f7e-9a55-2f0e1f9c1a01"

C1 = uuid.UUID("0b0c7c7e-8f4a-4d1e-9d44-3b6a1d2f0001")
C2 = uuid.UUID("0b0c7c7e-8f4a-4d1e-9d44-3b6a1d2f0002")
C_FREE = uuid.UUID("0b0c7c7e-8f4a-4d1e-9d44-3b6a1d2f0003")
B1 = uuid.UUID("7a9e2d4c-1b3f-4e5a-8c6d-9f0a1b2c0001")
MISSING = uuid.UUID("99999999-9999-4999-8999-999999999999")


def make_course(course_id, name, pricings, is_free=False):
    return {
        "id": str(course_id),
        "name": name,
        "slug": name.lower().replace(" ", "-"),
        "course_image": f"https://cdn.example.com/{course_id}.jpg",
        "created_by": INSTRUCTOR_ID,
        "is_free": is_free,
        "rating": 4.5,
        "instructor": {"id": INSTRUCTOR_ID, "name": "Jane Doe"},
        "lessons_count": 10,
        "enrollments_count": 100,
        "pricings": pricings,
    }


class FakeCatalogClient:
    """In-memory stand-in for CatalogClient."""

    def __init__(self):
        self.courses = {
            str(C1): make_course(C1, "Advanced Python", [
                {"currency_code": "USD", "regular_price": 59.99, "sale_price": 49.99, "is_active": True},
                {"currency_code": "EUR", "regular_price": 45.00, "sale_price": None, "is_active": True},
            ]),
            str(C2): make_course(C2, "Data Engineering", [
                {"currency_code": "USD", "regular_price": 20.00, "sale_price": None, "is_active": True},
                {"currency_code": "GBP", "regular_price": 18.00, "sale_price": None, "is_active": True},
            ]),
            str(C_FREE): make_course(C_FREE, "Intro to SQL", [], is_free=True),
        }
        self.bundles = {
            str(B1): {
                "id": str(B1),
                "title": "Backend Starter Pack",
                "thumbnail_url": "https://cdn.example.com/bundle.jpg",
                "created_by": INSTRUCTOR_ID,
                "is_free": False,
                "pricings": [
                    {"currency_code": "EUR", "regular_price": 99.00, "sale_price": 79.00, "is_active": True},
                    {"currency_code": "USD", "regular_price": 89.00, "sale_price": 0, "is_active": True},
                ],
            },
        }
        self.down = False
        self.course_calls = 0

    def fetch_course(self, course_id):
        self.course_calls += 1
        if self.down:
            raise requests.ConnectionError("catalog down")
        course = self.courses.get(str(course_id))
        return copy.deepcopy(course) if course else None

    def fetch_bundle(self, bundle_id):
        if self.down:
            raise requests.ConnectionError("catalog down")
        bundle = self.bundles.get(str(bundle_id))
        return copy.deepcopy(bundle) if bundle else None


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def catalog():
    return FakeCatalogClient()


@pytest.fixture
def service(db, catalog):
    return CartService(db=db, catalog_client=catalog)
