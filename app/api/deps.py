# app/api/deps.py
import uuid

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.services.cart_service import CartService
from app.services.catalog_client import CatalogClient


def get_owner_id(x_user_id: str = Header(..., alias="X-User-Id")) -> uuid.UUID:
    #wlasciciela ustala warstwa auth przed nami, tu tylko parsujemy
    try:
        return uuid.UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid X-User-Id header")


def get_catalog_client() -> CatalogClient:
    return CatalogClient()


def get_cart_service(
    db: Session = Depends(get_db),
    catalog_client: CatalogClient = Depends(get_catalog_client),
) -> CartService:
    return CartService(db=db, catalog_client=catalog_client)
