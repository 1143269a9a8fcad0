#app/api/routers/carts.py
import uuid

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_cart_service, get_owner_id
from app.domain.errors import CartError
from app.domain.schemas import AddItemIn, CartOut, MessageOut, UpdateItemIn
from app.services.cart_presenter import CartPresenter
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def _http_error(e: CartError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get("", response_model=CartOut)
def get_cart(
    owner_id: uuid.UUID = Depends(get_owner_id),
    svc: CartService = Depends(get_cart_service),
):
    return svc.get_cart(owner_id)


@router.post("/items", response_model=CartOut, status_code=201)
def add_item(
    payload: AddItemIn,
    owner_id: uuid.UUID = Depends(get_owner_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.add_item(
            owner_id=owner_id,
            item_type=payload.item_type,
            item_id=payload.item_id,
            currency_code=payload.currency_code,
            quantity=payload.quantity,
        )
    except CartError as e:
        raise _http_error(e)


@router.put("/items/{item_id}", response_model=CartOut)
def update_item(
    item_id: uuid.UUID,
    payload: UpdateItemIn,
    owner_id: uuid.UUID = Depends(get_owner_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.update_item(owner_id, item_id, payload.quantity)
    except CartError as e:
        raise _http_error(e)


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_item(
    item_id: uuid.UUID,
    owner_id: uuid.UUID = Depends(get_owner_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        cart = svc.remove_item(owner_id, item_id)
    except CartError as e:
        raise _http_error(e)

    # ostatnia pozycja usunieta -> koszyk skasowany, zwracamy pusty ksztalt
    if cart is None:
        return CartPresenter.empty(owner_id)
    return cart


@router.delete("/clear", response_model=MessageOut)
def clear_cart(
    owner_id: uuid.UUID = Depends(get_owner_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        svc.clear_cart(owner_id)
    except CartError as e:
        raise _http_error(e)
    return {"message": "Cart cleared successfully"}
