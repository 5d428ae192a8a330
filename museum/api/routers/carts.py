#museum/api/routers/carts.py
from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.orm import Session

from museum.api.errors import DOMAIN_ERRORS, http_error
from museum.data.database import get_db
from museum.domain.schemas import (
    CartOut,
    EnsureCartIn,
    ItemIn,
    ItemUpdateIn,
)
from museum.services.cart_service import CartService

router = APIRouter(prefix="/shop/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db=db)


#token z body ma pierwszenstwo przed naglowkiem X-Cart-Token
def _token(body_token: str | None, header_token: str | None) -> str | None:
    return body_token or header_token


@router.post("", response_model=CartOut)
def ensure_cart(
    payload: EnsureCartIn | None = None,
    x_cart_token: str | None = Header(default=None),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    body_token = payload.cart_token if payload else None
    return svc.ensure_cart(_token(body_token, x_cart_token))


@router.post("/items", response_model=CartOut)
def add_item(
    payload: ItemIn,
    x_cart_token: str | None = Header(default=None),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_item(
            token=_token(payload.cart_token, x_cart_token),
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.patch("/items/{item_id}", response_model=CartOut)
def update_item(
    item_id: int,
    payload: ItemUpdateIn,
    x_cart_token: str | None = Header(default=None),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.update_item(
            token=_token(payload.cart_token, x_cart_token),
            item_id=item_id,
            quantity=payload.quantity,
        )
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_item(
    item_id: int,
    cart_token: str | None = Query(default=None),
    x_cart_token: str | None = Header(default=None),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.remove_item(token=_token(cart_token, x_cart_token), item_id=item_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
