# museum/api/routers/orders.py
from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from museum.api.errors import DOMAIN_ERRORS, http_error
from museum.data.database import get_db
from museum.domain.schemas import CheckoutIn, OrderOut
from museum.services.order_service import OrderService

router = APIRouter(prefix="/shop", tags=["checkout"])


def get_service(db: Session):
    return OrderService(db)


@router.post("/checkout", response_model=OrderOut, status_code=201)
def checkout(
    payload: CheckoutIn,
    x_cart_token: str | None = Header(default=None),
    db: Session = Depends(get_db),
):
    """
    Sklada zamowienie z koszyka.
    Stany magazynowe i koszyk zmieniane atomowo razem z zamowieniem.
    """
    svc = get_service(db)
    try:
        return svc.checkout(payload, token=payload.cart_token or x_cart_token)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
