# gamestore/api/routers/checkout.py
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gamestore.api.deps import get_current_user
from gamestore.data.database import get_db
from gamestore.data.models.user import UserModel
from gamestore.domain.errors import StoreError
from gamestore.domain.schemas import CheckoutIn, CheckoutOut, OrderOut
from gamestore.services.order_service import OrderService

router = APIRouter(prefix="/checkout", tags=["checkout"])


def get_service(db: Session):
    return OrderService(db)


@router.post("", response_model=CheckoutOut)
def checkout(
    payload: CheckoutIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Zamienia koszyk (albo pojedynczy productId) na zamowienie.
    """
    svc = get_service(db)
    try:
        return svc.checkout(user.id, payload)
    except SQLAlchemyError:
        #szczegoly sa w logach, klient dostaje tylko komunikat
        raise StoreError("Could not process the purchase, please try again", error="Checkout failed")


@router.get("/orders/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_service(db).get_order(order_id, user.id)
