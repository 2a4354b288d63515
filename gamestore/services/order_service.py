# gamestore/services/order_service.py
from dataclasses import dataclass
from decimal import Decimal
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gamestore.data.models.order import OrderModel
from gamestore.data.models.order_item import OrderItemModel
from gamestore.domain.errors import AuthenticationError, InvalidRequestError, NotFoundError
from gamestore.domain.schemas import CartLineIn, CheckoutIn
from gamestore.repos.order_repo import OrderRepo
from gamestore.repos.product_repo import ProductRepo
from gamestore.repos.user_repo import UserRepo
from gamestore.utils.settings import CHECKOUT_REPRICE
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)

PROTOCOL_PREFIX = "#CHK"


def order_protocol(order_id: int) -> str:
    #protokol wyliczany z id zamowienia, da sie po nim znalezc zamowienie
    return f"{PROTOCOL_PREFIX}{order_id:06d}"


def protocol_to_order_id(protocol: str) -> int | None:
    if not protocol.startswith(PROTOCOL_PREFIX):
        return None
    suffix = protocol[len(PROTOCOL_PREFIX):]
    return int(suffix) if suffix.isdigit() else None


@dataclass
class OrderLine:
    product_id: int
    quantity: int
    unit_price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class OrderService:
    """
    Checkout: koszyk (albo pojedynczy produkt) -> zamowienie + pozycje
    w jednej transakcji, wszystko albo nic.
    """

    def __init__(self, db: Session, reprice: bool = CHECKOUT_REPRICE):
        self.db = db
        self.repo = OrderRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)
        self.reprice = reprice

    def _lines_from_cart(self, cart: List[CartLineIn]) -> List[OrderLine]:
        #walidacja wszystkich id przed zapisem, bez polegania na FK w trakcie transakcji
        catalog = self.products.get_many(line.id for line in cart)
        missing = sorted({line.id for line in cart if line.id not in catalog})
        if missing:
            raise InvalidRequestError(
                f"Unknown product id(s): {', '.join(str(i) for i in missing)}",
                error="Invalid cart",
                details={"missingProductIds": missing},
            )

        lines = []
        for line in cart:
            if self.reprice or line.price is None:
                price = Decimal(catalog[line.id].price)
            else:
                price = line.price
            lines.append(OrderLine(product_id=line.id, quantity=line.quantity, unit_price=price))
        return lines

    def _lines_from_product(self, product_id: int) -> List[OrderLine]:
        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} does not exist", error="Product not found")
        return [OrderLine(product_id=product.id, quantity=1, unit_price=Decimal(product.price))]

    def checkout(self, user_id: int, payload: CheckoutIn) -> dict:
        user = self.users.get_user(user_id)
        if not user:
            raise AuthenticationError("User could not be resolved", error="Invalid session")

        if payload.cart:
            lines = self._lines_from_cart(payload.cart)
        else:
            lines = self._lines_from_product(payload.product_id)

        total = sum((line.subtotal for line in lines), Decimal("0.00"))

        order = OrderModel(
            user_id=user.id,
            total_price=total,
            items=[
                OrderItemModel(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                )
                for line in lines
            ],
        )

        try:
            self.repo.add_order(order)
            self.repo.commit()
        except SQLAlchemyError:
            self.repo.rollback()
            logger.exception(f"Checkout failed for user {user.id}, transaction rolled back")
            raise

        protocol = order_protocol(order.id)

        logger.info(
            f"[CHECKOUT] protocol={protocol} user={user.username} items={len(lines)} "
            f"total={total} payment={payload.payment_method!r}"
        )
        if payload.coupon:
            #kupon tylko logowany, bez rabatu
            logger.info(f"[CHECKOUT] {protocol} coupon received (not redeemed): {payload.coupon!r}")

        return {
            "success": True,
            "message": "Purchase completed successfully!",
            "protocol": protocol,
            "order_id": order.id,
            "total": total,
        }

    def get_order(self, order_id: int, user_id: int) -> dict:
        order = self.repo.get_order(order_id)
        if not order or order.user_id != user_id:
            raise NotFoundError(f"Order {order_id} does not exist", error="Order not found")

        return {
            "id": order.id,
            "protocol": order_protocol(order.id),
            "total": order.total_price,
            "created_at": order.created_at,
            "items": [
                {
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "price": i.unit_price,
                }
                for i in self.repo.list_items(order.id)
            ],
        }
