# gamestore/repos/order_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from gamestore.data.models.order import OrderModel
from gamestore.data.models.order_item import OrderItemModel
from gamestore.data.models.product import ProductModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        """Dodaje naglowek i pozycje w biezacej transakcji, bez commita."""
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_items(self, order_id: int) -> List[OrderItemModel]:
        return list(
            self.db.execute(
                select(OrderItemModel).where(OrderItemModel.order_id == order_id)
            ).scalars()
        )

    def purchase_history(self, user_id: int, limit: int = 20):
        # order ⋈ order_item ⋈ product
        stmt = (
            select(
                OrderModel.id.label("order_id"),
                OrderModel.created_at,
                OrderItemModel.product_id,
                OrderItemModel.quantity,
                OrderItemModel.unit_price.label("price"),
                ProductModel.title.label("product"),
                ProductModel.image,
            )
            .join(OrderItemModel, OrderItemModel.order_id == OrderModel.id)
            .join(ProductModel, ProductModel.id == OrderItemModel.product_id)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc(), OrderItemModel.id.asc())
            .limit(limit)
        )
        return [dict(row._mapping) for row in self.db.execute(stmt)]

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
