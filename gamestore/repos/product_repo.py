# gamestore/repos/product_repo.py
from typing import Iterable, List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from gamestore.data.models.product import ProductModel
from gamestore.data.models.order_item import OrderItemModel


def escape_like(term: str) -> str:
    #% i _ z zapytania maja byc literalami
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self) -> List[ProductModel]:
        return list(self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars())

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_many(self, product_ids: Iterable[int]) -> dict[int, ProductModel]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(select(ProductModel).where(ProductModel.id.in_(ids))).scalars()
        return {p.id: p for p in rows}

    def search(self, term: str, limit: int) -> List[ProductModel]:
        #case-insensitive, popularnosc malejaco, potem id rosnaco
        pattern = f"%{escape_like(term.lower())}%"
        stmt = (
            select(ProductModel)
            .where(func.lower(ProductModel.title).like(pattern, escape="\\"))
            .order_by(ProductModel.popularity.desc(), ProductModel.id.asc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def top(self, limit: int) -> List[ProductModel]:
        stmt = (
            select(ProductModel)
            .order_by(ProductModel.popularity.desc(), ProductModel.id.asc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def subscriptions(self) -> List[ProductModel]:
        stmt = (
            select(ProductModel)
            .where(ProductModel.subscription.is_(True))
            .order_by(ProductModel.id)
        )
        return list(self.db.execute(stmt).scalars())

    def random_product(self) -> ProductModel | None:
        stmt = select(ProductModel).order_by(func.random()).limit(1)
        return self.db.execute(stmt).scalar_one_or_none()

    def is_referenced(self, product_id: int) -> bool:
        found = self.db.execute(
            select(OrderItemModel.id).where(OrderItemModel.product_id == product_id).limit(1)
        ).first()
        return found is not None

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()

    def rollback(self):
        self.db.rollback()
