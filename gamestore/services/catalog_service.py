# gamestore/services/catalog_service.py
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gamestore.data.models.product import ProductModel
from gamestore.domain.errors import ConflictError, NotFoundError
from gamestore.repos.product_repo import ProductRepo
from gamestore.utils.settings import SEARCH_DEFAULT_LIMIT, SEARCH_MAX_LIMIT, TOP_DEFAULT_LIMIT
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)


def clamp_limit(limit: int | None, default: int, maximum: int | None = None) -> int:
    if not limit or limit < 1:
        limit = default
    if maximum is not None:
        limit = min(limit, maximum)
    return limit


class CatalogService:
    """
    Odczyty katalogu, kazde wywolanie idzie do bazy (bez cache)
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(self) -> List[ProductModel]:
        return self.repo.list_products()

    def search(self, query: str | None, limit: int | None = None) -> List[ProductModel]:
        term = (query or "").strip()
        if not term:
            return []
        limit = clamp_limit(limit, SEARCH_DEFAULT_LIMIT, SEARCH_MAX_LIMIT)
        return self.repo.search(term, limit)

    def top(self, limit: int | None = None) -> List[ProductModel]:
        return self.repo.top(clamp_limit(limit, TOP_DEFAULT_LIMIT))

    def subscriptions(self) -> List[ProductModel]:
        return self.repo.subscriptions()

    def recommended(self) -> ProductModel:
        product = self.repo.random_product()
        if not product:
            raise NotFoundError("The catalog is empty", error="No products available")
        return product

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} does not exist", error="Product not found")
        return product

    def delete_product(self, product_id: int) -> None:
        product = self.get_product(product_id)

        #produkt z historia zamowien jest chroniony (RESTRICT)
        if self.repo.is_referenced(product_id):
            raise ConflictError(
                f"Product {product_id} is referenced by existing orders",
                error="Product in use",
            )

        try:
            self.repo.delete_product(product)
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError(
                f"Product {product_id} is referenced by existing orders",
                error="Product in use",
            )

        logger.info(f"Product {product_id} deleted")
