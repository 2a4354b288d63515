from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from gamestore.data.models import OrderItemModel, OrderModel, ProductModel, UserModel
from gamestore.data.seed import SUBSCRIPTIONS, seed_subscriptions
from gamestore.domain.errors import ConflictError
from gamestore.services.catalog_service import CatalogService


def make_order(db, product_id=1, quantity=1):
    user = UserModel(username="carla", email="carla@example.com", password_hash="x")
    db.add(user)
    db.flush()
    order = OrderModel(
        user_id=user.id,
        total_price=Decimal("50.00") * quantity,
        items=[OrderItemModel(product_id=product_id, quantity=quantity, unit_price=Decimal("50.00"))],
    )
    db.add(order)
    db.commit()
    return user, order


def test_referenced_product_cannot_be_deleted(db, products):
    make_order(db)

    with pytest.raises(ConflictError) as exc:
        CatalogService(db).delete_product(1)

    assert exc.value.to_dict()["error"] == "Product in use"
    assert db.get(ProductModel, 1) is not None


def test_database_restricts_product_delete(db, products):
    make_order(db)

    db.delete(db.get(ProductModel, 1))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_deleted_user_cascades_orders(db, products):
    user, _ = make_order(db, quantity=2)

    db.delete(user)
    db.commit()
    db.expire_all()

    assert db.scalar(select(func.count()).select_from(OrderModel)) == 0
    assert db.scalar(select(func.count()).select_from(OrderItemModel)) == 0
    assert db.get(ProductModel, 1) is not None


def test_quantity_must_be_positive(db, products):
    with pytest.raises(IntegrityError):
        make_order(db, quantity=0)
    db.rollback()


def test_seed_subscriptions_is_idempotent(db):
    assert seed_subscriptions(db) == len(SUBSCRIPTIONS)
    assert seed_subscriptions(db) == 0

    subs = db.execute(select(ProductModel).where(ProductModel.subscription.is_(True))).scalars().all()
    assert len(subs) == len(SUBSCRIPTIONS)
