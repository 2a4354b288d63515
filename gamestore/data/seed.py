# gamestore/data/seed.py
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from gamestore.data.database import SessionLocal
from gamestore.data.models.product import ProductModel
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)

GAMEPASS_IMAGE = (
    "https://images.kabum.com.br/produtos/fotos/267029/"
    "gift-card-xbox-game-pass-ultimate-3-mes-codigo-digital_1738875974_gg.jpg"
)

SUBSCRIPTIONS = [
    ("XBOX Gamepass 3 meses", Decimal("89.90")),
    ("XBOX Gamepass 6 meses", Decimal("159.90")),
    ("XBOX Gamepass 12 meses", Decimal("299.90")),
    ("XBOX Gamepass Ultimate 12 meses", Decimal("399.90")),
]


def seed_subscriptions(db: Session) -> int:
    """Dodaje brakujace produkty Game Pass, zwraca liczbe wstawionych."""
    inserted = 0
    for title, price in SUBSCRIPTIONS:
        exists = db.execute(
            select(ProductModel.id).where(ProductModel.title == title)
        ).first()
        if exists:
            continue

        db.add(
            ProductModel(
                title=title,
                price=price,
                platforms=["xbox"],
                image=GAMEPASS_IMAGE,
                popularity=0,
                subscription=True,
            )
        )
        inserted += 1
        logger.info(f"Seeded subscription product: {title}")

    db.commit()
    return inserted


def seed():
    db = SessionLocal()
    try:
        seed_subscriptions(db)
    except Exception as e:
        #seed nie blokuje startu aplikacji
        db.rollback()
        logger.warning(f"Subscription seed failed, continuing without it: {e}")
    finally:
        db.close()
