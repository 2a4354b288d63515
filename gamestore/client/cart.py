# gamestore/client/cart.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Mapping

from gamestore.client.session_store import SessionStore


def to_decimal(value: Any) -> Decimal:
    return Decimal(str(value if value is not None else 0)).quantize(Decimal("0.01"))


@dataclass
class CartEntry:
    id: int
    title: str
    price: Decimal
    image: str | None = None
    qty: int = 1

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.qty

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "price": str(self.price),
            "image": self.image,
            "qty": self.qty,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CartEntry":
        return cls(
            id=int(data["id"]),
            title=data.get("title") or "",
            price=to_decimal(data.get("price")),
            image=data.get("image"),
            qty=max(1, int(data.get("qty") or 1)),
        )


class CartStore:
    """
    Koszyk po stronie klienta, trzymany w SessionStore pod kluczem "cart".
    Jeden wpis na produkt, cena zapamietana w momencie dodania.
    """

    KEY = "cart"

    def __init__(self, store: SessionStore):
        self.store = store

    def entries(self) -> List[CartEntry]:
        raw = self.store.get(self.KEY, [])
        if not isinstance(raw, list):
            return []
        entries = []
        for item in raw:
            try:
                entries.append(CartEntry.from_dict(item))
            except (KeyError, TypeError, ValueError, ArithmeticError):
                #uszkodzony wpis pomijamy
                continue
        return entries

    def _save(self, entries: List[CartEntry]) -> None:
        self.store.set(self.KEY, [e.to_dict() for e in entries])

    def _find(self, entries: List[CartEntry], product_id: int) -> CartEntry | None:
        return next((e for e in entries if e.id == product_id), None)

    def add(self, product: Mapping[str, Any]) -> CartEntry:
        entries = self.entries()
        product_id = int(product["id"])
        entry = self._find(entries, product_id)

        if entry:
            entry.qty += 1
        else:
            entry = CartEntry(
                id=product_id,
                title=product.get("title") or "",
                price=to_decimal(product.get("price")),
                image=product.get("image"),
            )
            entries.append(entry)

        self._save(entries)
        return entry

    def set_quantity(self, product_id: int, delta: int) -> CartEntry | None:
        """Stepper +/-: ilosc nigdy nie spada ponizej 1."""
        entries = self.entries()
        entry = self._find(entries, product_id)
        if not entry:
            return None

        entry.qty = max(1, entry.qty + delta)
        self._save(entries)
        return entry

    def increment(self, product_id: int) -> CartEntry | None:
        return self.set_quantity(product_id, 1)

    def decrement(self, product_id: int) -> CartEntry | None:
        return self.set_quantity(product_id, -1)

    def remove(self, product_id: int) -> bool:
        entries = self.entries()
        remaining = [e for e in entries if e.id != product_id]
        if len(remaining) == len(entries):
            return False
        self._save(remaining)
        return True

    def total(self) -> Decimal:
        return sum((e.subtotal for e in self.entries()), Decimal("0.00"))

    def count(self) -> int:
        return sum(e.qty for e in self.entries())

    def is_empty(self) -> bool:
        return not self.entries()

    def clear(self) -> None:
        self.store.delete(self.KEY)

    def to_payload(self) -> List[dict]:
        return [
            {"id": e.id, "title": e.title, "price": str(e.price), "quantity": e.qty}
            for e in self.entries()
        ]
