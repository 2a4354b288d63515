import random
from decimal import Decimal

import pytest

from gamestore.client.cart import CartStore
from gamestore.client.session_store import MemorySessionStore

WITCHER = {"id": 1, "title": "The Witcher 3", "price": 50.00, "image": "w.jpg"}
ELDEN = {"id": 2, "title": "Elden Ring", "price": "30.00", "image": "e.jpg"}


@pytest.fixture
def cart():
    return CartStore(MemorySessionStore())


def test_add_merges_duplicates(cart):
    cart.add(WITCHER)
    cart.add(WITCHER)
    cart.add(ELDEN)

    entries = cart.entries()
    assert [(e.id, e.qty) for e in entries] == [(1, 2), (2, 1)]
    assert cart.count() == 3
    assert cart.total() == Decimal("130.00")


def test_price_is_snapshotted_at_add_time(cart):
    cart.add(WITCHER)
    cart.add({**WITCHER, "price": 10})

    [entry] = cart.entries()
    assert entry.price == Decimal("50.00")
    assert entry.qty == 2


def test_stepper_never_goes_below_one(cart):
    cart.add(WITCHER)

    cart.decrement(1)
    cart.decrement(1)
    assert cart.entries()[0].qty == 1

    cart.increment(1)
    assert cart.entries()[0].qty == 2


def test_set_quantity_unknown_product(cart):
    assert cart.set_quantity(99, 1) is None


def test_remove_deletes_regardless_of_quantity(cart):
    cart.add(WITCHER)
    cart.add(WITCHER)
    cart.add(ELDEN)

    assert cart.remove(1) is True
    assert cart.remove(1) is False
    assert [e.id for e in cart.entries()] == [2]


def test_clear(cart):
    cart.add(WITCHER)
    cart.clear()

    assert cart.is_empty()
    assert cart.total() == Decimal("0.00")


def test_payload_for_checkout(cart):
    cart.add(WITCHER)
    cart.add(WITCHER)

    assert cart.to_payload() == [{"id": 1, "title": "The Witcher 3", "price": "50.00", "quantity": 2}]


def test_corrupted_entries_are_skipped():
    store = MemorySessionStore()
    store.set("cart", [{"id": 1, "title": "ok", "price": "5", "qty": 1}, {"title": "no id"}, "junk"])

    assert [e.id for e in CartStore(store).entries()] == [1]


def test_random_operations_keep_total_consistent(cart):
    rng = random.Random(1234)
    catalog = {i: Decimal(f"{i * 7}.50") for i in range(1, 6)}
    expected: dict[int, int] = {}

    for _ in range(300):
        pid = rng.randint(1, 5)
        op = rng.choice(["add", "inc", "dec", "remove"])
        if op == "add":
            cart.add({"id": pid, "title": f"g{pid}", "price": str(catalog[pid])})
            expected[pid] = expected.get(pid, 0) + 1
        elif op == "inc" and pid in expected:
            cart.increment(pid)
            expected[pid] += 1
        elif op == "dec" and pid in expected:
            cart.decrement(pid)
            expected[pid] = max(1, expected[pid] - 1)
        elif op == "remove":
            cart.remove(pid)
            expected.pop(pid, None)

        ids = [e.id for e in cart.entries()]
        assert len(ids) == len(set(ids))
        assert {e.id: e.qty for e in cart.entries()} == expected
        assert cart.total() == sum((catalog[p] * q for p, q in expected.items()), Decimal("0.00"))
