import fnmatch

import pytest
import redis

from gamestore.client.session import SessionState
from gamestore.client.session_store import MemorySessionStore, RedisSessionStore


class FakeRedis:
    """Minimalny zamiennik klienta redis dla testow."""

    def __init__(self):
        self.data = {}
        self.ttl = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, name, value, ex=None):
        self.data[name] = value
        self.ttl[name] = ex
        return True

    def delete(self, *keys):
        removed = 0
        for k in keys:
            removed += self.data.pop(k, None) is not None
        return removed

    def scan_iter(self, match="*"):
        return [k for k in list(self.data) if fnmatch.fnmatch(k, match)]


def test_memory_store_round_trip():
    store = MemorySessionStore()
    store.set("cart", [{"id": 1}])

    assert store.get("cart") == [{"id": 1}]
    assert store.get("missing", "default") == "default"
    store.delete("cart")
    assert store.get("cart") is None


def test_redis_store_namespaces_keys_and_sets_ttl():
    fake = FakeRedis()
    store = RedisSessionStore("abc", ttl=60, client=fake)

    store.set("token", "t0k3n")

    assert fake.data == {"session:abc:token": '"t0k3n"'}
    assert fake.ttl["session:abc:token"] == 60
    assert store.get("token") == "t0k3n"


def test_redis_store_clear_only_touches_own_session():
    fake = FakeRedis()
    mine = RedisSessionStore("mine", client=fake)
    other = RedisSessionStore("other", client=fake)
    mine.set("cart", [])
    mine.set("token", "x")
    other.set("cart", [1])

    mine.clear()

    assert list(fake.data) == ["session:other:cart"]


def test_redis_store_ignores_corrupted_json():
    fake = FakeRedis()
    fake.data["session:s:cart"] = "{not json"

    assert RedisSessionStore("s", client=fake).get("cart", []) == []


def test_session_state_login_logout_and_end():
    state = SessionState()
    state.cart.add({"id": 1, "title": "x", "price": 1})

    state.login({"id": 7, "username": "ana", "displayName": "Ana"}, "tok")
    assert state.is_authenticated
    assert state.display_name == "Ana"

    state.logout()
    assert not state.is_authenticated
    assert state.cart.count() == 1

    state.end()
    assert state.cart.is_empty()


class FlakyRedis(FakeRedis):
    def __init__(self, failures, error=redis.ConnectionError):
        super().__init__()
        self.failures = failures
        self.error = error
        self.calls = 0

    def get(self, key):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error("redis down")
        return super().get(key)


def test_redis_store_retries_transient_errors():
    fake = FlakyRedis(failures=2)
    fake.data["session:s:token"] = '"abc"'

    assert RedisSessionStore("s", client=fake).get("token") == "abc"
    assert fake.calls == 3


def test_redis_store_gives_up_after_max_attempts():
    fake = FlakyRedis(failures=10)

    with pytest.raises(redis.ConnectionError):
        RedisSessionStore("s", client=fake).get("token")
    assert fake.calls == 3


def test_redis_store_does_not_retry_command_errors():
    fake = FlakyRedis(failures=10, error=redis.ResponseError)

    with pytest.raises(redis.ResponseError):
        RedisSessionStore("s", client=fake).get("token")
    assert fake.calls == 1
