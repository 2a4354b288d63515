# gamestore/client/session_store.py
import json
from abc import ABC, abstractmethod
from typing import Any

import redis

from gamestore.utils.retry import redis_retry
from gamestore.utils.settings import REDIS_URL, CLIENT_SESSION_TTL_SECONDS
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)


class SessionStore(ABC):
    """
    Magazyn klucz-wartosc o zasiegu jednej sesji przegladarki.
    Wartosci serializowane do JSON.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any: ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...


class MemorySessionStore(SessionStore):
    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            return default

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


class RedisSessionStore(SessionStore):
    """
    session:{session_id}:{key} -> JSON, TTL odswiezany przy kazdym zapisie
    """

    def __init__(
        self,
        session_id: str,
        url: str | None = None,
        ttl: int = CLIENT_SESSION_TTL_SECONDS,
        client: redis.Redis | None = None,
    ):
        self.session_id = session_id
        self.ttl = ttl
        self.redis = client or redis.Redis.from_url(url or REDIS_URL, decode_responses=True)

    def _key(self, key: str) -> str:
        return f"session:{self.session_id}:{key}"

    @redis_retry()
    def get(self, key: str, default: Any = None) -> Any:
        raw = self.redis.get(self._key(key))
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Corrupted session value under {self._key(key)}, ignoring")
            return default

    @redis_retry()
    def set(self, key: str, value: Any) -> None:
        self.redis.set(self._key(key), json.dumps(value), ex=self.ttl)

    @redis_retry()
    def delete(self, key: str) -> None:
        self.redis.delete(self._key(key))

    @redis_retry()
    def clear(self) -> None:
        keys = list(self.redis.scan_iter(match=self._key("*")))
        if keys:
            self.redis.delete(*keys)
        logger.info(f"Cleared session {self.session_id} ({len(keys)} keys)")
