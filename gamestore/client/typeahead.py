# gamestore/client/typeahead.py
import threading
from concurrent.futures import Future, ThreadPoolExecutor

from gamestore.client.api_client import StorefrontClient
from gamestore.utils.settings import SEARCH_DEFAULT_LIMIT
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)


class Typeahead:
    """
    Podpowiedzi wyszukiwarki. Nowe zapytanie zastepuje poprzednie:
    oczekujace jest anulowane, a wynik juz wyslanego jest odrzucany (None).
    """

    def __init__(
        self,
        client: StorefrontClient,
        limit: int = SEARCH_DEFAULT_LIMIT,
        executor: ThreadPoolExecutor | None = None,
    ):
        self.client = client
        self.limit = limit
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="typeahead")
        self._lock = threading.Lock()
        self._generation = 0
        self._pending: Future | None = None

    def submit(self, query: str) -> Future:
        term = (query or "").strip()

        with self._lock:
            self._generation += 1
            generation = self._generation
            if self._pending is not None and not self._pending.done():
                self._pending.cancel()

            if not term:
                future: Future = Future()
                future.set_result([])
            else:
                future = self._executor.submit(self._run, generation, term)
            self._pending = future

        return future

    def _run(self, generation: int, term: str):
        results = self.client.search(term, self.limit)
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding superseded suggestions for {term!r}")
                return None
        return results

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
