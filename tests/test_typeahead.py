import threading

from gamestore.client.typeahead import Typeahead


class SlowClient:
    """Pierwsze zapytanie czeka az drugie zostanie wyslane."""

    def __init__(self):
        self.release = threading.Event()
        self.calls = []

    def search(self, term, limit):
        self.calls.append((term, limit))
        if term == "wit":
            self.release.wait(timeout=5)
        return [{"id": 1, "title": f"{term} result"}]


def test_blank_query_resolves_to_empty_list():
    client = SlowClient()
    typeahead = Typeahead(client)
    try:
        assert typeahead.submit("   ").result(timeout=1) == []
        assert client.calls == []
    finally:
        typeahead.close()


def test_superseded_result_is_discarded():
    client = SlowClient()
    typeahead = Typeahead(client, limit=8)
    try:
        first = typeahead.submit("wit")
        second = typeahead.submit("witcher")
        client.release.set()

        assert second.result(timeout=5) == [{"id": 1, "title": "witcher result"}]
        #pierwsze moglo zostac anulowane albo zwrocic None
        assert first.cancelled() or first.result(timeout=5) is None
        assert ("witcher", 8) in client.calls
    finally:
        typeahead.close()


def test_latest_query_is_returned():
    client = SlowClient()
    client.release.set()
    typeahead = Typeahead(client, limit=3)
    try:
        assert typeahead.submit("elden").result(timeout=5) == [{"id": 1, "title": "elden result"}]
    finally:
        typeahead.close()
