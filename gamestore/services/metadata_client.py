# gamestore/services/metadata_client.py
import requests
from requests import RequestException

from gamestore.domain.errors import UpstreamError
from gamestore.utils.settings import RAWG_API_URL, RAWG_API_KEY, RAWG_TIMEOUT_SECONDS
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)


def _names(entries, key: str) -> list[str]:
    #RAWG zwraca np. [{"platform": {"name": "PC"}}] albo [{"name": "Action"}]
    names = []
    for entry in entries or []:
        if not isinstance(entry, dict):
            continue
        nested = entry.get(key)
        name = nested.get("name") if isinstance(nested, dict) else entry.get("name")
        if name:
            names.append(name)
    return names


def synthetic_price(rating) -> float:
    #RAWG nie ma cen, cena zastepcza z oceny
    return round(10 + (rating or 0) * 7, 2)


class MetadataClient:
    """
    Proxy do zewnetrznego API metadanych gier (RAWG).
    Bez cache i bez retry, bledy upstream przechodza dalej.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = RAWG_API_KEY,
        timeout: float = RAWG_TIMEOUT_SECONDS,
        http: requests.Session | None = None,
    ):
        self.base_url = (base_url or RAWG_API_URL).rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.http = http or requests.Session()

    def _get(self, path: str, params: dict | None = None, passthrough: bool = False) -> dict:
        url = f"{self.base_url}{path}"
        query = dict(params or {})
        if self.api_key:
            query["key"] = self.api_key

        logger.info(f"MetadataClient GET {url}")
        try:
            resp = self.http.get(url, params=query, timeout=self.timeout)
        except RequestException as e:
            logger.error(f"Metadata request to {url} failed: {e}")
            raise UpstreamError("Metadata provider unreachable", details=str(e))

        if not resp.ok:
            body = resp.text or "no body"
            logger.error(f"Metadata request to {url} returned {resp.status_code}: {body[:200]}")
            raise UpstreamError(
                "Metadata provider request failed",
                status_code=resp.status_code if passthrough else None,
                details=body,
            )

        try:
            return resp.json()
        except ValueError:
            raise UpstreamError("Metadata provider returned invalid JSON")

    def game_details(self, game_id: int) -> dict:
        data = self._get(f"/games/{game_id}")
        rating = data.get("rating")
        return {
            "id": data.get("id", game_id),
            "name": data.get("name"),
            "description": data.get("description_raw") or data.get("description"),
            "genres": _names(data.get("genres"), "genre"),
            "platforms": _names(data.get("platforms"), "platform"),
            "rating": rating if isinstance(rating, (int, float)) else None,
            "image": data.get("background_image"),
        }

    def popular(self, size: int = 10) -> list[dict]:
        #ordering -added ~ popularnosc (dodane do list uzytkownikow)
        data = self._get("/games", {"page_size": size, "ordering": "-added"})
        return [
            {
                "id": g["id"],
                "name": g.get("name"),
                "image": g.get("background_image") or "",
                "rating": g.get("rating") or 0,
                "released": g.get("released"),
            }
            for g in (data.get("results") or [])[:size]
        ]

    def search(self, term: str = "", page: int = 1, page_size: int = 10) -> dict:
        params = {"page": page, "page_size": page_size}
        if term:
            params["search"] = term
        data = self._get("/games", params, passthrough=True)
        return {
            "count": data.get("count") or 0,
            "results": [
                {
                    "id": g["id"],
                    "title": g.get("name"),
                    "price": synthetic_price(g.get("rating")),
                    "platforms": _names(g.get("platforms"), "platform"),
                    "image": g.get("background_image") or "",
                    "slug": g.get("slug"),
                }
                for g in data.get("results") or []
            ],
        }
