# gamestore/client/api_client.py
from typing import Any

import requests
from requests import RequestException

from gamestore.utils.settings import API_BASE_URL, CLIENT_TIMEOUT_SECONDS
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)


class ClientError(Exception):
    """Blad wywolania API; message pochodzi z ciala {"error", "message"}."""

    def __init__(self, status: int | None, message: str, body: Any = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.body = body


def _error_message(resp: requests.Response) -> tuple[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        return (resp.text or f"HTTP {resp.status_code}"), None
    if isinstance(body, dict):
        return (body.get("message") or body.get("error") or f"HTTP {resp.status_code}"), body
    return f"HTTP {resp.status_code}", body


class StorefrontClient:
    """
    Klient HTTP sklepu: timeouty, bez automatycznych retry.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = CLIENT_TIMEOUT_SECONDS,
        http: requests.Session | None = None,
    ):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()

    def _request(self, method: str, path: str, token: str | None = None, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        headers = kwargs.pop("headers", {})
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            resp = self.http.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ClientError(None, "Connection error, check that the server is running")

        if not resp.ok:
            message, body = _error_message(resp)
            raise ClientError(resp.status_code, message, body)

        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # catalog
    def list_products(self) -> list[dict]:
        return self._request("GET", "/catalog")

    def search(self, query: str, limit: int = 8) -> list[dict]:
        return self._request("GET", "/catalog/search", params={"q": query, "limit": limit})

    def top(self, limit: int = 5) -> list[dict]:
        return self._request("GET", "/catalog/top", params={"limit": limit})

    def recommended(self) -> dict:
        return self._request("GET", "/catalog/recommended")

    def game_details(self, game_id: int) -> dict:
        return self._request("GET", f"/catalog/{game_id}/details")

    # auth / account
    def register(self, username: str, email: str, password: str, display_name: str | None = None) -> dict:
        payload = {"username": username, "email": email, "password": password}
        if display_name:
            payload["displayName"] = display_name
        return self._request("POST", "/auth/register", json=payload)

    def login(self, identifier: str, password: str) -> dict:
        return self._request("POST", "/auth/login", json={"identifier": identifier, "password": password})

    def logout(self, token: str) -> None:
        self._request("POST", "/auth/logout", token=token)

    def account(self, user_id: int) -> dict:
        return self._request("GET", f"/account/{user_id}")

    def purchase_history(self, token: str) -> list[dict]:
        data = self._request("GET", "/account/history", token=token) or {}
        return data.get("purchases") or []

    # checkout / support
    def checkout(self, payload: dict, token: str) -> dict:
        return self._request("POST", "/checkout", token=token, json=payload)

    def open_ticket(self, name: str, email: str, message: str, subject: str | None = None) -> dict:
        payload = {"name": name, "email": email, "message": message}
        if subject:
            payload["subject"] = subject
        return self._request("POST", "/support/ticket", json=payload)
