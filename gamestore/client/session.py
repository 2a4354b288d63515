# gamestore/client/session.py
from dataclasses import dataclass
from enum import Enum
from typing import Any

from gamestore.client.cart import CartStore
from gamestore.client.session_store import MemorySessionStore, SessionStore


class ChatState(Enum):
    IDLE = "idle"
    MAIN_MENU = "main_menu"
    PASSWORD_RECOVERY = "password_recovery"
    TICKET_TRACKING = "ticket_tracking"


class RecoveryStep(Enum):
    NAME = "name"
    EMAIL = "email"


@dataclass
class ChatFlow:
    state: ChatState = ChatState.IDLE
    recovery_step: RecoveryStep | None = None
    recovery_name: str = ""
    recovery_email: str = ""


class SessionState:
    """
    Caly stan sesji przegladarki w jednym obiekcie:
    zalogowany uzytkownik, token, koszyk, stan czatu.
    """

    USER_KEY = "userData"
    TOKEN_KEY = "token"

    def __init__(self, store: SessionStore | None = None):
        self.store = store or MemorySessionStore()
        self.cart = CartStore(self.store)
        #stan czatu zyje tylko w pamieci, jak panel czatu na stronie
        self.chat = ChatFlow()

    @property
    def user(self) -> dict | None:
        return self.store.get(self.USER_KEY)

    @property
    def token(self) -> str | None:
        return self.store.get(self.TOKEN_KEY) or None

    @property
    def is_authenticated(self) -> bool:
        user = self.user
        return bool(self.token and user and user.get("id"))

    @property
    def display_name(self) -> str | None:
        user = self.user or {}
        return user.get("displayName") or user.get("username")

    def login(self, user: dict[str, Any], token: str) -> None:
        self.store.set(self.USER_KEY, user)
        self.store.set(self.TOKEN_KEY, token)

    def logout(self) -> None:
        self.store.delete(self.USER_KEY)
        self.store.delete(self.TOKEN_KEY)

    def end(self) -> None:
        #koniec sesji - wszystko znika, razem z koszykiem
        self.store.clear()
        self.chat = ChatFlow()
