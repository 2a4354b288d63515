# gamestore/services/auth_service.py
import secrets
from datetime import datetime, timezone, timedelta

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gamestore.data.models.session import SessionModel
from gamestore.data.models.user import UserModel
from gamestore.domain.errors import AuthenticationError, ConflictError, NotFoundError
from gamestore.domain.schemas import LoginIn, RegisterIn
from gamestore.repos.session_repo import SessionRepo
from gamestore.repos.user_repo import UserRepo
from gamestore.utils.settings import BCRYPT_ROUNDS, SESSION_TTL_SECONDS
from gamestore.utils.logging import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        #uszkodzony hash w bazie traktujemy jak zle haslo
        return False


def _as_utc(value: datetime) -> datetime:
    #sqlite zwraca naive datetime
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AuthService:
    def __init__(self, db: Session, session_ttl: int = SESSION_TTL_SECONDS):
        self.repo = UserRepo(db)
        self.sessions = SessionRepo(db)
        self.session_ttl = session_ttl

    def register(self, payload: RegisterIn) -> UserModel:
        if self.repo.exists(payload.username, payload.email):
            raise ConflictError("Username or email already registered", error="User already exists")

        user = UserModel(
            username=payload.username,
            email=payload.email,
            password_hash=hash_password(payload.password),
            display_name=payload.display_name,
        )

        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            #rownolegla rejestracja - unique constraint w bazie
            self.repo.db.rollback()
            raise ConflictError("Username or email already registered", error="User already exists")

        logger.info(f"New user registered: {created.username}")
        return created

    def authenticate(self, payload: LoginIn) -> UserModel:
        user = self.repo.get_by_identifier(payload.identifier)
        if not user or not check_password(payload.password, user.password_hash):
            logger.info(f"Failed login for identifier {payload.identifier!r}")
            raise AuthenticationError(INVALID_CREDENTIALS, error="Invalid credentials")

        logger.info(f"Login successful: {user.username}")
        return user

    def login(self, payload: LoginIn) -> tuple[UserModel, SessionModel]:
        user = self.authenticate(payload)
        return user, self.issue_session(user)

    def issue_session(self, user: UserModel) -> SessionModel:
        now = datetime.now(timezone.utc)

        #porzucone sesje sprzatamy przy kazdym logowaniu
        purged = self.sessions.delete_expired(now)
        if purged:
            logger.info(f"Purged {purged} expired session(s)")

        session = SessionModel(
            token=secrets.token_hex(32),
            user_id=user.id,
            expires_at=now + timedelta(seconds=self.session_ttl),
        )
        return self.sessions.create_session(session)

    def resolve_token(self, token: str | None) -> UserModel:
        if not token:
            raise AuthenticationError("Missing session token")

        session = self.sessions.get_session(token)
        if not session:
            raise AuthenticationError("Invalid session token", error="Invalid session")

        if _as_utc(session.expires_at) <= datetime.now(timezone.utc):
            self.sessions.delete_session(token)
            raise AuthenticationError("Session expired, please log in again", error="Session expired")

        user = self.repo.get_user(session.user_id)
        if not user:
            raise AuthenticationError("Invalid session token", error="Invalid session")
        return user

    def logout(self, token: str) -> bool:
        return self.sessions.delete_session(token) > 0

    def verify(self, username: str) -> UserModel:
        user = self.repo.get_by_username(username)
        if not user:
            raise NotFoundError(f"User {username!r} does not exist", error="User not found")
        return user
