# gamestore/api/deps.py
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from gamestore.data.database import get_db
from gamestore.data.models.user import UserModel
from gamestore.domain.errors import AuthenticationError
from gamestore.services.auth_service import AuthService
from gamestore.services.metadata_client import MetadataClient


def bearer_token(authorization: str | None = Header(None)) -> str | None:
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    return token or None


def get_current_user(
    token: str | None = Depends(bearer_token),
    db: Session = Depends(get_db),
) -> UserModel:
    #brak tokena -> 401 zanim dotkniemy bazy
    if not token:
        raise AuthenticationError("You must be logged in to perform this action")
    return AuthService(db).resolve_token(token)


def get_metadata_client() -> MetadataClient:
    return MetadataClient()
