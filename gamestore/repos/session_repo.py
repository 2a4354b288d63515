# gamestore/repos/session_repo.py
from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.orm import Session

from gamestore.data.models.session import SessionModel


class SessionRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_session(self, session: SessionModel) -> SessionModel:
        self.db.add(session)
        self.db.commit()
        return session

    def get_session(self, token: str) -> SessionModel | None:
        return self.db.get(SessionModel, token)

    def delete_session(self, token: str) -> int:
        result = self.db.execute(delete(SessionModel).where(SessionModel.token == token))
        self.db.commit()
        return result.rowcount

    def delete_expired(self, now: datetime) -> int:
        result = self.db.execute(delete(SessionModel).where(SessionModel.expires_at < now))
        self.db.commit()
        return result.rowcount
