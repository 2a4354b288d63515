from sqlalchemy import Column, Integer, ForeignKey, String, DateTime

from gamestore.data.database import Base


class SessionModel(Base):
    __tablename__ = "sessions"

    token = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
