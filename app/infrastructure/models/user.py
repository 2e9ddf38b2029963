"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.infrastructure.database import Base


class UserModel(Base):
    """Directory entry for a forum user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    avatar = Column(String(500), nullable=True)
    role = Column(String(20), nullable=False, default="user")
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel"]
