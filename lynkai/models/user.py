"""ORM model for application users (credential store)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, false, func

from lynkai.models.base import Base


class User(Base):
    """
    Registered account. Created unverified; verified flips to True once,
    when an emailed code is confirmed. Rows are never deleted by the auth flow.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    verified = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
