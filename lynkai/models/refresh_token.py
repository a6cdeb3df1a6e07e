"""ORM model for issued refresh tokens, stored by hash only."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String

from lynkai.models.base import Base


class RefreshToken(Base):
    """
    One row per live refresh token.

    hashed_token is base64(SHA-256(raw token)); the raw token is never stored.
    A row is deleted when its token is rotated or logged out, and all of a
    user's rows are deleted on login.
    """

    __tablename__ = "refresh_tokens"
    __table_args__ = (
        Index("ix_refresh_tokens_user_hash", "user_id", "hashed_token"),
        Index("ix_refresh_tokens_hash", "hashed_token"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    hashed_token = Column(String(64), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
