"""ORM model for short-lived email verification codes."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String

from lynkai.models.base import Base


class VerificationCode(Base):
    """
    Six-digit code emailed to a user. Deleted on first successful match;
    several live codes may exist for one user.
    """

    __tablename__ = "verification_codes"
    __table_args__ = (Index("ix_verification_codes_user_code", "user_id", "code"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    code = Column(String(6), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
