"""SQLAlchemy ORM models."""

from lynkai.models.activity_log import ActivityLog
from lynkai.models.base import Base
from lynkai.models.refresh_token import RefreshToken
from lynkai.models.user import User
from lynkai.models.verification_code import VerificationCode

__all__ = ["ActivityLog", "Base", "RefreshToken", "User", "VerificationCode"]
