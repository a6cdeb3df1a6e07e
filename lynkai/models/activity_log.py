"""ORM model for account activity (registrations, logins)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from lynkai.models.base import Base


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # No FK: the log outlives whatever happens to the user row.
    user_id = Column(Integer, nullable=False, index=True)
    action = Column(String(32), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
