"""Account activity log: who registered and logged in, and when."""

from enum import Enum

from sqlalchemy.orm import Session

from lynkai.models import ActivityLog


class ActionType(str, Enum):
    REGISTER = "REGISTER"
    LOGIN = "LOGIN"


class ActivityLogService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def record(self, user_id: int, action: ActionType) -> None:
        self.db.add(ActivityLog(user_id=user_id, action=action.value))
        self.db.flush()

    def for_user(self, user_id: int) -> list[ActivityLog]:
        return (
            self.db.query(ActivityLog)
            .filter(ActivityLog.user_id == user_id)
            .order_by(ActivityLog.id)
            .all()
        )
