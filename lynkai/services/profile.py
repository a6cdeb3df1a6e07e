"""Profile operations for an already authenticated user."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from lynkai.core.results import ErrorKind, Result
from lynkai.core.security import PasswordHasher
from lynkai.models import User
from lynkai.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Reads and edits the caller's own user record.

    Every method takes the caller's user id explicitly; there is no ambient
    "current user".
    """

    def __init__(self, db: Session, users: CredentialStore, hasher: PasswordHasher) -> None:
        self.db = db
        self.users = users
        self.hasher = hasher

    def get(self, user_id: int) -> Result[User]:
        user = self.users.get(user_id)
        if user is None:
            return Result.fail(ErrorKind.USER_NOT_FOUND)
        return Result.ok(user)

    def update(
        self, user_id: int, username: str | None = None, email: str | None = None
    ) -> Result[User]:
        """Change username and/or email; blank or unchanged values are ignored."""
        user = self.users.get(user_id)
        if user is None:
            return Result.fail(ErrorKind.USER_NOT_FOUND)

        new_username = username if username and username != user.username else None
        new_email = email if email and email != user.email else None
        for value in (new_username, new_email):
            if value is not None and self.users.identifier_taken(value, exclude_user_id=user_id):
                return Result.fail(ErrorKind.DUPLICATE_USER)
        if new_username is None and new_email is None:
            return Result.ok(user)

        try:
            self.users.update_profile(user, username=new_username, email=new_email)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return Result.fail(ErrorKind.DUPLICATE_USER)
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return Result.ok(user)

    def change_password(
        self, user_id: int, old_password: str, new_password: str
    ) -> Result[None]:
        user = self.users.get(user_id)
        if user is None:
            return Result.fail(ErrorKind.USER_NOT_FOUND)
        if not self.hasher.verify(old_password, user.password_hash):
            return Result.fail(ErrorKind.INVALID_CREDENTIALS)
        try:
            self.users.set_password_hash(user, self.hasher.hash(new_password))
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.info("Password changed for user_id=%s", user_id)
        return Result.ok()
