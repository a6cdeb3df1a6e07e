"""Durable user records: lookups by id, username and email, creation and verification."""

from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from lynkai.models import User


class CredentialStore:
    """Repository over the users table. Flushes only; the caller owns the transaction."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_username_or_email(self, username_or_email: str) -> User | None:
        """Username match wins over an email match."""
        user = self.get_by_username(username_or_email)
        if user is not None:
            return user
        return self.get_by_email(username_or_email)

    def identifier_taken(self, value: str, exclude_user_id: int | None = None) -> bool:
        """True if value is some other user's username or email."""
        query = self.db.query(User.id).filter(
            or_(User.username == value, User.email == value)
        )
        if exclude_user_id is not None:
            query = query.filter(User.id != exclude_user_id)
        return query.first() is not None

    def exists(self, username: str, email: str) -> bool:
        """
        True if either the username or the email is already taken.

        Usernames and emails share one namespace at login, so each value is
        checked against both columns.
        """
        return self.identifier_taken(username) or self.identifier_taken(email)

    def create(self, username: str, email: str, password_hash: str) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            verified=False,
        )
        self.db.add(user)
        self.db.flush()
        return user

    def mark_verified(self, user_id: int) -> bool:
        """Flip verified to True; returns False if the user was already verified."""
        result = self.db.execute(
            update(User)
            .where(User.id == user_id, User.verified.is_(False))
            .values(verified=True)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1

    def set_password_hash(self, user: User, password_hash: str) -> None:
        user.password_hash = password_hash
        self.db.flush()

    def update_profile(
        self, user: User, username: str | None = None, email: str | None = None
    ) -> User:
        if username is not None:
            user.username = username
        if email is not None:
            user.email = email
        self.db.flush()
        return user
