"""Registration, email verification, login, token refresh and logout."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from lynkai.core.results import ErrorKind, Result, TokenPair
from lynkai.core.security import PasswordHasher
from lynkai.core.tokens import TokenCodec
from lynkai.services.activity_log import ActionType, ActivityLogService
from lynkai.services.credential_store import CredentialStore
from lynkai.services.notifier import VerificationDispatcher, redact_email
from lynkai.services.refresh_ledger import RefreshTokenLedger
from lynkai.services.verification import VerificationCodeIssuer

logger = logging.getLogger(__name__)


class SessionService:
    """
    Single entry point for credential and session lifecycle.

    A user moves Unregistered -> Unverified -> Verified. Each public method
    runs as one transaction on ``db``: it commits on success, leaves nothing
    behind on a taxonomy failure, and rolls back and re-raises on storage
    errors. Verification codes are handed to the dispatcher only after the
    transaction that created them has committed.
    """

    def __init__(
        self,
        db: Session,
        *,
        users: CredentialStore,
        hasher: PasswordHasher,
        codes: VerificationCodeIssuer,
        codec: TokenCodec,
        ledger: RefreshTokenLedger,
        dispatcher: VerificationDispatcher,
        activity: ActivityLogService,
        resend_revokes_previous: bool = False,
    ) -> None:
        self.db = db
        self.users = users
        self.hasher = hasher
        self.codes = codes
        self.codec = codec
        self.ledger = ledger
        self.dispatcher = dispatcher
        self.activity = activity
        self.resend_revokes_previous = resend_revokes_previous

    def register(self, username: str, email: str, password: str) -> Result[int]:
        """Create an unverified user and send a first verification code."""
        if self.users.exists(username, email):
            return Result.fail(ErrorKind.DUPLICATE_USER)
        try:
            user = self.users.create(username, email, self.hasher.hash(password))
            user_id = user.id
            code = self.codes.issue(user_id)
            self.activity.record(user_id, ActionType.REGISTER)
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same name or email.
            self.db.rollback()
            return Result.fail(ErrorKind.DUPLICATE_USER)
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.info("Registered user_id=%s", user_id)
        self._send_code(email, code)
        return Result.ok(user_id)

    def resend_verification(self, email: str) -> Result[None]:
        user = self.users.get_by_email(email)
        if user is None:
            return Result.fail(ErrorKind.USER_NOT_FOUND)
        if user.verified:
            return Result.fail(ErrorKind.ACCOUNT_ALREADY_VERIFIED)
        try:
            if self.resend_revokes_previous:
                self.codes.revoke_all(user.id)
            code = self.codes.issue(user.id)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self._send_code(email, code)
        return Result.ok()

    def verify_email(self, email: str, code: str) -> Result[TokenPair]:
        """Consume the code, mark the user verified and sign them in."""
        user = self.users.get_by_email(email)
        if user is None:
            return Result.fail(ErrorKind.USER_NOT_FOUND)
        user_id = user.id
        try:
            consumed = self.codes.verify(user_id, code)
            if not consumed.is_ok:
                # An expired code must survive the check; nothing else was written.
                self.db.rollback()
                return Result.fail(consumed.error)
            self.users.mark_verified(user_id)
            pair = self._grant(user_id)
            self.activity.record(user_id, ActionType.LOGIN)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.info("Email verified for user_id=%s", user_id)
        return Result.ok(pair)

    def is_verified(self, email: str) -> bool:
        user = self.users.get_by_email(email)
        return bool(user is not None and user.verified)

    def login(self, username_or_email: str, password: str) -> Result[TokenPair]:
        """
        Check credentials and start a fresh session.

        Every refresh token from earlier sessions is revoked, so after a
        successful login the user has exactly one live refresh record.
        """
        user = self.users.get_by_username_or_email(username_or_email)
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.info("Login failed: invalid credentials")
            return Result.fail(ErrorKind.INVALID_CREDENTIALS)
        if not user.verified:
            return Result.fail(ErrorKind.ACCOUNT_UNVERIFIED)
        user_id = user.id
        try:
            revoked = self.ledger.invalidate_all(user_id)
            pair = self._grant(user_id)
            self.activity.record(user_id, ActionType.LOGIN)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.info("Login user_id=%s revoked_sessions=%s", user_id, revoked)
        return Result.ok(pair)

    def refresh(self, raw_refresh_token: str) -> Result[TokenPair]:
        """Rotate: consume the presented refresh token and issue a new pair."""
        validated = self.codec.validate(raw_refresh_token, "refresh")
        if not validated.is_ok:
            return Result.fail(validated.error)
        user_id = validated.value
        if self.users.get(user_id) is None:
            return Result.fail(ErrorKind.TOKEN_INVALID)
        try:
            consumed = self.ledger.consume(user_id, raw_refresh_token)
            if not consumed.is_ok:
                self.db.rollback()
                return Result.fail(consumed.error)
            pair = self._grant(user_id)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.debug("Rotated refresh token for user_id=%s", user_id)
        return Result.ok(pair)

    def logout(self, raw_refresh_token: str) -> Result[None]:
        """Revoke the given refresh token. Idempotent; unknown tokens are ignored."""
        try:
            self.ledger.invalidate_by_raw_token(raw_refresh_token)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return Result.ok()

    def _grant(self, user_id: int) -> TokenPair:
        access = self.codec.issue_access(user_id)
        refresh = self.codec.issue_refresh(user_id)
        self.ledger.store(user_id, refresh)
        return TokenPair(access_token=access, refresh_token=refresh)

    def _send_code(self, email: str, code: str) -> None:
        try:
            self.dispatcher.dispatch(email, code)
        except Exception:
            # Registration already committed; the user can ask for a resend.
            logger.exception("Could not queue verification mail for %s", redact_email(email))


def build_session_service(
    db: Session,
    codec: TokenCodec,
    dispatcher: VerificationDispatcher,
    *,
    hasher: PasswordHasher | None = None,
    resend_revokes_previous: bool = False,
) -> SessionService:
    """Compose a SessionService whose stores all share ``db``."""
    return SessionService(
        db,
        users=CredentialStore(db),
        hasher=hasher or PasswordHasher(),
        codes=VerificationCodeIssuer(db),
        codec=codec,
        ledger=RefreshTokenLedger(db),
        dispatcher=dispatcher,
        activity=ActivityLogService(db),
        resend_revokes_previous=resend_revokes_previous,
    )
