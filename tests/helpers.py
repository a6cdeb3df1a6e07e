"""Shared fixtures for tests: in-memory database, controllable clock, fake mail dispatch."""

from datetime import datetime, timedelta, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from lynkai.core.security import PasswordHasher
from lynkai.core.tokens import TokenCodec
from lynkai.models import Base
from lynkai.services.activity_log import ActivityLogService
from lynkai.services.credential_store import CredentialStore
from lynkai.services.refresh_ledger import RefreshTokenLedger
from lynkai.services.session import SessionService
from lynkai.services.verification import VerificationCodeIssuer

TEST_SECRET = "dW5pdC10ZXN0LXNpZ25pbmcta2V5LTAxMjM0NTY3ODlhYmNkZWY="
OTHER_SECRET = "YW5vdGhlci1zaWduaW5nLWtleS11c2VkLXRvLWZvcmdlLXRva2Vucw=="


def make_sessionmaker() -> sessionmaker:
    """Fresh in-memory SQLite database with all tables, shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_file_sessionmaker(path: str) -> sessionmaker:
    """SQLite file database with one connection per session, for lock-contention tests."""
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_session() -> Session:
    return make_sessionmaker()()


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime.now(timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingDispatcher:
    """Stands in for VerificationDispatcher; keeps (address, code) pairs in order."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def dispatch(self, to_address: str, code: str) -> None:
        self.sent.append((to_address, code))

    def last_code(self) -> str:
        return self.sent[-1][1]


class BrokenDispatcher:
    def dispatch(self, to_address: str, code: str) -> None:
        raise RuntimeError("executor is shut down")


def make_service(
    db: Session,
    clock: FixedClock | None = None,
    dispatcher: object | None = None,
    resend_revokes_previous: bool = False,
) -> SessionService:
    """SessionService over db with a cheap bcrypt cost; codes and ledger use ``clock``."""
    clock = clock or FixedClock()
    return SessionService(
        db,
        users=CredentialStore(db),
        hasher=PasswordHasher(rounds=4),
        codes=VerificationCodeIssuer(db, clock=clock),
        codec=TokenCodec(TEST_SECRET),
        ledger=RefreshTokenLedger(db, clock=clock),
        dispatcher=dispatcher if dispatcher is not None else RecordingDispatcher(),
        activity=ActivityLogService(db),
        resend_revokes_previous=resend_revokes_previous,
    )
