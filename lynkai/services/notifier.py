"""Delivery of verification codes, decoupled from the operation that issued them."""

import logging
import smtplib
import ssl
from concurrent.futures import Future, ThreadPoolExecutor
from email.message import EmailMessage
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from lynkai.core.config import Settings

logger = logging.getLogger(__name__)

VERIFICATION_SUBJECT = "Your Verification Code"


def redact_email(email: str) -> str:
    """Redact an email address for logging."""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class Notifier(Protocol):
    """Sends a verification code to an address. May raise on delivery failure."""

    def send(self, to_address: str, code: str) -> None: ...


class LogNotifier:
    """Dev-mode notifier: writes the code to the log instead of sending mail."""

    def send(self, to_address: str, code: str) -> None:
        logger.info(
            "Mail not configured; verification code for %s is %s",
            redact_email(to_address),
            code,
        )


class SmtpNotifier:
    """Plain-text verification mail over SMTP (STARTTLS or implicit TLS)."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        from_address: str | None = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_address = from_address or username or f"no-reply@{host}"
        self.use_tls = use_tls
        self.timeout = timeout

    def build_message(self, to_address: str, code: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = VERIFICATION_SUBJECT
        msg["From"] = self.from_address
        msg["To"] = to_address
        msg.set_content(f"Your verification code is: {code}")
        return msg

    def send(self, to_address: str, code: str) -> None:
        msg = self.build_message(to_address, code)
        context = ssl.create_default_context()
        if self.use_tls:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls(context=context)
                self._login(server)
                server.send_message(msg)
        else:
            with smtplib.SMTP_SSL(
                self.host, self.port, context=context, timeout=self.timeout
            ) as server:
                self._login(server)
                server.send_message(msg)

    def _login(self, server: smtplib.SMTP) -> None:
        if self.username and self.password:
            server.login(self.username, self.password)


def notifier_from_settings(settings: "Settings") -> Notifier:
    if not settings.MAIL_HOST:
        return LogNotifier()
    password = (
        settings.MAIL_PASSWORD.get_secret_value() if settings.MAIL_PASSWORD else None
    )
    return SmtpNotifier(
        host=settings.MAIL_HOST,
        port=settings.MAIL_PORT,
        username=settings.MAIL_USERNAME,
        password=password,
        from_address=settings.MAIL_FROM,
        use_tls=settings.MAIL_USE_TLS,
        timeout=settings.MAIL_TIMEOUT_SEC,
    )


class VerificationDispatcher:
    """
    Fire-and-forget delivery on a small thread pool.

    dispatch() returns immediately. A delivery failure is logged from the
    worker and never reaches the caller that issued the code.
    """

    def __init__(self, notifier: Notifier, max_workers: int = 2) -> None:
        self.notifier = notifier
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="verification-mail"
        )

    def dispatch(self, to_address: str, code: str) -> Future:
        return self._executor.submit(self._deliver, to_address, code)

    def _deliver(self, to_address: str, code: str) -> None:
        try:
            self.notifier.send(to_address, code)
        except Exception:
            logger.exception(
                "Verification delivery failed: to=%s", redact_email(to_address)
            )
            return
        logger.info("Verification code sent: to=%s", redact_email(to_address))

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
