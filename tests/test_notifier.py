"""Tests for lynkai.services.notifier: background dispatch and SMTP message shape."""

import unittest
from unittest.mock import MagicMock, patch

from pydantic import SecretStr

from lynkai.services.notifier import (
    LogNotifier,
    SmtpNotifier,
    VerificationDispatcher,
    notifier_from_settings,
    redact_email,
)


class TestRedactEmail(unittest.TestCase):
    def test_redacts_local_part(self) -> None:
        self.assertEqual(redact_email("alice@example.com"), "al***@example.com")

    def test_not_an_email(self) -> None:
        self.assertEqual(redact_email("alice"), "redacted")


class TestDispatcher(unittest.TestCase):
    """dispatch() hands work to the pool; failures stay in the log."""

    def test_delivers_in_background(self) -> None:
        notifier = MagicMock()
        dispatcher = VerificationDispatcher(notifier, max_workers=1)
        future = dispatcher.dispatch("a@x.com", "123456")
        dispatcher.shutdown(wait=True)
        self.assertIsNone(future.result())
        notifier.send.assert_called_once_with("a@x.com", "123456")

    def test_failure_is_logged_not_raised(self) -> None:
        notifier = MagicMock()
        notifier.send.side_effect = ConnectionRefusedError("smtp down")
        dispatcher = VerificationDispatcher(notifier, max_workers=1)
        with self.assertLogs("lynkai.services.notifier", level="ERROR") as logs:
            future = dispatcher.dispatch("alice@x.com", "123456")
            dispatcher.shutdown(wait=True)
        self.assertIsNone(future.exception())
        self.assertIn("al***@x.com", logs.output[0])
        self.assertNotIn("123456", logs.output[0])

    def test_dispatch_after_shutdown_raises(self) -> None:
        dispatcher = VerificationDispatcher(MagicMock(), max_workers=1)
        dispatcher.shutdown()
        with self.assertRaises(RuntimeError):
            dispatcher.dispatch("a@x.com", "123456")


class TestSmtpNotifier(unittest.TestCase):
    def test_message(self) -> None:
        notifier = SmtpNotifier("smtp.example.com", from_address="noreply@example.com")
        msg = notifier.build_message("a@x.com", "654321")
        self.assertEqual(msg["To"], "a@x.com")
        self.assertEqual(msg["From"], "noreply@example.com")
        self.assertIn("654321", msg.get_content())

    @patch("lynkai.services.notifier.smtplib.SMTP")
    def test_starttls_and_login(self, smtp_cls: MagicMock) -> None:
        server = smtp_cls.return_value.__enter__.return_value
        notifier = SmtpNotifier(
            "smtp.example.com", 587, username="user", password="secret", use_tls=True
        )
        notifier.send("a@x.com", "654321")
        smtp_cls.assert_called_once_with("smtp.example.com", 587, timeout=30.0)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("user", "secret")
        server.send_message.assert_called_once()

    @patch("lynkai.services.notifier.smtplib.SMTP_SSL")
    def test_implicit_tls_without_credentials(self, smtp_ssl_cls: MagicMock) -> None:
        server = smtp_ssl_cls.return_value.__enter__.return_value
        SmtpNotifier("smtp.example.com", 465, use_tls=False).send("a@x.com", "654321")
        server.login.assert_not_called()
        server.send_message.assert_called_once()


class TestNotifierFromSettings(unittest.TestCase):
    def _settings(self, host: str | None) -> MagicMock:
        settings = MagicMock()
        settings.MAIL_HOST = host
        settings.MAIL_PORT = 587
        settings.MAIL_USERNAME = "user"
        settings.MAIL_PASSWORD = SecretStr("secret")
        settings.MAIL_FROM = "noreply@example.com"
        settings.MAIL_USE_TLS = True
        settings.MAIL_TIMEOUT_SEC = 10.0
        return settings

    def test_without_host_logs_codes(self) -> None:
        self.assertIsInstance(notifier_from_settings(self._settings(None)), LogNotifier)

    def test_with_host_uses_smtp(self) -> None:
        notifier = notifier_from_settings(self._settings("smtp.example.com"))
        self.assertIsInstance(notifier, SmtpNotifier)
        self.assertEqual(notifier.password, "secret")
        self.assertEqual(notifier.timeout, 10.0)


if __name__ == "__main__":
    unittest.main()
