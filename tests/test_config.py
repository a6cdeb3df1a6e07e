"""Validation rules of lynkai.core.config.Settings."""

import unittest

from pydantic import ValidationError

from lynkai.core.config import Settings
from tests.helpers import TEST_SECRET


class TestJwtSecret(unittest.TestCase):
    def test_accepts_base64_key(self) -> None:
        settings = Settings(JWT_SECRET=TEST_SECRET)
        self.assertEqual(settings.JWT_SECRET.get_secret_value(), TEST_SECRET)

    def test_rejects_non_base64(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET="this is not base64!")

    def test_rejects_short_key(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET="c2hvcnQ=")

    def test_rejects_non_hmac_algorithm(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_ALGORITHM="RS256")


class TestDatabaseUrl(unittest.TestCase):
    def test_sqlite_allowed(self) -> None:
        self.assertEqual(Settings(DATABASE_URL="sqlite://").DATABASE_URL, "sqlite://")

    def test_mysql_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://root@localhost/db")


class TestMail(unittest.TestCase):
    def test_blank_host_means_unset(self) -> None:
        self.assertIsNone(Settings(MAIL_HOST="  ").MAIL_HOST)

    def test_worker_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(MAIL_WORKERS=0)

    def test_timeout_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(MAIL_TIMEOUT_SEC=0)


if __name__ == "__main__":
    unittest.main()
