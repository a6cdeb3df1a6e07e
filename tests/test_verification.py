"""Tests for lynkai.services.verification: code generation, issue and single-use consumption."""

import unittest
from unittest.mock import patch

from lynkai.core.results import ErrorKind
from lynkai.models import VerificationCode
from lynkai.services.credential_store import CredentialStore
from lynkai.services.verification import (
    CODE_MAX,
    CODE_MIN,
    VerificationCodeIssuer,
    generate_code,
)
from tests.helpers import FixedClock, make_session


class TestGenerateCode(unittest.TestCase):
    def test_six_digits_in_range(self) -> None:
        for _ in range(200):
            code = generate_code()
            self.assertEqual(len(code), 6)
            self.assertTrue(code.isdigit())
            self.assertTrue(CODE_MIN <= int(code) <= CODE_MAX)

    def test_bounds(self) -> None:
        with patch("lynkai.services.verification.secrets.randbelow", return_value=0):
            self.assertEqual(generate_code(), "100000")
        with patch("lynkai.services.verification.secrets.randbelow", return_value=899999):
            self.assertEqual(generate_code(), "999999")


class TestIssueAndVerify(unittest.TestCase):
    """Codes live ten minutes and are consumed on first successful match."""

    def setUp(self) -> None:
        self.db = make_session()
        self.clock = FixedClock()
        self.user_id = CredentialStore(self.db).create("alice", "a@x.com", "hash").id
        self.codes = VerificationCodeIssuer(self.db, clock=self.clock)

    def tearDown(self) -> None:
        self.db.close()

    def _count(self) -> int:
        return self.db.query(VerificationCode).filter_by(user_id=self.user_id).count()

    def test_issue_persists_code(self) -> None:
        code = self.codes.issue(self.user_id)
        row = self.db.query(VerificationCode).filter_by(user_id=self.user_id).one()
        self.assertEqual(row.code, code)

    def test_verify_consumes_code(self) -> None:
        code = self.codes.issue(self.user_id)
        self.assertTrue(self.codes.verify(self.user_id, code).is_ok)
        self.assertEqual(self._count(), 0)
        self.assertEqual(self.codes.verify(self.user_id, code).error, ErrorKind.CODE_INVALID)

    def test_wrong_code_is_invalid(self) -> None:
        code = self.codes.issue(self.user_id)
        wrong = "100000" if code != "100000" else "100001"
        self.assertEqual(self.codes.verify(self.user_id, wrong).error, ErrorKind.CODE_INVALID)
        self.assertEqual(self._count(), 1)

    def test_code_of_other_user_is_invalid(self) -> None:
        other = CredentialStore(self.db).create("bob", "b@x.com", "hash").id
        code = self.codes.issue(self.user_id)
        self.assertEqual(self.codes.verify(other, code).error, ErrorKind.CODE_INVALID)

    def test_expired_code_is_kept(self) -> None:
        code = self.codes.issue(self.user_id)
        self.clock.advance(minutes=10, seconds=1)
        self.assertEqual(self.codes.verify(self.user_id, code).error, ErrorKind.CODE_EXPIRED)
        self.assertEqual(self._count(), 1)

    def test_code_valid_just_before_expiry(self) -> None:
        code = self.codes.issue(self.user_id)
        self.clock.advance(minutes=9, seconds=59)
        self.assertTrue(self.codes.verify(self.user_id, code).is_ok)

    def test_multiple_live_codes_coexist(self) -> None:
        first = self.codes.issue(self.user_id)
        second = self.codes.issue(self.user_id)
        self.assertEqual(self._count(), 2)
        self.assertTrue(self.codes.verify(self.user_id, first).is_ok)
        if second != first:
            self.assertTrue(self.codes.verify(self.user_id, second).is_ok)

    def test_revoke_all(self) -> None:
        self.codes.issue(self.user_id)
        self.codes.issue(self.user_id)
        self.assertEqual(self.codes.revoke_all(self.user_id), 2)
        self.assertEqual(self._count(), 0)


if __name__ == "__main__":
    unittest.main()
