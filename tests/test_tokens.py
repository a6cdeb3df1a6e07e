"""Unit tests for lynkai.core.tokens: issuing and validating access/refresh JWTs."""

import base64
import unittest
from datetime import datetime, timedelta, timezone

import jwt

from lynkai.core.results import ErrorKind
from lynkai.core.tokens import ACCESS_TOKEN_TTL, REFRESH_TOKEN_TTL, TokenCodec
from tests.helpers import OTHER_SECRET, TEST_SECRET, FixedClock


def _raw_token(payload: dict) -> str:
    return jwt.encode(payload, base64.b64decode(TEST_SECRET), algorithm="HS256")


class TestTokenClaims(unittest.TestCase):
    """Issued tokens carry sub, type, iat, exp and a unique jti."""

    def setUp(self) -> None:
        self.codec = TokenCodec(TEST_SECRET)

    def _claims(self, token: str) -> dict:
        return jwt.decode(token, base64.b64decode(TEST_SECRET), algorithms=["HS256"])

    def test_access_claims(self) -> None:
        claims = self._claims(self.codec.issue_access(42))
        self.assertEqual(claims["sub"], "42")
        self.assertEqual(claims["type"], "access")
        self.assertEqual(claims["exp"] - claims["iat"], int(ACCESS_TOKEN_TTL.total_seconds()))

    def test_refresh_claims(self) -> None:
        claims = self._claims(self.codec.issue_refresh(42))
        self.assertEqual(claims["type"], "refresh")
        self.assertEqual(claims["exp"] - claims["iat"], 2592000)
        self.assertEqual(REFRESH_TOKEN_TTL.total_seconds(), 2592000)

    def test_tokens_minted_in_same_second_differ(self) -> None:
        clock = FixedClock()
        codec = TokenCodec(TEST_SECRET, clock=clock)
        self.assertNotEqual(codec.issue_refresh(1), codec.issue_refresh(1))


class TestValidate(unittest.TestCase):
    """validate() maps every failure to TokenInvalid or TokenExpired."""

    def setUp(self) -> None:
        self.codec = TokenCodec(TEST_SECRET)

    def test_valid_access_token(self) -> None:
        result = self.codec.validate(self.codec.issue_access(7), "access")
        self.assertTrue(result.is_ok)
        self.assertEqual(result.value, 7)

    def test_valid_refresh_token(self) -> None:
        result = self.codec.validate(self.codec.issue_refresh(7), "refresh")
        self.assertEqual(result.value, 7)

    def test_access_token_rejected_as_refresh(self) -> None:
        result = self.codec.validate(self.codec.issue_access(7), "refresh")
        self.assertEqual(result.error, ErrorKind.TOKEN_INVALID)

    def test_refresh_token_rejected_as_access(self) -> None:
        result = self.codec.validate(self.codec.issue_refresh(7), "access")
        self.assertEqual(result.error, ErrorKind.TOKEN_INVALID)

    def test_expired_token(self) -> None:
        past = FixedClock(datetime.now(timezone.utc) - timedelta(hours=1))
        stale = TokenCodec(TEST_SECRET, clock=past).issue_access(7)
        result = self.codec.validate(stale, "access")
        self.assertEqual(result.error, ErrorKind.TOKEN_EXPIRED)

    def test_foreign_signature(self) -> None:
        forged = TokenCodec(OTHER_SECRET).issue_access(7)
        result = self.codec.validate(forged, "access")
        self.assertEqual(result.error, ErrorKind.TOKEN_INVALID)

    def test_garbage(self) -> None:
        self.assertEqual(self.codec.validate("not.a.jwt", "access").error, ErrorKind.TOKEN_INVALID)
        self.assertEqual(self.codec.validate("", "refresh").error, ErrorKind.TOKEN_INVALID)

    def test_non_integer_subject(self) -> None:
        now = datetime.now(timezone.utc)
        token = _raw_token(
            {"sub": "alice", "type": "access", "iat": now, "exp": now + timedelta(minutes=5)}
        )
        self.assertEqual(self.codec.validate(token, "access").error, ErrorKind.TOKEN_INVALID)

    def test_missing_type_claim(self) -> None:
        now = datetime.now(timezone.utc)
        token = _raw_token({"sub": "7", "iat": now, "exp": now + timedelta(minutes=5)})
        self.assertEqual(self.codec.validate(token, "access").error, ErrorKind.TOKEN_INVALID)

    def test_missing_exp_claim(self) -> None:
        token = _raw_token({"sub": "7", "type": "access", "iat": datetime.now(timezone.utc)})
        self.assertEqual(self.codec.validate(token, "access").error, ErrorKind.TOKEN_INVALID)


if __name__ == "__main__":
    unittest.main()
