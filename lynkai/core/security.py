"""Password hashing for stored credentials."""

import bcrypt

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 30
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# Login accepts a username or an email in one field, so usernames never contain "@".
USERNAME_PATTERN = r"^[^@]+$"

# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """One-way adaptive hash with a fresh salt per call; the cost is embedded in the output."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, raw_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = raw_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, raw_password: str, encoded_hash: str) -> bool:
        """Verify a plain password against a stored hash; malformed input is a mismatch."""
        try:
            pw_bytes = raw_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
            return bcrypt.checkpw(pw_bytes, encoded_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False
