"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks.
The work factor comes from settings (12 by default, ~100ms per hash
on modern hardware). Passwords are truncated to 72 bytes (bcrypt's
limit) on both the hash and the verify path so they always agree.
"""

import bcrypt

DEFAULT_ROUNDS = 12


class PasswordError(Exception):
    """Raised when a password cannot be hashed or does not match."""


class EmptyPasswordError(PasswordError):
    """Raised when asked to hash an empty password."""


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:72]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt.

    Raises EmptyPasswordError for an empty password; bcrypt would
    happily hash it, but an empty credential is never acceptable.
    """
    if not password:
        raise EmptyPasswordError("Can't hash an empty password")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> None:
    """Check a password against its bcrypt hash.

    Returns None on a match and raises PasswordError otherwise.
    bcrypt.checkpw compares in constant time.
    """
    try:
        matches = bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError) as e:
        raise PasswordError(f"Malformed password hash: {e}") from e
    if not matches:
        raise PasswordError("Password does not match")
