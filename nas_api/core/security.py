"""Password hashing and session token generation."""

import base64
import hashlib
import logging
import secrets

import bcrypt

from nas_api.core.errors import InternalFailureError

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12

# 32 bytes = 256 bits of entropy, hex-encoded to 64 characters.
TOKEN_BYTES = 32


def _prepare_password(password: str) -> bytes:
    """Pre-hash password if longer than bcrypt's 72-byte limit."""
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > 72:
        # SHA-256 hash and base64 encode to stay under 72 bytes
        return base64.b64encode(hashlib.sha256(password_bytes).digest())
    return password_bytes


def hash_password(plain_password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    try:
        return bcrypt.hashpw(
            _prepare_password(plain_password), bcrypt.gensalt(rounds=rounds)
        ).decode("utf-8")
    except (ValueError, TypeError) as e:
        logger.exception("Password hashing failed")
        raise InternalFailureError("Failed to hash password") from e


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    try:
        return bcrypt.checkpw(_prepare_password(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def generate_token() -> str:
    """Return a new opaque session token from the OS CSPRNG."""
    try:
        return secrets.token_hex(TOKEN_BYTES)
    except (OSError, NotImplementedError) as e:
        logger.exception("Entropy source unavailable while generating a session token")
        raise InternalFailureError("Failed to generate token") from e


def token_hint(token: str) -> str:
    """Short, non-secret prefix of a token for log lines."""
    return token[:8] + "…" if len(token) > 8 else "…"
