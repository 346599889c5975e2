"""Password hashing and JWT creation/verification for authentication."""

import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from rolegate.core.config import settings
from rolegate.core.errors import (
    TokenExpiredError,
    TokenInvalidError,
    TokenMalformedError,
)
from rolegate.core.roles import ROLE_VALUES, Role
from rolegate.schemas.auth import TokenClaims

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

# Modular-crypt bcrypt hash: $2a$/$2b$/$2y$, two-digit cost, 53 chars of salt+digest.
_BCRYPT_HASH_RE = re.compile(r"^\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}$")

REQUIRED_CLAIMS = ["sub", "role", "iat", "exp"]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (constant-time compare)."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def is_password_hash(value: str) -> bool:
    """True if value is shaped like a bcrypt hash."""
    return bool(_BCRYPT_HASH_RE.match(value or ""))


def _is_timestamp(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class TokenIssuer:
    """
    Signs and verifies access tokens with a server-held HMAC secret.

    Tokens carry sub, role, iat and exp. Verification is pure computation:
    PyJWT checks the signature before any claim is read; expiry is then
    checked against the injected clock.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(minutes=expire_minutes)
        self._clock = clock or (lambda: datetime.now(UTC))

    def issue(self, subject_id: str | int, role: Role | str) -> str:
        """Create a signed token for subject_id with role, expiring after the configured lifetime."""
        now = self._clock()
        payload: dict[str, Any] = {
            "sub": str(subject_id),
            "role": Role(role).value,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.

        PyJWT checks the signature and claim presence; exp and iat are then
        compared against this issuer's clock so issue and verify share one notion of now.
        Raises TokenExpiredError, TokenInvalidError or TokenMalformedError.
        """
        if not token or not isinstance(token, str):
            raise TokenMalformedError("Token is empty")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidSignatureError as e:
            raise TokenInvalidError("Token signature is invalid") from e
        except jwt.MissingRequiredClaimError as e:
            raise TokenMalformedError(f"Token is missing claim: {e.claim}") from e
        except jwt.DecodeError as e:
            raise TokenMalformedError("Token could not be decoded") from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Token rejected: {e}") from e

        sub = payload.get("sub")
        role = payload.get("role")
        iat = payload.get("iat")
        exp = payload.get("exp")
        if not isinstance(sub, str) or not sub:
            raise TokenMalformedError("Token subject is invalid")
        if role not in ROLE_VALUES:
            raise TokenMalformedError("Token role is invalid")
        if not _is_timestamp(iat) or not _is_timestamp(exp):
            raise TokenMalformedError("Token iat/exp must be numeric timestamps")

        now = self._clock().timestamp()
        if exp <= now:
            raise TokenExpiredError("Token has expired")
        if iat > now:
            raise TokenInvalidError("Token issued in the future")
        return TokenClaims(
            subject_id=sub,
            role=Role(role),
            issued_at=datetime.fromtimestamp(iat, UTC),
            expires_at=datetime.fromtimestamp(exp, UTC),
        )


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Process-wide issuer built from settings (secret is held for the process lifetime)."""
    return TokenIssuer(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
    )
