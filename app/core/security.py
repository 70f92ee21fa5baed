"""
Security utilities: password hashing and session tokens.

Tokens are HS256 JWTs carrying the user id in ``sub`` and the expiry in
``exp``. Nothing is stored server-side.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError


class TokenError(Exception):
    """Base class for token verification failures."""


class MalformedTokenError(TokenError):
    """The token cannot be decoded or carries unusable claims."""


class InvalidSignatureError(TokenError):
    """The token signature does not match the signing key."""


class ExpiredTokenError(TokenError):
    """The token signature is valid but its expiry has passed."""


def get_password_hash(password: str, rounds: int = 12) -> str:
    """Hash a plaintext password with a fresh salt."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against its hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Over-long passwords or a corrupt hash never match
        return False


class TokenService:
    """Issues and verifies signed session claims."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24 * 7):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user_id: int, expires_at: Optional[datetime] = None) -> str:
        """
        Create a signed token for a user.

        Args:
            user_id: Identity to bind into the claim
            expires_at: Timezone-aware expiry; defaults to now plus the configured lifetime

        Returns:
            Encoded JWT
        """
        if expires_at is None:
            expires_at = datetime.now(timezone.utc) + timedelta(minutes=self.expire_minutes)
        claims = {"sub": str(user_id), "exp": int(expires_at.timestamp())}
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """
        Verify a token and return the user id it carries.

        Raises:
            MalformedTokenError: token is not a decodable JWT or its claims are unusable
            InvalidSignatureError: signature (or algorithm) does not match
            ExpiredTokenError: token expired
        """
        # Structural check only, the claims are not read here
        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise MalformedTokenError(str(e)) from e

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise ExpiredTokenError(str(e)) from e
        except JWTClaimsError as e:
            raise MalformedTokenError(str(e)) from e
        except JWTError as e:
            raise InvalidSignatureError(str(e)) from e

        if "exp" not in payload or "sub" not in payload:
            raise MalformedTokenError("Token is missing required claims")
        try:
            return int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise MalformedTokenError("Token subject is not a user id") from e
