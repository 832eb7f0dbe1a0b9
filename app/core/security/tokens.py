"""
Stateless bearer tokens (HS256 JWTs via python-jose).

Each token carries the canonical username in `sub`, an `exp` claim and a
`purpose` claim so a verification link can never be replayed as an access
token. Nothing is stored server-side, so issued tokens cannot be revoked
before they expire.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum as PyEnum

from jose import JWTError, jwt

from app.core.config import settings
from app.exceptions.http import CredentialError


class TokenPurpose(str, PyEnum):
    ACCESS = "access"
    EMAIL_VERIFICATION = "email-verification"


def create_token(username: str, purpose: TokenPurpose, expires_in: timedelta | None = None) -> str:
    """Issues a signed token for `username`; lifetime defaults per purpose."""
    if expires_in is None:
        minutes = (
            settings.ACCESS_TOKEN_EXPIRE_MINUTES
            if purpose is TokenPurpose.ACCESS
            else settings.EMAIL_TOKEN_EXPIRE_MINUTES
        )
        expires_in = timedelta(minutes=minutes)

    claims = {
        "sub": username,
        "purpose": purpose.value,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str, purpose: TokenPurpose) -> str:
    """
    Verifies signature, expiry and purpose of a token and returns its username.

    Raises:
        CredentialError: (403) if the token is invalid, expired or issued for another purpose.
    """
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise CredentialError("Token invalid", status_code=403) from exc

    username = claims.get("sub")
    if not username or claims.get("purpose") != purpose.value:
        raise CredentialError("Token invalid", status_code=403)
    return username
