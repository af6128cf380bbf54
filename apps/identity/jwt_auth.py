"""
JWT utilities for the task service.

Tokens are HS256-signed claim sets. The secret is always passed in by the
caller; nothing here reads settings.
"""
import jwt
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional


JWT_ALGORITHM = 'HS256'


def create_access_token(
    claims: Dict[str, Any],
    secret: str,
    expires_minutes: Optional[int] = None,
) -> str:
    """
    Sign a token carrying the given claims.

    Adds `iat`, and `exp` when expires_minutes is given. Tokens without
    an expiry stay valid until the secret changes.
    """
    now = datetime.now(timezone.utc)
    payload = dict(claims)
    payload['iat'] = now
    if expires_minutes is not None:
        payload['exp'] = now + timedelta(minutes=expires_minutes)
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, secret: str) -> Dict[str, Any]:
    """
    Verify and decode a token.

    Raises:
        jwt.ExpiredSignatureError: token carried an `exp` in the past.
        jwt.InvalidTokenError: bad signature or malformed token.
    """
    return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
