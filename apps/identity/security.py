import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import jwt
from django.http import HttpRequest
from ninja.security import APIKeyHeader

from apps.core.errors import AuthMissing, AuthInvalid
from .jwt_auth import decode_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Claims of a verified token, attached to the request as `request.auth`."""
    claims: Dict[str, Any] = field(default_factory=dict)

    @property
    def subject(self) -> Optional[str]:
        return self.claims.get('sub') or self.claims.get('email')


class TokenHeaderAuth(APIKeyHeader):
    """
    Verifies the raw signed token carried in the Authorization header.

    The header value is the token itself; no "Bearer" scheme is accepted
    or stripped, so existing clients keep working unchanged.

    Usage:
        auth = TokenHeaderAuth(secret=settings.JWT_SECRET)

        @router.post("/create", auth=auth)
        def create(request): ...
    """
    param_name = 'Authorization'

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("TokenHeaderAuth requires a non-empty secret")
        self.secret = secret
        super().__init__()

    def authenticate(self, request: HttpRequest, key: Optional[str]) -> Identity:
        if not key:
            raise AuthMissing()

        try:
            claims = decode_token(key, self.secret)
        except jwt.ExpiredSignatureError:
            logger.warning(f"Rejected expired token on {request.method} {request.path}")
            raise AuthInvalid()
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected token on {request.method} {request.path}: {e}")
            raise AuthInvalid()

        return Identity(claims=claims)
