"""
Password login and bearer-token sessions stored in the key-value backend.
"""

from __future__ import annotations

import hmac
import logging
import secrets
from typing import Optional

from clubsite.errors import AuthError, ValidationError
from clubsite.kv import KeyValueStore

logger = logging.getLogger(__name__)

TOKEN_KEY_PREFIX = "auth_"
TOKEN_MARKER = "valid"
DEFAULT_TOKEN_TTL_SECONDS = 86400


def parse_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer "):].strip()
    return token or None


class TokenService:
    def __init__(
        self,
        kv: KeyValueStore,
        password: Optional[str],
        ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
    ):
        self.kv = kv
        self.password = password
        self.ttl_seconds = ttl_seconds

    def login(self, password: Optional[str]) -> str:
        """Check the shared admin password and issue a new session token."""
        if not password:
            raise ValidationError("Password required")
        if not self.password or not hmac.compare_digest(
            password.encode("utf-8"), self.password.encode("utf-8")
        ):
            logger.warning("Rejected admin login attempt")
            raise AuthError("Invalid password")
        token = secrets.token_hex(32)
        self.kv.put(f"{TOKEN_KEY_PREFIX}{token}", TOKEN_MARKER, self.ttl_seconds)
        logger.info("Issued admin session token (ttl=%ss)", self.ttl_seconds)
        return token

    def is_valid(self, token: Optional[str]) -> bool:
        if not token:
            return False
        return self.kv.get(f"{TOKEN_KEY_PREFIX}{token}") == TOKEN_MARKER

    def require(self, authorization: Optional[str]) -> str:
        """Validate an ``Authorization`` header and return its token."""
        token = parse_bearer_token(authorization)
        if not self.is_valid(token):
            raise AuthError("Unauthorized")
        return token

    def revoke(self, token: str) -> None:
        self.kv.delete(f"{TOKEN_KEY_PREFIX}{token}")
