"""
JWT issuance and verification.

Tokens are HS256 (shared secret) and carry the principal directly:
{"username": ..., "isAdmin": ...}. The secret is handed to
TokenAuthenticator when the application is built; nothing here reads
global settings.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Principal(BaseModel):
    """Authenticated identity attached to a single request."""
    username: str
    is_admin: bool = False


class TokenAuthenticator:
    """Issues tokens and turns an Authorization header back into a Principal."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 0):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def create_token(self, username: str, is_admin: bool = False, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a signed token for the given user.

        Args:
            username: Subject of the token
            is_admin: Whether the user holds admin rights
            expires_delta: Optional lifetime; falls back to expire_minutes, and
                no exp claim at all when that is 0

        Returns:
            Encoded JWT token as a string
        """
        to_encode = {"username": username, "isAdmin": is_admin}

        if expires_delta is None and self.expire_minutes:
            expires_delta = timedelta(minutes=self.expire_minutes)
        if expires_delta is not None:
            to_encode["exp"] = datetime.now(timezone.utc) + expires_delta

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> dict:
        """
        Decode and validate a JWT token.

        Raises:
            JWTError: If token is invalid or expired
        """
        return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])

    def authenticate(self, authorization: Optional[str]) -> Optional[Principal]:
        """
        Resolve an Authorization header value to a Principal.

        The "Bearer " prefix is matched case-insensitively and the token is
        whitespace-trimmed. A missing, malformed or unverifiable token is not
        an error here: the request simply stays unauthenticated.
        """
        if not authorization:
            return None

        token = authorization.strip()
        if token[:7].lower() == "bearer ":
            token = token[7:].strip()

        try:
            payload = self.decode_token(token)
        except JWTError as e:
            logger.debug(f"Ignoring unverifiable token: {e}")
            return None

        username = payload.get("username")
        if not isinstance(username, str) or not username:
            return None

        return Principal(username=username, is_admin=payload.get("isAdmin") is True)
