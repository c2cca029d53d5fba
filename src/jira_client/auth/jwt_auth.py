"""
JWT authentication transport for Atlassian Connect apps.

Each request gets a freshly minted HS256 token whose ``qsh`` claim binds it to
the request's method, path and query. Tokens expire after 59 seconds and are
never reused.
"""
import logging
import time
from typing import Optional, Union

import httpx
import jwt

from ..core.clone import clone_request
from ..errors import SigningError
from .base import LOG_PREFIX, AuthTransport, mask_value
from .signer import create_query_string_hash

logger = logging.getLogger(__name__)

TOKEN_TTL_SECONDS = 59
SIGNING_ALGORITHM = "HS256"


class JWTAuthTransport(AuthTransport):
    """Signs every request with a short-lived JWT."""

    def __init__(
        self,
        secret: Union[str, bytes],
        issuer: str,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(transport, async_transport)
        self.secret = secret
        self.issuer = issuer

    def create_token(self, method: str, url: Union[str, httpx.URL]) -> str:
        """Mint a signed token for one request."""
        if not self.secret:
            raise SigningError("jwtAuth: error signing JWT: empty secret")

        now = int(time.time())
        claims = {
            "iss": self.issuer,
            "iat": now,
            "exp": now + TOKEN_TTL_SECONDS,
            "qsh": create_query_string_hash(method, url),
        }
        try:
            return jwt.encode(claims, self.secret, algorithm=SIGNING_ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            logger.error(f"{LOG_PREFIX} JWTAuthTransport: signing failed: {e}")
            raise SigningError(f"jwtAuth: error signing JWT: {e}", e) from e

    def authenticate(self, request: httpx.Request) -> httpx.Request:
        clone = clone_request(request)
        token = self.create_token(request.method, clone.url)
        clone.headers["Authorization"] = f"JWT {token}"
        logger.debug(
            f"{LOG_PREFIX} JWTAuthTransport: {request.method} {request.url} "
            f"iss={self.issuer} token={mask_value(token)}"
        )
        return clone
