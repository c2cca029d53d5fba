"""
HTTP Basic authentication transport.
"""
import base64
import logging
from typing import Optional

import httpx

from ..core.clone import clone_request
from .base import LOG_PREFIX, AuthTransport, mask_value

logger = logging.getLogger(__name__)


def basic_auth_header(username: str, password: str) -> str:
    credentials = f"{username}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(credentials).decode("ascii")


class BasicAuthTransport(AuthTransport):
    """Authenticates all requests with HTTP Basic credentials."""

    def __init__(
        self,
        username: str,
        password: str,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(transport, async_transport)
        self.username = username
        self.password = password

    def authenticate(self, request: httpx.Request) -> httpx.Request:
        clone = clone_request(request)
        clone.headers["Authorization"] = basic_auth_header(self.username, self.password)
        logger.debug(
            f"{LOG_PREFIX} BasicAuthTransport: {request.method} {request.url} "
            f"username={mask_value(self.username)}"
        )
        return clone
