"""
Build an auth transport from configured credentials.
"""
import logging
from typing import Optional

import httpx

from ..config import BasicCredentials, Credentials, SessionCredentials, SignedTokenCredentials
from .base import LOG_PREFIX, AuthTransport, mask_value
from .basic import BasicAuthTransport
from .cookie import CookieAuthTransport
from .jwt_auth import JWTAuthTransport

logger = logging.getLogger(__name__)


def create_auth_transport(
    credentials: Credentials,
    transport: Optional[httpx.BaseTransport] = None,
    async_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AuthTransport:
    """Create the auth transport matching ``credentials``."""
    logger.debug(f"{LOG_PREFIX} create_auth_transport: type={credentials.type}")

    if isinstance(credentials, BasicCredentials):
        return BasicAuthTransport(
            credentials.username,
            credentials.password.get_secret_value(),
            transport,
            async_transport,
        )

    if isinstance(credentials, SessionCredentials):
        logger.debug(
            f"{LOG_PREFIX} create_auth_transport: session login at {credentials.auth_url} "
            f"username={mask_value(credentials.username)}"
        )
        return CookieAuthTransport(
            credentials.username,
            credentials.password.get_secret_value(),
            credentials.auth_url,
            transport,
            async_transport,
        )

    if isinstance(credentials, SignedTokenCredentials):
        return JWTAuthTransport(
            credentials.secret.get_secret_value(),
            credentials.issuer,
            transport,
            async_transport,
        )

    raise TypeError(f"Unsupported credentials type: {type(credentials).__name__}")
