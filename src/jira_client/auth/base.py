"""
Base class for authenticating transports.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from ..core.cookies import discarding_cookie_jar

logger = logging.getLogger(__name__)
LOG_PREFIX = "[AUTH]"


def mask_value(val: Optional[str]) -> str:
    """Mask sensitive value for logging, showing first 10 chars."""
    if not val:
        return "<empty>"
    if len(val) <= 10:
        return "*" * len(val)
    return val[:10] + "*" * (len(val) - 10)


class AuthTransport(httpx.BaseTransport, httpx.AsyncBaseTransport, ABC):
    """
    Transport that authenticates a clone of each request and hands it to an
    inner transport.

    Works on both the sync and async paths. Missing inner transports default
    to httpx's connection-pooling transports when the instance is built; an
    inner transport that implements both interfaces (another ``AuthTransport``,
    ``httpx.MockTransport``) serves both paths.
    """

    def __init__(
        self,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if async_transport is None and isinstance(transport, httpx.AsyncBaseTransport):
            async_transport = transport
        if transport is None and isinstance(async_transport, httpx.BaseTransport):
            transport = async_transport
        self._transport = transport if transport is not None else httpx.HTTPTransport()
        self._async_transport = (
            async_transport if async_transport is not None else httpx.AsyncHTTPTransport()
        )

    @property
    def transport(self) -> httpx.BaseTransport:
        return self._transport

    @property
    def async_transport(self) -> httpx.AsyncBaseTransport:
        return self._async_transport

    @abstractmethod
    def authenticate(self, request: httpx.Request) -> httpx.Request:
        """Return an authenticated clone of ``request``."""
        ...

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        return self._transport.handle_request(self.authenticate(request))

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self._async_transport.handle_async_request(self.authenticate(request))

    def close(self) -> None:
        self._transport.close()

    async def aclose(self) -> None:
        await self._async_transport.aclose()

    def client(self, **kwargs: Any) -> httpx.Client:
        """An ``httpx.Client`` that sends every request through this transport."""
        kwargs.setdefault("cookies", discarding_cookie_jar())
        return httpx.Client(transport=self, **kwargs)

    def async_client(self, **kwargs: Any) -> httpx.AsyncClient:
        """An ``httpx.AsyncClient`` that sends every request through this transport."""
        kwargs.setdefault("cookies", discarding_cookie_jar())
        return httpx.AsyncClient(transport=self, **kwargs)
