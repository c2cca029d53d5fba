"""
Core HTTP client implementation based on httpx.
"""
import logging
from typing import Any, Optional, Union

import httpx

from ..auth.factory import create_auth_transport
from ..auth.service import AsyncAuthenticationService, AuthenticationService
from ..config import ClientConfig, ResolvedConfig, resolve_config
from .cookies import discarding_cookie_jar
from ..errors import (
    BodyReadError,
    EncodingError,
    JiraRequestError,
    NetworkError,
    ParseError,
    RequestOptionError,
    URLParseError,
)
from ..types import JiraResponse, RequestOption

logger = logging.getLogger(__name__)

# Constants
LOG_PREFIX = "[JiraClient]"


def _parse_base_url(base_url: str) -> httpx.URL:
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise URLParseError(base_url, e) from e
    if not url.is_absolute_url:
        raise URLParseError(base_url, ValueError("base URL must be absolute"))
    return url


def _httpx_timeout(config: ResolvedConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.timeout.connect,
        read=config.timeout.read,
        write=config.timeout.write,
        pool=config.timeout.pool,
    )


class _ClientCore:
    """
    Request assembly and response classification shared by the sync and
    async clients. Holds no per-request state.
    """

    def __init__(self, config: Union[ClientConfig, str]):
        if isinstance(config, str):
            config = ClientConfig(base_url=config)
        self._config_raw = config
        self._config: ResolvedConfig = resolve_config(config)
        self._base_url = _parse_base_url(self._config.base_url)
        # Only closed by us if we created it
        self._own_client = config.httpx_client is None
        if config.httpx_client is not None and config.auth is not None:
            logger.warning(f"{LOG_PREFIX} auth is ignored when a pre-configured httpx_client is given")

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    def get_base_url(self) -> httpx.URL:
        """The normalized base URL (always ends with '/')."""
        return httpx.URL(str(self._base_url))

    def resolve_url(self, url: Union[str, httpx.URL]) -> httpx.URL:
        """
        Resolve ``url`` against the base URL. Relative paths are taken below
        the base path whether or not they start with '/'.
        """
        raw = str(url)
        try:
            parsed = httpx.URL(raw)
            if parsed.is_absolute_url:
                return parsed
            return self._base_url.join(raw.lstrip("/"))
        except httpx.InvalidURL as e:
            raise URLParseError(raw, e) from e

    def new_raw_request(
        self,
        method: str,
        url: Union[str, httpx.URL],
        content: Optional[bytes] = None,
        *options: RequestOption,
    ) -> httpx.Request:
        """
        Build a request for ``url`` with an already-encoded body.

        Options run in order after client-native auth; the first one that
        raises aborts with ``RequestOptionError`` carrying the partial request.
        """
        request = httpx.Request(
            method,
            self.resolve_url(url),
            headers=self._config.headers,
            content=content,
        )
        if "Content-Type" not in request.headers:
            request.headers["Content-Type"] = self._config.content_type

        self.authentication.apply(request)

        for option in options:
            try:
                option(request)
            except Exception as e:
                logger.error(f"{LOG_PREFIX} Request option failed for {method} {url}: {e}")
                raise RequestOptionError(request, e) from e
        return request

    def new_request(
        self,
        method: str,
        url: Union[str, httpx.URL],
        body: Any = None,
        *options: RequestOption,
    ) -> httpx.Request:
        """Build a request; ``body``, when given, is sent JSON-encoded."""
        content = None
        if body is not None:
            try:
                content = self._config.serializer.serialize(body)
            except (TypeError, ValueError) as e:
                logger.error(f"{LOG_PREFIX} Failed to encode body for {method} {url}: {e}")
                raise EncodingError(e) from e
        return self.new_raw_request(method, url, content, *options)

    def _classify(self, response: httpx.Response) -> JiraResponse:
        """Decode the read body and turn non-2xx statuses into errors."""
        data = None
        parse_error: Optional[Exception] = None
        if response.content:
            try:
                data = self._config.serializer.deserialize(response.content)
            except ValueError as e:
                parse_error = e

        if not 200 <= response.status_code <= 299:
            error = JiraRequestError(response, data, parse_error)
            logger.error(f"{LOG_PREFIX} {error}")
            raise error

        if parse_error is not None:
            logger.error(f"{LOG_PREFIX} Failed to parse body: {parse_error}")
            raise ParseError(response, parse_error) from parse_error

        return JiraResponse(data=data, response=response)


class BaseClient(_ClientCore):
    """
    Base HTTP client wrapping httpx.Client.
    """

    def __init__(self, config: Union[ClientConfig, str]):
        super().__init__(config)
        self.authentication = AuthenticationService(self)
        self._client: httpx.Client = (
            self._config_raw.httpx_client
            if self._config_raw.httpx_client is not None
            else self._create_client()
        )

    def _create_client(self) -> httpx.Client:
        transport = self._config_raw.transport
        if self._config.auth is not None:
            transport = create_auth_transport(self._config.auth, transport=transport)
        return httpx.Client(
            timeout=_httpx_timeout(self._config),
            follow_redirects=self._config.follow_redirects,
            cookies=discarding_cookie_jar(),
            transport=transport,
        )

    def close(self) -> None:
        """Close the client if we own it."""
        if self._own_client:
            self._client.close()

    def __enter__(self) -> "BaseClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def do(self, request: httpx.Request) -> JiraResponse:
        """
        Send ``request`` and decode the response.

        The body is read fully and stays available on ``response.content``.
        """
        logger.debug(f"{LOG_PREFIX} Request: {request.method} {request.url}")
        try:
            response = self._client.send(request, stream=True)
        except httpx.TransportError as e:
            logger.error(f"{LOG_PREFIX} Request failed: {e}")
            raise NetworkError(request, e) from e

        try:
            response.read()
        except (httpx.HTTPError, httpx.StreamError) as e:
            logger.error(f"{LOG_PREFIX} Failed to read body: {e}")
            raise BodyReadError(response, e) from e
        finally:
            response.close()

        return self._classify(response)

    def request(
        self,
        method: str,
        url: Union[str, httpx.URL],
        body: Any = None,
        *options: RequestOption,
    ) -> JiraResponse:
        """Build and send a request."""
        return self.do(self.new_request(method, url, body, *options))


class AsyncBaseClient(_ClientCore):
    """
    Base HTTP client wrapping httpx.AsyncClient.
    """

    def __init__(self, config: Union[ClientConfig, str]):
        super().__init__(config)
        self.authentication = AsyncAuthenticationService(self)
        self._client: httpx.AsyncClient = (
            self._config_raw.httpx_client
            if self._config_raw.httpx_client is not None
            else self._create_client()
        )

    def _create_client(self) -> httpx.AsyncClient:
        transport = self._config_raw.transport
        if self._config.auth is not None:
            transport = create_auth_transport(self._config.auth, async_transport=transport)
        return httpx.AsyncClient(
            timeout=_httpx_timeout(self._config),
            follow_redirects=self._config.follow_redirects,
            cookies=discarding_cookie_jar(),
            transport=transport,
        )

    async def close(self) -> None:
        """Close the client if we own it."""
        if self._own_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncBaseClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def do(self, request: httpx.Request) -> JiraResponse:
        """
        Send ``request`` and decode the response.

        The body is read fully and stays available on ``response.content``.
        """
        logger.debug(f"{LOG_PREFIX} Request: {request.method} {request.url}")
        try:
            response = await self._client.send(request, stream=True)
        except httpx.TransportError as e:
            logger.error(f"{LOG_PREFIX} Request failed: {e}")
            raise NetworkError(request, e) from e

        try:
            await response.aread()
        except (httpx.HTTPError, httpx.StreamError) as e:
            logger.error(f"{LOG_PREFIX} Failed to read body: {e}")
            raise BodyReadError(response, e) from e
        finally:
            await response.aclose()

        return self._classify(response)

    async def request(
        self,
        method: str,
        url: Union[str, httpx.URL],
        body: Any = None,
        *options: RequestOption,
    ) -> JiraResponse:
        """Build and send a request."""
        return await self.do(self.new_request(method, url, body, *options))
