"""
Cookie (session) authentication transport.

Mimics Jira's log-in page: credentials are exchanged once at ``auth_url`` for
session cookies, which are then attached to every request. Basic or JWT auth
is generally preferable for the REST API.
"""
import asyncio
import json
import logging
import threading
import weakref
from http.cookiejar import Cookie
from typing import List, NoReturn, Optional

import httpx

from ..core.clone import clone_request
from ..core.cookies import add_cookies, extract_cookies, has_usable_cookie
from ..errors import AuthenticationError
from .base import LOG_PREFIX, AuthTransport, mask_value

logger = logging.getLogger(__name__)

LOGIN_TIMEOUT_SECONDS = 60.0
LOCK_POLL_SECONDS = 0.01


class CookieAuthTransport(AuthTransport):
    """
    Authenticates all requests with session cookies.

    The login exchange runs at most once per cached session, even under
    concurrent first use from threads and from coroutines on several event
    loops. A failed login is not retried until ``reset()``.
    Expired sessions are not refreshed automatically; callers reset and retry.
    """

    def __init__(
        self,
        username: str,
        password: str,
        auth_url: str,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
        session_cookies: Optional[List[Cookie]] = None,
    ):
        super().__init__(transport, async_transport)
        self.username = username
        self.password = password
        self.auth_url = auth_url
        self._session_cookies = session_cookies
        self._login_error: Optional[AuthenticationError] = None
        self._lock = threading.Lock()
        self._loop_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock]" = (
            weakref.WeakKeyDictionary()
        )

    @property
    def session_cookies(self) -> Optional[List[Cookie]]:
        """The cached cookie set, or None before a successful login."""
        return self._session_cookies

    def reset(self) -> None:
        """Drop the cached session (or failed login) so the next request logs in."""
        with self._lock:
            self._session_cookies = None
            self._login_error = None

    def build_login_request(self) -> httpx.Request:
        body = json.dumps({"username": self.username, "password": self.password})
        return httpx.Request(
            "POST",
            self.auth_url,
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/json"},
            extensions={"timeout": httpx.Timeout(LOGIN_TIMEOUT_SECONDS).as_dict()},
        )

    def authenticate(self, request: httpx.Request) -> httpx.Request:
        if self._session_cookies is None:
            raise AuthenticationError("cookieauth: no session object has been set")
        clone = clone_request(request)
        add_cookies(clone, self._session_cookies)
        return clone

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        if self._session_cookies is None:
            self._ensure_session()
        return super().handle_request(request)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if self._session_cookies is None:
            await self._ensure_session_async()
        return await super().handle_async_request(request)

    def _ensure_session(self) -> None:
        with self._lock:
            if self._session_cookies is not None:
                return
            self._raise_previous_failure()
            login_request = self.build_login_request()
            try:
                response = self._transport.handle_request(login_request)
                try:
                    response.read()
                finally:
                    response.close()
            except httpx.HTTPError as e:
                self._fail(f"failed to authenticate: {e}", e)
            self._store_session(login_request, response)

    async def _ensure_session_async(self) -> None:
        async with self._loop_lock():
            if self._session_cookies is not None:
                return
            # the thread lock also guards the sync path and reset()
            await self._acquire_thread_lock()
            try:
                if self._session_cookies is not None:
                    return
                self._raise_previous_failure()
                login_request = self.build_login_request()
                try:
                    response = await self._async_transport.handle_async_request(login_request)
                    try:
                        await response.aread()
                    finally:
                        await response.aclose()
                except httpx.HTTPError as e:
                    self._fail(f"failed to authenticate: {e}", e)
                self._store_session(login_request, response)
            finally:
                self._lock.release()

    def _loop_lock(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        lock = self._loop_locks.get(loop)
        if lock is None:
            lock = self._loop_locks[loop] = asyncio.Lock()
        return lock

    async def _acquire_thread_lock(self) -> None:
        # polled so the event loop keeps running while a sync login holds it
        while not self._lock.acquire(blocking=False):
            await asyncio.sleep(LOCK_POLL_SECONDS)

    def _store_session(self, login_request: httpx.Request, response: httpx.Response) -> None:
        if not response.is_success:
            self._fail(f"login returned status {response.status_code}")
        cookies = extract_cookies(login_request, response)
        if not has_usable_cookie(cookies):
            self._fail("login response set no session cookies")
        logger.debug(
            f"{LOG_PREFIX} CookieAuthTransport: session established for "
            f"username={mask_value(self.username)} ({len(cookies)} cookies)"
        )
        self._session_cookies = cookies

    def _fail(self, reason: str, cause: Optional[BaseException] = None) -> NoReturn:
        logger.error(f"{LOG_PREFIX} CookieAuthTransport: {reason}")
        error = AuthenticationError(f"cookieauth: no session object has been set: {reason}", cause)
        self._login_error = error
        if cause is not None:
            raise error from cause
        raise error

    def _raise_previous_failure(self) -> None:
        if self._login_error is not None:
            raise AuthenticationError(
                "cookieauth: previous login failed; call reset() to retry",
                self._login_error,
            ) from self._login_error
