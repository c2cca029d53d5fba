"""
Client-native authentication.

Independent of the auth transports: the client itself attaches HTTP Basic
credentials or the session cookies obtained from Jira's session resource
while building each request.

Jira API docs: https://docs.atlassian.com/jira/REST/latest/#auth/1/session
"""
import logging
from http.cookiejar import Cookie
from typing import TYPE_CHECKING, Any, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from ..core.cookies import add_cookies, extract_cookies
from ..errors import AuthenticationError, JiraClientError
from ..types import AuthType
from .base import LOG_PREFIX, mask_value
from .basic import basic_auth_header

if TYPE_CHECKING:
    from ..core.base_client import AsyncBaseClient, BaseClient

logger = logging.getLogger(__name__)

SESSION_RESOURCE = "rest/auth/1/session"


class SessionInfo(BaseModel):
    name: str
    value: str


class LoginInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    failed_login_count: Optional[int] = Field(default=None, alias="failedLoginCount")
    login_count: Optional[int] = Field(default=None, alias="loginCount")
    last_failed_login_time: Optional[str] = Field(default=None, alias="lastFailedLoginTime")
    previous_login_time: Optional[str] = Field(default=None, alias="previousLoginTime")


class Session(BaseModel):
    """Session returned by the session resource, plus the cookies it set."""
    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    session: Optional[SessionInfo] = None
    login_info: Optional[LoginInfo] = Field(default=None, alias="loginInfo")
    cookies: List[Cookie] = Field(default_factory=list)


class _AuthenticationState:
    def __init__(self) -> None:
        self.auth_type: Optional[AuthType] = None
        self.username: Optional[str] = None
        self.password: Optional[str] = None
        self.session: Optional[Session] = None

    def set_basic_auth(self, username: str, password: str) -> None:
        """Attach HTTP Basic credentials to every request the client builds."""
        self.username = username
        self.password = password
        self.auth_type = "basic"

    def authenticated(self) -> bool:
        if self.auth_type == "session":
            return self.session is not None
        if self.auth_type == "basic":
            return bool(self.username)
        return False

    def apply(self, request: httpx.Request) -> None:
        """Attach the active client-native credentials to ``request``."""
        if self.auth_type == "session":
            if self.session is not None:
                add_cookies(request, self.session.cookies)
        elif self.auth_type == "basic":
            if self.username:
                request.headers["Authorization"] = basic_auth_header(self.username, self.password or "")

    def _store_session(self, data: Any, response: httpx.Response) -> Session:
        session = Session.model_validate(data or {})
        session.cookies = extract_cookies(response.request, response)
        self.session = session
        self.auth_type = "session"
        return session

    def _clear_session(self) -> None:
        self.session = None
        self.auth_type = None

    def _require_session(self) -> None:
        if self.auth_type != "session" or self.session is None:
            raise AuthenticationError("no user is authenticated yet")


class AuthenticationService(_AuthenticationState):
    """Client-native auth for ``BaseClient``."""

    def __init__(self, client: "BaseClient"):
        super().__init__()
        self._client = client

    def acquire_session_cookie(self, username: str, password: str) -> Session:
        """
        Log in at the session resource and authenticate later requests with
        the returned cookies.
        """
        body = {"username": username, "password": password}
        logger.debug(f"{LOG_PREFIX} acquire_session_cookie: username={mask_value(username)}")
        try:
            result = self._client.request("POST", SESSION_RESOURCE, body)
        except JiraClientError as e:
            logger.error(f"{LOG_PREFIX} acquire_session_cookie failed: {e}")
            raise AuthenticationError(f"auth at Jira instance failed (HTTP(S) request): {e}", e) from e
        return self._store_session(result.data, result.response)

    def logout(self) -> None:
        """Delete the current session."""
        self._require_session()
        try:
            self._client.request("DELETE", SESSION_RESOURCE)
        except JiraClientError as e:
            raise AuthenticationError(f"error sending the logout request: {e}", e) from e
        self._clear_session()

    def get_current_user(self) -> Any:
        """Details of the user owning the current session."""
        self._require_session()
        try:
            return self._client.request("GET", SESSION_RESOURCE).data
        except JiraClientError as e:
            raise AuthenticationError(f"could not find current user info: {e}", e) from e


class AsyncAuthenticationService(_AuthenticationState):
    """Client-native auth for ``AsyncBaseClient``."""

    def __init__(self, client: "AsyncBaseClient"):
        super().__init__()
        self._client = client

    async def acquire_session_cookie(self, username: str, password: str) -> Session:
        body = {"username": username, "password": password}
        logger.debug(f"{LOG_PREFIX} acquire_session_cookie: username={mask_value(username)}")
        try:
            result = await self._client.request("POST", SESSION_RESOURCE, body)
        except JiraClientError as e:
            logger.error(f"{LOG_PREFIX} acquire_session_cookie failed: {e}")
            raise AuthenticationError(f"auth at Jira instance failed (HTTP(S) request): {e}", e) from e
        return self._store_session(result.data, result.response)

    async def logout(self) -> None:
        self._require_session()
        try:
            await self._client.request("DELETE", SESSION_RESOURCE)
        except JiraClientError as e:
            raise AuthenticationError(f"error sending the logout request: {e}", e) from e
        self._clear_session()

    async def get_current_user(self) -> Any:
        self._require_session()
        try:
            return (await self._client.request("GET", SESSION_RESOURCE)).data
        except JiraClientError as e:
            raise AuthenticationError(f"could not find current user info: {e}", e) from e
