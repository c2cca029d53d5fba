"""
Exception hierarchy for jira-client.

Every error raised by the client derives from ``JiraClientError`` and keeps the
underlying exception in ``cause`` (and ``__cause__`` when raised ``from`` it).
"""
from typing import Any, List, Optional

import httpx


class JiraClientError(Exception):
    """Base exception for jira-client errors."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class URLParseError(JiraClientError):
    def __init__(self, url: Any, cause: Optional[BaseException] = None):
        super().__init__(f"failed to parse URL '{url}': {cause}", cause)
        self.url = url


class EncodingError(JiraClientError):
    def __init__(self, cause: BaseException):
        super().__init__(f"failed to encode json body: {cause}", cause)


class NetworkError(JiraClientError):
    def __init__(self, request: httpx.Request, cause: BaseException):
        super().__init__(f"error making http request: {cause}", cause)
        self.request = request


class BodyReadError(JiraClientError):
    def __init__(self, response: httpx.Response, cause: BaseException):
        super().__init__(f"failed to read body: {cause}", cause)
        self.response = response


class ParseError(JiraClientError):
    def __init__(self, response: httpx.Response, cause: BaseException):
        super().__init__(f"failed to parse body: {cause}", cause)
        self.response = response


class AuthenticationError(JiraClientError):
    pass


class SigningError(JiraClientError):
    pass


class RequestOptionError(JiraClientError):
    """A request option failed; ``request`` holds the partially-built request."""

    def __init__(self, request: httpx.Request, cause: BaseException):
        super().__init__(f"request option failed: {cause}", cause)
        self.request = request


class JiraRequestError(JiraClientError):
    """The API answered with a status outside [200, 299]."""

    def __init__(
        self,
        response: httpx.Response,
        data: Any = None,
        parse_error: Optional[BaseException] = None,
    ):
        self.response = response
        self.status_code = response.status_code
        self.body: bytes = response.content
        self.data = data
        self.parse_error = parse_error
        super().__init__(self._build_message(), parse_error)

    def _build_message(self) -> str:
        msg = (
            "request failed. Please analyze the request body for more details. "
            f"Status code: {self.status_code}"
        )
        details = _error_details(self.data)
        if details:
            msg += ": " + "; ".join(details)
        return msg


def _error_details(data: Any) -> List[str]:
    """Collect Jira's errorMessages / errors entries from an error body."""
    if not isinstance(data, dict):
        return []
    details = [str(m) for m in data.get("errorMessages") or []]
    errors = data.get("errors")
    if isinstance(errors, dict):
        details.extend(f"{k}: {v}" for k, v in errors.items())
    return details
