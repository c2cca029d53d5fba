"""
Jira Client - typed Jira REST client core
"""

__version__ = "0.1.0"

from .config import (
    BasicCredentials,
    ClientConfig,
    SessionCredentials,
    SignedTokenCredentials,
    TimeoutConfig,
)
from .types import AuthType, JiraResponse, RequestOption
from .client import AsyncJiraClient, JiraClient
from .core.base_client import AsyncBaseClient, BaseClient
from .core.clone import clone_request
from .core.request import add_options, with_header, with_headers, with_query_params
from .auth import (
    AuthTransport,
    BasicAuthTransport,
    CookieAuthTransport,
    JWTAuthTransport,
    canonicalize_request,
    create_auth_transport,
    create_query_string_hash,
)
from .auth.service import AsyncAuthenticationService, AuthenticationService, Session
from .errors import (
    AuthenticationError,
    BodyReadError,
    EncodingError,
    JiraClientError,
    JiraRequestError,
    NetworkError,
    ParseError,
    RequestOptionError,
    SigningError,
    URLParseError,
)

__all__ = [
    "ClientConfig", "TimeoutConfig",
    "BasicCredentials", "SessionCredentials", "SignedTokenCredentials",
    "AuthType", "JiraResponse", "RequestOption",
    "JiraClient", "AsyncJiraClient", "BaseClient", "AsyncBaseClient",
    "clone_request",
    "add_options", "with_header", "with_headers", "with_query_params",
    "AuthTransport", "BasicAuthTransport", "CookieAuthTransport", "JWTAuthTransport",
    "create_auth_transport", "canonicalize_request", "create_query_string_hash",
    "AuthenticationService", "AsyncAuthenticationService", "Session",
    "JiraClientError", "URLParseError", "EncodingError", "NetworkError",
    "BodyReadError", "ParseError", "AuthenticationError", "SigningError",
    "RequestOptionError", "JiraRequestError",
]
