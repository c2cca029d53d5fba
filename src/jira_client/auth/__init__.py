"""Authenticating transports and request signing."""

from .base import AuthTransport
from .basic import BasicAuthTransport
from .cookie import CookieAuthTransport
from .factory import create_auth_transport
from .jwt_auth import JWTAuthTransport
from .signer import QSH_EXCLUDED_PARAM, canonicalize_request, create_query_string_hash

__all__ = [
    "AuthTransport",
    "BasicAuthTransport",
    "CookieAuthTransport",
    "JWTAuthTransport",
    "create_auth_transport",
    "canonicalize_request",
    "create_query_string_hash",
    "QSH_EXCLUDED_PARAM",
]
