"""
Core type definitions for jira-client.
"""
from dataclasses import dataclass
from typing import Any, Callable, Literal, Protocol, runtime_checkable

import httpx

# HTTP Methods
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

# Client-native auth modes
AuthType = Literal["basic", "session"]

# Transport-level auth strategies
TransportAuthType = Literal["basic", "session", "jwt"]

# Mutates a freshly built request; raising aborts the build.
RequestOption = Callable[[httpx.Request], None]


@dataclass
class JiraResponse:
    """Decoded API response."""
    data: Any
    response: httpx.Response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def is_success(self) -> bool:
        """Check if status code is 2xx."""
        return 200 <= self.response.status_code <= 299


@runtime_checkable
class Serializer(Protocol):
    """Protocol for serialization."""
    def serialize(self, data: Any) -> bytes: ...
    def deserialize(self, data: bytes) -> Any: ...

