"""
High-level Jira client implementation.
"""
from typing import Any, Dict, List, Optional, Union

from .config import ClientConfig
from .core.base_client import AsyncBaseClient, BaseClient
from .core.request import with_headers, with_query_params
from .types import JiraResponse, RequestOption


def _options(
    params: Optional[Dict[str, Any]],
    headers: Optional[Dict[str, str]],
) -> List[RequestOption]:
    options: List[RequestOption] = []
    if params:
        options.append(with_query_params(params))
    if headers:
        options.append(with_headers(headers))
    return options


class JiraClient(BaseClient):
    """
    Jira REST client with convenience methods.
    """

    @classmethod
    def create(cls, config: Union[ClientConfig, str]) -> "JiraClient":
        """Factory method to create a client."""
        return cls(config)

    def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> JiraResponse:
        """Execute GET request."""
        return self.request("GET", url, None, *_options(params, headers))

    def post(
        self,
        url: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> JiraResponse:
        """Execute POST request."""
        return self.request("POST", url, body, *_options(params, headers))

    def put(
        self,
        url: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> JiraResponse:
        """Execute PUT request."""
        return self.request("PUT", url, body, *_options(params, headers))

    def delete(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> JiraResponse:
        """Execute DELETE request."""
        return self.request("DELETE", url, None, *_options(params, headers))


class AsyncJiraClient(AsyncBaseClient):
    """
    Async Jira REST client with convenience methods.
    """

    @classmethod
    def create(cls, config: Union[ClientConfig, str]) -> "AsyncJiraClient":
        """Factory method to create a client."""
        return cls(config)

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> JiraResponse:
        """Execute GET request."""
        return await self.request("GET", url, None, *_options(params, headers))

    async def post(
        self,
        url: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> JiraResponse:
        """Execute POST request."""
        return await self.request("POST", url, body, *_options(params, headers))

    async def put(
        self,
        url: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> JiraResponse:
        """Execute PUT request."""
        return await self.request("PUT", url, body, *_options(params, headers))

    async def delete(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> JiraResponse:
        """Execute DELETE request."""
        return await self.request("DELETE", url, None, *_options(params, headers))
