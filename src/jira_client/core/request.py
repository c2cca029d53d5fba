"""
Request options and query string helpers.
"""
from typing import Any, Dict, Mapping, Optional, Union

import httpx
from pydantic import BaseModel

from ..types import RequestOption


def with_header(key: str, value: str) -> RequestOption:
    def option(request: httpx.Request) -> None:
        request.headers[key] = value
    return option


def with_headers(headers: Mapping[str, str]) -> RequestOption:
    def option(request: httpx.Request) -> None:
        request.headers.update(headers)
    return option


def with_query_params(params: Mapping[str, Any]) -> RequestOption:
    """Merge ``params`` into the request URL's query string."""
    def option(request: httpx.Request) -> None:
        request.url = request.url.copy_merge_params(_clean_params(params))
    return option


def add_options(url: str, opts: Optional[Union[BaseModel, Mapping[str, Any]]]) -> str:
    """
    Replace the query string of ``url`` with ``opts``.

    ``opts`` is a mapping or a pydantic model (dumped by alias); ``None``
    values are dropped and list values repeat the key. ``None`` opts returns
    ``url`` unchanged.
    """
    if opts is None:
        return url
    if isinstance(opts, BaseModel):
        params = opts.model_dump(by_alias=True, exclude_none=True)
    else:
        params = _clean_params(opts)
    return str(httpx.URL(url).copy_with(params=params))


def _clean_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _param_value(v) for k, v in params.items() if v is not None}


def _param_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value
