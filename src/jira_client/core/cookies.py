"""
Session cookie helpers.
"""
import email.message
import urllib.request
from http.cookiejar import Cookie, CookieJar, DefaultCookiePolicy
from typing import Iterable, List

import httpx


class _SetCookieResponse:
    """Exposes a response's headers the way ``CookieJar.make_cookies`` reads them."""

    def __init__(self, response: httpx.Response):
        self.response = response

    def info(self) -> email.message.Message:
        info = email.message.Message()
        for key, value in self.response.headers.multi_items():
            info[key] = value
        return info


def extract_cookies(request: httpx.Request, response: httpx.Response) -> List[Cookie]:
    """
    Every cookie set by ``response``, in header order.

    No domain or path policy is applied, so cookies scoped to another host
    (an SSO domain, say) are kept. Cookies the response expires are skipped.
    """
    compat_request = urllib.request.Request(
        str(request.url),
        headers=dict(request.headers),
        method=request.method,
    )
    return CookieJar().make_cookies(_SetCookieResponse(response), compat_request)


def discarding_cookie_jar() -> CookieJar:
    """A jar that refuses every cookie; httpx clients built with it never replay cookies."""
    return CookieJar(DefaultCookiePolicy(allowed_domains=[]))


def has_usable_cookie(cookies: Iterable[Cookie]) -> bool:
    return any(cookie.value for cookie in cookies)


def add_cookies(request: httpx.Request, cookies: Iterable[Cookie]) -> None:
    """Append non-empty cookies to the request's Cookie header."""
    pairs = [f"{cookie.name}={cookie.value}" for cookie in cookies if cookie.value]
    if not pairs:
        return
    existing = request.headers.get("Cookie")
    if existing:
        pairs.insert(0, existing)
    request.headers["Cookie"] = "; ".join(pairs)
