"""
Tests for request cloning and cookie helpers.
"""
import httpx
from jira_client.core.clone import clone_request
from jira_client.core.cookies import add_cookies, discarding_cookie_jar, extract_cookies


def _request() -> httpx.Request:
    return httpx.Request(
        "POST",
        "https://jira.example.com/rest/api/2/issue",
        headers={"X-Trace": "1"},
        content=b'{"a": 1}',
        extensions={"timeout": {"connect": 1.0, "read": 2.0, "write": 3.0, "pool": 4.0}},
    )

def test_clone_headers_independent_of_original():
    original = _request()
    clone = clone_request(original)

    clone.headers["Authorization"] = "Basic abc"
    clone.headers["X-Trace"] = "2"
    assert "Authorization" not in original.headers
    assert original.headers["X-Trace"] == "1"

    original.headers["X-Other"] = "yes"
    assert "X-Other" not in clone.headers

def test_clone_keeps_other_fields():
    original = _request()
    clone = clone_request(original)

    assert clone is not original
    assert clone.method == original.method
    assert clone.url == original.url
    assert clone.stream is original.stream
    assert clone.content == b'{"a": 1}'
    # timeout/deadline travels unchanged
    assert clone.extensions is original.extensions

def test_add_cookies_skips_empty_values():
    response = httpx.Response(
        200,
        headers=[
            ("Set-Cookie", "JSESSIONID=abc123; Path=/"),
            ("Set-Cookie", "atlassian.xsrf.token=; Path=/"),
        ],
    )
    login = httpx.Request("POST", "https://jira.example.com/rest/auth/1/session")
    cookies = extract_cookies(login, response)

    request = httpx.Request("GET", "https://jira.example.com/rest/api/2/myself")
    add_cookies(request, cookies)
    assert request.headers["Cookie"] == "JSESSIONID=abc123"

def test_add_cookies_appends_to_existing_header():
    response = httpx.Response(200, headers=[("Set-Cookie", "JSESSIONID=abc123; Path=/")])
    login = httpx.Request("POST", "https://jira.example.com/rest/auth/1/session")
    cookies = extract_cookies(login, response)

    request = httpx.Request("GET", "https://jira.example.com/x", headers={"Cookie": "a=b"})
    add_cookies(request, cookies)
    assert request.headers["Cookie"] == "a=b; JSESSIONID=abc123"

def test_extract_cookies_ignores_domain_scope_and_keeps_order():
    response = httpx.Response(
        200,
        headers=[
            ("Set-Cookie", "seraph.rememberme=r1; Domain=other.example.org; Path=/"),
            ("Set-Cookie", "JSESSIONID=abc; Domain=other.example.org; Path=/"),
            ("Set-Cookie", "atlassian.xsrf.token=x; Path=/jira"),
        ],
    )
    login = httpx.Request("POST", "https://sso.example.com/rest/auth/1/session")
    cookies = extract_cookies(login, response)

    assert [(c.name, c.value) for c in cookies] == [
        ("seraph.rememberme", "r1"),
        ("JSESSIONID", "abc"),
        ("atlassian.xsrf.token", "x"),
    ]

def test_discarding_cookie_jar_stores_nothing():
    response = httpx.Response(200, headers=[("Set-Cookie", "JSESSIONID=abc123; Path=/")])
    response.request = httpx.Request("GET", "https://jira.example.com/x")
    cookies = httpx.Cookies(discarding_cookie_jar())
    cookies.extract_cookies(response)
    assert len(cookies.jar) == 0
