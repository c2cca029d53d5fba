"""
Tests for canonical request signing.
"""
import hashlib

import httpx
import pytest
from jira_client.auth.signer import canonicalize_request, create_query_string_hash


def test_no_query_params_keeps_trailing_separator():
    assert canonicalize_request("GET", "https://jira.example.com/rest/api/2/issue/10000") == \
        "GET&/rest/api/2/issue/10000&"

def test_query_params_sorted_and_trailing_slash_trimmed():
    assert canonicalize_request("GET", "https://jira.example.com/a/b/?z=1&a=2") == "GET&/a/b&a=2&z=1"

def test_param_order_does_not_matter():
    first = canonicalize_request("GET", "https://jira.example.com/search?jql=project%3DABC&maxResults=5&startAt=0")
    second = canonicalize_request("GET", "https://jira.example.com/search?startAt=0&maxResults=5&jql=project%3DABC")
    assert first == second

def test_deterministic():
    url = "https://jira.example.com/rest/api/2/search?fields=summary&expand=names"
    assert canonicalize_request("GET", url) == canonicalize_request("GET", url)
    assert create_query_string_hash("GET", url) == create_query_string_hash("GET", url)

def test_jwt_param_excluded():
    url = "https://jira.example.com/rest/api/2/issue?jwt=abc.def.ghi&b=1"
    assert canonicalize_request("GET", url) == "GET&/rest/api/2/issue&b=1"

def test_method_uppercased():
    assert canonicalize_request("post", "https://jira.example.com/x").startswith("POST&")

def test_root_path():
    assert canonicalize_request("GET", "https://jira.example.com") == "GET&/&"
    assert canonicalize_request("GET", "https://jira.example.com/") == "GET&/&"

def test_ampersand_in_path_encoded():
    assert canonicalize_request("GET", "https://jira.example.com/a&b/c") == "GET&/a%26b/c&"

def test_spaces_encoded_as_percent_20():
    url = "https://jira.example.com/search?jql=project = ABC"
    assert canonicalize_request("GET", url) == "GET&/search&jql=project%20%3D%20ABC"

def test_reserved_characters_encoded():
    url = httpx.URL("https://jira.example.com/x", params={"a,b": "x*y+z"})
    assert canonicalize_request("GET", url) == "GET&/x&a%2Cb=x%2Ay%2Bz"

def test_repeated_params_joined_without_separator():
    url = "https://jira.example.com/x?fields=a&fields=b&fields=c"
    assert canonicalize_request("GET", url) == "GET&/x&fields=abc"

def test_empty_param_value():
    assert canonicalize_request("GET", "https://jira.example.com/x?flag=") == "GET&/x&flag="

@pytest.mark.parametrize("url", [
    "https://jira.example.com/rest/api/2/issue/10000",
    "https://jira.example.com/a/b/?z=1&a=2",
])
def test_hash_is_sha256_of_canonical_string(url):
    expected = hashlib.sha256(canonicalize_request("GET", url).encode()).hexdigest()
    assert create_query_string_hash("GET", url) == expected
    assert len(expected) == 64
