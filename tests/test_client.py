"""
Tests for JiraClient and AsyncJiraClient.
"""
import json

import jwt
import pytest
import respx
from jira_client.client import AsyncJiraClient, JiraClient
from jira_client.config import ClientConfig, SessionCredentials, SignedTokenCredentials
from jira_client.errors import JiraRequestError

BASE = "https://jira.example.com"


def test_jira_client_factory():
    client = JiraClient.create(ClientConfig(base_url=BASE))
    assert isinstance(client, JiraClient)
    assert str(client.base_url) == "https://jira.example.com/"

def test_jira_client_get_with_params():
    with respx.mock(base_url=BASE) as mock:
        route = mock.get("/rest/api/2/search").respond(200, json={"total": 0, "issues": []})

        with JiraClient(BASE) as client:
            res = client.get("/rest/api/2/search", params={"jql": "project = ABC", "maxResults": 5})

        assert res.data == {"total": 0, "issues": []}
        request = route.calls.last.request
        assert request.url.params["jql"] == "project = ABC"
        assert request.url.params["maxResults"] == "5"

def test_jira_client_post_and_put():
    with respx.mock(base_url=BASE) as mock:
        created = mock.post("/rest/api/2/issue").respond(201, json={"key": "ABC-1"})
        updated = mock.put("/rest/api/2/issue/ABC-1").respond(204)

        with JiraClient(BASE) as client:
            res = client.post("rest/api/2/issue", {"fields": {"summary": "Bug"}})
            assert res.data == {"key": "ABC-1"}
            assert client.put("rest/api/2/issue/ABC-1", {"fields": {"summary": "Fix"}}).data is None

        assert json.loads(created.calls.last.request.content) == {"fields": {"summary": "Bug"}}
        assert json.loads(updated.calls.last.request.content) == {"fields": {"summary": "Fix"}}

def test_jira_client_delete_with_headers():
    with respx.mock(base_url=BASE) as mock:
        route = mock.delete("/rest/api/2/issue/ABC-1").respond(204)

        with JiraClient(BASE) as client:
            client.delete("rest/api/2/issue/ABC-1", headers={"X-Atlassian-Token": "no-check"})

        assert route.calls.last.request.headers["X-Atlassian-Token"] == "no-check"

def test_jira_client_jwt_auth_from_config():
    config = ClientConfig(
        base_url=BASE,
        auth=SignedTokenCredentials(secret="shared-secret", issuer="my-addon"),
    )
    with respx.mock(base_url=BASE) as mock:
        route = mock.get("/rest/api/2/myself").respond(200, json={})

        with JiraClient(config) as client:
            client.get("rest/api/2/myself")

        header = route.calls.last.request.headers["Authorization"]
        assert header.startswith("JWT ")
        claims = jwt.decode(header[4:], "shared-secret", algorithms=["HS256"])
        assert claims["iss"] == "my-addon"

@pytest.mark.asyncio
async def test_async_client_get():
    async with AsyncJiraClient(BASE) as client:
        with respx.mock(base_url=BASE) as mock:
            mock.get("/rest/api/2/myself").respond(200, json={"name": "admin"})

            res = await client.get("/rest/api/2/myself")
            assert res.status_code == 200
            assert res.data == {"name": "admin"}

@pytest.mark.asyncio
async def test_async_client_error_status():
    async with AsyncJiraClient(BASE) as client:
        with respx.mock(base_url=BASE) as mock:
            mock.get("/rest/api/2/issue/ABC-9").respond(404, json={"errorMessages": ["Issue does not exist"]})

            with pytest.raises(JiraRequestError) as exc:
                await client.get("rest/api/2/issue/ABC-9")
            assert exc.value.status_code == 404
            assert exc.value.data == {"errorMessages": ["Issue does not exist"]}

@pytest.mark.asyncio
async def test_async_client_cookie_auth_from_config():
    config = ClientConfig(
        base_url=BASE,
        auth=SessionCredentials(username="admin", password="s3cret", auth_url=f"{BASE}/rest/auth/1/session"),
    )
    async with AsyncJiraClient(config) as client:
        with respx.mock(base_url=BASE) as mock:
            login = mock.post("/rest/auth/1/session").respond(
                200, headers={"Set-Cookie": "JSESSIONID=abc123; Path=/"}, json={},
            )
            route = mock.get("/rest/api/2/myself").respond(200, json={})

            await client.get("rest/api/2/myself")
            await client.get("rest/api/2/myself")

            assert login.call_count == 1
            assert route.calls.last.request.headers["Cookie"] == "JSESSIONID=abc123"

@pytest.mark.asyncio
async def test_async_client_native_session():
    async with AsyncJiraClient(BASE) as client:
        with respx.mock(base_url=BASE) as mock:
            mock.post("/rest/auth/1/session").respond(
                200,
                headers={"Set-Cookie": "JSESSIONID=abc123; Path=/"},
                json={"session": {"name": "JSESSIONID", "value": "abc123"}},
            )
            mock.get("/rest/auth/1/session").respond(200, json={"name": "admin"})
            mock.delete("/rest/auth/1/session").respond(204)

            session = await client.authentication.acquire_session_cookie("admin", "s3cret")
            assert session.session.value == "abc123"
            assert await client.authentication.get_current_user() == {"name": "admin"}

            await client.authentication.logout()
            assert not client.authentication.authenticated()
