from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.utils.auth import bearer, expire_all_sessions, login, register


@pytest.mark.asyncio
async def test_list_sessions_newest_first(client: AsyncClient):
    data = await register(client, "user@example.com")
    await login(client, "user@example.com", user_agent="phone")

    response = await client.get("/sessions", headers=bearer(data["access_token"]))

    assert response.status_code == 200
    sessions = response.json()
    assert [s["user_agent"] for s in sessions] == ["phone", "pytest-client"]
    for session in sessions:
        assert set(session) == {
            "id",
            "user_id",
            "user_agent",
            "ip_address",
            "created_at",
            "expires_at",
        }
        assert session["user_id"] == data["user"]["id"]


@pytest.mark.asyncio
async def test_list_sessions_hides_expired(client: AsyncClient, session_factory):
    data = await register(client, "user@example.com")
    await expire_all_sessions(session_factory)

    response = await client.get("/sessions", headers=bearer(data["access_token"]))

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_list_sessions_only_shows_own(client: AsyncClient):
    await register(client, "admin@example.com")
    member = await register(client, "member@example.com")

    response = await client.get("/sessions", headers=bearer(member["access_token"]))

    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_revoke_own_session(client: AsyncClient):
    data = await register(client, "user@example.com")
    phone = await login(client, "user@example.com", user_agent="phone")
    sessions = (await client.get("/sessions", headers=bearer(data["access_token"]))).json()
    phone_session = sessions[0]["id"]

    response = await client.delete(
        f"/sessions/{phone_session}", headers=bearer(data["access_token"])
    )

    assert response.status_code == 200
    assert response.json() == {
        "message": "Session revoked successfully",
        "session_id": phone_session,
        "revoked": True,
    }
    refresh = await client.post("/auth/refresh", json={"refresh_token": phone["refresh_token"]})
    assert refresh.status_code == 401
    remaining = (await client.get("/sessions", headers=bearer(data["access_token"]))).json()
    assert [s["user_agent"] for s in remaining] == ["pytest-client"]


@pytest.mark.asyncio
async def test_member_cannot_revoke_foreign_session(client: AsyncClient):
    admin = await register(client, "admin@example.com")
    member = await register(client, "member@example.com")
    admin_session = (await client.get("/sessions", headers=bearer(admin["access_token"]))).json()[0]

    response = await client.delete(
        f"/sessions/{admin_session['id']}", headers=bearer(member["access_token"])
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "SESSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_admin_can_revoke_any_session(client: AsyncClient):
    admin = await register(client, "admin@example.com")
    member = await register(client, "member@example.com")
    member_session = (await client.get("/sessions", headers=bearer(member["access_token"]))).json()[0]

    response = await client.delete(
        f"/sessions/{member_session['id']}", headers=bearer(admin["access_token"])
    )

    assert response.status_code == 200
    refresh = await client.post("/auth/refresh", json={"refresh_token": member["refresh_token"]})
    assert refresh.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("session_id", ["not-a-uuid", str(uuid4())])
async def test_revoke_unknown_session(client: AsyncClient, session_id):
    data = await register(client, "user@example.com")

    response = await client.delete(f"/sessions/{session_id}", headers=bearer(data["access_token"]))

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "SESSION_NOT_FOUND"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer"},
        {"Authorization": "Bearer not.a.jwt"},
        {"Authorization": "Basic dXNlcjpwYXNz"},
    ],
)
async def test_sessions_require_valid_access_token(client: AsyncClient, headers):
    response = await client.get("/sessions", headers=headers)

    assert response.status_code == 401
    assert response.json() == {
        "error": {"code": "UNAUTHORIZED", "message": "Invalid or expired credentials"}
    }


@pytest.mark.asyncio
async def test_lowercase_bearer_scheme_rejected(client: AsyncClient):
    data = await register(client, "user@example.com")

    response = await client.get(
        "/sessions", headers={"Authorization": f"bearer {data['access_token']}"}
    )

    assert response.status_code == 401
