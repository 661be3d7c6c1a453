import pytest
from httpx import AsyncClient

EMAIL = "investor@fund.com"
PASSWORD = "SecurePass123!"


async def register(client):
    response = await client.post(
        "/auth/register",
        json={"email": EMAIL, "password": PASSWORD, "first_name": "Ada", "last_name": "Lovelace"},
    )
    assert response.status_code == 201
    return response.json()


async def login(client, user_agent="device"):
    response = await client.post(
        "/auth/login",
        json={"email": EMAIL, "password": PASSWORD},
        headers={"User-Agent": user_agent},
    )
    assert response.status_code == 200
    return response.json()


def bearer(tokens):
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest.mark.asyncio
async def test_rotation_invalidates_old_refresh_token(client: AsyncClient):
    """A refresh token works exactly once"""
    tokens = await register(client)

    first = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    replay = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

    assert first.status_code == 200
    assert first.json()["refresh_token"] != tokens["refresh_token"]
    assert replay.status_code == 401
    assert replay.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_rotated_token_keeps_working(client: AsyncClient):
    tokens = await register(client)

    rotated = (
        await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    ).json()
    again = await client.post("/auth/refresh", json={"refresh_token": rotated["refresh_token"]})

    assert again.status_code == 200


@pytest.mark.asyncio
async def test_refresh_rejects_garbage_and_access_tokens(client: AsyncClient):
    tokens = await register(client)

    garbage = await client.post("/auth/refresh", json={"refresh_token": "garbage"})
    access = await client.post("/auth/refresh", json={"refresh_token": tokens["access_token"]})

    assert garbage.status_code == 401
    assert access.status_code == 401
    assert garbage.json() == access.json()


@pytest.mark.asyncio
async def test_multi_device_isolation(client: AsyncClient):
    """Logging out one device leaves the other session usable"""
    await register(client)
    laptop = await login(client, "laptop")
    phone = await login(client, "phone")
    assert laptop["refresh_token"] != phone["refresh_token"]

    logout = await client.post(
        "/auth/logout", json={"refresh_token": laptop["refresh_token"]}, headers=bearer(phone)
    )
    laptop_refresh = await client.post(
        "/auth/refresh", json={"refresh_token": laptop["refresh_token"]}
    )
    phone_refresh = await client.post(
        "/auth/refresh", json={"refresh_token": phone["refresh_token"]}
    )

    assert logout.status_code == 200
    assert laptop_refresh.status_code == 401
    assert phone_refresh.status_code == 200


@pytest.mark.asyncio
async def test_logout_is_idempotent(client: AsyncClient):
    tokens = await register(client)

    first = await client.post(
        "/auth/logout", json={"refresh_token": tokens["refresh_token"]}, headers=bearer(tokens)
    )
    second = await client.post(
        "/auth/logout", json={"refresh_token": tokens["refresh_token"]}, headers=bearer(tokens)
    )
    unknown = await client.post(
        "/auth/logout", json={"refresh_token": "never-issued"}, headers=bearer(tokens)
    )

    assert first.status_code == second.status_code == unknown.status_code == 200


@pytest.mark.asyncio
async def test_logout_requires_authentication(client: AsyncClient):
    tokens = await register(client)

    response = await client.post("/auth/logout", json={"refresh_token": tokens["refresh_token"]})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_register_login_refresh_logout_all_scenario(client: AsyncClient):
    """
    register A, login twice (S1, S2), refresh S1 to S1', logout-all:
    both S1' and S2 are dead afterwards
    """
    await register(client)
    s1 = await login(client, "laptop")
    s2 = await login(client, "phone")

    s1_prime = await client.post("/auth/refresh", json={"refresh_token": s1["refresh_token"]})
    assert s1_prime.status_code == 200
    s1_prime = s1_prime.json()

    logout_all = await client.post("/auth/logout-all", headers=bearer(s1_prime))
    assert logout_all.status_code == 200
    # registration session, S2 and S1'
    assert logout_all.json()["revoked_sessions"] == 3

    refresh_s1_prime = await client.post(
        "/auth/refresh", json={"refresh_token": s1_prime["refresh_token"]}
    )
    refresh_s2 = await client.post("/auth/refresh", json={"refresh_token": s2["refresh_token"]})

    assert refresh_s1_prime.status_code == 401
    assert refresh_s2.status_code == 401


@pytest.mark.asyncio
async def test_session_activity_updates_live_session(client: AsyncClient, db_session):
    tokens = await register(client)

    response = await client.post(
        "/auth/session-activity",
        json={"refresh_token": tokens["refresh_token"]},
        headers={**bearer(tokens), "User-Agent": "new-browser", "X-Forwarded-For": "203.0.113.7"},
    )

    assert response.status_code == 200
    assert response.json() == {"updated": True}

    from sqlmodel import select
    from src.domain.entities import Session

    db_session.expire_all()
    session = (await db_session.exec(select(Session))).one()
    assert session.user_agent == "new-browser"
    assert session.ip_address == "203.0.113.7"


@pytest.mark.asyncio
async def test_session_activity_on_revoked_session(client: AsyncClient):
    tokens = await register(client)
    await client.post(
        "/auth/logout", json={"refresh_token": tokens["refresh_token"]}, headers=bearer(tokens)
    )

    response = await client.post(
        "/auth/session-activity",
        json={"refresh_token": tokens["refresh_token"]},
        headers=bearer(tokens),
    )

    assert response.json() == {"updated": False}
