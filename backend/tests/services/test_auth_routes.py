"""Auth Routes — admin login and the credential gate on privileged routes.

Invariants:
    - Correct credentials return a token and the user (without password hash)
    - Wrong password and unknown email both return 401
    - Privileged routes: missing bearer 401, invalid bearer 403
"""

from tests.services.conftest import ADMIN_EMAIL, ADMIN_PASSWORD


async def test_login_returns_token_and_user(client, admin_user):
    res = await client.post("/api/v1/auth/login", json={
        "email": ADMIN_EMAIL, "password": ADMIN_PASSWORD,
    })

    assert res.status_code == 200
    body = res.json()
    assert body["token"]
    assert body["user"] == {
        "id": admin_user.id, "name": "Administrador", "email": ADMIN_EMAIL,
    }
    assert "passwordHash" not in body["user"]


async def test_login_token_opens_privileged_routes(client, admin_user):
    login = await client.post("/api/v1/auth/login", json={
        "email": ADMIN_EMAIL, "password": ADMIN_PASSWORD,
    })
    token = login.json()["token"]

    res = await client.get(
        "/api/v1/rsvp", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 200


async def test_wrong_password_is_unauthorized(client, admin_user):
    res = await client.post("/api/v1/auth/login", json={
        "email": ADMIN_EMAIL, "password": "wrong",
    })
    assert res.status_code == 401


async def test_unknown_email_is_unauthorized(client, admin_user):
    res = await client.post("/api/v1/auth/login", json={
        "email": "nobody@example.com", "password": ADMIN_PASSWORD,
    })
    assert res.status_code == 401


async def test_missing_bearer_is_unauthorized(client):
    res = await client.post("/api/v1/gifts", json={"name": "X", "price": "1.00"})
    assert res.status_code == 401
    assert res.json()["message"] == "Authentication token not provided"


async def test_invalid_bearer_is_forbidden(client):
    res = await client.post(
        "/api/v1/gifts", json={"name": "X", "price": "1.00"},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert res.status_code == 403
