from conftest import PASSWORD, bearer, register


async def test_register_returns_token_and_user(client):
    response = await client.post(
        "/api/auth/register",
        json={"name": "Jane", "email": "Jane@Example.com", "password": PASSWORD},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["token"]
    assert data["user"]["email"] == "jane@example.com"
    assert data["user"]["role"] == "user"
    assert "password" not in data["user"]
    assert "passwordHash" not in data["user"]


async def test_register_duplicate_email(client):
    await register(client, "Jane", "jane@example.com")

    response = await client.post(
        "/api/auth/register",
        json={"name": "Jane Again", "email": "JANE@example.com", "password": PASSWORD},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "User already exists"


async def test_register_validation(client):
    response = await client.post(
        "/api/auth/register",
        json={"name": "Jane", "email": "not-an-email", "password": "123"},
    )

    assert response.status_code == 400
    assert {e["field"] for e in response.json()["errors"]} == {"email", "password"}


async def test_login(client):
    await register(client, "Jane", "jane@example.com")

    response = await client.post("/api/auth/login", json={"email": "jane@example.com", "password": PASSWORD})

    assert response.status_code == 200
    data = response.json()["data"]
    me = await client.get("/api/auth/me", headers=bearer(data["token"]))
    assert me.json()["data"]["id"] == data["user"]["id"]


async def test_login_with_wrong_password(client):
    await register(client, "Jane", "jane@example.com")

    response = await client.post("/api/auth/login", json={"email": "jane@example.com", "password": "wrong-pass"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid credentials"}


async def test_login_unknown_email(client):
    response = await client.post("/api/auth/login", json={"email": "nobody@example.com", "password": PASSWORD})

    assert response.status_code == 401


async def test_me_requires_token(client):
    response = await client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Not authorized to access this route"}


async def test_me_rejects_garbage_token(client):
    response = await client.get("/api/auth/me", headers=bearer("garbage"))

    assert response.status_code == 401


async def test_update_profile(client, author, author_headers):
    response = await client.put(
        "/api/auth/profile",
        json={"name": "Jane Writer", "avatar": "avatar.png"},
        headers=author_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Jane Writer"
    assert data["avatar"] == "avatar.png"
    assert data["email"] == author["user"]["email"]


async def test_update_profile_email_taken(client, author_headers, other_headers):
    response = await client.put(
        "/api/auth/profile",
        json={"email": "other@example.com"},
        headers=author_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Email already registered"
