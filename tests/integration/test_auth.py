import pytest


@pytest.fixture
def unique_user():
    return {
        "username": "auth_test_user",
        "password": "testpassword123",
        "email": "auth_test@example.com",
    }


def test_register_and_login(client, db, unique_user):
    resp = client.post("/auth/register", json=unique_user)
    assert resp.status_code == 201, resp.get_json()
    assert resp.get_json()["user_id"]

    stored = db.data["users"][0]
    assert stored["password"] != unique_user["password"]

    resp = client.post("/auth/login", json={
        "username": unique_user["username"],
        "password": unique_user["password"],
    })
    assert resp.status_code == 200, resp.get_json()
    token = resp.get_json()["token"]

    resp = client.get("/profile", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.get_json()["profile"]["email"] == unique_user["email"]


def test_duplicate_username_rejected(client, unique_user):
    assert client.post("/auth/register", json=unique_user).status_code == 201
    resp = client.post("/auth/register", json=unique_user)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Username already exists."


def test_register_requires_credentials(client):
    assert client.post("/auth/register", json={"username": "x"}).status_code == 400
    assert client.post("/auth/register").status_code == 400


def test_invalid_login(client, unique_user):
    client.post("/auth/register", json=unique_user)

    resp = client.post("/auth/login", json={"username": unique_user["username"], "password": "wrong"})
    assert resp.status_code == 401

    resp = client.post("/auth/login", json={"username": "nobody", "password": "wrong"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Invalid username or password."
