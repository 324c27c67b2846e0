"""
Tests for bearer token authentication on protected routes, and logout.
"""
from datetime import datetime, timedelta, timezone

from src.core.security import create_access_token


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def test_missing_authorization_header(client):
    response = client.get("/users/me")
    assert response.status_code == 401
    assert response.json()["message"] == "Authorization header missing"
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_header_without_token(client):
    response = client.get("/users/me", headers={"Authorization": "Bearer"})
    assert response.status_code == 401
    assert response.json()["message"] == "Token not found"


def test_invalid_token(client):
    response = client.get("/users/me", headers=auth_header("garbage"))
    assert response.status_code == 401
    assert response.json()["message"].startswith("Authentication failed")


def test_expired_token(client, create_user):
    user = create_user()
    token = create_access_token(
        {"user_id": user.id, "full_name": user.full_name, "role": user.role.value},
        issued_at=datetime.now(timezone.utc) - timedelta(hours=2),
    )
    response = client.get("/users/me", headers=auth_header(token))
    assert response.status_code == 401
    assert response.json()["message"] == "Authentication failed: Token has expired"


def test_token_without_identity_claims(client):
    token = create_access_token({"email": "ana@x.com"})
    response = client.get("/users/me", headers=auth_header(token))
    assert response.status_code == 401


def test_valid_token_reaches_handler(client, create_user):
    user = create_user()
    login = client.post("/users/login", json={"userName": "maria", "password": "Senha123"})
    token = login.json()["data"]["token"]

    response = client.get("/users/me", headers=auth_header(token))
    assert response.status_code == 200
    body = response.json()["user"]
    assert body["id"] == user.id
    assert body["patient"]["userId"] == user.id


def test_registration_token_works_on_protected_routes(client, db):
    response = client.post("/register", json={
        "fullName": "Ana Silva",
        "email": "ana@x.com",
        "role": "Paciente",
        "userName": "ana1",
    })
    token = response.json()["token"]
    me = client.get("/users/me", headers=auth_header(token))
    assert me.status_code == 200
    assert me.json()["user"]["userName"] == "ana1"


def test_logout_redirects_to_root(client):
    response = client.get("/logout", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "/"
