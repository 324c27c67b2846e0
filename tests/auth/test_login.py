"""
Tests for POST /users/login.
"""
from src.core.security import decode_access_token


def test_login_success(client, create_user):
    user = create_user()
    response = client.post("/users/login", json={"userName": "maria", "password": "Senha123"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "User logged in successfully!"
    data = body["data"]
    assert data["name"] == "Maria Souza"
    assert data["role"] == "Paciente"
    assert data["userId"] == user.id

    claims = decode_access_token(data["token"])
    assert claims["user_id"] == user.id
    assert claims["full_name"] == "Maria Souza"
    assert claims["role"] == "Paciente"
    assert claims["exp"] - claims["iat"] == 3600


def test_login_wrong_password(client, create_user):
    create_user()
    response = client.post("/users/login", json={"userName": "maria", "password": "errada"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_login_unknown_user(client, create_user):
    create_user()
    response = client.post("/users/login", json={"userName": "ninguem", "password": "Senha123"})
    assert response.status_code == 404


def test_login_username_is_exact_match(client, create_user):
    create_user()
    response = client.post("/users/login", json={"userName": "MARIA", "password": "Senha123"})
    assert response.status_code == 404
