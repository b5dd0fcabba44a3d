"""Integration tests for the /auth endpoints."""

import pytest
from identity.api import router
from identity.session.session import SESSION_COOKIE_NAME


@pytest.fixture()
def client(client_for):
    return client_for(router)


def _register(client, **overrides):
    body = {"name": "Pema", "email": "pema@example.bt", "password": "secret123"}
    body.update(overrides)
    return client.post("/auth/register", json=body)


class TestRegister:
    def test_register(self, client):
        response = _register(client)
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User created successfully"
        assert data["user"]["email"] == "pema@example.bt"
        assert data["user"]["role"] == "BUYER"

    def test_duplicate(self, client):
        _register(client)
        response = _register(client)
        assert response.status_code == 409
        assert response.json() == {"error": "User already exists"}

    def test_missing_fields(self, client):
        response = client.post("/auth/register", json={"email": "pema@example.bt"})
        assert response.status_code == 400
        assert "password" in response.json()["details"]

    def test_invalid_email(self, client):
        response = _register(client, email="pema")
        assert response.status_code == 400
        assert response.json()["details"]["email"] == ["Invalid email address"]


class TestSession:
    def test_sign_in_sets_cookie(self, client):
        _register(client)
        response = client.post("/auth/session", json={"email": "pema@example.bt", "password": "secret123"})

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["name"] == "Pema"
        assert response.cookies.get(SESSION_COOKIE_NAME) == data["token"]

    def test_cookie_session(self, client):
        _register(client)
        client.post("/auth/session", json={"email": "pema@example.bt", "password": "secret123"})

        response = client.get("/auth/session")
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "pema@example.bt"

    def test_bearer_session(self, client, auth, buyer):
        token, principal = buyer
        response = client.get("/auth/session", headers=auth(token))
        assert response.json()["user"]["id"] == principal.id

    def test_bad_credentials(self, client):
        response = client.post("/auth/session", json={"email": "nobody@example.bt", "password": "x"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    def test_no_session(self, client):
        response = client.get("/auth/session")
        assert response.status_code == 401
        assert response.json() == {"error": "Not authenticated"}

    def test_sign_out(self, client, auth, buyer):
        token, _ = buyer
        assert client.delete("/auth/session", headers=auth(token)).json() == {"status": "ok"}

        response = client.get("/auth/session", headers=auth(token))
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid session"}
