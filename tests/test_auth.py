"""Tests for authentication endpoints."""
from fastapi.testclient import TestClient

from taskboard.core.auth import auth_service


def test_register_user(client: TestClient):
    """Test user registration."""
    response = client.post(
        "/api/auth/register",
        json={"email": "newuser@example.com", "password": "newpassword123"}
    )

    assert response.status_code == 201
    data = response.json()
    assert "token" in data
    assert data["msg"] == "Registration successful"


def test_register_missing_fields(client: TestClient):
    response = client.post("/api/auth/register", json={"email": "a@example.com"})

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_register_malformed_email(client: TestClient):
    for email in ["not-an-email", "user@domain", "user @example.com"]:
        response = client.post(
            "/api/auth/register", json={"email": email, "password": "password123"}
        )
        assert response.status_code == 400, email
        assert response.json()["error"] == "Please provide a valid email address"


def test_register_short_password(client: TestClient):
    response = client.post(
        "/api/auth/register", json={"email": "short@example.com", "password": "12345"}
    )

    assert response.status_code == 400
    assert "at least 6" in response.json()["error"]


def test_register_duplicate_email(client: TestClient, auth_headers):
    """Duplicate check ignores case."""
    response = client.post(
        "/api/auth/register",
        json={"email": "TEST@Example.com", "password": "password123"}
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "DUPLICATE_ACCOUNT"
    assert "already exists" in response.json()["error"]


def test_login_success(client: TestClient, auth_headers):
    """Test successful login."""
    response = client.post(
        "/api/auth/login",
        json={"email": "test@example.com", "password": "testpassword123"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["msg"] == "Login successful"

    registered_id = auth_service.verify_token(auth_headers["x-auth-token"])
    assert auth_service.verify_token(data["token"]) == registered_id


def test_login_email_is_case_insensitive(client: TestClient, auth_headers):
    response = client.post(
        "/api/auth/login",
        json={"email": "Test@EXAMPLE.com", "password": "testpassword123"}
    )

    assert response.status_code == 200


def test_login_wrong_password(client: TestClient, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/auth/login",
        json={"email": "test@example.com", "password": "wrongpassword"}
    )

    assert response.status_code == 401
    assert response.json()["error_code"] == "INVALID_CREDENTIALS"


def test_login_failures_are_indistinguishable(client: TestClient, auth_headers):
    wrong_password = client.post(
        "/api/auth/login",
        json={"email": "test@example.com", "password": "wrongpassword"}
    )
    unknown_email = client.post(
        "/api/auth/login",
        json={"email": "nonexistent@example.com", "password": "password123"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json()["error"] == unknown_email.json()["error"]
    assert wrong_password.json()["error_code"] == unknown_email.json()["error_code"]


def test_login_missing_fields(client: TestClient):
    response = client.post("/api/auth/login", json={"email": "test@example.com"})

    assert response.status_code == 401
    assert response.json()["error_code"] == "INVALID_CREDENTIALS"


def test_register_rejects_non_json_body(client: TestClient):
    response = client.post(
        "/api/auth/register",
        content="not json",
        headers={"content-type": "application/json"}
    )

    assert response.status_code == 400
