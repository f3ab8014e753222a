"""
Authentication endpoint tests: register, login, demo token, verify, refresh, /me.

Run: pytest tests/test_auth.py -v
"""

from datetime import datetime, timedelta, timezone

from botanical_buddy.shared.config.settings import get_settings
from botanical_buddy.shared.core.security import get_security_manager
from tests.conftest import auth_headers, register_user


def test_register_returns_token_and_user(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "Jane.Doe@Example.com", "password": "password123", "first_name": "Jane"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Registration successful"
    assert body["data"]["token_type"] == "Bearer"
    assert body["data"]["expires_in"] == "24 hours"

    user = body["data"]["user"]
    assert user["email"] == "jane.doe@example.com"
    assert user["subscription_tier"] == "Free"
    assert user["email_verified"] is False
    assert "password_hash" not in user

    assert get_security_manager().validate_token(body["data"]["token"]) == user["id"]


def test_duplicate_email_rejected_case_insensitively(client):
    register_user(client, "dup@example.com")

    response = client.post(
        "/api/v1/auth/register",
        json={"email": "DUP@example.com", "password": "password123"},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "User with this email already exists"}


def test_register_validation(client):
    response = client.post("/api/v1/auth/register", json={"email": "not-an-email", "password": "short"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid input"


def test_login_success(client):
    registered = register_user(client, "login@example.com", password="password123")

    response = client.post(
        "/api/v1/auth/login", json={"email": "LOGIN@example.com", "password": "password123"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["data"]["user"]["id"] == registered["user"]["id"]


def test_login_failures_indistinguishable(client):
    register_user(client, "login@example.com", password="password123")

    wrong_password = client.post(
        "/api/v1/auth/login", json={"email": "login@example.com", "password": "nope-nope"}
    )
    unknown_email = client.post(
        "/api/v1/auth/login", json={"email": "ghost@example.com", "password": "password123"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"] == "Invalid email or password"


def test_me_returns_profile(client, user_a):
    response = client.get("/api/v1/auth/me", headers=user_a["headers"])

    assert response.status_code == 200
    assert response.json()["data"]["email"] == "alice@example.com"


def test_me_without_token(client):
    response = client.get("/api/v1/auth/me")

    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "Unauthorized"
    assert body["message"] == "Missing or invalid authorization header"


def test_expired_token_rejected_by_endpoints(client, user_a):
    issued_at = datetime.now(timezone.utc) - timedelta(hours=25)
    expired = get_security_manager().issue_token(user_a["user"]["id"], now=issued_at)

    response = client.get("/api/v1/auth/me", headers=auth_headers(expired))

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


# =============================================================================
# DEMO TOKEN
# =============================================================================

def test_demo_token_issued_with_valid_key(client):
    response = client.post(
        "/api/v1/auth/token",
        json={"username": "demo-user", "api_key": get_settings().AUTH_DEMO_API_KEY},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token_type"] == "Bearer"
    assert data["usage"].startswith("Include this token in the Authorization header")
    assert get_security_manager().validate_token(data["token"]) == "demo-user"


def test_demo_token_requires_username(client):
    response = client.post("/api/v1/auth/token", json={"api_key": get_settings().AUTH_DEMO_API_KEY})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing or invalid username"


def test_demo_token_requires_valid_key(client):
    for payload in ({"username": "demo-user"}, {"username": "demo-user", "api_key": "wrong"}):
        response = client.post("/api/v1/auth/token", json=payload)
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid API key"


def test_demo_token_cannot_reach_owned_resources(client):
    token = client.post(
        "/api/v1/auth/token",
        json={"username": "demo-user", "api_key": get_settings().AUTH_DEMO_API_KEY},
    ).json()["data"]["token"]

    response = client.get("/api/v1/addresses/", headers=auth_headers(token))

    assert response.status_code == 401


# =============================================================================
# VERIFY AND REFRESH
# =============================================================================

def test_verify_valid_token(client, user_a):
    response = client.get("/api/v1/auth/verify", headers=user_a["headers"])

    assert response.status_code == 200
    body = response.json()
    assert body["data"] == {"valid": True, "subject": user_a["user"]["id"]}
    assert body["message"] == "Token is valid"


def test_verify_invalid_token(client):
    response = client.get("/api/v1/auth/verify", headers=auth_headers("garbage"))

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["valid"] is False


def test_verify_missing_header(client):
    response = client.get("/api/v1/auth/verify")

    assert response.status_code == 401
    assert response.json()["valid"] is False


def test_refresh_reissues_for_same_subject(client, user_a):
    response = client.post("/api/v1/auth/refresh", json={"token": user_a["token"]})

    assert response.status_code == 200
    new_token = response.json()["data"]["token"]
    assert new_token != user_a["token"]
    assert get_security_manager().validate_token(new_token) == user_a["user"]["id"]


def test_refresh_rejects_invalid_token(client):
    response = client.post("/api/v1/auth/refresh", json={"token": "garbage"})

    assert response.status_code == 401
