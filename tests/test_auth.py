from datetime import timedelta

from clinicapp.domain.auth.repository import UserRepository
from clinicapp.security_utils import create_access_token, hash_password, verify_access_token, verify_password

API = "/api/v1/auth"


def test_password_hashing():
    hashed = hash_password("Secret123")

    assert hashed != "Secret123"
    assert verify_password("Secret123", hashed)
    assert not verify_password("Secret124", hashed)


def test_token_round_trip():
    token = create_access_token("user-1", "a@b.com", "admin")
    payload = verify_access_token(token)

    assert payload["sub"] == "user-1"
    assert payload["role"] == "admin"


def test_expired_or_tampered_token_is_rejected():
    expired = create_access_token("user-1", "a@b.com", "admin", expires_delta=timedelta(seconds=-1))

    assert verify_access_token(expired) is None
    assert verify_access_token("not.a.token") is None


def test_login_returns_user_and_token(api, admin_user, user_password):
    response = api.post(f"{API}/login", json={"email": admin_user.email, "password": user_password})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["email"] == admin_user.email
    assert "password_hash" not in data["user"]
    assert verify_access_token(data["token"])["sub"] == admin_user.id


def test_login_wrong_password(api, admin_user):
    response = api.post(f"{API}/login", json={"email": admin_user.email, "password": "WrongPass1"})

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": {"message": "Invalid email or password", "code": "INVALID_CREDENTIALS"},
    }


def test_login_unknown_email(api, user_password):
    response = api.post(f"{API}/login", json={"email": "nobody@example.com", "password": user_password})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


def test_login_deactivated_account(api, db_session, staff_user, user_password):
    UserRepository.update_user(db_session, staff_user, is_active=False)

    response = api.post(f"{API}/login", json={"email": staff_user.email, "password": user_password})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "ACCOUNT_DEACTIVATED"


def test_deactivated_user_token_is_refused(api, db_session, staff_user, staff_headers):
    UserRepository.update_user(db_session, staff_user, is_active=False)

    response = api.get(f"{API}/me", headers=staff_headers)

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "ACCOUNT_DEACTIVATED"


def test_me_requires_token(api):
    response = api.get(f"{API}/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "NO_TOKEN"


def test_me_rejects_garbage_token(api):
    response = api.get(f"{API}/me", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


def test_me_returns_profile(api, staff_user, staff_headers):
    response = api.get(f"{API}/me", headers=staff_headers)

    assert response.status_code == 200
    assert response.json()["data"]["role"] == "receptionist"


def test_refresh_issues_new_token(api, staff_user, staff_headers):
    response = api.post(f"{API}/refresh", headers=staff_headers)

    assert response.status_code == 200
    assert verify_access_token(response.json()["data"]["token"])["sub"] == staff_user.id


def test_admin_registers_user(api, admin_headers):
    response = api.post(
        f"{API}/register",
        json={"email": "New.User@Example.com", "password": "Welcome123", "full_name": "New User"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    user = response.json()["data"]["user"]
    assert user["email"] == "new.user@example.com"
    assert user["role"] == "user"


def test_register_duplicate_email(api, admin_headers, staff_user):
    response = api.post(
        f"{API}/register",
        json={"email": staff_user.email, "password": "Welcome123", "full_name": "Copy"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_EMAIL"


def test_register_requires_admin(api, staff_headers):
    response = api.post(
        f"{API}/register",
        json={"email": "x@example.com", "password": "Welcome123", "full_name": "Nope"},
        headers=staff_headers,
    )

    assert response.status_code == 403


def test_register_rejects_weak_password(api, admin_headers):
    response = api.post(
        f"{API}/register",
        json={"email": "weak@example.com", "password": "alllowercase", "full_name": "Weak"},
        headers=admin_headers,
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
