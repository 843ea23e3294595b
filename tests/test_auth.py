"""Tests for login, token handling and user administration."""

from auth.service import create_access_token


def test_login_returns_token_and_user(client, admin_user):
    response = client.post("/auth/login", json={"email": "Admin@DripTech.co.ke", "password": "secret123"})
    assert response.status_code == 200

    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "admin@driptech.co.ke"
    assert "password_hash" not in body["user"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == admin_user.id


def test_login_unknown_account(client, db):
    response = client.post("/auth/login", json={"email": "ghost@example.com", "password": "secret123"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Account not found"


def test_login_wrong_password(client, admin_user):
    response = client.post("/auth/login", json={"email": "admin@driptech.co.ke", "password": "wrong-pass"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect password"


def test_expired_token_is_rejected(client, admin_user):
    token = create_access_token({"sub": admin_user.id, "role": "admin"}, expires_minutes=-1)
    response = client.get("/admin/users/", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Token expired"


def test_me_for_deleted_user(client, db):
    token = create_access_token({"sub": "gone", "role": "admin"})
    assert client.get("/auth/me", headers={"Authorization": f"Bearer {token}"}).status_code == 404


# ─────────────────────────────── User admin ──────────────────────────────────


def test_create_and_list_users(client, admin_headers):
    response = client.post(
        "/admin/users/",
        json={"email": "sales@driptech.co.ke", "name": "Sales", "password": "secret123", "role": "user"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["role"] == "user"

    emails = {u["email"] for u in client.get("/admin/users/", headers=admin_headers).json()}
    assert emails == {"admin@driptech.co.ke", "sales@driptech.co.ke"}


def test_create_user_duplicate_email(client, admin_headers, admin_user):
    response = client.post(
        "/admin/users/",
        json={"email": admin_user.email, "name": "Again", "password": "secret123"},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_create_user_rejects_unknown_role(client, admin_headers):
    response = client.post(
        "/admin/users/",
        json={"email": "x@driptech.co.ke", "name": "X", "password": "secret123", "role": "owner"},
        headers=admin_headers,
    )
    assert response.status_code == 422


def test_update_user_password_allows_login(client, admin_headers, staff_user):
    response = client.put(f"/admin/users/{staff_user.id}", json={"password": "newpass99"}, headers=admin_headers)
    assert response.status_code == 200

    login = client.post("/auth/login", json={"email": staff_user.email, "password": "newpass99"})
    assert login.status_code == 200


def test_admin_cannot_delete_self(client, admin_headers, admin_user):
    response = client.delete(f"/admin/users/{admin_user.id}", headers=admin_headers)
    assert response.status_code == 400


def test_delete_user(client, admin_headers, staff_user):
    url = f"/admin/users/{staff_user.id}"
    assert client.delete(url, headers=admin_headers).status_code == 200
    assert client.delete(url, headers=admin_headers).status_code == 404


def test_user_admin_requires_admin_role(client, user_headers):
    assert client.get("/admin/users/", headers=user_headers).status_code == 403
