from conftest import ADMIN_PASSWORD, auth_header


def test_admin_login_returns_token(client, admin):
    response = client.post("/api/auth/admin/login", json={"email": "Admin@Laundry.com", "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["admin"]["email"] == "admin@laundry.com"
    assert body["admin"]["role"] == "admin"
    assert "passwordHash" not in body["admin"]

    profile = client.get("/api/admin/profile", headers=auth_header(body["token"]))
    assert profile.status_code == 200


def test_admin_login_rejects_bad_password(client, admin):
    response = client.post("/api/auth/admin/login", json={"email": admin.email, "password": "wrong"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_admin_login_rejects_unknown_email(client):
    response = client.post("/api/auth/admin/login", json={"email": "nobody@laundry.com", "password": "x"})
    assert response.status_code == 401


def test_admin_login_requires_fields(client):
    response = client.post("/api/auth/admin/login", json={"email": "admin@laundry.com"})
    assert response.status_code == 400


def test_deactivated_admin_cannot_login(client, db, admin):
    admin.is_active = False
    db.commit()

    response = client.post("/api/auth/admin/login", json={"email": admin.email, "password": ADMIN_PASSWORD})

    assert response.status_code == 401
    assert response.json()["message"] == "Account is deactivated"


def test_create_admin_and_reject_duplicate(client):
    payload = {"email": "ops@laundry.com", "password": "s3cret", "name": "Ops"}

    response = client.post("/api/auth/admin/create", json=payload)
    assert response.status_code == 201
    assert response.json()["admin"]["role"] == "admin"

    duplicate = client.post("/api/auth/admin/create", json=payload)
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "Admin already exists"


def test_change_password(client, admin_headers):
    wrong = client.put(
        "/api/admin/change-password",
        json={"currentPassword": "nope", "newPassword": "new-password"},
        headers=admin_headers,
    )
    assert wrong.status_code == 401
    assert wrong.json()["message"] == "Current password is incorrect"

    response = client.put(
        "/api/admin/change-password",
        json={"currentPassword": ADMIN_PASSWORD, "newPassword": "new-password"},
        headers=admin_headers,
    )
    assert response.status_code == 200

    login = client.post("/api/auth/admin/login", json={"email": "admin@laundry.com", "password": "new-password"})
    assert login.status_code == 200
