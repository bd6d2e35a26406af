from datetime import timedelta

from jose import jwt

from conftest import auth_header
from laundry.security_utils import create_access_token


def test_missing_header_is_unauthorized(client):
    response = client.get("/api/user/profile")

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Not authorized to access this route"}


def test_malformed_token_is_unauthorized(client):
    response = client.get("/api/user/profile", headers=auth_header("not-a-jwt"))
    assert response.status_code == 401


def test_token_with_wrong_signature_is_unauthorized(client, user):
    forged = jwt.encode({"id": user.id}, "some-other-secret", algorithm="HS256")
    response = client.get("/api/user/profile", headers=auth_header(forged))
    assert response.status_code == 401


def test_expired_token_is_unauthorized(client, user):
    token = create_access_token(user.id, expires_delta=timedelta(seconds=-5))
    response = client.get("/api/user/profile", headers=auth_header(token))

    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired"


def test_token_for_deleted_user_is_unauthorized(client, db, user, user_headers):
    db.delete(user)
    db.commit()

    response = client.get("/api/user/profile", headers=user_headers)

    assert response.status_code == 401
    assert response.json()["message"] == "User not found"


def test_user_token_is_forbidden_on_admin_routes(client, user_headers):
    response = client.get("/api/admin/stats", headers=user_headers)

    assert response.status_code == 403
    assert response.json()["message"] == "Access denied - Admin privileges required"


def test_admin_token_is_not_a_user_token(client, admin_headers):
    response = client.get("/api/user/profile", headers=admin_headers)
    assert response.status_code == 401


def test_deactivated_admin_token_is_forbidden(client, db, admin, admin_headers):
    assert client.get("/api/admin/profile", headers=admin_headers).status_code == 200

    admin.is_active = False
    db.commit()

    response = client.get("/api/admin/profile", headers=admin_headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Account is deactivated"
