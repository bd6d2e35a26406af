from datetime import datetime

from conftest import auth_header
from laundry.models import Order, OrderStatus, User
from laundry.security_utils import create_access_token


def add_order(db, user, status):
    db.add(
        Order(
            user_id=user.id,
            service_id="wash-fold",
            service_name="Wash & Fold",
            pickup_date=datetime(2024, 6, 1, 9),
            pickup_time="09:00",
            status=status,
            amount=100,
        )
    )
    db.commit()


def test_profile_hides_otp_fields(client, user, user_headers):
    body = client.get("/api/user/profile", headers=user_headers).json()

    assert body["user"]["phoneNumber"] == user.phone_number
    assert "otp" not in body["user"]
    assert "otpExpiresAt" not in body["user"]


def test_profile_update_marks_profile_complete(client, make_user):
    fresh = make_user(phone_number="9222222222")
    headers = auth_header(create_access_token(fresh.id))

    partial = client.put("/api/user/profile", json={"name": "Kiran"}, headers=headers).json()["user"]
    assert partial["name"] == "Kiran"
    assert partial["isProfileComplete"] is False

    complete = client.put(
        "/api/user/profile", json={"name": "Kiran", "address": "4 Park Street"}, headers=headers
    ).json()["user"]
    assert complete["isProfileComplete"] is True


def test_profile_update_leaves_absent_fields(client, db, user, user_headers):
    response = client.put(
        "/api/user/profile",
        json={"email": " Asha@Example.com ", "smsPermission": True, "fcmToken": "device-token"},
        headers=user_headers,
    )

    updated = response.json()["user"]
    assert updated["email"] == "asha@example.com"
    assert updated["smsPermission"] is True
    assert updated["fcmToken"] == "device-token"
    assert updated["name"] == "Asha"
    assert updated["address"] == "12 MG Road"


def test_profile_update_rejects_bad_email(client, user_headers):
    response = client.put("/api/user/profile", json={"email": "not-an-email"}, headers=user_headers)
    assert response.status_code == 400


def test_dashboard_counts_in_flight_orders_as_pending(client, db, user, user_headers):
    for status in (
        OrderStatus.PENDING,
        OrderStatus.PICKED,
        OrderStatus.IN_PROCESS,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
        OrderStatus.DELIVERED,
    ):
        add_order(db, user, status)

    body = client.get("/api/user/dashboard", headers=user_headers).json()

    assert body["stats"] == {
        "totalOrders": 6,
        "deliveredOrders": 2,
        "cancelledOrders": 1,
        "pendingOrders": 3,
    }
    assert len(body["recentOrders"]) == 5


def test_admin_user_management(client, db, user, admin_headers):
    listing = client.get("/api/user/all", headers=admin_headers).json()
    assert listing["count"] == 1

    fetched = client.get(f"/api/user/{user.id}", headers=admin_headers).json()["user"]
    assert fetched["id"] == user.id

    updated = client.put(f"/api/user/{user.id}", json={"address": "7 Lake View"}, headers=admin_headers)
    assert updated.json()["user"]["address"] == "7 Lake View"
    assert updated.json()["user"]["name"] == "Asha"

    deleted = client.delete(f"/api/user/{user.id}", headers=admin_headers)
    assert deleted.status_code == 200
    assert db.query(User).count() == 0

    assert client.get(f"/api/user/{user.id}", headers=admin_headers).status_code == 404


def test_user_management_requires_admin(client, user, user_headers):
    assert client.get("/api/user/all", headers=user_headers).status_code == 403
    assert client.delete(f"/api/user/{user.id}", headers=user_headers).status_code == 403
