from datetime import datetime

import pytest

from conftest import auth_header
from laundry.models import Order, OrderStatus, Service
from laundry.security_utils import create_access_token

ORDER = {
    "serviceId": "wash-fold",
    "serviceName": "Wash & Fold",
    "pickupDate": "2024-06-01T09:00:00Z",
    "pickupTime": "09:00 - 11:00",
    "address": "12 MG Road",
    "amount": 120,
}


@pytest.fixture
def order(db, user):
    def _order(status=OrderStatus.PENDING, owner=None):
        owner = owner or user
        row = Order(
            user_id=owner.id,
            service_id="wash-fold",
            service_name="Wash & Fold",
            pickup_date=datetime(2024, 6, 1, 9),
            pickup_time="09:00 - 11:00",
            status=status,
            amount=120,
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        return row

    return _order


def test_create_order(client, user, user_headers):
    response = client.post("/api/orders", json=ORDER, headers=user_headers)

    assert response.status_code == 201
    created = response.json()["order"]
    assert created["status"] == "pending"
    assert created["serviceId"] == "wash-fold"
    assert created["customerName"] == "Asha"
    assert created["customerPhone"] == user.phone_number
    assert created["pickupDate"].startswith("2024-06-01T09:00:00")


@pytest.mark.parametrize("missing", ["serviceId", "serviceName", "pickupDate", "pickupTime", "address"])
def test_create_order_requires_fields(client, user_headers, missing):
    payload = {k: v for k, v in ORDER.items() if k != missing}

    response = client.post("/api/orders", json=payload, headers=user_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Please provide all required fields"


@pytest.mark.parametrize("pickup_date", ["someday", 1e300, "9" * 400])
def test_create_order_rejects_bad_pickup_date(client, db, user_headers, pickup_date):
    response = client.post("/api/orders", json={**ORDER, "pickupDate": pickup_date}, headers=user_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid pickup date"
    assert db.query(Order).count() == 0


def test_booking_rejects_out_of_range_pickup_date(client, db, user_headers):
    service = Service(name="Dry Clean", description="Delicates", price=250.0)
    db.add(service)
    db.commit()

    response = client.post(
        "/api/bookings",
        json={"serviceId": service.id, "pickupDate": 1e300, "pickupTime": "10:00"},
        headers=user_headers,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid pickup date"


def test_my_orders_with_stats(client, order, user_headers):
    order(OrderStatus.PENDING)
    order(OrderStatus.DELIVERED)
    order(OrderStatus.CANCELLED)

    body = client.get("/api/orders", headers=user_headers).json()

    assert len(body["orders"]) == 3
    assert body["stats"] == {"totalOrders": 3, "delivered": 1, "cancelled": 1, "pending": 1}


def test_get_order_is_owner_only(client, make_user, order, user_headers):
    mine = order()
    theirs = order(owner=make_user(phone_number="9111111111"))

    assert client.get(f"/api/orders/{mine.id}", headers=user_headers).status_code == 200
    assert client.get(f"/api/orders/{theirs.id}", headers=user_headers).status_code == 403
    assert client.get("/api/orders/missing", headers=user_headers).status_code == 404


@pytest.mark.parametrize("status", [OrderStatus.PENDING, OrderStatus.PICKED, OrderStatus.IN_PROCESS])
def test_cancel_open_order(client, db, order, user_headers, status):
    row = order(status)

    response = client.patch(f"/api/orders/{row.id}/cancel", headers=user_headers)

    assert response.status_code == 200
    assert response.json()["order"]["status"] == "cancelled"
    db.expire_all()
    assert db.get(Order, row.id).status == OrderStatus.CANCELLED


@pytest.mark.parametrize("status", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
def test_cancel_closed_order_is_rejected(client, db, order, user_headers, status):
    row = order(status)

    response = client.patch(f"/api/orders/{row.id}/cancel", headers=user_headers)

    assert response.status_code == 400
    assert response.json()["message"] == f"Cannot cancel order with status: {status.value}"
    db.expire_all()
    assert db.get(Order, row.id).status == status


def test_cancel_other_users_order_is_forbidden(client, make_user, order, user_headers):
    row = order(owner=make_user(phone_number="9111111111"))

    response = client.patch(f"/api/orders/{row.id}/cancel", headers=user_headers)

    assert response.status_code == 403
    assert response.json()["message"] == "Not authorized to cancel this order"


def test_admin_updates_status(client, order, admin_headers, user_headers):
    row = order(OrderStatus.DELIVERED)

    response = client.patch(f"/api/orders/{row.id}/status", json={"status": "in-process"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["order"]["status"] == "in-process"

    bad = client.patch(f"/api/orders/{row.id}/status", json={"status": "lost"}, headers=admin_headers)
    assert bad.status_code == 400
    assert bad.json()["message"] == "Invalid status value"

    empty = client.patch(f"/api/orders/{row.id}/status", json={}, headers=admin_headers)
    assert empty.json()["message"] == "Status is required"

    missing = client.patch("/api/orders/missing/status", json={"status": "picked"}, headers=admin_headers)
    assert missing.status_code == 404

    denied = client.patch(f"/api/orders/{row.id}/status", json={"status": "picked"}, headers=user_headers)
    assert denied.status_code == 403


def test_admin_lists_all_orders_with_stats(client, make_user, order, admin_headers):
    order(OrderStatus.PICKED)
    order(OrderStatus.IN_PROCESS, owner=make_user(phone_number="9111111111"))

    body = client.get("/api/orders/all", headers=admin_headers).json()
    assert len(body["orders"]) == 2
    assert all(o["user"]["phoneNumber"] for o in body["orders"])

    stats = client.get("/api/orders/stats", headers=admin_headers).json()["stats"]
    assert stats == {
        "totalOrders": 2,
        "delivered": 0,
        "cancelled": 0,
        "pending": 0,
        "picked": 1,
        "inProcess": 1,
    }


def test_booking_takes_name_and_price_from_service(client, db, user_headers):
    service = Service(name="Dry Clean", description="Delicates", price=250.0)
    db.add(service)
    db.commit()

    response = client.post(
        "/api/bookings",
        json={"serviceId": service.id, "pickupDate": 1717232400000, "pickupTime": "10:00"},
        headers=user_headers,
    )

    assert response.status_code == 201
    booked = response.json()["order"]
    assert booked["serviceName"] == "Dry Clean"
    assert booked["amount"] == 250.0
    assert booked["address"] == "12 MG Road"
    assert booked["status"] == "pending"

    listing = client.get("/api/bookings/user", headers=user_headers).json()
    assert listing["count"] == 1


def test_booking_unknown_service(client, user_headers):
    response = client.post(
        "/api/bookings",
        json={"serviceId": "nope", "pickupDate": "2024-06-01", "pickupTime": "10:00"},
        headers=user_headers,
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Service not found"


def test_admin_booking_listing_and_status(client, order, admin_headers):
    row = order()

    listing = client.get("/api/bookings/all", headers=admin_headers).json()
    assert listing["count"] == 1

    response = client.put(f"/api/bookings/{row.id}", json={"status": "picked"}, headers=admin_headers)
    assert response.json()["message"] == "Order status updated"
    assert response.json()["order"]["status"] == "picked"


def test_order_routes_are_per_user(client, make_user, order):
    other = make_user(phone_number="9111111111")
    order()

    body = client.get("/api/orders", headers=auth_header(create_access_token(other.id))).json()
    assert body["orders"] == []
    assert body["stats"]["totalOrders"] == 0
