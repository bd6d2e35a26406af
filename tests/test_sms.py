from datetime import datetime

import pytest
from sqlalchemy import event
from sqlalchemy.exc import DataError

from conftest import auth_header
from laundry.models import Sms
from laundry.security_utils import create_access_token


def message(sms_id, **overrides):
    item = {
        "id": sms_id,
        "address": "VM-LAUNDR",
        "body": f"Message {sms_id}",
        "date": 1700000000000 + int(sms_id) * 1000,
        "type": "inbox",
    }
    item.update(overrides)
    return item


def test_sync_single_message_then_skip_duplicate(client, db, user, user_headers):
    payload = {"userId": user.id, "smsData": message("1")}

    first = client.post("/api/sms/sync", json=payload, headers=user_headers)
    assert first.status_code == 201
    assert first.json()["data"]["smsId"] == "1"
    assert first.json()["data"]["date"].startswith("2023-11-14T22:13:21")

    second = client.post("/api/sms/sync", json=payload, headers=user_headers)
    assert second.status_code == 200
    assert second.json()["message"] == "SMS already synced"
    assert db.query(Sms).count() == 1


def test_sync_requires_fields(client, user, user_headers):
    response = client.post("/api/sms/sync", json={"userId": user.id}, headers=user_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "userId and smsData are required"


def test_sync_for_another_user_is_forbidden(client, make_user, user_headers):
    other = make_user(phone_number="9111111111")

    response = client.post(
        "/api/sms/sync", json={"userId": other.id, "smsData": message("1")}, headers=user_headers
    )

    assert response.status_code == 403


def test_batch_counts_synced_skipped_and_failed(client, db, user, user_headers):
    client.post("/api/sms/sync-batch", json={"userId": user.id, "smsData": [message("1"), message("2")]},
                headers=user_headers)
    assert db.query(Sms).count() == 2

    batch = [
        message("1"),
        message("2"),
        message("3"),
        message("4", date="2024-01-05T10:00:00Z"),
        message("5", type="draft"),
        message("6", date="not a date"),
        {"address": "no id", "body": "x", "date": 1, "type": "sent"},
    ]
    response = client.post("/api/sms/sync-batch", json={"userId": user.id, "smsData": batch}, headers=user_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["synced"] == 2
    assert data["skipped"] == 2
    assert data["errors"] == 3
    assert [e["smsId"] for e in data["errorDetails"]] == ["5", "6", None]
    # Row count grows by exactly the synced count
    assert db.query(Sms).count() == 4

    stored = db.query(Sms).filter(Sms.sms_id == "4").one()
    assert stored.date == datetime(2024, 1, 5, 10, 0, 0)


def test_batch_skips_repeats_inside_one_batch(client, db, user, user_headers):
    response = client.post(
        "/api/sms/sync-batch",
        json={"userId": user.id, "smsData": [message("7"), message("7")]},
        headers=user_headers,
    )

    assert response.json()["data"] == {"synced": 1, "skipped": 1, "errors": 0, "errorDetails": []}
    assert db.query(Sms).count() == 1


def test_batch_requires_list(client, user, user_headers):
    response = client.post(
        "/api/sms/sync-batch", json={"userId": user.id, "smsData": message("1")}, headers=user_headers
    )
    assert response.status_code == 400


def test_user_messages_filter_search_and_order(client, user, user_headers):
    batch = [
        message("1", body="Your order is picked"),
        message("2", type="sent", body="Thanks"),
        message("3", address="BANK", body="Balance low"),
    ]
    client.post("/api/sms/sync-batch", json={"userId": user.id, "smsData": batch}, headers=user_headers)

    response = client.get(f"/api/sms/user/{user.id}", headers=user_headers)
    data = response.json()["data"]
    assert [m["smsId"] for m in data["smsMessages"]] == ["3", "2", "1"]
    assert data["pagination"] == {"total": 3, "page": 1, "limit": 100, "pages": 1}

    response = client.get(f"/api/sms/user/{user.id}", params={"type": "sent"}, headers=user_headers)
    assert [m["smsId"] for m in response.json()["data"]["smsMessages"]] == ["2"]

    response = client.get(f"/api/sms/user/{user.id}", params={"search": "bank"}, headers=user_headers)
    assert [m["smsId"] for m in response.json()["data"]["smsMessages"]] == ["3"]


def test_user_cannot_read_other_users_messages(client, make_user, user_headers):
    other = make_user(phone_number="9111111111")
    response = client.get(f"/api/sms/user/{other.id}", headers=user_headers)
    assert response.status_code == 403


def test_admin_statistics_listing_and_delete(client, db, make_user, user, user_headers, admin_headers):
    other = make_user(phone_number="9111111111")
    client.post("/api/sms/sync-batch", json={"userId": user.id, "smsData": [message("1"), message("2", type="sent")]},
                headers=user_headers)
    client.post("/api/sms/sync", json={"userId": other.id, "smsData": message("1")},
                headers=auth_header(create_access_token(other.id)))

    stats = client.get("/api/sms/statistics", headers=admin_headers).json()["data"]
    assert stats == {"total": 3, "inbox": 2, "sent": 1, "users": 2}

    stats = client.get("/api/sms/statistics", params={"userId": user.id}, headers=admin_headers).json()["data"]
    assert stats == {"total": 2, "inbox": 1, "sent": 1, "users": None}

    listing = client.get("/api/sms/all", params={"userId": other.id}, headers=admin_headers).json()["data"]
    assert listing["pagination"]["total"] == 1
    assert listing["smsMessages"][0]["user"]["phoneNumber"] == "9111111111"

    assert client.get("/api/sms/all", headers=user_headers).status_code == 403

    response = client.delete(f"/api/sms/user/{user.id}", headers=admin_headers)
    assert response.json()["data"] == {"deletedCount": 2}
    assert db.query(Sms).count() == 1


@pytest.mark.parametrize("bad_date", ["9" * 400, 1e300, "275760-09-13T00:00:00"])
def test_batch_survives_out_of_range_date(client, db, user, user_headers, bad_date):
    batch = [message("1"), message("2", date=bad_date), message("3")]

    response = client.post("/api/sms/sync-batch", json={"userId": user.id, "smsData": batch}, headers=user_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["synced"] == 2
    assert data["errors"] == 1
    assert data["errorDetails"][0]["smsId"] == "2"
    assert db.query(Sms).count() == 2


@pytest.fixture
def reject_sms_id():
    """Make the database refuse one message the way an over-long column value would"""

    def _reject(mapper, connection, target):
        if target.sms_id == "rejected":
            raise DataError("INSERT INTO sms", {}, Exception("value too long for type character varying(255)"))

    event.listen(Sms, "before_insert", _reject)
    yield
    event.remove(Sms, "before_insert", _reject)


def test_batch_records_database_rejections_as_failed(client, db, user, user_headers, reject_sms_id):
    batch = [message("1"), message("2", id="rejected"), message("3")]

    response = client.post("/api/sms/sync-batch", json={"userId": user.id, "smsData": batch}, headers=user_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["synced"] == 2
    assert [e["smsId"] for e in data["errorDetails"]] == ["rejected"]
    assert {row.sms_id for row in db.query(Sms).all()} == {"1", "3"}
