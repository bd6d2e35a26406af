import pytest

from laundry.models import Service

WASH = {"name": "Wash & Fold", "description": "Everyday laundry", "price": 99}


@pytest.fixture
def create_service(client, admin_headers):
    def _create(**overrides):
        response = client.post("/api/services", json={**WASH, **overrides}, headers=admin_headers)
        assert response.status_code == 201
        return response.json()["service"]

    return _create


def test_create_service_defaults(create_service):
    service = create_service()

    assert service["isActive"] is True
    assert service["estimatedDays"] == 2
    assert service["price"] == 99


def test_free_service_is_allowed(create_service):
    assert create_service(price=0)["price"] == 0


@pytest.mark.parametrize("field", ["name", "description", "price"])
def test_create_requires_fields(client, admin_headers, field):
    payload = {k: v for k, v in WASH.items() if k != field}

    response = client.post("/api/services", json=payload, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Please provide name, description, and price"


def test_negative_price_is_rejected(client, db, admin_headers):
    response = client.post("/api/services", json={**WASH, "price": -1}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Price cannot be negative"
    assert db.query(Service).count() == 0


def test_duplicate_name_is_rejected_even_when_inactive(client, db, admin_headers, create_service):
    created = create_service()
    client.patch(f"/api/services/{created['id']}/toggle", headers=admin_headers)

    response = client.post("/api/services", json=WASH, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Service with this name already exists"
    assert db.query(Service).count() == 1


def test_public_listing_shows_active_services_only(client, admin_headers, create_service):
    active = create_service()
    hidden = create_service(name="Ironing")
    client.delete(f"/api/services/{hidden['id']}", headers=admin_headers)

    public = client.get("/api/services").json()
    assert public["count"] == 1
    assert public["services"][0]["id"] == active["id"]

    everything = client.get("/api/services/all", headers=admin_headers).json()
    assert everything["count"] == 2

    # Soft deleted services stay readable by id
    assert client.get(f"/api/services/{hidden['id']}").json()["service"]["isActive"] is False


def test_update_applies_only_sent_fields(client, admin_headers, create_service):
    created = create_service(icon="shirt")

    response = client.put(
        f"/api/services/{created['id']}", json={"price": 149, "description": ""}, headers=admin_headers
    )

    updated = response.json()["service"]
    assert updated["price"] == 149
    assert updated["description"] == "Everyday laundry"
    assert updated["icon"] == "shirt"
    assert updated["name"] == "Wash & Fold"


def test_update_rejects_negative_price_and_taken_name(client, admin_headers, create_service):
    created = create_service()
    create_service(name="Ironing")

    negative = client.put(f"/api/services/{created['id']}", json={"price": -5}, headers=admin_headers)
    assert negative.status_code == 400

    taken = client.put(f"/api/services/{created['id']}", json={"name": "Ironing"}, headers=admin_headers)
    assert taken.json()["message"] == "Service with this name already exists"

    same = client.put(f"/api/services/{created['id']}", json={"name": "Wash & Fold"}, headers=admin_headers)
    assert same.status_code == 200


def test_toggle_flips_active_flag(client, admin_headers, create_service):
    created = create_service()

    off = client.patch(f"/api/services/{created['id']}/toggle", headers=admin_headers).json()
    assert off["message"] == "Service deactivated successfully"
    assert off["service"]["isActive"] is False

    on = client.patch(f"/api/services/{created['id']}/toggle", headers=admin_headers).json()
    assert on["message"] == "Service activated successfully"


def test_permanent_delete(client, db, admin_headers, create_service):
    created = create_service()

    response = client.delete(f"/api/services/{created['id']}/permanent", headers=admin_headers)

    assert response.status_code == 200
    assert db.query(Service).count() == 0
    assert client.get(f"/api/services/{created['id']}").status_code == 404


def test_unknown_service_is_not_found(client, admin_headers):
    assert client.get("/api/services/unknown").status_code == 404
    assert client.put("/api/services/unknown", json={"price": 1}, headers=admin_headers).status_code == 404
    assert client.delete("/api/services/unknown", headers=admin_headers).status_code == 404


def test_catalog_management_requires_admin(client, user_headers):
    assert client.post("/api/services", json=WASH, headers=user_headers).status_code == 403
    assert client.post("/api/services", json=WASH).status_code == 401
