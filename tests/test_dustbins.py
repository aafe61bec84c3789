import pytest

from models.dustbin import Dustbin


def create(client, **fields):
    body = {"latitude": 12.9, "longitude": 77.6}
    body.update(fields)
    resp = client.post("/api/dustbins", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_defaults_to_active(client):
    data = create(client, address="MG Road", reportedBy="alice")
    assert isinstance(data["id"], int)
    assert data["status"] == "active"
    assert data["latitude"] == 12.9
    assert data["longitude"] == 77.6
    assert data["address"] == "MG Road"
    assert data["description"] is None
    assert data["reportedBy"] == "alice"
    assert data["createdAt"] == data["updatedAt"]


def test_get_after_create_returns_same_row(client):
    created = create(client, description="Near the bus stop")
    resp = client.get(f"/api/dustbins/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created


@pytest.mark.parametrize(
    "body, details",
    [
        ({"latitude": 100, "longitude": 0}, "Latitude must be between -90 and 90"),
        ({"latitude": -90.5, "longitude": 0}, "Latitude must be between -90 and 90"),
        ({"latitude": 0, "longitude": 180.01}, "Longitude must be between -180 and 180"),
        ({"latitude": 0, "longitude": -200}, "Longitude must be between -180 and 180"),
        ({"latitude": "12.9", "longitude": 77.6}, "Latitude must be a valid number"),
        ({"latitude": True, "longitude": 77.6}, "Latitude must be a valid number"),
        ({"latitude": 12.9, "longitude": None}, "Longitude must be a valid number"),
        # both type checks run before either range check
        ({"latitude": 95, "longitude": "x"}, "Longitude must be a valid number"),
        ({"latitude": "x", "longitude": 500}, "Latitude must be a valid number"),
        ({"latitude": 95, "longitude": 500}, "Latitude must be between -90 and 90"),
        # integers too large for a float are out of range, not a server error
        ({"latitude": 10**400, "longitude": 0}, "Latitude must be between -90 and 90"),
        ({"latitude": 0, "longitude": -(10**400)}, "Longitude must be between -180 and 180"),
    ],
)
def test_create_rejects_bad_coordinates(client, body, details):
    resp = client.post("/api/dustbins", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid coordinates", "details": details}


def test_create_accepts_boundary_coordinates(client):
    data = create(client, latitude=-90, longitude=180)
    assert data["latitude"] == -90
    assert data["longitude"] == 180


@pytest.mark.parametrize("body", [{"latitude": 10}, {"latitude": "x"}, {"longitude": None}, {}])
def test_create_requires_both_coordinates(client, body):
    resp = client.post("/api/dustbins", json=body)
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "Missing required fields",
        "details": "latitude and longitude are required",
    }


def test_create_rejects_long_address_and_description(client):
    resp = client.post("/api/dustbins", json={"latitude": 1, "longitude": 1, "address": "a" * 501})
    assert resp.status_code == 400
    assert resp.json()["details"] == "Address must be less than 500 characters"

    resp = client.post("/api/dustbins", json={"latitude": 1, "longitude": 1, "description": "d" * 1001})
    assert resp.status_code == 400
    assert resp.json()["details"] == "Description must be less than 1000 characters"

    data = create(client, address="a" * 500, description="d" * 1000)
    assert len(data["address"]) == 500


def test_list_is_newest_first(client):
    ids = [create(client)["id"] for _ in range(3)]
    resp = client.get("/api/dustbins")
    assert resp.status_code == 200
    data = resp.json()
    assert data["count"] == 3
    assert [d["id"] for d in data["dustbins"]] == list(reversed(ids))


def test_list_filters_by_status(client):
    first = create(client)
    second = create(client)
    third = create(client)
    client.put(f"/api/dustbins/{second['id']}", json={"status": "full"})

    resp = client.get("/api/dustbins", params={"status": "active"})
    data = resp.json()
    assert data["count"] == 2
    assert all(d["status"] == "active" for d in data["dustbins"])
    assert [d["id"] for d in data["dustbins"]] == [third["id"], first["id"]]

    resp = client.get("/api/dustbins", params={"status": "full"})
    assert [d["id"] for d in resp.json()["dustbins"]] == [second["id"]]


def test_list_unknown_status_matches_nothing(client):
    create(client)
    resp = client.get("/api/dustbins", params={"status": "fullish"})
    assert resp.status_code == 200
    assert resp.json() == {"count": 0, "dustbins": []}


def test_get_missing_returns_404(client):
    resp = client.get("/api/dustbins/999")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Dustbin not found", "id": 999}


def test_partial_update_leaves_other_fields(client):
    created = create(client, description="old")
    resp = client.put(f"/api/dustbins/{created['id']}", json={"address": "New Street 1"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["address"] == "New Street 1"
    for field in ("latitude", "longitude", "status", "description", "reportedBy", "createdAt"):
        assert data[field] == created[field]
    assert data["updatedAt"] >= created["updatedAt"]


def test_update_status_and_coordinates(client):
    created = create(client)
    resp = client.put(
        f"/api/dustbins/{created['id']}",
        json={"status": "damaged", "latitude": -45.5, "longitude": 100.25},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "damaged"
    assert data["latitude"] == -45.5
    assert data["longitude"] == 100.25


def test_update_can_clear_address(client):
    created = create(client, address="somewhere")
    resp = client.put(f"/api/dustbins/{created['id']}", json={"address": None})
    assert resp.status_code == 200
    assert resp.json()["address"] is None


def test_update_rejects_invalid_status(client):
    created = create(client)
    resp = client.put(f"/api/dustbins/{created['id']}", json={"status": "fullish"})
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "Invalid status",
        "details": "Status must be one of: active, full, damaged, removed",
    }


@pytest.mark.parametrize(
    "body, details",
    [
        ({"latitude": 91}, "Latitude must be between -90 and 90"),
        ({"longitude": -181}, "Longitude must be between -180 and 180"),
        ({"latitude": None}, "Latitude must be a valid number"),
        ({"longitude": 10**400}, "Longitude must be between -180 and 180"),
    ],
)
def test_update_rejects_bad_coordinates(client, body, details):
    created = create(client)
    resp = client.put(f"/api/dustbins/{created['id']}", json=body)
    assert resp.status_code == 400
    assert resp.json()["details"] == details


def test_update_with_no_fields(client):
    created = create(client)
    resp = client.put(f"/api/dustbins/{created['id']}", json={})
    assert resp.status_code == 400
    assert resp.json()["error"] == "No fields to update"

    # fields that cannot be patched do not count
    resp = client.put(f"/api/dustbins/{created['id']}", json={"reportedBy": "bob"})
    assert resp.status_code == 400


@pytest.mark.parametrize(
    "kwargs",
    [
        {"json": {"address": "x"}},
        # the missing row wins over a bad or empty body
        {"json": {"status": "fullish"}},
        {"json": {"latitude": 100}},
        {"json": {}},
        {},
    ],
)
def test_update_missing_returns_404(client, kwargs):
    resp = client.put("/api/dustbins/999", **kwargs)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Dustbin not found", "id": 999}


def test_update_without_body_has_no_fields(client):
    created = create(client)
    resp = client.put(f"/api/dustbins/{created['id']}")
    assert resp.status_code == 400
    assert resp.json()["error"] == "No fields to update"


def test_delete_then_get_is_404(client, db):
    created = create(client)
    resp = client.delete(f"/api/dustbins/{created['id']}")
    assert resp.status_code == 204
    assert resp.content == b""

    assert client.get(f"/api/dustbins/{created['id']}").status_code == 404
    assert db.query(Dustbin).count() == 0


def test_delete_missing_returns_404(client):
    resp = client.delete("/api/dustbins/999")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Dustbin not found", "id": 999}


def test_non_integer_id_is_rejected(client):
    resp = client.get("/api/dustbins/abc")
    assert resp.status_code == 400


@pytest.mark.parametrize(
    "method, path, body, message",
    [
        ("get", "/api/dustbins", None, "Failed to fetch dustbins"),
        ("get", "/api/dustbins/1", None, "Failed to fetch dustbin"),
        ("post", "/api/dustbins", {"latitude": 1, "longitude": 2}, "Failed to create dustbin"),
        ("put", "/api/dustbins/1", {"address": "x"}, "Failed to update dustbin"),
        ("delete", "/api/dustbins/1", None, "Failed to delete dustbin"),
    ],
)
def test_database_failures_are_generic_500(client, broken_db, method, path, body, message):
    kwargs = {"json": body} if body is not None else {}
    resp = client.request(method.upper(), path, **kwargs)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Database error", "message": message}
