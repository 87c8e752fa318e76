from fastapi.testclient import TestClient

from dormitory.enums.table_name import TableName
from dormitory.main import create_app

from conftest import MONTH, RecordingStore


def test_signin_returns_token_and_landing_view(client):
    response = client.post("/auth/signin", json={"username": "popa", "password": "popa"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["landing_view"] == "dashboard"
    assert data["user"]["role"] == "ADMIN"
    assert "password" not in data["user"]


def test_signin_with_wrong_password(client):
    response = client.post("/auth/signin", json={"username": "popa", "password": "nope"})

    assert response.status_code == 401


def test_buildings_require_a_token(client):
    assert client.get("/buildings").status_code == 401


def test_get_buildings_snapshot(client, admin_headers):
    response = client.get("/buildings", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["offline"] is False
    assert data["active_building_id"] == "1"
    assert data["current_month"] == MONTH
    floor = data["buildings"][0]["floors"][0]
    assert floor["display_name"] == "Top Floor"
    assert floor["rooms"][0]["capacity"] == 2


def test_offline_snapshot_when_store_is_unreachable():
    app = create_app(RecordingStore(fail_fetch=True))
    with TestClient(app) as client:
        token = client.post(
            "/auth/signin", json={"username": "popa", "password": "popa"}
        ).json()["data"]["access_token"]
        data = client.get("/buildings", headers={"Authorization": f"Bearer {token}"}).json()["data"]

    assert data["offline"] is True
    assert len(data["buildings"]) == 2


def test_add_resident_to_full_room_conflicts(client, admin_headers):
    response = client.post("/residents", json={"room_id": "r1", "name": "Dave"}, headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["message"] == "Room 101 is full"


def test_move_resident(client, admin_headers, store):
    response = client.post(
        "/residents/res1/move", json={"target_room_id": "r2"}, headers=admin_headers
    )

    assert response.status_code == 200
    assert [r["id"] for r in response.json()["data"]["residents"]] == ["res2", "res1"]
    assert store.rows(TableName.RESIDENTS)["res1"]["roomId"] == "r2"


def test_water_reader_records_water_only(client, water_headers):
    response = client.put(
        "/bills/water/units", json={"room_id": "r3", "units": 10}, headers=water_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["water"] == 180

    response = client.put(
        "/bills/electricity/units", json={"room_id": "r3", "units": 3}, headers=water_headers
    )
    assert response.status_code == 403


def test_meter_reader_cannot_manage_buildings(client, water_headers):
    assert client.post("/buildings", headers=water_headers).status_code == 403


def test_bill_for_unknown_room(client, admin_headers):
    response = client.put(
        "/bills/water/amount", json={"room_id": "nope", "value": 5}, headers=admin_headers
    )

    assert response.status_code == 404


def test_invalid_month_is_rejected(client, admin_headers):
    response = client.put("/bills/month", json={"month": "2024-1"}, headers=admin_headers)

    assert response.status_code == 422


def test_analytics(client, admin_headers):
    response = client.get(f"/analytics?building_id=1&month={MONTH}", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["occupied_rooms"] == 2
    assert data["total_water_cost"] == 180
    assert [a["room_number"] for a in data["zero_usage_alerts"]] == ["102"]
    assert data["zero_usage_alerts"][0]["utilities"] == ["water", "electricity"]


def test_analytics_for_unknown_building(client, admin_headers):
    response = client.get("/analytics?building_id=missing", headers=admin_headers)

    assert response.status_code == 404


def test_room_downgrade_conflicts(client, admin_headers):
    client.post("/residents", json={"room_id": "r2", "name": "Carol"}, headers=admin_headers)

    response = client.put(
        "/buildings/rooms/r2", json={"number": "102", "type": "SINGLE"}, headers=admin_headers
    )

    assert response.status_code == 409


def test_user_admin_routes(client, admin_headers):
    response = client.post(
        "/auth/users",
        json={"username": "volt", "password": "pw", "role": "ELECTRIC"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    user_id = response.json()["data"]["id"]

    signin = client.post("/auth/signin", json={"username": "volt", "password": "pw"})
    assert signin.json()["data"]["landing_view"] == "electricity-meter"

    assert client.delete(f"/auth/users/{user_id}", headers=admin_headers).status_code == 204
