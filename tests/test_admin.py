from evrecharge import models, seed_data

NEW_STATION = {
    "name": "Hitech Power Grid",
    "address": "Madhapur Main Road",
    "city": "Hyderabad",
    "country": "India",
    "latitude": 17.4483,
    "longitude": 78.3915,
    "mobile_number": "+91 40 2345 6789",
}


def test_admin_routes_require_login(client):
    assert client.get("/admin/users").status_code == 401


def test_admin_routes_reject_regular_users(client, user_headers):
    assert client.get("/admin/users", headers=user_headers).status_code == 403
    assert client.get("/admin/stations", headers=user_headers).status_code == 403
    assert client.post("/admin/seed", headers=user_headers).status_code == 403
    assert client.post("/admin/stations", json=NEW_STATION, headers=user_headers).status_code == 403


def test_list_users_hides_password_hashes(client, admin_headers, make_user):
    make_user("driver@example.com", full_name="Ravi Kumar")

    response = client.get("/admin/users", headers=admin_headers)
    assert response.status_code == 200
    users = response.json()
    assert {u["email"] for u in users} == {"admin@example.com", "driver@example.com"}
    assert all("password_hash" not in u for u in users)
    assert {u["role"] for u in users} == {"admin", "user"}


def test_create_station_generates_eight_slots_two_blocked(client, admin_headers):
    response = client.post("/admin/stations", json=NEW_STATION, headers=admin_headers)
    assert response.status_code == 201
    station = response.json()

    labels = [s["time"] for s in station["slots"]]
    assert labels == [
        "09:00 AM", "10:00 AM", "11:00 AM", "12:00 PM",
        "01:00 PM", "02:00 PM", "03:00 PM", "04:00 PM",
    ]
    assert len(set(labels)) == 8
    assert sum(not s["available"] for s in station["slots"]) == 2
    assert sum(s["available"] for s in station["slots"]) == 6


def test_create_station_applies_defaults(client, admin_headers):
    station = client.post("/admin/stations", json=NEW_STATION, headers=admin_headers).json()

    assert station["coordinates"] == {"lat": 17.4483, "lng": 78.3915}
    assert station["rating"] == 5
    assert station["review_count"] == 1
    assert station["amenities"] == ["Wi-Fi", "Restroom"]
    assert station["bunks"] == [{"id": "bunk-1", "name": "Bunk 1", "status": "available"}]
    assert station["image_url"] == "https://placehold.co/600x400.png"
    assert station["image_hint"] == "electric car"
    assert client.get(f"/stations/{station['id']}").status_code == 200


def test_create_station_rejects_blank_fields(client, db, admin_headers):
    response = client.post("/admin/stations", json={**NEW_STATION, "city": "   "}, headers=admin_headers)
    assert response.status_code == 422
    assert db.query(models.Station).count() == 0


def test_create_station_rejects_missing_coordinates(client, admin_headers):
    payload = dict(NEW_STATION)
    del payload["latitude"]
    assert client.post("/admin/stations", json=payload, headers=admin_headers).status_code == 422


def test_delete_station(client, admin_headers, make_station):
    station = make_station()

    response = client.delete(f"/admin/stations/{station.id}", headers=admin_headers)
    assert response.status_code == 200
    assert client.get(f"/stations/{station.id}").status_code == 404
    assert client.delete(f"/admin/stations/{station.id}", headers=admin_headers).status_code == 404


def test_seed_populates_empty_collection(client, admin_headers):
    response = client.post("/admin/seed", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["created"] == len(seed_data.STATIONS)

    stations = client.get("/admin/stations", headers=admin_headers).json()
    assert {s["id"] for s in stations} == {s["id"] for s in seed_data.STATIONS}
    berlin = client.get("/stations", params={"q": "berlin"}).json()
    assert [s["name"] for s in berlin] == ["Ionity Charging Hub - Alexanderplatz"]


def test_seed_refuses_when_stations_exist(client, db, admin_headers, make_station):
    make_station()

    response = client.post("/admin/seed", headers=admin_headers)
    assert response.status_code == 409
    assert "Seeding has been cancelled" in response.json()["detail"]
    assert db.query(models.Station).count() == 1


def test_seed_runs_only_once(client, db, admin_headers):
    assert client.post("/admin/seed", headers=admin_headers).status_code == 200
    assert client.post("/admin/seed", headers=admin_headers).status_code == 409
    assert db.query(models.Station).count() == len(seed_data.STATIONS)


def test_seed_fixture_slot_labels_are_unique():
    for station in seed_data.STATIONS:
        labels = [s["time"] for s in station["slots"]]
        assert len(labels) == len(set(labels)), station["id"]


def test_create_station_write_failure(client, db, admin_headers, failing_commits, caplog):
    failing_commits()

    response = client.post("/admin/stations", json=NEW_STATION, headers=admin_headers)
    assert response.status_code == 500
    assert response.json() == {"detail": "Could not add station."}
    assert "Error adding station Hitech Power Grid" in caplog.text
    assert db.query(models.Station).count() == 0


def test_delete_station_write_failure(client, admin_headers, make_station, failing_commits):
    station = make_station()
    failing_commits()

    response = client.delete(f"/admin/stations/{station.id}", headers=admin_headers)
    assert response.status_code == 500
    assert response.json() == {"detail": "Could not delete station."}
    assert client.get(f"/stations/{station.id}").status_code == 200


def test_seed_write_failure_adds_nothing_and_can_be_retried(client, db, admin_headers, failing_commits, monkeypatch):
    failing_commits()

    response = client.post("/admin/seed", headers=admin_headers)
    assert response.status_code == 500
    assert response.json() == {"detail": "Seeding failed. No stations were added."}
    assert db.query(models.Station).count() == 0

    monkeypatch.undo()
    assert client.post("/admin/seed", headers=admin_headers).status_code == 200
