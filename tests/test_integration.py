import csv
import io

import pytest
from fastapi.testclient import TestClient

from agrizone.main import create_app


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


def _zone(zone_id: str = "Z1", lat: float = -1.17, lon: float = 36.83, radius_km: float = 5.0) -> dict:
    return {
        "zone_id": zone_id,
        "name": f"Zone {zone_id}",
        "center": {"latitude": lat, "longitude": lon},
        "radius_km": radius_km,
        "owner_id": "EXP1",
    }


def _farmers() -> list[dict]:
    return [
        {"farmer_id": "F3", "point": {"latitude": -1.17, "longitude": 36.86}},
        {"farmer_id": "F1", "point": {"latitude": -1.17, "longitude": 36.84}},
        {"farmer_id": "F2", "point": {"latitude": -1.17, "longitude": 36.85}, "label": "Dairy"},
        {"farmer_id": "NOLOC"},
    ]


def _plan(api_client: TestClient) -> dict:
    response = api_client.post(
        "/api/routes/plan",
        json={
            "zone": _zone(),
            "farmers": _farmers(),
            "owner_id": "SUP1",
            "scheduled_date": "2026-03-02",
            "route_id": "R1",
        },
    )
    assert response.status_code == 200, response.text
    return response.json()


def test_health(api_client: TestClient):
    assert api_client.get("/api/health").json() == {"status": "ok"}
    assert api_client.get("/api/health/config").json()["default_average_speed_kmh"] == 40.0


def test_zone_validation_reports_overlap(api_client: TestClient):
    response = api_client.post(
        "/api/zones/validate",
        json={
            "center": {"latitude": -1.17, "longitude": 36.90},
            "radius_km": 10.0,
            "existing_zones": [_zone()],
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["is_valid"] is False
    assert body["overlaps"][0]["other_zone_id"] == "Z1"
    assert body["suggested_radius_km"] > 0


def test_zone_validation_rejects_bad_radius(api_client: TestClient):
    response = api_client.post(
        "/api/zones/validate",
        json={"center": {"latitude": -1.17, "longitude": 36.90}, "radius_km": 500.0},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == "radius_km"


def test_coordinate_validation(api_client: TestClient):
    response = api_client.post(
        "/api/coordinates/validate",
        json={"point": {"latitude": -1.2921, "longitude": 36.8219}, "precision": 2},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["failed_checks"] == ["precision"]
    assert body["formatted_latitude"] == "-1.29"


def test_membership_requires_location(api_client: TestClient):
    response = api_client.post("/api/zones/membership", json={"zone": _zone()})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "location_required"


def test_optimal_zone(api_client: TestClient):
    response = api_client.post(
        "/api/zones/optimal",
        json={
            "point": {"latitude": -1.17, "longitude": 36.84},
            "zones": [_zone("FAR", lon=37.5), _zone("Z1")],
        },
    )

    body = response.json()
    assert body["recommended"]["zone"]["zone_id"] == "Z1"
    assert body["within_bounds"] is True
    assert [item["zone"]["zone_id"] for item in body["alternatives"]] == ["FAR"]


def test_optimal_zone_without_zones_is_404(api_client: TestClient):
    response = api_client.post("/api/zones/optimal", json={"point": {"latitude": 0.0, "longitude": 0.0}})

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "no_zones"


def test_nearby_farmers(api_client: TestClient):
    response = api_client.post(
        "/api/zones/nearby-farmers",
        json={"point": {"latitude": -1.17, "longitude": 36.83}, "farmers": _farmers(), "max_distance_km": 2.5},
    )

    body = response.json()
    assert [item["farmer_id"] for item in body["farmers"]] == ["F1", "F2"]
    assert body["warnings"][0]["farmer_id"] == "NOLOC"


def test_zones_geojson(api_client: TestClient):
    response = api_client.post("/api/zones/geojson", json={"zones": [_zone()]})

    body = response.json()
    assert body["type"] == "FeatureCollection"
    assert body["features"][0]["geometry"]["type"] == "Polygon"


def test_optimize_route(api_client: TestClient):
    response = api_client.post(
        "/api/routes/optimize",
        json={"start": {"latitude": -1.17, "longitude": 36.83}, "stops": _farmers()},
    )

    body = response.json()
    assert response.status_code == 200
    assert [stop["farmer_id"] for stop in body["stops"]] == ["F1", "F2", "F3"]
    assert body["excluded_farmer_ids"] == ["NOLOC"]
    assert body["warnings"][0]["code"] == "missing_location"
    assert body["start_leg_km"] > 0


def test_optimize_route_rejects_bad_speed(api_client: TestClient):
    response = api_client.post(
        "/api/routes/optimize",
        json={"start": {"latitude": -1.17, "longitude": 36.83}, "stops": _farmers(), "average_speed_kmh": -5},
    )

    assert response.status_code == 400


def test_plan_then_run_route(api_client: TestClient):
    planned = _plan(api_client)
    route = planned["route"]
    assert route["status"] == "PLANNED"
    assert planned["statistics"]["stop_count"] == 3

    started = api_client.post("/api/routes/status", json={"route": route, "status": "IN_PROGRESS"}).json()["route"]
    first_stop = started["stops"][0]["stop_id"]

    response = api_client.post(
        "/api/routes/stop-status",
        json={"route": started, "stop_id": first_stop, "status": "COMPLETED"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["route"]["stops"][0]["status"] == "COMPLETED"
    assert body["route"]["stops"][0]["completion_time"] is not None
    assert body["statistics"]["completed_stops"] == 1


def test_closed_route_transition_is_conflict(api_client: TestClient):
    route = _plan(api_client)["route"]
    route["status"] = "COMPLETED"

    response = api_client.post("/api/routes/status", json={"route": route, "status": "IN_PROGRESS"})

    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "closed"


def test_unknown_stop_is_404(api_client: TestClient):
    route = _plan(api_client)["route"]

    response = api_client.post(
        "/api/routes/stop-status",
        json={"route": route, "stop_id": "missing", "status": "ARRIVED"},
    )

    assert response.status_code == 404


def test_export_csv(api_client: TestClient):
    route = _plan(api_client)["route"]

    response = api_client.post("/api/routes/export.csv", json=route)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.DictReader(io.StringIO(response.text)))
    assert [row["farmer_id"] for row in rows] == ["F1", "F2", "F3"]


def test_zone_farmers(api_client: TestClient):
    farmers = _farmers() + [{"farmer_id": "FAR", "point": {"latitude": -1.17, "longitude": 37.2}}]

    response = api_client.post("/api/zones/farmers", json={"zone": _zone(), "farmers": farmers})

    body = response.json()
    assert response.status_code == 200
    assert body["zone_id"] == "Z1"
    assert sorted(item["farmer_id"] for item in body["farmers"]) == ["F1", "F2", "F3"]
    assert [w["code"] for w in body["warnings"]] == ["missing_location"]


def test_stop_status_records_notes(api_client: TestClient):
    route = _plan(api_client)["route"]
    started = api_client.post("/api/routes/status", json={"route": route, "status": "IN_PROGRESS"}).json()["route"]
    stop_id = started["stops"][1]["stop_id"]

    response = api_client.post(
        "/api/routes/stop-status",
        json={"route": started, "stop_id": stop_id, "status": "SKIPPED", "notes": "Gate locked"},
    )

    assert response.status_code == 200
    assert response.json()["route"]["stops"][1]["notes"] == "Gate locked"


def test_export_json(api_client: TestClient):
    route = _plan(api_client)["route"]

    response = api_client.post("/api/routes/export.json", json=route)

    body = response.json()
    assert body["route_id"] == "R1"
    assert [stop["farmer_id"] for stop in body["stops"]] == ["F1", "F2", "F3"]


def test_export_geojson(api_client: TestClient):
    route = _plan(api_client)["route"]

    response = api_client.post(
        "/api/routes/export.geojson",
        json={"route": route, "start": {"latitude": -1.17, "longitude": 36.83}},
    )

    features = response.json()["features"]
    assert features[0]["geometry"]["type"] == "LineString"
    assert len(features[0]["geometry"]["coordinates"]) == 4
    assert [feature["properties"]["farmer_id"] for feature in features[1:]] == ["F1", "F2", "F3"]
