import logging
import logging.handlers

import pytest
from httpx import ASGITransport, AsyncClient

from survey_fleet.main import create_app
from survey_fleet.middleware.logging import configure_logging

TEST_DRONE = {
    "name": "Survey Foxtrot",
    "model": "Skydio X10",
    "battery": 100,
    "location": "Base Station",
    "coordinates": {"lat": 40.71, "lng": -74.0},
    "sensors": ["RGB Camera"],
}

TEST_PLAN = {
    "name": "Riverbank Erosion Survey",
    "droneId": "D001",
    "surveyType": "mapping",
    "coordinates": [
        {"lat": 40.70, "lng": -74.02},
        {"lat": 40.70, "lng": -74.00},
        {"lat": 40.72, "lng": -74.00},
    ],
    "startTime": "2024-03-01T09:00:00Z",
    "estimatedDuration": 45,
}

SQUARE = [
    {"lat": 40.0, "lng": -74.0},
    {"lat": 40.0, "lng": -73.9},
    {"lat": 40.1, "lng": -73.9},
    {"lat": 40.1, "lng": -74.0},
]


@pytest.mark.asyncio
async def test_health_and_status(async_client: AsyncClient):
    response = await async_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert "X-Request-ID" in response.headers
    assert "X-Process-Time" in response.headers

    response = await async_client.get("/status")
    assert response.json() == {"isConnected": False, "backendName": "Mock"}


@pytest.mark.asyncio
async def test_request_id_is_echoed(async_client: AsyncClient):
    response = await async_client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


@pytest.mark.asyncio
async def test_drone_crud(async_client: AsyncClient):
    response = await async_client.get("/drones")
    assert response.status_code == 200
    assert len(response.json()) == 5

    response = await async_client.get("/drones", params={"status": "available"})
    assert [d["id"] for d in response.json()] == ["D001", "D004"]

    response = await async_client.post("/drones", json=TEST_DRONE)
    assert response.status_code == 201
    drone = response.json()
    assert drone["id"] == "D006"
    assert drone["status"] == "available"
    assert drone["maxAltitude"] == 0

    response = await async_client.patch(f"/drones/{drone['id']}", json={"battery": 55, "location": "Field 2"})
    assert response.status_code == 200
    assert response.json()["battery"] == 55
    assert response.json()["location"] == "Field 2"

    response = await async_client.get("/drones/D999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_drone_validation(async_client: AsyncClient):
    response = await async_client.post("/drones", json={**TEST_DRONE, "battery": 140})
    assert response.status_code == 422

    response = await async_client.patch("/drones/D001", json={"status": "in-mission"})
    assert response.status_code == 200
    assert response.json()["status"] == "available"


@pytest.mark.asyncio
async def test_drone_actions(async_client: AsyncClient):
    response = await async_client.post("/drones/D001/actions/charge")
    assert response.status_code == 200
    assert response.json()["changed"] is True
    assert response.json()["drone"]["status"] == "charging"

    response = await async_client.post("/drones/D001/actions/launch")
    assert response.status_code == 422

    response = await async_client.post("/drones/D999/actions/charge")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_drone_maintenance_status(async_client: AsyncClient):
    response = await async_client.get("/drones/D005/maintenance")
    assert response.status_code == 200
    assert response.json()["droneId"] == "D005"
    assert response.json()["status"] in {"overdue", "due soon", "good"}


@pytest.mark.asyncio
async def test_mission_flow(async_client: AsyncClient):
    response = await async_client.post("/missions", json=TEST_PLAN)
    assert response.status_code == 201
    mission = response.json()
    mission_id = mission["id"]
    assert mission["status"] == "scheduled"
    assert mission["droneName"] == "Surveyor Alpha"
    assert mission["estimatedEndTime"] == "2024-03-01T09:45:00.000Z"

    response = await async_client.get("/missions")
    assert response.json()[0]["id"] == mission_id

    response = await async_client.post(f"/missions/{mission_id}/actions/start")
    assert response.json()["changed"] is True
    assert response.json()["mission"]["status"] == "in-progress"

    response = await async_client.put(f"/missions/{mission_id}/progress", json={"progress": 40})
    assert response.json()["changed"] is True
    assert response.json()["mission"]["progress"] == 40

    response = await async_client.put(f"/missions/{mission_id}/progress", json={"progress": 20})
    assert response.json()["changed"] is False
    assert response.json()["mission"]["progress"] == 40

    response = await async_client.put(f"/missions/{mission_id}/progress", json={"progress": 100})
    mission = response.json()["mission"]
    assert mission["status"] == "completed"
    assert mission["actualEndTime"]

    response = await async_client.post(f"/missions/{mission_id}/actions/resume")
    assert response.status_code == 200
    assert response.json()["changed"] is False
    assert response.json()["mission"]["status"] == "completed"


@pytest.mark.asyncio
async def test_mission_plan_validation(async_client: AsyncClient):
    response = await async_client.post("/missions", json={**TEST_PLAN, "coordinates": TEST_PLAN["coordinates"][:2]})
    assert response.status_code == 400

    response = await async_client.post("/missions", json={**TEST_PLAN, "droneId": "D002"})
    assert response.status_code == 400
    assert "not available" in response.json()["detail"]

    response = await async_client.post("/missions", json={**TEST_PLAN, "droneId": "D999"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_mission_queries(async_client: AsyncClient):
    response = await async_client.get("/missions/active")
    assert {m["id"] for m in response.json()} == {"M001", "M003"}

    response = await async_client.get("/missions", params={"status": "paused"})
    assert [m["id"] for m in response.json()] == ["M004"]

    response = await async_client.patch("/missions/M003", json={"priority": "high", "altitude": 80})
    assert response.json()["priority"] == "high"
    assert response.json()["altitude"] == 80

    response = await async_client.get("/missions/M999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_surveys_and_stats(async_client: AsyncClient):
    response = await async_client.get("/surveys", params={"startDate": "2024-01-15", "endDate": "2024-01-15"})
    assert {s["date"] for s in response.json()} == {"2024-01-15"}

    response = await async_client.get("/surveys", params={"missionId": "M002"})
    assert [s["missionId"] for s in response.json()] == ["M002"]

    response = await async_client.post("/surveys", json={
        "missionId": "M001",
        "name": "Follow-up",
        "date": "2024-02-01",
        "dataPoints": 10,
    })
    assert response.status_code == 201
    assert response.json()["id"] == "S005"

    response = await async_client.post("/surveys", json={"missionId": "M001", "name": "Bad", "date": "Feb 1"})
    assert response.status_code == 422

    response = await async_client.get("/stats/flights")
    assert [s["month"] for s in response.json()] == ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]

    response = await async_client.post("/stats/flights", json={"month": "Jul", "flights": 12, "efficiency": 90})
    assert response.status_code == 201

    response = await async_client.get("/stats/organization")
    assert response.json()["totalDrones"] == 5


@pytest.mark.asyncio
async def test_patterns(async_client: AsyncClient):
    response = await async_client.get("/patterns")
    assert len(response.json()) == 4

    response = await async_client.post("/patterns", json={
        "name": "Lawnmower",
        "type": "grid",
        "parameters": {"spacing": 20},
        "bestFor": ["mapping"],
    })
    assert response.status_code == 201
    assert response.json()["id"] == "MP005"


@pytest.mark.asyncio
async def test_planning_endpoints(async_client: AsyncClient):
    response = await async_client.post("/planning/grid", json={"polygon": SQUARE, "steps": 2})
    assert response.status_code == 200
    plan = response.json()
    assert len(plan["waypoints"]) == 9
    assert plan["estimatedMinutes"] == 7

    response = await async_client.post("/planning/grid", json={"polygon": SQUARE})
    assert len(response.json()["waypoints"]) == 25

    response = await async_client.post("/planning/grid", json={"polygon": SQUARE[:2]})
    assert response.status_code == 400

    waypoints = [
        {"lat": 0, "lng": 0},
        {"lat": 0, "lng": 3},
        {"lat": 0, "lng": 1},
    ]
    response = await async_client.post("/planning/reorder", json={"waypoints": waypoints})
    assert [w["lng"] for w in response.json()["waypoints"]] == [0, 1, 3]
    assert [w["order"] for w in response.json()["waypoints"]] == [0, 1, 2]

    response = await async_client.post("/planning/estimate", json={"waypoints": waypoints})
    assert response.json()["estimatedMinutes"] == 3

    response = await async_client.post("/planning/parse", json={"text": "40.0, -74.0\n40.0, -73.9\n40.1, -73.9"})
    assert response.status_code == 200
    assert len(response.json()["coordinates"]) == 3

    response = await async_client.post("/planning/parse", json={"text": "garbage"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_dashboard(async_client: AsyncClient):
    response = await async_client.get("/dashboard/summary")
    assert response.json()["totalDrones"] == 5
    assert response.json()["criticalAlerts"] == 1

    response = await async_client.get("/dashboard/alerts")
    assert {a["kind"] for a in response.json()} == {"low-battery", "maintenance"}

    response = await async_client.get("/dashboard/reports")
    assert response.json()["imagesCaptured"] == 1330


@pytest.mark.asyncio
async def test_null_fields_in_patch_are_ignored(async_client: AsyncClient):
    response = await async_client.patch("/drones/D001", json={"name": None, "battery": 50})
    assert response.status_code == 200
    assert response.json()["name"] == "Surveyor Alpha"
    assert response.json()["battery"] == 50

    response = await async_client.patch("/missions/M001", json={"description": None})
    assert response.status_code == 200
    assert response.json()["description"]

    response = await async_client.get("/drones")
    assert response.status_code == 200
    assert len(response.json()) == 5

    response = await async_client.get("/missions")
    assert response.status_code == 200
    assert len(response.json()) == 4


@pytest.mark.asyncio
async def test_strict_persistence_returns_503(test_settings, mock_store, failing_handle):
    settings = test_settings.model_copy(update={"STRICT_PERSISTENCE": True})
    app = create_app(settings, mock_store=mock_store, store=failing_handle)

    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/drones")
            assert response.status_code == 503
            assert response.json()["detail"] == "get_all on 'drones' failed: database unreachable"

            response = await client.get("/status")
            assert response.json() == {"isConnected": True, "backendName": "PostgreSQL"}

            response = await client.get("/health")
            assert response.status_code == 200


def test_create_app_configures_logging(test_settings, tmp_path):
    log_file = tmp_path / "logs" / "fleet.log"
    settings = test_settings.model_copy(update={"LOG_FILE": str(log_file), "LOG_LEVEL": "WARNING"})
    try:
        create_app(settings)
        root = logging.getLogger()
        assert root.level == logging.WARNING
        file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert [h.baseFilename for h in file_handlers] == [str(log_file)]
        assert log_file.parent.is_dir()
    finally:
        configure_logging()
