"""
Unit tests for dashboard aggregates.
"""

from datetime import date

import pytest

from survey_fleet.schemas.drone import Drone
from survey_fleet.services.dashboard import (
    fleet_alerts,
    fleet_summary,
    maintenance_status,
    report_summary,
)


async def test_fleet_summary_from_seed(services):
    summary = fleet_summary(await services.drones.get_all(), await services.missions.get_all())

    assert summary.total_drones == 5
    assert summary.active_missions == 1
    assert summary.scheduled_missions == 1
    assert summary.completed_missions == 1
    assert summary.available_drones == 2
    assert summary.drones_in_mission == 1
    assert summary.drones_charging == 1
    assert summary.drones_maintenance == 1
    assert summary.average_battery == 53
    assert summary.total_flight_hours == 264
    assert summary.critical_alerts == 1


def test_fleet_summary_empty():
    summary = fleet_summary([], [])
    assert summary.total_drones == 0
    assert summary.average_battery == 0


async def test_fleet_alerts(services):
    alerts = fleet_alerts(await services.drones.get_all(), await services.missions.get_all())
    assert [(a.kind, a.drone_id) for a in alerts] == [("low-battery", "D005"), ("maintenance", "D005")]


async def test_high_wind_alert_for_in_progress_missions(services):
    await services.missions.update("M001", {"weatherConditions": {"windSpeed": 14}})
    alerts = fleet_alerts([], await services.missions.get_all())
    assert [(a.kind, a.mission_id) for a in alerts] == [("high-wind", "M001")]


@pytest.mark.parametrize("next_maintenance, expected", [
    ("2024-02-01", "overdue"),
    ("2024-01-31", "overdue"),
    ("2024-02-05", "due soon"),
    ("2024-02-08", "due soon"),
    ("2024-02-09", "good"),
    (None, "good"),
    ("not a date", "good"),
])
def test_maintenance_status(next_maintenance, expected):
    drone = Drone(id="D100", name="Test", next_maintenance=next_maintenance)
    assert maintenance_status(drone, date(2024, 2, 1)).status == expected


async def test_report_summary(services):
    summary = report_summary(
        await services.drones.get_all(),
        await services.flight_stats.get_all(),
        await services.surveys.get_all(),
    )
    assert summary.total_surveys == 4
    assert summary.total_flight_hours == 264
    assert summary.total_distance == 5420
    assert summary.average_efficiency == 91
    assert summary.data_points_collected == 5920
    assert summary.images_captured == 1330
