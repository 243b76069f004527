"""
Unit tests for flight planning helpers.

Tests:
- Grid generation over a polygon's bounding box
- Greedy nearest-neighbour route ordering
- Flight time estimates per waypoint action
- Coordinate text parsing and area centers
- Scheduling a mission from a plan
"""

import random
from datetime import datetime, timezone

import pytest

from survey_fleet.exceptions import PlanningValidationError
from survey_fleet.models.enums import DroneStatus, MissionStatus, WaypointAction
from survey_fleet.schemas.common import Coordinates
from survey_fleet.schemas.mission import MissionPlan
from survey_fleet.schemas.planning import Waypoint
from survey_fleet.services.planning import (
    area_center,
    build_waypoints,
    create_mission_from_plan,
    estimate_flight_time,
    generate_grid,
    parse_coordinates,
    path_length,
    renumber,
    reorder_greedy,
)

SQUARE = [
    Coordinates(lat=40.0, lng=-74.0),
    Coordinates(lat=40.0, lng=-73.9),
    Coordinates(lat=40.1, lng=-73.9),
    Coordinates(lat=40.1, lng=-74.0),
]


class TestGenerateGrid:
    """Test survey grid generation."""

    @pytest.mark.parametrize("steps", [1, 2, 4, 7])
    def test_grid_size(self, steps):
        grid = generate_grid(SQUARE, steps)
        assert len(grid) == (steps + 1) ** 2

    def test_grid_stays_inside_bounding_box(self):
        triangle = [
            Coordinates(lat=10.0, lng=20.0),
            Coordinates(lat=10.5, lng=21.0),
            Coordinates(lat=11.0, lng=20.2),
        ]
        for point in generate_grid(triangle, 5):
            assert 10.0 <= point.lat <= 11.0
            assert 20.0 <= point.lng <= 21.0

    def test_grid_includes_corners(self):
        grid = generate_grid(SQUARE, 4)
        assert grid[0].lat == pytest.approx(40.0)
        assert grid[0].lng == pytest.approx(-74.0)
        assert grid[-1].lat == pytest.approx(40.1)
        assert grid[-1].lng == pytest.approx(-73.9)

    def test_grid_requires_three_points(self):
        with pytest.raises(PlanningValidationError):
            generate_grid(SQUARE[:2], 4)

    def test_grid_rejects_zero_steps(self):
        with pytest.raises(PlanningValidationError):
            generate_grid(SQUARE, 0)


class TestReorderGreedy:
    """Test nearest-neighbour ordering."""

    def test_short_inputs_unchanged(self):
        points = SQUARE[:2]
        assert reorder_greedy(points) == points
        assert reorder_greedy([]) == []

    def test_is_permutation_keeping_first_point(self):
        rng = random.Random(42)
        points = [Coordinates(lat=rng.uniform(40, 41), lng=rng.uniform(-74, -73)) for _ in range(25)]
        ordered = reorder_greedy(points)

        assert ordered[0] == points[0]
        assert len(ordered) == len(points)
        assert sorted((p.lat, p.lng) for p in ordered) == sorted((p.lat, p.lng) for p in points)

    def test_does_not_lengthen_zigzag_route(self):
        points = [
            Coordinates(lat=0.0, lng=0.0),
            Coordinates(lat=0.0, lng=3.0),
            Coordinates(lat=0.0, lng=1.0),
            Coordinates(lat=0.0, lng=2.0),
        ]
        ordered = reorder_greedy(points)

        assert [p.lng for p in ordered] == [0.0, 1.0, 2.0, 3.0]
        assert path_length(ordered) <= path_length(points)

    def test_reorders_waypoints(self):
        waypoints = build_waypoints([SQUARE[0], SQUARE[2], SQUARE[1]])
        ordered = renumber(reorder_greedy(waypoints))
        assert [w.order for w in ordered] == [0, 1, 2]
        assert ordered[0].lat == SQUARE[0].lat


class TestEstimateFlightTime:
    """Test flight time estimates."""

    def test_three_photo_waypoints(self):
        waypoints = build_waypoints(SQUARE[:3], action=WaypointAction.PHOTO)
        assert estimate_flight_time(waypoints) == 3

    def test_empty_route(self):
        assert estimate_flight_time([]) == 0

    def test_action_costs(self):
        waypoints = [
            Waypoint(lat=0, lng=0, action=WaypointAction.SCAN),
            Waypoint(lat=0, lng=1, action=WaypointAction.VIDEO),
            Waypoint(lat=0, lng=2, action=WaypointAction.HOVER),
        ]
        # (3 * 30 + 90 + 60 + 45) / 60 = 4.75
        assert estimate_flight_time(waypoints) == 5


class TestParseCoordinates:
    """Test coordinate text parsing."""

    def test_parses_pairs_and_skips_blank_lines(self):
        text = "40.7128, -74.0060\n\n40.7580, -73.9855\n 40.7505,-73.9934 \n"
        coordinates = parse_coordinates(text)
        assert len(coordinates) == 3
        assert coordinates[1].lat == pytest.approx(40.758)

    def test_rejects_malformed_line(self):
        with pytest.raises(PlanningValidationError, match="line 2"):
            parse_coordinates("40.1, -74.0\nnot a pair\n40.2, -74.1")

    def test_rejects_out_of_range(self):
        with pytest.raises(PlanningValidationError):
            parse_coordinates("95, 0\n40, 0\n41, 0")

    def test_requires_three_pairs(self):
        with pytest.raises(PlanningValidationError):
            parse_coordinates("40.1, -74.0\n40.2, -74.1")

    def test_area_center(self):
        center = area_center(SQUARE)
        assert center.lat == pytest.approx(40.05)
        assert center.lng == pytest.approx(-73.95)


class TestCreateMissionFromPlan:
    """Test scheduling missions from plans."""

    def _plan(self, drone_id="D001", coordinates=None):
        return MissionPlan(
            name="Bridge Inspection",
            drone_id=drone_id,
            coordinates=SQUARE if coordinates is None else coordinates,
            start_time=datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc),
            estimated_duration=45,
        )

    async def test_schedules_mission(self, services):
        mission_id = await create_mission_from_plan(self._plan(), services.drones, services.missions)

        mission = await services.missions.get_by_id(mission_id)
        assert mission.status == MissionStatus.SCHEDULED
        assert mission.progress == 0
        assert mission.drone_name == "Surveyor Alpha"
        assert mission.start_time == "2024-03-01T09:00:00.000Z"
        assert mission.estimated_end_time == "2024-03-01T09:45:00.000Z"

    async def test_rejects_small_polygon_before_touching_repositories(self, services, mock_store):
        before = len(mock_store.snapshot("missions"))
        with pytest.raises(PlanningValidationError):
            await create_mission_from_plan(self._plan(coordinates=SQUARE[:2]), services.drones, services.missions)
        assert len(mock_store.snapshot("missions")) == before

    async def test_rejects_unknown_drone(self, services):
        with pytest.raises(PlanningValidationError, match="not found"):
            await create_mission_from_plan(self._plan(drone_id="D999"), services.drones, services.missions)

    async def test_rejects_busy_drone(self, services):
        drone = await services.drones.get_by_id("D002")
        assert drone.status == DroneStatus.IN_MISSION
        with pytest.raises(PlanningValidationError, match="not available"):
            await create_mission_from_plan(self._plan(drone_id="D002"), services.drones, services.missions)
