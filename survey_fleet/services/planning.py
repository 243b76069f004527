"""
Flight planning helpers: survey grids, route ordering and flight-time estimates.

Points are anything with ``lat`` and ``lng`` attributes (``Coordinates`` or
``Waypoint``). Distances are Euclidean in raw degrees, which is good enough
for ordering points inside one survey area.
"""

import logging
import math
from datetime import timedelta
from typing import Iterable, List, Optional, Sequence, TypeVar

from survey_fleet.exceptions import PlanningValidationError
from survey_fleet.models.enums import DroneStatus, MissionStatus, WaypointAction
from survey_fleet.repositories.drones import DroneRepository
from survey_fleet.repositories.missions import MissionRepository
from survey_fleet.schemas.common import Coordinates
from survey_fleet.schemas.mission import MissionCreate, MissionPlan, WeatherConditions
from survey_fleet.schemas.planning import Waypoint
from survey_fleet.utils.clock import to_iso

logger = logging.getLogger(__name__)

P = TypeVar("P")

MIN_POLYGON_POINTS = 3
SECONDS_PER_WAYPOINT = 30
ACTION_SECONDS = {
    WaypointAction.PHOTO: 15,
    WaypointAction.HOVER: 45,
    WaypointAction.VIDEO: 60,
    WaypointAction.SCAN: 90,
}
DEFAULT_ACTION_SECONDS = 15


def _require_polygon(points: Sequence) -> None:
    if len(points) < MIN_POLYGON_POINTS:
        raise PlanningValidationError(
            f"Survey area needs at least {MIN_POLYGON_POINTS} points, got {len(points)}"
        )


def bounding_box(points: Sequence) -> tuple:
    """(min_lat, max_lat, min_lng, max_lng) of the points."""
    lats = [point.lat for point in points]
    lngs = [point.lng for point in points]
    return min(lats), max(lats), min(lngs), max(lngs)


def generate_grid(polygon: Sequence, steps: int = 4) -> List[Coordinates]:
    """(steps + 1)² evenly spaced points over the polygon's bounding box.

    Only the bounding box is used; points may fall outside a concave or
    rotated polygon.
    """
    _require_polygon(polygon)
    if steps < 1:
        raise PlanningValidationError("Grid needs at least one step")

    min_lat, max_lat, min_lng, max_lng = bounding_box(polygon)
    grid = []
    for i in range(steps + 1):
        for j in range(steps + 1):
            grid.append(Coordinates(
                lat=min_lat + (max_lat - min_lat) * (i / steps),
                lng=min_lng + (max_lng - min_lng) * (j / steps),
            ))
    logger.debug("Generated %d grid points over %d-point polygon", len(grid), len(polygon))
    return grid


def _distance(a, b) -> float:
    return math.hypot(a.lat - b.lat, a.lng - b.lng)


def path_length(points: Sequence) -> float:
    return sum(_distance(a, b) for a, b in zip(points, points[1:]))


def reorder_greedy(points: Sequence[P]) -> List[P]:
    """Nearest-neighbour ordering starting from the first point.

    Locally greedy, not an optimal tour. Fewer than three points are
    returned as given.
    """
    if len(points) < 3:
        return list(points)

    ordered = [points[0]]
    remaining = list(points[1:])
    while remaining:
        current = ordered[-1]
        nearest_index = min(range(len(remaining)), key=lambda index: _distance(current, remaining[index]))
        ordered.append(remaining.pop(nearest_index))
    return ordered


def estimate_flight_time(waypoints: Iterable[Waypoint]) -> int:
    """Minutes: 30 s per waypoint plus the time of each waypoint's action, rounded up."""
    waypoints = list(waypoints)
    if not waypoints:
        return 0
    action_time = sum(ACTION_SECONDS.get(waypoint.action, DEFAULT_ACTION_SECONDS) for waypoint in waypoints)
    return math.ceil((SECONDS_PER_WAYPOINT * len(waypoints) + action_time) / 60)


def build_waypoints(
    points: Sequence,
    action: WaypointAction = WaypointAction.PHOTO,
    altitude: float = 50,
) -> List[Waypoint]:
    return [
        Waypoint(lat=point.lat, lng=point.lng, order=index, altitude=altitude, action=action)
        for index, point in enumerate(points)
    ]


def renumber(waypoints: Sequence[Waypoint]) -> List[Waypoint]:
    return [waypoint.model_copy(update={"order": index}) for index, waypoint in enumerate(waypoints)]


def parse_coordinates(text: str) -> List[Coordinates]:
    """Parse one ``lat, lng`` pair per line; blank lines are skipped."""
    coordinates = []
    for number, line in enumerate(text.strip().splitlines(), start=1):
        if not line.strip():
            continue
        parts = [part.strip() for part in line.split(",")]
        try:
            lat, lng = float(parts[0]), float(parts[1])
        except (IndexError, ValueError):
            raise PlanningValidationError(
                f"Invalid coordinate format on line {number}. Please use: lat, lng (one pair per line)"
            ) from None
        if not (-90 <= lat <= 90 and -180 <= lng <= 180):
            raise PlanningValidationError(f"Coordinates out of range on line {number}: {lat}, {lng}")
        coordinates.append(Coordinates(lat=lat, lng=lng))

    if len(coordinates) < MIN_POLYGON_POINTS:
        raise PlanningValidationError("Please provide at least 3 coordinate pairs")
    return coordinates


def area_center(points: Sequence) -> Coordinates:
    if not points:
        raise PlanningValidationError("Cannot compute the center of an empty area")
    return Coordinates(
        lat=sum(point.lat for point in points) / len(points),
        lng=sum(point.lng for point in points) / len(points),
    )


async def create_mission_from_plan(
    plan: MissionPlan,
    drones: DroneRepository,
    missions: MissionRepository,
    weather: Optional[WeatherConditions] = None,
) -> str:
    """Validate a plan and store it as a scheduled mission; returns the new id."""
    _require_polygon(plan.coordinates)

    drone = await drones.get_by_id(plan.drone_id)
    if drone is None:
        raise PlanningValidationError(f"Drone {plan.drone_id} not found")
    if drone.status != DroneStatus.AVAILABLE:
        raise PlanningValidationError(
            f"Drone is not available (current status: {drone.status.value})"
        )

    mission = MissionCreate(
        name=plan.name,
        description=plan.description,
        drone_id=drone.id,
        drone_name=drone.name,
        status=MissionStatus.SCHEDULED,
        progress=0,
        start_time=to_iso(plan.start_time),
        estimated_end_time=to_iso(plan.start_time + timedelta(minutes=plan.estimated_duration)),
        survey_type=plan.survey_type,
        location=plan.location,
        coordinates=plan.coordinates,
        altitude=plan.altitude,
        flight_pattern=plan.flight_pattern,
        sensors=plan.sensors,
        overlap=plan.overlap,
        speed=plan.speed,
        estimated_duration=plan.estimated_duration,
        priority=plan.priority,
        weather_conditions=plan.weather_conditions or weather or WeatherConditions(),
    )
    mission_id = await missions.add(mission)
    logger.info("Scheduled mission %s (%s) on drone %s", mission_id, plan.name, drone.id)
    return mission_id
