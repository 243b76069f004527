from typing import List, Optional

from pydantic import Field

from survey_fleet.models.enums import WaypointAction
from survey_fleet.schemas.common import CamelModel, Coordinates


class Waypoint(CamelModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    order: int = 0
    altitude: float = Field(50, ge=0)
    action: WaypointAction = WaypointAction.PHOTO
    duration: Optional[float] = None


class GridRequest(CamelModel):
    polygon: List[Coordinates]
    steps: Optional[int] = Field(None, ge=1, le=50)
    altitude: float = Field(50, ge=0)
    action: WaypointAction = WaypointAction.PHOTO


class RouteRequest(CamelModel):
    waypoints: List[Waypoint]


class EstimateRequest(CamelModel):
    waypoints: List[Waypoint]


class FlightPlan(CamelModel):
    waypoints: List[Waypoint]
    estimated_minutes: int


class CoordinateText(CamelModel):
    text: str


class SurveyArea(CamelModel):
    coordinates: List[Coordinates]
    center: Coordinates
