from fastapi import APIRouter, Depends

from survey_fleet.config.settings import FleetSettings
from survey_fleet.dependencies import get_settings
from survey_fleet.schemas.planning import (
    CoordinateText,
    EstimateRequest,
    FlightPlan,
    GridRequest,
    RouteRequest,
    SurveyArea,
)
from survey_fleet.services import planning

router = APIRouter(prefix="/planning", tags=["planning"])


@router.post("/grid", response_model=FlightPlan)
async def generate_grid(request: GridRequest, settings: FleetSettings = Depends(get_settings)):
    points = planning.generate_grid(request.polygon, request.steps or settings.GRID_STEPS)
    waypoints = planning.build_waypoints(points, action=request.action, altitude=request.altitude)
    return FlightPlan(waypoints=waypoints, estimated_minutes=planning.estimate_flight_time(waypoints))


@router.post("/reorder", response_model=FlightPlan)
async def reorder_route(request: RouteRequest):
    waypoints = planning.renumber(planning.reorder_greedy(request.waypoints))
    return FlightPlan(waypoints=waypoints, estimated_minutes=planning.estimate_flight_time(waypoints))


@router.post("/estimate", response_model=FlightPlan)
async def estimate_route(request: EstimateRequest):
    return FlightPlan(
        waypoints=request.waypoints,
        estimated_minutes=planning.estimate_flight_time(request.waypoints),
    )


@router.post("/parse", response_model=SurveyArea)
async def parse_area(body: CoordinateText):
    coordinates = planning.parse_coordinates(body.text)
    return SurveyArea(coordinates=coordinates, center=planning.area_center(coordinates))
