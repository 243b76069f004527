"""Fleet-wide aggregates for the dashboard, maintenance and report views."""

import math
from datetime import date
from typing import List, Optional, Sequence

from survey_fleet.models.enums import DroneStatus, MissionStatus
from survey_fleet.schemas.dashboard import Alert, FleetSummary, MaintenanceInfo, ReportSummary
from survey_fleet.schemas.drone import Drone
from survey_fleet.schemas.mission import Mission
from survey_fleet.schemas.report import FlightStats, SurveyReport

LOW_BATTERY_THRESHOLD = 20
HIGH_WIND_THRESHOLD = 10
MAINTENANCE_DUE_SOON_DAYS = 7


def _round(value: float) -> int:
    # half up, not banker's rounding
    return int(math.floor(value + 0.5))


def _count(items: Sequence, status) -> int:
    return sum(1 for item in items if item.status == status)


def is_critical(drone: Drone) -> bool:
    return drone.battery < LOW_BATTERY_THRESHOLD or drone.status == DroneStatus.MAINTENANCE


def fleet_summary(drones: Sequence[Drone], missions: Sequence[Mission]) -> FleetSummary:
    average_battery = _round(sum(d.battery for d in drones) / len(drones)) if drones else 0
    return FleetSummary(
        total_drones=len(drones),
        active_missions=_count(missions, MissionStatus.IN_PROGRESS),
        scheduled_missions=_count(missions, MissionStatus.SCHEDULED),
        completed_missions=_count(missions, MissionStatus.COMPLETED),
        available_drones=_count(drones, DroneStatus.AVAILABLE),
        drones_in_mission=_count(drones, DroneStatus.IN_MISSION),
        drones_charging=_count(drones, DroneStatus.CHARGING),
        drones_maintenance=_count(drones, DroneStatus.MAINTENANCE),
        average_battery=average_battery,
        total_flight_hours=_round(sum(d.total_flight_time for d in drones)),
        critical_alerts=sum(1 for d in drones if is_critical(d)),
    )


def fleet_alerts(drones: Sequence[Drone], missions: Sequence[Mission]) -> List[Alert]:
    alerts = []
    for drone in drones:
        if drone.battery < LOW_BATTERY_THRESHOLD:
            alerts.append(Alert(
                kind="low-battery",
                severity="critical",
                message=f"{drone.name} battery at {_round(drone.battery)}%",
                drone_id=drone.id,
            ))
    for drone in drones:
        if drone.status == DroneStatus.MAINTENANCE:
            alerts.append(Alert(
                kind="maintenance",
                severity="warning",
                message=f"{drone.name} is in maintenance",
                drone_id=drone.id,
            ))
    for mission in missions:
        wind = mission.weather_conditions.wind_speed
        if mission.status == MissionStatus.IN_PROGRESS and wind > HIGH_WIND_THRESHOLD:
            alerts.append(Alert(
                kind="high-wind",
                severity="warning",
                message=f"High wind ({wind} m/s) on mission {mission.name}",
                drone_id=mission.drone_id,
                mission_id=mission.id,
            ))
    return alerts


def maintenance_status(drone: Drone, today: Optional[date] = None) -> MaintenanceInfo:
    """Classify a drone's next maintenance date relative to ``today``.

    Drones without a parseable ``nextMaintenance`` date are reported as good.
    """
    today = today or date.today()
    try:
        next_date = date.fromisoformat((drone.next_maintenance or "")[:10])
    except ValueError:
        return MaintenanceInfo(drone_id=drone.id, status="good")

    days = (next_date - today).days
    if days <= 0:
        status = "overdue"
    elif days <= MAINTENANCE_DUE_SOON_DAYS:
        status = "due soon"
    else:
        status = "good"
    return MaintenanceInfo(drone_id=drone.id, status=status, days_until_maintenance=days)


def report_summary(
    drones: Sequence[Drone],
    flight_stats: Sequence[FlightStats],
    surveys: Sequence[SurveyReport],
) -> ReportSummary:
    efficiency = sum(s.efficiency for s in flight_stats) / len(flight_stats) if flight_stats else 0
    return ReportSummary(
        total_surveys=len(surveys),
        total_flight_hours=_round(sum(d.total_flight_time for d in drones)),
        total_distance=_round(sum(s.distance for s in flight_stats)),
        average_efficiency=_round(efficiency),
        data_points_collected=sum(s.data_points for s in surveys),
        images_captured=sum(s.images for s in surveys),
    )
