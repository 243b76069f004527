from typing import Optional

from survey_fleet.schemas.common import CamelModel


class FleetSummary(CamelModel):
    total_drones: int
    active_missions: int
    scheduled_missions: int
    completed_missions: int
    available_drones: int
    drones_in_mission: int
    drones_charging: int
    drones_maintenance: int
    average_battery: int
    total_flight_hours: int
    critical_alerts: int


class Alert(CamelModel):
    kind: str
    severity: str
    message: str
    drone_id: Optional[str] = None
    mission_id: Optional[str] = None


class MaintenanceInfo(CamelModel):
    drone_id: str
    status: str
    days_until_maintenance: Optional[int] = None


class ReportSummary(CamelModel):
    total_surveys: int
    total_flight_hours: int
    total_distance: int
    average_efficiency: int
    data_points_collected: int
    images_captured: int
