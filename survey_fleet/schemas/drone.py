from typing import List, Optional

from pydantic import Field

from survey_fleet.models.enums import DroneStatus
from survey_fleet.schemas.common import CamelModel, Coordinates


class DroneSpecifications(CamelModel):
    max_flight_time: float = 0
    max_payload: float = 0
    operating_temperature: str = ""
    wind_resistance: str = ""


class DroneBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    model: str = ""
    status: DroneStatus = DroneStatus.AVAILABLE
    battery: float = Field(100, ge=0, le=100)
    location: str = ""
    last_mission: str = ""
    total_flight_time: float = Field(0, ge=0)
    coordinates: Coordinates = Field(default_factory=lambda: Coordinates(lat=0, lng=0))
    max_altitude: float = 0
    max_speed: float = 0
    sensors: List[str] = Field(default_factory=list)
    specifications: DroneSpecifications = Field(default_factory=DroneSpecifications)
    maintenance_status: str = "good"
    last_maintenance: Optional[str] = None
    next_maintenance: Optional[str] = None


class DroneCreate(DroneBase):
    pass


class Drone(DroneBase):
    id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class DroneUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    model: Optional[str] = None
    battery: Optional[float] = Field(None, ge=0, le=100)
    location: Optional[str] = None
    last_mission: Optional[str] = None
    total_flight_time: Optional[float] = Field(None, ge=0)
    coordinates: Optional[Coordinates] = None
    sensors: Optional[List[str]] = None
    maintenance_status: Optional[str] = None
    last_maintenance: Optional[str] = None
    next_maintenance: Optional[str] = None


class DroneActionResult(CamelModel):
    changed: bool
    drone: Drone
