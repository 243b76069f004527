from datetime import datetime
from typing import List, Optional

from pydantic import Field

from survey_fleet.models.enums import MissionStatus, Priority
from survey_fleet.schemas.common import CamelModel, Coordinates


class WeatherConditions(CamelModel):
    temperature: float = 0
    wind_speed: float = 0
    visibility: str = "unknown"
    precipitation: str = "none"


class MissionBase(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    drone_id: str
    drone_name: str = ""
    status: MissionStatus = MissionStatus.SCHEDULED
    progress: float = Field(0, ge=0, le=100)
    start_time: Optional[str] = None
    estimated_end_time: Optional[str] = None
    actual_end_time: Optional[str] = None
    survey_type: str = ""
    location: str = ""
    coordinates: List[Coordinates] = Field(default_factory=list)
    altitude: float = 50
    flight_pattern: str = ""
    sensors: List[str] = Field(default_factory=list)
    overlap: float = 70
    speed: float = 5
    data_collection_frequency: float = 1
    estimated_distance: float = 0
    estimated_duration: float = 30
    priority: Priority = Priority.MEDIUM
    weather_conditions: WeatherConditions = Field(default_factory=WeatherConditions)


class MissionCreate(MissionBase):
    pass


class Mission(MissionBase):
    id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MissionUpdate(CamelModel):
    """Editable mission fields. Status and progress change only through actions and progress updates."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    location: Optional[str] = None
    altitude: Optional[float] = None
    flight_pattern: Optional[str] = None
    sensors: Optional[List[str]] = None
    overlap: Optional[float] = None
    speed: Optional[float] = None
    priority: Optional[Priority] = None
    weather_conditions: Optional[WeatherConditions] = None


class MissionProgressUpdate(CamelModel):
    progress: float = Field(..., ge=0)


class MissionActionResult(CamelModel):
    changed: bool
    mission: Mission


class MissionPlan(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    drone_id: str
    survey_type: str = ""
    location: str = "TBD"
    coordinates: List[Coordinates] = Field(default_factory=list)
    altitude: float = Field(50, gt=0)
    overlap: float = Field(70, ge=0, le=100)
    flight_pattern: str = ""
    sensors: List[str] = Field(default_factory=list)
    speed: float = Field(5, gt=0)
    start_time: datetime
    estimated_duration: int = Field(30, gt=0)  # minutes
    priority: Priority = Priority.MEDIUM
    weather_conditions: Optional[WeatherConditions] = None
