from typing import Any, Dict, List, Optional

from pydantic import Field

from survey_fleet.models.enums import PatternType, SurveyStatus
from survey_fleet.schemas.common import CamelModel


class SurveyReportBase(CamelModel):
    mission_id: str
    name: str
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    duration: str = ""
    distance: str = ""
    area: str = ""
    drone: str = ""
    status: SurveyStatus = SurveyStatus.PROCESSING
    data_points: int = Field(0, ge=0)
    images: int = Field(0, ge=0)
    thermal_images: Optional[int] = None
    video_footage: Optional[str] = None
    coverage: str = ""
    accuracy: str = ""
    weather_conditions: str = ""
    anomalies_detected: int = Field(0, ge=0)
    report_url: Optional[str] = None


class SurveyReportCreate(SurveyReportBase):
    pass


class SurveyReport(SurveyReportBase):
    id: str
    created_at: Optional[str] = None


class FlightStatsBase(CamelModel):
    month: str
    flights: int = Field(0, ge=0)
    hours: float = Field(0, ge=0)
    distance: float = Field(0, ge=0)
    surveys: int = Field(0, ge=0)
    efficiency: float = Field(0, ge=0, le=100)


class FlightStatsCreate(FlightStatsBase):
    pass


class FlightStats(FlightStatsBase):
    id: str


class OrganizationStats(CamelModel):
    id: str
    total_drones: int = 0
    total_missions: int = 0
    completed_missions: int = 0
    total_surveys: int = 0
    total_flight_hours: float = 0
    total_distance: float = 0
    total_data_points: int = 0
    total_images: int = 0
    average_efficiency: float = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MissionPatternBase(CamelModel):
    name: str
    description: str = ""
    type: PatternType
    parameters: Dict[str, Any] = Field(default_factory=dict)
    efficiency: float = Field(0, ge=0, le=100)
    best_for: List[str] = Field(default_factory=list)


class MissionPatternCreate(MissionPatternBase):
    pass


class MissionPattern(MissionPatternBase):
    id: str
