from typing import List

from fastapi import APIRouter, Depends

from survey_fleet.dependencies import Services, get_services
from survey_fleet.schemas.dashboard import Alert, FleetSummary, ReportSummary
from survey_fleet.services.dashboard import fleet_alerts, fleet_summary, report_summary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=FleetSummary)
async def get_summary(services: Services = Depends(get_services)):
    return fleet_summary(await services.drones.get_all(), await services.missions.get_all())


@router.get("/alerts", response_model=List[Alert])
async def get_alerts(services: Services = Depends(get_services)):
    return fleet_alerts(await services.drones.get_all(), await services.missions.get_all())


@router.get("/reports", response_model=ReportSummary)
async def get_report_summary(services: Services = Depends(get_services)):
    return report_summary(
        await services.drones.get_all(),
        await services.flight_stats.get_all(),
        await services.surveys.get_all(),
    )
