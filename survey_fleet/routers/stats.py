from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from survey_fleet.dependencies import get_flight_stats, get_organization
from survey_fleet.repositories.reports import FlightStatsRepository, OrganizationStatsRepository
from survey_fleet.schemas.report import FlightStats, FlightStatsCreate, OrganizationStats

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/flights", response_model=List[FlightStats])
async def list_flight_stats(flight_stats: FlightStatsRepository = Depends(get_flight_stats)):
    return await flight_stats.get_all()


@router.post("/flights", response_model=FlightStats, status_code=status.HTTP_201_CREATED)
async def create_flight_stats(
    entry: FlightStatsCreate,
    flight_stats: FlightStatsRepository = Depends(get_flight_stats),
):
    entry_id = await flight_stats.add(entry)
    return await flight_stats.get_by_id(entry_id)


@router.get("/organization", response_model=OrganizationStats)
async def get_organization_stats(organization: OrganizationStatsRepository = Depends(get_organization)):
    stats = await organization.get()
    if stats is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Organization stats not found"
        )
    return stats
