from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from survey_fleet.dependencies import get_drones, get_missions
from survey_fleet.models.enums import MissionAction, MissionStatus
from survey_fleet.repositories.drones import DroneRepository
from survey_fleet.repositories.missions import MissionRepository
from survey_fleet.schemas.mission import (
    Mission,
    MissionActionResult,
    MissionPlan,
    MissionProgressUpdate,
    MissionUpdate,
)
from survey_fleet.services.lifecycle import apply_mission_action
from survey_fleet.services.planning import create_mission_from_plan

router = APIRouter(tags=["missions"])


async def _get_or_404(missions: MissionRepository, mission_id: str) -> Mission:
    mission = await missions.get_by_id(mission_id)
    if mission is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Mission not found"
        )
    return mission


@router.get("/missions", response_model=List[Mission])
async def list_missions(
    status: Optional[MissionStatus] = None,
    missions: MissionRepository = Depends(get_missions),
):
    if status:
        return await missions.get_by_status(status)
    return await missions.get_all()


@router.get("/missions/active", response_model=List[Mission])
async def list_active_missions(missions: MissionRepository = Depends(get_missions)):
    return await missions.get_active()


@router.post("/missions", response_model=Mission, status_code=status.HTTP_201_CREATED)
async def create_mission(
    plan: MissionPlan,
    drones: DroneRepository = Depends(get_drones),
    missions: MissionRepository = Depends(get_missions),
):
    # PlanningValidationError is mapped to 400 by the application
    mission_id = await create_mission_from_plan(plan, drones, missions)
    return await _get_or_404(missions, mission_id)


@router.get("/missions/{mission_id}", response_model=Mission)
async def get_mission(mission_id: str, missions: MissionRepository = Depends(get_missions)):
    return await _get_or_404(missions, mission_id)


@router.patch("/missions/{mission_id}", response_model=Mission)
async def update_mission(
    mission_id: str,
    updates: MissionUpdate,
    missions: MissionRepository = Depends(get_missions),
):
    await _get_or_404(missions, mission_id)
    await missions.update(mission_id, updates)
    return await _get_or_404(missions, mission_id)


@router.put("/missions/{mission_id}/progress", response_model=MissionActionResult)
async def update_mission_progress(
    mission_id: str,
    body: MissionProgressUpdate,
    missions: MissionRepository = Depends(get_missions),
):
    await _get_or_404(missions, mission_id)
    changed = await missions.update_progress(mission_id, body.progress)
    return MissionActionResult(changed=changed, mission=await _get_or_404(missions, mission_id))


@router.post("/missions/{mission_id}/actions/{action}", response_model=MissionActionResult)
async def mission_action(
    mission_id: str,
    action: MissionAction,
    missions: MissionRepository = Depends(get_missions),
):
    mission, changed = await apply_mission_action(missions, mission_id, action)
    if mission is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Mission not found"
        )
    return MissionActionResult(changed=changed, mission=mission)
