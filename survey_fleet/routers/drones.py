from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from survey_fleet.config.settings import FleetSettings
from survey_fleet.dependencies import get_drones, get_settings
from survey_fleet.models.enums import DroneAction, DroneStatus
from survey_fleet.repositories.drones import DroneRepository
from survey_fleet.schemas.dashboard import MaintenanceInfo
from survey_fleet.schemas.drone import Drone, DroneActionResult, DroneCreate, DroneUpdate
from survey_fleet.services.dashboard import maintenance_status
from survey_fleet.services.lifecycle import apply_drone_action

router = APIRouter(tags=["drones"])


async def _get_or_404(drones: DroneRepository, drone_id: str) -> Drone:
    drone = await drones.get_by_id(drone_id)
    if drone is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Drone not found"
        )
    return drone


@router.get("/drones", response_model=List[Drone])
async def list_drones(
    status: Optional[DroneStatus] = None,
    drones: DroneRepository = Depends(get_drones),
):
    if status:
        return await drones.get_by_status(status)
    return await drones.get_all()


@router.post("/drones", response_model=Drone, status_code=status.HTTP_201_CREATED)
async def register_drone(drone: DroneCreate, drones: DroneRepository = Depends(get_drones)):
    drone_id = await drones.add(drone)
    return await _get_or_404(drones, drone_id)


@router.get("/drones/{drone_id}", response_model=Drone)
async def get_drone(drone_id: str, drones: DroneRepository = Depends(get_drones)):
    return await _get_or_404(drones, drone_id)


@router.patch("/drones/{drone_id}", response_model=Drone)
async def update_drone(
    drone_id: str,
    updates: DroneUpdate,
    drones: DroneRepository = Depends(get_drones),
):
    await _get_or_404(drones, drone_id)
    await drones.update(drone_id, updates)
    return await _get_or_404(drones, drone_id)


@router.get("/drones/{drone_id}/maintenance", response_model=MaintenanceInfo)
async def get_maintenance_status(drone_id: str, drones: DroneRepository = Depends(get_drones)):
    drone = await _get_or_404(drones, drone_id)
    return maintenance_status(drone, date.today())


@router.post("/drones/{drone_id}/actions/{action}", response_model=DroneActionResult)
async def drone_action(
    drone_id: str,
    action: DroneAction,
    drones: DroneRepository = Depends(get_drones),
    settings: FleetSettings = Depends(get_settings),
):
    drone, changed = await apply_drone_action(
        drones, drone_id, action, strict=settings.STRICT_DRONE_TRANSITIONS
    )
    if drone is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Drone not found"
        )
    return DroneActionResult(changed=changed, drone=drone)
