"""
Mission and drone status transitions.

Mission state machine:

    scheduled   --start-->  in-progress
    in-progress --pause-->  paused
    paused      --resume--> in-progress
    in-progress --abort-->  aborted
    in-progress --progress>=100--> completed   (MissionRepository.update_progress)

Any other (status, action) pair is a no-op. Drone actions are operator driven
and permissive unless strict transitions are enabled.
"""

import logging
from datetime import datetime
from typing import Dict, FrozenSet, Optional, Tuple

from survey_fleet.models.enums import DroneAction, DroneStatus, MissionAction, MissionStatus
from survey_fleet.repositories.drones import DroneRepository
from survey_fleet.repositories.missions import MissionRepository
from survey_fleet.schemas.drone import Drone
from survey_fleet.schemas.mission import Mission
from survey_fleet.utils.clock import to_iso

logger = logging.getLogger(__name__)

MISSION_TRANSITIONS: Dict[MissionAction, Tuple[FrozenSet[MissionStatus], MissionStatus]] = {
    MissionAction.START: (frozenset({MissionStatus.SCHEDULED}), MissionStatus.IN_PROGRESS),
    MissionAction.PAUSE: (frozenset({MissionStatus.IN_PROGRESS}), MissionStatus.PAUSED),
    MissionAction.RESUME: (frozenset({MissionStatus.PAUSED}), MissionStatus.IN_PROGRESS),
    MissionAction.ABORT: (frozenset({MissionStatus.IN_PROGRESS}), MissionStatus.ABORTED),
}

TERMINAL_MISSION_STATUSES = frozenset({MissionStatus.COMPLETED, MissionStatus.ABORTED})

DRONE_TRANSITIONS: Dict[DroneAction, Tuple[Optional[FrozenSet[DroneStatus]], DroneStatus]] = {
    DroneAction.DEPLOY: (frozenset({DroneStatus.AVAILABLE}), DroneStatus.IN_MISSION),
    DroneAction.PAUSE: (frozenset({DroneStatus.IN_MISSION}), DroneStatus.AVAILABLE),
    DroneAction.STOP: (frozenset({DroneStatus.IN_MISSION}), DroneStatus.AVAILABLE),
    DroneAction.CHARGE: (None, DroneStatus.CHARGING),
    DroneAction.MAINTENANCE: (None, DroneStatus.MAINTENANCE),
}


def next_mission_status(current: MissionStatus, action: MissionAction) -> Optional[MissionStatus]:
    """Target status for ``action`` from ``current``, or None when not allowed."""
    sources, target = MISSION_TRANSITIONS[MissionAction(action)]
    if MissionStatus(current) not in sources:
        return None
    return target


def mission_action_updates(
    mission: Mission, action: MissionAction, now: Optional[datetime] = None
) -> Optional[dict]:
    """Document fields to write for ``action``, or None for a no-op."""
    action = MissionAction(action)
    target = next_mission_status(mission.status, action)
    if target is None:
        return None

    updates = {"status": target.value}
    if action == MissionAction.START:
        updates["startTime"] = to_iso(now)
        updates["progress"] = 0
    elif action == MissionAction.ABORT:
        updates["actualEndTime"] = to_iso(now)
    return updates


def next_drone_status(
    current: DroneStatus, action: DroneAction, strict: bool = False
) -> Optional[DroneStatus]:
    sources, target = DRONE_TRANSITIONS[DroneAction(action)]
    if strict and sources is not None and DroneStatus(current) not in sources:
        return None
    return target


async def apply_mission_action(
    missions: MissionRepository, mission_id: str, action: MissionAction
) -> Tuple[Optional[Mission], bool]:
    """Apply ``action`` to a mission.

    Returns ``(mission, changed)``; mission is None when it does not exist.
    Disallowed actions leave the mission untouched and report ``changed=False``.
    """
    mission = await missions.get_by_id(mission_id)
    if mission is None:
        return None, False

    updates = mission_action_updates(mission, action)
    if updates is None:
        logger.info("Ignoring %s for mission %s in state %s", MissionAction(action).value, mission_id, mission.status.value)
        return mission, False

    await missions.update(mission_id, updates)
    logger.info("Mission %s: %s -> %s", mission_id, mission.status.value, updates["status"])
    return Mission.model_validate({**mission.to_document(), **updates}), True


async def apply_drone_action(
    drones: DroneRepository, drone_id: str, action: DroneAction, strict: bool = False
) -> Tuple[Optional[Drone], bool]:
    """Apply an operator action to a drone; returns ``(drone, changed)``."""
    drone = await drones.get_by_id(drone_id)
    if drone is None:
        return None, False

    target = next_drone_status(drone.status, action, strict=strict)
    if target is None:
        logger.info("Ignoring %s for drone %s in state %s", DroneAction(action).value, drone_id, drone.status.value)
        return drone, False

    await drones.update(drone_id, {"status": target.value})
    logger.info("Drone %s: %s -> %s", drone_id, drone.status.value, target.value)
    return drone.model_copy(update={"status": target}), True
