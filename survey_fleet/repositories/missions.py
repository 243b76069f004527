import logging
from typing import List

from survey_fleet.models.enums import MissionStatus
from survey_fleet.repositories.base import Repository
from survey_fleet.schemas.mission import Mission
from survey_fleet.store import collections
from survey_fleet.utils.clock import to_iso

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = [MissionStatus.IN_PROGRESS.value, MissionStatus.SCHEDULED.value]


class MissionRepository(Repository[Mission]):
    collection = collections.MISSIONS
    model = Mission
    id_prefix = "M"
    order_by = ("createdAt", True)
    listen_interval = 5.0

    async def get_by_status(self, status: MissionStatus) -> List[Mission]:
        return await self.query(("status", "==", MissionStatus(status).value))

    async def get_active(self) -> List[Mission]:
        """In-progress and scheduled missions, earliest start first."""
        return await self.query(("status", "in", ACTIVE_STATUSES), order_by=("startTime", False))

    async def update_progress(self, mission_id: str, progress: float) -> bool:
        """Advance an in-progress mission; reaching 100 completes it.

        Progress never moves backwards and is ignored for missions that are not
        in progress, so the completion timestamp is written exactly once.
        """
        mission = await self.get_by_id(mission_id)
        if mission is None:
            logger.warning("Progress update for unknown mission %s ignored", mission_id)
            return False
        if mission.status != MissionStatus.IN_PROGRESS:
            logger.info("Mission %s is %s, progress update ignored", mission_id, mission.status.value)
            return False

        progress = min(100.0, float(progress))
        if progress < mission.progress:
            logger.info("Mission %s progress %.1f below current %.1f, ignored", mission_id, progress, mission.progress)
            return False

        updates = {"progress": progress}
        if progress >= 100:
            updates["status"] = MissionStatus.COMPLETED.value
            updates["actualEndTime"] = to_iso()
            logger.info("Mission %s completed", mission_id)
        return await self.update(mission_id, updates)
