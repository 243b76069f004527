import logging
import random
from typing import Any, List, Optional

from survey_fleet.models.enums import DroneStatus
from survey_fleet.repositories.base import Repository
from survey_fleet.schemas.common import Coordinates
from survey_fleet.schemas.drone import Drone
from survey_fleet.store import collections
from survey_fleet.store.connection import StoreHandle
from survey_fleet.store.memory import MemoryDocumentStore

logger = logging.getLogger(__name__)


class DroneRepository(Repository[Drone]):
    collection = collections.DRONES
    model = Drone
    id_prefix = "D"
    listen_interval = 10.0

    def __init__(
        self,
        store: StoreHandle,
        *,
        battery_floor: float = 10.0,
        rng: Optional[random.Random] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(store, **kwargs)
        self.battery_floor = battery_floor
        self.rng = rng or random.Random()

    async def get_by_status(self, status: DroneStatus) -> List[Drone]:
        return await self.query(("status", "==", DroneStatus(status).value))

    async def update_battery(self, drone_id: str, battery: float) -> bool:
        return await self.update(drone_id, {"battery": battery})

    async def update_location(
        self, drone_id: str, coordinates: Coordinates, location: Optional[str] = None
    ) -> bool:
        fields = {"coordinates": coordinates.to_document()}
        if location is not None:
            fields["location"] = location
        return await self.update(drone_id, fields)

    def _mock_tick(self, store: MemoryDocumentStore) -> None:
        # In-mission drones drain toward the floor and never recover on their own
        for drone in store.snapshot(self.collection):
            battery = drone.get("battery", 0)
            if drone.get("status") == DroneStatus.IN_MISSION.value and battery > self.battery_floor:
                drained = max(self.battery_floor, battery - self.rng.random() * 2)
                store.merge(self.collection, drone["id"], {"battery": drained})
                logger.debug("Mock: drone %s battery %.1f -> %.1f", drone["id"], battery, drained)
