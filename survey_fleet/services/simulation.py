"""
Simulated mission progress and drone movement.

Each tick advances every in-progress mission by a random step, nudges its
drone's coordinates and optionally publishes a telemetry packet. The engine
owns one asyncio task; ``stop()`` (or leaving ``async with``) cancels it.
"""

import asyncio
import logging
import random
from typing import Optional

from survey_fleet.models.enums import MissionStatus
from survey_fleet.repositories.drones import DroneRepository
from survey_fleet.repositories.missions import MissionRepository
from survey_fleet.schemas.common import Coordinates
from survey_fleet.schemas.mission import Mission
from survey_fleet.services.telemetry import TelemetryPublisher

logger = logging.getLogger(__name__)

MIN_PROGRESS_STEP = 1.0
PROGRESS_STEP_SPREAD = 3.0


class SimulationEngine:
    def __init__(
        self,
        missions: MissionRepository,
        drones: DroneRepository,
        *,
        interval: float = 5.0,
        jitter: float = 0.002,
        rng: Optional[random.Random] = None,
        telemetry: Optional[TelemetryPublisher] = None,
    ) -> None:
        self.missions = missions
        self.drones = drones
        self.interval = interval
        self.jitter = jitter
        self.rng = rng or random.Random()
        self.telemetry = telemetry
        self.ticks = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> int:
        """Run one simulation step; returns the number of missions advanced."""
        advanced = 0
        for mission in await self.missions.get_by_status(MissionStatus.IN_PROGRESS):
            if mission.progress >= 100:
                continue
            progress = min(100.0, mission.progress + MIN_PROGRESS_STEP + self.rng.random() * PROGRESS_STEP_SPREAD)
            try:
                if await self.missions.update_progress(mission.id, progress):
                    advanced += 1
                await self._move_drone(mission, progress)
            except Exception as exc:
                logger.error("Simulation step failed for mission %s: %s", mission.id, exc)
        self.ticks += 1
        return advanced

    async def _move_drone(self, mission: Mission, progress: float) -> None:
        drone = await self.drones.get_by_id(mission.drone_id)
        if drone is None:
            logger.debug("Mission %s references unknown drone %s", mission.id, mission.drone_id)
            return

        scale = self.jitter * (1 + progress / 100)
        position = Coordinates(
            lat=max(-90.0, min(90.0, drone.coordinates.lat + (self.rng.random() - 0.5) * scale)),
            lng=max(-180.0, min(180.0, drone.coordinates.lng + (self.rng.random() - 0.5) * scale)),
        )
        await self.drones.update_location(drone.id, position)

        if self.telemetry is not None:
            self.telemetry.publish_position(
                drone.id, position, mission_id=mission.id, battery=drone.battery, progress=progress
            )

    async def _run(self) -> None:
        logger.info("Simulation started (interval %.1fs)", self.interval)
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.tick()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.exception("Error in simulation tick: %s", exc)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="fleet-simulation")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Simulation stopped after %d ticks", self.ticks)

    async def __aenter__(self) -> "SimulationEngine":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
