"""
Snapshot streams over WebSockets.

Each connection owns one repository listener. Every snapshot is sent as
``{"type": "<collection>", "data": [...]}``; the listener is released when the
client disconnects or sending fails.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, WebSocket
from starlette.websockets import WebSocketDisconnect

from survey_fleet.dependencies import get_drones, get_missions
from survey_fleet.repositories.base import Repository
from survey_fleet.repositories.drones import DroneRepository
from survey_fleet.repositories.missions import MissionRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])

SNAPSHOT_BACKLOG = 4


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


async def stream_snapshots(websocket: WebSocket, repository: Repository) -> None:
    await websocket.accept()
    queue: "asyncio.Queue[Dict[str, Any]]" = asyncio.Queue(maxsize=SNAPSHOT_BACKLOG)

    def on_snapshot(items) -> None:
        if queue.full():
            # slow client: drop the oldest snapshot
            queue.get_nowait()
        queue.put_nowait({
            "type": repository.collection,
            "data": [item.model_dump(by_alias=True, mode="json") for item in items],
        })

    unsubscribe = await repository.listen(on_snapshot)
    disconnected = asyncio.create_task(_wait_for_disconnect(websocket))
    next_snapshot: Optional[asyncio.Task] = None
    logger.info("WebSocket subscribed to %s", repository.collection)
    try:
        while True:
            next_snapshot = asyncio.create_task(queue.get())
            done, _ = await asyncio.wait(
                {next_snapshot, disconnected}, return_when=asyncio.FIRST_COMPLETED
            )
            if disconnected in done:
                break
            await websocket.send_json(next_snapshot.result())
    except WebSocketDisconnect:
        pass
    finally:
        unsubscribe()
        disconnected.cancel()
        if next_snapshot is not None:
            next_snapshot.cancel()
        logger.info("WebSocket unsubscribed from %s", repository.collection)


@router.websocket("/ws/missions")
async def missions_stream(websocket: WebSocket, missions: MissionRepository = Depends(get_missions)):
    await stream_snapshots(websocket, missions)


@router.websocket("/ws/drones")
async def drones_stream(websocket: WebSocket, drones: DroneRepository = Depends(get_drones)):
    await stream_snapshots(websocket, drones)
