from fastapi import APIRouter, Depends

from survey_fleet.dependencies import Services, get_services
from survey_fleet.schemas.common import ConnectionStatusResponse

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check():
    return {"status": "ok"}


@router.get("/status", response_model=ConnectionStatusResponse)
async def connection_status(services: Services = Depends(get_services)):
    status = services.store.status()
    return ConnectionStatusResponse(is_connected=status.is_connected, backend_name=status.backend_name)
