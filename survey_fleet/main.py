import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from survey_fleet.config.settings import FleetSettings, settings as default_settings
from survey_fleet.dependencies import build_services
from survey_fleet.exceptions import PlanningValidationError, StoreUnavailableError
from survey_fleet.middleware.logging import LoggingMiddleware, configure_logging
from survey_fleet.routers import dashboard, drones, missions, patterns, planning, realtime, stats, surveys, system
from survey_fleet.services.simulation import SimulationEngine
from survey_fleet.services.telemetry import TelemetryPublisher
from survey_fleet.store.connection import StoreHandle, connect_store
from survey_fleet.store.memory import MemoryDocumentStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[FleetSettings] = None,
    mock_store: Optional[MemoryDocumentStore] = None,
    store: Optional[StoreHandle] = None,
) -> FastAPI:
    """Build the API; ``store`` skips the start-up connection attempt."""
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with AsyncExitStack() as stack:
            handle = store or await connect_store(settings, mock=mock_store)
            stack.push_async_callback(handle.close)

            services = build_services(handle, settings)
            app.state.services = services
            app.state.simulation = None
            app.state.telemetry = None

            if settings.TELEMETRY_ENABLED:
                telemetry = TelemetryPublisher(settings)
                await telemetry.start()
                stack.callback(telemetry.close)
                app.state.telemetry = telemetry

            if settings.SIMULATION_ENABLED:
                simulation = SimulationEngine(
                    services.missions,
                    services.drones,
                    interval=settings.SIMULATION_INTERVAL,
                    jitter=settings.POSITION_JITTER_DEGREES,
                    telemetry=app.state.telemetry,
                )
                app.state.simulation = await stack.enter_async_context(simulation)

            status_info = handle.status()
            logger.info(
                "Survey fleet API ready (backend: %s, connected: %s)",
                status_info.backend_name, status_info.is_connected
            )
            yield
            logger.info("Shutting down survey fleet API")

    app = FastAPI(
        title="Survey Fleet API",
        description="Backend API for drone survey fleet management",
        version="1.0.0",
        lifespan=lifespan)

    app.include_router(system.router)
    app.include_router(drones.router)
    app.include_router(missions.router)
    app.include_router(surveys.router)
    app.include_router(stats.router)
    app.include_router(patterns.router)
    app.include_router(planning.router)
    app.include_router(dashboard.router)
    app.include_router(realtime.router)

    @app.exception_handler(PlanningValidationError)
    async def planning_error_handler(request: Request, exc: PlanningValidationError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(StoreUnavailableError)
    async def store_error_handler(request: Request, exc: StoreUnavailableError):
        logger.error("Request %s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "X-Request-ID",
        ],
        expose_headers=["X-Process-Time", "X-Request-ID"],
    )

    app.add_middleware(LoggingMiddleware)

    return app


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
