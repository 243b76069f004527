import random
from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from starlette.requests import HTTPConnection

from survey_fleet.config.settings import FleetSettings
from survey_fleet.repositories.drones import DroneRepository
from survey_fleet.repositories.missions import MissionRepository
from survey_fleet.repositories.reports import (
    FlightStatsRepository,
    MissionPatternRepository,
    OrganizationStatsRepository,
    SurveyRepository,
)
from survey_fleet.store.connection import StoreHandle


@dataclass
class Services:
    """Everything a request handler needs, built once per application."""

    settings: FleetSettings
    store: StoreHandle
    drones: DroneRepository
    missions: MissionRepository
    surveys: SurveyRepository
    flight_stats: FlightStatsRepository
    organization: OrganizationStatsRepository
    patterns: MissionPatternRepository


def build_services(
    store: StoreHandle, settings: FleetSettings, rng: Optional[random.Random] = None
) -> Services:
    strict = settings.STRICT_PERSISTENCE
    return Services(
        settings=settings,
        store=store,
        drones=DroneRepository(
            store,
            strict=strict,
            listen_interval=settings.DRONE_LISTEN_INTERVAL,
            battery_floor=settings.BATTERY_FLOOR,
            rng=rng,
        ),
        missions=MissionRepository(store, strict=strict, listen_interval=settings.MISSION_LISTEN_INTERVAL),
        surveys=SurveyRepository(store, strict=strict),
        flight_stats=FlightStatsRepository(store, strict=strict),
        organization=OrganizationStatsRepository(
            store, strict=strict, listen_interval=settings.ORGANIZATION_LISTEN_INTERVAL
        ),
        patterns=MissionPatternRepository(store, strict=strict),
    )


def get_services(connection: HTTPConnection) -> Services:
    return connection.app.state.services


def get_settings(request: Request) -> FleetSettings:
    return request.app.state.services.settings


def get_drones(connection: HTTPConnection) -> DroneRepository:
    return get_services(connection).drones


def get_missions(connection: HTTPConnection) -> MissionRepository:
    return get_services(connection).missions


def get_surveys(request: Request) -> SurveyRepository:
    return get_services(request).surveys


def get_flight_stats(request: Request) -> FlightStatsRepository:
    return get_services(request).flight_stats


def get_organization(request: Request) -> OrganizationStatsRepository:
    return get_services(request).organization


def get_patterns(request: Request) -> MissionPatternRepository:
    return get_services(request).patterns
