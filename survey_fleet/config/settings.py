from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class FleetSettings(BaseSettings):
    # Document database. Unset or unreachable means mock mode for the process.
    DATABASE_URL: Optional[str] = None
    CONNECT_TIMEOUT: float = 5.0  # seconds
    STRICT_PERSISTENCE: bool = False  # surface backend failures instead of absorbing them

    # Snapshot listeners (seconds)
    DRONE_LISTEN_INTERVAL: float = 10.0
    MISSION_LISTEN_INTERVAL: float = 5.0
    ORGANIZATION_LISTEN_INTERVAL: float = 10.0
    POLL_INTERVAL: float = 2.0  # real backend change polling

    # Simulation
    SIMULATION_ENABLED: bool = True
    SIMULATION_INTERVAL: float = 5.0
    POSITION_JITTER_DEGREES: float = 0.002
    BATTERY_FLOOR: float = 10.0
    STRICT_DRONE_TRANSITIONS: bool = False

    # Planning
    GRID_STEPS: int = 4

    # Telemetry (MQTT)
    TELEMETRY_ENABLED: bool = False
    TELEMETRY_DRY_RUN: bool = True
    MQTT_HOST: str = "localhost"
    MQTT_PORT: int = 1883
    MQTT_USERNAME: str = ""
    MQTT_PASSWORD: str = ""
    MQTT_TLS_ENABLED: bool = False
    MQTT_CA_CERT: str = "/etc/ssl/certs/ca-certificates.crt"
    MQTT_TOPIC_PREFIX: str = "fleet"

    # Logging / HTTP
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = "survey_fleet.log"
    FRONTEND_URL: str = "http://localhost:3000"

    model_config = SettingsConfigDict(env_prefix='FLEET_', env_file='.env', extra='ignore')


settings = FleetSettings()
