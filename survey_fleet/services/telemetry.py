"""
MQTT telemetry publisher for simulated drone positions.

Packets are JSON objects published with QoS 1 on ``<prefix>/<droneId>/telemetry``:

    {"droneId": "D002", "missionId": "M001", "timestamp": "...Z",
     "position": {"lat": 40.75, "lng": -73.98}, "battery": 66.1, "progress": 71.4}

In dry-run mode packets are only logged. A broker that cannot be reached
disables publishing for the lifetime of the publisher; the simulation keeps
running either way.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import paho.mqtt.client as mqtt  # type: ignore

from survey_fleet.config.settings import FleetSettings
from survey_fleet.schemas.common import Coordinates
from survey_fleet.utils.clock import to_iso

logger = logging.getLogger(__name__)


class TelemetryPublisher:
    """Publish drone telemetry packets to an MQTT broker."""

    def __init__(self, settings: FleetSettings, dry_run: Optional[bool] = None) -> None:
        self.settings = settings
        self.dry_run = settings.TELEMETRY_DRY_RUN if dry_run is None else dry_run
        self.mqtt_client: Optional[mqtt.Client] = None
        self.connected = False
        self.disabled = False
        self.published = 0

    def topic_for(self, drone_id: str) -> str:
        return f"{self.settings.MQTT_TOPIC_PREFIX}/{drone_id}/telemetry"

    def build_mqtt_client(self) -> mqtt.Client:
        """Create and configure MQTT client."""
        client = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id="survey-fleet-telemetry")

        if self.settings.MQTT_USERNAME:
            client.username_pw_set(self.settings.MQTT_USERNAME, self.settings.MQTT_PASSWORD)

        if self.settings.MQTT_TLS_ENABLED:
            try:
                client.tls_set(ca_certs=self.settings.MQTT_CA_CERT)
            except Exception as exc:
                logger.warning("Failed to set TLS: %s", exc)

        client.on_connect = self._on_mqtt_connect
        client.on_disconnect = self._on_mqtt_disconnect
        return client

    def _on_mqtt_connect(self, client: mqtt.Client, userdata: Any, flags: Any, reason_code: Any, properties: Any = None) -> None:  # noqa: ARG002
        if reason_code == 0:
            self.connected = True
            logger.info("Connected to MQTT broker %s:%d", self.settings.MQTT_HOST, self.settings.MQTT_PORT)
        else:
            logger.error("Failed to connect to MQTT broker: %s", reason_code)

    def _on_mqtt_disconnect(self, client: mqtt.Client, userdata: Any, flags: Any, reason_code: Any, properties: Any = None) -> None:  # noqa: ARG002
        self.connected = False
        if reason_code != 0:
            logger.warning("Unexpected MQTT disconnection: %s", reason_code)
        else:
            logger.info("Disconnected from MQTT broker")

    async def start(self) -> None:
        """Connect once and start the network loop; failures disable publishing.

        The blocking socket connect runs in a worker thread.
        """
        if self.dry_run:
            logger.info("Telemetry publisher in dry-run mode, packets will be logged only")
            return
        if not self.settings.MQTT_HOST:
            logger.warning("FLEET_MQTT_HOST not set, telemetry publishing disabled")
            self.disabled = True
            return

        try:
            self.mqtt_client = self.build_mqtt_client()
            await asyncio.to_thread(
                self.mqtt_client.connect, self.settings.MQTT_HOST, self.settings.MQTT_PORT, keepalive=60
            )
            self.mqtt_client.loop_start()
        except Exception as exc:
            logger.error("MQTT connection to %s:%d failed, telemetry disabled: %s",
                         self.settings.MQTT_HOST, self.settings.MQTT_PORT, exc)
            self.mqtt_client = None
            self.disabled = True

    def build_packet(
        self,
        drone_id: str,
        position: Coordinates,
        mission_id: Optional[str] = None,
        battery: Optional[float] = None,
        progress: Optional[float] = None,
    ) -> Dict[str, Any]:
        return {
            "droneId": drone_id,
            "missionId": mission_id,
            "timestamp": to_iso(),
            "position": position.to_document(),
            "battery": round(battery, 1) if battery is not None else None,
            "progress": round(progress, 1) if progress is not None else None,
        }

    def publish_position(
        self,
        drone_id: str,
        position: Coordinates,
        mission_id: Optional[str] = None,
        battery: Optional[float] = None,
        progress: Optional[float] = None,
    ) -> bool:
        """Publish one packet; returns True when it was handed to the broker or logged."""
        if self.disabled:
            return False

        packet = self.build_packet(drone_id, position, mission_id, battery, progress)
        topic = self.topic_for(drone_id)

        if self.dry_run:
            logger.info("[DRY-RUN] %s %s", topic, json.dumps(packet))
            self.published += 1
            return True

        if self.mqtt_client is None:
            return False

        result = self.mqtt_client.publish(topic, json.dumps(packet), qos=1)
        if result.rc != mqtt.MQTT_ERR_SUCCESS:
            logger.warning("Failed to publish telemetry for %s: rc=%s", drone_id, result.rc)
            return False
        self.published += 1
        logger.debug("Published telemetry for %s to %s", drone_id, topic)
        return True

    def close(self) -> None:
        if self.mqtt_client is not None:
            try:
                self.mqtt_client.loop_stop()
                self.mqtt_client.disconnect()
            except Exception as exc:
                logger.warning("Error while closing MQTT client: %s", exc)
            self.mqtt_client = None
        self.connected = False
        logger.info("Telemetry publisher closed after %d packets", self.published)
