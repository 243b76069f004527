"""
Unit tests for the MQTT telemetry publisher.
"""

import asyncio
import json
import time
from unittest.mock import Mock, patch

import paho.mqtt.client as mqtt  # type: ignore

from survey_fleet.config.settings import FleetSettings
from survey_fleet.schemas.common import Coordinates
from survey_fleet.services.telemetry import TelemetryPublisher

POSITION = Coordinates(lat=40.7589, lng=-73.9851)


def _settings(**overrides):
    values = {"MQTT_HOST": "broker.test", "MQTT_TOPIC_PREFIX": "fleet", "LOG_FILE": None}
    values.update(overrides)
    return FleetSettings(**values)


class TestTelemetryPublisher:
    """Test packet building and publishing."""

    async def test_dry_run_logs_without_client(self, caplog):
        publisher = TelemetryPublisher(_settings(), dry_run=True)
        await publisher.start()

        with caplog.at_level("INFO"):
            assert publisher.publish_position("D002", POSITION, mission_id="M001", progress=70.0)
        assert publisher.mqtt_client is None
        assert "fleet/D002/telemetry" in caplog.text
        assert publisher.published == 1

    def test_packet_shape(self):
        publisher = TelemetryPublisher(_settings(), dry_run=True)
        packet = publisher.build_packet("D002", POSITION, mission_id="M001", battery=66.66, progress=71.44)

        assert packet["droneId"] == "D002"
        assert packet["missionId"] == "M001"
        assert packet["position"] == {"lat": 40.7589, "lng": -73.9851}
        assert packet["battery"] == 66.7
        assert packet["progress"] == 71.4
        assert packet["timestamp"].endswith("Z")

    @patch("survey_fleet.services.telemetry.mqtt.Client")
    async def test_publishes_with_qos_1(self, mock_mqtt_client):
        mock_client = Mock()
        mock_client.publish.return_value = Mock(rc=mqtt.MQTT_ERR_SUCCESS)
        mock_mqtt_client.return_value = mock_client

        publisher = TelemetryPublisher(_settings(MQTT_USERNAME="fleet", MQTT_PASSWORD="secret"), dry_run=False)
        await publisher.start()

        mock_client.username_pw_set.assert_called_once_with("fleet", "secret")
        mock_client.connect.assert_called_once_with("broker.test", 1883, keepalive=60)
        mock_client.loop_start.assert_called_once()

        assert publisher.publish_position("D002", POSITION, mission_id="M001") is True
        topic, payload = mock_client.publish.call_args[0]
        assert topic == "fleet/D002/telemetry"
        assert json.loads(payload)["position"]["lat"] == 40.7589
        assert mock_client.publish.call_args[1]["qos"] == 1

        publisher.close()
        mock_client.loop_stop.assert_called_once()
        mock_client.disconnect.assert_called_once()

    @patch("survey_fleet.services.telemetry.mqtt.Client")
    async def test_connection_failure_disables_publishing(self, mock_mqtt_client):
        mock_client = Mock()
        mock_client.connect.side_effect = ConnectionRefusedError("no broker")
        mock_mqtt_client.return_value = mock_client

        publisher = TelemetryPublisher(_settings(), dry_run=False)
        await publisher.start()

        assert publisher.disabled
        assert publisher.publish_position("D002", POSITION) is False
        mock_client.publish.assert_not_called()

    @patch("survey_fleet.services.telemetry.mqtt.Client")
    async def test_failed_publish_returns_false(self, mock_mqtt_client):
        mock_client = Mock()
        mock_client.publish.return_value = Mock(rc=mqtt.MQTT_ERR_NO_CONN)
        mock_mqtt_client.return_value = mock_client

        publisher = TelemetryPublisher(_settings(), dry_run=False)
        await publisher.start()
        assert publisher.publish_position("D002", POSITION) is False
        assert publisher.published == 0

    @patch("survey_fleet.services.telemetry.mqtt.Client")
    async def test_slow_connect_does_not_block_event_loop(self, mock_mqtt_client):
        mock_client = Mock()
        mock_client.connect.side_effect = lambda *args, **kwargs: time.sleep(0.3)
        mock_mqtt_client.return_value = mock_client
        publisher = TelemetryPublisher(_settings(), dry_run=False)

        beats = []

        async def heartbeat():
            while True:
                beats.append(time.monotonic())
                await asyncio.sleep(0.01)

        ticker = asyncio.create_task(heartbeat())
        try:
            await publisher.start()
        finally:
            ticker.cancel()

        assert len(beats) >= 5
        mock_client.loop_start.assert_called_once()
        assert not publisher.disabled
