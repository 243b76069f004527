#!/usr/bin/env python3
"""
Live view of fleet telemetry published by the simulation.

Subscribes to ``<prefix>/+/telemetry`` and prints the latest packet per drone.

Usage:
    python scripts/monitor_telemetry.py [--broker localhost] [--port 1883] [--prefix fleet]
"""

import argparse
import json
import logging
import signal
import sys
import time
from typing import Any, Dict, Optional

import paho.mqtt.client as mqtt  # type: ignore


class TelemetryMonitor:
    """Collect and display the latest telemetry packet for every drone."""

    def __init__(self, broker: str, port: int, prefix: str,
                 username: Optional[str] = None, password: Optional[str] = None) -> None:
        self.broker = broker
        self.port = port
        self.topic = f"{prefix}/+/telemetry"
        self.username = username
        self.password = password
        self.mqtt_client: Optional[mqtt.Client] = None

        self.latest: Dict[str, Dict[str, Any]] = {}
        self.messages_received = 0
        self.start_time = time.time()

        self.running = True
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum: int, frame: Any) -> None:  # noqa: ARG002
        logging.info("Received signal %s, stopping monitor...", signum)
        self.running = False

    def build_mqtt_client(self) -> mqtt.Client:
        client = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id=f"fleet-monitor-{int(time.time())}")

        if self.username:
            client.username_pw_set(self.username, self.password)

        client.on_connect = self._on_connect
        client.on_message = self._on_message
        return client

    def _on_connect(self, client: mqtt.Client, userdata: Any, flags: Any, reason_code: Any, properties: Any = None) -> None:  # noqa: ARG002
        if reason_code == 0:
            logging.info("Connected to MQTT broker %s:%d", self.broker, self.port)
            client.subscribe(self.topic, qos=1)
            logging.info("Subscribed to %s", self.topic)
        else:
            logging.error("Failed to connect to MQTT broker: %s", reason_code)

    def _on_message(self, client: mqtt.Client, userdata: Any, msg: mqtt.MQTTMessage) -> None:  # noqa: ARG002
        try:
            packet = json.loads(msg.payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logging.error("Failed to parse telemetry message on %s: %s", msg.topic, exc)
            return
        self.latest[packet.get("droneId", msg.topic)] = packet
        self.messages_received += 1
        self.display()

    def display(self) -> None:
        print("\033[2J\033[H", end="")
        print("=" * 72)
        print(f"FLEET TELEMETRY MONITOR - {self.topic}")
        print("=" * 72)
        print(f"{'Drone':<8}{'Mission':<10}{'Lat':>12}{'Lng':>12}{'Battery':>10}{'Progress':>10}")
        for drone_id in sorted(self.latest):
            packet = self.latest[drone_id]
            position = packet.get("position") or {}
            print(f"{drone_id:<8}{packet.get('missionId') or '-':<10}"
                  f"{position.get('lat', 0):>12.5f}{position.get('lng', 0):>12.5f}"
                  f"{packet.get('battery') or 0:>9.1f}%{packet.get('progress') or 0:>9.1f}%")
        print("-" * 72)
        print(f"Messages: {self.messages_received} | Uptime: {time.time() - self.start_time:.0f}s")
        print("Press Ctrl+C to exit")

    def run(self) -> None:
        self.mqtt_client = self.build_mqtt_client()
        self.mqtt_client.connect(self.broker, self.port, keepalive=60)
        self.mqtt_client.loop_start()
        try:
            while self.running:
                time.sleep(0.5)
        finally:
            self.mqtt_client.loop_stop()
            self.mqtt_client.disconnect()


def main() -> None:
    parser = argparse.ArgumentParser(description="Monitor fleet telemetry")
    parser.add_argument("--broker", default="localhost", help="MQTT broker host")
    parser.add_argument("--port", type=int, default=1883, help="MQTT broker port")
    parser.add_argument("--prefix", default="fleet", help="Telemetry topic prefix")
    parser.add_argument("--username", help="MQTT username")
    parser.add_argument("--password", help="MQTT password")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    monitor = TelemetryMonitor(args.broker, args.port, args.prefix, args.username, args.password)
    try:
        monitor.run()
    except Exception as exc:
        logging.exception("Monitor failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
