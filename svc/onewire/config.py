from __future__ import annotations
import os
from dataclasses import dataclass

# Root of the 1-Wire sysfs tree; the bus master listing lives below it
DEVICES_PATH = os.getenv("W1_DEVICES_PATH", "/sys/bus/w1/devices/")

# Metric namespace, e.g. "onewire" -> onewire_temperature_celcius
NAMESPACE = os.getenv("W1_NAMESPACE", "onewire")

METRICS_PATH = os.getenv("W1_METRICS_PATH", "/metrics")

LISTEN_HOST = os.getenv("W1_LISTEN_HOST", "0.0.0.0")
LISTEN_PORT = int(os.getenv("W1_LISTEN_PORT", "9100"))

# One of: debug, info, warn, error, none
LOG_LEVEL = os.getenv("W1_LOG_LEVEL", "info").lower()

# Upper bound in seconds for a single scrape; 0 disables the deadline
SCRAPE_TIMEOUT = float(os.getenv("W1_SCRAPE_TIMEOUT", "10"))

# File names of the w1 sysfs interface
MASTER_LISTING = os.path.join("w1_bus_master1", "w1_master_slaves")
TEMPERATURE_FILE = "temperature"


@dataclass(frozen=True)
class ExporterConfig:
    devices_path: str = DEVICES_PATH
    namespace: str = NAMESPACE
    metrics_path: str = METRICS_PATH
    listen_host: str = LISTEN_HOST
    listen_port: int = LISTEN_PORT
    log_level: str = LOG_LEVEL
    scrape_timeout: float | None = SCRAPE_TIMEOUT

    @classmethod
    def from_env(cls) -> "ExporterConfig":
        """Snapshot the environment once; the result is shared read-only by every scrape."""
        timeout = float(os.getenv("W1_SCRAPE_TIMEOUT", str(SCRAPE_TIMEOUT)))
        return cls(
            devices_path=os.getenv("W1_DEVICES_PATH", DEVICES_PATH),
            namespace=os.getenv("W1_NAMESPACE", NAMESPACE),
            metrics_path=os.getenv("W1_METRICS_PATH", METRICS_PATH),
            listen_host=os.getenv("W1_LISTEN_HOST", LISTEN_HOST),
            listen_port=int(os.getenv("W1_LISTEN_PORT", str(LISTEN_PORT))),
            log_level=os.getenv("W1_LOG_LEVEL", LOG_LEVEL).lower(),
            scrape_timeout=timeout if timeout > 0 else None,
        )
