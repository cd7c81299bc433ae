from __future__ import annotations


class OneWireError(Exception):
    """Base class for failures while reading the 1-Wire sysfs tree."""


class DirectoryReadError(OneWireError):
    """The bus master listing file is missing or unreadable."""


class SensorReadError(OneWireError):
    """A sensor's value file is missing or unreadable."""

    def __init__(self, sensor_id: str, message: str) -> None:
        super().__init__(message)
        self.sensor_id = sensor_id


class ParseError(SensorReadError):
    """A sensor's value file did not hold a number."""


class ScrapeCancelledError(SensorReadError):
    """The scrape deadline passed before the sensor was read."""
