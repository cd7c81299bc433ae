# onewire/sensors/reader.py
from __future__ import annotations
import os
import re
import logging
from typing import Optional

from onewire.config import TEMPERATURE_FILE
from onewire.errors import ParseError, ScrapeCancelledError, SensorReadError
from onewire.session import ScrapeSession
from .interface import SensorReading

logger = logging.getLogger(__name__)

# w1_therm reports milli-degrees Celsius
MILLI = 1000.0

# Plain base-10 number: no surrounding whitespace, no digit separators
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def temperature_path(base_path: str, sensor_id: str) -> str:
    return os.path.join(base_path, sensor_id, TEMPERATURE_FILE)


def parse_temperature(sensor_id: str, raw: str) -> float:
    """
    Parse the content of a temperature file into degrees Celsius.

    Exactly one trailing terminator character is removed before parsing,
    e.g. "23250\\n" -> 23.25.
    """
    value = raw[:-1] if raw else raw
    if not _NUMBER.fullmatch(value):
        raise ParseError(sensor_id, f"failed to parse temperature of {sensor_id}: {raw!r}")
    milli = float(value)
    return milli / MILLI


def read_temperature(
    sensor_id: str,
    base_path: str,
    session: Optional[ScrapeSession] = None,
) -> SensorReading:
    """Read one sensor's value file. Raises a SensorReadError subclass on any failure."""
    if session is not None and session.cancelled:
        raise ScrapeCancelledError(sensor_id, f"scrape deadline passed before reading {sensor_id}")

    path = temperature_path(base_path, sensor_id)
    logger.debug(f"Reading sensor {sensor_id} from {path}")
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise SensorReadError(sensor_id, f"failed to read sensor file {path}: {e}") from e

    try:
        raw = data.decode("ascii")
    except UnicodeDecodeError as e:
        raise ParseError(sensor_id, f"sensor file {path} is not text: {data!r}") from e

    return SensorReading(sensor_id=sensor_id, temperature_celsius=parse_temperature(sensor_id, raw))
