# onewire/sensors/interface.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class SensorReading:
    sensor_id: str              # e.g. "28-00000de13271"
    temperature_celsius: float  # raw milli-degrees / 1000


@dataclass(frozen=True)
class Sample:
    """One labeled gauge observation, ready for exposition."""
    sensor_id: str
    sensor_name: str
    value: float

    @property
    def labels(self) -> list[str]:
        return [self.sensor_id, self.sensor_name]
