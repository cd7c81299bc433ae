from __future__ import annotations
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(description="Service status (always 'ok' if service is running)")
    namespace: str = Field(description="Metric namespace used for exposed series")
    devices_path: str = Field(description="Root of the 1-Wire sysfs tree being scraped")


class SensorReadingResponse(BaseModel):
    """Current temperature of one sensor, as read by a fresh scrape."""
    sensor_id: str = Field(description="Sensor identifier from the bus listing (e.g., 28-00000de13271)")
    sensor_name: str = Field(description="Display name; identical to sensor_id")
    temperature_celsius: float = Field(description="Temperature in degrees Celsius")
