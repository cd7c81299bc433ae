from __future__ import annotations
import time
import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from .collector import OneWireCollector
from .config import ExporterConfig
from .models import HealthResponse, SensorReadingResponse

logger = logging.getLogger(__name__)

EXPORTER_DISPLAY_NAME = "1-Wire Exporter"

cfg: ExporterConfig | None = None


def get_config() -> ExporterConfig:
    global cfg
    if cfg is None:
        cfg = ExporterConfig.from_env()
    return cfg


def get_collector(config: ExporterConfig = Depends(get_config)) -> OneWireCollector:
    return OneWireCollector(config)


def render_metrics(collector: OneWireCollector) -> bytes:
    """Serialize one scrape using a registry that lives only for this request."""
    start = time.monotonic()
    logger.debug("Starting scrape")
    registry = CollectorRegistry(auto_describe=True)
    registry.register(collector)
    payload = generate_latest(registry)
    logger.debug(f"Scrape done in {time.monotonic() - start:.3f}s")
    return payload


def metrics(collector: OneWireCollector = Depends(get_collector)) -> Response:
    """Prometheus text exposition of the current sensor temperatures."""
    return Response(content=render_metrics(collector), media_type=CONTENT_TYPE_LATEST)


def build_router(config: ExporterConfig) -> APIRouter:
    router = APIRouter()

    @router.get("/", response_class=HTMLResponse, include_in_schema=False)
    def index() -> str:
        return (
            "<html>"
            f"<head><title>{EXPORTER_DISPLAY_NAME}</title></head>"
            "<body>"
            f"<h1>{EXPORTER_DISPLAY_NAME}</h1>"
            f"<p><a href='{config.metrics_path}'>Metrics</a></p>"
            "</body>"
            "</html>"
        )

    @router.get(
        "/health",
        response_model=HealthResponse,
        summary="Health check",
        description="Returns service health status and the bus being scraped",
        tags=["Health"]
    )
    def health(config: ExporterConfig = Depends(get_config)) -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="ok", namespace=config.namespace, devices_path=config.devices_path)

    @router.get(
        "/sensors",
        response_model=List[SensorReadingResponse],
        summary="Current sensor temperatures",
        description="Runs one scrape and returns every sensor that could be read",
        tags=["Sensors"],
    )
    def list_sensors(collector: OneWireCollector = Depends(get_collector)) -> List[SensorReadingResponse]:
        session = collector.scrape()
        return [
            SensorReadingResponse(
                sensor_id=s.sensor_id,
                sensor_name=s.sensor_name,
                temperature_celsius=s.value,
            )
            for s in session.samples
        ]

    router.add_api_route(
        config.metrics_path,
        metrics,
        methods=["GET"],
        include_in_schema=False,
    )
    return router
