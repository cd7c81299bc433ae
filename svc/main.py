from __future__ import annotations
from dotenv import load_dotenv
load_dotenv()  # Load .env file before importing app modules

import time
import logging
from typing import Callable
import uvicorn
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from onewire.config import ExporterConfig
from onewire.routes import build_router, get_config

EXPORTER_NAME = "onewire"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

logger = logging.getLogger(__name__)


def configure_logging(level_name: str) -> None:
    if level_name == "none":
        logging.disable(logging.CRITICAL)
        return
    level = LOG_LEVELS.get(level_name)
    if level is None:
        raise ValueError(f"unknown log level {level_name!r}, expected one of: debug, info, warn, error, none")
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s'
    )
    logging.getLogger("onewire").setLevel(level)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log each request and its response time."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        logger.info(f"Request: {request.method} {request.url.path} | IP: {client_ip}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"Response: {request.method} {request.url.path} | "
            f"Status: {response.status_code} | "
            f"Time: {process_time:.3f}s"
        )
        return response


def create_app(config: ExporterConfig | None = None) -> FastAPI:
    if config is None:
        config = ExporterConfig.from_env()
    app = FastAPI(title="1-Wire Exporter", version="0.1.0")
    app.add_middleware(LoggingMiddleware)
    app.dependency_overrides[get_config] = lambda: config
    app.include_router(build_router(config))
    return app


config = ExporterConfig.from_env()
configure_logging(config.log_level)

app = create_app(config)


def main() -> None:
    logger.info(f"Starting {EXPORTER_NAME}_exporter.")
    logger.info(f"Starting to listen. address={config.listen_host}:{config.listen_port}")
    uvicorn.run(app, host=config.listen_host, port=config.listen_port)


if __name__ == "__main__":
    main()
