# onewire/collector.py
from __future__ import annotations
import threading
import logging
from typing import Iterator, List, Optional

from prometheus_client.core import GaugeMetricFamily

from .config import ExporterConfig
from .errors import DirectoryReadError, ParseError, ScrapeCancelledError, SensorReadError
from .session import ScrapeSession
from .sensors.bus import read_sensor_ids
from .sensors.interface import Sample, SensorReading
from .sensors.reader import read_temperature

logger = logging.getLogger(__name__)

METRIC_SUBSYSTEM = "temperature"
METRIC_UNIT = "celcius"
METRIC_HELP = "Temperature of the sensor."
METRIC_LABELS = ["sensor_id", "sensor_name"]


def metric_name(namespace: str) -> str:
    return "_".join(p for p in (namespace, METRIC_SUBSYSTEM, METRIC_UNIT) if p)


def emit_reading(session: ScrapeSession, reading: SensorReading) -> bool:
    """
    Publish one reading onto the session sink.

    There is no human-readable name source, so sensor_name repeats the ID.
    Returns False when the scrape was already cancelled and the reading dropped.
    """
    if session.cancelled:
        logger.warning(f"Dropping late reading for {reading.sensor_id}: scrape already finished")
        return False
    session.sink.put(
        Sample(
            sensor_id=reading.sensor_id,
            sensor_name=reading.sensor_id,
            value=reading.temperature_celsius,
        )
    )
    return True


def _sensor_worker(sensor_id: str, base_path: str, session: ScrapeSession) -> None:
    try:
        reading = read_temperature(sensor_id, base_path, session)
    except ScrapeCancelledError as e:
        logger.warning(f"Skipping sensor {sensor_id}: {e}")
        return
    except ParseError as e:
        logger.error(f"Failed to parse sensor temperature: {e}")
        return
    except SensorReadError as e:
        logger.error(f"Failed to read sensor file: {e}")
        return
    except Exception:
        logger.exception(f"Unexpected error reading sensor {sensor_id}")
        return
    emit_reading(session, reading)


class OneWireCollector:
    """
    Prometheus custom collector for the sensors on one 1-Wire bus.

    Every call to collect() is a complete, independent scrape: the bus listing
    is read again and one worker thread per sensor reads its temperature.
    """

    def __init__(self, config: ExporterConfig) -> None:
        self.config = config
        self.name = metric_name(config.namespace)

    def _family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(self.name, METRIC_HELP, labels=METRIC_LABELS)

    def describe(self) -> List[GaugeMetricFamily]:
        return [self._family()]

    def new_session(self) -> ScrapeSession:
        return ScrapeSession(timeout=self.config.scrape_timeout)

    def scrape(self, session: Optional[ScrapeSession] = None) -> ScrapeSession:
        """Run one scrape into `session` and return it once its samples are final."""
        if session is None:
            session = self.new_session()
        base_path = self.config.devices_path

        try:
            session.sensor_ids = read_sensor_ids(base_path)
        except DirectoryReadError as e:
            logger.error(f"Failed to read sensor file: {e}")
            session.finalize()
            return session

        for sensor_id in session.sensor_ids:
            if sensor_id in session.workers:
                logger.debug(f"Sensor {sensor_id} listed twice, reading it once")
                continue
            t = threading.Thread(
                target=_sensor_worker,
                args=(sensor_id, base_path, session),
                name=f"w1-{sensor_id}",
                daemon=True,
            )
            t.start()
            session.workers[sensor_id] = t

        for t in session.workers.values():
            t.join(timeout=session.remaining())

        stalled = session.pending()
        if stalled:
            session.cancel()
            logger.warning(
                f"Scrape deadline reached with {len(stalled)} sensors outstanding: "
                + ", ".join(stalled)
            )

        samples = session.finalize()
        logger.debug(
            f"Scrape done: {len(samples)}/{len(session.sensor_ids)} sensors "
            f"in {session.elapsed():.3f}s"
        )
        return session

    def collect(self) -> Iterator[GaugeMetricFamily]:
        session = self.scrape()
        family = self._family()
        for sample in session.samples:
            family.add_metric(sample.labels, sample.value)
        yield family
