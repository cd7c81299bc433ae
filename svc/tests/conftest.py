from pathlib import Path
from typing import Dict, Iterable

import pytest

from onewire.config import ExporterConfig


def write_bus(root: Path, listing: str, values: Dict[str, str]) -> None:
    master = root / "w1_bus_master1"
    master.mkdir(parents=True, exist_ok=True)
    (master / "w1_master_slaves").write_text(listing)
    for sensor_id, content in values.items():
        sensor_dir = root / sensor_id
        sensor_dir.mkdir(parents=True, exist_ok=True)
        (sensor_dir / "temperature").write_text(content)


def listing_for(sensor_ids: Iterable[str]) -> str:
    return "".join(f"{s}\n" for s in sensor_ids)


@pytest.fixture
def bus_root(tmp_path):
    """An empty directory standing in for /sys/bus/w1/devices."""
    return tmp_path / "devices"


@pytest.fixture
def make_config(bus_root):
    def _make(**overrides) -> ExporterConfig:
        params = {"devices_path": str(bus_root), "namespace": "onewire", "scrape_timeout": 5.0}
        params.update(overrides)
        return ExporterConfig(**params)
    return _make
