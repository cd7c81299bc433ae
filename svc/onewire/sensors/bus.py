# onewire/sensors/bus.py
from __future__ import annotations
import os
import logging
from typing import List

from onewire.config import MASTER_LISTING
from onewire.errors import DirectoryReadError

logger = logging.getLogger(__name__)


def listing_path(base_path: str) -> str:
    return os.path.join(base_path, MASTER_LISTING)


def read_sensor_ids(base_path: str) -> List[str]:
    """
    Return the sensor IDs named by the bus master listing, in file order.

    The listing ends with a newline, so splitting leaves one empty trailing
    entry which is dropped. Empty lines are skipped as well; IDs themselves
    are taken verbatim and not validated here.
    """
    path = listing_path(base_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DirectoryReadError(f"failed to read sensor listing {path}: {e}") from e

    entries = content.split("\n")[:-1]
    sensor_ids = [entry for entry in entries if entry]
    logger.debug(f"Found {len(sensor_ids)} sensors in {path}")
    return sensor_ids
