# onewire/session.py
from __future__ import annotations
import queue
import threading
import time
from typing import Dict, List, Optional

from .sensors.interface import Sample


class ScrapeSession:
    """
    Request-scoped state for exactly one scrape.

    Holds the discovered sensor IDs, the worker threads the orchestrator joins
    before the result set is final, and the sink the workers publish into.
    A session is never reused: build a new one per request.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.sensor_ids: List[str] = []
        self.workers: Dict[str, threading.Thread] = {}
        self.sink: queue.Queue[Sample] = queue.Queue()
        self.started = time.monotonic()
        self.deadline = self.started + timeout if timeout else None
        self._cancelled = threading.Event()
        self._samples: Optional[List[Sample]] = None

    # --- deadline / cancellation -------------------------------------------

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, None when the scrape is unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        if self.deadline is not None and time.monotonic() >= self.deadline:
            self._cancelled.set()
            return True
        return False

    # --- results -----------------------------------------------------------

    def pending(self) -> List[str]:
        """Sensor IDs whose worker is still running."""
        return [sensor_id for sensor_id, t in self.workers.items() if t.is_alive()]

    @property
    def final(self) -> bool:
        return self._samples is not None

    def finalize(self) -> List[Sample]:
        """Drain the sink once; later emissions are no longer part of this scrape."""
        if self._samples is None:
            samples: List[Sample] = []
            while True:
                try:
                    samples.append(self.sink.get_nowait())
                except queue.Empty:
                    break
            self._samples = samples
        return self._samples

    @property
    def samples(self) -> List[Sample]:
        if self._samples is None:
            raise RuntimeError("scrape session read before all workers finished")
        return self._samples

    def elapsed(self) -> float:
        return time.monotonic() - self.started
