"""
Fixed-period background polling for live click counts.

The dashboard has no push channel: a daemon thread re-fetches the link list
every `interval` seconds and hands the rows to a callback. Overlapping or
failed polls are harmless because they are plain reads.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

import httpx

from tinylink_app.dashboard.client import DashboardApiError

logger = logging.getLogger(__name__)


class CounterPoller:
    """
    Run fetch() -> on_rows(rows) every `interval` seconds until stop().
    """

    def __init__(
        self,
        fetch: Callable[[], List[Dict]],
        on_rows: Callable[[List[Dict]], None],
        interval: float = 1.0
    ):
        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")
        self.fetch = fetch
        self.on_rows = on_rows
        self.interval = interval
        self.poll_count = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="tinylink-poller", daemon=True)
        self._thread.start()
        logger.debug("Counter poller started (interval=%ss)", self.interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout if timeout is not None else self.interval * 2)
            self._thread = None
        logger.debug("Counter poller stopped after %d polls", self.poll_count)

    def poll_once(self) -> None:
        try:
            rows = self.fetch()
        except (httpx.HTTPError, DashboardApiError, ValueError) as e:
            # ValueError covers a 2xx answer whose body is not JSON
            logger.warning("Live update failed: %s", e)
            return
        self.poll_count += 1
        self.on_rows(rows)

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.poll_once()
            except Exception:
                logger.exception("Live update callback failed; polling continues")
