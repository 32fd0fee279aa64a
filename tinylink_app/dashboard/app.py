import logging
from typing import Callable, Dict, List, Optional

from tinylink_app.dashboard.client import LinkApiClient
from tinylink_app.dashboard.poller import CounterPoller
from tinylink_app.dashboard.table import LinkTable

logger = logging.getLogger(__name__)


def _always_confirm(code: str) -> bool:
    return True


class Dashboard:
    """
    Dashboard state: the link table, the current search and live updates.

    Full list fetches happen on load, on search change and after a create
    or delete. Between those, the poller only patches counter cells.
    """

    def __init__(
        self,
        api: LinkApiClient,
        table: Optional[LinkTable] = None,
        confirm: Callable[[str], bool] = _always_confirm,
        poll_interval: float = 1.0,
        on_change: Optional[Callable[[List[str]], None]] = None
    ):
        self.api = api
        self.table = table or LinkTable()
        self.confirm = confirm
        self.query = ""
        self.on_change = on_change
        self.poller = CounterPoller(
            fetch=self.api.list_links,
            on_rows=self._apply_counters,
            interval=poll_interval
        )

    def load(self) -> List[Dict]:
        return self.table.render(self.api.list_links(), self.query)

    def search(self, query: str) -> List[Dict]:
        self.query = query or ""
        return self.load()

    def create(self, url: str, code: Optional[str] = None) -> Dict:
        url = (url or "").strip()
        if not url:
            raise ValueError("Please enter a URL")
        link = self.api.create_link(url, (code or "").strip() or None)
        logger.info("Created %s", link["short_url"])
        self.load()
        return link

    def delete(self, code: str) -> bool:
        """Delete after confirmation; returns False if the user declined"""
        if not self.confirm(code):
            return False
        self.api.delete_link(code)
        logger.info("Deleted %s", code)
        self.load()
        return True

    def refresh_counters(self) -> List[str]:
        return self._apply_counters(self.api.list_links())

    def start_live_updates(self) -> None:
        self.poller.start()

    def stop_live_updates(self) -> None:
        self.poller.stop()

    def _apply_counters(self, rows: List[Dict]) -> List[str]:
        changed = self.table.patch_counters(rows)
        if changed and self.on_change is not None:
            self.on_change(changed)
        return changed
