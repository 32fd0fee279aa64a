import logging

from tinylink_app.storage.link_store import LinkStore

logger = logging.getLogger(__name__)


class RedirectService:
    """
    Resolve a short code to its destination and count the click.

    Flow: lookup -> increment -> return target URL. Both steps raise
    LinkNotFoundError for unknown codes, including a link deleted between
    the lookup and the increment.
    """

    def __init__(self, store: LinkStore):
        self.store = store

    def resolve(self, code: str) -> str:
        link = self.store.find_by_code(code)
        target = link.url
        self.store.increment_clicks(code)
        logger.debug("Redirecting %s -> %s", code, target)
        return target
