import logging
import re
from typing import List, Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError

from tinylink_app.exceptions import (
    CodeConflictError,
    CodeGenerationExhaustedError,
    LinkValidationError,
)
from tinylink_app.schemas.link import LinkResponse
from tinylink_app.services.code_generator import ShortCodeStrategy
from tinylink_app.storage.link_store import LinkStore

logger = logging.getLogger(__name__)

CUSTOM_CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{6,8}$")
INVALID_URL_MESSAGE = "Invalid URL. Include protocol (http:// or https://)."
INVALID_CODE_MESSAGE = "Custom code must match [A-Za-z0-9]{6,8}."

# HttpUrl follows the WHATWG parser, which trims whitespace and accepts
# "https:host" or backslashes. The stored string is what the redirect
# sends, so it must already be in plain absolute form.
ABSOLUTE_URL_PATTERN = re.compile(r"^https?://[^\s\x00-\x1f\x7f\\]+\Z", re.IGNORECASE)

_http_url = TypeAdapter(HttpUrl)


def validate_url(url) -> str:
    """Return url unchanged if it is an absolute http(s) URL, else raise"""
    if not isinstance(url, str) or not ABSOLUTE_URL_PATTERN.match(url):
        raise LinkValidationError(INVALID_URL_MESSAGE)
    try:
        _http_url.validate_python(url)
    except ValidationError:
        raise LinkValidationError(INVALID_URL_MESSAGE)
    return url


def normalize_custom_code(code: Optional[str]) -> Optional[str]:
    """Trim a custom code; blank means "generate one for me" """
    if code is None:
        return None
    code = str(code).strip()
    if not code:
        return None
    if not CUSTOM_CODE_PATTERN.match(code):
        raise LinkValidationError(INVALID_CODE_MESSAGE, code=code)
    return code


class LinkService:
    """
    Link lifecycle: validation, code assignment, listing and deletion.

    Store, code generator and base URL are injected so the service holds
    no global state and can be built per request.
    """

    def __init__(
        self,
        store: LinkStore,
        code_generator: ShortCodeStrategy,
        base_url: str,
        max_retries: int = 5
    ):
        self.store = store
        self.code_generator = code_generator
        self.base_url = base_url
        self.max_retries = max_retries

    def create_link(self, url: str, custom_code: Optional[str] = None) -> LinkResponse:
        """Create a short link

        Process:
        1. Validate URL and optional custom code
        2. Custom code: advisory existence check, then insert
        3. Otherwise: generate candidates, at most max_retries attempts
        4. Return the stored link with its short_url

        The insert is the real uniqueness guard: a duplicate detected by the
        database surfaces as CodeConflictError even if the pre-check passed.
        """
        url = validate_url(url)
        code = normalize_custom_code(custom_code)

        if code is not None:
            if self.store.exists(code):
                raise CodeConflictError(code=code)
            link = self.store.insert(code, url)
        else:
            link = self._insert_with_generated_code(url)

        logger.info("Created link %s -> %s", link.code, link.url)
        return self._to_response(link)

    def _insert_with_generated_code(self, url: str):
        for attempt in range(1, self.max_retries + 1):
            candidate = self.code_generator.generate()
            if self.store.exists(candidate):
                logger.debug("Generated code %s collided (attempt %d)", candidate, attempt)
                continue
            try:
                return self.store.insert(candidate, url)
            except CodeConflictError:
                logger.debug("Generated code %s lost insert race (attempt %d)", candidate, attempt)

        logger.error("Could not generate a unique code after %d attempts", self.max_retries)
        raise CodeGenerationExhaustedError()

    def list_links(self) -> List[LinkResponse]:
        return [self._to_response(link) for link in self.store.list_all()]

    def get_link(self, code: str) -> LinkResponse:
        return self._to_response(self.store.find_by_code(code))

    def delete_link(self, code: str) -> None:
        self.store.delete_by_code(code)
        logger.info("Deleted link %s", code)

    def _to_response(self, link) -> LinkResponse:
        return LinkResponse.from_link(link, self.base_url)
