import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from tinylink_app.exceptions import LinkNotFoundError
from tinylink_app.services.redirect_service import RedirectService
from tinylink_app.dependencies import get_redirect_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["redirect"])

# Path segments owned by other routes. They are registered before this
# router, so only the bare tokens can ever land here.
RESERVED_SEGMENTS = frozenset({"api", "healthz", "code", "docs", "redoc", "openapi.json"})


def _not_found() -> PlainTextResponse:
    return PlainTextResponse("Not found", status_code=status.HTTP_404_NOT_FOUND)


@router.get("/{code}", include_in_schema=False)
def redirect_to_url(
    code: str,
    redirect_service: RedirectService = Depends(get_redirect_service)
):
    """
    Redirect to the original URL and count the click.

    Flow:
    1. Look up the code
    2. Increment clicks and last_clicked in one UPDATE
    3. 302 to the stored URL

    Unknown codes (or a link deleted mid-request) answer 404 as plain text.
    """
    if code in RESERVED_SEGMENTS:
        return _not_found()

    try:
        target = redirect_service.resolve(code)
    except LinkNotFoundError:
        return _not_found()
    except SQLAlchemyError:
        logger.exception("Redirect failed for code %s", code)
        return PlainTextResponse("Server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
