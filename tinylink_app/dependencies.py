"""
FastAPI dependencies for dependency injection.

Services are built per request around a request-scoped database session;
the code generator is stateless and shared.

Pattern: Dependency Injection
- Routes depend on services, services depend on the store
- Tests swap get_db (or any provider) through app.dependency_overrides
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from tinylink_app.config import settings
from tinylink_app.database.connection import get_db
from tinylink_app.services.code_generator import RandomShortCodeStrategy, ShortCodeStrategy
from tinylink_app.services.link_service import LinkService
from tinylink_app.services.redirect_service import RedirectService
from tinylink_app.storage.link_store import LinkStore


@lru_cache()
def get_code_generator() -> ShortCodeStrategy:
    """Shared code generator configured from settings.code_length"""
    return RandomShortCodeStrategy(length=settings.code_length)


def get_base_url() -> str:
    return settings.base_url


def get_link_store(db: Session = Depends(get_db)) -> LinkStore:
    return LinkStore(db)


def get_link_service(
    store: LinkStore = Depends(get_link_store),
    code_generator: ShortCodeStrategy = Depends(get_code_generator),
    base_url: str = Depends(get_base_url)
) -> LinkService:
    return LinkService(
        store=store,
        code_generator=code_generator,
        base_url=base_url,
        max_retries=settings.max_retries
    )


def get_redirect_service(store: LinkStore = Depends(get_link_store)) -> RedirectService:
    return RedirectService(store)
