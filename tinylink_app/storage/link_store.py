"""
Relational link store.

The store is the only writer of Link rows. Uniqueness of codes is enforced
by the primary key, and click counting is one UPDATE statement, so
concurrent requests never need application-level locking.
"""

import logging
from typing import List

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tinylink_app.exceptions import CodeConflictError, LinkNotFoundError
from tinylink_app.models.link import Link, utcnow

logger = logging.getLogger(__name__)


class LinkStore:
    """
    SQLAlchemy-backed persistence for links.

    Every method runs against the injected session and commits its own
    write, so one store instance maps to one request.
    """

    def __init__(self, db: Session):
        self.db = db

    def insert(self, code: str, url: str) -> Link:
        """
        Insert a new link with zero clicks.

        Raises:
            CodeConflictError: the database rejected the code as a duplicate
        """
        link = Link(code=code, url=url, clicks=0, created_at=utcnow())
        self.db.add(link)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise CodeConflictError(code=code)
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(link)
        return link

    def list_all(self) -> List[Link]:
        """All links, newest first"""
        return (
            self.db.query(Link)
            .order_by(Link.created_at.desc(), Link.code)
            .all()
        )

    def find_by_code(self, code: str) -> Link:
        link = self.db.query(Link).filter(Link.code == code).first()
        if link is None:
            raise LinkNotFoundError(code=code)
        return link

    def exists(self, code: str) -> bool:
        """Advisory check; insert() is the authoritative uniqueness guard"""
        return self.db.query(Link.code).filter(Link.code == code).first() is not None

    def increment_clicks(self, code: str) -> None:
        """
        Count one click: clicks + 1 and last_clicked = now in a single UPDATE.

        Raises:
            LinkNotFoundError: no row matched (e.g. deleted after lookup)
        """
        statement = (
            update(Link)
            .where(Link.code == code)
            .values(clicks=Link.clicks + 1, last_clicked=utcnow())
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(statement)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        if result.rowcount == 0:
            raise LinkNotFoundError(code=code)

    def delete_by_code(self, code: str) -> None:
        statement = (
            delete(Link)
            .where(Link.code == code)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(statement)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        if result.rowcount == 0:
            raise LinkNotFoundError(code=code)
        logger.debug("Deleted link row %s", code)
