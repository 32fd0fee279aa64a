from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text
from tinylink_app.database.connection import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Link(Base):
    """
    A short code mapped to its destination URL plus usage counters.

    The code is the primary key, so uniqueness is enforced by the database
    itself and not only by the existence check in the service layer.
    created_at is stamped by the application clock (microsecond precision)
    so newest-first ordering stays stable on SQLite as well.
    """
    __tablename__ = "links"
    __table_args__ = (
        CheckConstraint("clicks >= 0", name="ck_links_clicks_non_negative"),
    )

    code = Column(String(8), primary_key=True)
    url = Column(Text, nullable=False)
    clicks = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    last_clicked = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Link(code='{self.code}', clicks={self.clicks})>"
