from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime, timezone


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are written in UTC; SQLite hands them back naive"""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def build_short_url(base_url: str, code: str) -> str:
    """Compose the public short URL for a code"""
    return f"{base_url.rstrip('/')}/{code}"


class LinkCreate(BaseModel):
    """Body of POST /api/links

    Both fields are plain strings here; URL and code format checks live in
    LinkService so that they surface as 400 with a readable error.
    """
    url: str = Field(..., description="Absolute http(s) URL to shorten")
    code: Optional[str] = Field(None, description="Optional custom code, [A-Za-z0-9]{6,8}")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"url": "https://example.com/docs", "code": "docs42"}
        }
    )


class LinkResponse(BaseModel):
    """Link as returned by the API, with the derived short_url"""
    code: str
    url: str
    clicks: int
    created_at: datetime
    last_clicked: Optional[datetime] = None
    short_url: str

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_link(cls, link, base_url: str) -> "LinkResponse":
        return cls(
            code=link.code,
            url=link.url,
            clicks=link.clicks,
            created_at=as_utc(link.created_at),
            last_clicked=as_utc(link.last_clicked),
            short_url=build_short_url(base_url, link.code),
        )


class OkResponse(BaseModel):
    ok: bool = True


class HealthResponse(BaseModel):
    ok: bool = True
    version: str


class ErrorResponse(BaseModel):
    error: str
