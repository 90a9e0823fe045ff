"""SQLModel schema for stored sitemaps."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SitemapRecord(SQLModel, table=True):
    """A generated sitemap document and its generation metadata.

    generated_at is the only generation timestamp; the XML payload itself
    carries none, so regenerating an unchanged tree yields identical bytes.
    """

    __tablename__ = "sitemaps"

    id: Optional[int] = Field(default=None, primary_key=True)
    site_url: str = Field(index=True)
    host: str = Field(default="sitemap.xml")
    sitemap_format: str = Field(default="standard")
    data: bytes = Field(default=b"")
    entry_count: int = Field(default=0)
    exceeds_maximum_entry_count: bool = Field(default=False)
    generated_at: datetime = Field(default_factory=utc_now)

    __table_args__ = (UniqueConstraint("site_url", "host", name="unique_site_host"),)
