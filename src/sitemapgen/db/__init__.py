"""Sitemap persistence."""

from sitemapgen.db.models import SitemapRecord
from sitemapgen.db.repository import FileSitemapSink, SqlSitemapRepository

__all__ = [
    "SitemapRecord",
    "SqlSitemapRepository",
    "FileSitemapSink",
]
