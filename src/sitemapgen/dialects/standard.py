"""Standard sitemaps.org dialect."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from xml.etree.ElementTree import Element

from sitemapgen.dialects.base import SITEMAP_NAMESPACE, SitemapDialect, add_url_fields
from sitemapgen.models import LanguageVariant


def make_root() -> Element:
    urlset = Element("urlset")
    urlset.set("xmlns", SITEMAP_NAMESPACE)
    return urlset


def make_entry(
    variant: LanguageVariant,
    url: str,
    override_timestamp: Optional[datetime] = None,
) -> Element:
    return add_url_fields(Element("url"), variant, url, override_timestamp)


STANDARD_DIALECT = SitemapDialect(name="standard", make_root=make_root, make_entry=make_entry)
