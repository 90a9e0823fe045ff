"""Google mobile sitemap dialect: standard entries tagged with <mobile:mobile/>."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from xml.etree.ElementTree import Element, SubElement

from sitemapgen.dialects.base import SITEMAP_NAMESPACE, SitemapDialect, add_url_fields
from sitemapgen.models import LanguageVariant

MOBILE_NAMESPACE = "http://www.google.com/schemas/sitemap-mobile/1.0"


def make_root() -> Element:
    urlset = Element("urlset")
    urlset.set("xmlns", SITEMAP_NAMESPACE)
    urlset.set("xmlns:mobile", MOBILE_NAMESPACE)
    return urlset


def make_entry(
    variant: LanguageVariant,
    url: str,
    override_timestamp: Optional[datetime] = None,
) -> Element:
    url_el = add_url_fields(Element("url"), variant, url, override_timestamp)
    SubElement(url_el, "mobile:mobile")
    return url_el


MOBILE_DIALECT = SitemapDialect(name="mobile", make_root=make_root, make_entry=make_entry)
