"""Element-generation strategy shared by all sitemap dialects."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional
from xml.etree.ElementTree import Element, SubElement, tostring

from sitemapgen.errors import SerializationError
from sitemapgen.models import LanguageVariant

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

RootFactory = Callable[[], Element]
EntryFactory = Callable[[LanguageVariant, str, Optional[datetime]], Element]


@dataclass(frozen=True)
class SitemapDialect:
    """A pair of element factories describing one sitemap flavour.

    Attributes:
        name: Dialect name (matches SitemapFormat values)
        make_root: Builds the empty root element
        make_entry: Builds one entry element from (variant, url, override timestamp)
    """

    name: str
    make_root: RootFactory
    make_entry: EntryFactory


def format_w3c_datetime(value: datetime) -> str:
    """Format a datetime as W3C datetime; naive values are treated as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat(timespec="seconds")


def add_url_fields(
    url_el: Element,
    variant: LanguageVariant,
    url: str,
    override_timestamp: Optional[datetime] = None,
) -> Element:
    """Add <loc>, <lastmod>, <changefreq> and <priority> children."""
    SubElement(url_el, "loc").text = url
    lastmod = override_timestamp or variant.saved
    if lastmod is not None:
        SubElement(url_el, "lastmod").text = format_w3c_datetime(lastmod)
    if variant.change_frequency:
        SubElement(url_el, "changefreq").text = variant.change_frequency
    if variant.priority is not None:
        SubElement(url_el, "priority").text = f"{variant.priority:.1f}"
    return url_el


def build_document(root: Element, entries: Iterable[Element]) -> bytes:
    """Append entries to the root and serialize as a UTF-8 XML document."""
    try:
        root.extend(entries)
        return (XML_DECLARATION + tostring(root, encoding="unicode")).encode("utf-8")
    except Exception as e:
        raise SerializationError(f"Failed to serialize sitemap: {e}", original_error=e) from e
