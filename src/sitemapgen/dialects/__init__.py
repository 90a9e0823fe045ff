"""Sitemap dialects - element-generation strategies.

Each dialect is a SitemapDialect value holding a root factory and an entry
factory. Dialects are looked up by SitemapFormat through DialectRegistry.

Usage:
    from sitemapgen.dialects import DialectRegistry

    dialect = DialectRegistry.get("mobile")
    root = dialect.make_root()
"""

from typing import Dict, Union

from sitemapgen.dialects.base import (
    SITEMAP_NAMESPACE,
    XML_DECLARATION,
    SitemapDialect,
    build_document,
    format_w3c_datetime,
)
from sitemapgen.dialects.mobile import MOBILE_DIALECT, MOBILE_NAMESPACE
from sitemapgen.dialects.standard import STANDARD_DIALECT
from sitemapgen.models import SitemapFormat


class DialectRegistry:
    """Registry for sitemap dialects."""

    _dialects: Dict[str, SitemapDialect] = {}

    @classmethod
    def register(cls, dialect: SitemapDialect) -> None:
        cls._dialects[dialect.name] = dialect

    @classmethod
    def get(cls, name: Union[str, SitemapFormat]) -> SitemapDialect:
        """Get a dialect by name.

        Raises:
            KeyError: If the dialect is not registered
        """
        key = name.value if isinstance(name, SitemapFormat) else str(name).lower()
        if key not in cls._dialects:
            raise KeyError(f"Unknown sitemap dialect: {name}")
        return cls._dialects[key]

    @classmethod
    def list_dialects(cls) -> list[str]:
        return list(cls._dialects.keys())


DialectRegistry.register(STANDARD_DIALECT)
DialectRegistry.register(MOBILE_DIALECT)


__all__ = [
    "DialectRegistry",
    "SitemapDialect",
    "STANDARD_DIALECT",
    "MOBILE_DIALECT",
    "SITEMAP_NAMESPACE",
    "MOBILE_NAMESPACE",
    "XML_DECLARATION",
    "build_document",
    "format_w3c_datetime",
]
