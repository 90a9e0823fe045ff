"""Sitemap core module - traversal, filtering, deduplication and the entry cap."""

from sitemapgen.core.builder import SitemapBuilder
from sitemapgen.core.filters import PageFilter, PathFilter
from sitemapgen.core.interfaces import (
    ContentRepository,
    PersistenceSink,
    SiteConfigSource,
    UrlResolver,
)
from sitemapgen.core.language import (
    HostLanguageCache,
    LanguageBranchPolicy,
    find_host_binding,
    get_host_language,
)
from sitemapgen.core.state import EntryCapEnforcer, EntryDeduplicator, GenerationState
from sitemapgen.core.urls import UrlNormalizer, combine_url, strip_language_segment
from sitemapgen.core.virtual import VirtualChildExpander, make_virtual_url
from sitemapgen.core.walker import ContentTreeWalker

__all__ = [
    "SitemapBuilder",
    "ContentTreeWalker",
    "UrlNormalizer",
    "LanguageBranchPolicy",
    "HostLanguageCache",
    "EntryDeduplicator",
    "EntryCapEnforcer",
    "GenerationState",
    "PathFilter",
    "PageFilter",
    "ContentRepository",
    "UrlResolver",
    "SiteConfigSource",
    "PersistenceSink",
    "combine_url",
    "strip_language_segment",
    "find_host_binding",
    "get_host_language",
    "VirtualChildExpander",
    "make_virtual_url",
]
