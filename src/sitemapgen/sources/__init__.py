"""Bundled collaborators: in-memory content tree, slug URL resolver, YAML loaders."""

from sitemapgen.sources.memory import (
    InMemoryContentRepository,
    SlugUrlResolver,
    StaticSiteConfigSource,
)
from sitemapgen.sources.yaml_loader import (
    load_content,
    load_sites,
    parse_content,
    parse_sites,
)

__all__ = [
    "InMemoryContentRepository",
    "SlugUrlResolver",
    "StaticSiteConfigSource",
    "load_content",
    "load_sites",
    "parse_content",
    "parse_sites",
]
