"""
Testing utilities for sitemap generation.

Provides a recording persistence sink and a small multilingual sample site.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sitemapgen.core.interfaces import PersistenceSink, UrlResolver
from sitemapgen.models import (
    ContentKind,
    ContentNode,
    HostBinding,
    LanguageVariant,
    SiteConfig,
    VirtualChildPage,
)
from sitemapgen.sources.memory import InMemoryContentRepository, StaticSiteConfigSource

SAVED = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
CONCERT = datetime(2024, 2, 1, 20, 0, 0, tzinfo=timezone.utc)
FESTIVAL = datetime(2024, 3, 1, 18, 30, 0, tzinfo=timezone.utc)


class RecordingSink(PersistenceSink):
    """Persistence sink that keeps every save call in memory."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.saved: list[dict[str, Any]] = []

    def save(
        self,
        site_url: str,
        host: str,
        data: bytes,
        entry_count: int,
        exceeded_cap: bool,
        sitemap_format: str = "standard",
    ) -> None:
        if self.error:
            raise self.error
        self.saved.append(
            {
                "site_url": site_url,
                "host": host,
                "data": data,
                "entry_count": entry_count,
                "exceeded_cap": exceeded_cap,
                "sitemap_format": sitemap_format,
            }
        )

    @property
    def last(self) -> dict[str, Any]:
        return self.saved[-1]


class MappingUrlResolver(UrlResolver):
    """Resolver answering from a {(content_id, language): url} mapping.

    A value that is an exception instance is raised instead of returned.
    """

    def __init__(self, urls: dict):
        self.urls = urls
        self.calls: list[tuple[int, Optional[str]]] = []

    def resolve(self, content_id: int, language_branch: Optional[str] = None) -> str:
        self.calls.append((content_id, language_branch))
        value = self.urls[(content_id, language_branch)]
        if isinstance(value, Exception):
            raise value
        return value


def page(content_id: int, language: str, **kwargs) -> LanguageVariant:
    return LanguageVariant(content_id=content_id, language_branch=language, saved=SAVED, **kwargs)


def build_sample_repository() -> InMemoryContentRepository:
    """
    Sample tree under the absolute top (1):

        5  ""          en, fr    (start page)
        6  about       en, fr
        7  events      en        (virtual children: concert, festival)
        8  logo.png    other
        9  secret      en        (unpublished)
    """
    return InMemoryContentRepository(
        [
            ContentNode(id=5, slug="", variants=[page(5, "en"), page(5, "fr")]),
            ContentNode(id=6, parent_id=5, slug="about", variants=[page(6, "en"), page(6, "fr")]),
            ContentNode(
                id=7,
                parent_id=5,
                slug="events",
                variants=[
                    VirtualChildPage(
                        content_id=7,
                        language_branch="en",
                        saved=SAVED,
                        virtual_children={"concert": CONCERT, "festival": FESTIVAL},
                    )
                ],
            ),
            ContentNode(
                id=8,
                parent_id=5,
                slug="logo.png",
                variants=[LanguageVariant(content_id=8, kind=ContentKind.OTHER)],
            ),
            ContentNode(
                id=9, parent_id=5, slug="secret", variants=[page(9, "en", published=False)]
            ),
        ],
        root_node_id=1,
    )


def build_sample_site(hosts: Optional[tuple[HostBinding, ...]] = None) -> SiteConfig:
    if hosts is None:
        hosts = (
            HostBinding(name="example.com", language="en"),
            HostBinding(name="example.fr", language="fr"),
            HostBinding(name="*"),
        )
    return SiteConfig(
        name="Example",
        site_url="https://example.com/",
        start_node_id=5,
        hosts=hosts,
    )


def build_sample_sites(hosts: Optional[tuple[HostBinding, ...]] = None) -> StaticSiteConfigSource:
    return StaticSiteConfigSource([build_sample_site(hosts)])
