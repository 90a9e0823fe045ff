"""Top-level sitemap generation: site resolution, traversal, serialization, persistence."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit

from sitemapgen.config import MAX_SITEMAP_ENTRY_COUNT
from sitemapgen.core.filters import PageFilter, PathFilter
from sitemapgen.core.interfaces import (
    ContentRepository,
    PersistenceSink,
    SiteConfigSource,
    UrlResolver,
)
from sitemapgen.core.language import HostLanguageCache, LanguageBranchPolicy, get_host_language
from sitemapgen.core.state import GenerationState
from sitemapgen.core.urls import UrlNormalizer
from sitemapgen.core.walker import ContentTreeWalker
from sitemapgen.dialects import DialectRegistry, SitemapDialect, build_document
from sitemapgen.errors import ConfigurationMismatchError, PersistenceError
from sitemapgen.models import GenerationResult, SiteConfig, SitemapRequest

logger = logging.getLogger(__name__)


def _url_identity(url: str) -> tuple[str, str, str]:
    parsed = urlsplit(url)
    return parsed.scheme.lower(), parsed.netloc.lower(), parsed.path or "/"


class SitemapBuilder:
    """Generates and stores the sitemap for a request.

    Collaborators are injected; each call to generate() builds its own
    GenerationState, so one builder can serve concurrent runs.

    Usage:
        builder = SitemapBuilder(sites, repository, resolver, sink)
        result = builder.generate(SitemapRequest(site_url="https://example.com/"))
        if result.success:
            print(result.entry_count)
    """

    def __init__(
        self,
        site_source: SiteConfigSource,
        repository: ContentRepository,
        resolver: UrlResolver,
        sink: PersistenceSink,
        dialect: Optional[SitemapDialect] = None,
        path_filter: Optional[PathFilter] = None,
        page_filter: Optional[PageFilter] = None,
        host_cache: Optional[HostLanguageCache] = None,
        cap_limit: int = MAX_SITEMAP_ENTRY_COUNT,
    ):
        self.site_source = site_source
        self.repository = repository
        self.resolver = resolver
        self.sink = sink
        self.dialect = dialect
        self.path_filter = path_filter or PathFilter()
        self.page_filter = page_filter or PageFilter()
        self.host_cache = host_cache
        self.cap_limit = cap_limit

    def resolve_site(self, request: SitemapRequest) -> Optional[SiteConfig]:
        """Find the site whose URL or one of whose host names matches the request."""
        identity = _url_identity(request.site_url)
        host = request.site_host.lower()
        for site in self.site_source.list_sites():
            if _url_identity(site.site_url) == identity:
                return site
            if any(binding.name.lower() == host for binding in site.hosts):
                return site
        return None

    def require_site(self, request: SitemapRequest) -> SiteConfig:
        """Like resolve_site() but raises when nothing matches.

        Raises:
            ConfigurationMismatchError: If no site matches the request URL
        """
        site = self.resolve_site(request)
        if site is None:
            raise ConfigurationMismatchError(f"No site configured for {request.site_url}")
        return site

    def get_dialect(self, request: SitemapRequest) -> SitemapDialect:
        return self.dialect or DialectRegistry.get(request.format)

    def generate(self, request: SitemapRequest) -> GenerationResult:
        """Generate, serialize and persist the sitemap for a request.

        Never raises: any error is logged and reported as a failed result with
        an entry count of 0.
        """
        try:
            dialect = self.get_dialect(request)
            site = self.resolve_site(request)

            if site is None:
                logger.debug(f"No site configuration matches {request.site_url}")
                elements = []
                entry_count, exceeded_cap, skipped = 0, False, 0
            else:
                state = GenerationState(
                    request=request,
                    site=site,
                    host_language=get_host_language(site, request.site_host),
                )
                elements = self._collect_elements(site, state, dialect)
                entry_count = state.emitted_count
                exceeded_cap = state.exceeded_cap
                skipped = state.skipped

            data = build_document(dialect.make_root(), elements)
            self._save(request, data, entry_count, exceeded_cap)

            return GenerationResult(
                success=True,
                entry_count=entry_count,
                exceeded_cap=exceeded_cap,
                skipped=skipped,
                data=data,
            )
        except Exception as e:
            logger.error(
                f"Error generating sitemap for {request.site_url} ({request.host}): {e}",
                exc_info=True,
            )
            return GenerationResult.failure(str(e))

    def _collect_elements(self, site: SiteConfig, state: GenerationState, dialect: SitemapDialect):
        request = state.request
        root_id = request.root_node_id
        if root_id is None or root_id < 0:
            root_id = site.start_node_id

        cache = self.host_cache if self.host_cache is not None else HostLanguageCache()
        walker = ContentTreeWalker(
            repository=self.repository,
            normalizer=UrlNormalizer(self.resolver, request.site_url),
            language_policy=LanguageBranchPolicy(site, cache_key=request.site_url, cache=cache),
            dialect=dialect,
            path_filter=self.path_filter,
            page_filter=self.page_filter,
            cap_limit=self.cap_limit,
        )
        return walker.walk(root_id, state)

    def _save(self, request: SitemapRequest, data: bytes, entry_count: int, exceeded_cap: bool):
        try:
            self.sink.save(
                request.site_url,
                request.host,
                data,
                entry_count,
                exceeded_cap,
                sitemap_format=request.format.value,
            )
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to save sitemap: {e}", original_error=e) from e
