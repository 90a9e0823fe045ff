"""URL canonicalization against a site's public origin."""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urlsplit

from sitemapgen.core.interfaces import UrlResolver
from sitemapgen.errors import ResolutionError
from sitemapgen.models import LanguageVariant

logger = logging.getLogger(__name__)


def get_site_base(site_url: str) -> str:
    """Return scheme and host of a site URL (e.g., 'https://example.com')."""
    parsed = urlsplit(site_url)
    return f"{parsed.scheme}://{parsed.netloc}"


def combine_url(base: str, path: str) -> str:
    """Join a base URL and a path with exactly one slash between them."""
    if not path:
        return base.rstrip("/") + "/"
    return base.rstrip("/") + "/" + path.lstrip("/")


def strip_language_segment(url: str, language: str) -> str:
    """Replace the first '/{language}/' segment of a URL with '/'."""
    if not language:
        return url
    pattern = re.compile(f"/{re.escape(language)}/", re.IGNORECASE)
    return pattern.sub("/", url, count=1)


class UrlNormalizer:
    """Resolves content to absolute URLs on the site's canonical origin.

    Every URL returned by the resolver is re-rooted on the site's scheme and
    host, so a resolver answering with another host never leaks it into the
    sitemap. When the request's host is bound to the variant's language, the
    language segment is removed from the path.
    """

    def __init__(self, resolver: UrlResolver, site_url: str):
        self.resolver = resolver
        self.site_url = site_url
        self.site_base = get_site_base(site_url)

    def resolve(self, variant: LanguageVariant, host_language: Optional[str] = None) -> str:
        """Resolve a variant to its canonical absolute URL.

        Args:
            variant: Language variant to resolve
            host_language: Language branch bound to the sitemap's host

        Returns:
            Absolute URL on the site's origin

        Raises:
            ResolutionError: If the resolver fails or returns an unusable value
        """
        try:
            if variant.is_page:
                url = self.resolver.resolve(variant.content_id, variant.language_branch)
            else:
                url = self.resolver.resolve(variant.content_id)
        except ResolutionError:
            raise
        except Exception as e:
            raise ResolutionError(
                f"Resolver failed for content {variant.content_id}: {e}",
                content_id=variant.content_id,
                original_error=e,
            ) from e

        if not isinstance(url, str) or not url.strip():
            raise ResolutionError(
                f"Resolver returned no URL for content {variant.content_id}",
                content_id=variant.content_id,
            )
        url = url.strip()

        if (
            variant.is_page
            and host_language
            and variant.language_branch.lower() == host_language.lower()
        ):
            url = strip_language_segment(url, host_language)

        return self.canonicalize(url, content_id=variant.content_id)

    def canonicalize(self, url: str, content_id: Optional[int] = None) -> str:
        """Force a relative or absolute URL onto the site's origin."""
        try:
            parsed = urlsplit(url)
        except ValueError as e:
            raise ResolutionError(
                f"Malformed URL {url!r}", content_id=content_id, original_error=e
            ) from e

        if parsed.netloc:
            # Absolute: keep only the path
            result = combine_url(self.site_base, parsed.path)
        elif parsed.scheme:
            raise ResolutionError(f"Unsupported URL {url!r}", content_id=content_id)
        else:
            result = combine_url(self.site_base, url)

        if any(ch.isspace() for ch in result):
            raise ResolutionError(f"Malformed URL {result!r}", content_id=content_id)

        check = urlsplit(result)
        if check.scheme not in ("http", "https") or not check.netloc:
            raise ResolutionError(f"Malformed URL {result!r}", content_id=content_id)

        return result
