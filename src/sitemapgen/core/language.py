"""Language branch exclusion for sites with language-specific host bindings."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from sitemapgen.models import HostBinding, LanguageVariant, SiteConfig

logger = logging.getLogger(__name__)


class HostLanguageCache:
    """Expiring cache for "does a host binding exist for language L" lookups.

    Keys are (site_url, language) pairs. A ttl of 0 disables caching. One
    instance may be shared by concurrent runs; access is serialized by a lock.
    """

    def __init__(self, ttl: float = 600.0, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[tuple[str, str], tuple[bool, float]] = {}

    def get(self, site_url: str, language: str) -> Optional[bool]:
        key = (site_url, language.lower())
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                self._entries.pop(key, None)
                return None
            return value

    def set(self, site_url: str, language: str, value: bool) -> None:
        if self.ttl <= 0:
            return
        with self._lock:
            self._entries[(site_url, language.lower())] = (value, self._clock() + self.ttl)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def find_host_binding(site: SiteConfig, host: str) -> Optional[HostBinding]:
    """Return the binding for a host name, falling back to the wildcard binding."""
    host = host.lower()
    for binding in site.hosts:
        if binding.name.lower() == host:
            return binding
    for binding in site.hosts:
        if binding.is_wildcard:
            return binding
    return None


def get_host_language(site: SiteConfig, host: str) -> Optional[str]:
    """Language branch bound to the host serving the sitemap, if any."""
    binding = find_host_binding(site, host)
    if binding is None or not binding.language:
        return None
    return binding.language


class LanguageBranchPolicy:
    """Decides whether a page's language variant belongs on this host's sitemap.

    A variant is excluded when the host is pinned to another language and a
    different host of the same site is explicitly bound to the variant's
    language. Without such a binding the variant is kept as a fallback.
    """

    def __init__(
        self,
        site: SiteConfig,
        cache_key: Optional[str] = None,
        cache: Optional[HostLanguageCache] = None,
    ):
        self.site = site
        self.cache_key = cache_key or site.site_url
        self.cache = cache if cache is not None else HostLanguageCache()

    def host_binding_exists_for(self, language: str) -> bool:
        cached = self.cache.get(self.cache_key, language)
        if cached is not None:
            return cached

        exists = any(
            binding.language is not None and binding.language.lower() == language.lower()
            for binding in self.site.hosts
        )
        self.cache.set(self.cache_key, language, exists)
        return exists

    def should_exclude(self, variant: LanguageVariant, host_language: Optional[str]) -> bool:
        if not host_language:
            return False
        if host_language.lower() == variant.language_branch.lower():
            return False
        return self.host_binding_exists_for(variant.language_branch)
