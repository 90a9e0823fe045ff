"""Per-run generation state, deduplication and entry cap enforcement."""

from dataclasses import dataclass, field
from typing import Optional

from sitemapgen.config import MAX_SITEMAP_ENTRY_COUNT
from sitemapgen.models import SiteConfig, SitemapEntry, SitemapRequest


@dataclass
class GenerationState:
    """Mutable state owned by exactly one generation run.

    Attributes:
        request: The request being served
        site: Site configuration matched for the request
        host_language: Language branch bound to the request's host, if any
        emitted_urls: URLs accepted by deduplication for this run
        emitted_count: Number of entry elements written (virtual children included)
        exceeded_cap: Set once an eligible entry was refused by the cap
        skipped: Entries dropped because their URL could not be resolved
        entries: Emitted entries in document order
    """

    request: SitemapRequest
    site: SiteConfig
    host_language: Optional[str] = None
    emitted_urls: set[str] = field(default_factory=set)
    entries: list[SitemapEntry] = field(default_factory=list)
    emitted_count: int = 0
    exceeded_cap: bool = False
    skipped: int = 0


class EntryDeduplicator:
    """Rejects URLs already present in the run's emitted set."""

    def __init__(self, state: GenerationState):
        self._state = state

    def try_add(self, url: str) -> bool:
        """Insert a URL; return False without side effects if it was already emitted."""
        if url in self._state.emitted_urls:
            return False
        self._state.emitted_urls.add(url)
        return True

    def add(self, url: str) -> None:
        """Insert a URL without an existence check."""
        self._state.emitted_urls.add(url)


class EntryCapEnforcer:
    """Tracks emitted entries against the fixed per-document ceiling."""

    def __init__(self, state: GenerationState, limit: int = MAX_SITEMAP_ENTRY_COUNT):
        self._state = state
        self.limit = limit

    def try_reserve(self) -> bool:
        """Reserve room for one entry.

        Returns False and marks the state as exceeded once the ceiling is reached.
        """
        if self._state.emitted_count >= self.limit:
            self._state.exceeded_cap = True
            return False
        self._state.emitted_count += 1
        return True
