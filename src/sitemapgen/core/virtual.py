"""Expansion of virtual children advertised by pages."""

from __future__ import annotations

import logging

from sitemapgen.core.state import EntryCapEnforcer, EntryDeduplicator
from sitemapgen.models import SitemapEntry, VirtualChildProvider

logger = logging.getLogger(__name__)


def make_virtual_url(parent_url: str, suffix: str) -> str:
    """Build a virtual child URL: parent + suffix + trailing slash."""
    base = parent_url.rstrip("/") + "/"
    suffix = suffix.strip("/")
    return base + suffix + "/" if suffix else base


class VirtualChildExpander:
    """Turns a provider's suffix mapping into entries under the page's URL.

    Each child consumes one cap slot; empty suffixes are ignored. Child URLs
    are added to the emitted set without an existence check; keeping suffixes
    unique is the page's job.
    """

    def expand(
        self,
        page: VirtualChildProvider,
        parent_url: str,
        dedup: EntryDeduplicator,
        cap: EntryCapEnforcer,
    ) -> tuple[list[SitemapEntry], bool]:
        """Return the child entries and whether expansion finished within the cap."""
        entries: list[SitemapEntry] = []
        children = page.get_virtual_children()
        if not children:
            return entries, True

        for suffix, timestamp in children.items():
            if not suffix.strip("/"):
                logger.debug(f"Ignoring empty virtual child suffix under {parent_url}")
                continue
            if not cap.try_reserve():
                return entries, False
            url = make_virtual_url(parent_url, suffix)
            dedup.add(url)
            entries.append(SitemapEntry(url=url, override_timestamp=timestamp))

        return entries, True
