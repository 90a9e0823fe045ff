"""Content tree traversal producing sitemap entry elements."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit
from xml.etree.ElementTree import Element

from sitemapgen.config import MAX_SITEMAP_ENTRY_COUNT
from sitemapgen.core.filters import PageFilter, PathFilter
from sitemapgen.core.interfaces import ContentRepository
from sitemapgen.core.language import LanguageBranchPolicy
from sitemapgen.core.state import EntryCapEnforcer, EntryDeduplicator, GenerationState
from sitemapgen.core.urls import UrlNormalizer
from sitemapgen.core.virtual import VirtualChildExpander
from sitemapgen.dialects import SitemapDialect
from sitemapgen.errors import ResolutionError
from sitemapgen.models import (
    ContentNode,
    LanguageVariant,
    SitemapEntry,
    VirtualChildProvider,
)

logger = logging.getLogger(__name__)


class ContentTreeWalker:
    """Walks a subtree and emits one element per eligible language variant.

    Per variant the pipeline is: language exclusion, page exclusion, URL
    resolution, path filter, deduplication, cap reservation, element creation,
    then virtual child expansion. Traversal stops as soon as the cap refuses
    an entry.
    """

    def __init__(
        self,
        repository: ContentRepository,
        normalizer: UrlNormalizer,
        language_policy: LanguageBranchPolicy,
        dialect: SitemapDialect,
        path_filter: Optional[PathFilter] = None,
        page_filter: Optional[PageFilter] = None,
        cap_limit: int = MAX_SITEMAP_ENTRY_COUNT,
        virtual_children: Optional[VirtualChildExpander] = None,
    ):
        self.repository = repository
        self.normalizer = normalizer
        self.language_policy = language_policy
        self.dialect = dialect
        self.path_filter = path_filter or PathFilter()
        self.page_filter = page_filter or PageFilter()
        self.cap_limit = cap_limit
        self.virtual_children = virtual_children or VirtualChildExpander()

    def collect_nodes(self, root_id: int) -> list[ContentNode]:
        """Root (unless it is the tree's absolute top) followed by its descendants."""
        nodes = list(self.repository.get_descendants(root_id))
        if root_id != self.repository.root_node_id:
            nodes.insert(0, self.repository.get_node(root_id))
        return nodes

    def walk(self, root_id: int, state: GenerationState) -> list[Element]:
        dedup = EntryDeduplicator(state)
        cap = EntryCapEnforcer(state, self.cap_limit)
        elements: list[Element] = []

        for node in self.collect_nodes(root_id):
            for variant in self.repository.get_language_variants(node):
                if variant.is_page and self.language_policy.should_exclude(
                    variant, state.host_language
                ):
                    continue

                if not self._emit_variant(variant, state, dedup, cap, elements):
                    logger.debug(
                        f"Entry cap of {self.cap_limit} reached for "
                        f"{state.request.site_url}, stopping traversal"
                    )
                    return elements

        return elements

    def _emit_variant(
        self,
        variant: LanguageVariant,
        state: GenerationState,
        dedup: EntryDeduplicator,
        cap: EntryCapEnforcer,
        elements: list[Element],
    ) -> bool:
        """Emit a variant and its virtual children. Returns False once the cap is hit."""
        if self.page_filter.should_exclude(variant):
            return True

        try:
            url = self.normalizer.resolve(variant, state.host_language)
        except ResolutionError as e:
            logger.warning(
                f"Skipping content {variant.content_id} "
                f"({variant.language_branch or '-'}): {e.message}"
            )
            state.skipped += 1
            return True

        if self.path_filter.is_filtered(urlsplit(url).path, state.request):
            return True
        if not dedup.try_add(url):
            return True
        if not cap.try_reserve():
            return False
        self._append(variant, SitemapEntry(url=url), state, elements)

        if variant.is_page and isinstance(variant, VirtualChildProvider):
            children, completed = self.virtual_children.expand(variant, url, dedup, cap)
            for entry in children:
                self._append(variant, entry, state, elements)
            return completed
        return True

    def _append(
        self,
        variant: LanguageVariant,
        entry: SitemapEntry,
        state: GenerationState,
        elements: list[Element],
    ) -> None:
        state.entries.append(entry)
        elements.append(self.dialect.make_entry(variant, entry.url, entry.override_timestamp))
