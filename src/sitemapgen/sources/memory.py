"""In-memory content tree, URL resolver and site list."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from sitemapgen.core.interfaces import ContentRepository, SiteConfigSource, UrlResolver
from sitemapgen.errors import ResolutionError
from sitemapgen.models import ContentNode, LanguageVariant, SiteConfig

DEFAULT_ROOT_NODE_ID = 1


class InMemoryContentRepository(ContentRepository):
    """Content tree held in memory.

    Children keep their insertion order; descendants are returned depth-first
    in pre-order, which keeps traversal (and so deduplication) deterministic.
    The absolute top node does not need to be registered.
    """

    def __init__(
        self,
        nodes: Iterable[ContentNode] = (),
        root_node_id: int = DEFAULT_ROOT_NODE_ID,
    ):
        self._root_node_id = root_node_id
        self._nodes: dict[int, ContentNode] = {}
        self._children: dict[int, list[int]] = {}
        for node in nodes:
            self.add_node(node)

    @property
    def root_node_id(self) -> int:
        return self._root_node_id

    def add_node(self, node: ContentNode) -> None:
        if node.id in self._nodes:
            raise ValueError(f"Duplicate content node id: {node.id}")
        self._nodes[node.id] = node
        parent = node.parent_id if node.parent_id is not None else self._root_node_id
        if node.id != self._root_node_id:
            self._children.setdefault(parent, []).append(node.id)

    def get_node(self, node_id: int) -> ContentNode:
        if node_id not in self._nodes:
            raise KeyError(f"Unknown content node: {node_id}")
        return self._nodes[node_id]

    def get_descendants(self, node_id: int) -> Sequence[ContentNode]:
        if node_id not in self._nodes and node_id != self._root_node_id:
            raise KeyError(f"Unknown content node: {node_id}")

        result: list[ContentNode] = []
        stack = list(reversed(self._children.get(node_id, [])))
        while stack:
            current = stack.pop()
            result.append(self._nodes[current])
            stack.extend(reversed(self._children.get(current, [])))
        return result

    def get_language_variants(self, node: ContentNode) -> Sequence[LanguageVariant]:
        return list(node.variants)

    def __len__(self) -> int:
        return len(self._nodes)


class SlugUrlResolver(UrlResolver):
    """Builds URLs from the slugs of a node and its ancestors.

    Pages resolve to '/{language}/{slug/path}/', other content to '/{slug/path}'.
    """

    def __init__(self, repository: InMemoryContentRepository):
        self.repository = repository

    def get_slug_path(self, content_id: int) -> list[str]:
        slugs: list[str] = []
        node_id: Optional[int] = content_id
        seen: set[int] = set()
        while node_id is not None and node_id != self.repository.root_node_id:
            if node_id in seen:
                raise ResolutionError(f"Cycle in content tree at {node_id}", content_id=content_id)
            seen.add(node_id)
            try:
                node = self.repository.get_node(node_id)
            except KeyError as e:
                raise ResolutionError(
                    f"Unknown content node: {node_id}", content_id=content_id, original_error=e
                ) from e
            if node.slug:
                slugs.append(node.slug.strip("/"))
            node_id = node.parent_id
        return list(reversed(slugs))

    def resolve(self, content_id: int, language_branch: Optional[str] = None) -> str:
        path = "/".join(self.get_slug_path(content_id))
        if language_branch:
            return f"/{language_branch}/{path}/" if path else f"/{language_branch}/"
        return f"/{path}"


class StaticSiteConfigSource(SiteConfigSource):
    """Fixed list of site definitions."""

    def __init__(self, sites: Iterable[SiteConfig] = ()):
        self._sites = list(sites)

    def list_sites(self) -> Sequence[SiteConfig]:
        return list(self._sites)
