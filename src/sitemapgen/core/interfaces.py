"""Interfaces for the collaborators the sitemap pipeline reads from and writes to."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from sitemapgen.models import ContentNode, LanguageVariant, SiteConfig


class ContentRepository(ABC):
    """Read-only access to the content tree."""

    @property
    @abstractmethod
    def root_node_id(self) -> int:
        """Identifier of the absolute top of the tree (never a sitemap entry)."""

    @abstractmethod
    def get_descendants(self, node_id: int) -> Sequence[ContentNode]:
        """Return all descendants of a node in a stable order.

        Raises:
            KeyError: If the node does not exist
        """

    @abstractmethod
    def get_node(self, node_id: int) -> ContentNode:
        """Return a single node.

        Raises:
            KeyError: If the node does not exist
        """

    @abstractmethod
    def get_language_variants(self, node: ContentNode) -> Sequence[LanguageVariant]:
        pass


class UrlResolver(ABC):
    """Maps content to its public URL (relative or absolute)."""

    @abstractmethod
    def resolve(self, content_id: int, language_branch: Optional[str] = None) -> str:
        pass


class SiteConfigSource(ABC):
    """Lists configured sites."""

    @abstractmethod
    def list_sites(self) -> Sequence[SiteConfig]:
        pass


class PersistenceSink(ABC):
    """Stores generated sitemap payloads."""

    @abstractmethod
    def save(
        self,
        site_url: str,
        host: str,
        data: bytes,
        entry_count: int,
        exceeded_cap: bool,
        sitemap_format: str = "standard",
    ) -> None:
        """Persist one generated document.

        Raises:
            PersistenceError: If the payload could not be written
        """
