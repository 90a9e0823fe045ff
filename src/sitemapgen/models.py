"""Pydantic models for sitemap generation inputs and outputs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

WILDCARD_HOST_NAME = "*"


class ContentKind(str, Enum):
    """Kind of content a language variant represents."""

    PAGE = "page"
    OTHER = "other"


class SitemapFormat(str, Enum):
    """Sitemap dialect used to shape the XML elements."""

    STANDARD = "standard"
    MOBILE = "mobile"


class HostBinding(BaseModel):
    """A host name bound to a site, optionally pinned to a language branch."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Host name (e.g., 'www.example.com' or '*')")
    language: Optional[str] = Field(None, description="Language branch served by this host")

    @property
    def is_wildcard(self) -> bool:
        return self.name == WILDCARD_HOST_NAME


class SiteConfig(BaseModel):
    """A site definition: canonical URL, start node and its host bindings."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Display name of the site")
    site_url: str = Field(..., description="Canonical site URL (e.g., 'https://example.com/')")
    start_node_id: int = Field(..., description="Content node used when the request has no root")
    hosts: tuple[HostBinding, ...] = Field(default_factory=tuple)

    @field_validator("site_url")
    @classmethod
    def validate_site_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"site_url must be an absolute http(s) URL: {v!r}")
        return v


class SitemapRequest(BaseModel):
    """Parameters for a single sitemap generation run."""

    model_config = ConfigDict(frozen=True)

    site_url: str = Field(..., description="Absolute URL of the site the sitemap is for")
    host: str = Field(default="sitemap.xml", description="Sitemap file name served by the site")
    root_node_id: Optional[int] = Field(
        default=None,
        description="Root content node; None or negative means the site's start node",
    )
    url_filter_rules: tuple[str, ...] = Field(
        default_factory=tuple, description="Path patterns excluded from the sitemap"
    )
    include_paths: tuple[str, ...] = Field(
        default_factory=tuple, description="If set, only paths matching one of these are kept"
    )
    format: SitemapFormat = Field(default=SitemapFormat.STANDARD)

    @field_validator("site_url")
    @classmethod
    def validate_site_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"site_url must be an absolute http(s) URL: {v!r}")
        return v

    @property
    def site_host(self) -> str:
        return urlparse(self.site_url).hostname or ""


class LanguageVariant(BaseModel):
    """A per-language rendition of a content node."""

    content_id: int = Field(..., description="Identifier of the owning content node")
    language_branch: str = Field(default="", description="Language branch (e.g., 'en')")
    kind: ContentKind = Field(default=ContentKind.PAGE)
    name: str = Field(default="")
    published: bool = Field(default=True)
    visible_to_everyone: bool = Field(default=True)
    include_in_sitemap: bool = Field(default=True)
    saved: Optional[datetime] = Field(None, description="Last saved time, used as lastmod")
    change_frequency: Optional[str] = Field(None, description="Sitemap changefreq hint")
    priority: Optional[float] = Field(None, ge=0.0, le=1.0)

    @property
    def is_page(self) -> bool:
        return self.kind == ContentKind.PAGE


class VirtualChildProvider(ABC):
    """Capability for pages that render extra sub-URLs not present in the tree.

    Keys are path suffixes appended to the page's canonical URL, values an
    optional last-modified override for that entry.
    """

    @abstractmethod
    def get_virtual_children(self) -> Optional[Mapping[str, Optional[datetime]]]:
        pass


class VirtualChildPage(LanguageVariant, VirtualChildProvider):
    """Page variant that advertises a static set of virtual children."""

    virtual_children: dict[str, Optional[datetime]] = Field(default_factory=dict)

    def get_virtual_children(self) -> Optional[Mapping[str, Optional[datetime]]]:
        return self.virtual_children


class ContentNode(BaseModel):
    """A node in the content tree."""

    id: int
    parent_id: Optional[int] = None
    slug: str = ""
    variants: list[LanguageVariant] = Field(default_factory=list)


class SitemapEntry(BaseModel):
    """A single URL emitted into the sitemap."""

    url: str
    override_timestamp: Optional[datetime] = None


class GenerationResult(BaseModel):
    """Outcome of a generation run."""

    success: bool
    entry_count: int = 0
    exceeded_cap: bool = False
    skipped: int = 0
    data: Optional[bytes] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "GenerationResult":
        return cls(success=False, entry_count=0, error=error)
