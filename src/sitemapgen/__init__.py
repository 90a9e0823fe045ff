"""sitemapgen - XML sitemaps generated from a hierarchical content tree."""

__version__ = "0.1.0"

from sitemapgen.core import SitemapBuilder  # noqa: E402
from sitemapgen.errors import (  # noqa: E402
    ConfigurationMismatchError,
    PersistenceError,
    ResolutionError,
    SerializationError,
    SitemapError,
)
from sitemapgen.models import (  # noqa: E402
    ContentKind,
    ContentNode,
    GenerationResult,
    HostBinding,
    LanguageVariant,
    SiteConfig,
    SitemapEntry,
    SitemapFormat,
    SitemapRequest,
    VirtualChildPage,
    VirtualChildProvider,
)

__all__ = [
    "__version__",
    "SitemapBuilder",
    "SitemapError",
    "ConfigurationMismatchError",
    "ResolutionError",
    "SerializationError",
    "PersistenceError",
    "ContentKind",
    "ContentNode",
    "GenerationResult",
    "HostBinding",
    "LanguageVariant",
    "SiteConfig",
    "SitemapEntry",
    "SitemapFormat",
    "SitemapRequest",
    "VirtualChildPage",
    "VirtualChildProvider",
]
