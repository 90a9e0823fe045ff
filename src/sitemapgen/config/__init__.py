"""
sitemapgen configuration module.

Re-exports the configuration model and the helpers used to locate, load and
create the sitemapgen.config file.
"""

from sitemapgen.config.base import (
    MAX_SITEMAP_ENTRY_COUNT,
    SitemapGenConfig,
    config_file_exists,
    create_config,
    get_config_file_path,
    get_config_or_default,
    load_config,
)

__all__ = [
    "MAX_SITEMAP_ENTRY_COUNT",
    "SitemapGenConfig",
    "config_file_exists",
    "create_config",
    "get_config_file_path",
    "get_config_or_default",
    "load_config",
]
