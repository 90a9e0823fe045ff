"""
sitemapgen configuration management.

Loads configuration from a sitemapgen.config file in the current directory.
This file stores project-specific settings like the database path and the
location of the site and content definitions.
"""

import os
from pathlib import Path
from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator

# Fixed by the sitemaps.org protocol; not configurable.
MAX_SITEMAP_ENTRY_COUNT = 50000


class SitemapGenConfig(BaseModel):
    """sitemapgen project configuration."""

    DEFAULT_DB_PATH: ClassVar[str] = ".sitemapgen/sitemaps.sqlite"
    DEFAULT_SITES_PATH: ClassVar[str] = "sites.yaml"
    DEFAULT_CONTENT_PATH: ClassVar[str] = "content.yaml"
    DEFAULT_FORMAT: ClassVar[str] = "standard"
    DEFAULT_HOST_CACHE_TTL_SECONDS: ClassVar[int] = 600
    DEFAULT_LOG_LEVEL: ClassVar[str] = "WARNING"

    VALID_FORMATS: ClassVar[list[str]] = ["standard", "mobile"]
    VALID_LOG_LEVELS: ClassVar[list[str]] = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    PATH_DB: str = Field(
        default=DEFAULT_DB_PATH,
        description="Path to the SQLite database file (relative to sitemapgen.config location)",
    )
    PATH_SITES: str = Field(
        default=DEFAULT_SITES_PATH,
        description="YAML file with site definitions and host bindings",
    )
    PATH_CONTENT: str = Field(
        default=DEFAULT_CONTENT_PATH,
        description="YAML file describing the content tree",
    )
    SITEMAP_FORMAT: str = Field(
        default=DEFAULT_FORMAT,
        description="Default sitemap dialect: 'standard' or 'mobile'",
    )
    HOST_CACHE_TTL_SECONDS: int = Field(
        default=DEFAULT_HOST_CACHE_TTL_SECONDS,
        description="Lifetime of cached host-binding lookups (0 disables the cache)",
        ge=0,
    )
    LOG_LEVEL: str = Field(
        default=DEFAULT_LOG_LEVEL,
        description="Logging level used by the CLI",
    )

    model_config = {"extra": "allow"}

    @field_validator("SITEMAP_FORMAT")
    @classmethod
    def validate_format(cls, v: str) -> str:
        v = v.lower()
        if v not in cls.VALID_FORMATS:
            raise ValueError(f"SITEMAP_FORMAT must be one of {cls.VALID_FORMATS}, got {v!r}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        v = str(v).upper()
        if v not in cls.VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {cls.VALID_LOG_LEVELS}, got {v!r}")
        return v

    def _get_project_root(self) -> Path:
        return get_config_file_path().parent

    def _resolve(self, value: str) -> Path:
        path = Path(value)
        if not path.is_absolute():
            return self._get_project_root() / path
        return path

    def get_absolute_db_path(self) -> Path:
        """Get absolute path to database file."""
        return self._resolve(self.PATH_DB)

    def get_db_directory(self) -> Path:
        return self.get_absolute_db_path().parent

    def get_absolute_sites_path(self) -> Path:
        """Get absolute path to the site definitions file."""
        return self._resolve(self.PATH_SITES)

    def get_absolute_content_path(self) -> Path:
        """Get absolute path to the content tree file."""
        return self._resolve(self.PATH_CONTENT)


def get_config_file_path() -> Path:
    """Get the path to the sitemapgen configuration file.

    SITEMAPGEN_PROJECT_ROOT overrides the current directory.
    """
    root = os.environ.get("SITEMAPGEN_PROJECT_ROOT")
    return (Path(root) if root else Path.cwd()) / "sitemapgen.config"


def config_file_exists() -> bool:
    """Check if sitemapgen.config exists."""
    return get_config_file_path().exists()


def load_config() -> SitemapGenConfig:
    """
    Load configuration from the sitemapgen.config file.

    The file holds key=value pairs:

    PATH_DB=.sitemapgen/sitemaps.sqlite
    SITEMAP_FORMAT="mobile"

    Returns:
        SitemapGenConfig with loaded settings

    Raises:
        FileNotFoundError: If sitemapgen.config doesn't exist
        ValueError: If configuration is invalid
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        raise FileNotFoundError(
            f"sitemapgen configuration file not found: {config_file}\n"
            "Run 'sitemapgen init' to create one."
        )

    config_data = {}
    with open(config_file, "r") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                config_data[key] = value

    return SitemapGenConfig(**config_data)


def create_config(
    db_path: str = SitemapGenConfig.DEFAULT_DB_PATH,
    sites_path: str = SitemapGenConfig.DEFAULT_SITES_PATH,
    content_path: str = SitemapGenConfig.DEFAULT_CONTENT_PATH,
) -> SitemapGenConfig:
    """
    Create a new sitemapgen.config file in the current directory.

    Args:
        db_path: Path to the SQLite database (relative to sitemapgen.config location)
        sites_path: Path to the site definitions YAML file
        content_path: Path to the content tree YAML file

    Returns:
        SitemapGenConfig instance
    """
    config = SitemapGenConfig(PATH_DB=db_path, PATH_SITES=sites_path, PATH_CONTENT=content_path)

    config_file = get_config_file_path()
    config_file.parent.mkdir(parents=True, exist_ok=True)

    with open(config_file, "w") as f:
        f.write("# sitemapgen Project Configuration\n")
        f.write("# This file is auto-generated by 'sitemapgen init'\n\n")
        f.write(f'PATH_DB="{config.PATH_DB}"\n')
        f.write(f'PATH_SITES="{config.PATH_SITES}"\n')
        f.write(f'PATH_CONTENT="{config.PATH_CONTENT}"\n')
        f.write(f'SITEMAP_FORMAT="{config.SITEMAP_FORMAT}"\n')
        f.write(f"HOST_CACHE_TTL_SECONDS={config.HOST_CACHE_TTL_SECONDS}\n")
        f.write(f'LOG_LEVEL="{config.LOG_LEVEL}"\n')

    return config


def get_config_or_default() -> SitemapGenConfig:
    """
    Get configuration, or return default if sitemapgen.config doesn't exist.

    Returns:
        SitemapGenConfig with loaded or default settings
    """
    if config_file_exists():
        return load_config()
    return SitemapGenConfig()
