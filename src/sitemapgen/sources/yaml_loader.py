"""
Load site definitions and content trees from YAML files.

Sites file:

    sites:
      - name: Example
        site_url: https://example.com/
        start_node_id: 5
        hosts:
          - name: example.com
            language: en
          - name: "*"

Content file (children nest under their parent):

    root_node_id: 1
    nodes:
      - id: 5
        slug: ""
        variants:
          - language: en
            saved: 2024-01-01T00:00:00
        children:
          - id: 6
            slug: events
            variants:
              - language: en
                virtual_children:
                  concert: 2024-02-01T20:00:00
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from sitemapgen.models import (
    ContentNode,
    HostBinding,
    LanguageVariant,
    SiteConfig,
    VirtualChildPage,
)
from sitemapgen.sources.memory import (
    DEFAULT_ROOT_NODE_ID,
    InMemoryContentRepository,
    StaticSiteConfigSource,
)

logger = logging.getLogger(__name__)


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


def parse_sites(data: dict[str, Any]) -> list[SiteConfig]:
    """Build SiteConfig objects from a parsed sites document."""
    sites = []
    for raw in data.get("sites") or []:
        hosts = tuple(HostBinding(**host) for host in raw.get("hosts") or [])
        sites.append(
            SiteConfig(
                name=raw.get("name", ""),
                site_url=raw["site_url"],
                start_node_id=raw["start_node_id"],
                hosts=hosts,
            )
        )
    return sites


def parse_variant(content_id: int, raw: dict[str, Any]) -> LanguageVariant:
    raw = dict(raw)
    if "language" in raw:
        raw["language_branch"] = raw.pop("language")
    raw["content_id"] = content_id
    if "virtual_children" in raw:
        children = raw.pop("virtual_children") or {}
        return VirtualChildPage(
            virtual_children={str(suffix): ts for suffix, ts in children.items()}, **raw
        )
    return LanguageVariant(**raw)


def parse_content(data: dict[str, Any]) -> InMemoryContentRepository:
    """Build an in-memory repository from a parsed content document."""
    repository = InMemoryContentRepository(
        root_node_id=data.get("root_node_id", DEFAULT_ROOT_NODE_ID)
    )

    # (raw node, parent id) pairs, parents before children
    pending: list[tuple[dict[str, Any], Optional[int]]] = [
        (raw, None) for raw in reversed(data.get("nodes") or [])
    ]
    while pending:
        raw, parent_id = pending.pop()
        node_id = raw["id"]
        variants = [parse_variant(node_id, v) for v in raw.get("variants") or []]
        repository.add_node(
            ContentNode(
                id=node_id,
                parent_id=raw.get("parent_id", parent_id),
                slug=str(raw.get("slug", "")),
                variants=variants,
            )
        )
        for child in reversed(raw.get("children") or []):
            pending.append((child, node_id))

    return repository


def load_sites(path: Path) -> StaticSiteConfigSource:
    """Load site definitions from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file content is invalid
    """
    try:
        sites = parse_sites(_read_yaml(path))
    except (KeyError, ValidationError) as e:
        raise ValueError(f"Invalid site definitions in {path}: {e}") from e
    logger.debug(f"Loaded {len(sites)} site(s) from {path}")
    return StaticSiteConfigSource(sites)


def load_content(path: Path) -> InMemoryContentRepository:
    """Load a content tree from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file content is invalid
    """
    try:
        repository = parse_content(_read_yaml(path))
    except (KeyError, ValidationError) as e:
        raise ValueError(f"Invalid content tree in {path}: {e}") from e
    logger.debug(f"Loaded {len(repository)} content node(s) from {path}")
    return repository
