"""Path and page exclusion rules."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import Iterable

from sitemapgen.models import LanguageVariant, SitemapRequest

GLOB_CHARS = ("*", "?", "[")


def normalize_rule(rule: str) -> str:
    rule = rule.strip().lower()
    if not rule.startswith("/"):
        rule = "/" + rule
    return rule


def path_matches(path: str, rule: str) -> bool:
    """Check a URL path against a prefix or glob rule (case-insensitive)."""
    path = path.lower() or "/"
    rule = normalize_rule(rule)
    if any(ch in rule for ch in GLOB_CHARS):
        return fnmatch(path, rule)
    return path.startswith(rule)


def matches_any(path: str, rules: Iterable[str]) -> bool:
    return any(path_matches(path, rule) for rule in rules if rule.strip())


class PathFilter:
    """Drops URLs whose path is excluded by the request's rules.

    A path is filtered when it matches an exclusion rule, or when include
    rules are configured and it matches none of them.
    """

    def is_filtered(self, path: str, request: SitemapRequest) -> bool:
        if matches_any(path, request.url_filter_rules):
            return True
        include = [rule for rule in request.include_paths if rule.strip()]
        if include and not matches_any(path, include):
            return True
        return False


class PageFilter:
    """Excludes pages that must not be public: unpublished, restricted or opted out."""

    def should_exclude(self, page: LanguageVariant) -> bool:
        if not page.is_page:
            return False
        if not page.published:
            return True
        if not page.visible_to_everyone:
            return True
        return not page.include_in_sitemap
