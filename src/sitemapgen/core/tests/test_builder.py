"""Tests for SitemapBuilder end-to-end generation."""

from unittest.mock import MagicMock
from xml.etree.ElementTree import fromstring

import pytest

from sitemapgen.config import MAX_SITEMAP_ENTRY_COUNT
from sitemapgen.core import HostLanguageCache, SitemapBuilder
from sitemapgen.dialects import SITEMAP_NAMESPACE
from sitemapgen.errors import ConfigurationMismatchError, PersistenceError
from sitemapgen.models import (
    ContentNode,
    HostBinding,
    LanguageVariant,
    SiteConfig,
    SitemapFormat,
    SitemapRequest,
)
from sitemapgen.sources import InMemoryContentRepository, SlugUrlResolver, StaticSiteConfigSource
from sitemapgen.testing import RecordingSink

NS = {"sm": SITEMAP_NAMESPACE}


def document_locs(data: bytes) -> list[str]:
    return [loc.text for loc in fromstring(data).findall("sm:url/sm:loc", NS)]


class TestResolveSite:
    """Test suite for site lookup."""

    def test_match_by_site_url(self, builder):
        site = builder.resolve_site(SitemapRequest(site_url="https://EXAMPLE.com"))
        assert site is not None and site.name == "Example"

    def test_match_by_host_binding(self, builder):
        site = builder.resolve_site(SitemapRequest(site_url="https://Example.FR/"))
        assert site is not None and site.name == "Example"

    def test_wildcard_binding_does_not_match_hosts(self, builder):
        assert builder.resolve_site(SitemapRequest(site_url="https://unknown.org/")) is None

    def test_require_site_raises(self, builder):
        with pytest.raises(ConfigurationMismatchError):
            builder.require_site(SitemapRequest(site_url="https://unknown.org/"))


class TestGenerate:
    """Test suite for SitemapBuilder.generate()."""

    def test_generates_and_saves(self, builder, recording_sink):
        result = builder.generate(SitemapRequest(site_url="https://example.com/"))

        assert result.success is True
        assert result.entry_count == 6
        assert result.exceeded_cap is False
        assert document_locs(result.data) == [
            "https://example.com/",
            "https://example.com/about/",
            "https://example.com/events/",
            "https://example.com/events/concert/",
            "https://example.com/events/festival/",
            "https://example.com/logo.png",
        ]

        saved = recording_sink.last
        assert saved["site_url"] == "https://example.com/"
        assert saved["host"] == "sitemap.xml"
        assert saved["data"] == result.data
        assert saved["entry_count"] == 6
        assert saved["exceeded_cap"] is False
        assert saved["sitemap_format"] == "standard"

    def test_unknown_site_produces_empty_sitemap(self, builder, recording_sink):
        result = builder.generate(SitemapRequest(site_url="https://unknown.org/"))

        assert result.success is True
        assert result.entry_count == 0
        assert document_locs(result.data) == []
        assert len(recording_sink.saved) == 1

    def test_explicit_root_node(self, builder):
        result = builder.generate(SitemapRequest(site_url="https://example.com/", root_node_id=7))

        assert document_locs(result.data) == [
            "https://example.com/events/",
            "https://example.com/events/concert/",
            "https://example.com/events/festival/",
        ]

    def test_negative_root_uses_start_node(self, builder):
        result = builder.generate(SitemapRequest(site_url="https://example.com/", root_node_id=-1))
        assert result.entry_count == 6

    def test_root_at_absolute_top(self, builder):
        result = builder.generate(SitemapRequest(site_url="https://example.com/", root_node_id=1))
        assert result.entry_count == 6

    def test_no_duplicate_urls_in_document(self, builder):
        result = builder.generate(SitemapRequest(site_url="https://example.com/"))
        urls = document_locs(result.data)
        assert len(urls) == len(set(urls))

    def test_output_is_idempotent(self, builder):
        request = SitemapRequest(site_url="https://example.com/")
        first = builder.generate(request)
        second = builder.generate(request)
        assert first.data == second.data

    def test_runs_do_not_share_state(self, builder):
        builder.generate(SitemapRequest(site_url="https://example.com/"))
        result = builder.generate(SitemapRequest(site_url="https://example.fr/"))

        assert result.entry_count == 3
        assert document_locs(result.data)[0] == "https://example.fr/"

    def test_mobile_format_from_request(self, builder, recording_sink):
        result = builder.generate(
            SitemapRequest(site_url="https://example.com/", format=SitemapFormat.MOBILE)
        )
        assert b"<mobile:mobile />" in result.data
        assert recording_sink.last["sitemap_format"] == "mobile"

    def test_cap_truncates_and_flags(self, site_source, content_repository, recording_sink):
        builder = SitemapBuilder(
            site_source=site_source,
            repository=content_repository,
            resolver=SlugUrlResolver(content_repository),
            sink=recording_sink,
            cap_limit=2,
        )
        result = builder.generate(SitemapRequest(site_url="https://example.com/"))

        assert result.success is True
        assert result.entry_count == 2
        assert result.exceeded_cap is True
        assert recording_sink.last["exceeded_cap"] is True
        assert len(document_locs(result.data)) == 2

    def test_default_cap_is_fifty_thousand(self, recording_sink):
        nodes = [ContentNode(id=10, variants=[LanguageVariant(content_id=10)])]
        nodes += [
            ContentNode(id=i, parent_id=10, slug=f"n{i}", variants=[LanguageVariant(content_id=i)])
            for i in range(11, 11 + 50010)
        ]
        repository = InMemoryContentRepository(nodes)
        site = SiteConfig(
            site_url="https://site/", start_node_id=10, hosts=(HostBinding(name="site"),)
        )
        builder = SitemapBuilder(
            site_source=StaticSiteConfigSource([site]),
            repository=repository,
            resolver=SlugUrlResolver(repository),
            sink=recording_sink,
        )
        result = builder.generate(SitemapRequest(site_url="https://site/"))

        assert result.success is True
        assert result.entry_count == MAX_SITEMAP_ENTRY_COUNT == 50000
        assert result.exceeded_cap is True
        locs = document_locs(result.data)
        assert len(locs) == 50000
        assert locs[0] == "https://site/"
        assert locs[-1] == "https://site/n50009"
        assert recording_sink.last["entry_count"] == 50000

    def test_injected_host_cache_is_used(self, site_source, content_repository, recording_sink):
        cache = HostLanguageCache(ttl=60)
        builder = SitemapBuilder(
            site_source=site_source,
            repository=content_repository,
            resolver=SlugUrlResolver(content_repository),
            sink=recording_sink,
            host_cache=cache,
        )
        builder.generate(SitemapRequest(site_url="https://example.com/"))

        assert cache.get("https://example.com/", "fr") is True


class TestGenerateFailures:
    """Test suite for error conversion at the top level."""

    def test_persistence_failure_returns_failed_result(self, site_source, content_repository):
        sink = RecordingSink(error=OSError("disk full"))
        builder = SitemapBuilder(
            site_source=site_source,
            repository=content_repository,
            resolver=SlugUrlResolver(content_repository),
            sink=sink,
        )
        result = builder.generate(SitemapRequest(site_url="https://example.com/"))

        assert result.success is False
        assert result.entry_count == 0
        assert "disk full" in result.error

    def test_repository_failure_is_logged(self, site_source, recording_sink, caplog):
        repository = MagicMock()
        repository.root_node_id = 1
        repository.get_descendants.side_effect = RuntimeError("content store offline")
        builder = SitemapBuilder(
            site_source=site_source,
            repository=repository,
            resolver=MagicMock(),
            sink=recording_sink,
        )

        with caplog.at_level("ERROR", logger="sitemapgen.core.builder"):
            result = builder.generate(SitemapRequest(site_url="https://example.com/"))

        assert result.success is False
        assert result.entry_count == 0
        assert recording_sink.saved == []
        assert "content store offline" in caplog.text

    def test_site_source_failure(self, content_repository, recording_sink):
        site_source = MagicMock(spec=StaticSiteConfigSource)
        site_source.list_sites.side_effect = RuntimeError("no sites")
        builder = SitemapBuilder(
            site_source=site_source,
            repository=content_repository,
            resolver=SlugUrlResolver(content_repository),
            sink=recording_sink,
        )
        result = builder.generate(SitemapRequest(site_url="https://example.com/"))

        assert result.success is False

    def test_persistence_error_wrapping(self, site_source, content_repository, caplog):
        sink = RecordingSink(error=ValueError("bad payload"))
        builder = SitemapBuilder(
            site_source=site_source,
            repository=content_repository,
            resolver=SlugUrlResolver(content_repository),
            sink=sink,
        )

        with caplog.at_level("ERROR", logger="sitemapgen.core.builder"):
            builder.generate(SitemapRequest(site_url="https://example.com/"))

        record = caplog.records[-1]
        assert isinstance(record.exc_info[1], PersistenceError)
