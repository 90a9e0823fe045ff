"""Tests for sitemap persistence sinks."""

import json

import pytest

from sitemapgen.db import FileSitemapSink, SqlSitemapRepository
from sitemapgen.errors import PersistenceError

SITE = "https://example.com/"


@pytest.fixture
def sql_repository():
    return SqlSitemapRepository("sqlite://")


class TestSqlSitemapRepository:
    """Test suite for SqlSitemapRepository."""

    def test_save_and_get(self, sql_repository):
        sql_repository.save(SITE, "sitemap.xml", b"<urlset />", 3, False)

        record = sql_repository.get(SITE, "sitemap.xml")
        assert record is not None
        assert record.data == b"<urlset />"
        assert record.entry_count == 3
        assert record.exceeds_maximum_entry_count is False
        assert record.sitemap_format == "standard"
        assert record.generated_at is not None

    def test_save_replaces_existing_record(self, sql_repository):
        sql_repository.save(SITE, "sitemap.xml", b"old", 1, False)
        sql_repository.save(SITE, "sitemap.xml", b"new", 50000, True, sitemap_format="mobile")

        records = sql_repository.list_records()
        assert len(records) == 1
        assert records[0].data == b"new"
        assert records[0].entry_count == 50000
        assert records[0].exceeds_maximum_entry_count is True
        assert records[0].sitemap_format == "mobile"

    def test_records_keyed_by_site_and_host(self, sql_repository):
        sql_repository.save(SITE, "sitemap.xml", b"a", 1, False)
        sql_repository.save(SITE, "sitemap-mobile.xml", b"b", 1, False)
        sql_repository.save("https://example.fr/", "sitemap.xml", b"c", 1, False)

        records = sql_repository.list_records()
        assert [(r.site_url, r.host) for r in records] == [
            ("https://example.com/", "sitemap-mobile.xml"),
            ("https://example.com/", "sitemap.xml"),
            ("https://example.fr/", "sitemap.xml"),
        ]

    def test_get_missing(self, sql_repository):
        assert sql_repository.get(SITE) is None

    def test_delete(self, sql_repository):
        sql_repository.save(SITE, "sitemap.xml", b"a", 1, False)

        assert sql_repository.delete(SITE) is True
        assert sql_repository.delete(SITE) is False
        assert sql_repository.list_records() == []

    def test_from_path_creates_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "sitemaps.sqlite"
        repository = SqlSitemapRepository.from_path(db_path)
        repository.save(SITE, "sitemap.xml", b"a", 1, False)

        assert db_path.exists()
        assert SqlSitemapRepository.from_path(db_path).get(SITE).data == b"a"

    def test_save_failure_wrapped(self, sql_repository, monkeypatch):
        def broken_scope():
            raise RuntimeError("database is locked")

        monkeypatch.setattr(sql_repository, "session_scope", broken_scope)

        with pytest.raises(PersistenceError) as exc_info:
            sql_repository.save(SITE, "sitemap.xml", b"a", 1, False)
        assert isinstance(exc_info.value.original_error, RuntimeError)


class TestFileSitemapSink:
    """Test suite for FileSitemapSink."""

    def test_writes_document_and_metadata(self, tmp_path):
        sink = FileSitemapSink(tmp_path)
        sink.save(SITE, "sitemap.xml", b"<urlset />", 2, True, sitemap_format="mobile")

        path = tmp_path / "example.com" / "sitemap.xml"
        assert path.read_bytes() == b"<urlset />"

        metadata = json.loads((tmp_path / "example.com" / "sitemap.xml.json").read_text())
        assert metadata["entry_count"] == 2
        assert metadata["exceeds_maximum_entry_count"] is True
        assert metadata["format"] == "mobile"

    def test_path_for(self, tmp_path):
        sink = FileSitemapSink(tmp_path)
        assert sink.path_for("https://Example.FR/", "sm.xml") == tmp_path / "example.fr" / "sm.xml"

    def test_overwrite_leaves_no_temporary_files(self, tmp_path):
        sink = FileSitemapSink(tmp_path)
        sink.save(SITE, "sitemap.xml", b"old", 1, False)
        sink.save(SITE, "sitemap.xml", b"new", 2, False)

        site_dir = tmp_path / "example.com"
        assert sorted(p.name for p in site_dir.iterdir()) == ["sitemap.xml", "sitemap.xml.json"]
        assert (site_dir / "sitemap.xml").read_bytes() == b"new"
        assert json.loads((site_dir / "sitemap.xml.json").read_text())["entry_count"] == 2

    def test_metadata_failure_leaves_no_sitemap(self, tmp_path):
        site_dir = tmp_path / "example.com"
        (site_dir / "sitemap.xml.json").mkdir(parents=True)

        with pytest.raises(PersistenceError):
            FileSitemapSink(tmp_path).save(SITE, "sitemap.xml", b"<urlset/>", 1, False)

        assert not (site_dir / "sitemap.xml").exists()
        assert [p.name for p in site_dir.iterdir()] == ["sitemap.xml.json"]

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(PersistenceError):
            FileSitemapSink(blocker).save(SITE, "sitemap.xml", b"a", 1, False)
