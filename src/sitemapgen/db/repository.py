"""Persistence sinks: SQLite-backed repository and plain files."""

from __future__ import annotations

import json
import logging
import os
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from sqlmodel import Session, SQLModel, create_engine, select

from sitemapgen.core.interfaces import PersistenceSink
from sitemapgen.db.models import SitemapRecord, utc_now
from sitemapgen.errors import PersistenceError

logger = logging.getLogger(__name__)


class SqlSitemapRepository(PersistenceSink):
    """Stores one SitemapRecord per (site_url, host) pair.

    Usage:
        repo = SqlSitemapRepository.from_path(Path(".sitemapgen/sitemaps.sqlite"))
        repo.save("https://example.com/", "sitemap.xml", data, 10, False)
        record = repo.get("https://example.com/", "sitemap.xml")
    """

    def __init__(self, database_url: str = "sqlite://"):
        self.database_url = database_url
        self._engine = create_engine(database_url, echo=False)
        SQLModel.metadata.create_all(self._engine, tables=[SitemapRecord.__table__])

    @classmethod
    def from_path(cls, db_path: Path) -> "SqlSitemapRepository":
        db_path.parent.mkdir(parents=True, exist_ok=True)
        return cls(f"sqlite:///{db_path}")

    @contextmanager
    def session_scope(self):
        session = Session(self._engine)
        try:
            yield session
        finally:
            session.close()

    def save(
        self,
        site_url: str,
        host: str,
        data: bytes,
        entry_count: int,
        exceeded_cap: bool,
        sitemap_format: str = "standard",
    ) -> None:
        try:
            with self.session_scope() as session:
                record = session.exec(
                    select(SitemapRecord).where(
                        SitemapRecord.site_url == site_url, SitemapRecord.host == host
                    )
                ).first()
                if record is None:
                    record = SitemapRecord(site_url=site_url, host=host)
                record.data = data
                record.entry_count = entry_count
                record.exceeds_maximum_entry_count = exceeded_cap
                record.sitemap_format = sitemap_format
                record.generated_at = utc_now()
                session.add(record)
                session.commit()
        except Exception as e:
            raise PersistenceError(
                f"Could not store sitemap for {site_url} ({host}): {e}", original_error=e
            ) from e
        logger.debug(f"Stored sitemap for {site_url} ({host}): {entry_count} entries")

    def get(self, site_url: str, host: str = "sitemap.xml") -> Optional[SitemapRecord]:
        with self.session_scope() as session:
            return session.exec(
                select(SitemapRecord).where(
                    SitemapRecord.site_url == site_url, SitemapRecord.host == host
                )
            ).first()

    def list_records(self) -> list[SitemapRecord]:
        with self.session_scope() as session:
            return list(
                session.exec(
                    select(SitemapRecord).order_by(SitemapRecord.site_url, SitemapRecord.host)
                ).all()
            )

    def delete(self, site_url: str, host: str = "sitemap.xml") -> bool:
        with self.session_scope() as session:
            record = session.exec(
                select(SitemapRecord).where(
                    SitemapRecord.site_url == site_url, SitemapRecord.host == host
                )
            ).first()
            if record is None:
                return False
            session.delete(record)
            session.commit()
            return True


class FileSitemapSink(PersistenceSink):
    """Writes '<dir>/<site host>/<host>' plus a '.json' metadata file next to it.

    Both files are written to temporary names and moved into place; a failure
    leaves no sitemap without its metadata.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, site_url: str, host: str) -> Path:
        site_host = urlsplit(site_url).hostname or "default"
        return self.directory / site_host / host

    def save(
        self,
        site_url: str,
        host: str,
        data: bytes,
        entry_count: int,
        exceeded_cap: bool,
        sitemap_format: str = "standard",
    ) -> None:
        path = self.path_for(site_url, host)
        metadata = {
            "site_url": site_url,
            "host": host,
            "format": sitemap_format,
            "entry_count": entry_count,
            "exceeds_maximum_entry_count": exceeded_cap,
            "generated_at": utc_now().isoformat(),
        }
        metadata_path = path.with_name(path.name + ".json")
        tmp_path = path.with_name(f".{path.name}.tmp")
        tmp_metadata_path = path.with_name(f".{metadata_path.name}.tmp")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(data)
            tmp_metadata_path.write_text(json.dumps(metadata, indent=2))
            os.replace(tmp_path, path)
            try:
                os.replace(tmp_metadata_path, metadata_path)
            except OSError:
                # A sitemap without matching metadata must not be left behind
                _remove_quietly(path)
                raise
        except OSError as e:
            _remove_quietly(tmp_path)
            _remove_quietly(tmp_metadata_path)
            raise PersistenceError(
                f"Could not write sitemap to {path}: {e}", original_error=e
            ) from e
        logger.debug(f"Wrote sitemap for {site_url} to {path}")


def _remove_quietly(path: Path) -> None:
    with suppress(OSError):
        path.unlink()
