"""
Shared test fixtures for sitemapgen tests.
"""

import json

import pytest
from click.testing import CliRunner

from sitemapgen.core import HostLanguageCache, SitemapBuilder
from sitemapgen.sources import SlugUrlResolver
from sitemapgen.testing import (
    RecordingSink,
    build_sample_repository,
    build_sample_sites,
)


@pytest.fixture
def content_repository():
    return build_sample_repository()


@pytest.fixture
def site_source():
    return build_sample_sites()


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def builder(site_source, content_repository, recording_sink):
    """SitemapBuilder over the sample site with an isolated host cache."""
    return SitemapBuilder(
        site_source=site_source,
        repository=content_repository,
        resolver=SlugUrlResolver(content_repository),
        sink=recording_sink,
        host_cache=HostLanguageCache(),
    )


@pytest.fixture
def tmp_project(tmp_path, monkeypatch):
    """
    Isolated project directory used as the working directory.

    Creates the directory and points SITEMAPGEN_PROJECT_ROOT at it, so config
    lookups never touch the real working tree.
    """
    project_dir = tmp_path / "test-sitemapgen-project"
    project_dir.mkdir()
    monkeypatch.chdir(project_dir)
    monkeypatch.setenv("SITEMAPGEN_PROJECT_ROOT", str(project_dir))
    yield project_dir


# ============================================================================
# CLI Testing Helpers
# ============================================================================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner for testing."""
    return CliRunner()


def invoke_cli(runner: CliRunner, cmd, args: list[str], **kwargs):
    """Invoke a CLI command without swallowing unexpected exceptions."""
    return runner.invoke(cmd, args, catch_exceptions=False, **kwargs)


def assert_cli_success(result, msg: str = None):
    """Assert CLI command succeeded (exit code 0)."""
    if result.exit_code != 0:
        error_msg = f"CLI failed (exit code {result.exit_code})"
        if msg:
            error_msg = f"{msg}: {error_msg}"
        if result.output:
            error_msg += f"\nOutput: {result.output}"
        raise AssertionError(error_msg)


def assert_cli_failure(result, expected_code: int = None):
    """Assert CLI command failed."""
    if result.exit_code == 0:
        raise AssertionError(f"CLI succeeded but expected failure\nOutput: {result.output}")
    if expected_code is not None and result.exit_code != expected_code:
        raise AssertionError(f"Expected exit code {expected_code}, got {result.exit_code}")


def assert_output_contains(result, text: str):
    """Assert CLI output contains text."""
    if text not in result.output:
        raise AssertionError(f"Expected output to contain '{text}'\nGot: {result.output}")


def assert_json_output(result) -> dict:
    """Assert CLI output is valid JSON and return it."""
    try:
        return json.loads(result.output)
    except json.JSONDecodeError as e:
        raise AssertionError(f"Expected JSON output, got:\n{result.output}") from e
