"""Tests for archive URL building, extraction and root detection."""

import io
import tarfile
import tempfile
from pathlib import Path

import httpx
import pytest
from capt_scaffold import ArchiveExtractionError
from capt_scaffold import ExampleSourceDependencies
from capt_scaffold import ExampleSourceError
from capt_scaffold import build_archive_url
from capt_scaffold import extract_tar_archive
from capt_scaffold import fetch_archive
from capt_scaffold import parse_github_example_source
from capt_scaffold.archive import find_extracted_root
from capt_scaffold.archive import wait


def test_build_archive_url_encodes_ref():
    parsed = parse_github_example_source("acme/capt-starter#release%2Fcandidate")

    assert build_archive_url(parsed) == "https://codeload.github.com/acme/capt-starter/tar.gz/release%2Fcandidate"


def test_build_archive_url_defaults_to_head():
    parsed = parse_github_example_source("acme/capt-starter/examples/foo")

    assert build_archive_url(parsed) == "https://codeload.github.com/acme/capt-starter/tar.gz/HEAD"


def test_find_extracted_root_returns_wrapping_directory():
    with tempfile.TemporaryDirectory() as tmpdir:
        extract_dir = Path(tmpdir)
        (extract_dir / "pax_global_header").write_text("")
        (extract_dir / "capt-starter-abc123").mkdir()

        assert find_extracted_root(extract_dir) == extract_dir / "capt-starter-abc123"


def test_find_extracted_root_requires_directory():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "stray.txt").write_text("")

        with pytest.raises(ExampleSourceError, match="produced no files"):
            find_extracted_root(Path(tmpdir))


@pytest.mark.asyncio
async def test_extract_rejects_traversal_members():
    """Members pointing outside the destination are refused."""
    with tempfile.TemporaryDirectory() as tmpdir:
        archive_path = Path(tmpdir) / "evil.tar.gz"
        data = b"pwned\n"
        with tarfile.open(archive_path, mode="w:gz") as archive:
            info = tarfile.TarInfo("../escaped.txt")
            info.size = len(data)
            archive.addfile(info, io.BytesIO(data))

        extract_dir = Path(tmpdir) / "extract"
        extract_dir.mkdir()

        with pytest.raises(ArchiveExtractionError, match="Failed to extract remote archive"):
            await extract_tar_archive(archive_path, extract_dir)

        assert not (Path(tmpdir) / "escaped.txt").exists()


@pytest.mark.asyncio
async def test_extract_rejects_non_archive():
    with tempfile.TemporaryDirectory() as tmpdir:
        archive_path = Path(tmpdir) / "source.tar.gz"
        archive_path.write_bytes(b"<html>not a tarball</html>")

        with pytest.raises(ArchiveExtractionError):
            await extract_tar_archive(archive_path, Path(tmpdir))


@pytest.mark.asyncio
async def test_fetch_archive_follows_redirects_with_headers():
    """Default fetcher: redirect to the tarball is followed, user-agent and timeout reach every request."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/acme/capt-starter/tar.gz/HEAD":
            location = "https://codeload.github.com/acme/capt-starter/tar.gz/abc123"
            return httpx.Response(302, headers={"location": location})
        return httpx.Response(200, content=b"tarball-bytes")

    response = await fetch_archive(
        "https://codeload.github.com/acme/capt-starter/tar.gz/HEAD",
        {"user-agent": "create-aztec-privacy-template"},
        transport=httpx.MockTransport(handler),
    )

    assert response.status_code == 200
    assert response.content == b"tarball-bytes"
    assert [str(request.url) for request in seen] == [
        "https://codeload.github.com/acme/capt-starter/tar.gz/HEAD",
        "https://codeload.github.com/acme/capt-starter/tar.gz/abc123",
    ]
    assert all(request.headers["user-agent"] == "create-aztec-privacy-template" for request in seen)
    assert seen[0].extensions["timeout"]["read"] == 30.0


@pytest.mark.asyncio
async def test_fetch_archive_returns_error_status_without_raising():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    response = await fetch_archive(
        "https://codeload.github.com/acme/missing/tar.gz/HEAD",
        {},
        transport=httpx.MockTransport(handler),
    )

    assert response.status_code == 404
    assert response.is_success is False


def test_default_dependencies_use_archive_functions():
    deps = ExampleSourceDependencies.default()

    assert deps.fetch is fetch_archive
    assert deps.extract_archive is extract_tar_archive
    assert deps.sleep is wait
