"""Default archive download and extraction for GitHub example sources."""

import asyncio
import logging
import tarfile
from pathlib import Path
from urllib.parse import quote

import httpx

from .constants import ARCHIVE_URL_TEMPLATE
from .constants import DEFAULT_FETCH_TIMEOUT_SECONDS
from .exceptions import ArchiveExtractionError
from .exceptions import ExampleSourceError
from .schema import ParsedGithubSource

logger = logging.getLogger(__name__)


def build_archive_url(parsed_source: ParsedGithubSource) -> str:
    """Codeload tarball URL for the parsed source's ref."""
    return ARCHIVE_URL_TEMPLATE.format(
        owner=parsed_source.owner,
        repo=parsed_source.repo,
        ref=quote(parsed_source.ref, safe=""),
    )


async def fetch_archive(
    url: str,
    headers: dict[str, str],
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """Download ``url`` with redirects followed and a per-request timeout.

    ``transport`` replaces the network layer (e.g. ``httpx.MockTransport``).
    """
    timeout = httpx.Timeout(DEFAULT_FETCH_TIMEOUT_SECONDS)
    async with httpx.AsyncClient(follow_redirects=True, timeout=timeout, transport=transport) as client:
        logger.debug(f"GET {url}")
        return await client.get(url, headers=headers)


async def extract_tar_archive(archive_path: Path, extract_dir: Path) -> None:
    """Extract a gzip tarball into ``extract_dir``.

    Uses the ``data`` extraction filter, which rejects absolute member paths,
    ``..`` traversal and links pointing outside the destination.
    """

    def _extract() -> None:
        with tarfile.open(archive_path, mode="r:gz") as archive:
            archive.extractall(extract_dir, filter="data")

    try:
        await asyncio.to_thread(_extract)
    except (tarfile.TarError, OSError) as e:
        raise ArchiveExtractionError(
            f"Failed to extract remote archive: {e}",
            context={"archive_path": str(archive_path)},
        ) from e


def find_extracted_root(extract_dir: Path) -> Path:
    """Return the single wrapping directory codeload tarballs contain.

    Raises:
        ExampleSourceError: If extraction produced no directory
    """
    directories = sorted(entry for entry in extract_dir.iterdir() if entry.is_dir())
    if not directories:
        raise ExampleSourceError(
            "Remote archive extraction produced no files.",
            context={"extract_dir": str(extract_dir)},
        )
    return directories[0]


async def wait(delay_ms: float) -> None:
    await asyncio.sleep(delay_ms / 1000)
