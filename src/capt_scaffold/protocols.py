"""Protocols for the environment-dependent steps of remote example installation.

The installer needs three capabilities (fetch, extract, sleep). Apps and tests can swap
any of them; ``ExampleSourceDependencies.default()`` wires the real ones.
The scaffold entry point takes a whole example-source installer the same way.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import httpx

from .schema import InstallExampleSourceOptions
from .schema import InstallExampleSourceOutcome


class ArchiveFetchProtocol(Protocol):
    """Download an archive URL."""

    async def __call__(self, url: str, headers: dict[str, str]) -> httpx.Response:
        """Fetch ``url`` and return the full response.

        Non-2xx responses are returned, not raised; the installer decides.

        Raises:
            Exception: On transport failure
        """
        ...


class ArchiveExtractProtocol(Protocol):
    """Extract a downloaded archive into a directory."""

    async def __call__(self, archive_path: Path, extract_dir: Path) -> None: ...


class SleepProtocol(Protocol):
    """Wait between retry attempts."""

    async def __call__(self, delay_ms: float) -> None: ...


@dataclass(frozen=True)
class ExampleSourceDependencies:
    """Capability bundle passed to ``install_example_source``."""

    fetch: ArchiveFetchProtocol
    extract_archive: ArchiveExtractProtocol
    sleep: SleepProtocol

    @classmethod
    def default(cls) -> "ExampleSourceDependencies":
        """Production wiring: httpx download, tarfile extraction, asyncio sleep."""
        from .archive import extract_tar_archive
        from .archive import fetch_archive
        from .archive import wait

        return cls(fetch=fetch_archive, extract_archive=extract_tar_archive, sleep=wait)


class ExampleSourceInstallerProtocol(Protocol):
    """Anything that installs a remote example and reports the outcome."""

    async def __call__(self, options: InstallExampleSourceOptions) -> InstallExampleSourceOutcome: ...
