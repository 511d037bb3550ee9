"""Install example content from a GitHub repository, with retry and fallback.

Ordinary network or extraction failures never raise out of
``install_example_source``: they are retried with linear backoff and, once
attempts run out, reported through ``fallback_reason`` so the caller can keep
scaffolding from the bundled examples.
"""

import asyncio
import logging
import math
import shutil
import tempfile
from pathlib import Path

from .archive import build_archive_url
from .archive import find_extracted_root
from .constants import DEFAULT_RETRY_ATTEMPTS
from .constants import DEFAULT_RETRY_DELAY_MS
from .constants import USER_AGENT
from .exceptions import ExampleSourceError
from .exceptions import InvalidRetryPolicyError
from .github_source import parse_github_example_source
from .protocols import ExampleSourceDependencies
from .schema import InstallExampleSourceOptions
from .schema import InstallExampleSourceOutcome
from .schema import ParsedGithubSource
from .utils import is_within
from .utils import merge_tree_async

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "capt-example-source-"


async def install_example_source(
    options: InstallExampleSourceOptions,
    dependencies: ExampleSourceDependencies | None = None,
) -> InstallExampleSourceOutcome:
    """
    Download a GitHub example and copy it over the target directory.

    Process (per attempt, in a fresh temporary directory):
    1. Fetch the codeload tarball for owner/repo/ref
    2. Extract it and locate the archive's wrapping directory
    3. Resolve the sub path, refusing anything outside the extracted tree
    4. Copy its contents into the target, overwriting existing files

    Args:
        options: Target path, example source and optional retry policy
        dependencies: Fetch/extract/sleep implementations (defaults to real ones)

    Returns:
        InstallExampleSourceOutcome; ``applied`` is False after all attempts failed

    Raises:
        InvalidSourceError: If the example source is malformed
        InvalidRetryPolicyError: If max_attempts or retry_delay_ms is out of range

    Example:
        >>> outcome = await install_example_source(
        ...     InstallExampleSourceOptions(
        ...         absolute_target_path=Path("/tmp/my-app"),
        ...         example_source="acme/capt-starter/examples/foo#main",
        ...     )
        ... )
        >>> if not outcome.applied:
        ...     print(f"Using bundled examples: {outcome.fallback_reason}")
    """
    parsed_source = parse_github_example_source(options.example_source)
    max_attempts = _normalize_retry_attempts(options.max_attempts)
    retry_delay_ms = _normalize_retry_delay(options.retry_delay_ms)
    deps = dependencies or ExampleSourceDependencies.default()
    last_error: BaseException | None = None

    for attempt in range(1, max_attempts + 1):
        logger.info(f"Installing example source {parsed_source.normalized_source} ({attempt}/{max_attempts})")
        try:
            await _download_and_apply(options.absolute_target_path, parsed_source, deps)
        except Exception as e:
            last_error = e
            logger.warning(f"Example source attempt {attempt}/{max_attempts} failed: {e}")
            if attempt < max_attempts:
                await deps.sleep(retry_delay_ms * attempt)
        else:
            logger.info(f"Applied example source {parsed_source.normalized_source}")
            return InstallExampleSourceOutcome(
                source=parsed_source.normalized_source,
                applied=True,
                attempts=attempt,
            )

    fallback_reason = _format_error_message(last_error)
    logger.warning(f"Giving up on example source {parsed_source.normalized_source}: {fallback_reason}")
    return InstallExampleSourceOutcome(
        source=parsed_source.normalized_source,
        applied=False,
        attempts=max_attempts,
        fallback_reason=fallback_reason,
    )


async def _download_and_apply(
    absolute_target_path: Path,
    parsed_source: ParsedGithubSource,
    deps: ExampleSourceDependencies,
) -> None:
    temp_root = Path(await asyncio.to_thread(tempfile.mkdtemp, prefix=TEMP_DIR_PREFIX))
    try:
        archive_path = temp_root / "source.tar.gz"
        extract_dir = temp_root / "extract"
        await asyncio.to_thread(extract_dir.mkdir, parents=True)

        await _download_archive(parsed_source, archive_path, deps)
        await deps.extract_archive(archive_path, extract_dir)

        source_path = await asyncio.to_thread(_locate_source_dir, extract_dir, parsed_source.sub_path)
        logger.debug(f"Copying {source_path} into {absolute_target_path}")
        await merge_tree_async(source_path, absolute_target_path)
    finally:
        await asyncio.to_thread(shutil.rmtree, temp_root, ignore_errors=True)


async def _download_archive(
    parsed_source: ParsedGithubSource,
    archive_path: Path,
    deps: ExampleSourceDependencies,
) -> None:
    archive_url = build_archive_url(parsed_source)
    response = await deps.fetch(archive_url, {"user-agent": USER_AGENT})

    if not response.is_success:
        raise ExampleSourceError(
            f"GitHub archive request failed ({response.status_code} {response.reason_phrase}).",
            context={"url": archive_url, "status": response.status_code},
        )

    await asyncio.to_thread(archive_path.write_bytes, response.content)
    logger.debug(f"Downloaded {len(response.content)} bytes from {archive_url}")


def _locate_source_dir(extract_dir: Path, sub_path: str) -> Path:
    extracted_root = find_extracted_root(extract_dir)
    source_path = _resolve_source_path(extracted_root, sub_path)
    display_sub_path = sub_path or "."

    if not source_path.exists():
        raise ExampleSourceError(f"Remote source path does not exist: {display_sub_path}")
    if not source_path.is_dir():
        raise ExampleSourceError(f"Remote source path is not a directory: {display_sub_path}")
    return source_path


def _resolve_source_path(extracted_root: Path, sub_path: str) -> Path:
    """Resolve ``sub_path`` under the extracted root, following symlinks on both sides."""
    root = extracted_root.resolve()
    if not sub_path:
        return root

    candidate = (root / sub_path).resolve()
    if is_within(root, candidate):
        return candidate

    raise ExampleSourceError(
        "Remote source path escapes extracted archive.",
        context={"sub_path": sub_path},
    )


def _normalize_retry_attempts(value: int | None) -> int:
    if value is None:
        return DEFAULT_RETRY_ATTEMPTS

    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidRetryPolicyError("max_attempts must be a positive integer.", context={"max_attempts": value})

    return value


def _normalize_retry_delay(value: float | None) -> float:
    if value is None:
        return DEFAULT_RETRY_DELAY_MS

    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
        raise InvalidRetryPolicyError(
            "retry_delay_ms must be a non-negative number.", context={"retry_delay_ms": value}
        )

    return value


def _format_error_message(error: BaseException | None) -> str:
    if error is None:
        return "Unknown error."
    return str(error) or type(error).__name__
