"""Placeholder substitution for generated projects.

Placeholders look like ``__PROJECT_NAME__``. Only the files listed in
``PLACEHOLDER_TEXT_FILES`` are rewritten; the whole tree is then scanned so a
placeholder left anywhere fails the scaffold.
"""

import asyncio
import logging
import re
from pathlib import Path

from .constants import INSTALL_COMMANDS
from .constants import PLACEHOLDER_TEXT_FILES
from .exceptions import InvalidSelectionError
from .exceptions import UnresolvedPlaceholderError

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"__[A-Z0-9_]+__")


def get_placeholder_map(project_name: str, package_manager: str) -> dict[str, str]:
    """Placeholder → replacement for a project."""
    if package_manager not in INSTALL_COMMANDS:
        raise InvalidSelectionError(
            f'Unsupported package manager "{package_manager}".',
            context={"package_manager": package_manager},
        )

    return {
        "__PROJECT_NAME__": project_name,
        "__INSTALL_COMMAND__": INSTALL_COMMANDS[package_manager],
    }


async def apply_placeholders_in_selected_files(
    target_dir: Path,
    placeholder_map: dict[str, str],
    relative_paths: tuple[str, ...] = PLACEHOLDER_TEXT_FILES,
) -> None:
    """Replace every placeholder occurrence in the selected text files."""
    await asyncio.to_thread(_apply_placeholders, target_dir, placeholder_map, relative_paths)


async def assert_no_unresolved_placeholders(target_dir: Path) -> None:
    """
    Fail if any text file under ``target_dir`` still contains a placeholder.

    Raises:
        UnresolvedPlaceholderError: Listing the offending files (relative paths)
    """
    unresolved = await asyncio.to_thread(find_unresolved_placeholders, target_dir)
    if unresolved:
        raise UnresolvedPlaceholderError(
            f"Found unresolved placeholders in generated output: {', '.join(unresolved)}",
            context={"files": unresolved},
        )


def find_unresolved_placeholders(target_dir: Path) -> list[str]:
    """Relative paths of text files that still contain a placeholder."""
    unresolved = []
    for file_path in sorted(p for p in target_dir.rglob("*") if p.is_file()):
        try:
            content = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            # Binary
            continue
        if PLACEHOLDER_PATTERN.search(content):
            unresolved.append(file_path.relative_to(target_dir).as_posix())
    return unresolved


def _apply_placeholders(target_dir: Path, placeholder_map: dict[str, str], relative_paths: tuple[str, ...]) -> None:
    for relative_path in relative_paths:
        target_path = target_dir / relative_path
        if not target_path.is_file():
            logger.debug(f"Skipping placeholders for missing file: {relative_path}")
            continue

        content = target_path.read_text(encoding="utf-8")
        for placeholder, value in placeholder_map.items():
            content = content.replace(placeholder, value)
        target_path.write_text(content, encoding="utf-8")
        logger.debug(f"Applied placeholders in {relative_path}")
