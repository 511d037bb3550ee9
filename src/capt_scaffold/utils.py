"""Filesystem copy helpers shared by template and example-source installation.

All copies go through ``shutil.copy2`` so file timestamps are preserved where
the filesystem allows.
"""

import asyncio
import logging
import shutil
from pathlib import Path

from .exceptions import TemplateConflictError

logger = logging.getLogger(__name__)


def copy_entry_exclusive(source_path: Path, destination_path: Path) -> None:
    """Copy a file or directory to a destination that must not exist yet.

    Raises:
        TemplateConflictError: If ``destination_path`` already exists
        FileNotFoundError: If ``source_path`` is missing
    """
    if destination_path.exists() or destination_path.is_symlink():
        raise TemplateConflictError(
            f"Refusing to overwrite existing path: {destination_path}",
            context={"source": str(source_path), "destination": str(destination_path)},
        )

    if source_path.is_dir():
        shutil.copytree(source_path, destination_path, symlinks=True)
    else:
        destination_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source_path, destination_path, follow_symlinks=False)


def merge_tree(source_dir: Path, destination_dir: Path) -> None:
    """Recursively copy ``source_dir`` contents over ``destination_dir``.

    Files present in both are overwritten; files only in the destination are kept.
    """
    shutil.copytree(source_dir, destination_dir, dirs_exist_ok=True)


async def copy_entry_exclusive_async(source_path: Path, destination_path: Path) -> None:
    await asyncio.to_thread(copy_entry_exclusive, source_path, destination_path)


async def merge_tree_async(source_dir: Path, destination_dir: Path) -> None:
    await asyncio.to_thread(merge_tree, source_dir, destination_dir)


def is_within(root: Path, candidate: Path) -> bool:
    """True if ``candidate`` equals ``root`` or lies strictly below it."""
    return candidate == root or root in candidate.parents
