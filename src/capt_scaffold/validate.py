"""Input validation for scaffold requests."""

import os
import re
from pathlib import Path

from .constants import SUPPORTED_EXAMPLE_SELECTIONS
from .constants import SUPPORTED_PACKAGE_MANAGERS
from .exceptions import InvalidProjectTargetError
from .exceptions import InvalidSelectionError
from .github_source import parse_github_example_source

PROJECT_NAME_PATTERN = re.compile(r"[a-z0-9][a-z0-9-_]*")


def resolve_project_target(project_arg: str, cwd: Path | None = None) -> tuple[Path, str]:
    """
    Resolve the project argument to an absolute path and project name.

    Args:
        project_arg: Project name or path, as typed by the user
        cwd: Base for relative paths (defaults to the process cwd)

    Returns:
        (absolute_target_path, project_name) where the name is the last path component

    Raises:
        InvalidProjectTargetError: If the argument is empty or the name is not allowed
    """
    trimmed = project_arg.strip()
    if not trimmed:
        raise InvalidProjectTargetError("Project name/path is required. Example: create-aztec-privacy-template my-app")

    base = cwd if cwd is not None else Path.cwd()
    absolute_target_path = Path(os.path.abspath(base / Path(trimmed).expanduser()))
    project_name = absolute_target_path.name

    if not PROJECT_NAME_PATTERN.fullmatch(project_name):
        raise InvalidProjectTargetError(
            f'Invalid project name "{project_name}". Use lowercase letters, numbers, hyphens, or underscores.',
            context={"project_name": project_name},
        )

    return absolute_target_path, project_name


def assert_target_path_safe(absolute_target_path: Path) -> None:
    """Target must be absent or an empty directory."""
    if not absolute_target_path.exists():
        return

    if not absolute_target_path.is_dir():
        raise InvalidProjectTargetError(
            f"Target path exists and is not a directory: {absolute_target_path}",
            context={"path": str(absolute_target_path)},
        )

    if any(absolute_target_path.iterdir()):
        raise InvalidProjectTargetError(
            f"Target directory must be empty: {absolute_target_path}",
            context={"path": str(absolute_target_path)},
        )


def assert_package_manager(package_manager: str) -> None:
    if package_manager in SUPPORTED_PACKAGE_MANAGERS:
        return
    raise InvalidSelectionError(
        f'Unsupported package manager "{package_manager}". '
        f"Supported values: {', '.join(SUPPORTED_PACKAGE_MANAGERS)}",
        context={"package_manager": package_manager},
    )


def assert_example_selection(example: str) -> None:
    if example in SUPPORTED_EXAMPLE_SELECTIONS:
        return
    raise InvalidSelectionError(
        f'Unsupported example "{example}". Supported values: {", ".join(SUPPORTED_EXAMPLE_SELECTIONS)}',
        context={"example_selection": example},
    )


def assert_example_source(example_source: str) -> None:
    """Raise InvalidSourceError if the source would not parse."""
    parse_github_example_source(example_source)
