"""Scaffold a new project: template, optional remote example, placeholders.

Dependency installation, git initialization and interactive prompts belong to
the calling app; this module only lays down files.
"""

import asyncio
import json
import logging
import os
from pathlib import Path

from .constants import STARTER_PACKAGE_JSON_BASE
from .example_source import install_example_source
from .placeholders import apply_placeholders_in_selected_files
from .placeholders import assert_no_unresolved_placeholders
from .placeholders import get_placeholder_map
from .protocols import ExampleSourceInstallerProtocol
from .schema import InstallExampleSourceOptions
from .schema import ScaffoldOptions
from .schema import ScaffoldResult
from .templates import get_overlay_template_names
from .templates import install_template_plan
from .templates import resolve_template_install_plan
from .validate import assert_example_selection
from .validate import assert_example_source
from .validate import assert_package_manager
from .validate import assert_target_path_safe
from .validate import resolve_project_target

logger = logging.getLogger(__name__)


async def scaffold_project(
    options: ScaffoldOptions,
    example_source_installer: ExampleSourceInstallerProtocol | None = None,
) -> ScaffoldResult:
    """
    Create a starter project from the generator's templates.

    Process:
    1. Validate package manager, example selection, example source and target
    2. Install the base template and selected overlays
    3. Write package.json for the project
    4. Apply the remote example source, if any (failure falls back to local examples)
    5. Substitute placeholders and verify none remain

    The leftover-placeholder scan covers the whole target, remote example
    content included. A remote file containing an unknown ``__UPPER_CASE__``
    token (``__DEV__``, say) fails the run after files have been written.

    Args:
        options: Scaffold request
        example_source_installer: Remote example installer (defaults to
            ``install_example_source`` with real network access)

    Returns:
        ScaffoldResult describing what was created

    Raises:
        InvalidSelectionError: Unknown package manager or example selection
        InvalidSourceError: Malformed example source
        InvalidProjectTargetError: Bad project name or non-empty target
        TemplateConflictError: Base template entry already present in target
        UnresolvedPlaceholderError: Placeholders left in the output
    """
    assert_package_manager(options.package_manager)
    assert_example_selection(options.example_selection)
    if options.example_source is not None:
        assert_example_source(options.example_source)

    absolute_target_path, project_name = resolve_project_target(options.project_arg, cwd=options.cwd)
    assert_target_path_safe(absolute_target_path)

    plan = resolve_template_install_plan(options.generator_root, options.example_selection)
    logger.info(
        f"Scaffolding {project_name} at {absolute_target_path} "
        f"(overlays: {', '.join(get_overlay_template_names(plan)) or 'none'})"
    )
    await install_template_plan(absolute_target_path, plan)

    package_json = {**STARTER_PACKAGE_JSON_BASE, "name": project_name}
    await asyncio.to_thread(
        (absolute_target_path / "package.json").write_text,
        json.dumps(package_json, indent=2) + "\n",
        encoding="utf-8",
    )

    outcome = None
    if options.example_source is not None:
        installer = example_source_installer or install_example_source
        outcome = await installer(
            InstallExampleSourceOptions(
                absolute_target_path=absolute_target_path,
                example_source=options.example_source,
            )
        )
        if outcome.applied:
            logger.info(f"Applied remote example source: {outcome.source}")
        else:
            logger.warning(
                f"Remote example source unavailable after {outcome.attempts} attempt(s), "
                f"continuing with local examples: {outcome.fallback_reason}"
            )

    placeholder_map = get_placeholder_map(project_name, options.package_manager)
    await apply_placeholders_in_selected_files(absolute_target_path, placeholder_map)
    await assert_no_unresolved_placeholders(absolute_target_path)

    logger.info(f"Scaffolded {project_name}")
    return ScaffoldResult(
        absolute_target_path=absolute_target_path,
        display_path=_display_path(absolute_target_path, options.cwd),
        project_name=project_name,
        package_manager=options.package_manager,
        example_selection=options.example_selection,
        example_source_outcome=outcome,
    )


def _display_path(absolute_target_path: Path, cwd: Path | None) -> str:
    """Target relative to cwd; the absolute path when that is "." or impossible."""
    try:
        relative = os.path.relpath(absolute_target_path, cwd if cwd is not None else os.getcwd())
    except ValueError:
        # different drive on Windows
        return str(absolute_target_path)
    return str(absolute_target_path) if relative == "." else relative
