"""Template installation planning and execution.

A plan is one base template plus zero or more example overlays. The base is
copied entry by entry and must not collide with anything in the target.
Overlays are then merged in canonical order, so on a path collision the last
overlay in ``EXAMPLE_OVERLAY_ORDER`` wins no matter how the selection was
spelled or how the filesystem lists directories.
"""

import asyncio
import logging
from pathlib import Path

from .constants import EXAMPLE_OVERLAY_ORDER
from .constants import OVERLAY_EXAMPLES_DIR
from .constants import RENAMED_COPY_ENTRIES
from .constants import SCAFFOLD_DIR
from .constants import TEMPLATE_COPY_ENTRIES
from .exceptions import InvalidSelectionError
from .exceptions import TemplateInstallError
from .schema import BaseTemplate
from .schema import OverlayTemplate
from .schema import TemplateInstallPlan
from .utils import copy_entry_exclusive_async
from .utils import merge_tree_async

logger = logging.getLogger(__name__)


def resolve_template_install_plan(generator_root: Path, example_selection: str) -> TemplateInstallPlan:
    """
    Build the installation plan for an example selection (no I/O).

    Args:
        generator_root: Directory holding ``scaffold/`` and ``overlays/examples/``
        example_selection: ``"none"``, ``"all"`` or a single overlay name

    Returns:
        TemplateInstallPlan with overlays in canonical order

    Raises:
        InvalidSelectionError: If the selection names no known overlay

    Example:
        >>> plan = resolve_template_install_plan(Path("/opt/generator"), "all")
        >>> get_overlay_template_names(plan)
        ['aave', 'lido', 'uniswap']
    """
    return TemplateInstallPlan(
        base=_get_base_template(generator_root),
        overlays=_resolve_overlay_templates(generator_root, example_selection),
    )


def get_overlay_template_names(plan: TemplateInstallPlan) -> list[str]:
    """Overlay names in the order they will be applied."""
    return [overlay.name for overlay in plan.overlays]


async def install_template_plan(target_dir: Path, plan: TemplateInstallPlan) -> None:
    """
    Copy the base template, then layer overlays, into ``target_dir``.

    Base entries are copied exclusively; the first existing destination aborts
    the whole installation before any overlay is touched. Overlays are merged
    one after another with overwrite allowed.

    Args:
        target_dir: Project directory (created if needed)
        plan: Plan from ``resolve_template_install_plan``

    Raises:
        TemplateConflictError: If a base entry already exists in the target
        TemplateInstallError: If a template or overlay source is missing
    """
    await asyncio.to_thread(target_dir.mkdir, parents=True, exist_ok=True)

    logger.info(f"Installing base template into {target_dir}")
    for entry in plan.base.copy_entries:
        source_path = plan.base.source_dir / entry
        if not source_path.exists():
            raise TemplateInstallError(
                f"Base template entry missing: {source_path}",
                context={"entry": entry, "source_dir": str(plan.base.source_dir)},
            )

        destination_path = target_dir / RENAMED_COPY_ENTRIES.get(entry, entry)
        logger.debug(f"Copying base entry {entry} -> {destination_path.name}")
        await copy_entry_exclusive_async(source_path, destination_path)

    for overlay in plan.overlays:
        if not overlay.source_dir.is_dir():
            raise TemplateInstallError(
                f"Overlay '{overlay.name}' not found at {overlay.source_dir}",
                context={"overlay": overlay.name, "source_dir": str(overlay.source_dir)},
            )

        logger.info(f"Applying overlay: {overlay.name}")
        await merge_tree_async(overlay.source_dir, target_dir)


def _get_base_template(generator_root: Path) -> BaseTemplate:
    return BaseTemplate(
        source_dir=generator_root / SCAFFOLD_DIR,
        copy_entries=TEMPLATE_COPY_ENTRIES,
    )


def _resolve_overlay_templates(generator_root: Path, example_selection: str) -> tuple[OverlayTemplate, ...]:
    if example_selection == "none":
        return ()

    if example_selection == "all":
        overlay_names = EXAMPLE_OVERLAY_ORDER
    elif example_selection in EXAMPLE_OVERLAY_ORDER:
        overlay_names = (example_selection,)
    else:
        raise InvalidSelectionError(
            f'Unsupported example "{example_selection}". '
            f"Supported values: none, {', '.join(EXAMPLE_OVERLAY_ORDER)}, all",
            context={"example_selection": example_selection},
        )

    return tuple(
        OverlayTemplate(name=name, source_dir=generator_root / OVERLAY_EXAMPLES_DIR / name) for name in overlay_names
    )
