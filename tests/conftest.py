"""Shared fixtures: a minimal generator layout on disk."""

from pathlib import Path

import pytest


def _make_generator_root(root: Path, overlays: dict[str, dict[str, str]] | None = None) -> Path:
    scaffold = root / "scaffold"
    (scaffold / "contracts").mkdir(parents=True)
    (scaffold / "scripts").mkdir()
    (scaffold / ".solhint.json").write_text("{}\n")
    (scaffold / "gitignore").write_text("node_modules/\n")
    (scaffold / "Makefile").write_text("test:\n\ttrue\n")
    (scaffold / "README.md").write_text("# __PROJECT_NAME__\n\nRun `__INSTALL_COMMAND__`.\n")
    (scaffold / "contracts" / "Base.sol").write_text("contract Base {}\n")
    (scaffold / "scripts" / "check.sh").write_text("#!/bin/sh\n")

    for name, files in (overlays or {}).items():
        overlay_dir = root / "overlays" / "examples" / name
        overlay_dir.mkdir(parents=True)
        for relative_path, content in files.items():
            file_path = overlay_dir / relative_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content)

    return root


@pytest.fixture
def make_generator_root():
    """Factory creating scaffold/ plus overlays/examples/<name>/ under a root."""
    return _make_generator_root
