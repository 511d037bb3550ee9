"""capt-scaffold - Starter project generation with remote example sources.

Public API: template planning/installation, GitHub example sources with
retry and fallback, placeholder substitution and the scaffold entry point.
"""

from .archive import build_archive_url
from .archive import extract_tar_archive
from .archive import fetch_archive
from .example_source import install_example_source
from .exceptions import ArchiveExtractionError
from .exceptions import ExampleSourceError
from .exceptions import InvalidProjectTargetError
from .exceptions import InvalidRetryPolicyError
from .exceptions import InvalidSelectionError
from .exceptions import InvalidSourceError
from .exceptions import ScaffoldError
from .exceptions import TemplateConflictError
from .exceptions import TemplateInstallError
from .exceptions import UnresolvedPlaceholderError
from .github_source import parse_github_example_source
from .placeholders import apply_placeholders_in_selected_files
from .placeholders import assert_no_unresolved_placeholders
from .placeholders import get_placeholder_map
from .protocols import ExampleSourceDependencies
from .protocols import ExampleSourceInstallerProtocol
from .scaffold import scaffold_project
from .schema import InstallExampleSourceOptions
from .schema import InstallExampleSourceOutcome
from .schema import ParsedGithubSource
from .schema import ScaffoldOptions
from .schema import ScaffoldResult
from .schema import TemplateInstallPlan
from .templates import get_overlay_template_names
from .templates import install_template_plan
from .templates import resolve_template_install_plan

__all__ = [
    # Example sources
    "parse_github_example_source",
    "install_example_source",
    "build_archive_url",
    "fetch_archive",
    "extract_tar_archive",
    "ExampleSourceDependencies",
    "ExampleSourceInstallerProtocol",
    "ParsedGithubSource",
    "InstallExampleSourceOptions",
    "InstallExampleSourceOutcome",
    # Templates
    "resolve_template_install_plan",
    "install_template_plan",
    "get_overlay_template_names",
    "TemplateInstallPlan",
    # Placeholders
    "get_placeholder_map",
    "apply_placeholders_in_selected_files",
    "assert_no_unresolved_placeholders",
    # Scaffolding
    "scaffold_project",
    "ScaffoldOptions",
    "ScaffoldResult",
    # Exceptions
    "ScaffoldError",
    "InvalidSourceError",
    "InvalidRetryPolicyError",
    "ExampleSourceError",
    "ArchiveExtractionError",
    "TemplateConflictError",
    "TemplateInstallError",
    "InvalidSelectionError",
    "InvalidProjectTargetError",
    "UnresolvedPlaceholderError",
]

__version__ = "0.1.0"
