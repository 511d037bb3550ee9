"""Value types for example sources and template installation.

All models are frozen: they are built fresh per scaffold run and never mutated.
"""

from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import SkipValidation
from pydantic import model_validator


class ParsedGithubSource(BaseModel):
    """Normalized GitHub example source.

    ``normalized_source`` is always rebuilt from the other four fields, so
    parsing it again yields an equal value.
    """

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    ref: str = "HEAD"
    sub_path: str = ""
    normalized_source: str


class InstallExampleSourceOptions(BaseModel):
    """Arguments for a single remote example installation.

    The retry fields are stored as given; ``install_example_source`` checks them
    and raises ``InvalidRetryPolicyError`` instead of coercing.
    """

    model_config = ConfigDict(frozen=True)

    absolute_target_path: Path
    example_source: str
    max_attempts: SkipValidation[int | None] = None
    retry_delay_ms: SkipValidation[float | None] = None


class InstallExampleSourceOutcome(BaseModel):
    """Result of a remote example installation (errors carried as data)."""

    model_config = ConfigDict(frozen=True)

    source: str
    applied: bool
    attempts: int = Field(ge=1)
    fallback_reason: str | None = None

    @model_validator(mode="after")
    def _check_fallback_reason(self) -> "InstallExampleSourceOutcome":
        if self.applied and self.fallback_reason is not None:
            raise ValueError("fallback_reason must be unset when the source was applied")
        if not self.applied and self.fallback_reason is None:
            raise ValueError("fallback_reason is required when the source was not applied")
        return self


class BaseTemplate(BaseModel):
    """Base template copied with strict no-overwrite semantics."""

    model_config = ConfigDict(frozen=True)

    name: str = "base"
    source_dir: Path
    copy_entries: tuple[str, ...]


class OverlayTemplate(BaseModel):
    """Example overlay merged over the target with overwrite allowed."""

    model_config = ConfigDict(frozen=True)

    name: str
    source_dir: Path


class TemplateInstallPlan(BaseModel):
    """One base template plus overlays in canonical layering order."""

    model_config = ConfigDict(frozen=True)

    base: BaseTemplate
    overlays: tuple[OverlayTemplate, ...] = ()


class ScaffoldResult(BaseModel):
    """What ``scaffold_project`` produced."""

    model_config = ConfigDict(frozen=True)

    absolute_target_path: Path
    display_path: str
    project_name: str
    package_manager: str
    example_selection: str
    example_source_outcome: InstallExampleSourceOutcome | None = None


class ScaffoldOptions(BaseModel):
    """Arguments for ``scaffold_project``."""

    model_config = ConfigDict(frozen=True)

    generator_root: Path
    project_arg: str
    package_manager: str = "npm"
    example_selection: str = "none"
    example_source: str | None = None
    cwd: Path | None = None
