"""Data models for the setup workflow.

This module defines the enums and dataclasses exchanged between the setup
stages: repository descriptors and acquisition outcomes, prerequisite
reports, placeholder bindings and the overall run result.

All enums use str inheritance so they log and serialize as plain strings.
Dataclasses are frozen and use slots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath

from mcp_setup.constants import (
    BROWSER_USE_API_KEY_PLACEHOLDER,
    CHROME_PATH_DETECTION_FAILED,
    CHROME_PATH_PLACEHOLDER,
    CODEBASE_API_KEY_PLACEHOLDER,
    PROJECT_DIR_PLACEHOLDER,
    SUBMODULES_DIR,
)

__all__ = [
    # Enums
    "AcquisitionMode",
    "AcquisitionOutcome",
    # Dataclasses
    "RepositoryDescriptor",
    "DescriptorResult",
    "SubmoduleLoopResult",
    "CloneLoopResult",
    "AcquisitionReport",
    "PrerequisiteCheck",
    "PrerequisiteReport",
    "PlaceholderBindings",
    "SetupResult",
    # Functions
    "escape_backslashes",
]


# =============================================================================
# Enums
# =============================================================================


class AcquisitionMode(str, Enum):
    """How repositories were acquired during a run.

    Attributes:
        SUBMODULE: Registered as git submodules of the project.
        DIRECT_CLONE: Cloned as plain repositories under the submodules root.
    """

    SUBMODULE = "submodule"
    DIRECT_CLONE = "direct_clone"


class AcquisitionOutcome(str, Enum):
    """Per-descriptor result of the submodule acquisition loop.

    Attributes:
        ALREADY_REGISTERED: Target exists and is listed in .gitmodules; skipped.
        PRESENT_BUT_UNREGISTERED: Target exists but is not listed; skipped
            with a warning, never adopted.
        REGISTERED: ``git submodule add`` succeeded.
        REGISTERED_VIA_FALLBACK_CLONE: Registration failed, a direct clone
            into the same target succeeded.
        FAILED: Registration and the fallback clone both failed.
    """

    ALREADY_REGISTERED = "already_registered"
    PRESENT_BUT_UNREGISTERED = "present_but_unregistered"
    REGISTERED = "registered"
    REGISTERED_VIA_FALLBACK_CLONE = "registered_via_fallback_clone"
    FAILED = "failed"

    @property
    def is_clean(self) -> bool:
        """True when the descriptor needed no fallback and did not fail."""
        return self in (
            AcquisitionOutcome.ALREADY_REGISTERED,
            AcquisitionOutcome.PRESENT_BUT_UNREGISTERED,
            AcquisitionOutcome.REGISTERED,
        )


# =============================================================================
# Repository acquisition
# =============================================================================


@dataclass(frozen=True, slots=True)
class RepositoryDescriptor:
    """A companion repository the project needs.

    Attributes:
        remote: Address used to fetch the repository.
        name: Logical name; the direct-clone directory name.
        relative_path: Location under the submodules root used when the
            repository is registered as a submodule.
    """

    remote: str
    name: str
    relative_path: str

    @property
    def submodule_path(self) -> str:
        """Project-relative submodule path, as written in .gitmodules."""
        return str(PurePosixPath(SUBMODULES_DIR) / self.relative_path)

    @property
    def clone_dirname(self) -> str:
        return self.name

    def clone_target(self, project_dir: Path, submodules_dir: str) -> Path:
        """Directory the direct clone loop clones into."""
        return project_dir / submodules_dir / self.clone_dirname


@dataclass(frozen=True, slots=True)
class DescriptorResult:
    """Outcome of acquiring one descriptor through the submodule loop.

    Attributes:
        descriptor: The repository handled.
        outcome: What happened.
        target_path: Absolute directory the repository lives in.
        error: Failure detail for FAILED or fallback outcomes.
    """

    descriptor: RepositoryDescriptor
    outcome: AcquisitionOutcome
    target_path: Path
    error: str | None = None


@dataclass(frozen=True, slots=True)
class SubmoduleLoopResult:
    """All per-descriptor results of one submodule loop."""

    results: tuple[DescriptorResult, ...] = ()

    @property
    def all_succeeded(self) -> bool:
        """True iff every descriptor resolved without fallback or failure."""
        return all(result.outcome.is_clean for result in self.results)

    def by_outcome(self, outcome: AcquisitionOutcome) -> tuple[DescriptorResult, ...]:
        """Results with the given outcome, in declaration order."""
        return tuple(r for r in self.results if r.outcome == outcome)


@dataclass(frozen=True, slots=True)
class CloneLoopResult:
    """Directories created or skipped by the direct clone loop.

    Attributes:
        cloned: Target paths cloned during this run.
        skipped: Target paths that already existed.
    """

    cloned: tuple[Path, ...] = ()
    skipped: tuple[Path, ...] = ()


@dataclass(frozen=True, slots=True)
class AcquisitionReport:
    """Summary of repository acquisition for one run.

    Attributes:
        mode: Strategy that was attempted first.
        submodule_loop: Results of the submodule loop, None when not attempted.
        clone_loop: Results of the direct clone loop, None when not needed.
        fallback_reason: Why the direct clone loop ran after submodules.
    """

    mode: AcquisitionMode
    submodule_loop: SubmoduleLoopResult | None = None
    clone_loop: CloneLoopResult | None = None
    fallback_reason: str | None = None

    @property
    def fell_back(self) -> bool:
        """True when the direct clone loop ran as a second chance."""
        return self.mode == AcquisitionMode.SUBMODULE and self.clone_loop is not None

    def repository_paths(
        self,
        project_dir: Path,
        descriptors: tuple[RepositoryDescriptor, ...],
        submodules_dir: str,
    ) -> tuple[Path, ...]:
        """Existing directories holding the acquired repositories.

        Prefers the submodule location and falls back to the clone
        location, skipping descriptors with neither on disk.
        """
        paths: list[Path] = []
        for descriptor in descriptors:
            candidates = (
                project_dir / descriptor.submodule_path,
                descriptor.clone_target(project_dir, submodules_dir),
            )
            for candidate in candidates:
                if candidate.is_dir() and candidate not in paths:
                    paths.append(candidate)
                    break
        return tuple(paths)


# =============================================================================
# Prerequisites
# =============================================================================


@dataclass(frozen=True, slots=True)
class PrerequisiteCheck:
    """Result of probing for one required tool.

    Attributes:
        name: Tool name as looked up on PATH.
        found: Whether the probe located it.
        install_url: Where to get it.
    """

    name: str
    found: bool
    install_url: str | None = None


@dataclass(frozen=True, slots=True)
class PrerequisiteReport:
    """Aggregated prerequisite probe results, in check order."""

    checks: tuple[PrerequisiteCheck, ...] = ()

    @property
    def missing(self) -> tuple[str, ...]:
        """Names of every tool that was not found."""
        return tuple(check.name for check in self.checks if not check.found)

    @property
    def success(self) -> bool:
        return not self.missing


# =============================================================================
# Rendering
# =============================================================================


def escape_backslashes(value: str) -> str:
    """Double every backslash so the value survives inside a JSON string.

    Example:
        >>> escape_backslashes("C:\\\\Users\\\\u")
        'C:\\\\\\\\Users\\\\\\\\u'
    """
    return value.replace("\\", "\\\\")


@dataclass(frozen=True, slots=True)
class PlaceholderBindings:
    """Runtime values substituted into the configuration template.

    Attributes:
        project_dir: Project root directory.
        chrome_path: Browser executable path, or the detection sentinel.
        api_key: Google API key shared by both key placeholders.
    """

    project_dir: str
    chrome_path: str
    api_key: str

    def as_replacements(self) -> dict[str, str]:
        """Map each placeholder token to its literal replacement.

        Path values have backslashes escaped for embedding in JSON string
        literals; the key is inserted verbatim under both key placeholders.
        """
        return {
            PROJECT_DIR_PLACEHOLDER: escape_backslashes(self.project_dir),
            CHROME_PATH_PLACEHOLDER: escape_backslashes(self.chrome_path),
            BROWSER_USE_API_KEY_PLACEHOLDER: self.api_key,
            CODEBASE_API_KEY_PLACEHOLDER: self.api_key,
        }


# =============================================================================
# Run result
# =============================================================================


@dataclass(frozen=True, slots=True)
class SetupResult:
    """Complete result of one setup run.

    Attributes:
        project_dir: Project root the run operated on.
        prerequisites: Prerequisite probe results.
        acquisition: Repository acquisition summary, None when skipped.
        built_repositories: Directories whose dependencies were installed.
        gitignore_added: Entries appended to .gitignore during this run.
        chrome_path: Detected browser executable, or the sentinel.
        config_path: Path of the rendered configuration.
        extension_dir: Chrome extension directory for browser tools, if known.
    """

    project_dir: Path
    prerequisites: PrerequisiteReport
    config_path: Path
    chrome_path: str = CHROME_PATH_DETECTION_FAILED
    acquisition: AcquisitionReport | None = None
    built_repositories: tuple[Path, ...] = field(default_factory=tuple)
    gitignore_added: tuple[str, ...] = field(default_factory=tuple)
    extension_dir: str | None = None

    @property
    def chrome_detected(self) -> bool:
        return self.chrome_path != CHROME_PATH_DETECTION_FAILED
