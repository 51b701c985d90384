"""Configuration value objects for the snapshot upload pipeline.

Credentials are read from the environment exactly once by
:func:`load_credentials`; every other component receives them through a
:class:`PublishConfig` so nothing downstream touches global state.
"""

from __future__ import annotations

import collections
import dataclasses
import enum
import typing as typ
from pathlib import Path

from .errors import ConfigurationError, ConfigurationMissingError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

__all__ = [
    "DEFAULT_ARTIFACT_IDS",
    "DEFAULT_BUILD_ROOT",
    "DEFAULT_REPOSITORY_ID",
    "DEFAULT_REPOSITORY_URL",
    "DEFAULT_VERSION",
    "PASSWORD_ENV",
    "USERNAME_ENV",
    "Credentials",
    "FailurePolicy",
    "PublishConfig",
    "build_config",
    "load_credentials",
]

USERNAME_ENV = "SONATYPE_USERNAME"
PASSWORD_ENV = "SONATYPE_PASSWORD"

DEFAULT_ARTIFACT_IDS: tuple[str, ...] = (
    "closure-compiler",
    "closure-compiler-unshaded",
    "closure-compiler-externs",
    "closure-compiler-main",
    "closure-compiler-parent",
)
DEFAULT_BUILD_ROOT = Path("bazel-bin")
DEFAULT_VERSION = "1.0-SNAPSHOT"
DEFAULT_REPOSITORY_ID = "snapshot-repo-id"
DEFAULT_REPOSITORY_URL = "https://oss.sonatype.org/content/repositories/snapshots/"
SNAPSHOT_SUFFIX = "-SNAPSHOT"


class FailurePolicy(enum.StrEnum):
    """How the pipeline reacts when ``unzip`` or ``mvn`` reports failure."""

    CONTINUE = "continue"
    FAIL = "fail"

    @classmethod
    def parse(cls, value: str | FailurePolicy) -> FailurePolicy:
        """Return the policy named by ``value`` (case-insensitive)."""
        if isinstance(value, FailurePolicy):
            return value
        normalised = value.strip().lower()
        try:
            return cls(normalised)
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            msg = f"Unknown tool failure policy {value!r}; expected one of: {choices}"
            raise ConfigurationError(msg) from exc


@dataclasses.dataclass(frozen=True, slots=True)
class Credentials:
    """Repository credentials embedded in the generated settings document."""

    username: str
    password: str = dataclasses.field(repr=False)


@dataclasses.dataclass(frozen=True, slots=True)
class PublishConfig:
    """Everything the orchestrator needs for one run."""

    credentials: Credentials
    artifact_ids: tuple[str, ...] = DEFAULT_ARTIFACT_IDS
    build_root: Path = DEFAULT_BUILD_ROOT
    version: str = DEFAULT_VERSION
    repository_id: str = DEFAULT_REPOSITORY_ID
    repository_url: str = DEFAULT_REPOSITORY_URL
    maven: str = "mvn"
    on_tool_failure: FailurePolicy = FailurePolicy.CONTINUE
    dry_run: bool = False
    scratch_root: Path | None = None


def load_credentials(environ: cabc.Mapping[str, str]) -> Credentials:
    """Return :class:`Credentials` read from ``environ``.

    Parameters
    ----------
    environ
        Mapping holding ``SONATYPE_USERNAME`` and ``SONATYPE_PASSWORD``.

    Returns
    -------
    Credentials
        Immutable username/password pair.

    Raises
    ------
    ConfigurationMissingError
        Raised when either variable is unset or empty. Every missing name is
        reported.
    """
    missing = [name for name in (USERNAME_ENV, PASSWORD_ENV) if not environ.get(name)]
    if missing:
        raise ConfigurationMissingError(missing)
    return Credentials(username=environ[USERNAME_ENV], password=environ[PASSWORD_ENV])


def _validate_artifact_ids(artifact_ids: cabc.Iterable[str]) -> tuple[str, ...]:
    """Strip identifiers and reject empty or duplicate entries."""
    cleaned = tuple(item.strip() for item in artifact_ids)
    if not cleaned:
        msg = "No artifact identifiers configured."
        raise ConfigurationError(msg)
    if "" in cleaned:
        msg = "Artifact identifiers must not be empty."
        raise ConfigurationError(msg)
    counts = collections.Counter(cleaned)
    duplicates = sorted(item for item, count in counts.items() if count > 1)
    if duplicates:
        msg = f"Duplicate artifact identifiers: {', '.join(duplicates)}"
        raise ConfigurationError(msg)
    return cleaned


def _validate_version(version: str) -> str:
    """Ensure ``version`` names a snapshot."""
    version = version.strip()
    if not version.endswith(SNAPSHOT_SUFFIX):
        msg = f"Only snapshot versions can be uploaded, got {version!r}"
        raise ConfigurationError(msg)
    return version


def build_config(  # noqa: PLR0913
    credentials: Credentials,
    *,
    artifact_ids: cabc.Iterable[str] = DEFAULT_ARTIFACT_IDS,
    build_root: Path = DEFAULT_BUILD_ROOT,
    version: str = DEFAULT_VERSION,
    repository_id: str = DEFAULT_REPOSITORY_ID,
    repository_url: str = DEFAULT_REPOSITORY_URL,
    maven: str = "mvn",
    on_tool_failure: str | FailurePolicy = FailurePolicy.CONTINUE,
    dry_run: bool = False,
    scratch_root: Path | None = None,
) -> PublishConfig:
    """Validate raw inputs and return a :class:`PublishConfig`.

    Raises
    ------
    ConfigurationError
        Raised when artifact identifiers are empty or duplicated, the version
        is not a snapshot, or the failure policy is unknown.
    """
    return PublishConfig(
        credentials=credentials,
        artifact_ids=_validate_artifact_ids(artifact_ids),
        build_root=Path(build_root),
        version=_validate_version(version),
        repository_id=repository_id,
        repository_url=repository_url,
        maven=maven,
        on_tool_failure=FailurePolicy.parse(on_tool_failure),
        dry_run=dry_run,
        scratch_root=scratch_root,
    )
