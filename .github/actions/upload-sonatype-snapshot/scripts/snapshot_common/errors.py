"""Error types shared across the snapshot upload package."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .commands import RunResult

__all__ = [
    "ConfigurationError",
    "ConfigurationMissingError",
    "CreationConflictError",
    "DeployFailedError",
    "ExtractionFailedError",
    "SnapshotError",
    "ToolFailureError",
]


class SnapshotError(RuntimeError):
    """Raised when the snapshot upload cannot continue."""


class ConfigurationError(SnapshotError):
    """Raised when a configuration value is invalid."""


class ConfigurationMissingError(ConfigurationError):
    """Raised when required environment configuration is absent."""

    def __init__(self, names: cabc.Sequence[str]) -> None:
        self.names = tuple(names)
        joined = ", ".join(self.names)
        super().__init__(f"Environment variable not set: {joined}")


class CreationConflictError(SnapshotError):
    """Raised when the settings document would overwrite an existing file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Refusing to overwrite existing file: {path}")


class ToolFailureError(SnapshotError):
    """Raised when an external tool reports failure for an artifact."""

    step = "tool"

    def __init__(
        self, artifact_id: str, message: str, result: RunResult | None = None
    ) -> None:
        self.artifact_id = artifact_id
        self.result = result
        super().__init__(f"{self.step} failed for {artifact_id}: {message}")


class ExtractionFailedError(ToolFailureError):
    """Raised when a bundle archive is missing or cannot be unpacked."""

    step = "extraction"


class DeployFailedError(ToolFailureError):
    """Raised when the deploy tool exits with a non-zero status."""

    step = "deploy"
