"""Snapshot upload helpers for Maven artifact bundles.

This package extracts per-artifact bundle archives produced by the build,
generates a throwaway Maven settings document holding repository
credentials, and deploys each artifact to the snapshot repository with
``mvn deploy:deploy-file``.
"""

from __future__ import annotations

from .bundle import bundle_path, extract_bundle
from .classifiers import (
    CLASSIFIERS,
    ClassifiedFile,
    Classifier,
    resolve_classified_files,
)
from .commands import CommandRunner, RunResult, run_command
from .config import (
    Credentials,
    FailurePolicy,
    PublishConfig,
    build_config,
    load_credentials,
)
from .deploy import build_deploy_command, deploy_snapshot
from .errors import (
    ConfigurationError,
    ConfigurationMissingError,
    CreationConflictError,
    DeployFailedError,
    ExtractionFailedError,
    SnapshotError,
    ToolFailureError,
)
from .output import prepare_output_data, write_github_output
from .pipeline import ArtifactFailure, PublishResult, publish_snapshots
from .scratch import scoped_temp_directory, with_scoped_temp_directory
from .settings import generate_settings, render_settings

__all__ = [
    "CLASSIFIERS",
    "ArtifactFailure",
    "ClassifiedFile",
    "Classifier",
    "CommandRunner",
    "ConfigurationError",
    "ConfigurationMissingError",
    "CreationConflictError",
    "Credentials",
    "DeployFailedError",
    "ExtractionFailedError",
    "FailurePolicy",
    "PublishConfig",
    "PublishResult",
    "RunResult",
    "SnapshotError",
    "ToolFailureError",
    "build_config",
    "build_deploy_command",
    "bundle_path",
    "deploy_snapshot",
    "extract_bundle",
    "generate_settings",
    "load_credentials",
    "prepare_output_data",
    "publish_snapshots",
    "render_settings",
    "resolve_classified_files",
    "run_command",
    "scoped_temp_directory",
    "with_scoped_temp_directory",
]
