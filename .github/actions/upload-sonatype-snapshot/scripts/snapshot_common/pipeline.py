"""Orchestrate snapshot uploads for every configured artifact."""

from __future__ import annotations

import dataclasses
import logging
import typing as typ

import typer

from .bundle import extract_bundle
from .classifiers import resolve_classified_files
from .commands import RunResult, format_command, run_command
from .config import FailurePolicy
from .deploy import deploy_snapshot
from .errors import ToolFailureError
from .scratch import scoped_temp_directory
from .settings import SETTINGS_FILENAME, generate_settings

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .commands import CommandRunner
    from .config import PublishConfig

__all__ = ["ArtifactFailure", "PublishResult", "publish_snapshots"]

logger = logging.getLogger(__name__)

POM_FILENAME = "pom.xml"


@dataclasses.dataclass(slots=True, frozen=True)
class ArtifactFailure:
    """Tool failure recorded for an artifact under the ``continue`` policy."""

    artifact_id: str
    step: str
    message: str


@dataclasses.dataclass(slots=True)
class PublishResult:
    """Outcome of :func:`publish_snapshots`."""

    deployed: list[str] = dataclasses.field(default_factory=list)
    failures: list[ArtifactFailure] = dataclasses.field(default_factory=list)

    @property
    def failed(self) -> list[str]:
        """Artifact identifiers whose extraction or deploy failed."""
        return [failure.artifact_id for failure in self.failures]


def _dry_run_runner(argv: cabc.Sequence[str]) -> RunResult:
    """Print ``argv`` instead of executing it."""
    typer.echo(f"[dry-run] {format_command(argv)}")
    return RunResult(0)


def _publish_artifact(
    config: PublishConfig,
    artifact_id: str,
    settings_path: Path,
    *,
    runner: CommandRunner,
    deploy_runner: CommandRunner,
) -> None:
    """Extract, resolve and deploy ``artifact_id`` inside its own scratch dir."""
    with scoped_temp_directory(
        prefix=f"{artifact_id}-", base_dir=config.scratch_root
    ) as work_dir:
        extract_bundle(
            artifact_id, work_dir, build_root=config.build_root, runner=runner
        )
        classified = resolve_classified_files(
            artifact_id, work_dir, version=config.version
        )
        if classified:
            logger.info(
                "Resolved %s jars: %s",
                artifact_id,
                ", ".join(item.path.name for item in classified),
            )
        else:
            logger.warning("No jars found for %s in %s", artifact_id, work_dir)
        deploy_snapshot(
            settings_path,
            work_dir / POM_FILENAME,
            classified,
            artifact_id=artifact_id,
            repository_id=config.repository_id,
            repository_url=config.repository_url,
            maven=config.maven,
            runner=deploy_runner,
        )


def publish_snapshots(
    config: PublishConfig, *, runner: CommandRunner = run_command
) -> PublishResult:
    """Upload every artifact in ``config.artifact_ids`` in order.

    One settings document is generated in a scratch directory shared by the
    whole run. Each artifact is then extracted, resolved and deployed inside
    its own scratch directory, one at a time. All scratch directories are
    removed before this function returns or raises.

    Parameters
    ----------
    config
        Validated run configuration including credentials.
    runner
        Command runner used for ``unzip`` and ``mvn``. Deploys are printed
        instead of run when ``config.dry_run`` is set.

    Returns
    -------
    PublishResult
        Identifiers deployed successfully and failures recorded under the
        ``continue`` policy.

    Raises
    ------
    CreationConflictError
        Raised when the settings document path is already taken.
    ToolFailureError
        Raised for the first extraction or deploy failure when
        ``config.on_tool_failure`` is ``fail``.
    """
    deploy_runner = _dry_run_runner if config.dry_run else runner
    result = PublishResult()

    with scoped_temp_directory(
        prefix="snapshot-settings-", base_dir=config.scratch_root
    ) as settings_dir:
        settings_path = generate_settings(
            settings_dir / SETTINGS_FILENAME,
            config.credentials,
            repository_id=config.repository_id,
        )
        for artifact_id in config.artifact_ids:
            try:
                _publish_artifact(
                    config,
                    artifact_id,
                    settings_path,
                    runner=runner,
                    deploy_runner=deploy_runner,
                )
            except ToolFailureError as exc:
                if config.on_tool_failure is FailurePolicy.FAIL:
                    raise
                logger.warning("::warning title=Snapshot Upload Skipped::%s", exc)
                result.failures.append(
                    ArtifactFailure(artifact_id, exc.step, str(exc))
                )
                continue
            result.deployed.append(artifact_id)

    return result
