"""Build and run the ``mvn deploy:deploy-file`` invocation for one artifact."""

from __future__ import annotations

import logging
import typing as typ

from .commands import run_command
from .config import DEFAULT_REPOSITORY_ID, DEFAULT_REPOSITORY_URL
from .errors import DeployFailedError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .classifiers import ClassifiedFile
    from .commands import CommandRunner, RunResult

__all__ = ["DEPLOY_GOAL", "build_deploy_command", "deploy_snapshot"]

logger = logging.getLogger(__name__)

DEPLOY_GOAL = "deploy:deploy-file"


def build_deploy_command(
    settings_path: Path,
    pom_path: Path,
    classified_files: cabc.Iterable[ClassifiedFile],
    *,
    repository_id: str = DEFAULT_REPOSITORY_ID,
    repository_url: str = DEFAULT_REPOSITORY_URL,
    maven: str = "mvn",
) -> list[str]:
    """Return the argv uploading ``classified_files`` with ``pom_path``.

    Examples
    --------
    >>> build_deploy_command(Path("s.xml"), Path("pom.xml"), [])  # doctest: +SKIP
    ['mvn', 'deploy:deploy-file', '--settings=s.xml', '-DgeneratePom=false', ...]
    """
    return [
        maven,
        DEPLOY_GOAL,
        f"--settings={settings_path}",
        "-DgeneratePom=false",
        f"-DrepositoryId={repository_id}",
        f"-Durl={repository_url}",
        f"-DpomFile={pom_path}",
        *(item.as_token() for item in classified_files),
    ]


def deploy_snapshot(  # noqa: PLR0913
    settings_path: Path,
    pom_path: Path,
    classified_files: cabc.Iterable[ClassifiedFile],
    *,
    artifact_id: str,
    repository_id: str = DEFAULT_REPOSITORY_ID,
    repository_url: str = DEFAULT_REPOSITORY_URL,
    maven: str = "mvn",
    runner: CommandRunner = run_command,
) -> RunResult:
    """Upload one artifact with Maven and return the tool's result.

    Raises
    ------
    DeployFailedError
        Raised when Maven exits with a non-zero status.
    """
    argv = build_deploy_command(
        settings_path,
        pom_path,
        classified_files,
        repository_id=repository_id,
        repository_url=repository_url,
        maven=maven,
    )
    result = runner(argv)
    if not result.ok:
        msg = f"{maven} exited with status {result.returncode}"
        if result.stderr:
            msg = f"{msg}: {result.stderr.strip()}"
        raise DeployFailedError(artifact_id, msg, result)
    logger.info("Deployed %s to %s", artifact_id, repository_url)
    return result
