#!/usr/bin/env -S uv run --script
# fmt: off
# /// script
# requires-python = ">=3.12"
# dependencies = [
#   "cyclopts>=3.24,<4.0",
#   "plumbum>=1.8,<2.0",
#   "syspath-hack>=0.4.0,<0.5.0",
#   "typer>=0.17,<1.0",
# ]
# ///
# fmt: on

"""Upload snapshot artifact bundles to the Sonatype snapshot repository.

Each artifact's ``{id}_bundle.jar`` is unpacked into a scratch directory and
its jars are deployed with ``mvn deploy:deploy-file`` using a generated
settings document. Maven is the only tool Sonatype accepts snapshot uploads
from without rebuilding, and snapshots need no PGP signatures.

Examples
--------
Upload the default artifacts after a Bazel build::

    SONATYPE_USERNAME=bot SONATYPE_PASSWORD=secret uv run upload_snapshots.py

Upload two artifacts and stop at the first tool failure::

    INPUT_ARTIFACT_IDS="pkg-a pkg-b" INPUT_ON_TOOL_FAILURE=fail \
        SONATYPE_USERNAME=bot SONATYPE_PASSWORD=secret uv run upload_snapshots.py

Print the Maven invocations without uploading::

    INPUT_DRY_RUN=true SONATYPE_USERNAME=bot SONATYPE_PASSWORD=secret \
        uv run upload_snapshots.py
"""

from __future__ import annotations

import logging
import os
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App
from syspath_hack import prepend_to_syspath

_SCRIPT_DIR = Path(__file__).resolve().parent
prepend_to_syspath(_SCRIPT_DIR)

from snapshot_common import (
    SnapshotError,
    build_config,
    load_credentials,
    prepare_output_data,
    publish_snapshots,
    run_command,
    write_github_output,
)
from snapshot_common.config import (
    DEFAULT_ARTIFACT_IDS,
    DEFAULT_BUILD_ROOT,
    DEFAULT_REPOSITORY_ID,
    DEFAULT_REPOSITORY_URL,
    DEFAULT_VERSION,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from snapshot_common import CommandRunner

app: App = App(
    help="Deploy snapshot artifact bundles with Maven.",
    config=cyclopts.config.Env("INPUT_", command=False),
)


def _configure_logging() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")


def main(  # noqa: PLR0913
    *,
    environ: cabc.Mapping[str, str],
    artifact_ids: cabc.Sequence[str] = DEFAULT_ARTIFACT_IDS,
    build_root: Path = DEFAULT_BUILD_ROOT,
    version: str = DEFAULT_VERSION,
    repository_id: str = DEFAULT_REPOSITORY_ID,
    repository_url: str = DEFAULT_REPOSITORY_URL,
    maven: str = "mvn",
    on_tool_failure: str = "continue",
    dry_run: bool = False,
    scratch_root: Path | None = None,
    runner: CommandRunner = run_command,
) -> int:
    """Entry point shared by the CLI and tests.

    Credentials are read from ``environ`` before anything touches the
    filesystem.

    Returns
    -------
    int
        Exit code: ``0`` when the run completes, ``1`` when configuration is
        missing or invalid, the settings document cannot be created, or a
        tool fails under the ``fail`` policy.
    """
    try:
        config = build_config(
            load_credentials(environ),
            artifact_ids=artifact_ids,
            build_root=build_root,
            version=version,
            repository_id=repository_id,
            repository_url=repository_url,
            maven=maven,
            on_tool_failure=on_tool_failure,
            dry_run=dry_run,
            scratch_root=scratch_root,
        )
        result = publish_snapshots(config, runner=runner)
    except SnapshotError as exc:
        print(f"::error title=Snapshot Upload Failure::{exc}", file=sys.stderr)
        return 1

    if output_path := environ.get("GITHUB_OUTPUT"):
        write_github_output(Path(output_path), prepare_output_data(result))

    total = len(config.artifact_ids)
    summary = f"Deployed {len(result.deployed)} of {total} artifact(s)"
    if result.failed:
        summary = f"{summary}; failed: {', '.join(result.failed)}"
    print(summary, file=sys.stderr)
    return 0


@app.default
def cli(  # noqa: PLR0913
    *,
    artifact_ids: list[str] | None = None,
    build_root: Path = DEFAULT_BUILD_ROOT,
    version: str = DEFAULT_VERSION,
    repository_id: str = DEFAULT_REPOSITORY_ID,
    repository_url: str = DEFAULT_REPOSITORY_URL,
    maven: str = "mvn",
    on_tool_failure: str = "continue",
    dry_run: bool = False,
    scratch_root: Path | None = None,
) -> None:
    """Deploy snapshot bundles for each artifact in order.

    Parameters
    ----------
    artifact_ids
        Artifact identifiers to upload, in order.
    build_root
        Directory containing ``{id}_bundle.jar`` archives.
    version
        Snapshot version used in the extracted jar names.
    repository_id
        Server identifier bound to the credentials.
    repository_url
        Snapshot repository URL.
    maven
        Maven executable.
    on_tool_failure
        ``continue`` to warn and move on, ``fail`` to stop at the first
        failed ``unzip`` or ``mvn``.
    dry_run
        Print Maven invocations instead of running them.
    scratch_root
        Parent directory for scratch directories.
    """
    _configure_logging()
    exit_code = main(
        environ=os.environ,
        artifact_ids=artifact_ids or DEFAULT_ARTIFACT_IDS,
        build_root=build_root,
        version=version,
        repository_id=repository_id,
        repository_url=repository_url,
        maven=maven,
        on_tool_failure=on_tool_failure,
        dry_run=dry_run,
        scratch_root=scratch_root,
    )
    raise SystemExit(exit_code)


if __name__ == "__main__":
    app()
