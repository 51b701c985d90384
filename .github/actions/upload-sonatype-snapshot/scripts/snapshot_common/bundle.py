"""Locate and unpack the per-artifact bundle archives produced by the build."""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from .commands import run_command
from .config import DEFAULT_BUILD_ROOT
from .errors import ExtractionFailedError

if typ.TYPE_CHECKING:
    from .commands import CommandRunner

__all__ = ["BUNDLE_SUFFIX", "bundle_path", "extract_bundle"]

logger = logging.getLogger(__name__)

BUNDLE_SUFFIX = "_bundle.jar"


def bundle_path(artifact_id: str, build_root: Path = DEFAULT_BUILD_ROOT) -> Path:
    """Return the bundle archive path for ``artifact_id`` under ``build_root``."""
    return Path(build_root) / f"{artifact_id}{BUNDLE_SUFFIX}"


def extract_bundle(
    artifact_id: str,
    destination_dir: Path,
    *,
    build_root: Path = DEFAULT_BUILD_ROOT,
    runner: CommandRunner = run_command,
) -> Path:
    """Unpack the bundle for ``artifact_id`` into ``destination_dir``.

    Parameters
    ----------
    artifact_id
        Identifier naming the bundle (``{artifact_id}_bundle.jar``).
    destination_dir
        Existing directory receiving the extracted files.
    build_root
        Directory holding the bundle archives.
    runner
        Command runner used to invoke ``unzip``.

    Returns
    -------
    Path
        The bundle archive that was extracted.

    Raises
    ------
    ExtractionFailedError
        Raised when the archive does not exist or ``unzip`` exits non-zero.
    """
    archive = bundle_path(artifact_id, build_root)
    if not archive.is_file():
        msg = f"bundle archive not found at {archive}"
        raise ExtractionFailedError(artifact_id, msg)

    result = runner(["unzip", str(archive), "-d", str(destination_dir)])
    if not result.ok:
        msg = f"unzip exited with status {result.returncode}"
        if result.stderr:
            msg = f"{msg}: {result.stderr.strip()}"
        raise ExtractionFailedError(artifact_id, msg, result)

    logger.info("Extracted %s into %s", archive, destination_dir)
    return archive
