"""Scratch directories that never outlive the scope that created them."""

from __future__ import annotations

import contextlib
import logging
import shutil
import tempfile
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    import collections.abc as cabc

__all__ = ["scoped_temp_directory", "with_scoped_temp_directory"]

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "snapshot-upload-"

T = typ.TypeVar("T")


def _remove_tree(path: Path) -> None:
    """Delete ``path`` recursively, logging rather than raising on failure."""
    try:
        shutil.rmtree(path)
    except OSError as exc:
        logger.warning("Could not delete temp directory %s: %s", path, exc)
        return
    logger.info("Deleted temp directory: %s", path)


@contextlib.contextmanager
def scoped_temp_directory(
    *, prefix: str = DEFAULT_PREFIX, base_dir: Path | None = None
) -> cabc.Iterator[Path]:
    """Yield a fresh empty directory and remove it when the scope exits.

    Removal runs on every exit path, including exceptions raised by the
    body. Creation failures propagate before the body runs; removal
    failures are logged and swallowed.

    Parameters
    ----------
    prefix
        Prefix for the generated directory name.
    base_dir
        Parent directory. Defaults to the system temporary directory.

    Yields
    ------
    Path
        Path of the newly created directory.
    """
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=base_dir))
    logger.info("Created temp directory: %s", path)
    try:
        yield path
    finally:
        _remove_tree(path)


def with_scoped_temp_directory(
    body: cabc.Callable[[Path], T],
    *,
    prefix: str = DEFAULT_PREFIX,
    base_dir: Path | None = None,
) -> T:
    """Call ``body`` with a scoped directory and return its result."""
    with scoped_temp_directory(prefix=prefix, base_dir=base_dir) as path:
        return body(path)
