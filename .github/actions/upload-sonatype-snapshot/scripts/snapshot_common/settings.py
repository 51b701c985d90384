"""Generate the Maven settings document carrying repository credentials."""

from __future__ import annotations

import os
import typing as typ
import xml.etree.ElementTree as ET

from .config import DEFAULT_REPOSITORY_ID
from .errors import CreationConflictError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import Credentials

__all__ = ["SETTINGS_FILENAME", "generate_settings", "render_settings"]

SETTINGS_FILENAME = "settings.xml"
SETTINGS_NAMESPACE = "http://maven.apache.org/SETTINGS/1.0.0"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = (
    f"{SETTINGS_NAMESPACE} http://maven.apache.org/xsd/settings-1.0.0.xsd"
)
_FILE_MODE = 0o600


def render_settings(
    credentials: Credentials, *, repository_id: str = DEFAULT_REPOSITORY_ID
) -> str:
    """Return the settings XML binding ``credentials`` to ``repository_id``."""
    root = ET.Element(
        "settings",
        {
            "xmlns": SETTINGS_NAMESPACE,
            "xmlns:xsi": XSI_NAMESPACE,
            "xsi:schemaLocation": SCHEMA_LOCATION,
        },
    )
    server = ET.SubElement(ET.SubElement(root, "servers"), "server")
    ET.SubElement(server, "id").text = repository_id
    ET.SubElement(server, "username").text = credentials.username
    ET.SubElement(server, "password").text = credentials.password
    ET.indent(root)
    return ET.tostring(root, encoding="unicode") + "\n"


def generate_settings(
    target_path: Path,
    credentials: Credentials,
    *,
    repository_id: str = DEFAULT_REPOSITORY_ID,
) -> Path:
    """Write the settings document to ``target_path``.

    The file is created exclusively with owner-only permissions.

    Parameters
    ----------
    target_path
        Location of the settings document. Must not exist yet.
    credentials
        Username and password for the snapshot repository.
    repository_id
        Server identifier referenced by the deploy command.

    Returns
    -------
    Path
        ``target_path``, for chaining.

    Raises
    ------
    CreationConflictError
        Raised when a file already exists at ``target_path``.
    """
    document = render_settings(credentials, repository_id=repository_id)
    try:
        fd = os.open(target_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, _FILE_MODE)
    except FileExistsError as exc:
        raise CreationConflictError(target_path) from exc
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(document)
    return target_path
