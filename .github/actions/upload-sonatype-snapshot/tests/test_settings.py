"""Tests for the generated Maven settings document."""

from __future__ import annotations

import stat
import sys
import typing as typ
import xml.etree.ElementTree as ET

import pytest

from snapshot_common import CreationConflictError, Credentials, generate_settings
from snapshot_common.settings import SETTINGS_NAMESPACE, render_settings

if typ.TYPE_CHECKING:
    from pathlib import Path

NS = {"m": SETTINGS_NAMESPACE}


def _server(document: str) -> ET.Element:
    root = ET.fromstring(document)
    assert root.tag == f"{{{SETTINGS_NAMESPACE}}}settings"
    servers = root.findall("m:servers/m:server", NS)
    assert len(servers) == 1
    return servers[0]


class TestRenderSettings:
    """Tests for the render_settings function."""

    def test_embeds_single_server_entry(self, credentials: Credentials) -> None:
        """The document holds one server bound to the repository id."""
        server = _server(render_settings(credentials))
        assert server.findtext("m:id", namespaces=NS) == "snapshot-repo-id"
        assert server.findtext("m:username", namespaces=NS) == "ci-bot"
        assert server.findtext("m:password", namespaces=NS) == "s3cr3t"

    def test_uses_custom_repository_id(self, credentials: Credentials) -> None:
        """A custom repository id replaces the default."""
        server = _server(render_settings(credentials, repository_id="nightly"))
        assert server.findtext("m:id", namespaces=NS) == "nightly"

    def test_escapes_markup_in_credentials(self) -> None:
        """Credentials containing XML metacharacters survive a round trip."""
        credentials = Credentials("a&b", "<p@ss>")
        server = _server(render_settings(credentials))
        assert server.findtext("m:username", namespaces=NS) == "a&b"
        assert server.findtext("m:password", namespaces=NS) == "<p@ss>"

    def test_declares_schema_location(self, credentials: Credentials) -> None:
        """The root element references the settings XSD."""
        document = render_settings(credentials)
        assert "settings-1.0.0.xsd" in document


class TestGenerateSettings:
    """Tests for the generate_settings function."""

    def test_writes_document(self, tmp_path: Path, credentials: Credentials) -> None:
        """The document is written to the requested path."""
        target = tmp_path / "settings.xml"
        assert generate_settings(target, credentials) == target
        server = _server(target.read_text(encoding="utf-8"))
        assert server.findtext("m:username", namespaces=NS) == "ci-bot"

    def test_refuses_to_overwrite(
        self, tmp_path: Path, credentials: Credentials
    ) -> None:
        """A second generation against the same path raises a conflict."""
        target = tmp_path / "settings.xml"
        generate_settings(target, credentials)

        with pytest.raises(CreationConflictError) as excinfo:
            generate_settings(target, Credentials("other", "other"))

        assert excinfo.value.path == target
        assert "other" not in target.read_text(encoding="utf-8")

    def test_does_not_replace_foreign_file(
        self, tmp_path: Path, credentials: Credentials
    ) -> None:
        """An unrelated existing file is left untouched."""
        target = tmp_path / "settings.xml"
        target.write_text("keep me", encoding="utf-8")

        with pytest.raises(CreationConflictError):
            generate_settings(target, credentials)

        assert target.read_text(encoding="utf-8") == "keep me"

    @pytest.mark.skipif(
        sys.platform == "win32", reason="Unix permissions not supported on Windows"
    )
    def test_restricts_permissions(
        self, tmp_path: Path, credentials: Credentials
    ) -> None:
        """Only the owner may read the credentials file."""
        target = generate_settings(tmp_path / "settings.xml", credentials)
        mode = stat.S_IMODE(target.stat().st_mode)
        assert mode & (stat.S_IRWXG | stat.S_IRWXO) == 0
