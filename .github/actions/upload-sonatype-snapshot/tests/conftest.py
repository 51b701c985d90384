"""Fixtures for the upload-sonatype-snapshot tests."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import typing as typ
import zipfile
from pathlib import Path

import pytest
from syspath_hack import prepend_to_syspath

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"
prepend_to_syspath(SCRIPTS_DIR)

from snapshot_common import Credentials, RunResult, build_config

if typ.TYPE_CHECKING:
    from snapshot_common import PublishConfig


@dataclasses.dataclass
class FakeRunner:
    """Record tool invocations and emulate ``unzip`` with :mod:`zipfile`."""

    failures: list[tuple[str, str, int]] = dataclasses.field(default_factory=list)
    calls: list[list[str]] = dataclasses.field(default_factory=list)

    def __call__(self, argv: cabc.Sequence[str]) -> RunResult:
        args = [str(part) for part in argv]
        self.calls.append(args)
        returncode = self._exit_code_for(args)
        if returncode:
            return RunResult(returncode, "", f"{args[0]} failed")
        if args[0] == "unzip":
            archive, destination = args[1], args[args.index("-d") + 1]
            with zipfile.ZipFile(archive) as bundle:
                bundle.extractall(destination)
        return RunResult(0)

    def fail(self, executable: str, needle: str, returncode: int = 1) -> None:
        """Fail ``executable`` when any argument contains ``needle``."""
        self.failures.append((executable, needle, returncode))

    def _exit_code_for(self, args: list[str]) -> int:
        for executable, needle, returncode in self.failures:
            if args[0] == executable and any(needle in arg for arg in args[1:]):
                return returncode
        return 0

    def commands(self, executable: str) -> list[list[str]]:
        """Return recorded invocations of ``executable``."""
        return [call for call in self.calls if call[0] == executable]


BundleFactory = cabc.Callable[..., Path]


@pytest.fixture
def credentials() -> Credentials:
    """Return throwaway repository credentials."""
    return Credentials(username="ci-bot", password="s3cr3t")


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Return a recording command runner."""
    return FakeRunner()


@pytest.fixture
def build_root(tmp_path: Path) -> Path:
    """Return an empty Bazel output directory."""
    root = tmp_path / "bazel-bin"
    root.mkdir()
    return root


@pytest.fixture
def scratch_root(tmp_path: Path) -> Path:
    """Return the parent directory used for scratch directories."""
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture
def make_bundle(build_root: Path) -> BundleFactory:
    """Return a factory writing ``{id}_bundle.jar`` archives."""

    def _make(
        artifact_id: str,
        classifiers: cabc.Iterable[str] = ("", "-sources", "-javadoc"),
        *,
        version: str = "1.0-SNAPSHOT",
    ) -> Path:
        archive = build_root / f"{artifact_id}_bundle.jar"
        with zipfile.ZipFile(archive, "w") as bundle:
            pom = f"<project><artifactId>{artifact_id}</artifactId></project>"
            bundle.writestr("pom.xml", pom)
            for suffix in classifiers:
                bundle.writestr(f"{artifact_id}-{version}{suffix}.jar", b"PK")
        return archive

    return _make


@pytest.fixture
def make_config(
    credentials: Credentials, build_root: Path, scratch_root: Path
) -> cabc.Callable[..., PublishConfig]:
    """Return a factory for configurations rooted in the test directories."""

    def _make(artifact_ids: cabc.Iterable[str], **overrides: object) -> PublishConfig:
        options: dict[str, typ.Any] = {
            "build_root": build_root,
            "scratch_root": scratch_root,
        } | overrides
        return build_config(credentials, artifact_ids=artifact_ids, **options)

    return _make
