"""Map extracted jar files onto ``deploy:deploy-file`` arguments."""

from __future__ import annotations

import typing as typ

from .config import DEFAULT_VERSION

if typ.TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "CLASSIFIERS",
    "ClassifiedFile",
    "Classifier",
    "base_name",
    "resolve_classified_files",
]


class Classifier(typ.NamedTuple):
    """Jar name suffix and the Maven property that uploads it."""

    suffix: str
    argument: str


class ClassifiedFile(typ.NamedTuple):
    """Existing jar paired with the Maven property that uploads it."""

    argument: str
    path: Path

    def as_token(self) -> str:
        """Return the ``-Dargument=path`` command-line token."""
        return f"{self.argument}={self.path}"


# Main jar first, then sources, then javadoc.
CLASSIFIERS: tuple[Classifier, ...] = (
    Classifier("", "-Dfile"),
    Classifier("-sources", "-Dsources"),
    Classifier("-javadoc", "-Djavadoc"),
)


def base_name(artifact_id: str, version: str = DEFAULT_VERSION) -> str:
    """Return the jar stem shared by every classifier of ``artifact_id``."""
    return f"{artifact_id}-{version}"


def resolve_classified_files(
    artifact_id: str,
    extracted_dir: Path,
    *,
    version: str = DEFAULT_VERSION,
    classifiers: tuple[Classifier, ...] = CLASSIFIERS,
) -> list[ClassifiedFile]:
    """Return the classifier files present in ``extracted_dir``.

    Files are checked as ``{artifact_id}-{version}{suffix}.jar`` and returned
    in ``classifiers`` order. Missing files are skipped; an empty list is a
    valid result.
    """
    stem = base_name(artifact_id, version)
    resolved: list[ClassifiedFile] = []
    for classifier in classifiers:
        candidate = extracted_dir / f"{stem}{classifier.suffix}.jar"
        if candidate.is_file():
            resolved.append(ClassifiedFile(classifier.argument, candidate))
    return resolved
