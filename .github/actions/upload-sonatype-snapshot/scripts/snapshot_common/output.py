"""Write snapshot upload results to the GitHub Actions output file."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .pipeline import PublishResult

__all__ = ["prepare_output_data", "write_github_output"]


def prepare_output_data(result: PublishResult) -> dict[str, str | list[str]]:
    """Return workflow outputs describing ``result``."""
    return {
        "deployed_count": str(len(result.deployed)),
        "failed_count": str(len(result.failures)),
        "failed_artifacts": result.failed,
    }


def _format_list_output(key: str, values: list[str]) -> str:
    """Format a list value using the heredoc syntax GitHub expects."""
    delimiter = f"gh_{key.upper()}"
    content = "\n".join(values)
    return f"{key}<<{delimiter}\n{content}\n{delimiter}\n"


def _format_scalar_output(key: str, value: str) -> str:
    escaped = value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    return f"{key}={escaped}\n"


def write_github_output(file: Path, values: dict[str, str | list[str]]) -> None:
    """Append ``values`` to the GitHub Actions output ``file``."""
    file.parent.mkdir(parents=True, exist_ok=True)
    with file.open("a", encoding="utf-8") as handle:
        for key, value in sorted(values.items()):
            if isinstance(value, list):
                handle.write(_format_list_output(key, value))
            else:
                handle.write(_format_scalar_output(key, value))
