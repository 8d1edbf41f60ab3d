"""plugin.validation

Field checks for build-step configuration.

These run before a build (on config load or from the CLI) so that an empty
input directory or a report directory outside the workspace is reported as a
configuration error instead of a confusing tool failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Optional


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    message: Optional[str] = None

    @staticmethod
    def passed() -> "ValidationResult":
        return ValidationResult(ok=True)

    @staticmethod
    def error(message: str) -> "ValidationResult":
        return ValidationResult(ok=False, message=message)


def check_input_directory(value: Optional[str]) -> ValidationResult:
    if not value:
        return ValidationResult.error("Please set a project location to be analyzed.")
    return ValidationResult.passed()


def check_output_directory(value: Optional[str]) -> ValidationResult:
    if not value:
        return ValidationResult.error("Please set tattletale report directory")
    return ValidationResult.passed()


def check_relative_directory(workspace: Optional[Path], value: Optional[str]) -> ValidationResult:
    """Validate *value* as an existing directory relative to *workspace*.

    With no workspace yet (job never built) there is nothing to check against,
    so any value passes.
    """
    if workspace is None:
        return ValidationResult.passed()
    if not value or not value.strip():
        return ValidationResult.passed()

    rel = PurePath(value.strip())
    if rel.is_absolute():
        return ValidationResult.error(f"{value} is not a relative path")

    ws = Path(workspace).resolve()
    target = (ws / rel).resolve()
    try:
        target.relative_to(ws)
    except ValueError:
        return ValidationResult.error(f"{value} points outside of the workspace")

    if not target.exists():
        return ValidationResult.error(f"No such directory: {value}")
    if not target.is_dir():
        return ValidationResult.error(f"{value} is not a directory")
    return ValidationResult.passed()
