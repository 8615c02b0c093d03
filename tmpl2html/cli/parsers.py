"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path

import typer

from ..core.errors import PathValidationError
from ..core.models import PathInfo


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e


def parse_optional_path(value: str) -> Path | None:
    """Treat an empty option value as unset."""
    return Path(value) if value else None


def check_output_dir(outdir: Path) -> None:
    info = PathInfo.from_path(outdir)
    if not info.exists:
        raise PathValidationError(f"Output directory does not exist: {outdir}")
    if not info.is_dir:
        raise PathValidationError(f"Output path is not a directory: {outdir}")


def check_input_path(path: Path, label: str) -> PathInfo:
    """Validate that an input path exists and is a file or directory."""
    info = PathInfo.from_path(path)
    if not info.exists:
        raise PathValidationError(f"{label} path does not exist: {path}")
    if not (info.is_file or info.is_dir):
        raise PathValidationError(f"{label} path is not a file or directory: {path}")
    return info
