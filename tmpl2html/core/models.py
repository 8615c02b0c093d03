"""Domain models for template rendering configuration and results."""

from __future__ import annotations

import stat
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import ConfigurationError


class PathInfo(BaseModel):
    """Snapshot of filesystem metadata for a path at check time."""

    model_config = ConfigDict(frozen=True)

    path: Path
    exists: bool
    is_file: bool
    is_dir: bool

    @classmethod
    def from_path(cls, path: Path) -> PathInfo:
        try:
            mode = path.stat().st_mode
        except OSError:
            return cls(path=path, exists=False, is_file=False, is_dir=False)
        return cls(
            path=path,
            exists=True,
            is_file=stat.S_ISREG(mode),
            is_dir=stat.S_ISDIR(mode),
        )


class OutputTarget(str, Enum):
    STDOUT = "stdout"
    FILE = "file"
    DIRECTORY = "directory"


class RunConfig(BaseModel):
    """Immutable configuration for one invocation, built once from the CLI."""

    model_config = ConfigDict(frozen=True)

    template_path: Path = Field(..., description="Template file or directory")
    data_path: Path = Field(..., description="Data file or directory")
    outfile: Path | None = Field(default=None, description="Single output file")
    outdir: Path | None = Field(default=None, description="Output directory")
    ignore: tuple[str, ...] = Field(default=(), description="Ignore globs")
    template_extension: str = Field(default=".tmpl")
    output_extension: str = Field(default=".html")
    file_mode: int = Field(default=0o644, description="File permissions (octal)")
    allow_computed_data: bool = Field(
        default=True, description="Allow executable .py data modules"
    )

    @model_validator(mode="after")
    def _single_output_target(self) -> RunConfig:
        if self.outfile is not None and self.outdir is not None:
            raise ConfigurationError("--outfile and --outdir are mutually exclusive")
        return self

    @property
    def output_target(self) -> OutputTarget:
        if self.outfile is not None:
            return OutputTarget.FILE
        if self.outdir is not None:
            return OutputTarget.DIRECTORY
        return OutputTarget.STDOUT


class RenderOutcome(BaseModel):
    """Result of rendering one template during a batch run."""

    model_config = ConfigDict(frozen=True)

    relative_path: str
    ok: bool
    message: str = "Done"

    @classmethod
    def success(cls, relative_path: str) -> RenderOutcome:
        return cls(relative_path=relative_path, ok=True)

    @classmethod
    def failure(cls, relative_path: str, error: Exception) -> RenderOutcome:
        # One status line per template, engine messages can span several lines
        message = " ".join(str(error).split()) or type(error).__name__
        return cls(relative_path=relative_path, ok=False, message=message)

    @property
    def status_line(self) -> str:
        return f"{self.relative_path}: {self.message}"
