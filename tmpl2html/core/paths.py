"""Mapping from template paths to data and output paths.

A batch run mirrors the template tree: ``templates/sub/page.tmpl`` is paired
with ``data/sub/page`` (the data loader picks the extension) and written to
``out/sub/page.html``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import ConfigurationError, PathValidationError
from .models import PathInfo

logger = logging.getLogger(__name__)


def relative_dir(template_path: Path, template_base_path: Path | None) -> Path:
    """Return the directory of ``template_path`` relative to the batch base.

    Args:
        template_path: Template file being processed
        template_base_path: Batch base directory, or None in single-file mode

    Returns:
        Relative directory (``Path()`` when there is no base)
    """
    if template_base_path is None:
        return Path()
    try:
        relative = template_path.relative_to(template_base_path)
    except ValueError as e:
        raise PathValidationError(
            f"Template {template_path} is not inside {template_base_path}"
        ) from e
    return relative.parent


def resolve_data_path(
    template_path: Path, template_base_path: Path | None, data_location: Path
) -> Path:
    """Compute the data path for a template.

    Args:
        template_path: Template file being processed
        template_base_path: Batch base directory, or None in single-file mode
        data_location: Data file shared by every template, or data root directory

    Returns:
        Data path without extension when ``data_location`` is a directory
    """
    if PathInfo.from_path(data_location).is_file:
        return data_location

    data_path = (
        data_location
        / relative_dir(template_path, template_base_path)
        / template_path.stem
    )
    logger.debug(f"Data path for {template_path}: {data_path}")
    return data_path


def resolve_output_path(
    template_path: Path,
    template_base_path: Path | None,
    outfile: Path | None,
    outdir: Path | None,
    output_extension: str = ".html",
) -> Path | None:
    """Compute the output path for a template.

    Returns:
        Output file path, or None to write to standard output
    """
    if outfile is not None and outdir is not None:
        raise ConfigurationError("--outfile and --outdir are mutually exclusive")
    if outfile is not None:
        return outfile
    if outdir is None:
        return None

    output_path = (
        outdir
        / relative_dir(template_path, template_base_path)
        / f"{template_path.stem}{output_extension}"
    )
    logger.debug(f"Output path for {template_path}: {output_path}")
    return output_path
