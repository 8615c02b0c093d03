"""Single-file and batch rendering."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from fnmatch import fnmatchcase
from pathlib import Path

from ..core.models import RenderOutcome, RunConfig
from ..core.paths import resolve_data_path, resolve_output_path
from .engine import render
from .io import open_sink

logger = logging.getLogger(__name__)


def _match_segments(parts: Sequence[str], pattern: Sequence[str]) -> bool:
    if not pattern:
        return not parts
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_match_segments(parts[i:], rest) for i in range(len(parts) + 1))
    return (
        bool(parts)
        and fnmatchcase(parts[0], head)
        and _match_segments(parts[1:], rest)
    )


def is_ignored(relative_path: Path, patterns: Iterable[str]) -> bool:
    """Check a template path against ignore globs.

    Patterns without a slash match the file name at any depth. Others match
    the path relative to the template directory one segment at a time, so
    ``*`` stops at ``/`` and ``**`` spans any number of directories.
    """
    parts = relative_path.parts
    for pattern in patterns:
        if "/" not in pattern:
            if fnmatchcase(relative_path.name, pattern):
                return True
            continue
        if _match_segments(parts, pattern.strip("/").split("/")):
            return True
    return False


def discover_templates(
    template_dir: Path, template_extension: str, ignore_patterns: Iterable[str] = ()
) -> list[Path]:
    """Find every template under a directory, sorted by full path.

    Args:
        template_dir: Root of the template tree
        template_extension: Template file suffix, e.g. ``.tmpl``
        ignore_patterns: Globs excluding templates (any match excludes)

    Returns:
        Absolute template paths
    """
    base = template_dir.resolve()
    patterns = tuple(ignore_patterns)

    templates = [
        path
        for path in base.rglob(f"*{template_extension}")
        if path.is_file() and not is_ignored(path.relative_to(base), patterns)
    ]
    return sorted(templates)


def render_file(config: RunConfig) -> Path | None:
    """Render a single template.

    Returns:
        Output file path, or None when written to standard output
    """
    template_path = config.template_path
    data_path = resolve_data_path(template_path, None, config.data_path)
    output_path = resolve_output_path(
        template_path, None, config.outfile, config.outdir, config.output_extension
    )

    with open_sink(output_path, config.file_mode) as sink:
        render(
            template_path,
            data_path,
            sink,
            allow_computed=config.allow_computed_data,
        )

    if output_path is not None:
        logger.info(f"Rendered {template_path} → {output_path}")
    return output_path


def process_template(template_path: Path, base: Path, config: RunConfig) -> RenderOutcome:
    """Render one template of a batch, converting failures into an outcome."""
    relative = template_path.relative_to(base).as_posix()

    try:
        data_path = resolve_data_path(template_path, base, config.data_path)
        output_path = resolve_output_path(
            template_path, base, config.outfile, config.outdir, config.output_extension
        )
        with open_sink(output_path, config.file_mode) as sink:
            render(
                template_path,
                data_path,
                sink,
                search_root=base,
                allow_computed=config.allow_computed_data,
            )
    except Exception as e:
        logger.warning(f"Failed to render {relative}: {e}")
        return RenderOutcome.failure(relative, e)

    logger.info(f"Rendered {template_path} → {output_path}")
    return RenderOutcome.success(relative)


def process_directory(config: RunConfig) -> list[RenderOutcome]:
    """Render every template under the configured template directory.

    Each template is rendered independently; a failure is recorded in its
    outcome and processing continues with the next template.

    Args:
        config: Run configuration with ``template_path`` set to a directory

    Returns:
        One outcome per discovered template, in processing order
    """
    base = config.template_path.resolve()
    templates = discover_templates(base, config.template_extension, config.ignore)
    logger.info(f"Rendering {len(templates)} template(s) from {base}")

    outcomes = [process_template(path, base, config) for path in templates]

    failed = sum(1 for outcome in outcomes if not outcome.ok)
    logger.info(f"Rendered {len(outcomes) - failed} file(s), {failed} failed")
    return outcomes
