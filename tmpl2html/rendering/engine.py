"""Template rendering engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateSyntaxError,
)

from ..core.errors import RenderError, TemplateLoadError
from .data import load_data_source

logger = logging.getLogger(__name__)


def load_template(template_path: Path, search_root: Path | None = None) -> Template:
    """Load a Jinja2 template from a file path.

    Args:
        template_path: Path to the template file
        search_root: Loader search path for includes (default: template's directory)

    Returns:
        Compiled Jinja2 template
    """
    if not template_path.is_file():
        raise TemplateLoadError(f"Template not found: {template_path}")

    root = search_root if search_root is not None else template_path.parent
    loader = FileSystemLoader(str(root))
    env = Environment(
        loader=loader,
        undefined=StrictUndefined,
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    name = template_path.relative_to(root).as_posix()
    try:
        return env.get_template(name)
    except TemplateSyntaxError as e:
        raise TemplateLoadError(
            f"Syntax error in {template_path} line {e.lineno}: {e.message}"
        ) from e
    except TemplateError as e:
        raise TemplateLoadError(f"Cannot load template {template_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise TemplateLoadError(f"{template_path} is not valid UTF-8: {e}") from e


def render(
    template_path: Path,
    data_path: Path,
    sink: IO[str],
    *,
    search_root: Path | None = None,
    allow_computed: bool = True,
) -> None:
    """Render a template with its data into a sink.

    Args:
        template_path: Template file
        data_path: Data file, with or without extension
        sink: Text stream receiving the rendered output
        search_root: Loader search path for includes
        allow_computed: Whether ``.py`` data modules may be executed
    """
    logger.debug(f"Rendering template: {template_path}")

    template = load_template(template_path, search_root)
    context = load_data_source(data_path, allow_computed=allow_computed).resolve()

    try:
        template.stream(context).dump(sink)
    except Exception as e:
        raise RenderError(f"Error rendering {template_path.name}: {e}") from e
