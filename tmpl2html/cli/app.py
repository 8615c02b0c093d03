"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from typing_extensions import Annotated

from .. import __version__
from ..core.errors import ConfigurationError, Tmpl2HtmlError
from ..core.models import RunConfig
from ..core.settings import Settings
from ..rendering import driver
from .parsers import (
    check_input_path,
    check_output_dir,
    parse_file_mode,
    parse_optional_path,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="tmpl2html",
    help="Render Jinja2 templates against JSON, YAML or Python data into HTML.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tmpl2html {__version__}")
        raise typer.Exit()


def build_config(
    template: str,
    data: str,
    outfile: str = "",
    outdir: str = "",
    ignore: list[str] | None = None,
    file_mode: str | None = None,
    no_computed_data: bool = False,
    settings: Settings | None = None,
) -> RunConfig:
    """Validate command line values and build the run configuration.

    Checks run before any file is touched, in the order: conflicting outputs,
    output directory, template path, batch mode requirements, data path.
    """
    settings = settings or Settings()
    outfile_path = parse_optional_path(outfile)
    outdir_path = parse_optional_path(outdir)

    if outfile_path is not None and outdir_path is not None:
        raise ConfigurationError("--outfile and --outdir are mutually exclusive")

    if outdir_path is not None:
        check_output_dir(outdir_path)

    template_info = check_input_path(Path(template), "Template")
    if template_info.is_dir and outdir_path is None:
        raise ConfigurationError("--outdir is required when TEMPLATE is a directory")

    check_input_path(Path(data), "Data")

    return RunConfig(
        template_path=Path(template),
        data_path=Path(data),
        outfile=outfile_path,
        outdir=outdir_path,
        ignore=tuple(ignore or ()),
        template_extension=settings.template_extension,
        output_extension=settings.output_extension,
        file_mode=parse_file_mode(file_mode or settings.file_mode),
        allow_computed_data=settings.allow_computed_data and not no_computed_data,
    )


@app.command()
def render(
    template: Annotated[
        str,
        typer.Argument(help="Template file, or directory of templates.", metavar="TEMPLATE"),
    ],
    data: Annotated[
        str,
        typer.Argument(help="Data file, or directory mirroring the templates.", metavar="DATA"),
    ],
    outfile: Annotated[
        str,
        typer.Option(
            "--outfile",
            "-o",
            help="Write output to FILE (single-file mode only).",
            metavar="FILE",
        ),
    ] = "",
    outdir: Annotated[
        str,
        typer.Option(
            "--outdir",
            "-d",
            help="Write one .html file per template under DIR. Required for directories.",
            metavar="DIR",
        ),
    ] = "",
    ignore: Annotated[
        list[str],
        typer.Option(
            "--ignore",
            "-i",
            help="Skip templates matching GLOB. Repeatable.",
            metavar="GLOB",
        ),
    ] = [],
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="Output file permissions in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = "",
    no_computed_data: Annotated[
        bool,
        typer.Option(
            "--no-computed-data",
            help="Refuse to execute .py data modules.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Render TEMPLATE with DATA into HTML."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    logger.debug("Starting tmpl2html")

    try:
        config = build_config(
            template,
            data,
            outfile=outfile,
            outdir=outdir,
            ignore=ignore,
            file_mode=file_mode,
            no_computed_data=no_computed_data,
        )
    except Tmpl2HtmlError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    if config.template_path.is_dir():
        # Per-file failures are reported, never fatal
        for outcome in driver.process_directory(config):
            typer.echo(outcome.status_line, err=True)
        return

    try:
        driver.render_file(config)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
