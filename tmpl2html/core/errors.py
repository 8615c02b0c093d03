"""Error taxonomy for tmpl2html."""

from __future__ import annotations


class Tmpl2HtmlError(Exception):
    """Base class for every error tmpl2html reports to the user."""


class ConfigurationError(Tmpl2HtmlError):
    """Raised when command line options conflict or are missing."""


class PathValidationError(Tmpl2HtmlError):
    """Raised when an input path is missing or has the wrong type."""


class TemplateLoadError(Tmpl2HtmlError):
    """Raised when a template cannot be found or compiled."""


class DataLoadError(Tmpl2HtmlError):
    """Raised when a data file is missing or cannot be parsed or evaluated."""


class RenderError(Tmpl2HtmlError):
    """Raised when the engine fails while rendering a template."""
