"""tmpl2html - Render Jinja2 templates against data files into HTML.

Renders a single template or a whole directory tree of templates against a
mirrored tree of JSON, YAML or Python data files.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
