"""Data sources for template rendering.

A data file is either a static document (JSON or YAML) or a Python module
whose ``data`` attribute is the document, or a function returning it.
Loading a module executes its code; pass ``allow_computed=False`` to refuse
``.py`` data files.
"""

from __future__ import annotations

import importlib.util
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Union

import yaml
from pydantic import BaseModel

from ..core.errors import DataLoadError

logger = logging.getLogger(__name__)

# Tried in order when the data path has no usable extension
DATA_SUFFIXES = (".py", ".json", ".yaml", ".yml")

_STATIC_SUFFIXES = {".json", ".yaml", ".yml"}
_COMPUTED_SUFFIXES = {".py"}


def _ensure_mapping(value: Any, source: Path) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DataLoadError(
            f"Data in {source} must be a mapping, got {type(value).__name__}"
        )
    return value


class StaticDocument(BaseModel):
    """Data parsed from a JSON or YAML file."""

    source: Path
    data: Any

    def resolve(self) -> Mapping[str, Any]:
        return _ensure_mapping(self.data, self.source)


class ComputedDocument(BaseModel):
    """Data produced by a function exported from a Python module."""

    source: Path
    factory: Callable[[], Any]

    def resolve(self) -> Mapping[str, Any]:
        try:
            value = self.factory()
        except Exception as e:
            raise DataLoadError(f"Data function in {self.source} failed: {e}") from e
        return _ensure_mapping(value, self.source)


DataSource = Union[StaticDocument, ComputedDocument]


def find_data_file(data_path: Path) -> Path:
    """Locate the data file for a path that may omit its extension.

    Args:
        data_path: Data file path, with or without extension

    Returns:
        Existing data file
    """
    if data_path.is_file():
        return data_path

    for suffix in DATA_SUFFIXES:
        candidate = data_path.with_name(data_path.name + suffix)
        if candidate.is_file():
            return candidate

    raise DataLoadError(f"Data file not found: {data_path}")


def _parse_static(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DataLoadError(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise DataLoadError(f"Cannot read {path}: {e}") from e

    if path.suffix == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DataLoadError(f"Invalid JSON in {path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DataLoadError(f"Invalid YAML in {path}: {e}") from e
    # An empty YAML document is an empty mapping
    return {} if data is None else data


def _load_module_export(path: Path) -> Callable[[], Any]:
    spec = importlib.util.spec_from_file_location(
        f"tmpl2html_data_{path.stem}", path
    )
    if spec is None or spec.loader is None:
        raise DataLoadError(f"Cannot load data module: {path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise DataLoadError(f"Error evaluating {path}: {e}") from e

    if not hasattr(module, "data"):
        raise DataLoadError(f"Data module {path} does not define 'data'")

    export = module.data
    if callable(export):
        return export
    return lambda: export


def load_data_source(data_path: Path, *, allow_computed: bool = True) -> DataSource:
    """Load the data source for a template.

    Args:
        data_path: Data file path, with or without extension
        allow_computed: Whether ``.py`` data modules may be executed

    Returns:
        Static or computed data source
    """
    path = find_data_file(data_path)
    suffix = path.suffix.lower()
    logger.debug(f"Loading data from {path}")

    if suffix in _STATIC_SUFFIXES:
        return StaticDocument(source=path, data=_parse_static(path))

    if suffix in _COMPUTED_SUFFIXES:
        if not allow_computed:
            raise DataLoadError(f"Computed data modules are disabled: {path}")
        return ComputedDocument(source=path, factory=_load_module_export(path))

    raise DataLoadError(f"Unsupported data file type: {path}")
