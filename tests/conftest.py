"""Shared fixtures for the tmpl2html test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write a mapping of relative paths to file contents under tmp_path."""

    def _make(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TMPL2HTML_TEMPLATE_EXTENSION",
        "TMPL2HTML_OUTPUT_EXTENSION",
        "TMPL2HTML_ALLOW_COMPUTED_DATA",
        "TMPL2HTML_FILE_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
