"""Tests for template discovery and batch rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from tmpl2html.core.errors import DataLoadError
from tmpl2html.core.models import RunConfig
from tmpl2html.rendering.driver import (
    discover_templates,
    is_ignored,
    process_directory,
    render_file,
)


@pytest.fixture
def site(make_tree) -> Path:
    return make_tree(
        {
            "templates/index.tmpl": "<h1>{{ title }}</h1>",
            "templates/blog/post.tmpl": "<p>{{ body }}</p>",
            "templates/blog/_partial.tmpl": "partial",
            "templates/notes.txt": "not a template",
            "data/index.json": '{"title": "Home"}',
            "data/blog/post.yaml": "body: Hello\n",
        }
    )


class TestIsIgnored:
    @pytest.mark.parametrize(
        ("relative", "pattern", "expected"),
        [
            ("blog/_partial.tmpl", "_*.tmpl", True),
            ("_top.tmpl", "_*.tmpl", True),
            ("blog/post.tmpl", "blog/*", True),
            ("blog/post.tmpl", "**/post.tmpl", True),
            ("post.tmpl", "**/post.tmpl", True),
            ("drafts/a/b.tmpl", "drafts/**", True),
            ("blog/deep/post.tmpl", "blog/*.tmpl", False),
            ("blog/deep/post.tmpl", "blog/**/*.tmpl", True),
            ("blog/post.tmpl", "blog/**/*.tmpl", True),
            ("blog/post.tmpl", "/blog/*.tmpl", True),
            ("index.tmpl", "blog/*", False),
            ("blog/post.tmpl", "post", False),
        ],
    )
    def test_patterns(self, relative: str, pattern: str, expected: bool) -> None:
        assert is_ignored(Path(relative), [pattern]) is expected

    def test_any_pattern_excludes(self) -> None:
        assert is_ignored(Path("a.tmpl"), ["x.tmpl", "a.tmpl"])


class TestDiscoverTemplates:
    def test_sorted_and_filtered_by_extension(self, site: Path) -> None:
        found = discover_templates(site / "templates", ".tmpl")
        base = (site / "templates").resolve()

        assert found == [
            base / "blog" / "_partial.tmpl",
            base / "blog" / "post.tmpl",
            base / "index.tmpl",
        ]

    def test_ignored_templates_are_skipped(self, site: Path) -> None:
        found = discover_templates(site / "templates", ".tmpl", ["_*.tmpl"])

        assert all(not path.name.startswith("_") for path in found)
        assert len(found) == 2


class TestProcessDirectory:
    def _config(self, site: Path, **overrides) -> RunConfig:
        values = {
            "template_path": site / "templates",
            "data_path": site / "data",
            "outdir": site / "out",
            "ignore": ("_*.tmpl",),
        }
        values.update(overrides)
        return RunConfig(**values)

    def test_renders_mirrored_tree(self, site: Path) -> None:
        (site / "out").mkdir()

        outcomes = process_directory(self._config(site))

        assert [o.status_line for o in outcomes] == [
            "blog/post.tmpl: Done",
            "index.tmpl: Done",
        ]
        assert (site / "out/index.html").read_text() == "<h1>Home</h1>"
        assert (site / "out/blog/post.html").read_text() == "<p>Hello</p>"

    def test_failure_does_not_stop_batch(self, site: Path) -> None:
        (site / "data/blog/post.yaml").unlink()
        (site / "data/blog/post.json").write_text("{broken")

        outcomes = process_directory(self._config(site))

        assert [o.relative_path for o in outcomes] == ["blog/post.tmpl", "index.tmpl"]
        assert not outcomes[0].ok
        assert "Invalid JSON" in outcomes[0].message
        assert outcomes[1].ok
        assert (site / "out/index.html").exists()
        assert not (site / "out/blog/post.html").exists()

    def test_one_outcome_per_template(self, site: Path) -> None:
        outcomes = process_directory(self._config(site, ignore=()))

        # _partial.tmpl has no data file but still gets a status line
        assert len(outcomes) == 3
        assert sum(1 for o in outcomes if not o.ok) == 1

    def test_shared_data_file(self, site: Path) -> None:
        (site / "shared.json").write_text('{"title": "T", "body": "B"}')

        outcomes = process_directory(self._config(site, data_path=site / "shared.json"))

        assert all(o.ok for o in outcomes)
        assert (site / "out/blog/post.html").read_text() == "<p>B</p>"

    def test_non_utf8_template_does_not_stop_batch(self, site: Path) -> None:
        (site / "templates/blog/post.tmpl").write_bytes(b"\xff\xfe bad")

        outcomes = process_directory(self._config(site))

        assert [o.ok for o in outcomes] == [False, True]
        assert "not valid UTF-8" in outcomes[0].message
        assert (site / "out/index.html").read_text() == "<h1>Home</h1>"

    def test_non_utf8_data_does_not_stop_batch(self, site: Path) -> None:
        (site / "data/blog/post.yaml").write_bytes(b"body: \xff\xfe\n")

        outcomes = process_directory(self._config(site))

        assert [o.ok for o in outcomes] == [False, True]
        assert "not valid UTF-8" in outcomes[0].message

    def test_multiline_error_gives_one_status_line(self, site: Path) -> None:
        (site / "data/blog/post.yaml").write_text("body: [1, 2\n")

        outcomes = process_directory(self._config(site))

        assert len(outcomes) == 2
        assert outcomes[0].status_line.startswith("blog/post.tmpl: Invalid YAML")
        assert "\n" not in outcomes[0].status_line


class TestRenderFile:
    def test_writes_outfile(self, make_tree) -> None:
        root = make_tree({"greet.tmpl": "Hello, {{ name }}", "greet.json": '{"name": "World"}'})
        config = RunConfig(
            template_path=root / "greet.tmpl",
            data_path=root / "greet.json",
            outfile=root / "greet.html",
        )

        assert render_file(config) == root / "greet.html"
        assert (root / "greet.html").read_text() == "Hello, World"

    def test_outdir_uses_template_name(self, make_tree) -> None:
        root = make_tree({"greet.tmpl": "Hi {{ name }}", "data/greet.json": '{"name": "A"}'})
        (root / "out").mkdir()
        config = RunConfig(
            template_path=root / "greet.tmpl",
            data_path=root / "data",
            outdir=root / "out",
        )

        render_file(config)

        assert (root / "out/greet.html").read_text() == "Hi A"

    def test_errors_propagate(self, make_tree) -> None:
        root = make_tree({"greet.tmpl": "Hello"})
        config = RunConfig(template_path=root / "greet.tmpl", data_path=root)

        with pytest.raises(DataLoadError):
            render_file(config)
