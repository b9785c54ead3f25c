"""Tests for the command line driver."""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from conftest import wrapped

from globals_transform.cli import main, parse_external
from globals_transform.run_transform import collect_sources, output_file_for_source


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small project with two modules and a plain script."""
    root = tmp_path / "project"
    (root / "foo").mkdir(parents=True)
    (root / "foo" / "bar.js").write_text('import baz from "./baz";\nexport default baz;\n')
    (root / "foo" / "baz.js").write_text("export default 42;\n")
    (root / "plain.js").write_text("var a = 1;\n")
    (root / "notes.txt").write_text("not javascript\n")
    return root


def test_parse_external() -> None:
    """Verify SOURCE=GLOBAL parsing."""
    assert parse_external("jquery=jQuery") == ("jquery", "jQuery")


def test_collect_sources_walks_directories(project: Path) -> None:
    """Verify that directories expand to sorted files with known extensions."""
    sources = collect_sources([project], [".js"])
    assert [p.name for p in sources] == ["bar.js", "baz.js", "plain.js"]


def test_output_file_keeps_layout(project: Path, tmp_path: Path) -> None:
    """Verify that outputs mirror the root-relative layout."""
    out = output_file_for_source(tmp_path / "out", project, project / "foo" / "bar.js")
    assert out == tmp_path / "out" / "foo" / "bar.js"


def test_main_transforms_directory(project: Path, tmp_path: Path) -> None:
    """Verify an end-to-end run writing transformed files."""
    out_dir = tmp_path / "out"
    code = main(
        [
            str(project),
            "--root",
            str(project),
            "--out-dir",
            str(out_dir),
            "--namespace-root",
            "app",
        ]
    )

    assert code == 0
    assert (out_dir / "foo" / "bar.js").read_text() == wrapped(
        "var baz = this.app.foo.baz;",
        "this.app.foo = this.app.foo || {};",
        "this.app.foo.bar = baz;",
    )
    assert (out_dir / "plain.js").read_text() == wrapped("var a = 1;")
    assert not (out_dir / "notes.txt").exists()


def test_main_with_config_file(project: Path, tmp_path: Path) -> None:
    """Verify that config file settings reach the transform."""
    config_file = tmp_path / "globals.yml"
    config_file.write_text(
        yaml.dump({"namespace_root": "app", "transform_only_modules": True})
    )
    out_dir = tmp_path / "out"

    code = main(
        [
            str(project / "plain.js"),
            "--root",
            str(project),
            "--out-dir",
            str(out_dir),
            "--config",
            str(config_file),
        ]
    )

    assert code == 0
    assert (out_dir / "plain.js").read_text() == "var a = 1;\n"


def test_main_dry_run_writes_nothing(project: Path, tmp_path: Path) -> None:
    """Verify that a dry run leaves the output directory absent."""
    out_dir = tmp_path / "out"
    code = main(
        [
            str(project),
            "--root",
            str(project),
            "--out-dir",
            str(out_dir),
            "--namespace-root",
            "app",
            "--dry-run",
        ]
    )
    assert code == 0
    assert not out_dir.exists()


def test_main_requires_namespace_root(project: Path, tmp_path: Path) -> None:
    """Verify that a missing namespace root is reported as a configuration error."""
    code = main([str(project), "--root", str(project), "--out-dir", str(tmp_path / "o")])
    assert code == 2


def test_main_reports_parse_errors(project: Path, tmp_path: Path) -> None:
    """Verify that a broken file fails alone and sets the exit status."""
    (project / "broken.js").write_text("export default = ;\n")
    out_dir = tmp_path / "out"

    code = main(
        [
            str(project),
            "--root",
            str(project),
            "--out-dir",
            str(out_dir),
            "--namespace-root",
            "app",
        ]
    )

    assert code == 1
    assert not (out_dir / "broken.js").exists()
    assert (out_dir / "foo" / "baz.js").exists()


def test_main_externals(project: Path, tmp_path: Path) -> None:
    """Verify that --external maps an import source to a global."""
    (project / "uses_jquery.js").write_text('import $ from "jquery";\n')
    out_dir = tmp_path / "out"

    main(
        [
            str(project / "uses_jquery.js"),
            "--root",
            str(project),
            "--out-dir",
            str(out_dir),
            "--namespace-root",
            "app",
            "--external",
            "jquery=jQuery",
        ]
    )

    assert (out_dir / "uses_jquery.js").read_text() == wrapped(
        "var $ = this.jQuery.default || this.jQuery;"
    )


def test_main_passes_merged_config(tmp_path: Path) -> None:
    """Verify that command line flags override the loaded configuration."""
    with patch("globals_transform.cli.run_transform", return_value=0) as run:
        code = main(
            [
                str(tmp_path),
                "--out-dir",
                str(tmp_path / "out"),
                "--namespace-root",
                "app",
                "--export-all",
                "drop",
            ]
        )

    assert code == 0
    config = run.call_args.args[1]
    assert config["namespace_root"] == "app"
    assert config["export_all"] == "drop"
    assert config["transform_only_modules"] is False
