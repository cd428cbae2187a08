"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mermaidgen.cli import _build_parser, main
from tests._fixtures.source_builder import SourceTreeBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "generate"])
    assert args.verbose is True
    assert args.command == "generate"
    assert args.directory == "."
    assert args.output is None


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["generate", "--verbose"])
    assert args.verbose is True


def test_cli_accepts_log_file_before_or_after_command() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--log-file", "run.log", "generate"]).log_file == "run.log"
    assert parser.parse_args(["dump", "a.py", "--log-file", "run.log"]).log_file == "run.log"
    assert parser.parse_args(["generate"]).log_file is None


def test_generate_writes_log_file(source_tree: SourceTreeBuilder, tmp_path: Path) -> None:
    source_tree.write({"shapes.py": "class Shape:\n    pass\n", "broken.py": "class (:\n"})
    log_file = tmp_path / "run.log"

    main(["--log-file", str(log_file), "generate", str(source_tree.path())])

    text = log_file.read_text(encoding="utf-8")
    assert "Generating class diagram for" in text
    assert "Skipping broken.py" in text
    assert "shapes.py contributed 1 new statements" in text


def test_unwritable_log_file_exits_non_zero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--log-file", str(tmp_path / "missing" / "run.log"), "generate", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Cannot open log file" in capsys.readouterr().err


def test_cli_generate_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["generate", "Sources/App", "-o", "docs/classes.mmd", "--title", "App", "-j", "4"]
    )
    assert args.directory == "Sources/App"
    assert args.output == "docs/classes.mmd"
    assert args.title == "App"
    assert args.jobs == 4


def test_cli_rejects_non_positive_jobs() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["generate", "--jobs", "0"])


def test_generate_prints_diagram(
    source_tree: SourceTreeBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    source_tree.write({"shapes.py": "class Shape:\n    pass\n"})

    main(["generate", str(source_tree.path()), "--title", "Shapes"])

    out = capsys.readouterr().out
    assert out == "---\ntitle: Shapes\n---\nclassDiagram\n\tclass `Shape`\n"


def test_generate_writes_output_file(source_tree: SourceTreeBuilder, tmp_path: Path) -> None:
    source_tree.write({"shapes.py": "class Shape:\n    pass\n"})
    output = tmp_path / "classes.mmd"

    main(["generate", str(source_tree.path()), "-o", str(output)])

    assert output.read_text(encoding="utf-8").endswith("classDiagram\n\tclass `Shape`\n")


def test_generate_missing_directory_exits_non_zero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(tmp_path / "missing")])

    assert excinfo.value.code == 1
    assert "not found" in capsys.readouterr().err


def test_generate_output_error_exits_non_zero(
    source_tree: SourceTreeBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source_tree.write({"shapes.py": "class Shape:\n    pass\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(source_tree.path()), "-o", str(tmp_path / "no" / "out.mmd")])

    assert excinfo.value.code == 1
    assert "Failed to write" in capsys.readouterr().err


def test_generate_invalid_config_exits_non_zero(
    source_tree: SourceTreeBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    source_tree.write({".mermaidgen.yml": "- not\n- a mapping\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(source_tree.path())])

    assert excinfo.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_dump_prints_declaration_tree(
    source_tree: SourceTreeBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    source_tree.write({"shapes.py": "class Shape(Base):\n    pass\n"})

    main(["dump", str(source_tree.path() / "shapes.py")])

    payload = json.loads(capsys.readouterr().out)
    assert payload["kind"] == "module"
    assert payload["children"][0]["kind"] == "class"
    assert payload["children"][0]["inherited_types"] == ["Base"]


def test_dump_unsupported_file_exits_non_zero(
    source_tree: SourceTreeBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    source_tree.write({"notes.txt": "hello\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["dump", str(source_tree.path() / "notes.txt")])

    assert excinfo.value.code == 1
    assert "No parser supports" in capsys.readouterr().err
