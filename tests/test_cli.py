"""CLI parser and command behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from nsdoc.cli import _build_parser, main


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "build", "api.json"])
    assert args.verbose is True
    assert args.command == "build"
    assert args.metadata == "api.json"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["build", "api.json", "--verbose"])
    assert args.verbose is True
    assert args.quiet is False


def test_cli_accepts_output_and_config_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(["build", "api.json", "-o", "site", "-c", "conf"])
    assert args.output_dir == "site"
    assert args.config == "conf"


def test_build_command_reports_output(
    tmp_path: Path, metadata_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output_dir = tmp_path / "html"
    main(["build", str(metadata_file), "-c", str(tmp_path), "-o", str(output_dir), "-q"])

    captured = capsys.readouterr()
    assert "Documented 2 namespaces" in captured.out
    assert (output_dir / "example.core.html").exists()


def test_build_command_exits_on_missing_metadata(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(tmp_path / "missing.json"), "-c", str(tmp_path), "-q"])
    assert excinfo.value.code == 1
    assert "Metadata file not found" in capsys.readouterr().err


def test_build_command_exits_on_unknown_format(
    tmp_path: Path, metadata_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / ".nsdoc.yml").write_text("doc_format: textile\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(metadata_file), "-c", str(tmp_path), "-q"])
    assert excinfo.value.code == 1
    assert "Unknown doc format 'textile'" in capsys.readouterr().err


def test_formats_command_lists_builtins(capsys: pytest.CaptureFixture[str]) -> None:
    main(["formats", "-q"])
    lines = capsys.readouterr().out.split()
    assert "markdown" in lines
    assert "plaintext" in lines


def test_build_command_exits_on_bad_rewrite_without_output(
    tmp_path: Path, metadata_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / ".nsdoc.yml").write_text(
        "source:\n"
        "  dir_uri: https://example.org/\n"
        "  uri_mapping:\n"
        "    - pattern: '^src'\n"
        "      rewrite: 'src/{file}?ref={branch}'\n",
        encoding="utf-8",
    )
    output_dir = tmp_path / "html"
    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(metadata_file), "-c", str(tmp_path), "-o", str(output_dir), "-q"])
    assert excinfo.value.code == 1
    assert "invalid rewrite" in capsys.readouterr().err
    assert not output_dir.exists()
