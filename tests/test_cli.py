"""CLI parser and task dispatch tests."""

from __future__ import annotations

import pytest

from wpmoo_pipeline import cli
from wpmoo_pipeline.cli import _build_parser
from wpmoo_pipeline.compiler import CompileError
from wpmoo_pipeline.logging import configure_logging, get_logger


def test_cli_defaults_to_default_task() -> None:
    args = _build_parser().parse_args([])
    assert args.task == "default"
    assert args.verbose is False
    assert args.root == "."
    assert args.log_file is None


def test_cli_accepts_task_names() -> None:
    parser = _build_parser()
    for name in ("styles", "pico:scope", "build", "watch", "clean", "licenses", "default"):
        assert parser.parse_args([name]).task == name


def test_cli_accepts_verbose_before_and_after_task() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--verbose", "build"]).verbose is True
    assert parser.parse_args(["build", "-v"]).verbose is True


def test_cli_accepts_root_after_task() -> None:
    args = _build_parser().parse_args(["styles", "--root", "site"])
    assert args.task == "styles"
    assert args.root == "site"


def test_cli_rejects_unknown_task() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["deploy"])


def test_cli_runs_requested_task(monkeypatch, project) -> None:
    calls = []

    class StubOrchestrator:
        def __init__(self, config) -> None:
            calls.append(("init", config.root))

        def run_task(self, name: str) -> None:
            calls.append(("run", name))

    monkeypatch.setattr(cli, "Orchestrator", StubOrchestrator)

    cli.main(["pico:scope", "--root", str(project.path())])

    assert calls == [("init", project.path().resolve()), ("run", "pico:scope")]


def test_cli_exits_non_zero_on_compile_error(monkeypatch, project, capsys) -> None:
    class FailingOrchestrator:
        def __init__(self, config) -> None:
            pass

        def run_task(self, name: str) -> None:
            raise CompileError("Error: Invalid CSS after \"body {\"")

    monkeypatch.setattr(cli, "Orchestrator", FailingOrchestrator)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["build", "--root", str(project.path())])

    assert excinfo.value.code == 1
    assert "build failed: Error: Invalid CSS" in capsys.readouterr().err


def test_cli_exits_non_zero_on_invalid_config(project, capsys) -> None:
    project.write({".wpmoo-pipeline.yml": "styles:\n  output_style: fancy\n"})

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["build", "--root", str(project.path())])

    assert excinfo.value.code == 1
    assert "output_style" in capsys.readouterr().err


def test_cli_writes_log_file(monkeypatch, project, tmp_path) -> None:
    class LoggingOrchestrator:
        def __init__(self, config) -> None:
            pass

        def run_task(self, name: str) -> None:
            get_logger("orchestrator").info("ran %s", name)

    monkeypatch.setattr(cli, "Orchestrator", LoggingOrchestrator)
    log_file = tmp_path / "logs" / "build.log"

    try:
        cli.main(["clean", "--root", str(project.path()), "--log-file", str(log_file)])
    finally:
        configure_logging()

    assert "ran clean" in log_file.read_text(encoding="utf-8")
