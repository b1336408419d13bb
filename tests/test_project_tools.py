from __future__ import annotations

import json
import subprocess
from typing import Any, Dict, List

import pytest

from edit_engine import ConfigError, Editor, ToolError
from edit_engine.io import BuildRunner, Formatter, FormatterConfig, ProjectConfig


def write_config(tmp_path, data: Any) -> Any:
    target = tmp_path / "editor_project.json"
    target.write_text(json.dumps(data), encoding="utf-8")
    return target


def fake_run(calls: List[Dict[str, Any]], *, stdout: bytes = b"", code: int = 0):
    def run(command, **kwargs):
        calls.append({"command": command, **kwargs})
        return subprocess.CompletedProcess(
            command, code, stdout=stdout, stderr=b"bad input" if code else b""
        )

    return run


class FakePopen:
    launched: List[Dict[str, Any]] = []

    def __init__(self, argv, cwd=None) -> None:
        self.pid = 4242
        FakePopen.launched.append({"argv": argv, "cwd": cwd})


def test_read_full_project_config(tmp_path) -> None:
    target = write_config(
        tmp_path,
        {
            "build_command": "make -j4",
            "format_on_save": True,
            "formatter": {
                "bin": "/usr/bin/clang-format",
                "style": "LLVM",
                "extensions": ["C", ".cc"],
            },
        },
    )

    config = ProjectConfig.read(target)

    assert config.build_command == "make -j4"
    assert config.format_on_save is True
    assert config.root == tmp_path
    assert config.formatter.command() == ("/usr/bin/clang-format", "--style=LLVM")
    assert config.formatter.supports("c")
    assert config.formatter.supports("CC")
    assert not config.formatter.supports("cpp")


def test_partial_config_uses_defaults(tmp_path) -> None:
    config = ProjectConfig.read(write_config(tmp_path, {"formatter": {"bin": "fmt"}}))

    assert config.build_command is None
    assert config.format_on_save is False
    assert config.formatter.command() == ("fmt", "--style=Mozilla")
    assert config.formatter.extensions == ("c", "cpp", "h", "hpp")


def test_null_style_drops_style_flag(tmp_path) -> None:
    config = ProjectConfig.read(write_config(tmp_path, {"formatter": {"style": None}}))

    assert config.formatter.command() == ("clang-format",)


@pytest.mark.parametrize(
    "data",
    [
        [1, 2, 3],
        {"build_command": 5},
        {"formatter": "clang-format"},
        {"formatter": {"extensions": "c"}},
    ],
)
def test_invalid_config_raises(tmp_path, data: Any) -> None:
    with pytest.raises(ConfigError):
        ProjectConfig.read(write_config(tmp_path, data))


def test_malformed_json_raises_and_load_falls_back(tmp_path) -> None:
    target = tmp_path / "editor_project.json"
    target.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        ProjectConfig.read(target)

    config = ProjectConfig.load(target)
    assert config.path == target
    assert config.build_command is None
    assert config.formatter == FormatterConfig()


def test_editor_load_project_reports_missing_file(tmp_path) -> None:
    editor = Editor()
    errors: List[object] = []
    editor.bus.subscribe("config.error", errors.append)

    assert editor.load_project(tmp_path / "absent.json") is False

    assert len(errors) == 1
    assert editor.project.root == tmp_path
    assert editor.project.formatter == FormatterConfig()


def test_formatter_pipes_text_through_command(monkeypatch, tmp_path) -> None:
    calls: List[Dict[str, Any]] = []
    monkeypatch.setattr(subprocess, "run", fake_run(calls, stdout=b"int x;\n"))

    result = Formatter().format("int   x ;", cwd=tmp_path)

    assert result == "int x;\n"
    assert calls[0]["command"] == ["clang-format", "--style=Mozilla"]
    assert calls[0]["input"] == b"int   x ;"
    assert calls[0]["cwd"] == str(tmp_path)


def test_formatter_failure_raises_tool_error(monkeypatch) -> None:
    monkeypatch.setattr(subprocess, "run", fake_run([], code=1))

    with pytest.raises(ToolError) as info:
        Formatter().format("x")

    assert info.value.returncode == 1
    assert info.value.stderr == "bad input"


def test_formatter_missing_binary_raises_tool_error(monkeypatch) -> None:
    def missing(*_args, **_kwargs):
        raise FileNotFoundError("clang-format")

    monkeypatch.setattr(subprocess, "run", missing)

    with pytest.raises(ToolError):
        Formatter().format("x")


def test_format_buffer_is_one_undoable_edit(monkeypatch) -> None:
    monkeypatch.setattr(subprocess, "run", fake_run([], stdout=b"int x;\n"))
    editor = Editor("int   x ;")
    editor.set_cursor(7)

    assert editor.format_buffer(extension="c") is True

    assert editor.text == "int x;\n"
    assert editor.cursor == 7
    editor.undo()
    assert editor.text == "int   x ;"


def test_format_buffer_skips_unsupported_extension(monkeypatch) -> None:
    calls: List[Dict[str, Any]] = []
    monkeypatch.setattr(subprocess, "run", fake_run(calls))
    editor = Editor("print(1)")
    skipped: List[object] = []
    editor.bus.subscribe("format.skipped", skipped.append)

    assert editor.format_buffer(extension="py") is False

    assert calls == []
    assert skipped == ["py"]


def test_format_error_leaves_buffer_unchanged(monkeypatch) -> None:
    monkeypatch.setattr(subprocess, "run", fake_run([], code=2))
    editor = Editor("int x;")

    assert editor.format_buffer(extension="cpp") is False

    assert editor.text == "int x;"
    assert len(editor.buffer.history) == 0
    assert editor.last_error == "Formatter exited with status 2"


def test_save_formats_first_when_enabled(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(subprocess, "run", fake_run([], stdout=b"int x;\n"))
    editor = Editor("int   x ;", project=ProjectConfig(format_on_save=True))
    target = tmp_path / "main.c"

    assert editor.save_file(target) is True

    assert target.read_text(encoding="utf-8") == "int x;\n"
    assert editor.text == "int x;\n"
    assert not editor.modified


def test_build_runner_starts_shell_in_project_root(monkeypatch, tmp_path) -> None:
    FakePopen.launched = []
    monkeypatch.setattr(subprocess, "Popen", FakePopen)
    project = ProjectConfig(
        path=tmp_path / "editor_project.json", build_command="make all"
    )

    process = BuildRunner(project).start()

    assert process.pid == 4242
    assert FakePopen.launched == [
        {"argv": ["/bin/sh", "-c", "make all"], "cwd": str(tmp_path)}
    ]


def test_build_without_command_reports_error() -> None:
    editor = Editor()
    errors: List[object] = []
    editor.bus.subscribe("build.error", errors.append)

    assert editor.run_build() is None

    assert isinstance(errors[0], ConfigError)
    assert "No build command" in (editor.last_error or "")


def test_editor_run_build_returns_pid(monkeypatch, tmp_path) -> None:
    FakePopen.launched = []
    monkeypatch.setattr(subprocess, "Popen", FakePopen)
    target = write_config(tmp_path, {"build_command": "ninja"})
    editor = Editor()
    editor.load_project(target)

    assert editor.run_build() == 4242
    assert FakePopen.launched[0]["argv"] == ["/bin/sh", "-c", "ninja"]


def test_build_start_failure_raises_tool_error(monkeypatch) -> None:
    def broken(*_args, **_kwargs):
        raise PermissionError("denied")

    monkeypatch.setattr(subprocess, "Popen", broken)

    with pytest.raises(ToolError):
        BuildRunner(ProjectConfig(build_command="make")).start()
