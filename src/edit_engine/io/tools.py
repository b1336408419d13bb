"""External formatter and build-command invocation."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from edit_engine.errors import ConfigError, ToolError
from edit_engine.runtime import telemetry

from .project import FormatterConfig, ProjectConfig


class Formatter:
    """Pipes buffer text through a formatter command such as clang-format.

    The command reads the source on stdin and writes the result to stdout.
    Any failure raises :class:`ToolError`; a partial result is never
    returned.
    """

    def __init__(self, config: Optional[FormatterConfig] = None) -> None:
        self.config = config or FormatterConfig()

    def supports(self, extension: str) -> bool:
        return self.config.supports(extension)

    def format(self, text: str, *, cwd: Optional[Path] = None) -> str:
        command = list(self.config.command())
        with telemetry.span(
            "tools::format", component="tools", metadata={"command": command}
        ):
            try:
                completed = subprocess.run(
                    command,
                    input=text.encode("utf-8"),
                    capture_output=True,
                    cwd=str(cwd) if cwd else None,
                    check=False,
                )
            except OSError as exc:
                raise ToolError(
                    f"Unable to run formatter '{command[0]}': {exc}", command=command
                ) from exc

            stderr = completed.stderr.decode("utf-8", errors="replace")
            if completed.returncode != 0:
                raise ToolError(
                    f"Formatter exited with status {completed.returncode}",
                    command=command,
                    returncode=completed.returncode,
                    stderr=stderr,
                )
            try:
                return completed.stdout.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ToolError(
                    "Formatter produced output that is not valid UTF-8",
                    command=command,
                    returncode=completed.returncode,
                    stderr=stderr,
                ) from exc


class BuildRunner:
    """Starts the project's build command without waiting for it."""

    def __init__(self, project: ProjectConfig, *, shell: str = "/bin/sh") -> None:
        self.project = project
        self.shell = shell

    def start(self) -> subprocess.Popen:
        command = self.project.build_command
        if not command:
            raise ConfigError(
                "No build command specified in the project configuration.",
                path=self.project.path,
            )
        argv = [self.shell, "-c", command]
        cwd = self.project.root
        try:
            process = subprocess.Popen(argv, cwd=str(cwd) if cwd else None)
        except OSError as exc:
            raise ToolError(
                f"Failed to start build command: {exc}", command=argv
            ) from exc
        telemetry.record_event(
            "tools.build_started", data={"pid": process.pid, "command": command}
        )
        return process


__all__ = ["BuildRunner", "Formatter"]
