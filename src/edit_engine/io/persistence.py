"""Thin file I/O wrappers used by the editor to load and save buffers."""

from __future__ import annotations

from pathlib import Path

from edit_engine.errors import PersistenceError

DEFAULT_ENCODING = "utf-8"


def load_text(path: str | Path, *, encoding: str = DEFAULT_ENCODING) -> str:
    target = Path(path)
    try:
        # newline="" keeps "\r\n" intact so saving writes the bytes back unchanged.
        with target.open("r", encoding=encoding, newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise PersistenceError(f"Unable to open file: {target}", path=target) from exc


def save_text(path: str | Path, text: str, *, encoding: str = DEFAULT_ENCODING) -> None:
    target = Path(path)
    try:
        with target.open("w", encoding=encoding, newline="") as handle:
            handle.write(text)
    except (OSError, UnicodeEncodeError) as exc:
        raise PersistenceError(
            f"Unable to open file for writing: {target}", path=target
        ) from exc


def file_extension(path: str | Path) -> str:
    """Extension without the dot; dotfiles such as ``.bashrc`` have none."""

    name = Path(path).name
    dot = name.rfind(".")
    if dot <= 0:
        return ""
    return name[dot + 1 :]


__all__ = ["DEFAULT_ENCODING", "file_extension", "load_text", "save_text"]
