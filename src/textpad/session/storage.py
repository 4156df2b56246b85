"""Reading, creating, and overwriting the edited file.

Content is raw UTF-8 with no newline translation, so ``\\r\\n`` endings
survive a load/save cycle untouched. Writes are plain overwrites; a crash
mid-write can leave the file truncated.
"""

from __future__ import annotations

import os

from textpad.errors import FileCreateError, FileReadError, FileWriteError, PathLike
from textpad.runtime import telemetry

ENCODING = "utf-8"


def read_text(path: PathLike) -> str:
    with open(path, "r", encoding=ENCODING, newline="") as handle:
        return handle.read()


def create_file(path: PathLike) -> str:
    """Create (or truncate) ``path`` and return the empty initial content."""

    try:
        with open(path, "w", encoding=ENCODING, newline=""):
            pass
    except OSError as exc:
        raise FileCreateError(
            f"Unable to create {os.fspath(path)!s}: {exc.strerror or exc}",
            path=path,
        ) from exc
    telemetry.record_event("storage.create", data={"path": os.fspath(path)})
    return ""


def load_or_create(path: PathLike) -> str:
    """Return the file's text, creating an empty file if it does not exist.

    Only a missing file is created. Any other read failure is fatal, so an
    existing file is never truncated.
    """

    try:
        text = read_text(path)
    except UnicodeDecodeError as exc:
        raise FileReadError(
            f"{os.fspath(path)!s} is not valid UTF-8 text", path=path
        ) from exc
    except FileNotFoundError:
        telemetry.record_event(
            "storage.read_fallback",
            level="warning",
            data={"path": os.fspath(path), "error": "FileNotFoundError"},
        )
        return create_file(path)
    except OSError as exc:
        raise FileReadError(
            f"Unable to read {os.fspath(path)!s}: {exc.strerror or exc}", path=path
        ) from exc

    telemetry.record_event(
        "storage.read", data={"path": os.fspath(path), "chars": len(text)}
    )
    return text


def write_text(path: PathLike, text: str) -> None:
    with open(path, "w", encoding=ENCODING, newline="") as handle:
        handle.write(text)


def save(path: PathLike, text: str) -> None:
    """Overwrite ``path`` with ``text``; recreate it once if it went missing."""

    with telemetry.span(
        "storage::save",
        component="storage",
        metadata={"path": os.fspath(path), "chars": len(text)},
    ) as handle:
        try:
            write_text(path, text)
            return
        except FileNotFoundError:
            handle.add_metadata("retry", True)
        except OSError as exc:
            raise FileWriteError(
                f"Unable to write {os.fspath(path)!s}: {exc.strerror or exc}",
                path=path,
            ) from exc

        try:
            create_file(path)
            write_text(path, text)
        except (FileCreateError, OSError) as exc:
            raise FileWriteError(
                f"Unable to write {os.fspath(path)!s} after recreating it",
                path=path,
                retried=True,
            ) from exc


__all__ = ["ENCODING", "read_text", "create_file", "load_or_create", "write_text", "save"]
