"""File lookup and whole-file reading and writing."""

from __future__ import annotations

import os

DEFAULT_DATA_DIR = "."


class MissingFileError(FileNotFoundError):
    """Raised when a file is found neither as given nor under the data directory."""


def file_exists(filename: str) -> bool:
    """Return True when ``filename`` can be stat'ed."""
    try:
        os.stat(filename)
    except OSError:
        return False
    return True


def get_file_location(filename: str, data_dir: str = DEFAULT_DATA_DIR) -> str:
    """Return ``filename`` if it exists, else its path under ``data_dir``."""
    if file_exists(filename):
        return filename
    path = f"{data_dir}/{filename}"
    if not file_exists(path):
        raise MissingFileError(f"No such file '{path}'")
    return path


def read_file(filename: str) -> str:
    """Return the whole contents of ``filename`` as text."""
    with open(filename, "rb") as handle:
        return handle.read().decode("utf-8")


def write_file(filename: str, data: str) -> None:
    """Write ``data`` followed by a newline to ``filename``."""
    with open(filename, "wb") as handle:
        handle.write(f"{data}\n".encode("utf-8"))


def get_file_list(directory: str, data_dir: str = DEFAULT_DATA_DIR) -> list[str]:
    """Return the sorted names of the non-hidden entries of ``directory``."""
    location = get_file_location(directory, data_dir)
    try:
        entries = os.listdir(location)
    except OSError:
        return []
    names = (name for name in entries if not name.startswith("."))
    return sorted(names, key=lambda name: name.encode("utf-8", "surrogateescape"))