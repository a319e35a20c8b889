"""Locate the module that serves as an application's entrypoint."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Optional

from .logging import get_logger

LOGGER = get_logger(__name__)

VENV_MARKER = ".venv"


def _walk_lexical(root: str) -> Iterator[str]:
    """Yield file paths depth-first, entries of each directory sorted by name."""
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        LOGGER.debug("Skipping unreadable directory %s: %s", root, exc)
        return
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_lexical(entry.path)
        elif entry.is_file():
            yield entry.path


def _imports_dependency(path: str, dependency: str) -> bool:
    found = False
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as handle:
            for line in handle:
                if "import" in line and dependency in line:
                    found = True
    except OSError as exc:
        LOGGER.debug("Skipping unreadable file %s: %s", path, exc)
        return False
    return found


def find_entrypoint(source_dir: Path, dependency: str = "streamlit") -> Optional[str]:
    """Return the relative path of the last ``.py`` file importing ``dependency``.

    The whole tree is walked in lexicographic order and every match replaces
    the previous one, so the last matching file wins. Paths containing
    ``.venv`` are ignored.
    """
    root = os.path.abspath(source_dir)
    entrypoint: Optional[str] = None

    for filepath in _walk_lexical(root):
        if not filepath.endswith(".py"):
            continue
        relpath = Path(os.path.relpath(filepath, root)).as_posix()
        if VENV_MARKER in relpath:
            continue
        if _imports_dependency(filepath, dependency):
            entrypoint = relpath

    return entrypoint
