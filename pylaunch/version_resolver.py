"""Resolve the Python runtime version a project should be deployed with."""

from __future__ import annotations

import json
import re
import subprocess
from pathlib import Path
from typing import Callable, Optional, Sequence

from .logging import get_logger
from .models import DetectionError, RuntimeVersion

LOGGER = get_logger(__name__)

CommandRunner = Callable[[Sequence[str]], str]

DEFAULT_INTERPRETERS = ("python3", "python")
DEFAULT_FALLBACK_OUTPUT = "Python 3.12.0"

# Example banners:
#   Python 3.11.2
#   Python 3.12.0b4
_VERSION_PATTERN = re.compile(r"Python ([0-9]+\.[0-9]+\.[0-9]+(?:[a-zA-Z]+[0-9]+)?)")
_NON_NUMERIC = re.compile(r"[^0-9.]")


def run_command(argv: Sequence[str]) -> str:
    """Run a command and return its combined stdout and stderr.

    Raises OSError when the executable cannot be started and
    subprocess.CalledProcessError on a non-zero exit. There is no timeout.
    """
    completed = subprocess.run(
        list(argv),
        check=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    )
    return completed.stdout


def is_pinned(version: str) -> bool:
    """A version is pinned when it carries a prerelease suffix such as ``b4``."""
    return bool(_NON_NUMERIC.search(version))


def parse_version_output(text: str) -> RuntimeVersion:
    match = _VERSION_PATTERN.search(text)
    if not match:
        raise DetectionError("Could not find Python version")
    version = match.group(1)
    return RuntimeVersion(version=version, pinned=is_pinned(version))


def read_pipfile_lock_version(source_dir: Path) -> Optional[str]:
    """Return ``_meta.requires.python_version`` from Pipfile.lock, if declared."""
    lock_path = source_dir / "Pipfile.lock"
    try:
        data = json.loads(lock_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    meta = data.get("_meta")
    if not isinstance(meta, dict):
        return None
    requires = meta.get("requires") or {}
    version = requires.get("python_version") if isinstance(requires, dict) else None
    if isinstance(version, str) and version:
        return version
    return None


class VersionResolver:
    """Tiered lookup: Pipfile.lock metadata, then the live interpreter, then a default."""

    def __init__(
        self,
        runner: CommandRunner = run_command,
        interpreters: Sequence[str] = DEFAULT_INTERPRETERS,
        fallback_output: str = DEFAULT_FALLBACK_OUTPUT,
    ) -> None:
        self.runner = runner
        self.interpreters = tuple(interpreters)
        self.fallback_output = fallback_output

    def resolve(self, source_dir: Path) -> RuntimeVersion:
        locked = read_pipfile_lock_version(Path(source_dir))
        if locked:
            LOGGER.debug("Using Python version %s from Pipfile.lock", locked)
            return RuntimeVersion(version=locked, pinned=is_pinned(locked))
        return parse_version_output(self._probe())

    def _probe(self) -> str:
        for interpreter in self.interpreters:
            try:
                return self.runner([interpreter, "--version"])
            except (OSError, subprocess.CalledProcessError) as exc:
                LOGGER.debug("Could not run %s --version: %s", interpreter, exc)
        LOGGER.debug("Falling back to %r", self.fallback_output)
        return self.fallback_output
