"""Detectors for the Python dependency-management conventions we support.

Each detector answers one question about a source tree: does its manifest
convention apply? ``detect`` returns a ``StackConfig`` when it does, ``None``
when the convention's files are not present, and raises ``DetectionError``
when the files exist but are malformed or lack required data.
"""

from __future__ import annotations

import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .dependency_parser import canonicalize, read_requirement_tokens
from .logging import get_logger
from .models import DependencyStyle, DetectionError, StackConfig
from .version_resolver import VersionResolver

LOGGER = get_logger(__name__)


def _load_toml(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DetectionError(f"Error reading {path.name}: {exc}") from exc
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise DetectionError(f"Error parsing {path.name}: {exc}") from exc


def _table(data: Dict[str, Any], *keys: str) -> Any:
    """Walk nested tables, returning None as soon as a level is missing."""
    current: Any = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def trim_requires_python(specifier: str) -> str:
    """Trim non-digit, non-dot characters from both ends, e.g. ">=3.10" -> "3.10"."""
    start, end = 0, len(specifier)
    while start < end and not (specifier[start].isdigit() or specifier[start] == "."):
        start += 1
    while end > start and not (specifier[end - 1].isdigit() or specifier[end - 1] == "."):
        end -= 1
    return specifier[start:end]


class ManifestDetector(ABC):
    """Base class for one manifest convention."""

    style: DependencyStyle
    required_files: Tuple[str, ...] = ()

    def __init__(self, resolver: Optional[VersionResolver] = None) -> None:
        self.resolver = resolver or VersionResolver()

    def applies(self, source_dir: Path) -> bool:
        return all((source_dir / name).is_file() for name in self.required_files)

    def resolve_version(self, source_dir: Path) -> str:
        return self.resolver.resolve(source_dir).version

    @abstractmethod
    def detect(self, source_dir: Path) -> Optional[StackConfig]:
        """Return the stack configuration, None when not applicable."""


class PoetryDetector(ManifestDetector):
    style = DependencyStyle.POETRY
    required_files = ("poetry.lock", "pyproject.toml")

    def detect(self, source_dir: Path) -> Optional[StackConfig]:
        if not self.applies(source_dir):
            return None
        LOGGER.info("Detected Poetry project")
        pyproject = _load_toml(source_dir / "pyproject.toml")

        deps = _table(pyproject, "tool", "poetry", "dependencies")
        if not isinstance(deps, dict):
            raise DetectionError("No dependencies found in pyproject.toml")

        python_specifier = deps.get("python")
        if isinstance(python_specifier, str) and python_specifier:
            py_version = canonicalize(python_specifier.removeprefix("^"))
        else:
            py_version = self.resolve_version(source_dir)

        app_name = (
            _table(pyproject, "tool", "poetry", "name")
            or _table(pyproject, "project", "name")
            or source_dir.name
        )
        return StackConfig(
            py_version=py_version,
            app_name=str(app_name),
            dependencies=frozenset(canonicalize(name) for name in deps),
            dep_style=self.style,
        )


class Pep621Detector(ManifestDetector):
    style = DependencyStyle.PEP621
    required_files = ("pyproject.toml",)

    def detect(self, source_dir: Path) -> Optional[StackConfig]:
        if not self.applies(source_dir):
            return None
        LOGGER.info("Detected pyproject.toml")
        pyproject = _load_toml(source_dir / "pyproject.toml")

        deps = _table(pyproject, "project", "dependencies")
        if not isinstance(deps, list) or not deps:
            raise DetectionError("No dependencies found in pyproject.toml")

        requires_python = _table(pyproject, "project", "requires-python") or ""
        if requires_python:
            py_version = trim_requires_python(str(requires_python))
        else:
            py_version = self.resolve_version(source_dir)

        app_name = _table(pyproject, "project", "name") or source_dir.name
        return StackConfig(
            py_version=py_version,
            app_name=str(app_name),
            dependencies=frozenset(canonicalize(str(dep)) for dep in deps),
            dep_style=self.style,
        )


class PipenvDetector(ManifestDetector):
    style = DependencyStyle.PIPENV
    required_files = ("Pipfile", "Pipfile.lock")

    def detect(self, source_dir: Path) -> Optional[StackConfig]:
        if not self.applies(source_dir):
            return None
        LOGGER.info("Detected Pipfile")
        pipfile = _load_toml(source_dir / "Pipfile")

        packages = pipfile.get("packages")
        if not isinstance(packages, dict):
            raise DetectionError("No packages found in Pipfile")

        return StackConfig(
            py_version=self.resolve_version(source_dir),
            app_name=source_dir.name,
            dependencies=frozenset(canonicalize(name) for name in packages),
            dep_style=self.style,
        )


class RequirementsDetector(ManifestDetector):
    style = DependencyStyle.PIP
    candidates: Tuple[str, ...] = ("requirements.txt", "requirements.in")

    def _requirements_file(self, source_dir: Path) -> Optional[Path]:
        for name in self.candidates:
            path = source_dir / name
            if path.is_file():
                return path
        return None

    def applies(self, source_dir: Path) -> bool:
        return self._requirements_file(source_dir) is not None

    def detect(self, source_dir: Path) -> Optional[StackConfig]:
        path = self._requirements_file(source_dir)
        if path is None:
            return None
        LOGGER.info("Detected %s", path.name)
        try:
            tokens = read_requirement_tokens(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise DetectionError(f"Error reading {path.name}: {exc}") from exc
        if not tokens:
            raise DetectionError("No dependencies found in requirements file")

        return StackConfig(
            py_version=self.resolve_version(source_dir),
            app_name=source_dir.name,
            dependencies=frozenset(canonicalize(token) for token in tokens),
            dep_style=self.style,
        )


DETECTOR_TYPES: Sequence[type[ManifestDetector]] = (
    PoetryDetector,
    Pep621Detector,
    PipenvDetector,
    RequirementsDetector,
)


def default_detectors(resolver: Optional[VersionResolver] = None) -> List[ManifestDetector]:
    """Instantiate the detectors in priority order, sharing one resolver."""
    resolver = resolver or VersionResolver()
    return [detector_type(resolver) for detector_type in DETECTOR_TYPES]
