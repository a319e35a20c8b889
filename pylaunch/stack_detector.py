"""Detect a Python project's stack and produce its deployment descriptor."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from .descriptor_builder import build_descriptor, build_generic_descriptor
from .logging import get_logger
from .manifest_detectors import ManifestDetector, default_detectors
from .models import DeploymentDescriptor, StackConfig
from .version_resolver import VersionResolver

LOGGER = get_logger(__name__)

PYTHON_MARKER_FILES = (
    "requirements.txt",
    "environment.yml",
    "poetry.lock",
    "Pipfile",
    "setup.py",
    "setup.cfg",
)


def has_python_markers(source_dir: Path) -> bool:
    return any((source_dir / name).exists() for name in PYTHON_MARKER_FILES)


class StackDetector:
    """Run manifest detectors in priority order; the first definitive outcome wins."""

    def __init__(
        self,
        resolver: Optional[VersionResolver] = None,
        detectors: Optional[Sequence[ManifestDetector]] = None,
    ) -> None:
        self.resolver = resolver or VersionResolver()
        self.detectors: List[ManifestDetector] = list(
            detectors if detectors is not None else default_detectors(self.resolver)
        )

    def stack_config(self, source_dir: Path) -> Optional[StackConfig]:
        """Return the config of the first applicable detector.

        A DetectionError from any detector propagates immediately; lower
        priority detectors are not consulted.
        """
        for detector in self.detectors:
            cfg = detector.detect(source_dir)
            if cfg is not None:
                return cfg
        return None

    def detect(self, source_dir: Path | str) -> Optional[DeploymentDescriptor]:
        root = Path(source_dir).expanduser().resolve()
        if not root.is_dir():
            raise FileNotFoundError(f"Source directory not found: {root}")

        cfg = self.stack_config(root)
        if cfg is not None:
            descriptor = build_descriptor(cfg, source_dir=root)
            if descriptor is not None:
                return descriptor

        if not has_python_markers(root):
            LOGGER.debug("No Python project markers in %s", root)
            return None

        LOGGER.info("Falling back to a generic Python descriptor")
        return build_generic_descriptor(self.resolver.resolve(root))


def detect_stack(
    source_dir: Path | str,
    *,
    resolver: Optional[VersionResolver] = None,
    detectors: Optional[Sequence[ManifestDetector]] = None,
) -> Optional[DeploymentDescriptor]:
    """Return the deployment descriptor for ``source_dir``, or None if it is not a Python project."""
    return StackDetector(resolver=resolver, detectors=detectors).detect(source_dir)
