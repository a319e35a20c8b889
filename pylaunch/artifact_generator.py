"""Render containerization artifacts for a deployment descriptor."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import DeploymentDescriptor
from .template_engine import TEMPLATE_SUFFIX, list_templates, render_template


@dataclass
class RenderedArtifact:
    """A rendered file, relative to the project root."""

    path: str
    content: str
    template_used: str


def _context(descriptor: DeploymentDescriptor) -> Dict[str, Any]:
    context: Dict[str, Any] = dict(descriptor.template_vars)
    context.setdefault("port", descriptor.port)
    context.setdefault("objectStorage", descriptor.object_storage)
    return context


def render_artifacts(
    descriptor: DeploymentDescriptor,
    templates_dir: Optional[Path] = None,
) -> List[RenderedArtifact]:
    """Render every template in the descriptor's template directory."""
    context = _context(descriptor)
    artifacts: List[RenderedArtifact] = []
    for template_path in list_templates(descriptor.template_dir, templates_dir):
        relative = template_path[len(descriptor.template_dir) + 1 :]
        artifacts.append(
            RenderedArtifact(
                path=relative[: -len(TEMPLATE_SUFFIX)],
                content=render_template(template_path, context, templates_dir),
                template_used=template_path,
            )
        )
    return artifacts


def write_artifacts(
    artifacts: List[RenderedArtifact],
    output_dir: Path,
    overwrite: bool = False,
) -> tuple[List[Path], List[Path]]:
    """Write artifacts below ``output_dir``; return (written, skipped) paths."""
    written: List[Path] = []
    skipped: List[Path] = []
    for artifact in artifacts:
        path = output_dir / artifact.path
        if path.exists() and not overwrite:
            skipped.append(path)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(artifact.content, encoding="utf-8")
        written.append(path)
    return written, skipped
