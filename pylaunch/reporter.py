"""Reporting utilities for pylaunch."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

from .models import DependencyStyle, DeploymentDescriptor

REPORT_JSON = "pylaunch-report.json"
REPORT_MD = "pylaunch-report.md"


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def summarize(descriptor: DeploymentDescriptor) -> str:
    runtime = descriptor.runtime
    parts = [
        f"Family: {descriptor.family}",
        f"Port: {descriptor.port}",
        f"Python: {runtime.version}{' (pinned)' if runtime.pinned else ''}",
        f"Object storage: {'yes' if descriptor.object_storage else 'no'}",
    ]
    entrypoint = descriptor.template_vars.get("entrypoint")
    if entrypoint:
        parts.append(f"Entrypoint: {entrypoint}")
    return " | ".join(parts)


def generate_reports(
    output_dir: Path,
    descriptor: DeploymentDescriptor,
    templates_used: List[str],
    generated_files: List[str],
    warnings: List[str],
) -> Dict[str, Path]:
    """Write JSON and Markdown reports to the output directory."""
    report_json_path = output_dir / REPORT_JSON
    report_md_path = output_dir / REPORT_MD

    report_data = {
        "descriptor": descriptor.to_dict(),
        "templates": templates_used,
        "generated_files": generated_files,
        "warnings": warnings,
    }
    _write_file(report_json_path, json.dumps(report_data, indent=2))

    style = next(
        (candidate.value for candidate in DependencyStyle if descriptor.template_vars.get(candidate.value)),
        None,
    )
    md_lines = [
        "# pylaunch Report",
        "",
        "## Detected Stack",
        f"- Family: {descriptor.family}",
        f"- App name: {descriptor.template_vars.get('appName') or 'unknown'}",
        f"- Dependency style: {style or 'unknown'}",
        f"- Python version: {descriptor.runtime.version}",
        f"- Pinned: {'yes' if descriptor.runtime.pinned else 'no'}",
        f"- Port: {descriptor.port}",
        f"- Object storage: {'yes' if descriptor.object_storage else 'no'}",
    ]
    if descriptor.template_vars.get("entrypoint"):
        md_lines.append(f"- Entrypoint: {descriptor.template_vars['entrypoint']}")
    md_lines.extend(["", "## Templates"])
    md_lines.extend(f"- {name}" for name in templates_used)
    md_lines.extend(["", "## Generated Files"])
    md_lines.extend(f"- {path}" for path in generated_files)
    md_lines.append("")
    md_lines.append("## Warnings")
    if warnings:
        md_lines.extend(f"- {w}" for w in warnings)
    else:
        md_lines.append("- None")
    if descriptor.deploy_docs:
        md_lines.extend(["", "## Next Steps", descriptor.deploy_docs])

    _write_file(report_md_path, "\n".join(md_lines))
    return {"json": report_json_path, "markdown": report_md_path}
