"""Template rendering utilities built on Jinja2."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, List, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

TEMPLATES_ENV_VAR = "PYLAUNCH_TEMPLATES_DIR"
TEMPLATE_SUFFIX = ".j2"


def templates_base_dir(override: Optional[Path] = None) -> Path:
    """Resolve the root templates directory: explicit override, env var, then packaged templates."""
    if override:
        return Path(override).expanduser().resolve()
    env_override = os.environ.get(TEMPLATES_ENV_VAR)
    if env_override:
        return Path(env_override).expanduser().resolve()
    return (Path(__file__).resolve().parent / "templates").resolve()


def _environment(base_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(base_dir)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def list_templates(template_dir: str, base_dir: Optional[Path] = None) -> List[str]:
    """Return the template paths (relative to the base dir) under ``template_dir``."""
    base = templates_base_dir(base_dir)
    directory = base / template_dir
    if not directory.is_dir():
        raise FileNotFoundError(f"Template directory '{template_dir}' not found under {base}")
    return sorted(
        path.relative_to(base).as_posix()
        for path in directory.rglob(f"*{TEMPLATE_SUFFIX}")
        if path.is_file()
    )


def render_template(
    template_path: str,
    context: Mapping[str, Any],
    base_dir: Optional[Path] = None,
) -> str:
    """Render a template under the templates directory."""
    base = templates_base_dir(base_dir)
    env = _environment(base)
    try:
        template = env.get_template(template_path)
    except TemplateNotFound as exc:
        raise FileNotFoundError(f"Template '{template_path}' not found under {base}") from exc
    return template.render(**context)
