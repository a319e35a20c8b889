"""Map a stack configuration to a deployment descriptor."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from .entrypoint_locator import find_entrypoint
from .logging import get_logger
from .models import (
    DeploymentDescriptor,
    Framework,
    RuntimeDescriptor,
    RuntimeVersion,
    StackConfig,
)
from .version_resolver import is_pinned

LOGGER = get_logger(__name__)

CONFLICT = "conflict"

SUPPORTED_FRAMEWORKS = tuple(Framework)

FRAMEWORK_FAMILIES: Dict[Framework, str] = {
    Framework.FASTAPI: "FastAPI",
    Framework.FLASK: "Flask",
    Framework.STREAMLIT: "Streamlit",
}

FRAMEWORK_PORTS: Dict[Framework, int] = {
    Framework.FASTAPI: 8000,
    Framework.FLASK: 8080,
    Framework.STREAMLIT: 8501,
}

OBJECT_STORAGE_CLIENTS = frozenset({"boto3", "boto"})

GENERIC_PORT = 8080
GENERIC_BUILDER = "paketobuildpacks/builder:base"
GENERIC_DEPLOY_DOCS = (
    "We have generated a simple Procfile for you. "
    "Modify it to fit your needs and deploy your application manually."
)

Classification = Union[Framework, str, None]


def classify_framework(dependencies: Iterable[str]) -> Classification:
    """Return the single supported framework, ``None``, or ``CONFLICT``."""
    names = set(dependencies)
    matches = [framework for framework in SUPPORTED_FRAMEWORKS if framework.value in names]
    if not matches:
        return None
    if len(matches) > 1:
        return CONFLICT
    return matches[0]


def wants_object_storage(dependencies: Iterable[str]) -> bool:
    return not OBJECT_STORAGE_CLIENTS.isdisjoint(dependencies)


def build_descriptor(cfg: StackConfig, *, source_dir: Path) -> Optional[DeploymentDescriptor]:
    """Build the descriptor for ``cfg``, or return None when no unique framework applies."""
    framework = classify_framework(cfg.dependencies)
    if framework == CONFLICT:
        LOGGER.warning("Multiple supported Python frameworks found")
        return None
    if framework is None:
        LOGGER.warning("No supported Python frameworks found")
        return None

    template_vars: Dict[str, Any] = {
        "pyVersion": cfg.py_version,
        "appName": cfg.app_name,
        cfg.dep_style.value: True,
        framework.value: True,
    }

    if framework is Framework.STREAMLIT:
        entrypoint = find_entrypoint(source_dir, Framework.STREAMLIT.value)
        if entrypoint is None:
            LOGGER.warning("No Streamlit entrypoint found")
            return None
        template_vars["entrypoint"] = entrypoint

    return DeploymentDescriptor(
        template_vars=template_vars,
        family=FRAMEWORK_FAMILIES[framework],
        port=FRAMEWORK_PORTS[framework],
        object_storage=wants_object_storage(cfg.dependencies),
        runtime=RuntimeDescriptor(version=cfg.py_version, pinned=is_pinned(cfg.py_version)),
    )


def build_generic_descriptor(runtime: RuntimeVersion) -> DeploymentDescriptor:
    """Fallback descriptor for Python projects without a recognized framework."""
    return DeploymentDescriptor(
        template_vars={"pyVersion": runtime.version},
        family="Python",
        port=GENERIC_PORT,
        object_storage=False,
        runtime=RuntimeDescriptor(version=runtime.version, pinned=runtime.pinned),
        template_dir="python",
        builder=GENERIC_BUILDER,
        env={"PORT": str(GENERIC_PORT)},
        skip_deploy=True,
        deploy_docs=GENERIC_DEPLOY_DOCS,
    )
