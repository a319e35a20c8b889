"""Shared data structures for stack detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional


class DetectionError(RuntimeError):
    """Raised when a recognized manifest is malformed or missing required data."""


class DependencyStyle(str, Enum):
    POETRY = "poetry"
    PEP621 = "pep621"
    PIPENV = "pipenv"
    PIP = "pip"


class Framework(str, Enum):
    FASTAPI = "fastapi"
    FLASK = "flask"
    STREAMLIT = "streamlit"


@dataclass(frozen=True)
class StackConfig:
    """Normalized result of reading one manifest convention."""

    py_version: str
    app_name: str
    dependencies: FrozenSet[str]
    dep_style: DependencyStyle

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", frozenset(self.dependencies))


@dataclass(frozen=True)
class RuntimeVersion:
    version: str
    pinned: bool


@dataclass(frozen=True)
class RuntimeDescriptor:
    version: str
    pinned: bool = False
    language: str = "python"


@dataclass(frozen=True)
class DeploymentDescriptor:
    """Terminal value handed to the artifact renderer."""

    template_vars: Mapping[str, Any]
    family: str
    port: int
    object_storage: bool
    runtime: RuntimeDescriptor
    template_dir: str = "python-docker"
    builder: Optional[str] = None
    env: Mapping[str, str] = field(default_factory=dict)
    skip_deploy: bool = False
    deploy_docs: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "template_vars", MappingProxyType(dict(self.template_vars)))
        object.__setattr__(self, "env", MappingProxyType(dict(self.env)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "family": self.family,
            "port": self.port,
            "object_storage": self.object_storage,
            "runtime": {
                "language": self.runtime.language,
                "version": self.runtime.version,
                "pinned": self.runtime.pinned,
            },
            "template_dir": self.template_dir,
            "template_vars": dict(self.template_vars),
            "builder": self.builder,
            "env": dict(self.env),
            "skip_deploy": self.skip_deploy,
            "deploy_docs": self.deploy_docs,
        }
