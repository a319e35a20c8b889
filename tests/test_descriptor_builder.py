"""Tests for pylaunch.descriptor_builder."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pylaunch.descriptor_builder import (
    CONFLICT,
    build_descriptor,
    build_generic_descriptor,
    classify_framework,
    wants_object_storage,
)
from pylaunch.models import DependencyStyle, Framework, RuntimeVersion, StackConfig
from tests._fixtures.stubs import write_tree


def _cfg(*deps: str, style: DependencyStyle = DependencyStyle.PIP, version: str = "3.11.2") -> StackConfig:
    return StackConfig(
        py_version=version,
        app_name="demo",
        dependencies=frozenset(deps),
        dep_style=style,
    )


class TestClassifyFramework:
    def test_no_framework(self) -> None:
        assert classify_framework({"requests", "pandas"}) is None

    def test_single_framework(self) -> None:
        assert classify_framework({"fastapi", "uvicorn"}) is Framework.FASTAPI

    def test_multiple_frameworks_conflict(self) -> None:
        assert classify_framework({"fastapi", "flask"}) == CONFLICT


class TestBuildDescriptor:
    def test_fastapi(self, tmp_path: Path) -> None:
        descriptor = build_descriptor(_cfg("fastapi"), source_dir=tmp_path)

        assert descriptor is not None
        assert descriptor.family == "FastAPI"
        assert descriptor.port == 8000
        assert descriptor.template_dir == "python-docker"
        assert dict(descriptor.template_vars) == {
            "pyVersion": "3.11.2",
            "appName": "demo",
            "pip": True,
            "fastapi": True,
        }
        assert descriptor.runtime.language == "python"
        assert descriptor.runtime.version == "3.11.2"
        assert descriptor.runtime.pinned is False

    def test_flask(self, tmp_path: Path) -> None:
        descriptor = build_descriptor(
            _cfg("flask", style=DependencyStyle.POETRY), source_dir=tmp_path
        )

        assert descriptor is not None
        assert descriptor.family == "Flask"
        assert descriptor.port == 8080
        assert descriptor.template_vars["poetry"] is True
        assert descriptor.template_vars["flask"] is True

    def test_conflict_warns_and_returns_none(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="pylaunch"):
            descriptor = build_descriptor(_cfg("fastapi", "flask"), source_dir=tmp_path)

        assert descriptor is None
        assert "Multiple supported Python frameworks found" in caplog.text

    def test_no_framework_warns_and_returns_none(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="pylaunch"):
            descriptor = build_descriptor(_cfg("requests"), source_dir=tmp_path)

        assert descriptor is None
        assert "No supported Python frameworks found" in caplog.text

    def test_streamlit_uses_entrypoint(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"dashboard.py": "import streamlit as st\n"})

        descriptor = build_descriptor(_cfg("streamlit"), source_dir=tmp_path)

        assert descriptor is not None
        assert descriptor.family == "Streamlit"
        assert descriptor.port == 8501
        assert descriptor.template_vars["entrypoint"] == "dashboard.py"

    def test_streamlit_without_entrypoint_returns_none(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"app.py": "print('no imports')\n"})

        assert build_descriptor(_cfg("streamlit"), source_dir=tmp_path) is None

    def test_object_storage_flag(self, tmp_path: Path) -> None:
        with_boto3 = build_descriptor(_cfg("flask", "boto3"), source_dir=tmp_path)
        with_boto = build_descriptor(_cfg("flask", "boto"), source_dir=tmp_path)
        without = build_descriptor(_cfg("flask", "botocore"), source_dir=tmp_path)

        assert with_boto3 is not None and with_boto3.object_storage is True
        assert with_boto is not None and with_boto.object_storage is True
        assert without is not None and without.object_storage is False

    def test_prerelease_runtime_is_pinned(self, tmp_path: Path) -> None:
        descriptor = build_descriptor(_cfg("fastapi", version="3.13.0rc2"), source_dir=tmp_path)

        assert descriptor is not None
        assert descriptor.runtime.pinned is True

    def test_descriptor_is_read_only(self, tmp_path: Path) -> None:
        descriptor = build_descriptor(_cfg("fastapi"), source_dir=tmp_path)

        assert descriptor is not None
        with pytest.raises(TypeError):
            descriptor.template_vars["extra"] = True  # type: ignore[index]


def test_wants_object_storage() -> None:
    assert wants_object_storage({"boto3"})
    assert not wants_object_storage({"requests"})


def test_generic_descriptor() -> None:
    descriptor = build_generic_descriptor(RuntimeVersion("3.12.0", False))

    assert descriptor.family == "Python"
    assert descriptor.port == 8080
    assert dict(descriptor.env) == {"PORT": "8080"}
    assert descriptor.skip_deploy is True
    assert descriptor.template_dir == "python"
    assert descriptor.builder == "paketobuildpacks/builder:base"
    assert descriptor.deploy_docs
    assert descriptor.runtime.version == "3.12.0"
    assert descriptor.to_dict()["runtime"] == {
        "language": "python",
        "version": "3.12.0",
        "pinned": False,
    }
