"""Tests for pylaunch.version_resolver."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pylaunch.models import DetectionError, RuntimeVersion
from pylaunch.version_resolver import (
    VersionResolver,
    is_pinned,
    parse_version_output,
    read_pipfile_lock_version,
)
from tests._fixtures.stubs import StubRunner, failing_process


class TestParseVersionOutput:
    def test_release_version_is_not_pinned(self) -> None:
        assert parse_version_output("Python 3.11.2\n") == RuntimeVersion("3.11.2", False)

    def test_prerelease_version_is_pinned(self) -> None:
        assert parse_version_output("Python 3.12.0b4") == RuntimeVersion("3.12.0b4", True)

    def test_banner_inside_noise(self) -> None:
        assert parse_version_output("warning: foo\nPython 3.9.18\n").version == "3.9.18"

    @pytest.mark.parametrize("text", ["", "Python 3.11", "pypy 7.3.1", "python 3.11.2"])
    def test_missing_banner_is_a_hard_error(self, text: str) -> None:
        with pytest.raises(DetectionError, match="Could not find Python version"):
            parse_version_output(text)


def test_is_pinned() -> None:
    assert is_pinned("3.12.0rc1")
    assert not is_pinned("3.11")
    assert not is_pinned("3.11.2")


class TestVersionResolver:
    def test_uses_primary_interpreter(self, tmp_path: Path) -> None:
        runner = StubRunner({"python3": "Python 3.11.2\n", "python": "Python 2.7.18\n"})

        result = VersionResolver(runner=runner).resolve(tmp_path)

        assert result == RuntimeVersion("3.11.2", False)
        assert runner.calls == [["python3", "--version"]]

    def test_falls_back_to_secondary_interpreter(self, tmp_path: Path) -> None:
        runner = StubRunner({"python3": failing_process("python3"), "python": "Python 3.10.4"})

        result = VersionResolver(runner=runner).resolve(tmp_path)

        assert result.version == "3.10.4"
        assert runner.calls == [["python3", "--version"], ["python", "--version"]]

    def test_falls_back_to_default_when_no_interpreter(self, tmp_path: Path) -> None:
        runner = StubRunner({})

        result = VersionResolver(runner=runner).resolve(tmp_path)

        assert result == RuntimeVersion("3.12.0", False)
        assert len(runner.calls) == 2

    def test_unparseable_interpreter_output_is_an_error(self, tmp_path: Path) -> None:
        runner = StubRunner({"python3": "command not understood"})

        with pytest.raises(DetectionError):
            VersionResolver(runner=runner).resolve(tmp_path)

    def test_custom_fallback_output(self, tmp_path: Path) -> None:
        resolver = VersionResolver(runner=StubRunner({}), fallback_output="Python 3.13.0a1")

        assert resolver.resolve(tmp_path) == RuntimeVersion("3.13.0a1", True)

    def test_pipfile_lock_version_takes_priority(self, tmp_path: Path) -> None:
        lock = {"_meta": {"requires": {"python_version": "3.9"}}, "default": {}}
        (tmp_path / "Pipfile.lock").write_text(json.dumps(lock), encoding="utf-8")
        runner = StubRunner({"python3": "Python 3.11.2"})

        result = VersionResolver(runner=runner).resolve(tmp_path)

        assert result == RuntimeVersion("3.9", False)
        assert runner.calls == []

    def test_malformed_pipfile_lock_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "Pipfile.lock").write_text("{not json", encoding="utf-8")
        runner = StubRunner({"python3": "Python 3.11.2"})

        assert VersionResolver(runner=runner).resolve(tmp_path).version == "3.11.2"


def test_read_pipfile_lock_version_without_meta(tmp_path: Path) -> None:
    (tmp_path / "Pipfile.lock").write_text(json.dumps({"default": {}}), encoding="utf-8")

    assert read_pipfile_lock_version(tmp_path) is None
    assert read_pipfile_lock_version(tmp_path / "missing") is None


@pytest.mark.parametrize(
    "lock",
    [
        {"_meta": ["x"]},
        {"_meta": "abc"},
        {"_meta": {"requires": ["3.9"]}},
        {"_meta": {"requires": {"python_version": 3.9}}},
        ["not", "a", "mapping"],
    ],
)
def test_unexpected_pipfile_lock_shapes_fall_back_to_interpreter(tmp_path: Path, lock: object) -> None:
    (tmp_path / "Pipfile.lock").write_text(json.dumps(lock), encoding="utf-8")
    runner = StubRunner({"python3": "Python 3.11.2"})

    assert read_pipfile_lock_version(tmp_path) is None
    assert VersionResolver(runner=runner).resolve(tmp_path) == RuntimeVersion("3.11.2", False)
