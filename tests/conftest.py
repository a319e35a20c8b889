from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pylaunch.version_resolver import VersionResolver
from tests._fixtures.stubs import StubRunner


@pytest.fixture(autouse=True)
def _reset_pylaunch_logger():
    """Undo configure_logging() so caplog sees pylaunch records."""
    yield
    logger = logging.getLogger("pylaunch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def runner() -> StubRunner:
    return StubRunner({"python3": "Python 3.11.2\n"})


@pytest.fixture
def resolver(runner: StubRunner) -> VersionResolver:
    return VersionResolver(runner=runner)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "myapp"
    root.mkdir()
    return root
