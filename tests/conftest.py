"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from cosi.adapters.mock import MockRunner
from cosi.core.models.settings import Settings
from cosi.ui.web.server import create_app

UBUNTU_OS_RELEASE = """\
PRETTY_NAME="Ubuntu 22.04.4 LTS"
NAME="Ubuntu"
VERSION_ID="22.04"
ID=ubuntu
ID_LIKE=debian
"""


def write_os_release(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "os-release"
    path.write_text(text)
    return path


@pytest.fixture
def ubuntu_os_release(tmp_path: Path) -> Path:
    return write_os_release(tmp_path, UBUNTU_OS_RELEASE)


@pytest.fixture
def mock_runner() -> MockRunner:
    """A runner that records commands instead of running them."""
    return MockRunner()


@pytest.fixture
def make_client(mock_runner: MockRunner):
    """Build a Flask test client for a given os-release text and settings."""

    def _make(tmp_path: Path, os_release: str | None = UBUNTU_OS_RELEASE, **overrides):
        if os_release is None:
            path = tmp_path / "missing-os-release"
        else:
            path = write_os_release(tmp_path, os_release)
        settings = Settings(os_release_path=str(path), **overrides)
        app = create_app(settings=settings, runner=mock_runner)
        app.config["TESTING"] = True
        return app.test_client()

    return _make
