# tests/conftest.py
import logging
import os
from unittest.mock import MagicMock

import pytest

from common.core_utils import shutdown_logging
from installer.config_models import AppSettings


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path):
    """Keep DEVOPS_* variables and a stray config.yaml from leaking into tests."""
    for name in list(os.environ):
        if name.startswith("DEVOPS_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    shutdown_logging()


@pytest.fixture
def app_settings(tmp_path):
    """Fixture to provide a basic AppSettings object."""
    return AppSettings(
        log_file=str(tmp_path / "logs" / "devops_install.log"),
        work_dir=tmp_path / "work",
    )


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)
