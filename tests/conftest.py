import logging

import pytest

from tersify import reset_default_registry


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keeps real config files and the process-wide registry out of every test."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("tersify.config.loader.USER_CONFIG_FILE", tmp_path / "no-user-config.toml")
    reset_default_registry()
    yield
    reset_default_registry()
    package_logger = logging.getLogger("tersify")
    package_logger.handlers.clear()
    package_logger.propagate = True
