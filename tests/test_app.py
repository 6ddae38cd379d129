"""
Tests for application assembly and logging setup.
"""

import logging

from user_registry_api.app.core import logging_config
from user_registry_api.app.main import create_app


def test_routes_mounted_under_api_v1():
    app = create_app()
    paths = {route.path for route in app.routes}
    assert "/api/v1/users/" in paths
    assert "/api/v1/users/{user_id}" in paths


def _setup_on_fresh_logger(monkeypatch, logger, *args):
    with monkeypatch.context() as patched:
        patched.setattr(logging, "getLogger", lambda name=None: logger)
        logging_config.setup_logging(*args)


def test_setup_logging_adds_file_handler(tmp_path, monkeypatch):
    logger = logging.Logger("fresh-root")
    log_file = tmp_path / "api.log"
    _setup_on_fresh_logger(monkeypatch, logger, "debug", str(log_file))
    try:
        assert logger.level == logging.DEBUG
        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in logger.handlers:
            handler.close()


def test_setup_logging_runs_once(monkeypatch):
    logger = logging.Logger("fresh-root")
    sentinel = logging.NullHandler()
    logger.addHandler(sentinel)
    _setup_on_fresh_logger(monkeypatch, logger, "INFO")
    assert logger.handlers == [sentinel]
