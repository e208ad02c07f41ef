"""Tests for the logger factory."""

import logging

import pytest

from stickercut.logging import LOG_LEVEL_ENV, get_logger


@pytest.fixture
def fresh_name(request):
    name = f"stickercut.tests.{request.node.name}"
    yield name
    logging.getLogger(name).handlers.clear()


class TestGetLogger:
    @pytest.mark.parametrize("suffix, expected", [("", logging.WARNING), (".cli", logging.INFO)])
    def test_default_levels(self, monkeypatch, fresh_name, suffix, expected):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        assert get_logger(fresh_name + suffix).level == expected
        logging.getLogger(fresh_name + suffix).handlers.clear()

    def test_environment_overrides_level(self, monkeypatch, fresh_name):
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
        assert get_logger(fresh_name).level == logging.DEBUG

    def test_unknown_level_name_keeps_default(self, monkeypatch, fresh_name):
        monkeypatch.setenv(LOG_LEVEL_ENV, "LOUD")
        assert get_logger(fresh_name).level == logging.WARNING

    def test_handler_is_attached_once(self, fresh_name):
        get_logger(fresh_name)
        logger = get_logger(fresh_name)
        assert len(logger.handlers) == 1
