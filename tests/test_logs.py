"""
Tests for tplc/logs.py
"""

from __future__ import annotations

import logging

import pytest

from tplc.logs import DEBUG_ENV, setup_logging


@pytest.fixture
def tplc_logger():
    logger = logging.getLogger("tplc")
    saved_level = logger.level
    saved_handlers = list(logger.handlers)
    saved_inited = getattr(setup_logging, "_inited", False)
    yield logger
    logger.setLevel(saved_level)
    logger.handlers[:] = saved_handlers
    setup_logging._inited = saved_inited  # type: ignore[attr-defined]


class TestSetupLogging:
    def test_sets_level(self, tplc_logger):
        setup_logging("ERROR")
        assert tplc_logger.level == logging.ERROR

    def test_single_handler_on_repeated_calls(self, tplc_logger):
        setup_logging("INFO")
        count = len(tplc_logger.handlers)
        setup_logging("DEBUG")

        assert len(tplc_logger.handlers) == count
        assert tplc_logger.level == logging.DEBUG

    def test_env_forces_debug(self, tplc_logger, monkeypatch):
        monkeypatch.setenv(DEBUG_ENV, "1")

        setup_logging("ERROR")

        assert tplc_logger.level == logging.DEBUG

    def test_visitor_logs_flushes(self, caplog, simple_tree):
        from tplc.template import compile_actions

        with caplog.at_level(logging.DEBUG, logger="tplc.template.visitor"):
            compile_actions(simple_tree)

        assert any("Flushed program" in r.getMessage() for r in caplog.records)
