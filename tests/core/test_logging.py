"""
Tests for structlog setup.
"""

import logging

import pytest
import structlog

from cheat_risk.core.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_structlog():
    yield
    structlog.reset_defaults()


@pytest.mark.parametrize(
    "log_level,expected",
    [("INFO", logging.WARNING), ("debug", logging.WARNING), ("ERROR", logging.ERROR)],
)
def test_http_client_loggers_are_quieted(log_level, expected):
    setup_logging(log_level)

    assert logging.getLogger("httpx").level == expected
    assert logging.getLogger("httpcore").level == expected


def test_console_renderer_when_not_json():
    setup_logging("INFO", json_logs=False)

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


def test_json_renderer_by_default():
    setup_logging()

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)
