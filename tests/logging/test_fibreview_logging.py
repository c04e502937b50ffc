"""Tests for the package logging setup."""

import logging
from io import StringIO

import pytest

from fibreview.logging import (
    LOG_LEVEL_ENV,
    ROOT_LOGGER_NAME,
    configure_cli_logging,
    disable_debug_logging,
    enable_debug_logging,
    get_logger,
    level_from_name,
    reset_logging,
    set_global_log_level,
    setup_root_logger,
)


@pytest.fixture(autouse=True)
def _fresh_logging(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def capture() -> StringIO:
    stream = StringIO()
    setup_root_logger(handler=logging.StreamHandler(stream))
    return stream


def test_child_loggers_inherit_info_level(capture):
    logger = get_logger("fibreview.expansion")

    logger.info("branch expanded")
    logger.debug("hidden detail")

    out = capture.getvalue()
    assert "branch expanded" in out
    assert "hidden detail" not in out
    assert logger.getEffectiveLevel() == logging.INFO


def test_debug_toggle(capture):
    logger = get_logger("fibreview.controller")

    enable_debug_logging()
    logger.debug("clicked C1")
    disable_debug_logging()
    logger.debug("clicked C2")

    out = capture.getvalue()
    assert "clicked C1" in out
    assert "clicked C2" not in out


def test_global_level_applies_to_new_loggers():
    set_global_log_level(logging.WARNING)

    assert get_logger("fibreview.render").getEffectiveLevel() == logging.WARNING


def test_setup_is_idempotent():
    setup_root_logger(handler=logging.StreamHandler(StringIO()))
    setup_root_logger(level=logging.DEBUG)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    assert len(root.handlers) == 1
    assert root.level == logging.INFO


def test_default_format_names_the_module(capture):
    get_logger("fibreview.topology").warning("bad document")

    line = capture.getvalue().strip()
    assert " - fibreview.topology - WARNING - bad document" in line


def test_custom_format():
    stream = StringIO()
    setup_root_logger(
        format_string="%(levelname)s:%(message)s",
        handler=logging.StreamHandler(stream),
    )

    get_logger("fibreview.cli").error("boom")

    assert stream.getvalue().strip() == "ERROR:boom"


def test_reset_clears_handlers():
    setup_root_logger()
    reset_logging()

    assert logging.getLogger(ROOT_LOGGER_NAME).handlers == []


def test_level_from_name():
    assert level_from_name("debug") == logging.DEBUG
    assert level_from_name(" WARNING ") == logging.WARNING
    assert level_from_name("chatty") == logging.INFO
    assert level_from_name(None, default=logging.ERROR) == logging.ERROR


def test_environment_sets_starting_level(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")

    setup_root_logger(handler=logging.StreamHandler(StringIO()))

    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.DEBUG


def test_cli_flags_override_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "ERROR")

    assert configure_cli_logging(verbose=True, quiet=True) == logging.DEBUG
    assert configure_cli_logging(quiet=True) == logging.WARNING
    assert configure_cli_logging() == logging.ERROR
    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.ERROR


def test_outside_names_are_nested_under_package(capture):
    logger = get_logger("__main__")

    logger.info("started as a script")

    assert logger.name == "fibreview.__main__"
    assert " - fibreview.__main__ - INFO - started as a script" in capture.getvalue()
    assert get_logger(ROOT_LOGGER_NAME).level == logging.INFO
