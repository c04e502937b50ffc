"""Tests for running fibreview as a module (`python -m fibreview`)."""

from __future__ import annotations

import runpy
from unittest.mock import patch

import pytest


def test_module_help_exits_zero() -> None:
    """Running with --help should exit cleanly with code 0."""
    with patch("sys.argv", ["fibreview", "--help"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("fibreview", run_name="__main__")
    assert exc_info.value.code == 0


def test_module_subcommand_help_exits_zero() -> None:
    with patch("sys.argv", ["fibreview", "render", "--help"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("fibreview", run_name="__main__")
    assert exc_info.value.code == 0
