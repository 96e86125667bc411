"""Unit tests configuration file."""

import os

import pytest

SCHEMA_DIR = os.path.join(os.path.dirname(os.path.realpath(__file__)), "generator")


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def schema_path():
    """Path of the sample schema used by the generator tests."""
    return os.path.join(SCHEMA_DIR, "employees.bytevec")


@pytest.fixture
def schema_text(schema_path):
    with open(schema_path, encoding="utf-8") as f:
        return f.read()
