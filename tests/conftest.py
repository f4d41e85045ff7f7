"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from launchopts.config import LauncherConfig
from launchopts.debugmsg import MessageClassState
from launchopts.errors import HelpRequested, VersionRequested
from launchopts.options import ArgumentScanner, InheritanceAccumulator, OptionDescriptor, OptionTable
from launchopts.runtime import RuntimeOptions


# =============================================================================
# RECORDERS
# =============================================================================

class RecordingSink:
    """Directive sink that only remembers what it was told."""

    def __init__(self):
        self.options = []
        self.module_lists = []

    def add_option(self, selector, set_mask, clear_mask):
        self.options.append((selector, set_mask, clear_mask))

    def set_module_list(self, subsystem, include, modules):
        self.module_lists.append((subsystem, include, modules))


def make_recording_table(calls: list) -> OptionTable:
    """Same shape as the launcher table, but every handler just records its value."""

    def record(name):
        return lambda value: calls.append((name, value))

    def show_help(value):
        calls.append(("help", value))
        raise HelpRequested()

    def show_version(value):
        calls.append(("version", value))
        raise VersionRequested("test release")

    return OptionTable([
        OptionDescriptor("debugmsg", record("debugmsg"), "--debugmsg name", takes_value=True, inheritable=True),
        OptionDescriptor("dll", record("dll"), "--dll name", takes_value=True, inheritable=True),
        OptionDescriptor("dosver", record("dosver"), "--dosver x.xx", takes_value=True, inheritable=True),
        OptionDescriptor("help", show_help, "--help,-h", short_name="h"),
        OptionDescriptor("managed", record("managed"), "--managed"),
        OptionDescriptor("version", show_version, "--version,-v", short_name="v"),
        OptionDescriptor("winver", record("winver"), "--winver", takes_value=True, inheritable=True),
    ])


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def calls():
    """Handler invocations as (option, value), in order."""
    return []


@pytest.fixture
def table(calls):
    return make_recording_table(calls)


@pytest.fixture
def accumulator():
    return InheritanceAccumulator()


@pytest.fixture
def scanner(table, accumulator):
    return ArgumentScanner(table, accumulator)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def state():
    return MessageClassState()


@pytest.fixture
def runtime():
    return RuntimeOptions()


@pytest.fixture
def config_file(tmp_path):
    """Empty YAML config file, so no user config is picked up."""
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    return path


@pytest.fixture
def config(config_file):
    return LauncherConfig(config_file, environ={})
