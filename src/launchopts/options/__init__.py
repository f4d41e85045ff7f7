"""
launchopts.options - Option table, scanner and inheritance

Table-driven scanning of the launcher's own options.
"""

from launchopts.options.table import OptionDescriptor, OptionTable, render_usage
from launchopts.options.scanner import ArgumentScanner, OptionMatch
from launchopts.options.inherit import (
    InheritanceAccumulator,
    MAX_REPLAY_TOKENS,
    split_inherited,
)

__all__ = [
    # Table
    "OptionDescriptor",
    "OptionTable",
    "render_usage",
    # Scanner
    "ArgumentScanner",
    "OptionMatch",
    # Inheritance
    "InheritanceAccumulator",
    "MAX_REPLAY_TOKENS",
    "split_inherited",
]
