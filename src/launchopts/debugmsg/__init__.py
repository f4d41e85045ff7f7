"""
launchopts.debugmsg - Debug message filtering

Grammar for the --debugmsg option and the in-memory state it writes to.
"""

from launchopts.debugmsg.grammar import (
    ALL_CLASSES,
    CLASS_NAMES,
    ClassDirective,
    DebugClass,
    DirectiveSink,
    ModuleListDirective,
    apply_debugmsg,
    parse_debugmsg,
)
from launchopts.debugmsg.state import MessageClassState

__all__ = [
    # Grammar
    "ALL_CLASSES",
    "CLASS_NAMES",
    "ClassDirective",
    "DebugClass",
    "DirectiveSink",
    "ModuleListDirective",
    "apply_debugmsg",
    "parse_debugmsg",
    # State
    "MessageClassState",
]
