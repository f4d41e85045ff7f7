"""
launchopts - Launcher option preprocessing

Recognizes the launcher's own options at the front of a command line, applies
them, strips them, and hands the rest to the emulated program. Inheritable
options are carried to child processes through one environment variable.
"""

__version__ = "0.1.0"
__author__ = "launchopts contributors"

from launchopts.startup import CommandLine, parse_command_line
