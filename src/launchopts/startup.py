"""
Startup Pass

Runs once, before the emulated program starts: replays options inherited from
the parent process, applies and strips the launcher's own options from argv,
exports the inheritable ones for children, and rejects leftovers.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, MutableMapping, Optional, Tuple

from launchopts.config import LauncherConfig, get_config
from launchopts.debugmsg import MessageClassState
from launchopts.errors import UnknownOption
from launchopts.options.inherit import InheritanceAccumulator
from launchopts.options.scanner import SEPARATOR, ArgumentScanner
from launchopts.options.table import OPTION_PREFIX, OptionTable
from launchopts.runtime import RuntimeOptions, build_option_table
from launchopts.wide import WideArgumentProjector, WideArgv

logger = logging.getLogger(__name__)


@dataclass
class CommandLine:
    """The application's view of the command line after the launcher is done with it."""
    argv: List[str]
    table: OptionTable
    runtime: RuntimeOptions
    debug_state: MessageClassState
    exported: Optional[str] = None
    _projector: Optional[WideArgumentProjector] = field(default=None, repr=False)

    @property
    def argc(self) -> int:
        return len(self.argv)

    def main_args(self) -> Tuple[List[str], int]:
        return self.argv, self.argc

    def wide_argv(self) -> Tuple[WideArgv, int]:
        """Wide copy of argv, built on first call."""
        if self._projector is None:
            self._projector = WideArgumentProjector(self.argv)
        return self._projector.wide()


def read_inherited(environ: MutableMapping[str, str], variable: str,
                   buffer_size: int) -> Optional[str]:
    """
    Read the inherited option string.

    Returns None when the variable is unset or empty, or when its value does
    not fit in buffer_size characters (terminator included).
    """
    value = environ.get(variable)
    if not value:
        return None
    if len(value) >= buffer_size:
        logger.warning(
            f"Ignoring {variable}: {len(value)} characters, at most {buffer_size - 1} are read"
        )
        return None
    return value


def export_inherited(environ: MutableMapping[str, str], variable: str,
                     value: Optional[str]) -> None:
    """Write the inheritance string for children, or clear the variable if there is none."""
    if value is None:
        environ.pop(variable, None)
    else:
        environ[variable] = value
    logger.debug(f"{variable}={value!r}")


def strip_separator(argv: List[str]) -> None:
    """
    Remove the first bare '--' from argv[1:].

    Raises UnknownOption for any option-like token found before it.
    """
    for pos in range(1, len(argv)):
        token = argv[pos]
        if token == SEPARATOR:
            del argv[pos]
            return
        if token.startswith(OPTION_PREFIX):
            raise UnknownOption(token)


def parse_command_line(
    argv: List[str],
    environ: Optional[MutableMapping[str, str]] = None,
    config: Optional[LauncherConfig] = None,
    runtime: Optional[RuntimeOptions] = None,
    debug_state: Optional[MessageClassState] = None,
    table: Optional[OptionTable] = None,
) -> CommandLine:
    """
    Process the launcher options in argv.

    argv is modified in place: on return it holds the program name followed
    by the application's arguments. Errors are raised as LauncherError.
    """
    environ = os.environ if environ is None else environ
    config = config or get_config()
    runtime = runtime or RuntimeOptions()
    debug_state = debug_state or MessageClassState()
    if table is None:
        table = build_option_table(runtime, debug_state, config.release_info)

    accumulator = InheritanceAccumulator(config.inherit_variable, config.max_replay_tokens)
    scanner = ArgumentScanner(table, accumulator)

    inherited = read_inherited(environ, config.inherit_variable, config.inherit_buffer_size)
    if inherited:
        accumulator.replay(inherited, scanner)

    argv[1:] = scanner.scan(argv[1:])

    exported = accumulator.flush()
    export_inherited(environ, config.inherit_variable, exported)

    strip_separator(argv)

    logger.debug(f"Application argv: {argv}")
    return CommandLine(argv, table, runtime, debug_state, exported)
