"""
Runtime Options

Shared configuration mutated by the launcher's option handlers, and the
default option table wiring each option to its effect.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from launchopts.debugmsg import DirectiveSink, apply_debugmsg
from launchopts.errors import HelpRequested, InvalidOptionValue, VersionRequested
from launchopts.options.table import OptionDescriptor, OptionTable

logger = logging.getLogger(__name__)


# Windows versions --winver can imitate
WIN_VERSIONS: Tuple[str, ...] = (
    "win20", "win30", "win31", "win95", "win98", "nt351", "nt40", "nt2k",
)

# Load order letters accepted by --dll
LOAD_ORDER_TYPES = {
    "n": "native",
    "b": "builtin",
    "s": "so",
}

_DOS_VERSION = re.compile(r"(\d+)\.(\d+)")


@dataclass
class RuntimeOptions:
    """Process-wide settings chosen on the command line."""
    managed: bool = False
    win_version: Optional[str] = None
    dos_version: Optional[Tuple[int, int]] = None
    load_order: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    def set_managed(self, value: str = "") -> None:
        self.managed = True

    def set_win_version(self, value: str) -> None:
        name = value.lower()
        if name not in WIN_VERSIONS:
            raise InvalidOptionValue(
                "winver", value, f"Valid versions are: {', '.join(WIN_VERSIONS)}"
            )
        logger.debug(f"Imitating Windows version {name}")
        self.win_version = name

    def set_dos_version(self, value: str) -> None:
        match = _DOS_VERSION.fullmatch(value)
        if not match:
            raise InvalidOptionValue("dosver", value, 'Use "--dosver x.xx"')
        self.dos_version = (int(match.group(1)), int(match.group(2)))
        logger.debug(f"Imitating DOS version {self.dos_version[0]}.{self.dos_version[1]:02d}")

    def add_load_order(self, value: str) -> None:
        """
        Apply one --dll argument: module[,module...]=order.

        order is a comma separated list of load order letters, tried in turn;
        an empty order disables the modules.
        """
        modules, sep, order = value.partition("=")
        names = [name.strip().lower() for name in modules.split(",") if name.strip()]
        if not sep or not names:
            raise InvalidOptionValue("dll", value, "Syntax: --dll module[,module...]=[n|b|s[,...]]")

        letters = tuple(letter.strip() for letter in order.split(",") if letter.strip())
        unknown = [letter for letter in letters if letter not in LOAD_ORDER_TYPES]
        if unknown:
            raise InvalidOptionValue(
                "dll", value, f"Unknown load order type '{unknown[0]}', use one of n, b, s"
            )

        types = tuple(LOAD_ORDER_TYPES[letter] for letter in letters)
        for name in names:
            self.load_order[name] = types
            logger.debug(f"Load order {name}: {', '.join(types) or 'disabled'}")


def _show_help(value: str) -> None:
    raise HelpRequested()


def build_option_table(runtime: RuntimeOptions, debug_state: DirectiveSink,
                       release_info: str) -> OptionTable:
    """Build the launcher's option table bound to the given effect targets."""

    def debugmsg(value: str) -> None:
        apply_debugmsg(value, debug_state)

    def version(value: str) -> None:
        raise VersionRequested(release_info)

    return OptionTable([
        OptionDescriptor(
            "debugmsg", debugmsg,
            "--debugmsg name  Turn debugging-messages on or off",
            takes_value=True, inheritable=True,
        ),
        OptionDescriptor(
            "dll", runtime.add_load_order,
            "--dll name       Enable or disable built-in DLLs",
            takes_value=True, inheritable=True,
        ),
        OptionDescriptor(
            "dosver", runtime.set_dos_version,
            "--dosver x.xx    DOS version to imitate (e.g. 6.22)\n"
            "                    Only valid with --winver win31",
            takes_value=True, inheritable=True,
        ),
        OptionDescriptor(
            "help", _show_help,
            "--help,-h        Show this help message",
            short_name="h",
        ),
        OptionDescriptor(
            "managed", runtime.set_managed,
            "--managed        Allow the window manager to manage created windows",
        ),
        OptionDescriptor(
            "version", version,
            "--version,-v     Display the release version",
            short_name="v",
        ),
        OptionDescriptor(
            "winver", runtime.set_win_version,
            f"--winver         Version to imitate ({','.join(WIN_VERSIONS)})",
            takes_value=True, inheritable=True,
        ),
    ])
