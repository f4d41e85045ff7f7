"""
CLI entry point for launchopts.

Usage:
    launchopts [options] [--] program_name [arguments]

Applies the launcher options, exports the inheritable ones in the inherit
variable and prints the application's argv, one argument per line.
"""

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from launchopts.config import LauncherConfig
from launchopts.debugmsg import MessageClassState
from launchopts.errors import HelpRequested, LauncherError, VersionRequested
from launchopts.options.table import OptionTable, render_usage
from launchopts.runtime import RuntimeOptions, build_option_table
from launchopts.startup import parse_command_line

PROGRAM_NAME = "launchopts"


def report(error: LauncherError, table: OptionTable, argv0: str, config: LauncherConfig) -> int:
    """Print a launcher error the way the user should see it; return the exit code."""
    if isinstance(error, VersionRequested):
        print(error.release)
        return error.exit_code

    usage = render_usage(table, argv0, config.release_info)
    if isinstance(error, HelpRequested):
        print(usage, end="")
        return error.exit_code

    print(f"{argv0}: {error.message}", file=sys.stderr)
    if error.show_usage:
        print(file=sys.stderr)
        print(usage, end="", file=sys.stderr)
    return error.exit_code


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = list(sys.argv if argv is None else argv)
    argv0 = args[0] if args else PROGRAM_NAME

    config_path = os.environ.get("LAUNCHOPTS_CONFIG")
    config = LauncherConfig(Path(config_path) if config_path else None)
    logging.basicConfig(
        level=config.log_level,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    runtime = RuntimeOptions()
    debug_state = MessageClassState()
    table = build_option_table(runtime, debug_state, config.release_info)

    try:
        cmdline = parse_command_line(
            args, config=config, runtime=runtime, debug_state=debug_state, table=table,
        )
    except LauncherError as e:
        return report(e, table, argv0, config)

    for arg in cmdline.argv:
        print(arg)
    return 0


if __name__ == "__main__":
    sys.exit(main())
