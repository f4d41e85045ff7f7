"""
Launcher Errors

Every fatal condition met while preprocessing the command line is raised as a
LauncherError and handled once, by the top-level caller, which prints the
message and turns exit_code into the process exit status.
"""

from typing import Iterable, Optional


class LauncherError(Exception):
    """Base class for all launcher errors."""

    exit_code = 1
    show_usage = False

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class MalformedDirective(LauncherError):
    """Syntax error in the --debugmsg argument."""

    def __init__(self, spec: str, class_names: Iterable[str]):
        self.spec = spec
        self.class_names = tuple(class_names)
        vocabulary = "".join(f"{name:<9}" for name in self.class_names)
        super().__init__(
            "Syntax: --debugmsg [class]+xxx,...  or -debugmsg [class]-xxx,...\n"
            "Example: --debugmsg +all,warn-heap\n"
            "  turn on all messages except warning heap messages\n"
            "Available message classes:\n"
            f"{vocabulary}\n"
        )


class UnknownOption(LauncherError):
    """An option-like token that no descriptor consumed."""

    show_usage = True

    def __init__(self, option: str, message: Optional[str] = None):
        self.option = option
        super().__init__(message or f"Unknown option '{option}'")


class ReplayLeftover(UnknownOption):
    """A token in the inherited option string that the scanner did not consume."""

    def __init__(self, option: str, variable: str):
        self.variable = variable
        super().__init__(option, f"Unknown option '{option}' in {variable} variable")


class ReplayOverflow(LauncherError):
    """The inherited option string holds more tokens than replay accepts."""

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(
            f"Inherited options hold {count} tokens, at most {limit} are accepted"
        )


class ResourceExhaustion(LauncherError):
    """Memory ran out while growing the inheritance buffer or a module list."""

    def __init__(self):
        super().__init__("Virtual memory exhausted")


class InvalidOptionValue(LauncherError):
    """An option effect rejected the value it was given."""

    def __init__(self, option: str, value: str, hint: str = ""):
        self.option = option
        self.value = value
        message = f"Invalid {option} value '{value}' specified."
        if hint:
            message = f"{message}\n{hint}"
        super().__init__(message)


class HelpRequested(LauncherError):
    """--help was given. Not a failure: usage is shown and the process exits 0."""

    exit_code = 0
    show_usage = True


class VersionRequested(LauncherError):
    """--version was given. The release identifier is shown and the process exits 0."""

    exit_code = 0

    def __init__(self, release: str):
        self.release = release
        super().__init__(release)
