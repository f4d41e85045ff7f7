"""
Debug Message Filter Grammar

Parses the argument of --debugmsg into directives and forwards them, one at a
time and in order, to a sink that owns the actual message class state.

    spec      := directive ("," directive)*
    directive := [class] ("+" | "-") rest
    rest      := selector | ("relay" | "snoop") "=" module (":" module)*

Examples:
    +all,warn-heap         all classes on everywhere, then warn off for heap
    trace+relay            trace on for the relay channel
    +relay=USER32:KERNEL32 relay include list becomes USER32, KERNEL32
"""

from dataclasses import dataclass
from enum import IntFlag
from typing import List, Optional, Protocol, Tuple, Union

from launchopts.errors import MalformedDirective, ResourceExhaustion


class DebugClass(IntFlag):
    """Message classes, one bit each."""
    FIXME = 1
    ERR = 2
    WARN = 4
    TRACE = 8


ALL_CLASSES = DebugClass.FIXME | DebugClass.ERR | DebugClass.WARN | DebugClass.TRACE

# Order is the order shown in error messages
CLASS_NAMES: Tuple[str, ...] = ("fixme", "err", "warn", "trace")

CLASS_BY_NAME = {name: DebugClass[name.upper()] for name in CLASS_NAMES}

# Subsystems that keep include/exclude lists of module names
MODULE_SUBSYSTEMS: Tuple[str, ...] = ("relay", "snoop")

ALL_SELECTOR = "all"


class DirectiveSink(Protocol):
    """Receiver of parsed directives (the diagnostic subsystem)."""

    def add_option(self, selector: str, set_mask: int, clear_mask: int) -> None:
        ...

    def set_module_list(self, subsystem: str, include: bool, modules: Tuple[str, ...]) -> None:
        ...


@dataclass(frozen=True)
class ClassDirective:
    """Set and clear class bits for one selector ("" selects everything)."""
    selector: str
    set_mask: int
    clear_mask: int

    def apply(self, sink: DirectiveSink) -> None:
        sink.add_option(self.selector, self.set_mask, self.clear_mask)


@dataclass(frozen=True)
class ModuleListDirective:
    """Replace the include (+) or exclude (-) module list of a subsystem."""
    subsystem: str
    include: bool
    modules: Tuple[str, ...]

    def apply(self, sink: DirectiveSink) -> None:
        sink.set_module_list(self.subsystem, self.include, self.modules)


Directive = Union[ClassDirective, ModuleListDirective]


def _split_modules(text: str) -> Tuple[str, ...]:
    try:
        return tuple(name.upper() for name in text.split(":"))
    except MemoryError as exc:
        raise ResourceExhaustion() from exc


def _module_list(rest: str, include: bool) -> Optional[ModuleListDirective]:
    lowered = rest.lower()
    for subsystem in MODULE_SUBSYSTEMS:
        keyword = subsystem + "="
        if lowered.startswith(keyword):
            return ModuleListDirective(subsystem, include, _split_modules(rest[len(keyword):]))
    return None


def parse_directive(text: str, spec: str) -> Directive:
    """Parse a single comma-free directive; spec is only used for error reporting."""
    pos = text.find("+")
    if pos < 0:
        pos = text.find("-")
    if pos < 0 or pos == len(text) - 1:
        raise MalformedDirective(spec, CLASS_NAMES)

    class_name, sign, rest = text[:pos], text[pos], text[pos + 1:]
    enable = sign == "+"

    if class_name:
        if class_name not in CLASS_BY_NAME:
            raise MalformedDirective(spec, CLASS_NAMES)
        mask = int(CLASS_BY_NAME[class_name])
    else:
        modules = _module_list(rest, enable)
        if modules is not None:
            return modules
        mask = int(ALL_CLASSES)

    selector = "" if rest == ALL_SELECTOR else rest
    if enable:
        return ClassDirective(selector, mask, 0)
    return ClassDirective(selector, 0, mask)


def parse_debugmsg(spec: str) -> List[Directive]:
    """Parse a whole --debugmsg argument. Empty directives between commas are skipped."""
    directives = [parse_directive(text, spec) for text in spec.split(",") if text]
    if not directives:
        raise MalformedDirective(spec, CLASS_NAMES)
    return directives


def apply_debugmsg(spec: str, sink: DirectiveSink) -> List[Directive]:
    """
    Parse spec and forward each directive to sink, left to right.

    The whole argument is validated before the sink sees anything, so a
    syntax error leaves the sink untouched.
    """
    directives = parse_debugmsg(spec)
    for directive in directives:
        directive.apply(sink)
    return directives
