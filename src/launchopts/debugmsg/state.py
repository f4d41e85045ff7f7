"""
Debug Message State

In-memory message class state, written to by the filter grammar.
Channels start with err and fixme enabled; each directive is applied on top of
the previous ones in the order it was added.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from launchopts.debugmsg.grammar import DebugClass, MODULE_SUBSYSTEMS

logger = logging.getLogger(__name__)

DEFAULT_CLASSES = DebugClass.ERR | DebugClass.FIXME


@dataclass(frozen=True)
class ChannelOption:
    """One class toggle as received from the grammar."""
    selector: str
    set_mask: int
    clear_mask: int

    def applies_to(self, channel: str) -> bool:
        return not self.selector or self.selector == channel


@dataclass
class MessageClassState:
    """Class bits per channel plus include/exclude module lists per subsystem."""
    default_classes: int = int(DEFAULT_CLASSES)
    options: List[ChannelOption] = field(default_factory=list)
    module_lists: Dict[Tuple[str, bool], Tuple[str, ...]] = field(default_factory=dict)

    def add_option(self, selector: str, set_mask: int, clear_mask: int) -> None:
        logger.debug(f"Debug option {selector or '<all>'}: set={set_mask:#x} clear={clear_mask:#x}")
        self.options.append(ChannelOption(selector, set_mask, clear_mask))

    def set_module_list(self, subsystem: str, include: bool, modules: Tuple[str, ...]) -> None:
        if subsystem not in MODULE_SUBSYSTEMS:
            raise KeyError(subsystem)
        kind = "include" if include else "exclude"
        logger.debug(f"{subsystem} {kind} list: {':'.join(modules)}")
        self.module_lists[(subsystem, include)] = tuple(modules)

    def classes_for(self, channel: str) -> int:
        """Effective class mask for a channel."""
        flags = self.default_classes
        for option in self.options:
            if option.applies_to(channel):
                flags = (flags & ~option.clear_mask) | option.set_mask
        return flags

    def is_enabled(self, cls: DebugClass, channel: str) -> bool:
        return bool(self.classes_for(channel) & cls)

    def modules(self, subsystem: str, include: bool) -> Tuple[str, ...]:
        """Module list for (subsystem, polarity); empty when never set."""
        return self.module_lists.get((subsystem, include), ())
