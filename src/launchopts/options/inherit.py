"""
Option Inheritance

Tokens of inheritable options are collected into one string that is exported
to child processes, and replayed through the scanner when a child starts.
"""

import logging
import re
from typing import TYPE_CHECKING, List, Optional, Sequence

from launchopts.errors import InvalidOptionValue, ReplayLeftover, ReplayOverflow, ResourceExhaustion
from launchopts.options.table import OPTION_PREFIX, OptionDescriptor

if TYPE_CHECKING:
    from launchopts.options.scanner import ArgumentScanner

logger = logging.getLogger(__name__)

# Largest number of tokens replay accepts from an inherited string.
# Longer strings are rejected with ReplayOverflow, never truncated.
MAX_REPLAY_TOKENS = 255

DEFAULT_INHERIT_VARIABLE = "WINEOPTIONS"

_SEPARATORS = re.compile(r"[ \t]+")


def split_inherited(source: str) -> List[str]:
    """Split an inherited option string on runs of spaces and tabs."""
    return [token for token in _SEPARATORS.split(source) if token]


def _join_tokens(tokens: Sequence[str]) -> str:
    try:
        return " ".join(tokens)
    except MemoryError as exc:
        raise ResourceExhaustion() from exc


class InheritanceAccumulator:
    """Collects the tokens of inheritable options in the order they were matched."""

    def __init__(self, variable: str = DEFAULT_INHERIT_VARIABLE,
                 max_replay_tokens: int = MAX_REPLAY_TOKENS):
        self.variable = variable
        self.max_replay_tokens = max_replay_tokens
        self._parts: List[str] = []

    def fold(self, tokens: Sequence[str], inheritable: bool = True) -> None:
        """Append the consumed tokens of one option, if that option is inheritable."""
        if not inheritable:
            return
        text = _join_tokens(tokens)
        self._parts.append(text)
        logger.debug(f"Inherit: {text}")

    def fold_option(self, descriptor: OptionDescriptor, tokens: Sequence[str], value: str) -> None:
        """
        Fold one matched option so that replay reproduces the same value.

        An empty value is folded as a single --name= token; a value holding
        a space or tab cannot survive replay and is rejected.
        """
        if not descriptor.inheritable:
            return
        if descriptor.takes_value:
            if _SEPARATORS.search(value):
                raise InvalidOptionValue(
                    descriptor.long_name, value,
                    "Inherited option values cannot contain spaces or tabs",
                )
            if not value:
                tokens = [f"{OPTION_PREFIX * 2}{descriptor.long_name}="]
        self.fold(tokens)

    @property
    def empty(self) -> bool:
        return not self._parts

    def flush(self) -> Optional[str]:
        """Return the accumulated string for export, or None if nothing was folded."""
        if not self._parts:
            return None
        return _join_tokens(self._parts)

    def replay(self, source: str, scanner: "ArgumentScanner") -> None:
        """
        Re-apply a previously exported option string.

        Only the handlers' effects matter: the scanned copy is thrown away.
        Inheritable options replayed here are folded again through the
        scanner, so they reach the next generation of children too.
        """
        tokens = split_inherited(source)
        if len(tokens) > self.max_replay_tokens:
            raise ReplayOverflow(len(tokens), self.max_replay_tokens)

        logger.debug(f"Replaying {len(tokens)} inherited tokens from {self.variable}")
        leftover = scanner.scan(tokens)
        if leftover:
            raise ReplayLeftover(leftover[0], self.variable)
