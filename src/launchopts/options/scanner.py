"""
Argument Scanner

Walks a command line once, left to right, runs the handler of every option
found in the option table and drops the tokens it consumed. Everything else,
including options the table does not know, is kept in its original order.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from launchopts.options.inherit import InheritanceAccumulator
from launchopts.options.table import OPTION_PREFIX, OptionDescriptor, OptionTable

logger = logging.getLogger(__name__)

SEPARATOR = OPTION_PREFIX * 2


@dataclass(frozen=True)
class OptionMatch:
    """One recognized option and the tokens it consumed."""
    descriptor: OptionDescriptor
    value: str
    width: int  # 1 for a flag or name=value, 2 for a separate value token


class ArgumentScanner:
    """
    Scanner for the launcher's own options.

    Usage:
        scanner = ArgumentScanner(table, accumulator)
        remaining = scanner.scan(tokens)
    """

    def __init__(self, table: OptionTable,
                 accumulator: Optional[InheritanceAccumulator] = None):
        self.table = table
        self.accumulator = accumulator if accumulator is not None else InheritanceAccumulator()

    def match(self, tokens: Sequence[str], pos: int) -> Optional[OptionMatch]:
        """Match the token at pos against the table, without running anything."""
        token = tokens[pos]
        body = token[len(OPTION_PREFIX):]

        if len(body) == 1:
            descriptor = self.table.find_short(body)
            inline = None
        else:
            remainder = body[1:] if body.startswith(OPTION_PREFIX) else body
            descriptor, inline = self.table.find_long(remainder)

        if descriptor is None:
            return None

        if inline is not None:
            return OptionMatch(descriptor, inline, 1)
        if descriptor.takes_value and pos + 1 < len(tokens):
            return OptionMatch(descriptor, tokens[pos + 1], 2)
        # A value-taking option at the end of the line gets an empty value
        return OptionMatch(descriptor, "", 1)

    def scan(self, tokens: Sequence[str]) -> List[str]:
        """
        Apply every recognized option in tokens and return what is left.

        Scanning stops at a bare '--'; it and everything after it are kept.
        Handlers run in token order and may raise to end the process.
        """
        remaining: List[str] = []
        pos = 0
        while pos < len(tokens):
            token = tokens[pos]
            if not token.startswith(OPTION_PREFIX):
                remaining.append(token)
                pos += 1
                continue
            if token == SEPARATOR:
                remaining.extend(tokens[pos:])
                break

            found = self.match(tokens, pos)
            if found is None:
                remaining.append(token)
                pos += 1
                continue

            consumed = list(tokens[pos:pos + found.width])
            logger.debug(f"Option {found.descriptor!r} value={found.value!r}")
            found.descriptor.invoke(found.value)
            self.accumulator.fold_option(found.descriptor, consumed, found.value)
            pos += found.width

        return remaining
