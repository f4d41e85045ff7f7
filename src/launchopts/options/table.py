"""
Option Table

Immutable registry of the options the launcher recognizes for itself.
Each descriptor is the sole source of truth for matching, arity and inheritance.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Sequence, Tuple

OPTION_PREFIX = "-"

Handler = Callable[[str], None]


@dataclass(frozen=True)
class OptionDescriptor:
    """A single recognized option."""
    long_name: str
    handler: Handler
    usage: str
    short_name: Optional[str] = None
    takes_value: bool = False
    inheritable: bool = False

    def __post_init__(self):
        if self.short_name is not None and len(self.short_name) != 1:
            raise ValueError(f"short name of --{self.long_name} must be one character")

    def matches_short(self, char: str) -> bool:
        return self.short_name is not None and self.short_name == char

    def matches_long(self, remainder: str, name: str, inline: Optional[str]) -> bool:
        """
        Match the long form of a token.

        remainder is the token with its prefix stripped; name and inline are
        remainder split at the first '='. An exact match of the whole remainder
        wins; otherwise only value-taking options match on name alone.
        """
        if remainder == self.long_name:
            return True
        return self.takes_value and inline is not None and name == self.long_name

    def invoke(self, value: str) -> None:
        self.handler(value)

    def __repr__(self):
        return f"OptionDescriptor(--{self.long_name})"


class OptionTable:
    """
    Fixed, ordered collection of option descriptors.

    Lookups are linear: the table is small and its order decides which
    descriptor wins when more than one could match.
    """

    def __init__(self, descriptors: Sequence[OptionDescriptor]):
        self._descriptors: Tuple[OptionDescriptor, ...] = tuple(descriptors)

    def __iter__(self) -> Iterator[OptionDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def find_short(self, char: str) -> Optional[OptionDescriptor]:
        for descriptor in self._descriptors:
            if descriptor.matches_short(char):
                return descriptor
        return None

    def find_long(self, remainder: str) -> Tuple[Optional[OptionDescriptor], Optional[str]]:
        """
        Find the descriptor for a long-form remainder.

        Returns (descriptor, inline_value); inline_value is None unless the
        descriptor matched through the name=value form.
        """
        name, sep, value = remainder.partition("=")
        inline = value if sep else None
        for descriptor in self._descriptors:
            if descriptor.matches_long(remainder, name, inline):
                if remainder == descriptor.long_name:
                    return descriptor, None
                return descriptor, inline
        return None, None

    def usage_lines(self) -> Iterator[str]:
        for descriptor in self._descriptors:
            yield descriptor.usage


def render_usage(table: OptionTable, argv0: str, release_info: str) -> str:
    """Full usage text: release line, synopsis, then one block per option."""
    lines = [
        release_info,
        "",
        f"Usage: {argv0} [options] [--] program_name [arguments]",
        "The -- has to be used if you specify arguments (of the program)",
        "",
        "Options:",
    ]
    lines.extend(f"   {usage}" for usage in table.usage_lines())
    return "\n".join(lines) + "\n"
