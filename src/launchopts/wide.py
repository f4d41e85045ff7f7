"""
Wide Argument Vector

Lazily built UTF-16 copy of the final application argv, for programs that
want their arguments as wide strings. Built once, on first request.
"""

import logging
from array import array
from typing import List, Optional, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)

WIDE_CODEC = "utf-16-le"
WIDE_UNIT = 2  # bytes per UTF-16 code unit


class WideConverter(Protocol):
    """Narrow-to-wide text conversion."""

    def measure(self, text: str) -> int:
        """Code units needed for text, terminator included."""
        ...

    def convert(self, text: str, buffer: array, offset: int) -> int:
        """Write text and its terminator into buffer at offset; return units written."""
        ...


class Utf16Converter:
    """Converts to NUL terminated UTF-16. Undecodable argv bytes pass through as surrogates."""

    errors = "surrogatepass"

    def _encode(self, text: str) -> array:
        units = array("H")
        units.frombytes(text.encode(WIDE_CODEC, self.errors))
        units.append(0)
        return units

    def measure(self, text: str) -> int:
        return len(text.encode(WIDE_CODEC, self.errors)) // WIDE_UNIT + 1

    def convert(self, text: str, buffer: array, offset: int) -> int:
        units = self._encode(text)
        buffer[offset:offset + len(units)] = units
        return len(units)


class WideArgv(Sequence[str]):
    """
    Wide argv stored in a single block of code units.

    offsets holds the start of each element followed by a None end marker.
    """

    def __init__(self, buffer: array, offsets: List[Optional[int]]):
        self.buffer = buffer
        self.offsets = offsets

    def __len__(self) -> int:
        return len(self.offsets) - 1

    def __getitem__(self, index: int) -> str:
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("wide argv index out of range")
        start = self.offsets[index]
        end = self.buffer.index(0, start)
        return self.buffer[start:end].tobytes().decode(WIDE_CODEC, Utf16Converter.errors)

    def __repr__(self):
        return f"WideArgv({list(self)!r})"


class WideArgumentProjector:
    """
    Builds and memoizes the wide copy of an argv.

    The argv must not change after wide() is first called: the copy is
    index-aligned to it as it was at that moment.
    """

    def __init__(self, argv: Sequence[str], converter: Optional[WideConverter] = None):
        self._argv = argv
        self._converter = converter or Utf16Converter()
        self._wide: Optional[WideArgv] = None

    def _build(self) -> WideArgv:
        total = sum(self._converter.measure(arg) for arg in self._argv)

        buffer = array("H", bytes(total * WIDE_UNIT))
        offsets: List[Optional[int]] = []
        pos = 0
        for arg in self._argv:
            offsets.append(pos)
            pos += self._converter.convert(arg, buffer, pos)
        offsets.append(None)

        logger.debug(f"Built wide argv: {len(self._argv)} args, {total} code units")
        return WideArgv(buffer, offsets)

    @property
    def built(self) -> bool:
        return self._wide is not None

    def wide(self) -> Tuple[WideArgv, int]:
        """Return (wide argv, count), building it on the first call."""
        if self._wide is None:
            self._wide = self._build()
        return self._wide, len(self._wide)
