"""A growable byte buffer that allocates in fixed-size units."""

from __future__ import annotations

from typing import Any, BinaryIO, Union

REPLACEMENT_CHARACTER = b"\xef\xbf\xbd"

BytesLike = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class TextBuffer:
    """Bytes that grow on demand, with capacity reserved ``unit`` bytes at a time.

    ``allocated`` reports the reserved capacity; it is always a multiple of
    ``unit`` and never less than the length of the content.
    """

    def __init__(self, unit: int = 64, data: BytesLike = b"") -> None:
        unit = int(unit)
        if unit <= 0:
            raise ValueError("unit must be positive")
        self.unit = unit
        self.allocated = 0
        self._data = bytearray()
        if data:
            self.put(data)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TextBuffer):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray, memoryview, str)):
            return bytes(self._data) == _as_bytes(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TextBuffer(unit={self.unit}, data={bytes(self._data)!r})"

    def grow(self, size: int) -> None:
        """Reserve capacity for at least ``size`` bytes, in whole units."""
        size = int(size)
        if self.allocated >= size:
            return
        missing = size - self.allocated
        units = max(1, -(-missing // self.unit))
        self.allocated += units * self.unit

    def put(self, data: BytesLike) -> None:
        """Append raw bytes (or the UTF-8 encoding of a string)."""
        chunk = _as_bytes(data)
        if len(self._data) + len(chunk) > self.allocated:
            self.grow(len(self._data) + len(chunk))
        self._data.extend(chunk)

    def putc(self, c: Any) -> None:
        """Append a single byte, given as an int or a one-byte value."""
        if isinstance(c, (bytes, bytearray)):
            if len(c) != 1:
                raise ValueError("putc takes exactly one byte")
            c = c[0]
        elif isinstance(c, str):
            if len(c) != 1 or ord(c) > 0xFF:
                raise ValueError("putc takes exactly one byte")
            c = ord(c)
        c = int(c)
        if not 0 <= c <= 0xFF:
            raise ValueError("byte value out of range")
        if len(self._data) >= self.allocated:
            self.grow(len(self._data) + 1)
        self._data.append(c)

    def put_utf8(self, codepoint: int) -> None:
        """Append a code point encoded as UTF-8.

        Surrogates and values beyond U+10FFFF become U+FFFD.
        """
        codepoint = int(codepoint)
        if codepoint < 0:
            raise ValueError("code points cannot be negative")
        if codepoint < 0x80:
            self.putc(codepoint)
        elif 0xD800 <= codepoint < 0xE000 or codepoint >= 0x110000:
            self.put(REPLACEMENT_CHARACTER)
        else:
            self.put(chr(codepoint).encode("utf-8"))

    def printf(self, fmt: str, *args: Any) -> None:
        """Append ``fmt % args``."""
        self.put(fmt % args)

    def set(self, data: BytesLike) -> None:
        """Replace the content with ``data``."""
        chunk = _as_bytes(data)
        if len(chunk) > self.allocated:
            self.grow(len(chunk))
        self._data[:] = chunk

    def reset(self) -> None:
        """Drop the content and the reserved capacity."""
        self._data.clear()
        self.allocated = 0

    def prefix(self, prefix: BytesLike) -> int:
        """Compare the start of the buffer with ``prefix``.

        Returns zero when no byte differs within the shorter of the two, or
        else the difference of the first pair of differing bytes.
        """
        for mine, theirs in zip(self._data, _as_bytes(prefix)):
            if mine != theirs:
                return mine - theirs
        return 0

    def slurp(self, size: int) -> None:
        """Remove ``size`` bytes from the head of the buffer."""
        size = int(size)
        if size >= len(self._data):
            self._data.clear()
        elif size > 0:
            del self._data[:size]

    def read_from(self, stream: BinaryIO) -> int:
        """Append everything readable from ``stream``; return the bytes read."""
        total = 0
        while True:
            self.grow(len(self._data) + self.unit)
            chunk = stream.read(self.unit)
            if not chunk:
                return total
            chunk = _as_bytes(chunk)
            total += len(chunk)
            self.put(chunk)

    def getvalue(self) -> bytes:
        """The content as bytes."""
        return bytes(self._data)