"""
Byte Source
===========

Random-access, bounds-checked view over the raw bytes of an ELF file.
All multi-byte reads are little-endian and unsigned.
"""

from __future__ import annotations

import struct
from pathlib import Path

from rvdisasm.core.errors import TruncatedFileError


class ByteSource:
    """Absolute-offset reader over an immutable byte buffer.

    Usage::

        source = ByteSource.from_path("program.elf")
        machine = source.u16(18)
    """

    def __init__(self, data: bytes) -> None:
        self._data: bytes = bytes(data)

    @classmethod
    def from_path(cls, path: str | Path) -> ByteSource:
        """Read the whole file; the handle is closed before returning."""
        return cls(Path(path).read_bytes())

    def __len__(self) -> int:
        return len(self._data)

    def _require(self, offset: int, size: int) -> None:
        if offset < 0 or size < 0 or offset + size > len(self._data):
            raise TruncatedFileError(offset, size, len(self._data))

    def read(self, offset: int, size: int) -> bytes:
        """Return *size* bytes starting at *offset*."""
        self._require(offset, size)
        return self._data[offset:offset + size]

    def u8(self, offset: int) -> int:
        self._require(offset, 1)
        return self._data[offset]

    def u16(self, offset: int) -> int:
        return self.unpack("<H", offset)[0]

    def u32(self, offset: int) -> int:
        return self.unpack("<I", offset)[0]

    def unpack(self, fmt: str, offset: int) -> tuple[int, ...]:
        """:func:`struct.unpack_from` with the bounds check applied first."""
        self._require(offset, struct.calcsize(fmt))
        return struct.unpack_from(fmt, self._data, offset)

    def words(self, offset: int, count: int) -> list[int]:
        """Return *count* consecutive 32-bit words starting at *offset*."""
        if count <= 0:
            return []
        return list(self.unpack(f"<{count}I", offset))
