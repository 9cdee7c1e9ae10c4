"""
String Table Cursor
===================

Sequential reader over the null-terminated strings of an ELF string
table (``.shstrtab`` / ``.strtab``).
"""

from __future__ import annotations

from typing import Iterator, Optional

from rvdisasm.parsers.byte_source import ByteSource


class StringTable:
    """Cursor over null-terminated strings starting at *table_offset*.

    :attr:`offset` is the cursor position relative to the start of the
    table: after reading a string it points just past that string's
    terminator, which lets callers recover the in-table offset a section
    header would use to reference the string.

    Args:
        source: Underlying byte source.
        table_offset: Absolute file offset of the first string.
        size: Optional table size; when given, :meth:`exhausted` reports
            whether the cursor has reached the end of the table.
    """

    def __init__(
        self,
        source: ByteSource,
        table_offset: int,
        size: Optional[int] = None,
    ) -> None:
        self._source = source
        self._table_offset = table_offset
        self._size = size
        self.offset: int = 0

    def read_string(self) -> str:
        """Read the next string and advance past its terminator."""
        chars = bytearray()
        cur = self._source.u8(self._table_offset + self.offset)
        self.offset += 1
        while cur != 0:
            chars.append(cur)
            cur = self._source.u8(self._table_offset + self.offset)
            self.offset += 1
        return chars.decode("latin-1")

    def exhausted(self) -> bool:
        """``True`` once the cursor has consumed the whole (sized) table."""
        return self._size is not None and self.offset >= self._size

    def __iter__(self) -> Iterator[str]:
        while not self.exhausted():
            yield self.read_string()
