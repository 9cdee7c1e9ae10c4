"""
Symbol Table Reader
===================

Reads the ``Elf32_Sym`` records of ``.symtab`` in file order and resolves
each name through ``.strtab``.
"""

from __future__ import annotations

from typing import Iterator

from rvdisasm.core.models import SymbolTableEntry
from rvdisasm.parsers.byte_source import ByteSource
from rvdisasm.parsers.elf_constants import ELF32_SYM_SIZE
from rvdisasm.parsers.string_table import StringTable


def read_symbol_entry(
    source: ByteSource,
    offset: int,
    strtab_offset: int,
) -> SymbolTableEntry:
    """Read the record at *offset* and resolve its name.

    Field order on disk: name, value, size, info, other, shndx.
    """
    st_name, st_value, st_size, st_info, st_other, st_shndx = source.unpack(
        SymbolTableEntry.LAYOUT, offset
    )
    name = StringTable(source, strtab_offset + st_name).read_string()
    return SymbolTableEntry(
        st_name=st_name,
        st_value=st_value,
        st_size=st_size,
        st_info=st_info,
        st_other=st_other,
        st_shndx=st_shndx,
        name=name,
    )


class SymbolTable:
    """All entries of a symbol table, positionally indexed.

    Usage::

        table = SymbolTable(source, count, symtab.sh_offset, strtab.sh_offset)
        for entry in table:
            print(entry.name, hex(entry.st_value))
    """

    def __init__(
        self,
        source: ByteSource,
        number_of_entries: int,
        symtab_offset: int,
        strtab_offset: int,
    ) -> None:
        self.number_of_entries = number_of_entries
        self._entries: list[SymbolTableEntry] = [
            read_symbol_entry(
                source, symtab_offset + i * ELF32_SYM_SIZE, strtab_offset
            )
            for i in range(number_of_entries)
        ]

    @property
    def entries(self) -> list[SymbolTableEntry]:
        return list(self._entries)

    def __getitem__(self, index: int) -> SymbolTableEntry:
        return self._entries[index]

    def __iter__(self) -> Iterator[SymbolTableEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
