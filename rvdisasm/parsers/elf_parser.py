"""
ELF32 RISC-V Container Parser
=============================

Manual struct-based parser for 32-bit little-endian RISC-V ELF images.
No external ELF library such as ``pyelftools`` is used.

The parser locates exactly what the disassembler needs:

    - the validated ELF header
    - ``.shstrtab`` (via ``e_shstrndx``)
    - ``.text`` and ``.strtab`` (by name, through ``.shstrtab``)
    - ``.symtab`` (by section type ``SHT_SYMTAB``)
    - the symbol table entries with resolved names

Name lookup works backwards from the string table: the ``.shstrtab``
strings are walked from the start until the wanted name is read, the
in-table offset of that string is recovered from the cursor, and the
section-header table is scanned for the entry whose ``sh_name`` equals
that offset.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - RISC-V ELF psABI Specification.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator, Optional

from shared.logger import RvLogger

from rvdisasm.core.errors import MalformedSectionError, MissingSectionError
from rvdisasm.core.models import ElfHeader, SectionHeader, SymbolTableEntry
from rvdisasm.parsers.byte_source import ByteSource
from rvdisasm.parsers.elf_constants import (
    ELF32_SHDR_SIZE,
    INSTRUCTION_SIZE,
    SHT_SYMTAB,
    STRTAB_SECTION,
    SYMTAB_SECTION,
    TEXT_SECTION,
)
from rvdisasm.parsers.string_table import StringTable
from rvdisasm.parsers.symbol_table import SymbolTable


class ElfFile:
    """Parsed view of a RISC-V ELF32 executable.

    Construction performs the whole container parse; any failure raises
    an :class:`~rvdisasm.core.errors.ElfFileError` subclass.

    Usage::

        elf = ElfFile.from_path("program.elf")
        for address, word in elf.iter_text():
            ...
        for entry in elf.symbol_table:
            ...
    """

    def __init__(
        self,
        source: ByteSource,
        logger: Optional[RvLogger] = None,
    ) -> None:
        self._source = source
        self._logger = logger or RvLogger("parser", console_output=False)

        self.elf_header: ElfHeader = ElfHeader.from_source(source)
        self._logger.debug(
            "ELF header valid: entry=0x%08x shoff=0x%x shnum=%d shstrndx=%d",
            self.elf_header.e_entry,
            self.elf_header.e_shoff,
            self.elf_header.e_shnum,
            self.elf_header.e_shstrndx,
        )

        self.shstrtab_header: SectionHeader = self._read_shstrtab_header()
        self.text_header: SectionHeader = self._read_named_header(TEXT_SECTION)
        self.strtab_header: SectionHeader = self._read_named_header(STRTAB_SECTION)
        self.symtab_header: SectionHeader = self.find_section_header(
            lambda sh: sh.sh_type == SHT_SYMTAB, SYMTAB_SECTION
        )
        self.symbol_table: SymbolTable = self._read_symbol_table()

        remainder = self.text_header.sh_size % INSTRUCTION_SIZE
        if remainder:
            self._logger.warning(
                "%s size %d is not a multiple of %d; ignoring %d trailing byte(s)",
                TEXT_SECTION,
                self.text_header.sh_size,
                INSTRUCTION_SIZE,
                remainder,
            )

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        logger: Optional[RvLogger] = None,
    ) -> ElfFile:
        return cls(ByteSource.from_path(path), logger=logger)

    # ------------------------------------------------------------------ #
    #  Public interface
    # ------------------------------------------------------------------ #

    @property
    def source(self) -> ByteSource:
        return self._source

    @property
    def symbols(self) -> list[SymbolTableEntry]:
        return self.symbol_table.entries

    def iter_text(self) -> Iterator[tuple[int, int]]:
        """Yield ``(address, word)`` for every whole word of ``.text``.

        Each call starts a fresh pass at ``sh_addr`` / ``sh_offset``.
        """
        text = self.text_header
        count = text.sh_size // INSTRUCTION_SIZE
        words = self._source.words(text.sh_offset, count)
        address = text.sh_addr
        for word in words:
            yield address, word
            address = (address + INSTRUCTION_SIZE) & 0xFFFFFFFF

    def find_section_record(self, section_name: str) -> int:
        """Return the ``sh_name`` value that references *section_name*.

        Walks ``.shstrtab`` from its first string; the value is the
        cursor offset minus the string length and its terminator.

        Raises:
            MissingSectionError: if the table holds no such string.
        """
        table = StringTable(
            self._source,
            self.shstrtab_header.sh_offset,
            self.shstrtab_header.sh_size,
        )
        record_size = len(section_name) + 1
        for name in table:
            if name == section_name:
                return table.offset - record_size
        raise MissingSectionError(section_name)

    def find_section_header(
        self,
        condition: Callable[[SectionHeader], bool],
        section_name: str,
    ) -> SectionHeader:
        """Return the first section header (40-byte stride) matching *condition*.

        Raises:
            MissingSectionError: if no entry in the table matches.
        """
        start = self.elf_header.e_shoff
        for index in range(self._section_count()):
            header = SectionHeader.from_source(
                self._source, start + index * ELF32_SHDR_SIZE
            )
            if condition(header):
                self._logger.debug(
                    "%s: header #%d offset=0x%x size=0x%x addr=0x%08x",
                    section_name, index, header.sh_offset,
                    header.sh_size, header.sh_addr,
                )
                return header
        raise MissingSectionError(section_name)

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    def _section_count(self) -> int:
        """Number of entries to scan: ``e_shnum``, or whatever fits in the file."""
        if self.elf_header.e_shnum:
            return self.elf_header.e_shnum
        available = len(self._source) - self.elf_header.e_shoff
        return max(available // ELF32_SHDR_SIZE, 0)

    def _read_shstrtab_header(self) -> SectionHeader:
        h = self.elf_header
        offset = h.e_shoff + h.e_shentsize * h.e_shstrndx
        return SectionHeader.from_source(self._source, offset)

    def _read_named_header(self, section_name: str) -> SectionHeader:
        record = self.find_section_record(section_name)
        return self.find_section_header(
            lambda sh: sh.sh_name == record, section_name
        )

    def _read_symbol_table(self) -> SymbolTable:
        symtab = self.symtab_header
        if symtab.sh_entsize == 0:
            raise MalformedSectionError(SYMTAB_SECTION, "entry size is zero")
        count = symtab.sh_size // symtab.sh_entsize
        table = SymbolTable(
            self._source,
            count,
            symtab.sh_offset,
            self.strtab_header.sh_offset,
        )
        self._logger.debug("%s: %d entries", SYMTAB_SECTION, count)
        return table
