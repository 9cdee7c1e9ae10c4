"""
Listing Formatter
=================

Renders the plain-text output file: the ``.text`` listing followed by a
``.symtab`` dump.

``.text`` line::

    00010008  LOC_00000 addi zero, zero, 0

``.symtab`` layout::

    Symbol Value              Size Type     Bind     Vis       Index Name
    [   1] 0x10074              28 FUNC     GLOBAL   DEFAULT       1 main
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, TextIO

from rvdisasm.core.models import DecodedInstruction, SymbolTableEntry
from rvdisasm.parsers.elf_constants import (
    SHN_NAMES,
    STB_NAMES,
    STT_NAMES,
    STV_NAMES,
    SYMTAB_SECTION,
    TEXT_SECTION,
)


SYMBOL_TABLE_HEADER: str = "%s %-15s %7s %-8s %-8s %-8s %6s %s" % (
    "Symbol", "Value", "Size", "Type", "Bind", "Vis", "Index", "Name",
)


def symbolic_name(table: dict[int, str], value: int) -> str:
    """Known names come from *table*; anything else prints as a number."""
    return table.get(value, str(value))


class ListingFormatter:
    """Formats decoded instructions and symbol entries as listing text.

    Usage::

        formatter = ListingFormatter()
        with open("out.txt", "w") as fh:
            formatter.write(fh, instructions, symbols)
    """

    # ------------------------------------------------------------------ #
    #  .text
    # ------------------------------------------------------------------ #

    @staticmethod
    def format_instruction(address: int, label: str, text: str) -> str:
        return f"{address:08x} {label:>10} {text}"

    def text_lines(self, instructions: Iterable[DecodedInstruction]) -> Iterable[str]:
        for insn in instructions:
            yield self.format_instruction(insn.address, insn.label, insn.text)

    def text_block(self, instructions: Iterable[DecodedInstruction]) -> str:
        return "".join(f"{line}\n" for line in self.text_lines(instructions))

    # ------------------------------------------------------------------ #
    #  .symtab
    # ------------------------------------------------------------------ #

    @staticmethod
    def format_symbol(index: int, entry: SymbolTableEntry) -> str:
        return "[%4d] 0x%-15X %5d %-8s %-8s %-8s %6s %s" % (
            index,
            entry.st_value,
            entry.st_size,
            symbolic_name(STT_NAMES, entry.st_type),
            symbolic_name(STB_NAMES, entry.st_bind),
            symbolic_name(STV_NAMES, entry.st_vis),
            symbolic_name(SHN_NAMES, entry.st_shndx),
            entry.name,
        )

    def symtab_lines(self, symbols: Iterable[SymbolTableEntry]) -> Iterable[str]:
        yield SYMBOL_TABLE_HEADER
        for index, entry in enumerate(symbols):
            yield self.format_symbol(index, entry)

    def symtab_block(self, symbols: Iterable[SymbolTableEntry]) -> str:
        return "".join(f"{line}\n" for line in self.symtab_lines(symbols))

    # ------------------------------------------------------------------ #
    #  Whole file
    # ------------------------------------------------------------------ #

    def write(
        self,
        stream: TextIO,
        instructions: Iterable[DecodedInstruction],
        symbols: Iterable[SymbolTableEntry],
    ) -> None:
        """Write ``.text``, its block, a blank line, ``.symtab`` and its block."""
        stream.write(f"{TEXT_SECTION}\n")
        for line in self.text_lines(instructions):
            stream.write(f"{line}\n")
        stream.write("\n")
        stream.write(f"{SYMTAB_SECTION}\n")
        for line in self.symtab_lines(symbols):
            stream.write(f"{line}\n")

    def render(
        self,
        instructions: Iterable[DecodedInstruction],
        symbols: Iterable[SymbolTableEntry],
    ) -> str:
        return (
            f"{TEXT_SECTION}\n"
            f"{self.text_block(instructions)}\n"
            f"{SYMTAB_SECTION}\n"
            f"{self.symtab_block(symbols)}"
        )

    def write_file(
        self,
        path: str | Path,
        instructions: Iterable[DecodedInstruction],
        symbols: Iterable[SymbolTableEntry],
        encoding: str = "utf-8",
    ) -> Path:
        """Write the listing to *path*; returns the resolved path."""
        out = Path(path)
        with out.open("w", encoding=encoding, newline="\n") as fh:
            self.write(fh, instructions, symbols)
        return out.resolve()
