"""
rvdisasm Console Output
=======================

Rich-powered terminal view of a :class:`DisassemblyResult`: a header
panel, the ``.text`` listing with labels highlighted, and the symbol
table.

Uses the :class:`~shared.console.RvConsole` abstraction for consistent
styling.
"""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from shared.console import RvConsole

from rvdisasm.core.models import DecodedInstruction, DisassemblyResult, SymbolTableEntry
from rvdisasm.output.listing import symbolic_name
from rvdisasm.parsers.elf_constants import SHN_NAMES, STB_NAMES, STT_NAMES, STV_NAMES


class DisasmConsoleOutput:
    """Rich terminal display for disassembly results.

    Usage::

        output = DisasmConsoleOutput(max_rows=100)
        output.display(result)
    """

    def __init__(
        self,
        console: RvConsole | None = None,
        max_rows: int = 200,
    ) -> None:
        """Initialise the renderer.

        Args:
            console: Optional RvConsole instance.  A new one is created if
                     not provided.
            max_rows: Maximum number of ``.text`` rows shown; ``0`` shows all.
        """
        self._console: RvConsole = console or RvConsole()
        self._max_rows = max_rows

    def display(self, result: DisassemblyResult) -> None:
        self._console.section("rvdisasm -- RISC-V ELF32 Disassembler")
        self.display_header(result)
        self.display_text(result.instructions)
        self.display_symbols(result.symbols)
        self._console.divider()

    def display_header(self, result: DisassemblyResult) -> None:
        """Display file metadata and pass statistics."""
        header = result.header
        text = result.text_section
        lines: list[str] = [
            f"[bold]File:[/bold]          {escape(result.path)}",
            f"[bold]Entry Point:[/bold]   0x{header.e_entry:08x}",
            f"[bold].text:[/bold]         0x{text.sh_addr:08x} "
            f"({text.sh_size:,} bytes, {len(result.instructions):,} instructions)",
            f"[bold]Symbols:[/bold]       {len(result.symbols):,}",
            f"[bold]Labels:[/bold]        {len(result.resolution.labels):,}",
            f"[bold]Jumps:[/bold]         {len(result.resolution.jumps):,}",
        ]
        panel = Panel(
            "\n".join(lines),
            title="[bold bright_cyan]Binary Information[/bold bright_cyan]",
            border_style="bright_cyan",
            padding=(1, 2),
        )
        self._console.rich.print(panel)
        self._console.blank()

    def display_text(self, instructions: list[DecodedInstruction]) -> None:
        """Display the ``.text`` listing as a table."""
        self._console.section(".text")

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            padding=(0, 1),
        )
        tbl.add_column("Address", style="rv.address")
        tbl.add_column("Word", style="dim")
        tbl.add_column("Label", style="rv.label", justify="right")
        tbl.add_column("Mnemonic", style="rv.mnemonic")
        tbl.add_column("Operands")

        shown = instructions
        if self._max_rows and len(instructions) > self._max_rows:
            shown = instructions[: self._max_rows]

        for insn in shown:
            tbl.add_row(
                f"{insn.address:08x}",
                f"{insn.word:08x}",
                escape(insn.label),
                insn.mnemonic,
                escape(insn.operands),
            )

        self._console.rich.print(tbl)
        if len(shown) < len(instructions):
            self._console.info(
                f"Showing {len(shown):,} of {len(instructions):,} instructions."
            )
        self._console.blank()

    def display_symbols(self, symbols: list[SymbolTableEntry]) -> None:
        """Display the ``.symtab`` entries."""
        self._console.section(".symtab")

        rows = [
            (
                index,
                f"0x{entry.st_value:X}",
                entry.st_size,
                symbolic_name(STT_NAMES, entry.st_type),
                symbolic_name(STB_NAMES, entry.st_bind),
                symbolic_name(STV_NAMES, entry.st_vis),
                symbolic_name(SHN_NAMES, entry.st_shndx),
                escape(entry.name),
            )
            for index, entry in enumerate(symbols)
        ]
        self._console.table(
            "",
            ["#", "Value", "Size", "Type", "Bind", "Vis", "Index", "Name"],
            rows,
            styles=["dim", "rv.address", "", "", "", "", "", "bold"],
            justify=["right", "left", "right", "left", "left", "left", "right", "left"],
        )
        self._console.blank()
