"""
rvdisasm Console Interface
==========================

Rich-powered console abstraction giving every rvdisasm front end the
same styling for section headers, status messages and tables.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

_RV_THEME = Theme(
    {
        "rv.section": "bold bright_magenta",
        "rv.success": "bold green",
        "rv.warning": "bold yellow",
        "rv.error": "bold red",
        "rv.info": "bold bright_blue",
        "rv.dim": "dim white",
        "rv.label": "bold bright_green",
        "rv.address": "bright_cyan",
        "rv.mnemonic": "bold bright_white",
    }
)


class RvConsole:
    """Unified console interface for rvdisasm.

    Usage::

        con = RvConsole()
        con.section(".text")
        con.success("Listing written")

        err = RvConsole(stderr=True)
        err.error("Illegal file given, not ELF")
    """

    def __init__(
        self,
        *,
        quiet: bool = False,
        record: bool = False,
        stderr: bool = False,
        width: int | None = None,
    ) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (useful in library / test mode).
            record: Enable Rich recording for text / HTML export.
            stderr: Write to standard error instead of standard output.
            width:  Fixed console width; ``None`` auto-detects.
        """
        self._console = Console(
            theme=_RV_THEME,
            quiet=quiet,
            record=record,
            stderr=stderr,
            width=width,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Section header
    # ------------------------------------------------------------------ #

    def section(self, title: str) -> None:
        """Print a prominent section header."""
        self._console.rule(
            f"  {title}  ",
            style="rv.section",
            characters="─",
        )
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(
            f"[rv.success][✔] SUCCESS:[/rv.success] {message}"
        )

    def warning(self, message: str) -> None:
        self._console.print(
            f"[rv.warning][⚠] WARNING:[/rv.warning] {message}"
        )

    def error(self, message: str) -> None:
        self._console.print(
            f"[rv.error][✘] ERROR:[/rv.error] {message}"
        )

    def info(self, message: str) -> None:
        self._console.print(
            f"[rv.info][ℹ] INFO:[/rv.info] {message}"
        )

    def plain(self, message: str) -> None:
        """Print *message* verbatim, without markup interpretation."""
        self._console.print(message, markup=False)

    # ------------------------------------------------------------------ #
    #  Table display
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
        justify: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table.

        Args:
            title:    Table title.
            columns:  Column header labels.
            rows:     Iterable of row tuples; each element is stringified.
            caption:  Optional footer caption.
            styles:   Optional per-column Rich style strings.
            justify:  Optional per-column justification (``left``/``right``).
        """
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            just = justify[idx] if justify and idx < len(justify) else "left"
            tbl.add_column(col_name, style=style, justify=just)  # type: ignore[arg-type]

        for row in rows:
            tbl.add_row(*(str(cell) for cell in row))

        self._console.print(tbl)

    # ------------------------------------------------------------------ #
    #  Utility
    # ------------------------------------------------------------------ #

    def blank(self, count: int = 1) -> None:
        for _ in range(count):
            self._console.print()

    def divider(self, style: str = "dim") -> None:
        """Print a thin horizontal rule."""
        self._console.rule(style=style)

    def export_text(self) -> str:
        """Export recorded console output as plain text (requires ``record=True``)."""
        return self._console.export_text()
