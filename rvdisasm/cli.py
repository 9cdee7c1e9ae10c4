"""
rvdisasm CLI -- RISC-V ELF32 Disassembler
=========================================

Click-based command-line interface.  Takes an input ELF file and an
output path, writes the ``.text`` / ``.symtab`` listing, and reports
container or decoding failures on standard error.

Usage::

    # Write the listing
    rvdisasm program.elf program.txt

    # Also show it in the terminal
    rvdisasm program.elf program.txt --show

    # Also print the decoded result as JSON
    rvdisasm program.elf program.txt --json

References:
    - Click documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
import sys
import traceback

import click
from rich.markup import escape

from shared.config import RvConfig
from shared.console import RvConsole
from shared.logger import RvLogger

from rvdisasm.core.engine import DisassemblerEngine
from rvdisasm.core.errors import DisassemblerError, ElfFileError
from rvdisasm.output.console import DisasmConsoleOutput


@click.command("rvdisasm")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("output_path", type=click.Path(dir_okay=False, writable=True))
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="TOML configuration file.  Default: rvdisasm.toml if present.",
)
@click.option(
    "--show", "-s",
    is_flag=True,
    default=False,
    help="Render the listing and symbol table in the terminal.",
)
@click.option(
    "--json", "json_output",
    is_flag=True,
    default=False,
    help="Print the decoded result as JSON to stdout.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable verbose/debug output.",
)
def rvdisasm_cli(
    input_path: str,
    output_path: str,
    config_path: str | None,
    show: bool,
    json_output: bool,
    verbose: bool,
) -> None:
    """Disassemble a 32-bit little-endian RISC-V ELF executable.

    INPUT_PATH is the ELF file to read; OUTPUT_PATH receives the
    ``.text`` listing followed by the ``.symtab`` dump.

    Examples:

    \b
        rvdisasm a.out listing.txt
        rvdisasm a.out listing.txt --show --verbose
    """
    err_console = RvConsole(stderr=True)

    try:
        config = RvConfig.load(config_path)
    except Exception as exc:
        err_console.error(f"Could not load configuration: {exc}")
        sys.exit(1)

    settings = config.global_settings
    logger = RvLogger(
        "cli",
        log_level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
        json_logs=settings.log_json,
    )
    engine = DisassemblerEngine(config=config, logger=logger)

    try:
        result = engine.disassemble_to(input_path, output_path)
    except ElfFileError as exc:
        _report(err_console, "ELF file exception occurred:", exc, verbose)
        sys.exit(1)
    except DisassemblerError as exc:
        _report(err_console, "Disassembler exception occurred:", exc, verbose)
        sys.exit(1)
    except KeyboardInterrupt:
        err_console.warning("Disassembly interrupted by user.")
        sys.exit(130)
    except Exception as exc:
        _report(err_console, "Something went wrong:", exc, verbose)
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    if show:
        DisasmConsoleOutput(
            max_rows=config.disassembler.show_max_rows,
        ).display(result)
        RvConsole().success(f"Listing saved: {escape(output_path)}")


def _report(console: RvConsole, title: str, exc: BaseException, verbose: bool) -> None:
    """Print a categorised failure on stderr."""
    console.plain(title)
    console.plain(str(exc))
    if verbose:
        traceback.print_exc()


def main() -> None:
    """Entry point for the ``rvdisasm`` script and ``python -m rvdisasm``."""
    rvdisasm_cli()


if __name__ == "__main__":
    main()
