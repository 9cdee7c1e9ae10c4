"""
rvdisasm Engine
===============

Orchestrates the disassembly pipeline for one ELF file.

Pipeline:
    1. Read the file (size-limited) into a :class:`ByteSource`
    2. Parse and validate the container (header, ``.shstrtab``,
       ``.text``, ``.strtab``, ``.symtab``)
    3. Read the symbol table
    4. Pass 1 over ``.text``: resolve labels and jump targets
    5. Pass 2 over ``.text``: decode every word using the pass-1 maps
    6. Format the listing and write it to the output file

Pass 2 never starts before pass 1 has finished, and the output file is
only opened once every word has decoded, so a failing run leaves no
partial listing behind.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional

from shared.config import RvConfig
from shared.logger import RvLogger

from rvdisasm.analyzers.decoder import InstructionDecoder
from rvdisasm.analyzers.labels import LabelResolver
from rvdisasm.core.errors import Criterion, IllegalFileError
from rvdisasm.core.models import DecodedInstruction, DisassemblyResult, LabelResolution
from rvdisasm.output.listing import ListingFormatter
from rvdisasm.parsers.byte_source import ByteSource
from rvdisasm.parsers.elf_parser import ElfFile


class DisassemblerEngine:
    """Runs the complete RISC-V disassembly pipeline.

    Usage::

        engine = DisassemblerEngine()
        engine.disassemble_to("program.elf", "program.txt")

    Or, to keep the decoded data::

        result = engine.disassemble("program.elf")
        print(result.resolution.counter)
    """

    def __init__(
        self,
        config: RvConfig | None = None,
        logger: RvLogger | None = None,
    ) -> None:
        """Initialise the engine.

        Args:
            config: Toolkit configuration.  Defaults are used if not provided.
            logger: Logger instance.  A quiet one is created if not provided.
        """
        self._config: RvConfig = config or RvConfig()
        self._logger: RvLogger = logger or RvLogger(
            "engine",
            log_level=self._config.global_settings.log_level,
            console_output=False,
        )
        settings = self._config.disassembler
        self._resolver = LabelResolver(
            prefix=settings.label_prefix,
            digits=settings.label_digits,
            logger=self._logger,
        )
        self._formatter = ListingFormatter()

    # ------------------------------------------------------------------ #
    #  Entry points
    # ------------------------------------------------------------------ #

    def load(self, file_path: str | Path) -> ElfFile:
        """Read and parse *file_path*.

        Raises:
            IllegalFileError: if the file exceeds ``max_file_size`` or
                fails identification.
            ElfFileError: for missing, malformed or truncated sections.
        """
        path = Path(file_path)
        max_size = self._config.disassembler.max_file_size
        size = path.stat().st_size
        if max_size and size > max_size:
            self._logger.error(
                "File too large: %s bytes (max: %s bytes)", f"{size:,}", f"{max_size:,}"
            )
            raise IllegalFileError(Criterion.SIZE)

        with self._logger.operation("parse"):
            return ElfFile(ByteSource.from_path(path), logger=self._logger)

    def resolve(self, elf: ElfFile) -> LabelResolution:
        """Pass 1: build the label and jump maps."""
        with self._logger.operation("labels"):
            return self._resolver.resolve(elf.iter_text(), elf.symbols)

    def decode(self, elf: ElfFile, resolution: LabelResolution) -> Iterator[DecodedInstruction]:
        """Pass 2: decode ``.text`` lazily, one instruction per word."""
        decoder = InstructionDecoder(resolution.jumps, resolution.labels)
        for address, word in elf.iter_text():
            yield decoder.decode(word, address)

    def disassemble(self, file_path: str | Path) -> DisassemblyResult:
        """Run the parse and both passes, returning everything produced."""
        path = Path(file_path)
        self._logger.info("Disassembling %s", path)

        with self._logger.timed(f"disassembly of {path.name}"):
            elf = self.load(path)
            resolution = self.resolve(elf)
            with self._logger.operation("decode"):
                instructions = list(self.decode(elf, resolution))

        self._logger.debug(
            "%d instruction(s), %d symbol(s), label counter %d",
            len(instructions), len(elf.symbols), resolution.counter,
        )
        return DisassemblyResult(
            path=str(path.resolve()),
            header=elf.elf_header,
            text_section=elf.text_header,
            symbols=elf.symbols,
            resolution=resolution,
            instructions=instructions,
        )

    def disassemble_to(
        self,
        input_path: str | Path,
        output_path: str | Path,
    ) -> DisassemblyResult:
        """Disassemble *input_path* and write the listing to *output_path*."""
        result = self.disassemble(input_path)
        with self._logger.operation("write"):
            written = self._formatter.write_file(
                output_path,
                result.instructions,
                result.symbols,
                encoding=self._config.disassembler.output_encoding,
            )
            self._logger.info("Listing written to %s", written)
        return result

    def render(self, result: DisassemblyResult) -> str:
        """Return the listing text for *result* without touching the disk."""
        return self._formatter.render(result.instructions, result.symbols)

    @property
    def config(self) -> RvConfig:
        return self._config

    @property
    def logger(self) -> RvLogger:
        return self._logger
