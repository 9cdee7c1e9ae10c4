"""
rvdisasm -- RISC-V ELF32 Disassembler
=====================================

Reads a 32-bit little-endian RISC-V ELF executable, decodes the RV32IM
instructions of its ``.text`` section with branch and jump targets
labelled, and writes a listing followed by a ``.symtab`` dump.

Capabilities:
    - Struct-based ELF32 container parsing (no external ELF library)
    - Symbol table reading with ``.strtab`` name resolution
    - Two-pass disassembly: label/jump resolution, then decoding
    - RV32I base integer and RV32M multiply/divide instructions,
      plus ``ecall``/``ebreak`` and the Zicsr instructions
    - Plain-text listing, Rich terminal view and JSON export

References:
    - TIS Committee. (1995). ELF Specification.
    - The RISC-V Instruction Set Manual, Volume I: Unprivileged ISA.
"""

__version__ = "1.0.0"
__all__ = [
    "DisassemblerEngine",
    "DisassemblyResult",
    "ElfFile",
    "ListingFormatter",
]

from rvdisasm.core.engine import DisassemblerEngine
from rvdisasm.core.models import DisassemblyResult
from rvdisasm.output.listing import ListingFormatter
from rvdisasm.parsers.elf_parser import ElfFile
