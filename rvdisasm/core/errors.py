"""
rvdisasm Error Families
=======================

Two exception families abort a disassembly run:

- :class:`ElfFileError` -- the container is not a usable 32-bit
  little-endian RISC-V ELF image (bad identification, missing or
  malformed section, truncated data).
- :class:`DisassemblerError` -- an instruction word (or a
  register index) does not match any supported encoding.

Each concrete error keeps the offending value as an attribute so callers
can branch on the kind of failure without parsing the message.
"""

from __future__ import annotations

import enum
from typing import Optional


class Criterion(str, enum.Enum):
    """Identification checks applied to the ELF header, in check order."""
    ELF = "ELF"
    CLASS_32 = "32-bit"
    LITTLE_ENDIAN = "little-endian"
    RISCV = "RISC-V"
    SIZE = "size"


# ---------------------------------------------------------------------------
# Container errors
# ---------------------------------------------------------------------------

class ElfFileError(Exception):
    """Base class for ELF container failures."""


class IllegalFileError(ElfFileError):
    """The file fails one of the identification checks."""

    def __init__(self, criterion: Criterion) -> None:
        self.criterion = criterion
        super().__init__(f"Illegal file given, not {criterion.value}")


class MissingSectionError(ElfFileError):
    """A section required for disassembly is absent."""

    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(f"Required section {section} is missing")


class MalformedSectionError(ElfFileError):
    """A required section is present but cannot be interpreted."""

    def __init__(self, section: str, reason: str) -> None:
        self.section = section
        self.reason = reason
        super().__init__(f"Malformed section {section}: {reason}")


class TruncatedFileError(ElfFileError):
    """A read reaches past the end of the file data."""

    def __init__(self, offset: int, size: int, length: int) -> None:
        self.offset = offset
        self.size = size
        self.length = length
        super().__init__(
            f"Unexpected end of file: cannot read {size} byte(s) at "
            f"offset 0x{offset:x} (file length 0x{length:x})"
        )


# ---------------------------------------------------------------------------
# Decoder errors
# ---------------------------------------------------------------------------

class DisassemblerError(Exception):
    """Base class for instruction decoding failures."""


class UnexpectedInstructionError(DisassemblerError):
    """The word matches no supported opcode/funct3/funct7 combination."""

    def __init__(self, instruction: int, address: Optional[int] = None) -> None:
        self.instruction = instruction
        self.address = address
        message = f"Unexpected instruction found: {instruction:b}"
        if address is not None:
            message += f" at 0x{address:08x}"
        super().__init__(message)


class UnexpectedRegisterError(DisassemblerError):
    """A register index falls outside the 32-entry register file."""

    def __init__(self, register: int) -> None:
        self.register = register
        super().__init__(f"Unexpected register found: {register}")
