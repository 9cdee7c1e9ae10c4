"""
rvdisasm Data Models
====================

Pydantic models for the records read out of an ELF32 RISC-V image and
for the artefacts produced by the disassembly pipeline.

Container records (:class:`ElfHeader`, :class:`SectionHeader`,
:class:`SymbolTableEntry`) are frozen and built in one step from a
fixed struct layout at an absolute file offset, so no record depends on
the position of a shared read cursor.

References:
    - TIS Committee. (1995). Executable and Linkable Format (ELF) Specification.
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from rvdisasm.core.errors import Criterion, IllegalFileError
from rvdisasm.parsers.byte_source import ByteSource
from rvdisasm.parsers.elf_constants import (
    EI_CLASS,
    EI_DATA,
    EI_NIDENT,
    ELF_MAGIC,
    ELFCLASS32,
    ELFDATA2LSB,
    EM_RISCV,
    STT_FUNC,
)


def check_identification(ident: bytes) -> None:
    """Validate the identification bytes: magic, then class, then data encoding.

    Raises:
        IllegalFileError: naming the first criterion that fails.
    """
    if len(ident) < len(ELF_MAGIC) or ident[:len(ELF_MAGIC)] != ELF_MAGIC:
        raise IllegalFileError(Criterion.ELF)
    if len(ident) <= EI_CLASS or ident[EI_CLASS] != ELFCLASS32:
        raise IllegalFileError(Criterion.CLASS_32)
    if len(ident) <= EI_DATA or ident[EI_DATA] != ELFDATA2LSB:
        raise IllegalFileError(Criterion.LITTLE_ENDIAN)


# ---------------------------------------------------------------------------
# ELF header
# ---------------------------------------------------------------------------

class ElfHeader(BaseModel):
    """The ELF32 file header (``Elf32_Ehdr``).

    Attributes:
        e_ident: The 16 identification bytes.
        e_machine: Target architecture; must be ``EM_RISCV``.
        e_shoff: File offset of the section-header table.
        e_shentsize: Size of one section-header entry.
        e_shnum: Number of section-header entries.
        e_shstrndx: Index of the section-name string table.
    """
    model_config = ConfigDict(frozen=True)

    LAYOUT: ClassVar[str] = "<HHIIIIIHHHHHH"

    e_ident: tuple[int, ...]
    e_type: int = 0
    e_machine: int = 0
    e_version: int = 0
    e_entry: int = 0
    e_phoff: int = 0
    e_shoff: int = 0
    e_flags: int = 0
    e_ehsize: int = 0
    e_phentsize: int = 0
    e_phnum: int = 0
    e_shentsize: int = 0
    e_shnum: int = 0
    e_shstrndx: int = 0

    @classmethod
    def from_source(cls, source: ByteSource) -> ElfHeader:
        """Read and validate the header at offset 0.

        The magic is checked on whatever bytes exist, so a short non-ELF
        file reports ``ELF``.  A file that has the magic but not the full
        identification block is truncated.
        """
        magic = source.read(0, min(len(ELF_MAGIC), len(source)))
        if magic != ELF_MAGIC:
            raise IllegalFileError(Criterion.ELF)
        ident = source.read(0, EI_NIDENT)
        check_identification(ident)
        (
            e_type, e_machine, e_version, e_entry,
            e_phoff, e_shoff, e_flags, e_ehsize,
            e_phentsize, e_phnum, e_shentsize, e_shnum,
            e_shstrndx,
        ) = source.unpack(cls.LAYOUT, EI_NIDENT)
        header = cls(
            e_ident=tuple(ident),
            e_type=e_type, e_machine=e_machine, e_version=e_version,
            e_entry=e_entry, e_phoff=e_phoff, e_shoff=e_shoff,
            e_flags=e_flags, e_ehsize=e_ehsize, e_phentsize=e_phentsize,
            e_phnum=e_phnum, e_shentsize=e_shentsize, e_shnum=e_shnum,
            e_shstrndx=e_shstrndx,
        )
        header.check()
        return header

    def check(self) -> None:
        """Apply the ELF / 32-bit / little-endian / RISC-V checks in order."""
        check_identification(bytes(self.e_ident))
        if self.e_machine != EM_RISCV:
            raise IllegalFileError(Criterion.RISCV)

    @property
    def ei_class(self) -> int:
        return self.e_ident[EI_CLASS]

    @property
    def ei_data(self) -> int:
        return self.e_ident[EI_DATA]


# ---------------------------------------------------------------------------
# Section header
# ---------------------------------------------------------------------------

class SectionHeader(BaseModel):
    """One ``Elf32_Shdr`` record (40 bytes)."""
    model_config = ConfigDict(frozen=True)

    LAYOUT: ClassVar[str] = "<IIIIIIIIII"

    offset: int = 0
    sh_name: int = 0
    sh_type: int = 0
    sh_flags: int = 0
    sh_addr: int = 0
    sh_offset: int = 0
    sh_size: int = 0
    sh_link: int = 0
    sh_info: int = 0
    sh_addralign: int = 0
    sh_entsize: int = 0

    @classmethod
    def from_source(cls, source: ByteSource, offset: int) -> SectionHeader:
        (
            sh_name, sh_type, sh_flags, sh_addr, sh_offset,
            sh_size, sh_link, sh_info, sh_addralign, sh_entsize,
        ) = source.unpack(cls.LAYOUT, offset)
        return cls(
            offset=offset,
            sh_name=sh_name, sh_type=sh_type, sh_flags=sh_flags,
            sh_addr=sh_addr, sh_offset=sh_offset, sh_size=sh_size,
            sh_link=sh_link, sh_info=sh_info, sh_addralign=sh_addralign,
            sh_entsize=sh_entsize,
        )


# ---------------------------------------------------------------------------
# Symbol table entry
# ---------------------------------------------------------------------------

class SymbolTableEntry(BaseModel):
    """One ``Elf32_Sym`` record with its name resolved through ``.strtab``."""
    model_config = ConfigDict(frozen=True)

    LAYOUT: ClassVar[str] = "<IIIBBH"

    st_name: int = 0
    st_value: int = 0
    st_size: int = 0
    st_info: int = 0
    st_other: int = 0
    st_shndx: int = 0
    name: str = ""

    @property
    def st_type(self) -> int:
        return self.st_info & 0xF

    @property
    def st_bind(self) -> int:
        return self.st_info >> 4

    @property
    def st_vis(self) -> int:
        return self.st_other & 0x3

    @property
    def is_function(self) -> bool:
        return self.st_type == STT_FUNC


# ---------------------------------------------------------------------------
# Disassembly artefacts
# ---------------------------------------------------------------------------

class DecodedInstruction(BaseModel):
    """A decoded instruction word.

    Attributes:
        address: Virtual address of the word.
        word: The raw 32-bit instruction.
        mnemonic: Lower-case mnemonic (``addi``, ``jal``, ...).
        operands: Operand text, empty for ``ecall`` / ``ebreak``.
        label: Label attached to ``address``, empty if none.
    """
    model_config = ConfigDict(frozen=True)

    address: int
    word: int
    mnemonic: str
    operands: str = ""
    label: str = ""

    @property
    def text(self) -> str:
        """Mnemonic and operands as they appear in the listing."""
        if not self.operands:
            return self.mnemonic
        return f"{self.mnemonic} {self.operands}"


class LabelResolution(BaseModel):
    """Outcome of the label/jump resolution pass.

    Attributes:
        labels: Code address -> label name (function symbols plus
            synthetic ``LOC_xxxxx`` names for jump targets).
        jumps: Source address of each jump/branch -> label of its target.
        counter: Final value of the synthetic-label counter, which
            advances once per jump/branch instruction seen.
    """
    labels: dict[int, str] = Field(default_factory=dict)
    jumps: dict[int, str] = Field(default_factory=dict)
    counter: int = 0


class DisassemblyResult(BaseModel):
    """Everything produced for one input file."""
    path: str = ""
    header: ElfHeader
    text_section: SectionHeader
    symbols: list[SymbolTableEntry] = Field(default_factory=list)
    resolution: LabelResolution = Field(default_factory=LabelResolution)
    instructions: list[DecodedInstruction] = Field(default_factory=list)
