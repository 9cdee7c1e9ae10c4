"""
ELF32 Constants
===============

Numeric constants from the ELF specification used by the container
parser and the symbol table renderer, together with the symbolic names
printed in the ``.symtab`` listing.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - RISC-V ELF psABI Specification.
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Identification
# ---------------------------------------------------------------------------

ELF_MAGIC: bytes = b"\x7fELF"
EI_NIDENT: int = 16
EI_CLASS: int = 4
EI_DATA: int = 5

ELFCLASS32: int = 1
ELFDATA2LSB: int = 1  # Little-endian

EM_RISCV: int = 0xF3

# ---------------------------------------------------------------------------
# Record sizes (ELF32)
# ---------------------------------------------------------------------------

ELF32_EHDR_SIZE: int = 52
ELF32_SHDR_SIZE: int = 40
ELF32_SYM_SIZE: int = 16
INSTRUCTION_SIZE: int = 4

# ---------------------------------------------------------------------------
# Section header types
# ---------------------------------------------------------------------------

SHT_NULL: int = 0
SHT_PROGBITS: int = 1
SHT_SYMTAB: int = 2
SHT_STRTAB: int = 3

# ---------------------------------------------------------------------------
# Symbol types / bindings / visibility
# ---------------------------------------------------------------------------

STT_NOTYPE: int = 0
STT_OBJECT: int = 1
STT_FUNC: int = 2
STT_SECTION: int = 3
STT_FILE: int = 4
STT_LOPROC: int = 13
STT_HIPROC: int = 15

STT_NAMES: dict[int, str] = {
    STT_NOTYPE: "NOTYPE",
    STT_OBJECT: "OBJECT",
    STT_FUNC: "FUNC",
    STT_SECTION: "SECTION",
    STT_FILE: "FILE",
    STT_LOPROC: "LOPROC",
    STT_HIPROC: "HIPROC",
}

STB_LOCAL: int = 0
STB_GLOBAL: int = 1
STB_WEAK: int = 2
STB_LOPROC: int = 13
STB_HIPROC: int = 15

STB_NAMES: dict[int, str] = {
    STB_LOCAL: "LOCAL",
    STB_GLOBAL: "GLOBAL",
    STB_WEAK: "WEAK",
    STB_LOPROC: "LOPROC",
    STB_HIPROC: "HIPROC",
}

STV_NAMES: dict[int, str] = {
    0: "DEFAULT",
    1: "INTERNAL",
    2: "HIDDEN",
    3: "PROTECTED",
    4: "EXPORTED",
    5: "SINGLETON",
    6: "ELIMINATE",
}

# ---------------------------------------------------------------------------
# Special section indices
# ---------------------------------------------------------------------------

SHN_UNDEF: int = 0
SHN_LORESERVE: int = 0xFF00
SHN_HIPROC: int = 0xFF1F
SHN_ABS: int = 0xFFF1
SHN_COMMON: int = 0xFFF2
SHN_HIRESERVE: int = 0xFFFF

SHN_NAMES: dict[int, str] = {
    SHN_UNDEF: "UNDEF",
    SHN_LORESERVE: "LORESERVE",
    SHN_HIPROC: "HIPROC",
    SHN_ABS: "ABS",
    SHN_COMMON: "COMMON",
    SHN_HIRESERVE: "HIRESERVE",
}

# ---------------------------------------------------------------------------
# Section names located through .shstrtab
# ---------------------------------------------------------------------------

TEXT_SECTION: str = ".text"
STRTAB_SECTION: str = ".strtab"
SYMTAB_SECTION: str = ".symtab"
