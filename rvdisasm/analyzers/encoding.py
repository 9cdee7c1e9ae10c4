"""
RV32 Instruction Fields
=======================

Bit-field extraction for the RV32I / RV32M base instruction formats
(R, I, S, B, U, J) and the opcode constants that select them.

Immediate reconstruction, by format::

    I  imm[11:0]  = word[31:20]
    S  imm[11:5]  = word[31:25]     imm[4:0]  = word[11:7]
    B  imm[12]    = word[31]        imm[10:5] = word[30:25]
       imm[4:1]   = word[11:8]      imm[11]   = word[7]
    U  imm[31:12] = word[31:12]
    J  imm[20]    = word[31]        imm[10:1] = word[30:21]
       imm[11]    = word[20]        imm[19:12] = word[19:12]

References:
    - The RISC-V Instruction Set Manual, Volume I: Unprivileged ISA,
      Chapter 2 (RV32I Base Integer Instruction Set) and the "M"
      extension chapter.
"""

from __future__ import annotations

from rvdisasm.core.errors import UnexpectedInstructionError

# ---------------------------------------------------------------------------
# Major opcodes (word[6:0])
# ---------------------------------------------------------------------------

OP_LUI: int = 0b0110111
OP_AUIPC: int = 0b0010111
OP_JAL: int = 0b1101111
OP_JALR: int = 0b1100111
OP_BRANCH: int = 0b1100011
OP_LOAD: int = 0b0000011
OP_STORE: int = 0b0100011
OP_IMM: int = 0b0010011
OP_REG: int = 0b0110011
OP_SYSTEM: int = 0b1110011

JUMP_OPCODES: frozenset[int] = frozenset({OP_JAL, OP_BRANCH})

MASK32: int = 0xFFFFFFFF


def bits(word: int, hi: int, lo: int) -> int:
    """Return ``word[hi:lo]`` as an unsigned integer."""
    return (word >> lo) & ((1 << (hi - lo + 1)) - 1)


def sign_extend(value: int, width: int) -> int:
    """Interpret the low *width* bits of *value* as two's complement."""
    value &= (1 << width) - 1
    if value & (1 << (width - 1)):
        return value - (1 << width)
    return value


# ---------------------------------------------------------------------------
# Fixed fields
# ---------------------------------------------------------------------------

def opcode(word: int) -> int:
    return word & 0x7F


def rd(word: int) -> int:
    return bits(word, 11, 7)


def funct3(word: int) -> int:
    return bits(word, 14, 12)


def rs1(word: int) -> int:
    return bits(word, 19, 15)


def rs2(word: int) -> int:
    return bits(word, 24, 20)


def funct7(word: int) -> int:
    return bits(word, 31, 25)


def funct12(word: int) -> int:
    return bits(word, 31, 20)


# ---------------------------------------------------------------------------
# Immediates
# ---------------------------------------------------------------------------

def imm_i(word: int) -> int:
    return sign_extend(bits(word, 31, 20), 12)


def imm_s(word: int) -> int:
    return sign_extend((bits(word, 31, 25) << 5) | bits(word, 11, 7), 12)


def imm_b(word: int) -> int:
    """Signed byte offset of a conditional branch (always even)."""
    raw = (
        (bits(word, 31, 31) << 12)
        | (bits(word, 7, 7) << 11)
        | (bits(word, 30, 25) << 5)
        | (bits(word, 11, 8) << 1)
    )
    return sign_extend(raw, 13)


def imm_u(word: int) -> int:
    """The 20-bit upper-immediate field, unshifted."""
    return bits(word, 31, 12)


def imm_j(word: int) -> int:
    """Signed byte offset of ``jal`` (always even)."""
    raw = (
        (bits(word, 31, 31) << 20)
        | (bits(word, 19, 12) << 12)
        | (bits(word, 20, 20) << 11)
        | (bits(word, 30, 21) << 1)
    )
    return sign_extend(raw, 21)


def is_jump(word: int) -> bool:
    """``True`` for ``jal`` and the conditional branches."""
    return opcode(word) in JUMP_OPCODES


def jump_offset(word: int) -> int:
    """Signed byte offset of a ``jal`` or branch word.

    Raises:
        UnexpectedInstructionError: if *word* is neither.
    """
    op = opcode(word)
    if op == OP_JAL:
        return imm_j(word)
    if op == OP_BRANCH:
        return imm_b(word)
    raise UnexpectedInstructionError(word)
