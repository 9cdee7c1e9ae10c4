"""
RV32IM Instruction Decoder
==========================

Second pass over ``.text``: turns each 32-bit word into a mnemonic and
operand text.  Dispatch is on the major opcode, then on ``funct3``
and/or ``funct7``.

Supported groups:

    ==========  ==========================================  =========================
    Opcode      Mnemonics                                   Operands
    ==========  ==========================================  =========================
    LUI/AUIPC   lui auipc                                   rd, imm20
    JAL         jal                                         rd, imm, label
    JALR        jalr                                        rd, rs1, imm
    BRANCH      beq bne blt bge bltu bgeu                   rs1, rs2, imm, label
    LOAD        lb lh lw lbu lhu                            rd, imm(rs1)
    STORE       sb sh sw                                    rs2, imm(rs1)
    OP-IMM      addi slti sltiu xori ori andi slli srli     rd, rs1, imm|shamt
                srai
    OP          add sub sll slt sltu xor srl sra or and     rd, rs1, rs2
                mul mulh mulhsu mulhu div divu rem remu
    SYSTEM      ecall ebreak csrrw csrrs csrrc csrrwi       rd, csr, rs1|uimm
                csrrsi csrrci
    ==========  ==========================================  =========================

``jal`` and branch immediates are printed as the encoded field (byte
offset / 2); the label names the resolved target.

References:
    - The RISC-V Instruction Set Manual, Volume I: Unprivileged ISA.
    - RISC-V ELF psABI Specification, register ABI names.
"""

from __future__ import annotations

from typing import Callable, Mapping, Optional

from rvdisasm.analyzers import encoding as enc
from rvdisasm.core.errors import UnexpectedInstructionError, UnexpectedRegisterError
from rvdisasm.core.models import DecodedInstruction


REGISTERS: tuple[str, ...] = (
    "zero", "ra", "sp", "gp", "tp", "t0", "t1", "t2",
    "s0", "s1", "a0", "a1", "a2", "a3", "a4", "a5",
    "a6", "a7", "s2", "s3", "s4", "s5", "s6", "s7",
    "s8", "s9", "s10", "s11", "t3", "t4", "t5", "t6",
)


def register_name(register: int) -> str:
    """Return the ABI name of integer register *register*.

    Raises:
        UnexpectedRegisterError: if *register* is outside 0..31.
    """
    if register < 0 or register >= len(REGISTERS):
        raise UnexpectedRegisterError(register)
    return REGISTERS[register]


# ---------------------------------------------------------------------------
# Mnemonic tables
# ---------------------------------------------------------------------------

_BRANCH_NAMES: dict[int, str] = {
    0b000: "beq",
    0b001: "bne",
    0b100: "blt",
    0b101: "bge",
    0b110: "bltu",
    0b111: "bgeu",
}

_LOAD_NAMES: dict[int, str] = {
    0b000: "lb",
    0b001: "lh",
    0b010: "lw",
    0b100: "lbu",
    0b101: "lhu",
}

_STORE_NAMES: dict[int, str] = {
    0b000: "sb",
    0b001: "sh",
    0b010: "sw",
}

_IMM_NAMES: dict[int, str] = {
    0b000: "addi",
    0b010: "slti",
    0b011: "sltiu",
    0b100: "xori",
    0b110: "ori",
    0b111: "andi",
}

# (funct3, funct7) -> mnemonic
_SHIFT_IMM_NAMES: dict[tuple[int, int], str] = {
    (0b001, 0b0000000): "slli",
    (0b101, 0b0000000): "srli",
    (0b101, 0b0100000): "srai",
}

_REG_NAMES: dict[tuple[int, int], str] = {
    (0b000, 0b0000000): "add",
    (0b000, 0b0100000): "sub",
    (0b000, 0b0000001): "mul",
    (0b001, 0b0000000): "sll",
    (0b001, 0b0000001): "mulh",
    (0b010, 0b0000000): "slt",
    (0b010, 0b0000001): "mulhsu",
    (0b011, 0b0000000): "sltu",
    (0b011, 0b0000001): "mulhu",
    (0b100, 0b0000000): "xor",
    (0b100, 0b0000001): "div",
    (0b101, 0b0000000): "srl",
    (0b101, 0b0100000): "sra",
    (0b101, 0b0000001): "divu",
    (0b110, 0b0000000): "or",
    (0b110, 0b0000001): "rem",
    (0b111, 0b0000000): "and",
    (0b111, 0b0000001): "remu",
}

_CSR_REG_NAMES: dict[int, str] = {
    0b001: "csrrw",
    0b010: "csrrs",
    0b011: "csrrc",
}

_CSR_IMM_NAMES: dict[int, str] = {
    0b101: "csrrwi",
    0b110: "csrrsi",
    0b111: "csrrci",
}

_SYSTEM_NAMES: dict[int, str] = {
    0: "ecall",
    1: "ebreak",
}


class InstructionDecoder:
    """Decodes RV32IM words using the maps from the label pass.

    Args:
        jumps: Source address -> target label, from :class:`LabelResolver`.
        labels: Address -> label, used to tag each decoded instruction.

    Usage::

        decoder = InstructionDecoder(resolution.jumps, resolution.labels)
        insn = decoder.decode(0x00000013, 0x10008)
        insn.text    # -> "addi zero, zero, 0"
    """

    def __init__(
        self,
        jumps: Optional[Mapping[int, str]] = None,
        labels: Optional[Mapping[int, str]] = None,
    ) -> None:
        self._jumps: Mapping[int, str] = jumps or {}
        self._labels: Mapping[int, str] = labels or {}
        self._handlers: dict[int, Callable[[int, int], tuple[str, str]]] = {
            enc.OP_LUI: self._decode_upper,
            enc.OP_AUIPC: self._decode_upper,
            enc.OP_JAL: self._decode_jal,
            enc.OP_JALR: self._decode_jalr,
            enc.OP_BRANCH: self._decode_branch,
            enc.OP_LOAD: self._decode_load,
            enc.OP_STORE: self._decode_store,
            enc.OP_IMM: self._decode_imm,
            enc.OP_REG: self._decode_reg,
            enc.OP_SYSTEM: self._decode_system,
        }

    def decode(self, word: int, address: int) -> DecodedInstruction:
        """Decode one instruction word located at *address*.

        Raises:
            UnexpectedInstructionError: for unsupported encodings.
        """
        handler = self._handlers.get(enc.opcode(word))
        if handler is None:
            raise UnexpectedInstructionError(word, address)
        mnemonic, operands = handler(word, address)
        return DecodedInstruction(
            address=address,
            word=word,
            mnemonic=mnemonic,
            operands=operands,
            label=self._labels.get(address, ""),
        )

    # ------------------------------------------------------------------ #
    #  Per-format handlers
    # ------------------------------------------------------------------ #

    def _target_label(self, word: int, address: int) -> str:
        label = self._jumps.get(address)
        if label is None:
            target = (address + enc.jump_offset(word)) & enc.MASK32
            return f"0x{target:08x}"
        return label

    def _decode_upper(self, word: int, address: int) -> tuple[str, str]:
        name = "lui" if enc.opcode(word) == enc.OP_LUI else "auipc"
        return name, f"{register_name(enc.rd(word))}, {enc.imm_u(word)}"

    def _decode_jal(self, word: int, address: int) -> tuple[str, str]:
        imm = enc.imm_j(word) >> 1
        return "jal", (
            f"{register_name(enc.rd(word))}, {imm}, "
            f"{self._target_label(word, address)}"
        )

    def _decode_jalr(self, word: int, address: int) -> tuple[str, str]:
        return "jalr", (
            f"{register_name(enc.rd(word))}, "
            f"{register_name(enc.rs1(word))}, {enc.imm_i(word)}"
        )

    def _decode_branch(self, word: int, address: int) -> tuple[str, str]:
        name = _BRANCH_NAMES.get(enc.funct3(word))
        if name is None:
            raise UnexpectedInstructionError(word, address)
        imm = enc.imm_b(word) >> 1
        return name, (
            f"{register_name(enc.rs1(word))}, {register_name(enc.rs2(word))}, "
            f"{imm}, {self._target_label(word, address)}"
        )

    def _decode_load(self, word: int, address: int) -> tuple[str, str]:
        name = _LOAD_NAMES.get(enc.funct3(word))
        if name is None:
            raise UnexpectedInstructionError(word, address)
        return name, (
            f"{register_name(enc.rd(word))}, "
            f"{enc.imm_i(word)}({register_name(enc.rs1(word))})"
        )

    def _decode_store(self, word: int, address: int) -> tuple[str, str]:
        name = _STORE_NAMES.get(enc.funct3(word))
        if name is None:
            raise UnexpectedInstructionError(word, address)
        return name, (
            f"{register_name(enc.rs2(word))}, "
            f"{enc.imm_s(word)}({register_name(enc.rs1(word))})"
        )

    def _decode_imm(self, word: int, address: int) -> tuple[str, str]:
        f3 = enc.funct3(word)
        name = _IMM_NAMES.get(f3)
        if name is not None:
            value = enc.imm_i(word)
        else:
            name = _SHIFT_IMM_NAMES.get((f3, enc.funct7(word)))
            if name is None:
                raise UnexpectedInstructionError(word, address)
            value = enc.rs2(word)  # shamt
        return name, (
            f"{register_name(enc.rd(word))}, "
            f"{register_name(enc.rs1(word))}, {value}"
        )

    def _decode_reg(self, word: int, address: int) -> tuple[str, str]:
        name = _REG_NAMES.get((enc.funct3(word), enc.funct7(word)))
        if name is None:
            raise UnexpectedInstructionError(word, address)
        return name, (
            f"{register_name(enc.rd(word))}, {register_name(enc.rs1(word))}, "
            f"{register_name(enc.rs2(word))}"
        )

    def _decode_system(self, word: int, address: int) -> tuple[str, str]:
        f3 = enc.funct3(word)
        rd = enc.rd(word)
        rs1 = enc.rs1(word)
        csr = enc.funct12(word)

        if f3 == 0b000:
            # funct3 == 0 with any other operands is left undecoded
            if rd == 0 and rs1 == 0 and csr in _SYSTEM_NAMES:
                return _SYSTEM_NAMES[csr], ""
            raise UnexpectedInstructionError(word, address)

        if f3 in _CSR_REG_NAMES:
            return _CSR_REG_NAMES[f3], (
                f"{register_name(rd)}, {csr}, {register_name(rs1)}"
            )
        if f3 in _CSR_IMM_NAMES:
            return _CSR_IMM_NAMES[f3], f"{register_name(rd)}, {csr}, {rs1}"
        raise UnexpectedInstructionError(word, address)
