"""Builders for synthetic ELF32 RISC-V images and RV32 instruction words."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterable, Optional

EM_RISCV = 0xF3
TEXT_ADDR = 0x10000


@dataclass
class Sym:
    name: str
    value: int = 0
    size: int = 0
    type: int = 0
    bind: int = 0
    other: int = 0
    shndx: int = 1

    @property
    def info(self) -> int:
        return (self.bind << 4) | (self.type & 0xF)


def build_elf(
    text_words: Iterable[int] = (),
    text_addr: int = TEXT_ADDR,
    symbols: Iterable[Sym] = (),
    *,
    magic: bytes = b"\x7fELF",
    ei_class: int = 1,
    ei_data: int = 1,
    machine: int = EM_RISCV,
    omit: Iterable[str] = (),
    symtab_entsize: int = 16,
    text_tail: bytes = b"",
    e_shnum: Optional[int] = None,
) -> bytes:
    """Assemble a minimal executable with .text, .symtab, .strtab, .shstrtab."""
    omit = set(omit)
    words = list(text_words)
    text = struct.pack(f"<{len(words)}I", *words) + text_tail

    strtab = bytearray(b"\x00")
    records = [struct.pack("<IIIBBH", 0, 0, 0, 0, 0, 0)]
    for sym in symbols:
        name_offset = len(strtab)
        strtab += sym.name.encode("latin-1") + b"\x00"
        records.append(struct.pack(
            "<IIIBBH", name_offset, sym.value, sym.size, sym.info, sym.other, sym.shndx,
        ))
    symtab = b"".join(records)

    # (name, type, flags, addr, data, entsize)
    sections: list[tuple[str, int, int, int, Optional[bytes], int]] = []
    if ".text" not in omit:
        sections.append((".text", 1, 0x6, text_addr, text, 0))
    if ".symtab" not in omit:
        sections.append((".symtab", 2, 0, 0, symtab, symtab_entsize))
    if ".strtab" not in omit:
        sections.append((".strtab", 3, 0, 0, bytes(strtab), 0))
    sections.append((".shstrtab", 3, 0, 0, None, 0))

    shstrtab = bytearray(b"\x00")
    name_offsets: dict[str, int] = {}
    for name, *_ in sections:
        name_offsets[name] = len(shstrtab)
        shstrtab += name.encode("ascii") + b"\x00"

    body = bytearray(52)
    headers = [bytes(40)]
    for name, sh_type, flags, addr, data, entsize in sections:
        if data is None:
            data = bytes(shstrtab)
        while len(body) % 4:
            body.append(0)
        offset = len(body)
        body += data
        headers.append(struct.pack(
            "<10I", name_offsets[name], sh_type, flags, addr, offset,
            len(data), 0, 0, 4, entsize,
        ))
    while len(body) % 4:
        body.append(0)
    shoff = len(body)
    body += b"".join(headers)

    ident = magic + bytes([ei_class, ei_data, 1])
    ident += bytes(16 - len(ident))
    header = ident + struct.pack(
        "<HHIIIIIHHHHHH",
        2, machine, 1, text_addr, 0, shoff, 0, 52, 0, 0, 40,
        len(headers) if e_shnum is None else e_shnum,
        len(headers) - 1,
    )
    body[0:52] = header
    return bytes(body)


# ---------------------------------------------------------------------------
# RV32 encoders
# ---------------------------------------------------------------------------

def enc_r(funct7: int, rs2: int, rs1: int, funct3: int, rd: int, opcode: int = 0x33) -> int:
    return (funct7 << 25) | (rs2 << 20) | (rs1 << 15) | (funct3 << 12) | (rd << 7) | opcode


def enc_i(imm: int, rs1: int, funct3: int, rd: int, opcode: int = 0x13) -> int:
    return ((imm & 0xFFF) << 20) | (rs1 << 15) | (funct3 << 12) | (rd << 7) | opcode


def enc_s(imm: int, rs2: int, rs1: int, funct3: int, opcode: int = 0x23) -> int:
    imm &= 0xFFF
    return (
        ((imm >> 5) << 25) | (rs2 << 20) | (rs1 << 15)
        | (funct3 << 12) | ((imm & 0x1F) << 7) | opcode
    )


def enc_b(offset: int, rs2: int, rs1: int, funct3: int, opcode: int = 0x63) -> int:
    imm = offset & 0x1FFF
    return (
        (((imm >> 12) & 1) << 31) | (((imm >> 5) & 0x3F) << 25)
        | (rs2 << 20) | (rs1 << 15) | (funct3 << 12)
        | (((imm >> 1) & 0xF) << 8) | (((imm >> 11) & 1) << 7) | opcode
    )


def enc_u(imm20: int, rd: int, opcode: int = 0x37) -> int:
    return ((imm20 & 0xFFFFF) << 12) | (rd << 7) | opcode


def enc_j(offset: int, rd: int, opcode: int = 0x6F) -> int:
    imm = offset & 0x1FFFFF
    return (
        (((imm >> 20) & 1) << 31) | (((imm >> 1) & 0x3FF) << 21)
        | (((imm >> 11) & 1) << 20) | (((imm >> 12) & 0xFF) << 12)
        | (rd << 7) | opcode
    )


NOP = 0x00000013
