import pytest

from shared.config import RvConfig

from rvdisasm.core.engine import DisassemblerEngine
from rvdisasm.core.errors import Criterion, IllegalFileError, UnexpectedInstructionError
from rvdisasm.output.listing import SYMBOL_TABLE_HEADER
from tests.helpers import NOP, TEXT_ADDR, Sym

WORDS = [0x0080006F, 0x003100B3, NOP]

NULL_ROW = "[   0] 0x0                   0 NOTYPE   LOCAL    DEFAULT   UNDEF "


def test_disassemble_end_to_end(write_elf):
    result = DisassemblerEngine().disassemble(write_elf(WORDS))

    assert [insn.text for insn in result.instructions] == [
        "jal zero, 4, LOC_00000",
        "add ra, sp, gp",
        "addi zero, zero, 0",
    ]
    assert [insn.label for insn in result.instructions] == ["", "", "LOC_00000"]
    assert result.resolution.counter == 1
    assert result.text_section.sh_addr == TEXT_ADDR
    assert len(result.symbols) == 1


def test_disassemble_to_writes_listing(write_elf, tmp_path):
    out = tmp_path / "out.txt"
    DisassemblerEngine().disassemble_to(write_elf(WORDS), out)

    assert out.read_text() == "\n".join([
        ".text",
        "00010000            jal zero, 4, LOC_00000",
        "00010004            add ra, sp, gp",
        "00010008  LOC_00000 addi zero, zero, 0",
        "",
        ".symtab",
        SYMBOL_TABLE_HEADER,
        NULL_ROW,
        "",
    ])


def test_function_symbol_names_jump_target(write_elf, tmp_path):
    path = write_elf(WORDS, symbols=[Sym("foo", TEXT_ADDR + 8, 4, type=2, bind=1)])
    engine = DisassemblerEngine()
    result = engine.disassemble(path)
    listing = engine.render(result)

    assert "00010000            jal zero, 4, foo" in listing
    assert "00010008        foo addi zero, zero, 0" in listing
    assert "LOC_" not in listing
    assert listing.rstrip("\n").endswith(
        "[   1] 0x10008               4 FUNC     GLOBAL   DEFAULT       1 foo"
    )


def test_undecodable_word_leaves_no_output(write_elf, tmp_path):
    out = tmp_path / "out.txt"
    with pytest.raises(UnexpectedInstructionError) as info:
        DisassemblerEngine().disassemble_to(write_elf([NOP, 0x0000000F]), out)
    assert info.value.address == TEXT_ADDR + 4
    assert not out.exists()


def test_file_size_limit(write_elf):
    config = RvConfig()
    config.disassembler.max_file_size = 16
    with pytest.raises(IllegalFileError) as info:
        DisassemblerEngine(config=config).load(write_elf([NOP]))
    assert info.value.criterion is Criterion.SIZE


def test_label_settings_come_from_config(write_elf):
    config = RvConfig()
    config.disassembler.label_prefix = ".L"
    config.disassembler.label_digits = 2
    result = DisassemblerEngine(config=config).disassemble(write_elf(WORDS))
    assert result.instructions[0].text == "jal zero, 4, .L00"


def test_empty_text_section(write_elf):
    result = DisassemblerEngine().disassemble(write_elf([]))
    assert result.instructions == []
    assert result.resolution.counter == 0


def test_result_serialises_to_json(write_elf):
    result = DisassemblerEngine().disassemble(write_elf(WORDS))
    data = result.model_dump(mode="json")
    assert data["instructions"][0]["mnemonic"] == "jal"
    assert data["resolution"]["jumps"] == {str(TEXT_ADDR): "LOC_00000"}
    assert data["header"]["e_machine"] == 0xF3
