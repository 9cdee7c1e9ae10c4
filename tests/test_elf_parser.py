import logging

import pytest

from shared.logger import RvLogger

from rvdisasm.core.errors import (
    Criterion,
    IllegalFileError,
    MalformedSectionError,
    MissingSectionError,
    TruncatedFileError,
)
from rvdisasm.parsers.byte_source import ByteSource
from rvdisasm.parsers.elf_parser import ElfFile
from tests.helpers import NOP, TEXT_ADDR, Sym, build_elf, enc_j


def parse(image: bytes, logger=None) -> ElfFile:
    return ElfFile(ByteSource(image), logger=logger)


def test_parses_minimal_image():
    elf = parse(build_elf([NOP, NOP], symbols=[Sym("main", TEXT_ADDR, 8, type=2, bind=1)]))

    assert elf.elf_header.e_machine == 0xF3
    assert elf.elf_header.ei_class == 1
    assert elf.elf_header.ei_data == 1
    assert elf.text_header.sh_addr == TEXT_ADDR
    assert elf.text_header.sh_size == 8
    assert elf.symtab_header.sh_type == 2
    assert [entry.name for entry in elf.symbols] == ["", "main"]


def test_iter_text_yields_addresses_and_words():
    words = [enc_j(8, 0), NOP, NOP]
    elf = parse(build_elf(words))
    assert list(elf.iter_text()) == [
        (TEXT_ADDR, words[0]),
        (TEXT_ADDR + 4, NOP),
        (TEXT_ADDR + 8, NOP),
    ]
    # each call is a fresh pass
    assert len(list(elf.iter_text())) == 3


def test_find_section_record_uses_shstrtab_offsets():
    elf = parse(build_elf([NOP]))
    assert elf.find_section_record(".text") == 1
    assert elf.find_section_record(".symtab") == 7
    assert elf.find_section_record(".strtab") == 15


@pytest.mark.parametrize(
    "overrides, criterion",
    [
        ({"magic": b"\x7fELG"}, Criterion.ELF),
        ({"ei_class": 2}, Criterion.CLASS_32),
        ({"ei_data": 2}, Criterion.LITTLE_ENDIAN),
        ({"machine": 0x3E}, Criterion.RISCV),
    ],
)
def test_identification_failures(overrides, criterion):
    with pytest.raises(IllegalFileError) as info:
        parse(build_elf([NOP], **overrides))
    assert info.value.criterion is criterion
    assert str(info.value) == f"Illegal file given, not {criterion.value}"


def test_checks_run_in_order():
    # wrong magic and wrong machine: the magic check wins
    with pytest.raises(IllegalFileError) as info:
        parse(build_elf([NOP], magic=b"MZ\x90\x00", machine=0x3E))
    assert info.value.criterion is Criterion.ELF


def test_tiny_non_elf_file_reports_elf():
    with pytest.raises(IllegalFileError) as info:
        parse(b"hi")
    assert info.value.criterion is Criterion.ELF


def test_magic_without_full_identification_is_truncated():
    for data in (b"\x7fELF", b"\x7fELF\x01", b"\x7fELF\x01\x01\x01"):
        with pytest.raises(TruncatedFileError) as info:
            parse(data)
        assert info.value.size == 16


def test_header_cut_short_is_truncated():
    with pytest.raises(TruncatedFileError):
        parse(build_elf([NOP])[:30])


@pytest.mark.parametrize("section", [".text", ".strtab", ".symtab"])
def test_missing_section(section):
    with pytest.raises(MissingSectionError) as info:
        parse(build_elf([NOP], omit=[section]))
    assert info.value.section == section


def test_zero_symtab_entsize_is_malformed():
    with pytest.raises(MalformedSectionError) as info:
        parse(build_elf([NOP], symtab_entsize=0))
    assert info.value.section == ".symtab"


def test_zero_shnum_scans_what_fits():
    elf = parse(build_elf([NOP], e_shnum=0))
    assert elf.text_header.sh_size == 4


def test_trailing_text_bytes_are_ignored_with_warning():
    logger = RvLogger("parser-test", log_level="DEBUG", console_output=False)
    records: list[logging.LogRecord] = []

    class _Collect(logging.Handler):
        def emit(self, record):
            records.append(record)

    logger.underlying.addHandler(_Collect())
    elf = parse(build_elf([NOP], text_tail=b"\x01\x02"), logger=logger)

    assert list(elf.iter_text()) == [(TEXT_ADDR, NOP)]
    warnings = [r for r in records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "trailing" in warnings[0].getMessage()


def test_from_path(tmp_path):
    path = tmp_path / "prog.elf"
    path.write_bytes(build_elf([NOP]))
    assert ElfFile.from_path(path).text_header.sh_size == 4
