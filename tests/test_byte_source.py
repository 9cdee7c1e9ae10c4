import pytest

from rvdisasm.core.errors import ElfFileError, TruncatedFileError
from rvdisasm.parsers.byte_source import ByteSource
from rvdisasm.parsers.string_table import StringTable


def test_little_endian_reads():
    source = ByteSource(b"\x01\x02\x03\x04\x05")
    assert source.u8(0) == 1
    assert source.u16(0) == 0x0201
    assert source.u32(1) == 0x05040302
    assert len(source) == 5


def test_words_reads_consecutive_little_endian_words():
    source = ByteSource(bytes.fromhex("6f008000b3001000"))
    assert source.words(0, 2) == [0x0080006F, 0x001000B3]
    assert source.words(0, 0) == []


def test_read_past_end_raises_truncated():
    source = ByteSource(b"\x00\x01")
    with pytest.raises(TruncatedFileError) as info:
        source.u32(0)
    assert info.value.offset == 0
    assert info.value.size == 4
    assert info.value.length == 2
    assert isinstance(info.value, ElfFileError)


def test_negative_offset_rejected():
    with pytest.raises(TruncatedFileError):
        ByteSource(b"abcd").read(-1, 2)


def test_from_path(tmp_path):
    path = tmp_path / "blob.bin"
    path.write_bytes(b"\x7fELF")
    assert ByteSource.from_path(path).read(0, 4) == b"\x7fELF"


def test_string_table_cursor_tracks_offsets():
    data = b"\x00.text\x00.symtab\x00"
    table = StringTable(ByteSource(data), 0, len(data))
    assert table.read_string() == ""
    assert table.offset == 1
    assert table.read_string() == ".text"
    assert table.offset == 7
    assert table.read_string() == ".symtab"
    assert table.exhausted()


def test_string_table_iterates_sized_table():
    data = b"pad\x00a\x00bc\x00"
    assert list(StringTable(ByteSource(data), 4, 5)) == ["a", "bc"]


def test_unterminated_string_raises_truncated():
    table = StringTable(ByteSource(b"abc"), 0)
    with pytest.raises(TruncatedFileError):
        table.read_string()
