import pytest

from shared.config import DisassemblerConfig, GlobalConfig, RvConfig


def test_defaults():
    config = RvConfig()
    assert config.disassembler.label_prefix == "LOC_"
    assert config.disassembler.label_digits == 5
    assert config.global_settings.log_level == "WARNING"
    assert config.global_settings.log_file is None


def test_load_from_toml(tmp_path):
    path = tmp_path / "rvdisasm.toml"
    path.write_text(
        "[global]\n"
        'log_level = "DEBUG"\n'
        "log_json = true\n"
        "\n"
        "[rvdisasm]\n"
        'label_prefix = ".L"\n'
        "max_file_size = 1024\n"
        "unknown_key = 1\n"
    )
    config = RvConfig.load(path)

    assert config.global_settings.log_level == "DEBUG"
    assert config.global_settings.log_json is True
    assert config.disassembler.label_prefix == ".L"
    assert config.disassembler.max_file_size == 1024
    # untouched keys keep their defaults
    assert config.disassembler.label_digits == 5


def test_explicit_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        RvConfig.load(tmp_path / "nope.toml")


def test_to_dict():
    data = RvConfig(
        global_settings=GlobalConfig(log_level="INFO"),
        disassembler=DisassemblerConfig(label_digits=8),
    ).to_dict()
    assert data["global_settings"]["log_level"] == "INFO"
    assert data["disassembler"]["label_digits"] == 8
