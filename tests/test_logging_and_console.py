import json

from shared.console import RvConsole
from shared.logger import RvLogger

from rvdisasm.core.engine import DisassemblerEngine
from rvdisasm.output.console import DisasmConsoleOutput
from tests.helpers import NOP


def test_json_log_file_carries_operation_and_extra(tmp_path):
    log_file = tmp_path / "logs" / "rv.jsonl"
    logger = RvLogger(
        "json-test", log_level="DEBUG", log_file=log_file, json_logs=True,
        console_output=False,
    )
    try:
        assert logger.current_operation is None
        with logger.operation("labels"):
            assert logger.current_operation == "labels"
            logger.info("resolved %d jumps", 3, jumps=3)
        logger.warning("outside")
        assert logger.current_operation is None
    finally:
        for handler in logger.underlying.handlers:
            handler.close()

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    assert records[0]["message"] == "resolved 3 jumps"
    assert records[0]["operation"] == "labels"
    assert records[0]["tool_name"] == "json-test"
    assert records[0]["extra"] == {"jumps": 3}
    assert records[0]["logger"] == "rvdisasm.json-test"
    assert records[1]["level"] == "WARNING"
    assert "operation" not in records[1]


def test_timed_logs_completion(tmp_path):
    log_file = tmp_path / "rv.log"
    logger = RvLogger("timed-test", log_level="INFO", log_file=log_file, console_output=False)
    try:
        with logger.timed("decode") as timer:
            pass
        assert timer.elapsed >= 0
    finally:
        for handler in logger.underlying.handlers:
            handler.close()
    assert "Completed: decode" in log_file.read_text()
    assert logger.tool_name == "timed-test"


def test_console_view_caps_text_rows(write_elf):
    result = DisassemblerEngine().disassemble(write_elf([0x0080006F, 0x003100B3, NOP]))
    console = RvConsole(record=True, width=160)

    DisasmConsoleOutput(console, max_rows=2).display(result)
    shown = console.export_text()

    assert "Binary Information" in shown
    assert "jal" in shown
    assert "addi" not in shown
    assert "Showing 2 of 3 instructions." in shown
    assert "NOTYPE" in shown
    assert "UNDEF" in shown


def test_console_view_shows_all_rows_when_uncapped(write_elf):
    result = DisassemblerEngine().disassemble(write_elf([0x0080006F, 0x003100B3, NOP]))
    console = RvConsole(record=True, width=160)

    DisasmConsoleOutput(console, max_rows=0).display(result)
    shown = console.export_text()

    assert "LOC_00000" in shown
    assert "addi" in shown
    assert "Showing" not in shown
