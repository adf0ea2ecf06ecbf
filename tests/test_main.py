from __future__ import annotations

import argparse

import pytest

from tiny6502.main import main, parse_address


def write_image(tmp_path, code) -> str:
    path = tmp_path / "prog.bin"
    path.write_bytes(bytes(code))
    return str(path)


@pytest.mark.parametrize(
    "text, value",
    [("$0600", 0x0600), ("0xFFFC", 0xFFFC), ("0X10", 0x10), ("1536", 1536)],
)
def test_parse_address(text, value) -> None:
    assert parse_address(text) == value


@pytest.mark.parametrize("text", ["zz", "$", "0x10000", "-1"])
def test_parse_address_rejects(text) -> None:
    with pytest.raises(argparse.ArgumentTypeError):
        parse_address(text)


def test_run_stops_on_self_jump(tmp_path, capsys) -> None:
    # LDA #$42 / JMP $0602
    path = write_image(tmp_path, [0xA9, 0x42, 0x4C, 0x02, 0x06])

    assert main(["run", path, "--load-address", "0x0600"]) == 0

    out = capsys.readouterr().out
    assert "Stopped: trapped at $0602" in out
    assert "A=$42" in out
    assert "Steps: 2  Cycles: 5" in out


def test_run_stop_at(tmp_path, capsys) -> None:
    path = write_image(tmp_path, [0xE8, 0xE8, 0xE8, 0x4C, 0x03, 0x06])

    assert main(["run", path, "-l", "$0600", "--stop-at", "$0602"]) == 0

    out = capsys.readouterr().out
    assert "Stopped: reached $0602" in out
    assert "X=$02" in out


def test_run_max_steps(tmp_path, capsys) -> None:
    path = write_image(tmp_path, [0xE8, 0x4C, 0x00, 0x06])

    assert main(["run", path, "-l", "0x0600", "--max-steps", "3"]) == 0
    assert "Stopped: step limit reached" in capsys.readouterr().out


def test_run_start_differs_from_load_address(tmp_path, capsys) -> None:
    path = write_image(tmp_path, [0xFF, 0xFF, 0xA2, 0x07, 0x4C, 0x04, 0x06])

    assert main(["run", path, "-l", "0x0600", "--start", "0x0602"]) == 0
    assert "X=$07" in capsys.readouterr().out


def test_run_unknown_opcode_exits_1(tmp_path, capsys) -> None:
    path = write_image(tmp_path, [0xEA, 0xFF])

    assert main(["run", path, "-l", "0x0600"]) == 1

    captured = capsys.readouterr()
    assert "Unknown opcode $FF at $0601" in captured.err
    assert "PC=$0602" in captured.out


def test_run_trace_prints_lines(tmp_path, capsys) -> None:
    path = write_image(tmp_path, [0xA9, 0x37, 0x4C, 0x02, 0x06])

    assert main(["run", path, "-l", "0x0600", "--trace"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("0600: LDA #$37     | A:00")
    assert lines[1].startswith("0602: JMP $0602    | A:37")


def test_missing_image_exits_1(tmp_path, capsys) -> None:
    assert main(["run", str(tmp_path / "nope.bin")]) == 1
    assert "not found" in capsys.readouterr().err


def test_empty_image_exits_1(tmp_path, capsys) -> None:
    path = write_image(tmp_path, [])
    assert main(["info", path]) == 1
    assert "empty" in capsys.readouterr().err


def test_disasm_lists_instructions(tmp_path, capsys) -> None:
    path = write_image(tmp_path, [0xA2, 0x03, 0xCA, 0xD0, 0xFD])

    assert main(["disasm", path, "-l", "0x0600", "--count", "3"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "0600: A2 03     LDX #$03",
        "0602: CA        DEX",
        "0603: D0 FD     BNE $0602",
    ]


def test_info_prints_metadata(tmp_path, capsys) -> None:
    path = write_image(tmp_path, [0xEA] * 4)

    assert main(["info", path, "-l", "0x8000"]) == 0

    out = capsys.readouterr().out
    assert "Size" in out and ": 4" in out
    assert "$8000" in out
    assert "$8003" in out
