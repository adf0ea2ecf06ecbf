import pytest

from tiny6502.core.opcodes import OPCODE_TABLE, lookup
from tiny6502.core.types import AddressingMode, CyclePenalty


def test_table_has_256_slots_and_151_instructions() -> None:
    assert len(OPCODE_TABLE) == 256
    assert sum(1 for op in OPCODE_TABLE if op is not None) == 151


def test_entries_know_their_own_byte() -> None:
    for byte, op in enumerate(OPCODE_TABLE):
        if op is not None:
            assert op.opcode == byte


def test_undocumented_bytes_are_unmapped() -> None:
    for byte in (0x02, 0x03, 0x1A, 0x80, 0xEB, 0xFF):
        assert lookup(byte) is None


def test_56_distinct_mnemonics() -> None:
    assert len({op.mnemonic for op in OPCODE_TABLE if op is not None}) == 56


@pytest.mark.parametrize(
    "byte, mnemonic, mode, cycles",
    [
        (0xA9, "LDA", AddressingMode.IMMEDIATE, 2),
        (0x6C, "JMP", AddressingMode.INDIRECT, 5),
        (0x00, "BRK", AddressingMode.IMPLIED, 7),
        (0x0A, "ASL", AddressingMode.ACCUMULATOR, 2),
        (0xB6, "LDX", AddressingMode.ZERO_PAGE_Y, 4),
        (0xF1, "SBC", AddressingMode.INDIRECT_INDEXED, 5),
    ],
)
def test_sample_entries(byte, mnemonic, mode, cycles) -> None:
    op = lookup(byte)
    assert op.mnemonic == mnemonic
    assert op.mode == mode
    assert op.cycles == cycles


def test_branches_use_branch_penalty() -> None:
    for op in OPCODE_TABLE:
        if op is not None and op.mode == AddressingMode.RELATIVE:
            assert op.penalty == CyclePenalty.BRANCH
            assert op.cycles == 2


def test_stores_never_pay_page_cross_penalty() -> None:
    for op in OPCODE_TABLE:
        if op is not None and op.mnemonic in ("STA", "STX", "STY"):
            assert op.penalty == CyclePenalty.NONE


def test_lookup_masks_byte() -> None:
    assert lookup(0x1A9) is lookup(0xA9)
