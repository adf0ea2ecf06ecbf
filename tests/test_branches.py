import pytest

from tiny6502.core.types import Flag

# (opcode, flag, branch taken when flag is set)
BRANCHES = [
    (0x10, Flag.N, False),
    (0x30, Flag.N, True),
    (0x50, Flag.V, False),
    (0x70, Flag.V, True),
    (0x90, Flag.C, False),
    (0xB0, Flag.C, True),
    (0xD0, Flag.Z, False),
    (0xF0, Flag.Z, True),
]


@pytest.mark.parametrize("opcode, flag, when_set", BRANCHES)
def test_branch_not_taken(cpu, load_program, opcode, flag, when_set) -> None:
    load_program(cpu, [opcode, 0x10])
    if when_set:
        cpu.clear_flag(flag)
    else:
        cpu.set_flag(flag)

    assert cpu.step() == 2
    assert cpu.pc == 0x0602


@pytest.mark.parametrize("opcode, flag, when_set", BRANCHES)
def test_branch_taken_same_page(cpu, load_program, opcode, flag, when_set) -> None:
    load_program(cpu, [opcode, 0x10])
    if when_set:
        cpu.set_flag(flag)
    else:
        cpu.clear_flag(flag)

    assert cpu.step() == 3
    assert cpu.pc == 0x0612


def test_bne_backward_across_page(cpu, load_program) -> None:
    load_program(cpu, [0xD0, 0xFC], start=0x0600)
    cpu.clear_flag(Flag.Z)

    assert cpu.step() == 4
    assert cpu.pc == 0x05FE


def test_beq_forward_across_page(cpu, load_program) -> None:
    load_program(cpu, [0xF0, 0x10], start=0x06F0)
    cpu.set_flag(Flag.Z)

    assert cpu.step() == 4
    assert cpu.pc == 0x0702


def test_branch_to_itself(cpu, load_program) -> None:
    load_program(cpu, [0xD0, 0xFE])

    assert cpu.step() == 3
    assert cpu.pc == 0x0600


def test_countdown_loop(cpu, load_program) -> None:
    # LDX #3 / loop: DEX / BNE loop
    load_program(cpu, [0xA2, 0x03, 0xCA, 0xD0, 0xFD])

    total = 0
    for _ in range(7):
        total += cpu.step()

    assert cpu.x == 0
    assert cpu.pc == 0x0605
    assert total == 2 + (2 + 3) * 2 + 2 + 2
