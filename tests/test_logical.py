from tiny6502.core.types import Flag


def test_and_immediate(cpu, load_program) -> None:
    load_program(cpu, [0x29, 0x0F])
    cpu.a = 0xF3

    assert cpu.step() == 2
    assert cpu.a == 0x03
    assert not cpu.is_flag_set(Flag.Z)
    assert not cpu.is_flag_set(Flag.N)


def test_and_to_zero_sets_z(cpu, load_program) -> None:
    load_program(cpu, [0x29, 0x00])
    cpu.a = 0xFF

    cpu.step()
    assert cpu.a == 0
    assert cpu.is_flag_set(Flag.Z)


def test_ora_zero_page(cpu, load_program) -> None:
    load_program(cpu, [0x05, 0x10])
    cpu.write_byte(0x10, 0x80)
    cpu.a = 0x01

    assert cpu.step() == 3
    assert cpu.a == 0x81
    assert cpu.is_flag_set(Flag.N)


def test_eor_indexed_indirect(cpu, load_program) -> None:
    load_program(cpu, [0x41, 0x20])
    cpu.x = 0x04
    cpu.write_word(0x24, 0x0300)
    cpu.write_byte(0x0300, 0xFF)
    cpu.a = 0xFF

    assert cpu.step() == 6
    assert cpu.a == 0x00
    assert cpu.is_flag_set(Flag.Z)


def test_bit_copies_bits_7_and_6(cpu, load_program) -> None:
    load_program(cpu, [0x24, 0x10])
    cpu.write_byte(0x10, 0xC0)
    cpu.a = 0x01

    assert cpu.step() == 3
    assert cpu.is_flag_set(Flag.N)
    assert cpu.is_flag_set(Flag.V)
    assert cpu.is_flag_set(Flag.Z)
    assert cpu.a == 0x01


def test_bit_absolute_clears_n_v(cpu, load_program) -> None:
    load_program(cpu, [0x2C, 0x00, 0x20])
    cpu.write_byte(0x2000, 0x01)
    cpu.set_flag(Flag.N | Flag.V)
    cpu.a = 0x01

    assert cpu.step() == 4
    assert not cpu.is_flag_set(Flag.N)
    assert not cpu.is_flag_set(Flag.V)
    assert not cpu.is_flag_set(Flag.Z)
