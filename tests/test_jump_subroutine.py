from tiny6502.core.types import Flag


def test_jmp_absolute(cpu, load_program) -> None:
    load_program(cpu, [0x4C, 0x00, 0xC0])

    assert cpu.step() == 3
    assert cpu.pc == 0xC000


def test_jmp_indirect(cpu, load_program) -> None:
    load_program(cpu, [0x6C, 0x00, 0x30])
    cpu.write_word(0x3000, 0x1234)

    assert cpu.step() == 5
    assert cpu.pc == 0x1234


def test_jmp_indirect_page_wrap_bug(cpu, load_program) -> None:
    load_program(cpu, [0x6C, 0xFF, 0x30])
    cpu.write_byte(0x30FF, 0x80)
    cpu.write_byte(0x3000, 0x50)
    cpu.write_byte(0x3100, 0x40)

    cpu.step()
    assert cpu.pc == 0x5080


def test_jsr_pushes_return_address_minus_one(cpu, load_program) -> None:
    load_program(cpu, [0x20, 0x00, 0x10])

    assert cpu.step() == 6
    assert cpu.pc == 0x1000
    assert cpu.sp == 0xFB
    assert cpu.read_byte(0x01FD) == 0x06
    assert cpu.read_byte(0x01FC) == 0x02


def test_jsr_then_rts_returns_after_call(cpu, load_program) -> None:
    load_program(cpu, [0x20, 0x00, 0x10, 0xEA])
    cpu.write_byte(0x1000, 0x60)

    cpu.step()
    assert cpu.step() == 6
    assert cpu.pc == 0x0603
    assert cpu.sp == 0xFD


def test_brk_pushes_state_and_jumps_through_vector(cpu, load_program) -> None:
    load_program(cpu, [0x00, 0xEA])
    cpu.write_word(0xFFFE, 0x8000)
    cpu.p = 0x20 | Flag.C

    assert cpu.step() == 7
    assert cpu.pc == 0x8000
    assert cpu.sp == 0xFA
    assert cpu.read_byte(0x01FD) == 0x06
    assert cpu.read_byte(0x01FC) == 0x02
    assert cpu.read_byte(0x01FB) == 0x20 | Flag.B | Flag.C
    assert cpu.is_flag_set(Flag.I)
    assert not cpu.is_flag_set(Flag.B)


def test_brk_then_rti_resumes_after_padding(cpu, load_program) -> None:
    load_program(cpu, [0x00, 0xEA, 0xEA])
    cpu.write_word(0xFFFE, 0x8000)
    cpu.write_byte(0x8000, 0x40)
    cpu.p = 0x20 | Flag.C

    cpu.step()
    assert cpu.step() == 6
    assert cpu.pc == 0x0602
    assert cpu.sp == 0xFD
    assert cpu.p == 0x21


def test_rti_clears_break_and_keeps_unused(cpu, load_program) -> None:
    load_program(cpu, [0x40])
    cpu.sp = 0xFA
    cpu.write_byte(0x01FB, 0xDF)
    cpu.write_word(0x01FC, 0x1234)

    cpu.step()
    assert cpu.p == 0xEF
    assert cpu.pc == 0x1234
    assert cpu.sp == 0xFD


def test_nop_only_advances_pc(cpu, load_program) -> None:
    load_program(cpu, [0xEA])
    before = cpu.get_snapshot()

    assert cpu.step() == 2
    assert cpu.pc == 0x0601
    assert (cpu.a, cpu.x, cpu.y, cpu.sp, cpu.p) == (
        before["a"], before["x"], before["y"], before["sp"], before["p"],
    )
