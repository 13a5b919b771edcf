import pytest

from dotmatrix.registers import (
    Flag,
    Flags,
    OpResult,
    Register8,
    Register16,
    write8,
    write16,
)


def test_register_names():
    assert str(Register8(Register8.A.value)) == "a"
    assert str(Register16(Register16.SP.value)) == "sp"
    assert str(Register16(Register16.PC.value)) == "pc"


@pytest.mark.parametrize("flag", list(Flag))
def test_flag_mask_matches_flags(flag):
    assert Flags(int(flag.mask)) == Flags[flag.name]


def test_flag_display_and_bits():
    assert str(Flag(Flag.CARRY.value)) == "c"
    assert Flags(0b1000_0000) == Flags.ZERO
    assert Flags(0b0001_0000) == Flags.CARRY


def test_flags_retain_unnamed_bits():
    assert int(Flags(0x0F)) == 0x0F
    combined = Flags.ZERO | Flags.CARRY
    assert Flags.ZERO in combined
    assert Flags.NEGATIVE not in combined


def test_add_cycles_preserves_writes():
    base = write8(0xC000, 0x12, 3)
    later = base.add_cycles(2)
    assert later.cycles == base.cycles + 2
    assert later.writes == base.writes


def test_plain_result_has_no_writes():
    assert OpResult(1).writes == ()


def test_write8_records_single_write():
    result = write8(0xC000, 0x12, 3)
    assert result.writes == ((0xC000, 0x12),)
    assert result.cycles == 3


@pytest.mark.parametrize("value", [0x0000, 0x1234, 0xFFFF, 0x00FF])
def test_write16_is_little_endian(value):
    result = write16(0xC000, value, 2)
    (addr_low, low), (addr_high, high) = result.writes
    assert addr_low == 0xC000
    assert addr_high - addr_low == 1
    assert low | (high << 8) == value