import pytest

from dotmatrix.jump_ops import (
    Call,
    Condition,
    HlLocation,
    Jump,
    Restart,
    Return,
    ReturnAndEnableInterrupts,
    decode_jump,
)
from dotmatrix.operands import (
    FixedAddress,
    IncompleteInstruction,
    fixed_address,
    relative_address,
)
from dotmatrix.registers import Flag

NZ = Condition(Flag.ZERO, False)
Z = Condition(Flag.ZERO, True)
NC = Condition(Flag.CARRY, False)
C = Condition(Flag.CARRY, True)


@pytest.mark.parametrize(
    "op, expected",
    [
        (0xC9, Return(None)),
        (0xC0, Return(NZ)),
        (0xC8, Return(Z)),
        (0xD0, Return(NC)),
        (0xD8, Return(C)),
        (0xD9, ReturnAndEnableInterrupts()),
        (0xE9, Jump(None, HlLocation())),
        (0xC7, Restart(0x00)),
        (0xCF, Restart(0x08)),
        (0xD7, Restart(0x10)),
        (0xDF, Restart(0x18)),
        (0xE7, Restart(0x20)),
        (0xEF, Restart(0x28)),
        (0xF7, Restart(0x30)),
        (0xFF, Restart(0x38)),
    ],
)
def test_decode_without_operands(op, expected):
    assert decode_jump(op, iter(())) == expected


@pytest.mark.parametrize(
    "op, condition", [(0x18, None), (0x20, NZ), (0x28, Z), (0x30, NC), (0x38, C)]
)
def test_decode_relative_jumps(op, condition):
    ops = iter([0xFE, 0x11])
    expected = Jump(condition, relative_address(iter([0xFE])))
    assert decode_jump(op, ops) == expected
    assert next(ops) == 0x11


@pytest.mark.parametrize(
    "op, cls, condition",
    [
        (0xC3, Jump, None),
        (0xC2, Jump, NZ),
        (0xCA, Jump, Z),
        (0xD2, Jump, NC),
        (0xDA, Jump, C),
        (0xCD, Call, None),
        (0xC4, Call, NZ),
        (0xCC, Call, Z),
        (0xD4, Call, NC),
        (0xDC, Call, C),
    ],
)
def test_decode_fixed_targets(op, cls, condition):
    ops = iter([0x34, 0x12, 0x77])
    expected = cls(condition, fixed_address(iter([0x34, 0x12])))
    assert decode_jump(op, ops) == expected
    assert next(ops) == 0x77


@pytest.mark.parametrize("op", [0x18, 0x20, 0xC3, 0xCD, 0xDC])
def test_truncated_operands_raise(op):
    with pytest.raises(IncompleteInstruction):
        decode_jump(op, iter(()))


@pytest.mark.parametrize("op", [0x00, 0x76, 0x80, 0xC1])
def test_non_jump_returns_none(op):
    assert decode_jump(op, iter([0, 0])) is None


def test_display():
    assert str(ReturnAndEnableInterrupts()) == "reti"
    assert str(HlLocation()) == "hl"
    assert str(Return(None)) == "ret"
    assert str(Restart(0x38)) == "rst $38"
    assert str(Condition(Flag.CARRY, False)) == "nc"
    assert str(Call(Z, FixedAddress(0x1234))) == "call z, $1234"


def test_conditioned_display_starts_with_condition():
    assert str(Jump(NZ, HlLocation())).startswith(f"jp {NZ}, ")
    assert str(Return(C)).endswith(str(C))