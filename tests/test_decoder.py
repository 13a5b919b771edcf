import pytest

from dotmatrix.arithmetic_ops import Arithmetic8, Arithmetic8Kind
from dotmatrix.bit_ops import BitCheck
from dotmatrix.bitwise_ops import Bitwise, BitwiseKind, ComplementA
from dotmatrix.decoder import (
    DecimalAdjustAccumulator,
    Invalid,
    NoOperation,
    Stop,
    decode,
)
from dotmatrix.jump_ops import Jump
from dotmatrix.load_ops import Load8, Load16
from dotmatrix.misc_ops import AdjustStack, CarryFlag, InterruptInstruction, Push
from dotmatrix.operands import (
    Constant8,
    Constant16,
    IncompleteInstruction,
    RelativeAddress,
)
from dotmatrix.registers import Register8, Register16
from dotmatrix.shift_ops import Carry, Direction, RotateA, Swap

_INVALID_OPCODES = {0xD3, 0xDB, 0xDD, 0xE3, 0xE4, 0xEB, 0xEC, 0xED, 0xF4, 0xFC, 0xFD}


@pytest.mark.parametrize(
    "op, expected",
    [
        (0x00, NoOperation()),
        (0x10, Stop()),
        (0x27, DecimalAdjustAccumulator()),
        (0x07, RotateA(Direction.LEFT, Carry.SET_ONLY)),
        (0x17, RotateA(Direction.LEFT, Carry.THROUGH)),
        (0x0F, RotateA(Direction.RIGHT, Carry.SET_ONLY)),
        (0x1F, RotateA(Direction.RIGHT, Carry.THROUGH)),
        (0x37, CarryFlag.SET),
        (0x3F, CarryFlag.COMPLEMENT),
        (0x76, InterruptInstruction.AWAIT),
        (0xF3, InterruptInstruction.DISABLE),
        (0xFB, InterruptInstruction.ENABLE),
        (0x2F, ComplementA()),
        (0xAF, Bitwise(BitwiseKind.XOR, Register8.A)),
        (0xC5, Push(Register16.BC)),
    ],
)
def test_single_byte_opcodes(op, expected):
    assert decode(iter([op])) == expected


def test_load_with_immediate():
    assert decode(iter([0x3E, 0x42])) == Load8(Register8.A, Constant8(0x42))


def test_immediate_arithmetic():
    assert decode(iter([0xFE, 0x10])) == Arithmetic8(
        Arithmetic8Kind.COMPARE_A, Constant8(0x10)
    )


def test_relative_jump():
    assert decode(iter([0x18, 0x05])) == Jump(None, RelativeAddress(5))


def test_adjust_stack():
    assert decode(iter([0xE8, 0x05])) == AdjustStack(5)


def test_prefixed_bit_check():
    assert decode(iter([0xCB, 0x7C])) == BitCheck(7, Register8.H)


def test_prefixed_swap():
    assert decode(iter([0xCB, 0x37])) == Swap(Register8.A)


def test_stream_is_consumed_one_instruction_at_a_time():
    ops = iter([0x01, 0x34, 0x12, 0x00])
    assert decode(ops) == Load16(Register16.BC, Constant16(0x1234))
    assert decode(ops) == NoOperation()
    assert decode(ops) is None


def test_empty_stream_gives_none():
    assert decode(iter([])) is None


def test_prefix_without_suffix_raises():
    with pytest.raises(IncompleteInstruction):
        decode(iter([0xCB]))


def test_truncated_operand_raises():
    with pytest.raises(IncompleteInstruction):
        decode(iter([0xC3, 0x00]))


def test_only_documented_holes_are_invalid():
    invalid = {
        op
        for op in range(0x100)
        if isinstance(decode(iter([op, 0x00, 0x00])), Invalid)
    }
    assert invalid == _INVALID_OPCODES


def test_invalid_keeps_opcode():
    assert decode(iter([0xD3])) == Invalid(0xD3)


def test_display_of_simple_instructions():
    assert str(decode(iter([0x00]))) == "nop"
    assert str(decode(iter([0x27]))) == "daa"
    assert str(decode(iter([0x10]))) == "stop"


def test_display_of_invalid():
    assert str(Invalid(0xD3)) == "Invalid op d3"