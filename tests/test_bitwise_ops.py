import pytest

from dotmatrix.arithmetic_ops import decode_arithmetic
from dotmatrix.bitwise_ops import Bitwise, BitwiseKind, ComplementA, decode_bitwise
from dotmatrix.operands import Constant8, Dereference, IncompleteInstruction
from dotmatrix.registers import Register8, Register16


@pytest.mark.parametrize(
    "op, expected",
    [
        (0x2F, ComplementA()),
        (0xA0, Bitwise(BitwiseKind.AND, Register8.B)),
        (0xA7, Bitwise(BitwiseKind.AND, Register8.A)),
        (0xB7, Bitwise(BitwiseKind.OR, Register8.A)),
        (0xB3, Bitwise(BitwiseKind.OR, Register8.E)),
        (0xAE, Bitwise(BitwiseKind.XOR, Dereference(Register16.HL))),
        (0xA9, Bitwise(BitwiseKind.XOR, Register8.C)),
        (0xB6, Bitwise(BitwiseKind.OR, Dereference(Register16.HL))),
    ],
)
def test_decode_register_forms(op, expected):
    assert decode_bitwise(op, iter(())) == expected


@pytest.mark.parametrize(
    "op, kind",
    [(0xE6, BitwiseKind.AND), (0xF6, BitwiseKind.OR), (0xEE, BitwiseKind.XOR)],
)
def test_decode_immediate_forms(op, kind):
    ops = iter([0x0F, 0x33])
    assert decode_bitwise(op, ops) == Bitwise(kind, Constant8(0x0F))
    assert next(ops) == 0x33


@pytest.mark.parametrize("op", [0xE6, 0xF6, 0xEE])
def test_truncated_immediate_raises(op):
    with pytest.raises(IncompleteInstruction):
        decode_bitwise(op, iter(()))


@pytest.mark.parametrize("op", [0x00, 0x80, 0xB8, 0xC3])
def test_non_bitwise_returns_none(op):
    assert decode_bitwise(op, iter([0])) is None


def test_opcodes_disjoint_from_arithmetic():
    overlapping = [
        op
        for op in range(0x100)
        if decode_bitwise(op, iter([0, 0])) is not None
        and decode_arithmetic(op, iter([0, 0])) is not None
    ]
    assert overlapping == []


def test_display():
    assert str(ComplementA()) == "cpl"
    assert str(Bitwise(BitwiseKind.XOR, Register8.A)) == "xor a, a"