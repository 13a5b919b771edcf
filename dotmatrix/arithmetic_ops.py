"""8-bit and 16-bit arithmetic instructions and their decoding."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from dotmatrix.operands import Dereference, Source8, Target8, constant8
from dotmatrix.registers import Register8, Register16


class Arithmetic8Kind(enum.Enum):
    """The operation of an 8-bit arithmetic instruction."""

    INCREMENT = "inc"
    DECREMENT = "dec"
    ADD_A = "add a,"
    SUBTRACT_A = "sub a,"
    ADD_A_CARRY = "adc a,"
    SUBTRACT_A_CARRY = "sbc a,"
    COMPARE_A = "cp a,"


@dataclass(frozen=True)
class Arithmetic8:
    """An 8-bit arithmetic instruction.

    For increment and decrement the operand is a target; otherwise it is
    the source combined with register a.
    """

    kind: Arithmetic8Kind
    operand: Union[Source8, Target8]

    def __str__(self) -> str:
        return f"{self.kind.value} {self.operand}"


class Arithmetic16Kind(enum.Enum):
    """The operation of a 16-bit arithmetic instruction."""

    INCREMENT = "inc"
    DECREMENT = "dec"
    ADD_HL = "add hl,"


@dataclass(frozen=True)
class Arithmetic16:
    """A 16-bit arithmetic instruction on a register pair."""

    kind: Arithmetic16Kind
    register: Register16

    def __str__(self) -> str:
        return f"{self.kind.value} {self.register}"


Arithmetic = Union[Arithmetic8, Arithmetic16]

# Operand order used by the opcode encoding: b, c, d, e, h, l, [hl], a.
_OPERANDS8 = (
    Register8.B,
    Register8.C,
    Register8.D,
    Register8.E,
    Register8.H,
    Register8.L,
    Dereference(Register16.HL),
    Register8.A,
)
_PAIRS = (Register16.BC, Register16.DE, Register16.HL, Register16.SP)

_REGISTER_OPS = (
    (0x80, Arithmetic8Kind.ADD_A),
    (0x88, Arithmetic8Kind.ADD_A_CARRY),
    (0x90, Arithmetic8Kind.SUBTRACT_A),
    (0x98, Arithmetic8Kind.SUBTRACT_A_CARRY),
    (0xB8, Arithmetic8Kind.COMPARE_A),
)

# 0xce is decoded as a plain add, matching the instruction table this follows.
_IMMEDIATE = {
    0xC6: Arithmetic8Kind.ADD_A,
    0xD6: Arithmetic8Kind.SUBTRACT_A,
    0xCE: Arithmetic8Kind.ADD_A,
    0xDE: Arithmetic8Kind.SUBTRACT_A_CARRY,
    0xFE: Arithmetic8Kind.COMPARE_A,
}


def _static_table() -> dict[int, Arithmetic]:
    table: dict[int, Arithmetic] = {}
    for index, operand in enumerate(_OPERANDS8):
        table[0x04 + (index << 3)] = Arithmetic8(Arithmetic8Kind.INCREMENT, operand)
        table[0x05 + (index << 3)] = Arithmetic8(Arithmetic8Kind.DECREMENT, operand)
        for base, kind in _REGISTER_OPS:
            table[base + index] = Arithmetic8(kind, operand)
    for index, register in enumerate(_PAIRS):
        table[0x03 + (index << 4)] = Arithmetic16(Arithmetic16Kind.INCREMENT, register)
        table[0x09 + (index << 4)] = Arithmetic16(Arithmetic16Kind.ADD_HL, register)
        table[0x0B + (index << 4)] = Arithmetic16(Arithmetic16Kind.DECREMENT, register)
    return table


_STATIC = _static_table()


def decode_arithmetic(op: int, ops: Iterator[int]) -> Arithmetic | None:
    """Decode an arithmetic opcode, reading operands from ``ops``; None if not one."""
    if op in _STATIC:
        return _STATIC[op]
    kind = _IMMEDIATE.get(op)
    if kind is None:
        return None
    return Arithmetic8(kind, constant8(ops))