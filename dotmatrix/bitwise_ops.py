"""Bitwise instructions on register a and their decoding."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from dotmatrix.operands import Dereference, Source8, constant8
from dotmatrix.registers import Register8, Register16


class BitwiseKind(enum.Enum):
    """The logical operation combining register a with a source."""

    AND = "and"
    OR = "or"
    XOR = "xor"


@dataclass(frozen=True)
class Bitwise:
    """A logical operation of register a with a source, stored back in a."""

    kind: BitwiseKind
    source: Source8

    def __str__(self) -> str:
        return f"{self.kind.value} a, {self.source}"


@dataclass(frozen=True)
class ComplementA:
    """Invert every bit of register a."""

    def __str__(self) -> str:
        return "cpl"


BitwiseInstruction = Union[Bitwise, ComplementA]

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
_COMPLEMENT_A = 0x2F
_BASES = ((0xA0, BitwiseKind.AND), (0xA8, BitwiseKind.XOR), (0xB0, BitwiseKind.OR))
_IMMEDIATE = {0xE6: BitwiseKind.AND, 0xF6: BitwiseKind.OR, 0xEE: BitwiseKind.XOR}

_STATIC: dict[int, BitwiseInstruction] = {
    base + index: Bitwise(kind, source)
    for base, kind in _BASES
    for index, source in enumerate(_OPERANDS8)
}
_STATIC[_COMPLEMENT_A] = ComplementA()


def decode_bitwise(op: int, ops: Iterator[int]) -> BitwiseInstruction | None:
    """Decode a bitwise opcode, reading operands from ``ops``; None if not one."""
    if op in _STATIC:
        return _STATIC[op]
    kind = _IMMEDIATE.get(op)
    if kind is None:
        return None
    return Bitwise(kind, constant8(ops))