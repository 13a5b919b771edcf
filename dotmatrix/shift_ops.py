"""Rotate, shift and swap instructions and their decoding."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from dotmatrix.operands import Dereference, Target8
from dotmatrix.registers import Register8, Register16


class Direction(enum.Enum):
    LEFT = "l"
    RIGHT = "r"

    def __str__(self) -> str:
        return self.value


class Carry(enum.Enum):
    """Whether a rotation goes through the carry flag or only sets it."""

    THROUGH = ""
    SET_ONLY = "c"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RotateA:
    """The short, unprefixed rotation of register a."""

    direction: Direction
    carry: Carry

    def __str__(self) -> str:
        return f"r{self.direction}{self.carry}a"


@dataclass(frozen=True)
class Rotate:
    direction: Direction
    carry: Carry
    target: Target8

    def __str__(self) -> str:
        return f"r{self.direction}{self.carry} {self.target}"


@dataclass(frozen=True)
class ShiftArithmetic:
    direction: Direction
    target: Target8

    def __str__(self) -> str:
        return f"s{self.direction}a {self.target}"


@dataclass(frozen=True)
class ShiftRightLogical:
    target: Target8

    def __str__(self) -> str:
        return f"srl {self.target}"


@dataclass(frozen=True)
class Swap:
    target: Target8

    def __str__(self) -> str:
        return f"swap {self.target}"


BitShift = Union[RotateA, Rotate, ShiftArithmetic, ShiftRightLogical, Swap]

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

# One builder per row of eight opcodes in the 0xcb 0x00-0x3f range.
_ROWS = (
    lambda target: Rotate(Direction.LEFT, Carry.SET_ONLY, target),
    lambda target: Rotate(Direction.RIGHT, Carry.SET_ONLY, target),
    lambda target: Rotate(Direction.LEFT, Carry.THROUGH, target),
    lambda target: Rotate(Direction.RIGHT, Carry.THROUGH, target),
    lambda target: ShiftArithmetic(Direction.LEFT, target),
    lambda target: ShiftArithmetic(Direction.RIGHT, target),
    Swap,
    ShiftRightLogical,
)

_TABLE: dict[int, BitShift] = {
    (row << 3) + index: build(target)
    for row, build in enumerate(_ROWS)
    for index, target in enumerate(_OPERANDS8)
}


def decode_shift(op: int) -> BitShift:
    """Decode the byte after a 0xcb prefix in the range 0x00-0x3f."""
    try:
        return _TABLE[op]
    except KeyError:
        raise ValueError(f"not a shift opcode: {op:#04x}") from None