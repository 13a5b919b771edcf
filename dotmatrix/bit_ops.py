"""Single-bit test, set and reset instructions from the 0xcb-prefixed range."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from dotmatrix.operands import Dereference, Source8, Target8
from dotmatrix.registers import Register8, Register16


@dataclass(frozen=True)
class BitCheck:
    """Set the zero flag from one bit of a source."""

    bit: int
    source: Source8

    def __str__(self) -> str:
        return f"bit {self.bit}, {self.source}"


@dataclass(frozen=True)
class BitSet:
    """Set one bit of a target."""

    bit: int
    target: Target8

    def __str__(self) -> str:
        return f"set {self.bit}, {self.target}"


@dataclass(frozen=True)
class BitReset:
    """Clear one bit of a target."""

    bit: int
    target: Target8

    def __str__(self) -> str:
        return f"res {self.bit}, {self.target}"


BitFlag = Union[BitCheck, BitSet, BitReset]

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

# Each kind covers 64 opcodes: eight bits times eight operands.
_KINDS = ((0x40, BitCheck), (0x80, BitReset), (0xC0, BitSet))

_TABLE: dict[int, BitFlag] = {
    base + (bit << 3) + index: kind(bit, operand)
    for base, kind in _KINDS
    for bit in range(8)
    for index, operand in enumerate(_OPERANDS8)
}


def decode_bit(op: int) -> BitFlag:
    """Decode the byte after a 0xcb prefix in the range 0x40-0xff."""
    try:
        return _TABLE[op]
    except KeyError:
        raise ValueError(f"not a bit opcode: {op:#04x}") from None