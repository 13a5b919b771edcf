"""Decoding of a byte stream into CPU instructions."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Union

from dotmatrix.arithmetic_ops import Arithmetic, decode_arithmetic
from dotmatrix.bit_ops import BitFlag, decode_bit
from dotmatrix.bitwise_ops import BitwiseInstruction, decode_bitwise
from dotmatrix.jump_ops import JumpInstruction, decode_jump
from dotmatrix.load_ops import Load, decode_load
from dotmatrix.misc_ops import (
    CarryFlag,
    InterruptInstruction,
    StackInstruction,
    decode_stack,
)
from dotmatrix.operands import IncompleteInstruction
from dotmatrix.shift_ops import BitShift, Carry, Direction, RotateA, decode_shift


@dataclass(frozen=True)
class NoOperation:
    def __str__(self) -> str:
        return "nop"


@dataclass(frozen=True)
class Stop:
    def __str__(self) -> str:
        return "stop"


@dataclass(frozen=True)
class DecimalAdjustAccumulator:
    def __str__(self) -> str:
        return "daa"


@dataclass(frozen=True)
class Invalid:
    """An opcode that does not name any instruction."""

    op: int

    def __str__(self) -> str:
        return f"Invalid op {self.op:02x}"


Instruction = Union[
    Load,
    Arithmetic,
    BitwiseInstruction,
    BitFlag,
    BitShift,
    JumpInstruction,
    CarryFlag,
    StackInstruction,
    InterruptInstruction,
    DecimalAdjustAccumulator,
    NoOperation,
    Stop,
    Invalid,
]

_PREFIX = 0xCB
_FIRST_BIT_OP = 0x40

_SINGLE_BYTE: dict[int, Instruction] = {
    0x00: NoOperation(),
    0x10: Stop(),
    0x07: RotateA(Direction.LEFT, Carry.SET_ONLY),
    0x17: RotateA(Direction.LEFT, Carry.THROUGH),
    0x0F: RotateA(Direction.RIGHT, Carry.SET_ONLY),
    0x1F: RotateA(Direction.RIGHT, Carry.THROUGH),
    0x27: DecimalAdjustAccumulator(),
    0x37: CarryFlag.SET,
    0x3F: CarryFlag.COMPLEMENT,
    0x76: InterruptInstruction.AWAIT,
    0xF3: InterruptInstruction.DISABLE,
    0xFB: InterruptInstruction.ENABLE,
}

_DECODERS = (decode_load, decode_arithmetic, decode_bitwise, decode_jump, decode_stack)


def decode(ops: Iterable[int]) -> Optional[Instruction]:
    """Decode the next instruction from ``ops``.

    Returns None when the stream is already exhausted; raises
    IncompleteInstruction when it ends inside an instruction.
    """
    ops = iter(ops)
    op = next(ops, None)
    if op is None:
        return None

    if op in _SINGLE_BYTE:
        return _SINGLE_BYTE[op]

    if op == _PREFIX:
        try:
            suffix = next(ops)
        except StopIteration:
            raise IncompleteInstruction("byte stream ended after 0xcb prefix") from None
        return decode_shift(suffix) if suffix < _FIRST_BIT_OP else decode_bit(suffix)

    for decoder in _DECODERS:
        instruction = decoder(op, ops)
        if instruction is not None:
            return instruction
    return Invalid(op)