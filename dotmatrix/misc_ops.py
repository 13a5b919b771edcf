"""Carry flag, interrupt and stack instructions."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

from dotmatrix.operands import IncompleteInstruction
from dotmatrix.registers import Register16


class CarryFlag(enum.Enum):
    COMPLEMENT = "ccf"
    SET = "scf"

    def __str__(self) -> str:
        return self.value


class InterruptInstruction(enum.Enum):
    ENABLE = "ei"
    DISABLE = "di"
    AWAIT = "halt"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Push:
    register: Register16

    def __str__(self) -> str:
        return f"push {self.register}"


@dataclass(frozen=True)
class Pop:
    register: Register16

    def __str__(self) -> str:
        return f"pop {self.register}"


@dataclass(frozen=True)
class AdjustStack:
    offset: int

    def __str__(self) -> str:
        return f"add sp, {self.offset}"


StackInstruction = Push | Pop | AdjustStack

_PAIRS = (Register16.BC, Register16.DE, Register16.HL, Register16.AF)
_STACK_OPS: dict[int, StackInstruction] = {
    **{0xC1 + (i << 4): Pop(register) for i, register in enumerate(_PAIRS)},
    **{0xC5 + (i << 4): Push(register) for i, register in enumerate(_PAIRS)},
}
_ADJUST_STACK = 0xE8


def _signed_byte(ops: Iterator[int]) -> int:
    try:
        byte = next(ops)
    except StopIteration:
        raise IncompleteInstruction("byte stream ended inside an instruction") from None
    return byte - 0x100 if byte >= 0x80 else byte


def decode_stack(op: int, ops: Iterator[int]) -> StackInstruction | None:
    """Decode a stack opcode, reading operands from ``ops``; None if not one."""
    if op == _ADJUST_STACK:
        return AdjustStack(_signed_byte(ops))
    return _STACK_OPS.get(op)