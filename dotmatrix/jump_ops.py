"""Jump, call, return and restart instructions and their decoding."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Optional, Union

from dotmatrix.operands import (
    FixedAddress,
    RelativeAddress,
    fixed_address,
    relative_address,
)
from dotmatrix.registers import Flag


@dataclass(frozen=True)
class HlLocation:
    """A jump to the address held in register pair hl."""

    def __str__(self) -> str:
        return "hl"


Location = Union[FixedAddress, RelativeAddress, HlLocation]


@dataclass(frozen=True)
class Condition:
    """Taken when ``flag`` is set (``value`` true) or clear (``value`` false)."""

    flag: Flag
    value: bool

    def __str__(self) -> str:
        return f"{'' if self.value else 'n'}{self.flag}"


def _with_separator(condition: Optional[Condition]) -> str:
    return "" if condition is None else f"{condition}, "


@dataclass(frozen=True)
class Jump:
    condition: Optional[Condition]
    location: Location

    def __str__(self) -> str:
        return f"jp {_with_separator(self.condition)}{self.location}"


@dataclass(frozen=True)
class Call:
    condition: Optional[Condition]
    location: Location

    def __str__(self) -> str:
        return f"call {_with_separator(self.condition)}{self.location}"


@dataclass(frozen=True)
class Return:
    condition: Optional[Condition] = None

    def __str__(self) -> str:
        return "ret" if self.condition is None else f"ret {self.condition}"


@dataclass(frozen=True)
class ReturnAndEnableInterrupts:
    def __str__(self) -> str:
        return "reti"


@dataclass(frozen=True)
class Restart:
    address: int

    def __str__(self) -> str:
        return f"rst ${self.address:2x}"


JumpInstruction = Union[Jump, Call, Return, ReturnAndEnableInterrupts, Restart]

_NZ = Condition(Flag.ZERO, False)
_Z = Condition(Flag.ZERO, True)
_NC = Condition(Flag.CARRY, False)
_C = Condition(Flag.CARRY, True)


def _static_table() -> dict[int, JumpInstruction]:
    table: dict[int, JumpInstruction] = {
        0xC9: Return(None),
        0xC0: Return(_NZ),
        0xC8: Return(_Z),
        0xD0: Return(_NC),
        0xD8: Return(_C),
        0xD9: ReturnAndEnableInterrupts(),
        0xE9: Jump(None, HlLocation()),
    }
    for index in range(8):
        table[0xC7 + (index << 3)] = Restart(index << 3)
    return table


def _immediate_table() -> dict[int, Callable[[Iterator[int]], JumpInstruction]]:
    table: dict[int, Callable[[Iterator[int]], JumpInstruction]] = {}
    for op, condition in ((0x18, None), (0x20, _NZ), (0x28, _Z), (0x30, _NC), (0x38, _C)):
        table[op] = lambda ops, condition=condition: Jump(condition, relative_address(ops))
    for op, condition in ((0xC3, None), (0xC2, _NZ), (0xCA, _Z), (0xD2, _NC), (0xDA, _C)):
        table[op] = lambda ops, condition=condition: Jump(condition, fixed_address(ops))
    for op, condition in ((0xCD, None), (0xC4, _NZ), (0xCC, _Z), (0xD4, _NC), (0xDC, _C)):
        table[op] = lambda ops, condition=condition: Call(condition, fixed_address(ops))
    return table


_STATIC = _static_table()
_IMMEDIATE = _immediate_table()


def decode_jump(op: int, ops: Iterator[int]) -> JumpInstruction | None:
    """Decode a control-flow opcode, reading operands from ``ops``; None if not one."""
    if op in _STATIC:
        return _STATIC[op]
    factory = _IMMEDIATE.get(op)
    return factory(ops) if factory else None