"""Operands of CPU instructions: addresses, constants and register references."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from dotmatrix.registers import Register8, Register16


class IncompleteInstruction(ValueError):
    """The byte stream ended inside an instruction's operands."""


def _next_byte(ops: Iterator[int]) -> int:
    try:
        return next(ops)
    except StopIteration:
        raise IncompleteInstruction("byte stream ended inside an instruction") from None


def _signed(byte: int) -> int:
    return byte - 0x100 if byte >= 0x80 else byte


def _sign(value: int) -> str:
    return "+" if value >= 0 else "-"


@dataclass(frozen=True)
class FixedAddress:
    address: int

    def __str__(self) -> str:
        return f"${self.address:04x}"


@dataclass(frozen=True)
class RelativeAddress:
    offset: int

    def __str__(self) -> str:
        return f"($pc {_sign(self.offset)} {abs(self.offset)})"


@dataclass(frozen=True)
class HighAddress:
    offset: int

    def __str__(self) -> str:
        return f"($ff00 + {self.offset:02x})"


@dataclass(frozen=True)
class HighPlusC:
    def __str__(self) -> str:
        return "($ff00 + c)"


@dataclass(frozen=True)
class Dereference:
    register: Register16

    def __str__(self) -> str:
        return f"[${self.register}]"


@dataclass(frozen=True)
class DereferenceHlIncrement:
    def __str__(self) -> str:
        return "[$hl+]"


@dataclass(frozen=True)
class DereferenceHlDecrement:
    def __str__(self) -> str:
        return "[$hl-]"


@dataclass(frozen=True)
class Constant8:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Constant16:
    value: int

    def __str__(self) -> str:
        return f"${self.value:04x}"


@dataclass(frozen=True)
class StackPointerOffset:
    offset: int

    def __str__(self) -> str:
        return f"sp {_sign(self.offset)} {abs(self.offset)}"


Address = Union[
    FixedAddress,
    RelativeAddress,
    HighAddress,
    HighPlusC,
    Dereference,
    DereferenceHlIncrement,
    DereferenceHlDecrement,
]
Source8 = Union[Constant8, Register8, Address]
Target8 = Union[Register8, Address]
Source16 = Union[Constant16, Register16, StackPointerOffset]
Target16 = Union[Register16, FixedAddress]


def fixed_address(ops: Iterator[int]) -> FixedAddress:
    """Read a little-endian 16-bit address."""
    low = _next_byte(ops)
    high = _next_byte(ops)
    return FixedAddress(low | (high << 8))


def relative_address(ops: Iterator[int]) -> RelativeAddress:
    """Read a signed 8-bit offset from the program counter."""
    return RelativeAddress(_signed(_next_byte(ops)))


def high_address(ops: Iterator[int]) -> HighAddress:
    """Read an offset into the $ff00 page."""
    return HighAddress(_next_byte(ops))


def constant8(ops: Iterator[int]) -> Constant8:
    """Read an 8-bit immediate value."""
    return Constant8(_next_byte(ops))


def constant16(ops: Iterator[int]) -> Constant16:
    """Read a little-endian 16-bit immediate value."""
    low = _next_byte(ops)
    high = _next_byte(ops)
    return Constant16(low | (high << 8))


def sp_offset(ops: Iterator[int]) -> StackPointerOffset:
    """Read a signed 8-bit offset from the stack pointer."""
    return StackPointerOffset(_signed(_next_byte(ops)))