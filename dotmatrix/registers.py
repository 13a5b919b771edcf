"""CPU register names, status flags and the result of executing an instruction."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Register8(enum.Enum):
    """An 8-bit CPU register."""

    A = "a"
    B = "b"
    C = "c"
    D = "d"
    E = "e"
    H = "h"
    L = "l"

    def __str__(self) -> str:
        return self.value


class Register16(enum.Enum):
    """A 16-bit register or register pair."""

    BC = "bc"
    DE = "de"
    HL = "hl"
    SP = "sp"
    AF = "af"
    PC = "pc"

    def __str__(self) -> str:
        return self.value


class Flags(enum.IntFlag):
    """The bits of the flag register; unnamed bits are kept as given."""

    ZERO = 0b1000_0000
    NEGATIVE = 0b0100_0000
    HALF_CARRY = 0b0010_0000
    CARRY = 0b0001_0000


class Flag(enum.Enum):
    """A single named status flag, as used in jump conditions."""

    ZERO = "z"
    NEGATIVE = "n"
    HALF_CARRY = "h"
    CARRY = "c"

    @property
    def mask(self) -> Flags:
        return Flags[self.name]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OpResult:
    """Cycles taken by an instruction and the memory writes it asks for.

    ``writes`` holds ``(address, value)`` pairs, applied in order.
    """

    cycles: int
    writes: tuple[tuple[int, int], ...] = ()

    def add_cycles(self, cycles: int) -> OpResult:
        return OpResult(self.cycles + cycles, self.writes)


def write8(address: int, value: int, cycles: int) -> OpResult:
    """A result that writes one byte."""
    return OpResult(cycles, ((address, value),))


def write16(address: int, value: int, cycles: int) -> OpResult:
    """A result that writes a 16-bit value, low byte first."""
    low = value & 0xFF
    high = (value >> 8) & 0xFF
    return OpResult(cycles, ((address, low), ((address + 1) & 0xFFFF, high)))