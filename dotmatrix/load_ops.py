"""Load instructions and their decoding."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from dotmatrix.operands import (
    Dereference,
    DereferenceHlDecrement,
    DereferenceHlIncrement,
    HighAddress,
    HighPlusC,
    Source8,
    Source16,
    Target8,
    Target16,
    constant8,
    constant16,
    fixed_address,
    high_address,
    sp_offset,
)
from dotmatrix.registers import Register8, Register16


@dataclass(frozen=True)
class Load8:
    target: Target8
    source: Source8

    def __str__(self) -> str:
        return f"ld {self.target}, {self.source}"


@dataclass(frozen=True)
class Load16:
    target: Target16
    source: Source16

    def __str__(self) -> str:
        return f"ld {self.target}, {self.source}"


Load = Load8 | Load16

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
_HALT = 0x76


def _static_loads() -> dict[int, Load]:
    table: dict[int, Load] = {
        0x40 + (t << 3) + s: Load8(target, source)
        for t, target in enumerate(_OPERANDS8)
        for s, source in enumerate(_OPERANDS8)
        if 0x40 + (t << 3) + s != _HALT
    }
    a = Register8.A
    table.update(
        {
            0x02: Load8(Dereference(Register16.BC), a),
            0x12: Load8(Dereference(Register16.DE), a),
            0x22: Load8(DereferenceHlIncrement(), a),
            0x32: Load8(DereferenceHlDecrement(), a),
            0x0A: Load8(a, Dereference(Register16.BC)),
            0x1A: Load8(a, Dereference(Register16.DE)),
            0x2A: Load8(a, DereferenceHlIncrement()),
            0x3A: Load8(a, DereferenceHlDecrement()),
            0xE2: Load8(HighPlusC(), a),
            0xF2: Load8(a, HighPlusC()),
            0xF9: Load16(Register16.SP, Register16.HL),
        }
    )
    return table


def _immediate_loads() -> dict[int, Callable[[Iterator[int]], Load]]:
    table: dict[int, Callable[[Iterator[int]], Load]] = {
        0x06 + (t << 3): (lambda ops, target=target: Load8(target, constant8(ops)))
        for t, target in enumerate(_OPERANDS8)
    }
    a = Register8.A
    for op, register in (
        (0x01, Register16.BC),
        (0x11, Register16.DE),
        (0x21, Register16.HL),
        (0x31, Register16.SP),
    ):
        table[op] = lambda ops, register=register: Load16(register, constant16(ops))
    table.update(
        {
            0xE0: lambda ops: Load8(high_address(ops), a),
            0xF0: lambda ops: Load8(a, high_address(ops)),
            0xEA: lambda ops: Load8(fixed_address(ops), a),
            0xFA: lambda ops: Load8(a, fixed_address(ops)),
            0x08: lambda ops: Load16(fixed_address(ops), Register16.SP),
            0xF8: lambda ops: Load16(Register16.HL, sp_offset(ops)),
        }
    )
    return table


_STATIC = _static_loads()
_IMMEDIATE = _immediate_loads()


def decode_load(op: int, ops: Iterator[int]) -> Load | None:
    """Decode a load opcode, reading operands from ``ops``; None if not a load."""
    if op in _STATIC:
        return _STATIC[op]
    factory = _IMMEDIATE.get(op)
    return factory(ops) if factory else None