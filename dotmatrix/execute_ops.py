"""Execution of arithmetic, shift and control-flow instructions."""

from __future__ import annotations

from typing import Optional, Protocol

from dotmatrix.arithmetic_ops import (
    Arithmetic,
    Arithmetic8,
    Arithmetic8Kind,
    Arithmetic16,
    Arithmetic16Kind,
)
from dotmatrix.cpu_state import CpuState, InterruptMasterEnable
from dotmatrix.jump_ops import (
    Call,
    Condition,
    HlLocation,
    Jump,
    JumpInstruction,
    Return,
    ReturnAndEnableInterrupts,
    Restart,
)
from dotmatrix.misc_ops import Pop, Push
from dotmatrix.operands import FixedAddress, RelativeAddress
from dotmatrix.registers import Flags, OpResult, Register16
from dotmatrix.shift_ops import (
    BitShift,
    Carry,
    Direction,
    Rotate,
    RotateA,
    ShiftArithmetic,
    ShiftRightLogical,
    Swap,
)


class _Memory(Protocol):
    def read(self, address: int) -> int: ...


def _assign(cpu: CpuState, flag: Flags, condition: bool) -> None:
    bits = int(cpu.flags) & ~int(flag) & 0xFF
    if condition:
        bits |= int(flag)
    cpu.flags = Flags(bits)


def _has(cpu: CpuState, flag: Flags) -> bool:
    return bool(int(cpu.flags) & int(flag))


def _add_half_carry(a: int, operand: int) -> bool:
    """Half-carry test for additions, with the operand grouping the flag logic uses."""
    return (a & (0xF + operand) & 0xF) > 0xF


# ---------------------------------------------------------------------------
# Arithmetic


def execute_arithmetic(cpu: CpuState, instruction: Arithmetic, memory: _Memory) -> OpResult:
    """Execute an 8-bit or 16-bit arithmetic instruction."""
    match instruction:
        case Arithmetic8(kind, operand):
            if kind in (Arithmetic8Kind.INCREMENT, Arithmetic8Kind.DECREMENT):
                return _step8(cpu, kind, operand, memory)
            return _accumulate(cpu, kind, operand, memory)
        case Arithmetic16(kind, register):
            return _arithmetic16(cpu, kind, register)
    raise ValueError(f"not an arithmetic instruction: {instruction!r}")


def _step8(cpu: CpuState, kind: Arithmetic8Kind, target, memory: _Memory) -> OpResult:
    original, fetch_cycles = cpu.fetch8(target, memory)
    if kind is Arithmetic8Kind.INCREMENT:
        value = (original + 1) & 0xFF
        half_carry = value & 0xF == 0x0
    else:
        value = (original - 1) & 0xFF
        half_carry = value & 0xF == 0xF
    result = cpu.set8(target, value)

    _assign(cpu, Flags.ZERO, value == 0)
    _assign(cpu, Flags.NEGATIVE, True)
    _assign(cpu, Flags.HALF_CARRY, half_carry)
    return result.add_cycles(1 + fetch_cycles)


def _accumulate(cpu: CpuState, kind: Arithmetic8Kind, source, memory: _Memory) -> OpResult:
    value, fetch_cycles = cpu.fetch8(source, memory)
    a = cpu.a
    carry_in = 1 if _has(cpu, Flags.CARRY) else 0

    match kind:
        case Arithmetic8Kind.ADD_A:
            result = (a + value) & 0xFF
            negative = False
            half_carry = _add_half_carry(a, value)
            carry = a + value > 0xFF
        case Arithmetic8Kind.ADD_A_CARRY:
            operand = value + carry_in
            result = (a + operand) & 0xFF
            negative = False
            half_carry = _add_half_carry(a, operand)
            carry = a + operand > 0xFF
        case Arithmetic8Kind.SUBTRACT_A:
            result = (a - value) & 0xFF
            negative = True
            half_carry = (a & 0xF0) < (value & 0xF0)
            carry = a < value
        case Arithmetic8Kind.SUBTRACT_A_CARRY:
            operand = value + carry_in
            result = (a - operand) & 0xFF
            negative = True
            half_carry = (a & 0xF0) < (operand & 0xF0)
            carry = a < value
        case Arithmetic8Kind.COMPARE_A:
            result = (a - value) & 0xFF
            negative = True
            half_carry = (value & 0xF) > (a & 0xF)
            carry = value > a
        case _:
            raise ValueError(f"not an accumulator operation: {kind!r}")

    _assign(cpu, Flags.ZERO, result == 0)
    _assign(cpu, Flags.NEGATIVE, negative)
    _assign(cpu, Flags.HALF_CARRY, half_carry)
    _assign(cpu, Flags.CARRY, carry)

    if kind is not Arithmetic8Kind.COMPARE_A:
        cpu.a = result
    return OpResult(1 + fetch_cycles)


def _arithmetic16(cpu: CpuState, kind: Arithmetic16Kind, register: Register16) -> OpResult:
    match kind:
        case Arithmetic16Kind.INCREMENT:
            cpu.set_register16(register, cpu.get_register16(register) + 1)
        case Arithmetic16Kind.DECREMENT:
            cpu.set_register16(register, cpu.get_register16(register) - 1)
        case Arithmetic16Kind.ADD_HL:
            value = cpu.get_register16(register)
            hl = cpu.get_register16(Register16.HL)
            _assign(cpu, Flags.NEGATIVE, False)
            _assign(cpu, Flags.HALF_CARRY, (hl & 0xFFF) + (value & 0xFFF) > 0xFFF)
            _assign(cpu, Flags.CARRY, (hl & 0xFF) + (value & 0xFF) > 0xFF)
            cpu.set_register16(Register16.HL, hl + value)
        case _:
            raise ValueError(f"not a 16-bit operation: {kind!r}")
    return OpResult(2)


# ---------------------------------------------------------------------------
# Bit shifts


def _rotate(cpu: CpuState, value: int, direction: Direction, carry: Carry) -> tuple[int, bool]:
    new_carry = value & 0b1000_0000 != 0
    bit_in = _has(cpu, Flags.CARRY) if carry is Carry.THROUGH else new_carry
    if direction is Direction.LEFT:
        new_value = (value << 1) & 0xFF
        if bit_in:
            new_value |= 0b0000_0001
    else:
        new_value = value >> 1
        if bit_in:
            new_value |= 0b1000_0000
    return new_value, new_carry


def execute_bit_shift(cpu: CpuState, instruction: BitShift, memory: _Memory) -> OpResult:
    """Execute a rotate, shift or swap instruction."""
    match instruction:
        case RotateA(direction, carry):
            new_value, new_carry = _rotate(cpu, cpu.a, direction, carry)
            cpu.flags = Flags.CARRY if new_carry else Flags(0)
            cpu.a = new_value
            return OpResult(1)

        case Rotate(direction, carry, target):
            value, fetch_cycles = cpu.fetch8(target, memory)
            new_value, new_carry = _rotate(cpu, value, direction, carry)
            _assign(cpu, Flags.ZERO, new_value == 0)
            _assign(cpu, Flags.CARRY, new_carry)
            _assign(cpu, Flags.NEGATIVE, False)
            _assign(cpu, Flags.HALF_CARRY, False)
            return cpu.set8(target, new_value).add_cycles(fetch_cycles).add_cycles(2)

        case ShiftArithmetic(direction, target):
            value, fetch_cycles = cpu.fetch8(target, memory)
            if direction is Direction.LEFT:
                _assign(cpu, Flags.CARRY, value & 0b1000_0000 != 0)
                new_value = (value << 1) & 0xFF
            else:
                _assign(cpu, Flags.CARRY, value & 0b0000_0001 != 0)
                new_value = (value >> 1) | (value & 0b1000_0000)
            _assign(cpu, Flags.NEGATIVE, False)
            _assign(cpu, Flags.HALF_CARRY, False)
            _assign(cpu, Flags.ZERO, new_value == 0)
            return cpu.set8(target, new_value).add_cycles(fetch_cycles)

        case ShiftRightLogical(target):
            value, fetch_cycles = cpu.fetch8(target, memory)
            new_value = value >> 1
            _assign(cpu, Flags.CARRY, value & 0b0000_0001 != 0)
            _assign(cpu, Flags.NEGATIVE, False)
            _assign(cpu, Flags.HALF_CARRY, False)
            _assign(cpu, Flags.ZERO, new_value == 0)
            return cpu.set8(target, new_value).add_cycles(fetch_cycles)

        case Swap(target):
            value, fetch_cycles = cpu.fetch8(target, memory)
            new_value = ((value << 4) & 0xF0) | ((value >> 4) & 0x0F)
            cpu.flags = Flags.ZERO if new_value == 0 else Flags(0)
            return cpu.set8(target, new_value).add_cycles(fetch_cycles)

    raise ValueError(f"not a shift instruction: {instruction!r}")


# ---------------------------------------------------------------------------
# Jumps


def _jump_address(cpu: CpuState, location) -> tuple[int, int]:
    match location:
        case FixedAddress(address):
            return address, 3
        case RelativeAddress(offset):
            return (cpu.program_counter + offset) & 0xFFFF, 2
        case HlLocation():
            return cpu.get_register16(Register16.HL), 0
    raise ValueError(f"not a jump location: {location!r}")


def _condition_met(cpu: CpuState, condition: Optional[Condition]) -> bool:
    if condition is None:
        return True
    return _has(cpu, condition.flag.mask) == condition.value


def execute_jump(cpu: CpuState, instruction: JumpInstruction, memory: _Memory) -> OpResult:
    """Execute a jump, call, return or restart instruction."""
    match instruction:
        case Jump(condition, location):
            address, address_cycles = _jump_address(cpu, location)
            if _condition_met(cpu, condition):
                cpu.program_counter = address
                return OpResult(1 + address_cycles)
            return OpResult(address_cycles)

        case Call(condition, location):
            address, _ = _jump_address(cpu, location)
            if _condition_met(cpu, condition):
                pushed = cpu.execute_stack(Push(Register16.PC), memory)
                cpu.program_counter = address
                return OpResult(6, pushed.writes)
            return OpResult(3)

        case Return(None):
            cpu.execute_stack(Pop(Register16.PC), memory)
            return OpResult(4)

        case Return(condition):
            if _condition_met(cpu, condition):
                cpu.execute_stack(Pop(Register16.PC), memory)
                return OpResult(5)
            return OpResult(2)

        case ReturnAndEnableInterrupts():
            cpu.interrupt_master_enable = InterruptMasterEnable.ENABLED
            cpu.execute_stack(Pop(Register16.PC), memory)
            return OpResult(4)

        case Restart(address):
            pushed = cpu.execute_stack(Push(Register16.PC), memory)
            cpu.program_counter = address
            return OpResult(6, pushed.writes)

    raise ValueError(f"not a jump instruction: {instruction!r}")