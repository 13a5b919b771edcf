"""CPU register file and the operand access shared by instruction execution."""

from __future__ import annotations

import enum
from typing import Protocol

from dotmatrix.misc_ops import AdjustStack, Pop, Push, StackInstruction
from dotmatrix.operands import (
    Constant8,
    Constant16,
    Dereference,
    DereferenceHlDecrement,
    DereferenceHlIncrement,
    FixedAddress,
    HighAddress,
    HighPlusC,
    RelativeAddress,
    Source8,
    Source16,
    StackPointerOffset,
    Target8,
    Target16,
)
from dotmatrix.registers import Flags, OpResult, Register8, Register16, write8, write16

_HIGH_PAGE = 0xFF00


class _Memory(Protocol):
    def read(self, address: int) -> int: ...


class InterruptMasterEnable(enum.Enum):
    DISABLED = enum.auto()
    ENABLE_AFTER_NEXT_INSTRUCTION = enum.auto()
    ENABLED = enum.auto()


class UnsupportedInstruction(NotImplementedError):
    """An instruction or operand form that the CPU does not execute."""


class CpuState:
    """The registers of the CPU, initialised to their post-boot values."""

    def __init__(self, checksum: int = 0) -> None:
        self.a = 0x01
        self.b = 0x00
        self.c = 0x13
        self.d = 0x00
        self.e = 0xD8
        self.h = 0x01
        self.l = 0x4D
        self.stack_pointer = 0xFFFE
        self.program_counter = 0x0100
        self.flags = (
            Flags.ZERO
            if checksum == 0
            else Flags.ZERO | Flags.CARRY | Flags.HALF_CARRY
        )
        self.interrupt_master_enable = InterruptMasterEnable.DISABLED
        self.halted = False

    def get_register8(self, register: Register8) -> int:
        return getattr(self, register.value)

    def set_register8(self, register: Register8, value: int) -> None:
        setattr(self, register.value, value & 0xFF)

    def get_register16(self, register: Register16) -> int:
        match register:
            case Register16.BC:
                return (self.b << 8) | self.c
            case Register16.DE:
                return (self.d << 8) | self.e
            case Register16.HL:
                return (self.h << 8) | self.l
            case Register16.AF:
                return (self.a << 8) | int(self.flags)
            case Register16.SP:
                return self.stack_pointer
            case Register16.PC:
                return self.program_counter
        raise ValueError(f"unknown register: {register!r}")

    def set_register16(self, register: Register16, value: int) -> None:
        value &= 0xFFFF
        high, low = value >> 8, value & 0xFF
        match register:
            case Register16.BC:
                self.b, self.c = high, low
            case Register16.DE:
                self.d, self.e = high, low
            case Register16.HL:
                self.h, self.l = high, low
            case Register16.AF:
                self.a = high
                self.flags = Flags(low)
            case Register16.SP:
                self.stack_pointer = value
            case Register16.PC:
                self.program_counter = value
            case _:
                raise ValueError(f"unknown register: {register!r}")

    def interrupts_enabled(self) -> bool:
        return self.interrupt_master_enable is not InterruptMasterEnable.DISABLED

    def _step_hl(self, delta: int) -> int:
        """Return hl and move it by ``delta``."""
        address = self.get_register16(Register16.HL)
        self.set_register16(Register16.HL, address + delta)
        return address

    def fetch8(self, source: Source8, memory: _Memory) -> tuple[int, int]:
        """Read an 8-bit source; returns the value and the cycles it took."""
        match source:
            case Constant8(value):
                return value, 1
            case Register8():
                return self.get_register8(source), 0
            case FixedAddress(address):
                return memory.read(address), 3
            case HighAddress(offset):
                return memory.read(_HIGH_PAGE + offset), 2
            case HighPlusC():
                return memory.read(_HIGH_PAGE + self.c), 1
            case Dereference(register):
                return memory.read(self.get_register16(register)), 1
            case DereferenceHlIncrement():
                return memory.read(self._step_hl(1)), 1
            case DereferenceHlDecrement():
                return memory.read(self._step_hl(-1)), 1
            case RelativeAddress():
                raise UnsupportedInstruction("reading a relative address")
        raise ValueError(f"not an 8-bit source: {source!r}")

    def set8(self, target: Target8, value: int) -> OpResult:
        """Store an 8-bit value; memory targets become a pending write."""
        match target:
            case Register8():
                self.set_register8(target, value)
                return OpResult(0)
            case FixedAddress(address):
                return write8(address, value, 3)
            case HighAddress(offset):
                return write8(_HIGH_PAGE + offset, value, 2)
            case HighPlusC():
                return write8(_HIGH_PAGE + self.c, value, 1)
            case Dereference(register):
                return write8(self.get_register16(register), value, 1)
            case DereferenceHlIncrement():
                return write8(self._step_hl(1), value, 1)
            case DereferenceHlDecrement():
                return write8(self._step_hl(-1), value, 1)
            case RelativeAddress():
                raise UnsupportedInstruction("writing a relative address")
        raise ValueError(f"not an 8-bit target: {target!r}")

    def fetch16(self, source: Source16) -> tuple[int, int]:
        """Read a 16-bit source; returns the value and the cycles it took."""
        match source:
            case Constant16(value):
                return value, 2
            case Register16():
                return self.get_register16(source), 1
            case StackPointerOffset(offset):
                return (self.stack_pointer + offset) & 0xFFFF, 2
        raise ValueError(f"not a 16-bit source: {source!r}")

    def set16(self, target: Target16, value: int) -> OpResult:
        """Store a 16-bit value; a fixed address becomes a pending write."""
        match target:
            case Register16():
                self.set_register16(target, value)
                return OpResult(0)
            case FixedAddress(address):
                return write16(address, value, 2)
        raise UnsupportedInstruction(f"16-bit store to {target}")

    def execute_stack(self, instruction: StackInstruction, memory: _Memory) -> OpResult:
        match instruction:
            case Push(register):
                self.stack_pointer = (self.stack_pointer - 2) & 0xFFFF
                return write16(self.stack_pointer, self.get_register16(register), 4)
            case Pop(register):
                low = memory.read(self.stack_pointer)
                high = memory.read((self.stack_pointer + 1) & 0xFFFF)
                self.set_register16(register, low | (high << 8))
                self.stack_pointer = (self.stack_pointer + 2) & 0xFFFF
                return OpResult(3)
            case AdjustStack():
                raise UnsupportedInstruction(str(instruction))
        raise ValueError(f"not a stack instruction: {instruction!r}")