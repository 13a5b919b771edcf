"""The CPU: executes decoded instructions against the register file."""

from __future__ import annotations

from typing import Protocol

from dotmatrix.arithmetic_ops import Arithmetic8, Arithmetic16
from dotmatrix.bit_ops import BitCheck, BitFlag, BitReset, BitSet
from dotmatrix.bitwise_ops import Bitwise, BitwiseInstruction, BitwiseKind, ComplementA
from dotmatrix.cpu_state import CpuState, InterruptMasterEnable, UnsupportedInstruction
from dotmatrix.decoder import (
    DecimalAdjustAccumulator,
    Instruction,
    Invalid,
    NoOperation,
    Stop,
)
from dotmatrix.execute_ops import execute_arithmetic, execute_bit_shift, execute_jump
from dotmatrix.jump_ops import Call, Jump, Restart, Return, ReturnAndEnableInterrupts
from dotmatrix.load_ops import Load8, Load16
from dotmatrix.misc_ops import AdjustStack, CarryFlag, InterruptInstruction, Pop, Push
from dotmatrix.registers import Flags, OpResult
from dotmatrix.shift_ops import (
    Rotate,
    RotateA,
    ShiftArithmetic,
    ShiftRightLogical,
    Swap,
)


class _Memory(Protocol):
    def read(self, address: int) -> int: ...


class Cpu(CpuState):
    """A CPU that executes instructions and reports cycles and memory writes."""

    def _has(self, flag: Flags) -> bool:
        return bool(int(self.flags) & int(flag))

    def _assign(self, flag: Flags, condition: bool) -> None:
        bits = int(self.flags) & ~int(flag) & 0xFF
        if condition:
            bits |= int(flag)
        self.flags = Flags(bits)

    def execute(self, instruction: Instruction, memory: _Memory) -> OpResult:
        """Execute one instruction; memory writes are returned, not applied."""
        match instruction:
            case Load8(target, source):
                value, fetch_cycles = self.fetch8(source, memory)
                return self.set8(target, value).add_cycles(fetch_cycles + 1)
            case Load16(target, source):
                value, fetch_cycles = self.fetch16(source)
                return self.set16(target, value).add_cycles(fetch_cycles + 1)
            case Arithmetic8() | Arithmetic16():
                return execute_arithmetic(self, instruction, memory)
            case Bitwise() | ComplementA():
                return self._execute_bitwise(instruction, memory)
            case BitCheck() | BitSet() | BitReset():
                return self._execute_bit_flag(instruction, memory)
            case RotateA() | Rotate() | ShiftArithmetic() | ShiftRightLogical() | Swap():
                return execute_bit_shift(self, instruction, memory)
            case Jump() | Call() | Return() | ReturnAndEnableInterrupts() | Restart():
                return execute_jump(self, instruction, memory)
            case CarryFlag():
                return self._execute_carry_flag(instruction)
            case Push() | Pop() | AdjustStack():
                return self.execute_stack(instruction, memory)
            case InterruptInstruction():
                return self._execute_interrupt(instruction)
            case DecimalAdjustAccumulator():
                return self._decimal_adjust()
            case NoOperation():
                return OpResult(1)
            case Stop():
                raise UnsupportedInstruction("stop")
            case Invalid():
                raise ValueError(f"Invalid instruction {instruction}")
        raise ValueError(f"not an instruction: {instruction!r}")

    def _execute_bitwise(self, instruction: BitwiseInstruction, memory: _Memory) -> OpResult:
        if isinstance(instruction, ComplementA):
            self.a = ~self.a & 0xFF
            self.flags = Flags(int(self.flags) | Flags.NEGATIVE | Flags.HALF_CARRY)
            return OpResult(1)

        value, fetch_cycles = self.fetch8(instruction.source, memory)
        match instruction.kind:
            case BitwiseKind.AND:
                self.a &= value
                self.flags = (
                    Flags.ZERO | Flags.HALF_CARRY if self.a == 0 else Flags.HALF_CARRY
                )
            case BitwiseKind.OR:
                self.a |= value
                self.flags = Flags.ZERO if self.a == 0 else Flags(0)
            case BitwiseKind.XOR:
                self.a ^= value
                self.flags = Flags.ZERO if self.a == 0 else Flags(0)
        return OpResult(1 + fetch_cycles)

    def _execute_bit_flag(self, instruction: BitFlag, memory: _Memory) -> OpResult:
        match instruction:
            case BitCheck(bit, source):
                compare, fetch_cycles = self.fetch8(source, memory)
                self._assign(Flags.ZERO, (compare & (1 << bit)) == 0)
                self._assign(Flags.NEGATIVE, False)
                self._assign(Flags.HALF_CARRY, True)
                return OpResult(2 + fetch_cycles)
            case BitSet(bit, target):
                value, fetch_cycles = self.fetch8(target, memory)
                return self.set8(target, value | (1 << bit)).add_cycles(fetch_cycles + 2)
            case BitReset(bit, target):
                value, fetch_cycles = self.fetch8(target, memory)
                return self.set8(target, value ^ (1 << bit)).add_cycles(fetch_cycles + 2)
        raise ValueError(f"not a bit instruction: {instruction!r}")

    def _execute_carry_flag(self, instruction: CarryFlag) -> OpResult:
        self._assign(Flags.NEGATIVE, False)
        self._assign(Flags.HALF_CARRY, False)
        match instruction:
            case CarryFlag.COMPLEMENT:
                self._assign(Flags.CARRY, self._has(Flags.CARRY))
            case CarryFlag.SET:
                self._assign(Flags.CARRY, True)
        return OpResult(1)

    def _execute_interrupt(self, instruction: InterruptInstruction) -> OpResult:
        match instruction:
            case InterruptInstruction.ENABLE:
                self.interrupt_master_enable = (
                    InterruptMasterEnable.ENABLE_AFTER_NEXT_INSTRUCTION
                )
                return OpResult(1)
            case InterruptInstruction.DISABLE:
                self.interrupt_master_enable = InterruptMasterEnable.DISABLED
                return OpResult(1)
            case InterruptInstruction.AWAIT:
                if self.interrupt_master_enable is InterruptMasterEnable.DISABLED:
                    raise UnsupportedInstruction("halt with interrupts disabled")
                self.halted = True
                return OpResult(0)
        raise ValueError(f"not an interrupt instruction: {instruction!r}")

    def _decimal_adjust(self) -> OpResult:
        adjustment = 0
        if self._has(Flags.NEGATIVE):
            if self._has(Flags.HALF_CARRY):
                adjustment += 0x6
            if self._has(Flags.CARRY):
                adjustment += 0x60
            value = (self.a - adjustment) & 0xFF
        else:
            if self._has(Flags.HALF_CARRY) or self.a & 0xF > 0x9:
                adjustment += 0x6
            if self._has(Flags.CARRY) or self.a > 0x99:
                adjustment += 0x60
                self._assign(Flags.CARRY, True)
            value = (self.a + adjustment) & 0xFF

        self._assign(Flags.ZERO, value == 0)
        self.a = value
        return OpResult(1)