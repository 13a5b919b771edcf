import pytest

from dotmatrix.cpu_state import CpuState, InterruptMasterEnable, UnsupportedInstruction
from dotmatrix.misc_ops import AdjustStack, Pop, Push
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
    StackPointerOffset,
)
from dotmatrix.registers import Flags, OpResult, Register8, Register16


class FakeMemory:
    def __init__(self, data=None):
        self.data = dict(data or {})

    def read(self, address):
        return self.data.get(address, 0)

    def apply(self, result):
        for address, value in result.writes:
            self.data[address] = value


def test_boot_values():
    cpu = CpuState()
    assert cpu.a == 0x01
    assert cpu.program_counter == 0x0100
    assert cpu.stack_pointer == 0xFFFE
    assert cpu.halted is False


def test_boot_flags_depend_on_checksum():
    assert CpuState(0).flags == Flags.ZERO
    assert CpuState(7).flags == Flags.ZERO | Flags.CARRY | Flags.HALF_CARRY


def test_register_pair_round_trip():
    cpu = CpuState()
    cpu.set_register16(Register16.DE, 0xBEEF)
    assert cpu.get_register8(Register8.D) == 0xBE
    assert cpu.get_register8(Register8.E) == 0xEF
    assert cpu.get_register16(Register16.DE) == 0xBEEF


def test_af_pair_holds_flags():
    cpu = CpuState()
    cpu.set_register16(Register16.AF, 0x12F0)
    assert cpu.a == 0x12
    assert cpu.flags == Flags(0xF0)
    assert cpu.get_register16(Register16.AF) == 0x12F0


def test_register8_round_trip():
    cpu = CpuState()
    cpu.set_register8(Register8.L, 0x99)
    assert cpu.get_register8(Register8.L) == 0x99
    assert cpu.get_register16(Register16.HL) & 0xFF == 0x99


def test_interrupts_enabled():
    cpu = CpuState()
    assert cpu.interrupts_enabled() is False
    cpu.interrupt_master_enable = InterruptMasterEnable.ENABLE_AFTER_NEXT_INSTRUCTION
    assert cpu.interrupts_enabled() is True


def test_fetch8_constant_and_register():
    cpu = CpuState()
    cpu.set_register8(Register8.B, 0x55)
    memory = FakeMemory()
    assert cpu.fetch8(Constant8(7), memory) == (7, 1)
    assert cpu.fetch8(Register8.B, memory) == (0x55, 0)


def test_fetch8_memory_forms():
    cpu = CpuState()
    cpu.set_register8(Register8.C, 0x20)
    memory = FakeMemory({0xC000: 0x11, 0xFF44: 0x22, 0xFF20: 0x33})
    assert cpu.fetch8(FixedAddress(0xC000), memory) == (0x11, 3)
    assert cpu.fetch8(HighAddress(0x44), memory) == (0x22, 2)
    assert cpu.fetch8(HighPlusC(), memory) == (0x33, 1)
    cpu.set_register16(Register16.HL, 0xC000)
    assert cpu.fetch8(Dereference(Register16.HL), memory) == (0x11, 1)


def test_fetch8_hl_increment_and_decrement():
    cpu = CpuState()
    memory = FakeMemory({0xC000: 0x11})
    cpu.set_register16(Register16.HL, 0xC000)
    assert cpu.fetch8(DereferenceHlIncrement(), memory) == (0x11, 1)
    assert cpu.get_register16(Register16.HL) == 0xC001
    cpu.fetch8(DereferenceHlDecrement(), memory)
    assert cpu.get_register16(Register16.HL) == 0xC000


def test_fetch8_relative_is_unsupported():
    with pytest.raises(UnsupportedInstruction):
        CpuState().fetch8(RelativeAddress(1), FakeMemory())


def test_set8_register():
    cpu = CpuState()
    assert cpu.set8(Register8.A, 0x42) == OpResult(0)
    assert cpu.a == 0x42


def test_set8_memory_forms():
    cpu = CpuState()
    assert cpu.set8(FixedAddress(0xC123), 0x42) == OpResult(3, ((0xC123, 0x42),))
    cpu.set_register16(Register16.HL, 0xC200)
    assert cpu.set8(DereferenceHlIncrement(), 0x42) == OpResult(1, ((0xC200, 0x42),))
    assert cpu.get_register16(Register16.HL) == 0xC201


def test_set8_then_fetch8_round_trip():
    cpu = CpuState()
    memory = FakeMemory()
    memory.apply(cpu.set8(HighAddress(0x80), 0x5A))
    assert cpu.fetch8(HighAddress(0x80), memory)[0] == 0x5A


def test_set8_relative_is_unsupported():
    with pytest.raises(UnsupportedInstruction):
        CpuState().set8(RelativeAddress(1), 0)


def test_fetch16_forms():
    cpu = CpuState()
    assert cpu.fetch16(Constant16(0x1234)) == (0x1234, 2)
    assert cpu.fetch16(Register16.SP) == (0xFFFE, 1)
    cpu.stack_pointer = 0xD000
    assert cpu.fetch16(StackPointerOffset(0x10)) == (0xD000 + 0x10, 2)


def test_set16_register_and_memory():
    cpu = CpuState()
    assert cpu.set16(Register16.HL, 0x4321) == OpResult(0)
    assert cpu.get_register16(Register16.HL) == 0x4321
    assert cpu.set16(FixedAddress(0xC100), 0xABCD) == OpResult(
        2, ((0xC100, 0xCD), (0xC101, 0xAB))
    )


def test_set16_other_address_is_unsupported():
    with pytest.raises(UnsupportedInstruction):
        CpuState().set16(Dereference(Register16.HL), 0)


def test_push_then_pop_round_trip():
    cpu = CpuState()
    memory = FakeMemory()
    cpu.set_register16(Register16.BC, 0xCAFE)
    start = cpu.stack_pointer

    pushed = cpu.execute_stack(Push(Register16.BC), memory)
    assert pushed.cycles == 4
    assert cpu.stack_pointer == start - 2
    memory.apply(pushed)

    popped = cpu.execute_stack(Pop(Register16.DE), memory)
    assert popped == OpResult(3)
    assert cpu.stack_pointer == start
    assert cpu.get_register16(Register16.DE) == 0xCAFE


def test_adjust_stack_is_unsupported():
    with pytest.raises(UnsupportedInstruction):
        CpuState().execute_stack(AdjustStack(2), FakeMemory())