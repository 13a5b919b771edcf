# dotmatrix

Building blocks of a handheld console emulator, in plain Python with no
dependencies outside the standard library.

## What is inside

- `dotmatrix.decoder`: `decode(ops)` reads one instruction from an iterable
  of bytes. It returns `None` if the stream is already empty, and raises
  `IncompleteInstruction` if the stream ends partway through an instruction.
  Bytes that name no instruction decode to `Invalid`. The instruction types are
  defined in `load_ops`, `arithmetic_ops`, `bitwise_ops`, `jump_ops`,
  `shift_ops`, `bit_ops` and `misc_ops`. Each one prints as its assembly
  mnemonic, for example `ld a, 5` or `jp $0150`.
- `dotmatrix.operands`: addresses, constants and register operands, plus the
  helpers that read them from a byte stream.
- `dotmatrix.registers`: `Register8`, `Register16`, `Flag`, `Flags` and
  `OpResult`. An `OpResult` holds the number of cycles taken and a tuple of
  pending `(address, value)` memory writes.
- `dotmatrix.cpu`: `Cpu`, which starts from the post-boot register values.
  `Cpu.execute(instruction, memory)` runs one instruction. The `memory`
  argument only needs a `read(address)` method. Memory writes are returned
  in the `OpResult` and are not applied, so the caller applies them.
  `Stop`, `add sp, n` and a few operand forms raise `UnsupportedInstruction`.
  `Invalid` raises `ValueError`.
- `dotmatrix.interrupts`: `Interrupt`, with handler addresses and call
  instructions, and `InterruptRegisters`. `InterruptRegisters.triggered()`
  returns the highest-priority interrupt that is both enabled and requested.
- `dotmatrix.timers`: the divider and the programmable timer.
  `Timers.tick()` returns `Interrupt.TIMER` when the counter overflows.
- `dotmatrix.joypad`: `Joypad` and `Button`, with an active-low register.
- `dotmatrix.serial`: the serial transfer registers.
- `dotmatrix.video_tiles`, `dotmatrix.sprites`, `dotmatrix.video_control` and
  `dotmatrix.video_memory`: tiles, tile maps, palettes, a `Screen` buffer of
  palette indices, sprite attributes, the video control register, and video
  memory addressed through `map_video_address`.

## Example

```python
from dotmatrix.cpu import Cpu
from dotmatrix.decoder import decode

program = iter([0x3E, 0x05, 0xC3, 0x50, 0x01])
load = decode(program)
jump = decode(program)
print(load)  # ld a, 5
print(jump)  # jp $0150


class Memory:
    def __init__(self):
        self.bytes = bytearray(0x10000)

    def read(self, address):
        return self.bytes[address]


memory = Memory()
cpu = Cpu()
result = cpu.execute(load, memory)
print(cpu.a, result.cycles)  # 5 2
for address, value in result.writes:
    memory.bytes[address] = value
```

## What it does not do

This package has no pixel processing unit and no video register block, so it
never renders frames into a `Screen`. It also has no memory bus, cartridge or
ROM loading, no audio, and no loop that steps a whole console. It has no
display window and no command-line program. You supply the memory and drive
`Cpu.execute`, `Timers.tick` and the other parts yourself.

## Running the tests

```
pip install -e ".[test]"
pytest
```