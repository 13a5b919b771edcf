"""Interrupt sources, their flag bits and the enable/request registers."""

from __future__ import annotations

import enum
from typing import Optional

from dotmatrix.jump_ops import Call
from dotmatrix.operands import FixedAddress


class InterruptFlags(enum.IntFlag):
    """Bits of the interrupt enable and request registers; other bits are kept."""

    JOYPAD = 0b0001_0000
    SERIAL = 0b0000_1000
    TIMER = 0b0000_0100
    VIDEO_STATUS = 0b0000_0010
    VIDEO_BETWEEN_FRAMES = 0b0000_0001


class Interrupt(enum.Enum):
    """An interrupt source, declared in priority order (highest first)."""

    VIDEO_BETWEEN_FRAMES = InterruptFlags.VIDEO_BETWEEN_FRAMES
    VIDEO_STATUS = InterruptFlags.VIDEO_STATUS
    TIMER = InterruptFlags.TIMER
    SERIAL = InterruptFlags.SERIAL
    JOYPAD = InterruptFlags.JOYPAD

    @property
    def flag(self) -> InterruptFlags:
        return self.value

    def address(self) -> FixedAddress:
        """The address of this interrupt's handler."""
        return FixedAddress(_HANDLERS[self])

    def call_instruction(self) -> Call:
        """The unconditional call that dispatches to the handler."""
        return Call(None, self.address())


_HANDLERS = {
    Interrupt.VIDEO_BETWEEN_FRAMES: 0x40,
    Interrupt.VIDEO_STATUS: 0x48,
    Interrupt.TIMER: 0x50,
    Interrupt.SERIAL: 0x58,
    Interrupt.JOYPAD: 0x60,
}


class InterruptRegisters:
    """The interrupt enable and interrupt request registers."""

    def __init__(self) -> None:
        self.enabled = InterruptFlags(0)
        self.requested = InterruptFlags(0)

    def is_enabled(self, interrupt: Interrupt) -> bool:
        return bool(int(self.enabled) & int(interrupt.flag))

    def is_requested(self, interrupt: Interrupt) -> bool:
        return bool(int(self.requested) & int(interrupt.flag))

    def triggered(self) -> Optional[Interrupt]:
        """The highest-priority interrupt that is both enabled and requested."""
        return next(
            (
                interrupt
                for interrupt in Interrupt
                if self.is_enabled(interrupt) and self.is_requested(interrupt)
            ),
            None,
        )

    def request(self, interrupt: Interrupt) -> None:
        self.requested = InterruptFlags(int(self.requested) | int(interrupt.flag))

    def clear(self, interrupt: Interrupt) -> None:
        self.requested = InterruptFlags(
            int(self.requested) & ~int(interrupt.flag) & 0xFF
        )