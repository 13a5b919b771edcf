"""The divider and the programmable timer."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from dotmatrix.interrupts import Interrupt

_DIV_INCREMENT_CYCLES = 1024


class CycleTimer:
    """Counts ticks and reports when a period has elapsed."""

    def __init__(self, cycles: int) -> None:
        self.cycles = cycles
        self.counted = 0

    def tick(self) -> None:
        self.counted += 1

    def finished(self) -> bool:
        return self.counted >= self.cycles

    def lap(self) -> None:
        """Start the next period, keeping any surplus ticks."""
        if not self.finished():
            raise RuntimeError("lap before the period has elapsed")
        self.counted -= self.cycles


@dataclass(frozen=True)
class TimerControl:
    """The timer control register."""

    value: int

    def enabled(self) -> bool:
        return self.value & 0b100 != 0

    def cycle_interval(self) -> int:
        return {0b00: 1024, 0b01: 16, 0b10: 64, 0b11: 256}[self.value & 0b11]


class TimerRegister(enum.Enum):
    DIVIDER = enum.auto()
    COUNTER = enum.auto()
    MODULO = enum.auto()
    CONTROL = enum.auto()


class Timers:
    """The divider, counter, modulo and control registers."""

    def __init__(self) -> None:
        self.divider = 0xAB
        self.counter = 0
        self.modulo = 0
        self.control = TimerControl(0xF8)
        self._divider_timer = CycleTimer(_DIV_INCREMENT_CYCLES)
        self._timer: Optional[CycleTimer] = None

    def tick(self) -> Optional[Interrupt]:
        """Advance one cycle; returns the timer interrupt on counter overflow."""
        self._divider_timer.tick()
        if self._divider_timer.finished():
            self.divider = (self.divider + 1) & 0xFF
            self._divider_timer.lap()

        if self._timer is not None:
            self._timer.tick()
            if self._timer.finished():
                self._timer.lap()
                if self.counter == 0xFF:
                    self.counter = self.modulo
                    return Interrupt.TIMER
                self.counter += 1
        return None

    def read_register(self, register: TimerRegister) -> int:
        match register:
            case TimerRegister.DIVIDER:
                return self.divider
            case TimerRegister.COUNTER:
                return self.counter
            case TimerRegister.MODULO:
                return self.modulo
            case TimerRegister.CONTROL:
                return self.control.value
        raise ValueError(f"unknown timer register: {register!r}")

    def write_register(self, register: TimerRegister, value: int) -> None:
        match register:
            case TimerRegister.DIVIDER:
                self.divider = 0
            case TimerRegister.COUNTER:
                self.counter = value & 0xFF
            case TimerRegister.MODULO:
                self.modulo = value & 0xFF
            case TimerRegister.CONTROL:
                self.control = TimerControl(value & 0xFF)
                self._timer = (
                    CycleTimer(self.control.cycle_interval())
                    if self.control.enabled()
                    else None
                )
            case _:
                raise ValueError(f"unknown timer register: {register!r}")