"""The joypad register and the set of pressed buttons."""

from __future__ import annotations

import enum


class Button(enum.Enum):
    START = "start"
    SELECT = "select"
    A = "a"
    B = "b"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


_UNUSED = 0b1100_0000
_READ_BUTTONS = 0b0010_0000
_READ_DPAD = 0b0001_0000
_NONE_PRESSED = 0x0F

_BUTTON_BITS = {
    Button.START: 0b0000_1000,
    Button.SELECT: 0b0000_0100,
    Button.B: 0b0000_0010,
    Button.A: 0b0000_0001,
}
_DPAD_BITS = {
    Button.DOWN: 0b0000_1000,
    Button.UP: 0b0000_0100,
    Button.LEFT: 0b0000_0010,
    Button.RIGHT: 0b0000_0001,
}


class Joypad:
    """Pressed buttons, read through a register whose bits are active low."""

    def __init__(self) -> None:
        self._read_buttons = False
        self._read_dpad = False
        self._pressed: set[Button] = set()

    def _toggle_pressed(self, value: int, bits: dict[Button, int]) -> int:
        for button, bit in bits.items():
            if button in self._pressed:
                value ^= bit
        return value

    def read_register(self) -> int:
        value = _UNUSED | _NONE_PRESSED
        if self._read_buttons:
            value = self._toggle_pressed(value, _BUTTON_BITS)
        else:
            value |= _READ_BUTTONS
        if self._read_dpad:
            value = self._toggle_pressed(value, _DPAD_BITS)
        else:
            value |= _READ_DPAD
        return value

    def write_register(self, value: int) -> None:
        self._read_buttons = value & _READ_BUTTONS == 0
        self._read_dpad = value & _READ_DPAD == 0

    def press_button(self, button: Button) -> None:
        self._pressed.add(button)

    def release_button(self, button: Button) -> None:
        self._pressed.discard(button)