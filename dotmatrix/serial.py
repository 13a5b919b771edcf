"""The serial transfer registers."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class SerialControl(enum.IntFlag):
    """The serial control register; unnamed bits are kept as written."""

    ENABLE = 0b1000_0000
    INTERNAL_CLOCK = 0b0000_0001


class SerialRegister(enum.Enum):
    DATA = enum.auto()
    CONTROL = enum.auto()


@dataclass
class SerialRegisters:
    """The serial data byte and control register, at their post-boot values."""

    data: int = 0
    control: SerialControl = SerialControl(0x7E)